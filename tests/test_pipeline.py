"""
End-to-end tests for the migration stages.
"""

import json

import pytest

from selenium2playwright.core import pipeline
from selenium2playwright.core.config import MigrationConfig
from selenium2playwright.core.extraction_result import FALLBACK_SENTINEL
from selenium2playwright.core.report import STATUS_ERROR, STATUS_SKIPPED, STATUS_UNCHANGED
from selenium2playwright.core.rewriter import PLACEHOLDER_SENTINEL

LOGIN_PAGE = """package com.company.pages;

public class LoginPage extends BasePage {

    @FindBy(id = "username")
    private WebElement usernameField;

    @FindBy(xpath = "//button[text()='Sign in']")
    private WebElement loginButton;

    @FindBy(xpath = "//div[3]/span[2]")
    private WebElement banner;

    public void enterUsername(String username) {
        usernameField.sendKeys(username);
    }

    public void clickLogin() {
        loginButton.click();
    }

    public void doSomethingOdd() {
        legacyHelper.run();
    }
}
"""

USER_LIST_PAGE = """package com.company.pages.admin;

public class UserListPage {

    @FindBy(css = "table.users")
    private WebElement usersTable;

    public int getUserCount() {
        return usersTable.findElements(By.tagName("tr")).size();
    }
}
"""

LOGIN_STEPS = """package com.company.steps;

public class LoginSteps {

    @QAFTestStep(description = "user enters {0} in {1}")
    public void enter(String value, String field) {
        loginPage.enter(value, field);
    }

    @QAFTestStep(description = "user clicks the 'Sign in' button")
    public void clickSignIn() {
        loginPage.clickLogin();
    }

    @QAFTestStep(description = "the audit trail is archived")
    public void archived() {
    }
}
"""

USERS_FEATURE = """@admin
Feature: Users

  Scenario: List users
    Given user is on the login page
    And user enters "admin" in "Username"
    When user clicks the 'Sign in' button
    But the audit trail is archived
"""


def write(path, content):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


@pytest.fixture
def source_tree(tmp_path):
    root = tmp_path / "selenium"
    write(root / "src/pages/LoginPage.java", LOGIN_PAGE)
    write(root / "src/pages/Admin/UserListPage.java", USER_LIST_PAGE)
    write(root / "src/pages/PageHelper.java", "public class PageHelper {}")
    write(root / "src/steps/LoginSteps.java", LOGIN_STEPS)
    write(root / "features/UserAdmin/Users.feature", USERS_FEATURE)
    return root


@pytest.fixture
def config(source_tree, tmp_path):
    return MigrationConfig(source_root=source_tree, target_root=tmp_path / "playwright")


def run_all(config):
    reports = {}
    for name, stage in pipeline.STAGES.items():
        reports[name] = stage(config)
    return reports


class TestSetup:
    def test_scaffold_files(self, config):
        report = pipeline.run_setup(config)
        root = config.target_root

        for name in (
            "package.json",
            "tsconfig.json",
            "playwright.config.ts",
            ".gitignore",
            "src/pages/base.page.ts",
            "src/steps/common.steps.ts",
            "src/utils/data.utils.ts",
            ".github/copilot-instructions.md",
            ".env.dev",
        ):
            assert (root / name).is_file(), name
        assert report.ok

    def test_mirrors_source_directories(self, config):
        pipeline.run_setup(config)

        assert (config.target_root / "src/pages/admin").is_dir()
        assert (config.target_root / "features/user-admin").is_dir()

    def test_playwright_config(self, config):
        pipeline.run_setup(config)
        content = (config.target_root / "playwright.config.ts").read_text()

        assert "steps: ['src/steps/**/*.steps.ts', 'src/steps/fixtures.ts']" in content
        assert "devices['Desktop Chrome']" in content
        assert "devices['Desktop Firefox']" in content

    def test_package_json(self, config):
        pipeline.run_setup(config)
        data = json.loads((config.target_root / "package.json").read_text())

        assert data["name"] == "playwright-automation"
        assert "playwright-bdd" in data["devDependencies"]

    def test_common_steps_import_fixtures(self, config):
        pipeline.run_setup(config)
        content = (config.target_root / "src/steps/common.steps.ts").read_text()

        assert "from './fixtures';" in content

    def test_existing_files_kept(self, config):
        pipeline.run_setup(config)
        package_json = config.target_root / "package.json"
        package_json.write_text("{}")

        report = pipeline.run_setup(config)

        assert package_json.read_text() == "{}"
        assert all(f.status == STATUS_SKIPPED for f in report.files)

    def test_force_overwrites(self, config):
        pipeline.run_setup(config)
        package_json = config.target_root / "package.json"
        package_json.write_text("{}")

        pipeline.run_setup(config, force=True)

        assert "devDependencies" in package_json.read_text()


class TestFeatures:
    def test_convert(self, config):
        report = pipeline.run_features(config)
        target = config.target_root / "features/user-admin/Users.feature"

        content = target.read_text()
        assert '    Given user enters "admin" in "Username"' in content
        assert "    When the audit trail is archived" in content
        assert report.summary["totalConversions"] == 2

    def test_folder_mapping(self, config):
        config.folder_mapping = {"UserAdmin": "people"}
        pipeline.run_features(config)

        assert (config.target_root / "features/people/Users.feature").is_file()

    def test_missing_source_dir(self, config):
        config.source_dirs["features"] = "nope"
        report = pipeline.run_features(config)

        assert report.files == []


class TestPages:
    def test_generate(self, config):
        report = pipeline.run_pages(config)
        content = (config.target_root / "src/pages/login.page.ts").read_text()

        assert "export class LoginPage extends BasePage" in content
        assert "import { BasePage } from './base.page';" in content
        assert "this.usernameField = this.page.locator('#username');" in content
        assert "this.loginButton = this.page.getByRole('button', { name: 'Sign in' });" in content
        assert f"this.banner = this.page.locator('xpath=//div[3]/span[2]') /* {FALLBACK_SENTINEL} */;" in content
        assert "// TODO: Review - xpath=//div[3]/span[2]" in content
        assert "await this.page.goto('/login');" in content
        assert f"// {PLACEHOLDER_SENTINEL} - enterUsername" in content

        totals = report.totals
        assert totals["semantic"] == 1
        assert totals["structural"] == 2
        assert totals["fallback"] == 1

    def test_nested_module(self, config):
        pipeline.run_pages(config)
        content = (config.target_root / "src/pages/admin/user-list.page.ts").read_text()

        assert "export class UserListPage extends BasePage" in content
        assert "import { BasePage } from '../base.page';" in content
        assert "await this.page.goto('/admin');" in content

    def test_non_page_sources_ignored(self, config):
        report = pipeline.run_pages(config)
        assert sorted(f.source for f in report.files) == ["Admin/UserListPage.java", "LoginPage.java"]

    def test_unreadable_file_recorded(self, config):
        (config.source_path("pages") / "BrokenPage.java").write_bytes(b"\xff\xfe public class")

        report = pipeline.run_pages(config)
        statuses = {f.source: f.status for f in report.files}

        assert statuses["BrokenPage.java"] == STATUS_ERROR
        assert (config.target_root / "src/pages/login.page.ts").is_file()


class TestSteps:
    def test_generate(self, config):
        report = pipeline.run_steps(config)
        content = (config.target_root / "src/steps/login.steps.ts").read_text()

        assert "import { Given, When, Then, expect } from './fixtures';" in content
        assert (
            "When('user enters {string} in {string}', async ({ loginPage }, value: string, field: string) => {"
            in content
        )
        assert "When('user clicks the \\'Sign in\\' button', async ({ loginPage }) => {" in content
        assert report.summary["pageFixturesNeeded"] == ["loginPage"]
        assert report.summary["totalSteps"] == 3


class TestFixtures:
    def test_generate(self, config):
        pipeline.run_setup(config)
        pipeline.run_pages(config)
        pipeline.run_steps(config)

        report = pipeline.run_fixtures(config)
        content = (config.target_root / "src/steps/fixtures.ts").read_text()

        assert "import { LoginPage } from '../pages/login.page';" in content
        assert "import { UserListPage } from '../pages/admin/user-list.page';" in content
        assert "loginPage: async ({ page }, use) => {" in content
        assert report.issues == []
        assert report.files[0].details["missingFixtures"] == []

    def test_missing_fixture_reported(self, config):
        pipeline.run_steps(config)

        report = pipeline.run_fixtures(config)

        assert report.files[0].details["missingFixtures"] == ["loginPage"]
        assert report.issues

    def test_duplicate_class_names_aliased(self, config):
        pages = config.target_path("pages")
        write(pages / "home.page.ts", "export class HomePage extends BasePage {}")
        write(pages / "admin/home.page.ts", "export class HomePage extends BasePage {}")

        pipeline.run_fixtures(config)
        content = config.target_path("fixtures").read_text()

        assert "import { HomePage } from '../pages/home.page';" in content
        assert "import { HomePage as AdminHomePage } from '../pages/admin/home.page';" in content
        assert "adminHomePage: AdminHomePage;" in content


class TestImplement:
    def test_implement_pages(self, config):
        pipeline.run_pages(config)

        report = pipeline.run_implement_pages(config)
        content = (config.target_root / "src/pages/login.page.ts").read_text()

        assert "await this.usernameField.fill(username);" in content
        assert "await this.loginButton.click();" in content
        assert f"// {PLACEHOLDER_SENTINEL} - doSomethingOdd" in content
        assert f"// {PLACEHOLDER_SENTINEL} - clickLogin" not in content
        assert report.summary["implemented"] == 3
        assert report.summary["leftAsStub"] == 1

    def test_implement_pages_is_idempotent(self, config):
        pipeline.run_pages(config)
        pipeline.run_implement_pages(config)
        before = (config.target_root / "src/pages/login.page.ts").read_text()

        report = pipeline.run_implement_pages(config)

        assert (config.target_root / "src/pages/login.page.ts").read_text() == before
        assert report.summary["implemented"] == 0
        assert all(f.status == STATUS_UNCHANGED for f in report.files)

    def test_hand_edits_survive(self, config):
        pipeline.run_pages(config)
        target = config.target_root / "src/pages/login.page.ts"
        edited = target.read_text().replace(
            f"// {PLACEHOLDER_SENTINEL} - clickLogin\n    throw new Error('Not implemented');",
            "await this.loginButton.dblclick();",
        )
        target.write_text(edited)

        pipeline.run_implement_pages(config)

        assert "await this.loginButton.dblclick();" in target.read_text()
        assert "await this.loginButton.click();" not in target.read_text()

    def test_implement_steps(self, config):
        pipeline.run_steps(config)

        report = pipeline.run_implement_steps(config)
        content = (config.target_root / "src/steps/login.steps.ts").read_text()

        assert (
            "When('user enters {string} in {string}', async ({ page }, value: string, field: string) => {\n"
            "  await page.getByLabel(field).fill(value);\n"
            "});"
        ) in content
        assert "await page.getByRole('button', { name: 'Sign in' }).click();" in content
        assert f"{PLACEHOLDER_SENTINEL} - Original method: archived" in content
        assert report.summary["implemented"] == 2
        assert report.summary["automationRate"] == 67

    def test_implement_steps_is_idempotent(self, config):
        pipeline.run_steps(config)
        pipeline.run_implement_steps(config)
        before = (config.target_root / "src/steps/login.steps.ts").read_text()

        pipeline.run_implement_steps(config)

        assert (config.target_root / "src/steps/login.steps.ts").read_text() == before

    def test_missing_target_skipped(self, config):
        report = pipeline.run_implement_pages(config)
        assert all(f.status == STATUS_SKIPPED for f in report.files)


class TestReport:
    def test_full_run(self, config):
        reports = run_all(config)
        report = reports["report"]

        assert report.summary["pages"] == 2
        assert report.summary["stepFiles"] == 2
        assert report.summary["features"] == 1
        assert report.summary["remainingStubs"] == 2
        assert report.summary["remainingXPath"] == 1
        assert any("XPath" in issue for issue in report.issues)
        assert not any("Missing" in issue for issue in report.issues)

    def test_reports_written(self, config):
        reports = run_all(config)
        for report in reports.values():
            report.write(config.reports_dir)

        names = sorted(path.name for path in config.reports_dir.iterdir())
        assert names == [
            "feature-conversion-report.json",
            "fixtures-report.json",
            "migration-report.json",
            "page-generation-report.json",
            "page-implementation-report.json",
            "setup-report.json",
            "steps-generation-report.json",
            "steps-implementation-report.json",
        ]

    def test_missing_target(self, config):
        report = pipeline.run_report(config)

        assert report.files == []
        assert "Target project not found" in report.issues[0]

    def test_missing_scaffold_reported(self, config):
        pipeline.run_pages(config)
        report = pipeline.run_report(config)

        assert "Missing package.json" in report.issues
        assert "Missing playwright.config.ts" in report.issues
