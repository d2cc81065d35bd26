"""
Tests for the command-line interface.
"""

import json

import pytest
from click.testing import CliRunner

from selenium2playwright.cli import cli

PAGE = """public class SearchPage {
    @FindBy(xpath = "//input[@placeholder='Search']")
    private WebElement searchBox;

    public void search(String term) {
        searchBox.sendKeys(term);
    }
}
"""

STEPS = """public class SearchSteps {
    @QAFTestStep(description = "user searches for {0}")
    public void searchFor(String term) {
        searchPage.search(term);
    }
}
"""


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def project(tmp_path):
    """A source tree and a config file pointing at it with relative paths."""
    (tmp_path / "selenium/src/pages").mkdir(parents=True)
    (tmp_path / "selenium/src/steps").mkdir(parents=True)
    (tmp_path / "selenium/features").mkdir(parents=True)
    (tmp_path / "selenium/src/pages/SearchPage.java").write_text(PAGE)
    (tmp_path / "selenium/src/steps/SearchSteps.java").write_text(STEPS)
    (tmp_path / "selenium/features/search.feature").write_text(
        "Feature: Search\n  Scenario: s\n    Given user is on the home page\n    And user searches for \"shoes\"\n"
    )

    config_path = tmp_path / "migration-config.json"
    config_path.write_text(
        "{\n"
        "  // paths are relative to this file\n"
        '  "source": { "rootDir": "selenium" },\n'
        '  "target": { "rootDir": "playwright" },\n'
        "}\n"
    )
    return config_path


class TestInit:
    def test_creates_sample(self, runner, tmp_path):
        output = tmp_path / "migration-config.json"
        result = runner.invoke(cli, ["init", "-o", str(output)])

        assert result.exit_code == 0
        assert "projectName" in json.loads(output.read_text())

    def test_refuses_existing(self, runner, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        output = tmp_path / "migration-config.json"
        output.write_text("{}")

        result = runner.invoke(cli, ["init"])

        assert result.exit_code == 1
        assert "already exists" in result.output
        assert output.read_text() == "{}"


class TestStages:
    def test_missing_config(self, runner, tmp_path):
        result = runner.invoke(cli, ["pages", "-c", str(tmp_path / "missing.json")])

        assert result.exit_code == 1
        assert "Config file not found" in result.output

    def test_missing_source_root(self, runner, tmp_path):
        config_path = tmp_path / "migration-config.json"
        config_path.write_text('{"source": {"rootDir": "nowhere"}, "target": {"rootDir": "out"}}')

        result = runner.invoke(cli, ["setup", "-c", str(config_path)])

        assert result.exit_code == 1
        assert not (tmp_path / "out").exists()

    def test_single_stage_writes_report(self, runner, project):
        result = runner.invoke(cli, ["pages", "-c", str(project)])

        assert result.exit_code == 0, result.output
        target = project.parent / "playwright"
        assert (target / "src/pages/search.page.ts").is_file()
        data = json.loads((target / "reports/page-generation-report.json").read_text())
        assert data["totals"]["semantic"] == 1

    def test_all(self, runner, project):
        result = runner.invoke(cli, ["all", "-c", str(project)])

        assert result.exit_code == 0, result.output
        target = project.parent / "playwright"

        page = (target / "src/pages/search.page.ts").read_text()
        assert "this.searchBox = this.page.getByPlaceholder('Search');" in page
        assert "await this.searchBox.fill(term);" in page

        feature = (target / "features/search.feature").read_text()
        assert 'Given user searches for "shoes"' in feature

        assert (target / "reports/migration-run-report.json").is_file()
        assert (target / "reports/migration-report.json").is_file()
        assert "Overall progress" in result.output

    def test_all_twice_is_stable(self, runner, project):
        runner.invoke(cli, ["all", "-c", str(project)])
        target = project.parent / "playwright"
        first = (target / "src/pages/search.page.ts").read_text()

        result = runner.invoke(cli, ["all", "-c", str(project)])

        assert result.exit_code == 0
        assert (target / "src/pages/search.page.ts").read_text() == first

    def test_strict_fails_on_file_error(self, runner, project):
        (project.parent / "selenium/src/pages/BadPage.java").write_bytes(b"\xff\xfe")

        lenient = runner.invoke(cli, ["pages", "-c", str(project)])
        strict = runner.invoke(cli, ["pages", "-c", str(project), "--strict", "--force"])

        assert lenient.exit_code == 0
        assert strict.exit_code == 1

    def test_report_without_target(self, runner, project):
        result = runner.invoke(cli, ["report", "-c", str(project)])

        assert result.exit_code == 0
        assert "Target project not found" in result.output


class TestInfoCommands:
    def test_list_rules(self, runner):
        result = runner.invoke(cli, ["list-rules", "-r", "xpath"])

        assert result.exit_code == 0
        assert "button-text" in result.output
        assert "log-in" not in result.output

    def test_list_all_rules(self, runner):
        result = runner.invoke(cli, ["list-rules"])

        assert result.exit_code == 0
        for name in ("xpath", "find-by", "page-methods", "steps"):
            assert name in result.output

    def test_ai_guide(self, runner):
        result = runner.invoke(cli, ["ai-guide"])

        assert result.exit_code == 0
        assert "TODO: Convert XPath" in result.output
        assert "TODO: Implement" in result.output
        assert "switch to the built-in `{ page }`" in result.output

    def test_help_lists_stages(self, runner):
        result = runner.invoke(cli, ["--help"])

        for command in ("init", "setup", "features", "pages", "steps", "fixtures", "implement-pages", "all"):
            assert command in result.output
