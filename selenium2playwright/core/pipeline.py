"""
Migration stages.

Each stage reads the source tree named by the config, writes its share of the
Playwright project and returns a ConversionReport. Files are handled one at a
time; a file that fails is recorded with status "error" and the stage moves
on.
"""

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Set

from .config import MigrationConfig
from .extraction_result import FALLBACK_SENTINEL
from .paths import (
    is_page_source,
    is_steps_source,
    map_relative_dir,
    map_segment,
    module_import,
    page_file_name,
    relative_to_root,
    steps_file_name,
    subdirectories,
    walk_sorted,
)
from .renderer import TemplateRenderer
from .report import (
    STATUS_COMPLETE,
    STATUS_CONVERTED,
    STATUS_ERROR,
    STATUS_NEEDS_REVIEW,
    STATUS_SKIPPED,
    STATUS_UNCHANGED,
    ConversionReport,
    FileReport,
)
from .rewriter import PLACEHOLDER_SENTINEL, PlaceholderRewriter, indent, method_stub_pattern, step_stub_pattern
from ..languages import implement_method, translate_step
from ..languages.features import CONTINUATION, convert_feature
from ..languages.pages import REVIEW_NOTE, page_methods, parse_page
from ..languages.steps import parse_steps
from ..languages.utils import lower_first, ts_string

logger = logging.getLogger(__name__)

BASE_DIRECTORIES = [
    "src/pages",
    "src/steps",
    "src/utils",
    "src/fixtures",
    "src/types",
    "features",
    "test-data",
    "config",
    "scripts",
    "screenshots",
    ".github",
]

BROWSER_DEVICES = {
    "chromium": "Desktop Chrome",
    "chrome": "Desktop Chrome",
    "firefox": "Desktop Firefox",
    "webkit": "Desktop Safari",
    "safari": "Desktop Safari",
    "edge": "Desktop Edge",
}

# Fixtures playwright-bdd provides without a page class behind them
BUILTIN_FIXTURES = {"page", "context", "browser", "browserName", "request", "$test", "$testInfo"}

PAGE_CLASS = re.compile(r"export\s+class\s+(\w+)\s+extends\s+BasePage\b")
LOCATOR_FIELD = re.compile(r"readonly\s+(\w+)\s*:\s*Locator\b")
FIXTURE_PARAMS = re.compile(r"async\s*\(\s*\{([^}]*)\}")
STEP_CALL = re.compile(r"^\s*(Given|When|Then)\s*\(", re.M)


def _write(path: Path, content: str):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def _process_file(report: ConversionReport, file_report: FileReport, action: Callable[[FileReport], None]):
    """Run one file's work, recording failures instead of raising."""
    report.add(file_report)
    try:
        action(file_report)
    except (OSError, UnicodeDecodeError, ValueError) as e:
        logger.error(f"Failed on {file_report.source}: {e}")
        file_report.fail(e)


def _should_write(target: Path, force: bool, file_report: FileReport) -> bool:
    if target.exists() and not force:
        file_report.status = STATUS_SKIPPED
        file_report.details["reason"] = "target exists"
        return False
    return True


# -- setup -------------------------------------------------------------------


def _package_json(config: MigrationConfig) -> str:
    data = {
        "name": config.project_name,
        "version": "1.0.0",
        "description": config.description,
        "scripts": {
            "test": "npx bddgen && npx playwright test",
            "test:smoke": "npx bddgen && npx playwright test --grep @smoke",
            "test:headed": "npx bddgen && npx playwright test --headed",
            "test:debug": "npx bddgen && npx playwright test --debug",
            "report": "npx playwright show-report",
        },
        "devDependencies": {
            "@playwright/test": "^1.40.0",
            "playwright-bdd": "^6.0.0",
            "typescript": "^5.0.0",
            "@types/node": "^20.0.0",
            "dotenv": "^16.0.0",
            "cross-env": "^7.0.3",
        },
    }
    return json.dumps(data, indent=2) + "\n"


def _tsconfig_json(config: MigrationConfig) -> str:
    pages = config.target_dirs["pages"].rstrip("/")
    steps = config.target_dirs["steps"].rstrip("/")
    data = {
        "compilerOptions": {
            "target": "ES2022",
            "module": "commonjs",
            "moduleResolution": "node",
            "strict": True,
            "esModuleInterop": True,
            "skipLibCheck": True,
            "forceConsistentCasingInFileNames": True,
            "outDir": "./dist",
            "rootDir": "./",
            "resolveJsonModule": True,
            "baseUrl": ".",
            "paths": {
                "@pages/*": [f"{pages}/*"],
                "@steps/*": [f"{steps}/*"],
                "@utils/*": ["src/utils/*"],
            },
        },
        "include": ["src/**/*", f"{config.target_dirs['features']}/**/*", "playwright.config.ts"],
        "exclude": ["node_modules", "dist"],
    }
    return json.dumps(data, indent=2) + "\n"


def scaffold_directories(config: MigrationConfig) -> List[str]:
    """Target directories mirroring the source tree, sorted and unique."""
    directories = set(BASE_DIRECTORIES)
    for kind in ("pages", "steps", "features"):
        target_base = config.target_dirs[kind].rstrip("/")
        directories.add(target_base)
        for parts in subdirectories(config.source_path(kind)):
            directories.add(f"{target_base}/{map_relative_dir(parts, config.folder_mapping).as_posix()}")
    for env in config.environments:
        directories.add(f"test-data/{env}")
    return sorted(directories)


def run_setup(config: MigrationConfig, renderer: TemplateRenderer = None, force: bool = False) -> ConversionReport:
    """Create the Playwright project skeleton."""
    renderer = renderer or TemplateRenderer()
    root = config.target_root
    report = ConversionReport("setup", str(config.source_root), str(root))

    directories = scaffold_directories(config)
    created = 0
    for directory in directories:
        path = root / directory
        if not path.is_dir():
            path.mkdir(parents=True, exist_ok=True)
            created += 1

    pages_dir = config.target_path("pages")
    steps_dir = config.target_path("steps")
    fixtures_file = config.target_path("fixtures")
    layout = {
        "config": config,
        "pages_dir": config.target_dirs["pages"],
        "steps_dir": config.target_dirs["steps"].rstrip("/"),
        "features_dir": config.target_dirs["features"].rstrip("/"),
        "fixtures_file": config.target_dirs["fixtures"],
        "browsers": [
            {"name": browser, "device": BROWSER_DEVICES.get(browser.lower(), "Desktop Chrome")}
            for browser in config.browsers
        ],
    }

    files: Dict[Path, Callable[[], str]] = {
        root / "package.json": lambda: _package_json(config),
        root / "tsconfig.json": lambda: _tsconfig_json(config),
        root / "playwright.config.ts": lambda: renderer.render_template("scaffold/playwright.config.ts.j2", **layout),
        root / ".gitignore": lambda: renderer.render_template("scaffold/gitignore.j2", **layout),
        pages_dir / "base.page.ts": lambda: renderer.render_template("scaffold/base.page.ts.j2", **layout),
        steps_dir / "common.steps.ts": lambda: renderer.render_template(
            "scaffold/common.steps.ts.j2",
            fixtures_import=module_import(steps_dir / "common.steps.ts", fixtures_file),
            **layout,
        ),
        root / "src/utils/data.utils.ts": lambda: renderer.render_template("scaffold/data.utils.ts.j2", **layout),
        root / ".github/copilot-instructions.md": lambda: renderer.render_template(
            "scaffold/copilot-instructions.md.j2", **layout
        ),
    }
    for env in config.environments:
        files[root / f".env.{env}"] = lambda env=env: renderer.render_template("scaffold/env.j2", env=env, **layout)

    for target, build in files.items():

        def action(file_report: FileReport, target=target, build=build):
            if _should_write(target, force, file_report):
                _write(target, build())

        _process_file(report, FileReport(source="scaffold", target=relative_to_root(target, root)), action)

    report.summary.update(
        {
            "directories": len(directories),
            "directoriesCreated": created,
            "environments": list(config.environments),
        }
    )
    return report


# -- features ----------------------------------------------------------------


def run_features(config: MigrationConfig, force: bool = False) -> ConversionReport:
    """Copy feature files, resolving And/But to the keyword they continue."""
    source_dir = config.source_path("features")
    target_dir = config.target_path("features")
    report = ConversionReport("feature-conversion", str(source_dir), str(target_dir))

    if not source_dir.is_dir():
        logger.warning(f"Source features directory not found: {source_dir}")
        return report

    for path, parts in walk_sorted(source_dir):
        if path.suffix != ".feature":
            continue
        target = target_dir / map_relative_dir(parts, config.folder_mapping) / path.name

        def action(file_report: FileReport, path=path, target=target):
            if not _should_write(target, force, file_report):
                return
            result = convert_feature(
                path.read_text(encoding="utf-8"),
                convert_and_but=config.convert_and_but,
                preserve_tags=config.preserve_tags,
            )
            _write(target, result.content)
            file_report.status = STATUS_CONVERTED if result.conversions or result.tags_dropped else STATUS_UNCHANGED
            file_report.details.update({"conversions": result.conversions, "tagsDropped": result.tags_dropped})
            if result.unresolved:
                file_report.details["unresolvedLines"] = result.unresolved
                logger.warning(f"{path.name}: And/But without a preceding keyword on lines {result.unresolved}")

        _process_file(
            report,
            FileReport(source=relative_to_root(path, source_dir), target=relative_to_root(target, config.target_root)),
            action,
        )

    report.summary["totalConversions"] = sum(f.details.get("conversions", 0) for f in report.files)
    return report


# -- pages -------------------------------------------------------------------


def run_pages(config: MigrationConfig, renderer: TemplateRenderer = None, force: bool = False) -> ConversionReport:
    """Generate a TypeScript page class for every Java page class."""
    renderer = renderer or TemplateRenderer()
    source_dir = config.source_path("pages")
    target_dir = config.target_path("pages")
    report = ConversionReport("page-generation", str(source_dir), str(target_dir))

    if not source_dir.is_dir():
        logger.warning(f"Source pages directory not found: {source_dir}")
        return report

    for path, parts in walk_sorted(source_dir):
        if not is_page_source(path.name):
            continue
        module_dir = map_relative_dir(parts, config.folder_mapping)
        target = target_dir / module_dir / page_file_name(path.name)

        def action(file_report: FileReport, path=path, target=target, module_dir=module_dir):
            if not _should_write(target, force, file_report):
                return
            page = parse_page(path.read_text(encoding="utf-8"))
            if page is None:
                file_report.status = STATUS_SKIPPED
                file_report.details["reason"] = "no class declaration"
                return

            for locator in page.locators:
                file_report.record(locator.result)

            module = module_dir.as_posix() if module_dir.parts else ""
            route = "/" + (module or map_segment(re.sub(r"Page$", "", page.java_name)))
            content = renderer.render_template(
                "page.ts.j2",
                page=page,
                module=module or "(root)",
                route=route,
                base_import=module_import(target, target_dir / "base.page.ts"),
            )
            _write(target, content)
            file_report.details.update(
                {"className": page.class_name, "locators": len(page.locators), "methods": len(page.methods)}
            )

        _process_file(
            report,
            FileReport(source=relative_to_root(path, source_dir), target=relative_to_root(target, config.target_root)),
            action,
        )

    report.summary["needsManualReview"] = [
        {"file": f.target, "count": f.needs_review} for f in report.files if f.needs_review
    ]
    return report


# -- steps -------------------------------------------------------------------


def run_steps(config: MigrationConfig, renderer: TemplateRenderer = None, force: bool = False) -> ConversionReport:
    """Generate playwright-bdd step stubs for every Java step definition class."""
    renderer = renderer or TemplateRenderer()
    source_dir = config.source_path("steps")
    target_dir = config.target_path("steps")
    fixtures_file = config.target_path("fixtures")
    report = ConversionReport("steps-generation", str(source_dir), str(target_dir))
    fixtures_needed: Set[str] = set()

    if not source_dir.is_dir():
        logger.warning(f"Source steps directory not found: {source_dir}")
        return report

    for path, parts in walk_sorted(source_dir):
        if not is_steps_source(path.name):
            continue
        module_dir = map_relative_dir(parts, config.folder_mapping)
        target = target_dir / module_dir / steps_file_name(path.name)

        def action(file_report: FileReport, path=path, target=target, module_dir=module_dir):
            if not _should_write(target, force, file_report):
                return
            step_file = parse_steps(path.read_text(encoding="utf-8"), config.fixture_mapping)
            if step_file is None or not step_file.steps:
                file_report.status = STATUS_SKIPPED
                file_report.details["reason"] = "no step definitions"
                return

            content = renderer.render_template(
                "steps.ts.j2",
                steps=step_file,
                module=module_dir.as_posix() if module_dir.parts else "(root)",
                fixtures_import=module_import(target, fixtures_file),
            )
            _write(target, content)
            fixtures_needed.add(step_file.fixture)
            file_report.details.update({"steps": len(step_file.steps), "pageFixture": step_file.fixture})

        _process_file(
            report,
            FileReport(source=relative_to_root(path, source_dir), target=relative_to_root(target, config.target_root)),
            action,
        )

    report.summary.update(
        {
            "totalSteps": sum(f.details.get("steps", 0) for f in report.files),
            "pageFixturesNeeded": sorted(fixtures_needed),
        }
    )
    return report


# -- fixtures ----------------------------------------------------------------


@dataclass
class PageFixture:
    """One page class exposed as a playwright-bdd fixture."""

    class_name: str
    alias: Optional[str]
    module: str

    @property
    def class_ref(self) -> str:
        return self.alias or self.class_name

    @property
    def name(self) -> str:
        return lower_first(self.class_ref)

    @property
    def import_clause(self) -> str:
        if self.alias:
            return f"{self.class_name} as {self.alias}"
        return self.class_name


def find_page_fixtures(pages_dir: Path, fixtures_file: Path) -> List[PageFixture]:
    """
    Page classes declared in generated ``*.page.ts`` files.

    A class name seen twice is imported under an alias prefixed with its
    module directory, e.g. ``AdminLoginPage``.
    """
    fixtures: List[PageFixture] = []
    seen: Set[str] = set()
    if not pages_dir.is_dir():
        return fixtures

    for path, parts in walk_sorted(pages_dir):
        if not path.name.endswith(".page.ts") or path.name == "base.page.ts":
            continue
        for class_name in PAGE_CLASS.findall(path.read_text(encoding="utf-8")):
            alias = None
            if class_name in seen:
                prefix = "".join(part.title().replace("-", "") for part in parts) or "Root"
                alias = prefix + class_name
                logger.warning(f"Page class {class_name} is declared twice; importing {path.name} as {alias}")
            seen.add(alias or class_name)
            fixtures.append(PageFixture(class_name, alias, module_import(fixtures_file, path)))
    return fixtures


def referenced_fixtures(steps_dir: Path) -> Set[str]:
    """Fixture names destructured by step definitions under steps_dir."""
    names: Set[str] = set()
    if not steps_dir.is_dir():
        return names
    for path, _ in walk_sorted(steps_dir):
        if not path.name.endswith(".steps.ts"):
            continue
        for group in FIXTURE_PARAMS.findall(path.read_text(encoding="utf-8")):
            names.update(name.strip().split(":")[0].strip() for name in group.split(",") if name.strip())
    return names


def run_fixtures(config: MigrationConfig, renderer: TemplateRenderer = None) -> ConversionReport:
    """
    Generate fixtures.ts from the generated page classes.

    The file is derived from the pages on disk and regenerated every run.
    """
    renderer = renderer or TemplateRenderer()
    pages_dir = config.target_path("pages")
    fixtures_file = config.target_path("fixtures")
    report = ConversionReport("fixtures", str(pages_dir), str(fixtures_file))
    file_report = FileReport(source=config.target_dirs["pages"], target=config.target_dirs["fixtures"])

    def action(file_report: FileReport):
        fixtures = find_page_fixtures(pages_dir, fixtures_file)
        _write(
            fixtures_file,
            renderer.render_template("fixtures.ts.j2", fixtures=fixtures, pages_dir=config.target_dirs["pages"]),
        )
        defined = {fixture.name for fixture in fixtures}
        missing = sorted(referenced_fixtures(config.target_path("steps")) - defined - BUILTIN_FIXTURES)
        file_report.details.update({"fixtures": sorted(defined), "missingFixtures": missing})
        if missing:
            report.issues.append(f"Step files use fixtures with no page class: {', '.join(missing)}")

    _process_file(report, file_report, action)
    return report


# -- implement ---------------------------------------------------------------


def _method_replacement(method, text: str) -> str:
    return f"async {method.name}({method.ts_params}): Promise<{method.ts_return_type}> {{\n{indent(text, '    ')}\n  }}"


def run_implement_pages(config: MigrationConfig) -> ConversionReport:
    """
    Fill page method stubs from the Java method bodies.

    Only stubs still carrying the placeholder sentinel are rewritten, so a
    second run changes nothing.
    """
    source_dir = config.source_path("pages")
    target_dir = config.target_path("pages")
    report = ConversionReport("page-implementation", str(source_dir), str(target_dir))

    if not source_dir.is_dir():
        logger.warning(f"Source pages directory not found: {source_dir}")
        return report

    for path, parts in walk_sorted(source_dir):
        if not is_page_source(path.name):
            continue
        target = target_dir / map_relative_dir(parts, config.folder_mapping) / page_file_name(path.name)

        def action(file_report: FileReport, path=path, target=target):
            if not target.is_file():
                file_report.status = STATUS_SKIPPED
                file_report.details["reason"] = "target missing"
                return

            rewriter = PlaceholderRewriter(target.read_text(encoding="utf-8"))
            locators = LOCATOR_FIELD.findall(rewriter.content)

            for method in page_methods(path.read_text(encoding="utf-8")):
                pattern = method_stub_pattern(method.name)
                if not rewriter.has_placeholder(pattern):
                    rewriter.missing += 1
                    continue
                result = file_report.record(implement_method(method, locators))
                replacement = _method_replacement(method, result.text) if result.matched else None
                rewriter.rewrite(pattern, lambda match: replacement)

            _finish_rewrite(file_report, rewriter, target)

        _process_file(
            report,
            FileReport(source=relative_to_root(path, source_dir), target=relative_to_root(target, config.target_root)),
            action,
        )

    _summarize_implementation(report)
    return report


def _step_replacement(step, text: str) -> Callable:
    params = ", ".join(str(p) for p in step.method.params)
    fixtures = f"{{ page }}, {params}" if params else "{ page }"

    def build(match) -> str:
        keyword = match.group(1)
        return f"{keyword}({ts_string(step.description)}, async ({fixtures}) => {{\n{indent(text, '  ')}\n}});"

    return build


def run_implement_steps(config: MigrationConfig) -> ConversionReport:
    """Fill step stubs whose sentence matches a step rule."""
    source_dir = config.source_path("steps")
    target_dir = config.target_path("steps")
    report = ConversionReport("steps-implementation", str(source_dir), str(target_dir))

    if not source_dir.is_dir():
        logger.warning(f"Source steps directory not found: {source_dir}")
        return report

    for path, parts in walk_sorted(source_dir):
        if not is_steps_source(path.name):
            continue
        target = target_dir / map_relative_dir(parts, config.folder_mapping) / steps_file_name(path.name)

        def action(file_report: FileReport, path=path, target=target):
            if not target.is_file():
                file_report.status = STATUS_SKIPPED
                file_report.details["reason"] = "target missing"
                return

            step_file = parse_steps(path.read_text(encoding="utf-8"), config.fixture_mapping)
            rewriter = PlaceholderRewriter(target.read_text(encoding="utf-8"))

            for step in step_file.steps if step_file else []:
                pattern = step_stub_pattern(step.description)
                if not rewriter.has_placeholder(pattern):
                    rewriter.missing += 1
                    continue
                result = file_report.record(translate_step(step.original, step.method.params))
                rewriter.rewrite(pattern, _step_replacement(step, result.text) if result.matched else lambda m: None)

            _finish_rewrite(file_report, rewriter, target)

        _process_file(
            report,
            FileReport(source=relative_to_root(path, source_dir), target=relative_to_root(target, config.target_root)),
            action,
        )

    _summarize_implementation(report)
    return report


def _finish_rewrite(file_report: FileReport, rewriter: PlaceholderRewriter, target: Path):
    replaced, skipped, missing = rewriter.counts()
    file_report.details.update({"implemented": replaced, "leftAsStub": skipped, "alreadyConverted": missing})
    if rewriter.changed:
        _write(target, rewriter.content)
        file_report.status = STATUS_CONVERTED
    else:
        file_report.status = STATUS_UNCHANGED


def _summarize_implementation(report: ConversionReport):
    implemented = sum(f.details.get("implemented", 0) for f in report.files)
    left = sum(f.details.get("leftAsStub", 0) for f in report.files)
    attempted = implemented + left
    report.summary.update(
        {
            "implemented": implemented,
            "leftAsStub": left,
            "automationRate": round(implemented * 100 / attempted) if attempted else None,
        }
    )


# -- report ------------------------------------------------------------------


def _files_with_suffix(directory: Path, suffix: str) -> List[Path]:
    if not directory.is_dir():
        return []
    return [path for path, _ in walk_sorted(directory) if path.name.endswith(suffix)]


def _survey_entry(path: Path, root: Path) -> FileReport:
    return FileReport(source=relative_to_root(path, root), status=STATUS_COMPLETE)


def run_report(config: MigrationConfig) -> ConversionReport:
    """
    Survey the target project: remaining placeholders, raw XPath, And/But
    lines and missing scaffold files.
    """
    root = config.target_root
    report = ConversionReport("migration", str(config.source_root), str(root))

    if not root.is_dir():
        report.issues.append(f"Target project not found: {root} (run setup first)")
        return report

    for path in _files_with_suffix(config.target_path("pages"), ".page.ts"):
        if path.name == "base.page.ts":
            continue

        def action(file_report: FileReport, path=path):
            content = path.read_text(encoding="utf-8")
            file_report.details.update(
                {
                    "kind": "page",
                    "todos": content.count("TODO"),
                    "stubs": content.count(PLACEHOLDER_SENTINEL),
                    "xpath": content.count(FALLBACK_SENTINEL),
                    "reviewNotes": content.count(REVIEW_NOTE),
                }
            )
            if file_report.details["todos"]:
                file_report.status = STATUS_NEEDS_REVIEW

        _process_file(report, _survey_entry(path, root), action)

    for path in _files_with_suffix(config.target_path("steps"), ".steps.ts"):

        def action(file_report: FileReport, path=path):
            content = path.read_text(encoding="utf-8")
            file_report.details.update(
                {
                    "kind": "steps",
                    "steps": len(STEP_CALL.findall(content)),
                    "todos": content.count("TODO"),
                    "stubs": content.count(PLACEHOLDER_SENTINEL),
                }
            )
            if file_report.details["todos"]:
                file_report.status = STATUS_NEEDS_REVIEW

        _process_file(report, _survey_entry(path, root), action)

    for path in _files_with_suffix(config.target_path("features"), ".feature"):

        def action(file_report: FileReport, path=path):
            lines = [
                number
                for number, line in enumerate(path.read_text(encoding="utf-8").split("\n"), start=1)
                if CONTINUATION.match(line)
            ]
            file_report.details.update({"kind": "feature", "andButLines": lines})
            if lines:
                file_report.status = STATUS_NEEDS_REVIEW

        _process_file(report, _survey_entry(path, root), action)

    required = ["package.json", "playwright.config.ts", config.target_dirs["fixtures"]]
    for name in required:
        if not (root / name).exists():
            report.issues.append(f"Missing {name}")

    by_kind: Dict[str, List[FileReport]] = {}
    for file_report in report.files:
        by_kind.setdefault(file_report.details.get("kind", "unknown"), []).append(file_report)

    with_and_but = [f for f in by_kind.get("feature", []) if f.details["andButLines"]]
    if with_and_but:
        report.issues.append(f"{len(with_and_but)} feature file(s) still have And/But keywords")
    with_xpath = [f for f in by_kind.get("page", []) if f.details["xpath"]]
    if with_xpath:
        report.issues.append(f"{len(with_xpath)} page file(s) have XPath needing conversion")
    errors = [f for f in report.files if f.status == STATUS_ERROR]
    if errors:
        report.issues.append(f"{len(errors)} file(s) could not be read")

    complete = sum(1 for f in report.files if f.status == STATUS_COMPLETE)
    report.summary.update(
        {
            "pages": len(by_kind.get("page", [])),
            "stepFiles": len(by_kind.get("steps", [])),
            "steps": sum(f.details["steps"] for f in by_kind.get("steps", [])),
            "features": len(by_kind.get("feature", [])),
            "remainingStubs": sum(f.details.get("stubs", 0) for f in report.files),
            "remainingXPath": sum(f.details.get("xpath", 0) for f in report.files),
            "progress": round(complete * 100 / len(report.files)) if report.files else 0,
        }
    )
    return report


STAGES = {
    "setup": run_setup,
    "features": run_features,
    "pages": run_pages,
    "steps": run_steps,
    "fixtures": run_fixtures,
    "implement-pages": run_implement_pages,
    "implement-steps": run_implement_steps,
    "report": run_report,
}
