"""
Migration commands: one per pipeline stage, plus init and all.
"""

import logging
import sys
from pathlib import Path

import click
from rich.markup import escape

from ..core import pipeline
from ..core.config import DEFAULT_CONFIG_NAME, ConfigError, write_sample_config
from .helpers import config_option, console, exit_if_failed, finish, force_option, load_or_exit, strict_option

logger = logging.getLogger(__name__)

# Stages run by `all`, in order
ALL_STAGES = [
    "setup",
    "features",
    "pages",
    "steps",
    "fixtures",
    "implement-pages",
    "implement-steps",
    "report",
]

# Stages that write new files and honour --force
GENERATING_STAGES = {"setup", "features", "pages", "steps"}


@click.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_CONFIG_NAME,
    show_default=True,
    help="Where to write the sample config",
)
@force_option
def init(output, force):
    """Create a sample migration config."""
    try:
        path = write_sample_config(output, force=force)
    except ConfigError as e:
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        sys.exit(1)

    console.print(f"[green]✓[/green] Created {escape(str(path))}")
    console.print("\nEdit it with your actual paths:")
    console.print("  - source.rootDir: full path to your Selenium repository")
    console.print("  - source.pages.path / steps.path / features.path: relative to source.rootDir")
    console.print("  - target.rootDir: where the Playwright project will be created")
    console.print("\nThen run: [cyan]selenium-to-playwright all[/cyan]")


def _run_stage(name: str, config_path: Path, force: bool = False, strict: bool = False):
    config = load_or_exit(config_path, validate=name != "report")
    console.print(f"[bold]{name}[/bold]: {escape(str(config.source_root))} → {escape(str(config.target_root))}")

    stage = pipeline.STAGES[name]
    stage_report = stage(config, force=force) if name in GENERATING_STAGES else stage(config)
    finish(stage_report, config)
    exit_if_failed([stage_report], strict)


@click.command()
@config_option
@force_option
@strict_option
def setup(config_path, force, strict):
    """Create the Playwright project structure."""
    _run_stage("setup", config_path, force, strict)


@click.command()
@config_option
@force_option
@strict_option
def features(config_path, force, strict):
    """Convert feature files (And/But → Given/When/Then)."""
    _run_stage("features", config_path, force, strict)


@click.command()
@config_option
@force_option
@strict_option
def pages(config_path, force, strict):
    """Generate TypeScript page classes from Java page objects."""
    _run_stage("pages", config_path, force, strict)


@click.command()
@config_option
@force_option
@strict_option
def steps(config_path, force, strict):
    """Generate playwright-bdd step stubs from Java step definitions."""
    _run_stage("steps", config_path, force, strict)


@click.command()
@config_option
@strict_option
def fixtures(config_path, strict):
    """Generate fixtures.ts with one fixture per page class."""
    _run_stage("fixtures", config_path, strict=strict)


@click.command("implement-pages")
@config_option
@strict_option
def implement_pages(config_path, strict):
    """Fill page method stubs from the Java method bodies."""
    _run_stage("implement-pages", config_path, strict=strict)


@click.command("implement-steps")
@config_option
@strict_option
def implement_steps(config_path, strict):
    """Fill step stubs whose sentence matches a known phrasing."""
    _run_stage("implement-steps", config_path, strict=strict)


@click.command()
@config_option
@strict_option
def report(config_path, strict):
    """Survey the target project and report what is left to do."""
    _run_stage("report", config_path, strict=strict)


@click.command("all")
@config_option
@force_option
@strict_option
def run_all(config_path, force, strict):
    """Run every stage in order."""
    config = load_or_exit(config_path)
    console.print(f"[bold]Migrating[/bold] {escape(str(config.source_root))} → {escape(str(config.target_root))}\n")

    reports = []
    for name in ALL_STAGES:
        console.rule(name)
        stage = pipeline.STAGES[name]
        stage_report = stage(config, force=force) if name in GENERATING_STAGES else stage(config)
        reports.append(finish(stage_report, config))

    combined = reports[0]
    for stage_report in reports[1:]:
        combined = combined.merge(stage_report, name="migration-run")
    combined.write(config.reports_dir)

    progress = reports[-1].summary.get("progress", 0)
    console.rule("done")
    console.print(f"[bold]Overall progress: {progress}%[/bold]")
    console.print(f"Target project: {escape(str(config.target_root))}")
    console.print("\nNext steps:")
    console.print("  1. npm install && npx playwright install")
    console.print("  2. grep -rn 'TODO' for the stubs and locators left to convert")
    console.print("  3. npx bddgen && npm test")

    exit_if_failed(reports, strict)
