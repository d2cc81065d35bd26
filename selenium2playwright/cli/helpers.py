"""
Shared helpers for CLI commands.
"""

import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..core.config import DEFAULT_CONFIG_NAME, ConfigError, MigrationConfig, load_config
from ..core.report import STATUS_ERROR, ConversionReport

# Shared console instance
console = Console()

STATUS_STYLES = {
    "converted": "green",
    "complete": "green",
    "unchanged": "dim",
    "skipped": "yellow",
    "needs-review": "yellow",
    "error": "red",
}


def config_option(command):
    """Add the --config/-c option shared by every stage command."""
    return click.option(
        "--config",
        "-c",
        "config_path",
        type=click.Path(dir_okay=False, path_type=Path),
        default=DEFAULT_CONFIG_NAME,
        show_default=True,
        help="Migration config file",
    )(command)


def force_option(command):
    return click.option("--force", "-f", is_flag=True, help="Overwrite files that already exist in the target")(
        command
    )


def strict_option(command):
    return click.option("--strict", is_flag=True, help="Exit with error code 1 if any file failed")(command)


def load_or_exit(config_path: Path, validate: bool = True) -> MigrationConfig:
    """
    Load the config, or print the problem and exit with status 1.

    Args:
        config_path: Config file path
        validate: Also require the source tree to exist
    """
    try:
        config = load_config(config_path)
        if validate:
            config.validate()
    except ConfigError as e:
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        console.print("Run [cyan]selenium-to-playwright init[/cyan] to create a sample config")
        sys.exit(1)
    return config


def print_report(report: ConversionReport):
    """Print a stage's per-file table, totals and issues."""
    if report.files:
        table = Table(title=report.name)
        table.add_column("File", style="cyan")
        table.add_column("Status")
        table.add_column("Semantic", justify="right")
        table.add_column("Structural", justify="right")
        table.add_column("Fallback", justify="right")
        table.add_column("Review", justify="right")

        for file_report in report.files:
            style = STATUS_STYLES.get(file_report.status, "white")
            table.add_row(
                escape(file_report.target or file_report.source),
                f"[{style}]{file_report.status}[/{style}]",
                str(file_report.counts["semantic"]),
                str(file_report.counts["structural"]),
                str(file_report.counts["fallback"]),
                str(file_report.needs_review),
            )
        console.print(table)
    else:
        console.print(f"[yellow]{report.name}: nothing to process[/yellow]")

    totals = report.totals
    console.print(
        f"[bold]{report.name}:[/bold] {totals['files']} files, {totals['units']} units "
        f"([green]{totals['semantic']} semantic[/green], {totals['structural']} structural, "
        f"[yellow]{totals['fallback']} fallback[/yellow]), {totals['needsReview']} need review"
    )
    for key, value in report.summary.items():
        if isinstance(value, (int, str)) and not isinstance(value, bool):
            console.print(f"  {key}: {escape(str(value))}")

    for file_report in report.files:
        if file_report.status == STATUS_ERROR:
            console.print(f"  [red]✗[/red] {escape(file_report.source)}: {escape(file_report.error or '')}")
    for issue in report.issues:
        console.print(f"  [yellow]⚠ {escape(issue)}[/yellow]")


def finish(report: ConversionReport, config: MigrationConfig) -> ConversionReport:
    """Print and save a stage report."""
    print_report(report)
    path = report.write(config.reports_dir)
    console.print(f"[green]✓[/green] Report saved: {escape(str(path))}\n")
    return report


def exit_if_failed(reports, strict: bool):
    failed = sum(len(report.errors) for report in reports)
    if failed and strict:
        console.print(f"\n[red]✗ {failed} file(s) failed (--strict mode)[/red]")
        sys.exit(1)
