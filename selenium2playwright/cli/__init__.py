"""
Command-line interface for selenium-to-playwright.
"""

import logging

import click
from rich.table import Table

from .. import setup_logging
from ..languages import RULE_SETS
from .ai_guide import ai_guide
from .helpers import console
from .migrate import features, fixtures, implement_pages, implement_steps, init, pages, report, run_all, setup, steps

logger = logging.getLogger(__name__)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option("--debug", "-d", is_flag=True, help="Enable debug logging")
def cli(verbose, debug):
    """Migrate Selenium/QAF Java tests to Playwright + playwright-bdd."""
    if debug:
        setup_logging(logging.DEBUG)
    elif verbose:
        setup_logging(logging.INFO)
    else:
        setup_logging(logging.WARNING)


# Register commands
cli.add_command(init)
cli.add_command(setup)
cli.add_command(features)
cli.add_command(pages)
cli.add_command(steps)
cli.add_command(fixtures)
cli.add_command(implement_pages)
cli.add_command(implement_steps)
cli.add_command(report)
cli.add_command(run_all)
cli.add_command(ai_guide)


@cli.command("list-rules")
@click.option("--rule-set", "-r", type=click.Choice(sorted(RULE_SETS)), help="Show only this rule set")
def list_rules(rule_set):
    """List translation rules in the order they are tried."""
    for name, rules in RULE_SETS.items():
        if rule_set and name != rule_set:
            continue

        table = Table(title=f"{name} ({len(rules)} rules)")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Rule", style="cyan")
        table.add_column("Tag", style="green")
        table.add_column("Review", style="yellow")

        for position, rule in enumerate(rules, start=1):
            table.add_row(str(position), rule.name, rule.tag.value, "yes" if rule.needs_review else "")

        console.print(table)


def main():
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
