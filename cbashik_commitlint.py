#!/usr/bin/env python3
"""
cbashik-commitlint - commit message linting setup

This CLI tool wires the shared commitlint convention into a JavaScript
project:
- Installs @cbashik/commitlint and @commitlint/cli with the project's
  package manager (npm, pnpm, yarn or bun, detected from lock files)
- Adds a commitlint config extending the shared rule set
- Initialises husky and adds commitlint to the commit-msg hook

Every step is idempotent, so running it again is safe.

Usage:
    cbashik-commitlint --init [--ask]

Examples:
    cbashik-commitlint --init                        # Set up with defaults
    cbashik-commitlint --init --ask                  # Confirm each step
    cbashik-commitlint --init --config-file          # Write commitlint.config.js
    cbashik-commitlint --show-rules                  # Show the shared rules
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from config.settings import ConfigTarget, export_config, settings
from shared.errors import SetupError
from shared.models import SetupReport, StepStatus
from shared.ruleset import EXTENDS, HEADER_PATTERN, HELP_URL, RULES, rule_config
from services.commitlint_setup.main import CommitlintSetupService, SetupOptions

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.monitoring.log_level),
    format=settings.monitoring.log_format
)
logger = logging.getLogger(__name__)

PROG_NAME = "cbashik-commitlint"
USAGE_METAVAR = "--init [--ask] [OPTIONS]"

_STATUS_ICONS = {
    StepStatus.DONE: "[green]✅ done[/green]",
    StepStatus.SKIPPED: "[yellow]⏭ skipped[/yellow]",
    StepStatus.UNCHANGED: "[dim]• unchanged[/dim]",
}


def _format_rule_value(value) -> str:
    if isinstance(value, list):
        return ", ".join(str(item) for item in value)
    return str(value)


class CommitlintSetupCLI:
    """CLI interface for the commitlint setup."""

    def __init__(self, console: Optional[Console] = None, err_console: Optional[Console] = None):
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)

    def run_setup(self, options: SetupOptions) -> SetupReport:
        service = CommitlintSetupService(settings=settings, console=self.console)
        return service.run(options)

    def display_report(self, report: SetupReport):
        """Display what each step did."""
        table = Table(title="Commitlint Setup", show_header=True, header_style="bold magenta")
        table.add_column("Step", style="cyan", no_wrap=True)
        table.add_column("Status")
        table.add_column("Details", style="white")

        for outcome in report.outcomes:
            table.add_row(outcome.step, _STATUS_ICONS[outcome.status], outcome.detail)

        self.console.print(table)

        if report.installed:
            self.console.print(
                f"\n[green]✅ Installed {len(report.installed)} dev dependencies[/green]"
            )

    def display_rules(self):
        """Display the shared rule set."""
        table = Table(
            title=f"Rules in {settings.packages.shared_config}",
            show_header=True,
            header_style="bold magenta",
        )
        table.add_column("Rule", style="cyan", no_wrap=True)
        table.add_column("Level", justify="center")
        table.add_column("When", style="yellow")
        table.add_column("Value", style="green")

        levels = {0: "[dim]off[/dim]", 1: "[yellow]warn[/yellow]", 2: "[red]error[/red]"}
        for rule in RULES:
            level, applicable, *value = rule_config(rule)
            shown = _format_rule_value(value[0]) if value else ""
            if rule.note:
                shown = f"{shown} ({rule.note})" if shown else rule.note
            table.add_row(rule.name, levels[level], applicable, escape(shown))

        self.console.print(table)
        self.console.print(f"Extends: [cyan]{EXTENDS}[/cyan]")
        self.console.print(f"Header pattern: [cyan]{escape(HEADER_PATTERN)}[/cyan]")
        self.console.print(f"Help: [blue]{HELP_URL}[/blue]")

    def display_error_message(self, error: str, suggestion: str = ""):
        """Display error message with helpful suggestions."""
        error_text = Text()
        error_text.append("❌ ", style="bold red")
        error_text.append("Setup failed\n\n", style="bold white")
        error_text.append("Error: ", style="red")
        error_text.append(f"{error}", style="white")

        if suggestion:
            error_text.append("\nSuggestion: ", style="yellow")
            error_text.append(f"{suggestion}", style="white")

        panel = Panel(error_text, title="Error", border_style="red")
        self.err_console.print(panel)


class InitCommand(click.Command):
    """Command that reports usage errors with exit status 1."""

    def parse_args(self, ctx: click.Context, args):
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            click.echo(ctx.get_usage(), err=True)
            click.echo(f"Error: {e.format_message()}", err=True)
            ctx.exit(1)


@click.command(
    PROG_NAME,
    cls=InitCommand,
    options_metavar=USAGE_METAVAR,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option(
    '--init',
    'init_',
    is_flag=True,
    help='Set up commitlint, its config and the commit-msg hook'
)
@click.option(
    '--ask',
    is_flag=True,
    help='Prompt for each option with defaults (needs a terminal)'
)
@click.option(
    '--config-file',
    is_flag=True,
    help='Write commitlint.config.js instead of a package.json block'
)
@click.option(
    '--project-dir',
    default='.',
    help='Project directory containing package.json (default: current directory)',
    type=click.Path(exists=True, file_okay=False, dir_okay=True)
)
@click.option(
    '--show-rules',
    is_flag=True,
    help='Show the rules of the shared config and exit'
)
@click.option(
    '--verbose',
    '-v',
    is_flag=True,
    help='Enable verbose output'
)
@click.version_option(version=settings.version, prog_name=PROG_NAME)
@click.pass_context
def main(
    ctx: click.Context,
    init_: bool,
    ask: bool,
    config_file: bool,
    project_dir: str,
    show_rules: bool,
    verbose: bool
):
    """Set up commitlint with the shared @cbashik/commitlint rules."""
    cli = CommitlintSetupCLI()

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Configuration: %s", export_config())

    if show_rules:
        cli.display_rules()
        return

    if not init_:
        click.echo(ctx.get_usage(), err=True)
        ctx.exit(1)

    options = SetupOptions(
        project_dir=Path(project_dir).resolve(),
        ask=ask,
        config_target=ConfigTarget.FILE if config_file else None,
    )

    try:
        report = cli.run_setup(options)
    except SetupError as e:
        logger.debug("Setup failed", exc_info=True)
        cli.display_error_message(str(e), e.suggestion)
        sys.exit(e.exit_code)
    except (KeyboardInterrupt, EOFError):
        cli.display_error_message("Aborted by user")
        sys.exit(1)

    cli.display_report(report)


if __name__ == "__main__":
    main()
