"""
Command-line interface for the recent activity workflow.
"""

import sys
from pathlib import Path

import click
from pydantic import ValidationError

from . import __version__
from .config import ActivityConfig
from .document import ACTIVITY_END, ACTIVITY_START, UPDATE_START, find_marker, read_lines
from .models import Outcome
from .orchestrator import ActivityReadmeUpdater


def load_config(config: str, from_env: bool) -> ActivityConfig:
    if from_env:
        return ActivityConfig.from_action_inputs()
    return ActivityConfig.from_file(config)


@click.group()
@click.version_option(version=__version__)
def cli():
    """Recent GitHub activity in your README."""
    pass


@cli.command()
@click.option("--config", "-c", default="config/settings.yaml", help="Configuration file path")
@click.option("--username", "-u", required=True, help="GitHub username")
@click.option("--readme", "-r", default="./README.md", help="Document to update")
def init(config: str, username: str, readme: str):
    """Write a default configuration file."""
    try:
        default_config = ActivityConfig(username=username, document={"path": readme})
        default_config.to_file(config)

        click.echo(f"Configuration initialized at: {config}")
        click.echo(f"Add {ACTIVITY_START} to {readme} where the activity should go.")

    except (ValidationError, OSError) as e:
        click.echo(f"Failed to initialize configuration: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.option("--config", "-c", default="config/settings.yaml", help="Configuration file path")
@click.option("--from-env", is_flag=True, help="Read GitHub Actions inputs (INPUT_*) instead of a file")
@click.option("--dry-run", is_flag=True, help="Report what would change, never write or commit")
@click.option("--no-commit", is_flag=True, help="Write the document but do not commit it")
def run(config: str, from_env: bool, dry_run: bool, no_commit: bool):
    """Update the document with the recent activity and commit it."""
    try:
        updater = ActivityReadmeUpdater(load_config(config, from_env))
    except (ValidationError, ValueError, FileNotFoundError) as e:
        click.echo(f"Invalid configuration: {e}", err=True)
        sys.exit(1)

    updater.setup_logging()
    result = updater.run(dry_run=dry_run, commit=not no_commit)

    if dry_run and result.content:
        for idx, line in enumerate(result.content):
            click.echo(f"{idx + 1}. {line}")

    click.echo(result.message, err=result.outcome == Outcome.FAILED)
    sys.exit(result.exit_code)


@cli.command()
@click.option("--config", "-c", default="config/settings.yaml", help="Configuration file path")
@click.option("--from-env", is_flag=True, help="Read GitHub Actions inputs (INPUT_*) instead of a file")
def preview(config: str, from_env: bool):
    """Print the activity lines that would be written."""
    try:
        updater = ActivityReadmeUpdater(load_config(config, from_env))
        lines = updater.preview()
    except Exception as e:
        click.echo(f"Preview failed: {e}", err=True)
        sys.exit(1)

    if not lines:
        click.echo("No PullRequest/Issue/IssueComment events found.")
        return

    for idx, line in enumerate(lines):
        click.echo(f"{idx + 1}. {line}")


@cli.command()
@click.option("--config", "-c", default="config/settings.yaml", help="Configuration file path")
@click.option("--from-env", is_flag=True, help="Read GitHub Actions inputs (INPUT_*) instead of a file")
def status(config: str, from_env: bool):
    """Show configuration and document status."""
    try:
        activity_config = load_config(config, from_env)
    except (ValidationError, ValueError, FileNotFoundError) as e:
        click.echo(f"Status check failed: {e}", err=True)
        sys.exit(1)

    click.echo("Configuration:")
    click.echo(f"  Username: {activity_config.username}")
    click.echo(f"  Max lines: {activity_config.max_lines}")
    click.echo(f"  Disabled events: {', '.join(activity_config.disabled_events) or 'none'}")
    click.echo(f"  GitHub Token: {'✓ Set' if activity_config.get_github_token() else '✗ Not set'}")

    path = Path(activity_config.document.path)
    if not path.exists():
        click.echo(f"  Document: {path} (not found)")
        return

    try:
        lines = read_lines(path)
    except (OSError, UnicodeDecodeError) as e:
        click.echo(f"  Document: {path} (unreadable: {e})", err=True)
        sys.exit(1)

    click.echo(f"  Document: {path} ({len(lines)} lines)")
    for marker in (ACTIVITY_START, ACTIVITY_END, UPDATE_START):
        found = find_marker(lines, marker) != -1
        click.echo(f"    {marker}: {'✓ found' if found else '✗ missing'}")


if __name__ == "__main__":
    cli()
