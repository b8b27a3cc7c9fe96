"""Shared utilities for interactive commands."""

from dataclasses import dataclass, field
from pathlib import Path

import click

from ..errors import CompanionError
from ..operations import GitExecutor


@dataclass(slots=True)
class ActiveSession:
    """Repository the menus are currently operating on."""

    path: Path
    default_branch: str
    initial_branch: str | None = None
    executor: GitExecutor = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.executor = GitExecutor(cwd=self.path)


def show_menu(title: str, options: tuple[str, ...]) -> int:
    """Print a numbered menu and return the 1-based choice."""
    click.echo()
    click.secho(title, bold=True)
    for number, label in enumerate(options, start=1):
        click.echo(f"  {number}. {label}")
    return click.prompt(
        "Choose an option", type=click.IntRange(1, len(options))
    )


def report_error(error: CompanionError) -> None:
    click.secho(f"Error: {error}", fg="red", err=True)


def acknowledge() -> None:
    """Wait for a keypress before the screen is redrawn."""
    click.pause()


def click_error(
    error: CompanionError, message: str | None = None
) -> click.ClickException:
    """Wrap a CompanionError so click exits with the error's own status."""
    exc = click.ClickException(message or str(error))
    exc.exit_code = error.exit_code
    return exc
