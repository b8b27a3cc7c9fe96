from pathlib import Path

import click

from ..errors import CompanionError, DetachedHeadError
from ..operations import ChangeSet, CommitSummary, GitExecutor
from ..operations.reporter import (
    current_branch,
    list_changes,
    recent_commits,
    tracking_branches,
)
from ._shared import click_error


def echo_changes(changes: ChangeSet) -> None:
    """Print changed paths grouped by kind."""
    for label, paths, color in (
        ("Modified", changes.modified, "yellow"),
        ("Added", changes.added, "green"),
        ("Deleted", changes.deleted, "red"),
    ):
        if not paths:
            continue
        click.echo(f"{label}:")
        for path in paths:
            click.secho(f"  {path}", fg=color)


def echo_commits(commits: list[CommitSummary]) -> None:
    if not commits:
        click.echo("No commits yet")
        return
    click.echo("Recent commits:")
    for commit in commits:
        click.echo(f"  {commit}")


def show_status(
    executor: GitExecutor,
    initial_branch: str | None = None,
    default_branch: str | None = None,
) -> None:
    """Print branch, upstream, pending changes and recent history."""
    try:
        branch = current_branch(executor, initial_branch, default_branch)
    except DetachedHeadError:
        branch = None
    click.echo(f"On branch: {branch or '(detached HEAD)'}")

    upstream = tracking_branches(executor).get(branch) if branch else None
    if upstream:
        click.echo(f"Tracking: {upstream.remote}/{upstream.branch}")
    else:
        click.echo("Tracking: (no upstream)")

    changes = list_changes(executor)
    if changes is None:
        click.echo("Working tree clean")
    else:
        echo_changes(changes)

    echo_commits(recent_commits(executor))


@click.command()
@click.argument(
    "path",
    required=False,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
def status(path: Path | None) -> None:
    """Show the status of a repository.

    PATH: Repository directory (default: current directory)
    """
    executor = GitExecutor(cwd=(path or Path.cwd()).resolve())
    if not executor.is_repository():
        raise click.ClickException(f"'{executor.cwd}' is not a git repository")
    try:
        show_status(executor)
    except CompanionError as e:
        raise click_error(e)
