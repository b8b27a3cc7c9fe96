"""Stage, commit and push everything in the active repository."""

import click

from ..commands_logic import COMMIT_CATEGORIES, CommitIntent, build_commit_intent
from ..errors import CompanionError, GitCommandError, NoUpstreamError
from ..operations import GitExecutor, TrackingPair
from ..operations.reporter import (
    current_branch,
    list_changes,
    recent_commits,
    tracking_branches,
)
from ._shared import ActiveSession, report_error
from .branch import DEFAULT_REMOTE
from .status import echo_changes, echo_commits


def prompt_commit_intent() -> CommitIntent:
    click.echo("Commit category:")
    for number, category in enumerate(COMMIT_CATEGORIES, start=1):
        click.echo(f"  {number}. {category}")
    category_choice = click.prompt(
        "Category", default=str(len(COMMIT_CATEGORIES))
    )
    text = click.prompt(
        "Commit message (blank for an automatic one)",
        default="",
        show_default=False,
    )
    return build_commit_intent(category_choice, text)


def switch_to_default(executor: GitExecutor, branch: str) -> None:
    try:
        executor.checkout(branch)
    except GitCommandError as e:
        raise GitCommandError(
            f"Could not switch to '{branch}' (does the branch exist?)\n{e.stderr}",
            stderr=e.stderr,
        )


def push_branch(
    executor: GitExecutor,
    branch: str,
    tracking: dict[str, TrackingPair],
) -> None:
    """Push to the tracked upstream, configuring one if the branch has none."""
    if branch in tracking:
        upstream = tracking[branch]
        click.echo(f"Pushing to {upstream.remote}/{upstream.branch}...")
        output = executor.push()
    else:
        remote = click.prompt("Remote to push to", default=DEFAULT_REMOTE).strip()
        if executor.remote_url(remote) is None:
            url = click.prompt(f"Remote '{remote}' is not configured. URL").strip()
            executor.add_remote(remote, url)
            click.echo(f"Added remote '{remote}' -> {url}")
        click.echo(f"Pushing and setting upstream to {remote}/{branch}...")
        output = executor.push(remote, branch, set_upstream=True)
    if output:
        click.echo(output)


def commit_and_push(session: ActiveSession) -> bool:
    """Run the full commit and push sequence.

    Returns True when changes were committed and pushed.
    """
    executor = session.executor
    try:
        tracking = tracking_branches(executor)
        changes = list_changes(executor)
    except CompanionError as e:
        report_error(e)
        return False

    if changes is None:
        click.echo("No changes to commit")
        return False

    try:
        branch = current_branch(
            executor, session.initial_branch, session.default_branch
        )
    except CompanionError as e:
        report_error(e)
        return False

    click.echo("Pending changes:")
    echo_changes(changes)
    echo_commits(recent_commits(executor))

    intent = prompt_commit_intent()

    click.echo()
    click.echo(f"Repository: {session.path}")
    click.echo(f"Branch:     {branch}")
    click.echo(f"Message:    {intent.message}")
    if not click.confirm("Commit and push?", default=True):
        click.echo("Cancelled")
        return False

    try:
        if branch != session.default_branch and click.confirm(
            f"You are on '{branch}'. Switch to default branch '{session.default_branch}'?",
            default=True,
        ):
            switch_to_default(executor, session.default_branch)
            branch = session.default_branch

        executor.add_all()
        executor.commit(intent.message)
        click.echo(f"Committed: {intent.message}")

        push_branch(executor, branch, tracking)
    except NoUpstreamError as e:
        report_error(e)
        click.echo("Use 'Push' with upstream in branch management to link a remote.")
        return False
    except CompanionError as e:
        report_error(e)
        return False

    click.secho("Changes committed and pushed", fg="green")
    return True
