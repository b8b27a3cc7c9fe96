"""Branch management sub-menu."""

import click

from ..commands_logic import ensure_not_current, resolve_branch_choice
from ..errors import CompanionError, DetachedHeadError
from ..operations import GitExecutor
from ..operations.reporter import current_branch, tracking_branches
from ._shared import ActiveSession, acknowledge, report_error, show_menu

DEFAULT_REMOTE = "origin"
DETACHED = "(detached HEAD)"

BRANCH_MENU = (
    "Create a new branch",
    "Switch branch",
    "Delete a branch",
    "Merge a branch into the current one",
    "Pull",
    "Push",
    "Return to main menu",
)


def require_branch(current: str | None, action: str) -> str:
    if current is None:
        raise DetachedHeadError(
            f"Cannot {action} from a detached HEAD; switch to a branch first"
        )
    return current


def _prompt_branch(branches: list[str], prompt: str) -> str:
    return resolve_branch_choice(click.prompt(prompt), branches)


def create_branch_action(executor: GitExecutor, branches: list[str], current: str | None) -> None:
    name = click.prompt("New branch name").strip()
    executor.create_branch(name)
    click.echo(f"Created and switched to '{name}'")


def switch_branch_action(executor: GitExecutor, branches: list[str], current: str | None) -> None:
    target = _prompt_branch(branches, "Branch to switch to (number or name)")
    ensure_not_current(target, current, "switch to")
    executor.checkout(target)
    click.echo(f"Switched to '{target}'")


def delete_branch_action(executor: GitExecutor, branches: list[str], current: str | None) -> None:
    target = _prompt_branch(branches, "Branch to delete (number or name)")
    ensure_not_current(target, current, "delete")
    force = click.confirm("Force delete even if unmerged (-D)?", default=False)
    executor.delete_branch(target, force=force)
    click.echo(f"Deleted '{target}'")


def merge_branch_action(executor: GitExecutor, branches: list[str], current: str | None) -> None:
    target = _prompt_branch(branches, "Branch to merge into the current one (number or name)")
    ensure_not_current(target, current, "merge")
    output = executor.merge(target)
    if output:
        click.echo(output)
    click.echo(f"Merged '{target}' into '{current or DETACHED}'")


def pull_action(executor: GitExecutor, branches: list[str], current: str | None) -> None:
    """Pull the current branch from its upstream, or from a chosen remote."""
    require_branch(current, "pull")
    if current in tracking_branches(executor):
        output = executor.pull()
    else:
        remote = click.prompt("Remote to pull from", default=DEFAULT_REMOTE).strip()
        output = executor.pull(remote, current)
    if output:
        click.echo(output)
    click.echo(f"Pulled '{current}'")


def push_action(executor: GitExecutor, branches: list[str], current: str | None) -> None:
    require_branch(current, "push")
    if click.confirm("Set upstream (-u)?", default=False):
        remote = click.prompt("Remote", default=DEFAULT_REMOTE).strip()
        output = executor.push(remote, current, set_upstream=True)
    else:
        output = executor.push()
    if output:
        click.echo(output)
    click.echo(f"Pushed '{current}'")


BRANCH_ACTIONS = {
    1: create_branch_action,
    2: switch_branch_action,
    3: delete_branch_action,
    4: merge_branch_action,
    5: pull_action,
    6: push_action,
}


def pull_current(session: ActiveSession) -> None:
    """Pull the session's current branch, reporting failures."""
    executor = session.executor
    try:
        branch = current_branch(
            executor, session.initial_branch, session.default_branch
        )
        pull_action(executor, [], branch)
    except CompanionError as e:
        report_error(e)


def echo_branches(current: str | None, branches: list[str], remotes: list[str]) -> None:
    click.echo(f"Current branch: {current or DETACHED}")
    click.echo("Local branches:")
    for number, branch in enumerate(branches, start=1):
        marker = "*" if branch == current else " "
        click.echo(f"  {number}. {marker} {branch}")
    if remotes:
        click.echo("Remote branches:")
        for branch in remotes:
            click.echo(f"     {branch}")


def resolve_current(session: ActiveSession) -> str | None:
    """Current branch, or None when HEAD is detached."""
    try:
        return current_branch(
            session.executor, session.initial_branch, session.default_branch
        )
    except DetachedHeadError:
        return None


def branch_menu(session: ActiveSession) -> None:
    """Run the branch sub-menu until the user returns."""
    executor = session.executor
    while True:
        click.clear()
        try:
            current = resolve_current(session)
            branches = executor.local_branches()
            remotes = executor.remote_branches()
        except CompanionError as e:
            report_error(e)
            acknowledge()
            return

        echo_branches(current, branches, remotes)
        choice = show_menu("Branch management", BRANCH_MENU)
        if choice == len(BRANCH_MENU):
            return

        try:
            BRANCH_ACTIONS[choice](executor, branches, current)
        except CompanionError as e:
            report_error(e)
        acknowledge()
