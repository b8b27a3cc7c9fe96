"""Pick a bookmarked repository or register a new one."""

import logging
import sys
from pathlib import Path

import click

from ..errors import CompanionError, DetachedHeadError, NotARepositoryError
from ..operations import Configuration, ConfigStore, GitExecutor
from ..operations.reporter import current_branch
from ._shared import ActiveSession, report_error

logger = logging.getLogger(__name__)

DEFAULT_INITIAL_BRANCH = "main"


def initialize_repository(executor: GitExecutor) -> str:
    """Run `git init` and return the initial branch name chosen by the user."""
    branch = click.prompt(
        "Initial branch name", default=DEFAULT_INITIAL_BRANCH
    ).strip() or DEFAULT_INITIAL_BRANCH

    executor.init()
    executor.rename_branch(branch)

    url = click.prompt(
        "Remote URL for 'origin' (blank to skip)", default="", show_default=False
    ).strip()
    if url:
        executor.add_remote("origin", url)

    click.echo(f"Initialized repository in {executor.cwd} on branch '{branch}'")
    return branch


def choose_default_branch(executor: GitExecutor, initial_branch: str | None) -> str:
    """Ask which local branch commits should land on by default."""
    branches = executor.local_branches()
    try:
        current = current_branch(executor, initial_branch)
    except DetachedHeadError:
        current = branches[0] if branches else DEFAULT_INITIAL_BRANCH
    if not branches:
        click.echo(f"No branches yet, using '{current}'")
        return current

    click.echo("Local branches:")
    for number, branch in enumerate(branches, start=1):
        marker = "*" if branch == current else " "
        click.echo(f"  {number}. {marker} {branch}")

    choice = click.prompt(
        "Default branch (number or name)", default=current
    ).strip()
    if choice.isdigit():
        index = int(choice)
        if 1 <= index <= len(branches):
            return branches[index - 1]
        return current
    return choice or current


def add_repository(store: ConfigStore, config: Configuration) -> ActiveSession | None:
    """Register a repository path. Returns None when setup did not complete."""
    answer = click.prompt("Repository path", default=str(Path.cwd()))
    path = Path(answer).expanduser().resolve()
    if not path.is_dir():
        click.secho(f"'{path}' is not a directory", fg="red", err=True)
        return None

    executor = GitExecutor(cwd=path)
    initial_branch = None
    try:
        if not executor.is_repository():
            if not click.confirm(
                f"No git repository found in '{path}'. Initialize one?",
                default=False,
            ):
                return None
            initial_branch = initialize_repository(executor)

        default_branch = choose_default_branch(executor, initial_branch)
    except CompanionError as e:
        report_error(e)
        return None

    make_default = click.confirm(
        "Make this the default repository?", default=not config.repositories
    )
    store.remember(config, str(path), default_branch, make_default=make_default)
    logger.debug("Bookmarked %s on branch %s", path, default_branch)
    return ActiveSession(path, default_branch, initial_branch=initial_branch)


def open_bookmark(store: ConfigStore, config: Configuration, index: int) -> ActiveSession:
    """Activate a saved bookmark and refresh its timestamp."""
    bookmark = config.repositories[index]
    path = Path(bookmark.path)
    if not GitExecutor(cwd=path).is_repository():
        raise NotARepositoryError(f"'{path}' no longer holds a git repository")
    store.remember(config, bookmark.path, bookmark.default_branch)
    return ActiveSession(path, bookmark.default_branch)


def select_repository(store: ConfigStore, config: Configuration) -> ActiveSession:
    """Loop until a repository is chosen, or exit when the user quits."""
    while True:
        if not config.repositories:
            click.echo("No saved repositories. Let's set one up.")
            session = add_repository(store, config)
            if session is not None:
                return session
            continue

        default = store.default_bookmark(config)
        default_choice = None
        click.echo()
        click.secho("Saved repositories:", bold=True)
        for number, bookmark in enumerate(config.repositories, start=1):
            marker = " (default)" if bookmark is default else ""
            if bookmark is default:
                default_choice = str(number)
            click.echo(f"  {number}. {bookmark.path} [{bookmark.default_branch}]{marker}")
        click.echo("  a. Add a new repository")
        click.echo("  q. Quit")

        choice = click.prompt("Select repository", default=default_choice)
        choice = choice.strip().lower()

        if choice == "q":
            sys.exit(0)
        if choice == "a":
            session = add_repository(store, config)
            if session is not None:
                return session
            continue
        if choice.isdigit() and 1 <= int(choice) <= len(config.repositories):
            try:
                return open_bookmark(store, config, int(choice) - 1)
            except CompanionError as e:
                report_error(e)
                continue

        click.secho(f"Invalid choice: {choice}", fg="red", err=True)
