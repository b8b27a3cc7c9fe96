"""CLI entry point for git-companion."""

import logging
import sys
from pathlib import Path

import click

from .commands._shared import acknowledge, click_error, report_error, show_menu
from .commands.branch import branch_menu, pull_current
from .commands.commit import commit_and_push
from .commands.selector import select_repository
from .commands.status import show_status, status
from .errors import CompanionError
from .operations import ConfigStore, GitExecutor
from .operations.config import default_config_path

logger = logging.getLogger(__name__)

MAIN_MENU = (
    "Commit and push changes",
    "Manage branches",
    "Pull latest changes",
    "View status",
    "Change repository",
    "Quit",
)

IDENTITY_KEYS = (
    ("user.name", "Your name for commits"),
    ("user.email", "Your email for commits"),
)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def ensure_git_available(executor: GitExecutor) -> str:
    """Check the git version, failing hard when git is missing."""
    try:
        version = executor.version()
    except CompanionError as e:
        raise click_error(e, f"{e}. Install git and try again.")
    logger.debug("Using %s", version)
    return version


def _non_blank(value: str) -> str:
    value = value.strip()
    if not value:
        raise click.BadParameter("a value is required")
    return value


def ensure_identity(executor: GitExecutor) -> None:
    """Prompt for a global commit identity if none is configured."""
    for key, prompt in IDENTITY_KEYS:
        if executor.get_global_config(key):
            continue
        click.echo(f"git {key} is not set.")
        value = click.prompt(prompt, value_proc=_non_blank)
        executor.set_global_config(key, value)


def main_menu(store: ConfigStore) -> None:
    """Select a repository and dispatch menu choices until the user quits."""
    config = store.load()
    session = select_repository(store, config)

    while True:
        click.clear()
        click.echo(f"Repository: {session.path}")
        click.echo(f"Default branch: {session.default_branch}")
        choice = show_menu("git-companion", MAIN_MENU)

        try:
            if choice == 1:
                commit_and_push(session)
            elif choice == 2:
                # branch_menu pauses on its own before returning
                branch_menu(session)
                continue
            elif choice == 3:
                pull_current(session)
            elif choice == 4:
                show_status(
                    session.executor, session.initial_branch, session.default_branch
                )
            elif choice == 5:
                session = select_repository(store, config)
                continue
            else:
                click.echo("Bye!")
                sys.exit(0)
        except CompanionError as e:
            report_error(e)
        acknowledge()


@click.group(invoke_without_command=True)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar="GIT_COMPANION_CONFIG",
    help="Path to the bookmark file",
)
@click.option("-v", "--verbose", is_flag=True, help="Log git invocations")
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, verbose: bool) -> None:
    """Git-companion: menu-driven helper for everyday git work.

    Run without a command to open the interactive menu.
    """
    configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["store"] = ConfigStore(config_path or default_config_path())

    if ctx.invoked_subcommand is not None:
        return

    executor = GitExecutor()
    ensure_git_available(executor)
    try:
        ensure_identity(executor)
    except CompanionError as e:
        raise click_error(e)
    main_menu(ctx.obj["store"])


@click.command()
@click.pass_context
def repos(ctx: click.Context) -> None:
    """List saved repositories."""
    store = ctx.obj["store"]
    config = store.load()
    if not config.repositories:
        click.echo("No saved repositories")
        return

    default = store.default_bookmark(config)
    for bookmark in config.repositories:
        marker = "*" if bookmark is default else " "
        last_used = bookmark.last_used or "never"
        click.echo(
            f"{marker} {bookmark.path} [{bookmark.default_branch}] last used {last_used}"
        )


cli.add_command(status)
cli.add_command(repos)


if __name__ == "__main__":
    cli()
