"""Working tree and history queries built on the executor."""

from git_companion.operations.executor import GitExecutor
from git_companion.operations.parsing import (
    ChangeSet,
    CommitSummary,
    TrackingPair,
    parse_log,
    parse_status,
    parse_tracking_branches,
)

FALLBACK_BRANCH = "main"


def list_changes(executor: GitExecutor) -> ChangeSet | None:
    """Get changed paths, or None when the working tree is clean."""
    return parse_status(executor.status_porcelain())


def recent_commits(executor: GitExecutor, count: int = 5) -> list[CommitSummary]:
    return parse_log(executor.log(count))


def tracking_branches(executor: GitExecutor) -> dict[str, TrackingPair]:
    return parse_tracking_branches(executor.verbose_branches())


def current_branch(
    executor: GitExecutor,
    initial_branch: str | None = None,
    default_branch: str | None = None,
) -> str:
    """Resolve the branch HEAD points at.

    Only when git cannot name it at all does this fall back to the branch
    chosen at init time, then the bookmark's default branch. A detached
    HEAD raises DetachedHeadError from the executor.
    """
    return (
        executor.current_branch()
        or initial_branch
        or default_branch
        or FALLBACK_BRANCH
    )
