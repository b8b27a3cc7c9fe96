"""Pure functions for parsing git command output."""

import re
from dataclasses import dataclass, field

_MODIFIED = re.compile(r"^ M|^M ")
_ADDED = re.compile(r"^\?\?")
_DELETED = re.compile(r"^ D|^D ")

# "* main  1a2b3c [origin/main: ahead 1] subject"
_TRACKING = re.compile(
    r"^[*+]?\s*(?P<branch>\S+)\s+\S+\s+\[(?P<remote>[^/\]\s]+)/(?P<remote_branch>[^:\]]+)"
)


@dataclass(frozen=True, slots=True)
class TrackingPair:
    """Remote and remote branch a local branch pushes to and pulls from."""

    remote: str
    branch: str


@dataclass(frozen=True, slots=True)
class CommitSummary:
    """One line of abbreviated history."""

    short_hash: str
    subject: str

    def __str__(self) -> str:
        return f"{self.short_hash} {self.subject}"


@dataclass(slots=True)
class ChangeSet:
    """Working tree paths grouped by kind of change."""

    modified: list[str] = field(default_factory=list)
    added: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.modified or self.added or self.deleted)


def parse_status(output: str) -> ChangeSet | None:
    """Classify `git status --porcelain` lines.

    Returns None when there is no output at all. Lines with any other
    prefix (renames, conflicts) are left out of every bucket.
    """
    if not output.strip():
        return None

    changes = ChangeSet()
    for line in output.splitlines():
        if not line.strip():
            continue
        path = line[3:]
        if _MODIFIED.match(line):
            changes.modified.append(path)
        elif _ADDED.match(line):
            changes.added.append(path)
        elif _DELETED.match(line):
            changes.deleted.append(path)
    return changes


def parse_tracking_branches(output: str) -> dict[str, TrackingPair]:
    """Map local branches to their upstream from `git branch -vv` output."""
    tracking = {}
    for line in output.splitlines():
        match = _TRACKING.match(line)
        if match:
            tracking[match.group("branch")] = TrackingPair(
                remote=match.group("remote"),
                branch=match.group("remote_branch").strip(),
            )
    return tracking


def parse_log(output: str) -> list[CommitSummary]:
    """Parse `%h %s` formatted log lines, newest first."""
    commits = []
    for line in output.splitlines():
        line = line.strip()
        if not line:
            continue
        short_hash, _, subject = line.partition(" ")
        commits.append(CommitSummary(short_hash=short_hash, subject=subject))
    return commits


def parse_branch_list(output: str) -> list[str]:
    """Parse one-name-per-line branch listings."""
    return [line.strip() for line in output.splitlines() if line.strip()]
