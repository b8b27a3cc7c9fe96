"""Pure functions for command implementations."""

from dataclasses import dataclass
from datetime import datetime

from git_companion.errors import CurrentBranchError, InvalidChoiceError

COMMIT_CATEGORIES = ("feature", "fix", "docs", "refactor", "style", "test", "chore")
DEFAULT_CATEGORY = "chore"


@dataclass(frozen=True, slots=True)
class CommitIntent:
    """A commit message assembled from a category and free text."""

    category: str
    free_text: str

    @property
    def message(self) -> str:
        return compose_commit_message(self.category, self.free_text)


def resolve_category(choice: str) -> str:
    """Map a 1-based menu choice to a commit category, defaulting to chore."""
    try:
        index = int(choice.strip())
    except (ValueError, AttributeError):
        return DEFAULT_CATEGORY
    if 1 <= index <= len(COMMIT_CATEGORIES):
        return COMMIT_CATEGORIES[index - 1]
    return DEFAULT_CATEGORY


def default_commit_message(now: datetime | None = None) -> str:
    return f"Automatic update at {(now or datetime.now()):%Y-%m-%d %H:%M:%S}"


def compose_commit_message(category: str, text: str) -> str:
    return f"[{category}] {text}"


def build_commit_intent(
    category_choice: str,
    text: str,
    now: datetime | None = None,
) -> CommitIntent:
    """Build the commit intent from raw prompt answers."""
    text = text.strip()
    return CommitIntent(
        category=resolve_category(category_choice),
        free_text=text or default_commit_message(now),
    )


def resolve_branch_choice(choice: str, branches: list[str]) -> str:
    """Resolve a 1-based index into `branches`, or take the input as a branch name.

    Names are not checked against the listing; git reports unknown ones.
    """
    choice = choice.strip()
    if not choice:
        raise InvalidChoiceError("No branch given")
    if choice.isdigit():
        index = int(choice)
        if not 1 <= index <= len(branches):
            raise InvalidChoiceError(
                f"Choice {index} is out of range (1-{len(branches)})"
            )
        return branches[index - 1]
    return choice


def ensure_not_current(branch: str, current: str, action: str) -> None:
    """Refuse to act on the checked-out branch."""
    if branch == current:
        raise CurrentBranchError(f"Cannot {action} the current branch '{current}'")
