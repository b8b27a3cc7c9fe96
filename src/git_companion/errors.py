"""Custom exceptions for git-companion."""


class CompanionError(Exception):
    """Base exception for all git-companion errors."""

    exit_code: int = 1


class GitNotFoundError(CompanionError):
    """Raised when the git executable cannot be found."""

    exit_code: int = 2


class GitCommandError(CompanionError):
    """Raised when a git command exits with a non-zero status."""

    def __init__(self, message: str, stderr: str = ""):
        super().__init__(message)
        self.stderr = stderr


class NoUpstreamError(GitCommandError):
    """Raised when a push fails because no upstream is configured."""

    pass


class InvalidChoiceError(CompanionError):
    """Raised when a menu selection does not match any listed entry."""

    pass


class CurrentBranchError(CompanionError):
    """Raised when an action cannot target the checked-out branch."""

    pass


class NotARepositoryError(CompanionError):
    """Raised when a path does not hold a git repository."""

    pass


class DetachedHeadError(CompanionError):
    """Raised when HEAD does not point at a branch."""

    pass
