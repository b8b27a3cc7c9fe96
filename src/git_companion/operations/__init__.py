from git_companion.operations.config import (
    Configuration,
    ConfigStore,
    RepositoryBookmark,
)
from git_companion.operations.parsing import ChangeSet, CommitSummary, TrackingPair

from .executor import GitExecutor
