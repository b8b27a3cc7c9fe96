"""Configuration management for git-companion."""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

import click

logger = logging.getLogger(__name__)

APP_NAME = "git-companion"
CONFIG_FILENAME = "config.json"


def default_config_path() -> Path:
    """Location of the configuration file in the per-user application directory."""
    return Path(click.get_app_dir(APP_NAME)) / CONFIG_FILENAME


def timestamp(now: datetime | None = None) -> str:
    return (now or datetime.now()).isoformat(timespec="seconds")


@dataclass(slots=True)
class RepositoryBookmark:
    """A saved repository path and the branch it commits to by default."""

    path: str
    default_branch: str
    last_used: str | None = None


@dataclass(slots=True)
class Configuration:
    """All saved bookmarks plus the repository offered first."""

    repositories: list[RepositoryBookmark] = field(default_factory=list)
    default_repository: str | None = None
    last_used: str | None = None

    def find(self, path: str) -> RepositoryBookmark | None:
        for bookmark in self.repositories:
            if bookmark.path == path:
                return bookmark
        return None


class ConfigStore:
    """Load and save the JSON bookmark file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def _parse_config(self, data: dict) -> Configuration:
        """Parse the JSON document into a Configuration."""
        if not isinstance(data, dict):
            raise ValueError(f"Invalid config format: {data!r}")

        repositories = []
        for entry in data.get("Repositories") or []:
            repositories.append(
                RepositoryBookmark(
                    path=str(entry["Path"]),
                    default_branch=str(entry.get("DefaultBranch") or "main"),
                    last_used=entry.get("LastUsed"),
                )
            )

        return Configuration(
            repositories=repositories,
            default_repository=data.get("DefaultRepo") or None,
            last_used=data.get("LastUsed"),
        )

    def _serialize_config(self, config: Configuration) -> dict:
        """Serialize Configuration to a JSON-compatible dict."""
        return {
            "Repositories": [
                {
                    "Path": b.path,
                    "DefaultBranch": b.default_branch,
                    "LastUsed": b.last_used,
                }
                for b in config.repositories
            ],
            "DefaultRepo": config.default_repository,
            "LastUsed": config.last_used,
        }

    def load(self) -> Configuration:
        """Read the configuration, treating a missing or unreadable file as empty."""
        if not self.path.exists():
            return Configuration()

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return self._parse_config(data)
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.debug("Ignoring unreadable config %s: %s", self.path, e)
            return Configuration()

    def save(self, config: Configuration) -> None:
        """Rewrite the whole configuration file."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps(self._serialize_config(config), indent=2), encoding="utf-8"
        )
        logger.debug("Saved %d bookmarks to %s", len(config.repositories), self.path)

    def remember(
        self,
        config: Configuration,
        path: str,
        default_branch: str,
        make_default: bool = False,
        now: datetime | None = None,
    ) -> RepositoryBookmark:
        """Add or refresh a bookmark and write the configuration."""
        stamp = timestamp(now)
        bookmark = config.find(path)
        if bookmark is None:
            bookmark = RepositoryBookmark(path=path, default_branch=default_branch)
            config.repositories.append(bookmark)
        bookmark.default_branch = default_branch
        bookmark.last_used = stamp

        if make_default:
            config.default_repository = path
        config.last_used = stamp

        self.save(config)
        return bookmark

    def default_bookmark(self, config: Configuration) -> RepositoryBookmark | None:
        """Return the default bookmark if it still names a saved repository."""
        if not config.default_repository:
            return None
        return config.find(config.default_repository)
