"""Thin wrapper around the git executable."""

import logging
import subprocess
from pathlib import Path

from git_companion.errors import (
    DetachedHeadError,
    GitCommandError,
    GitNotFoundError,
    NoUpstreamError,
    NotARepositoryError,
)
from git_companion.operations.parsing import parse_branch_list

logger = logging.getLogger(__name__)

NO_UPSTREAM_MARKERS = ("has no upstream branch", "no upstream configured")


class GitExecutor:
    """Execute git commands in an explicit repository directory."""

    def __init__(self, cwd: Path | None = None):
        self.cwd = cwd

    def run(self, args: list[str]) -> subprocess.CompletedProcess[str]:
        """Run a git command and return the result without checking the exit code."""
        cmd = ["git"] + args
        logger.debug("Running %s in %s", " ".join(cmd), self.cwd or ".")
        if self.cwd is not None and not Path(self.cwd).is_dir():
            raise NotARepositoryError(f"Repository directory '{self.cwd}' does not exist")
        try:
            result = subprocess.run(
                cmd,
                cwd=self.cwd,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError:
            raise GitNotFoundError("git executable not found on PATH")
        if result.returncode != 0:
            logger.debug(
                "git %s exited with %d: %s",
                args[0] if args else "",
                result.returncode,
                (result.stderr or "").strip(),
            )
        return result

    def _run_checked(
        self, args: list[str], operation: str
    ) -> subprocess.CompletedProcess[str]:
        """Run a git command, raising GitCommandError on a non-zero exit."""
        result = self.run(args)
        if result.returncode != 0:
            err = (result.stderr or result.stdout or "").strip()
            message = f"{operation} failed"
            if err:
                message = f"{message}: {err}"
            raise GitCommandError(message, stderr=err)
        return result

    def is_repository(self) -> bool:
        """Check whether the working directory carries a .git marker."""
        if self.cwd is None:
            return False
        return (Path(self.cwd) / ".git").exists()

    def version(self) -> str:
        """Return the installed git version string."""
        result = self._run_checked(["--version"], "Version check")
        return result.stdout.strip()

    def status_porcelain(self) -> str:
        result = self._run_checked(["status", "--porcelain"], "Status")
        return result.stdout

    def log(self, count: int) -> str:
        """Return up to `count` commits, one `<hash> <subject>` per line.

        A repository without commits yields an empty string.
        """
        result = self.run(["log", "-n", str(count), "--pretty=format:%h %s"])
        if result.returncode != 0:
            return ""
        return result.stdout

    def local_branches(self) -> list[str]:
        result = self._run_checked(
            ["branch", "--format=%(refname:short)"], "Listing branches"
        )
        return parse_branch_list(result.stdout)

    def remote_branches(self) -> list[str]:
        result = self._run_checked(
            ["branch", "-r", "--format=%(refname:short)"], "Listing remote branches"
        )
        return [
            b
            for b in parse_branch_list(result.stdout)
            if "/" in b and not b.endswith("/HEAD")
        ]

    def verbose_branches(self) -> str:
        result = self.run(["branch", "-vv"])
        if result.returncode != 0:
            return ""
        return result.stdout

    def current_branch(self) -> str | None:
        """Get current branch name, or None when it cannot be determined.

        An unborn branch (no commits yet) is read from the symbolic ref.
        Raises DetachedHeadError when HEAD is not on a branch.
        """
        result = self.run(["rev-parse", "--abbrev-ref", "HEAD"])
        branch = result.stdout.strip()
        if result.returncode == 0 and branch and branch != "HEAD":
            return branch
        if result.returncode == 0 and branch == "HEAD":
            raise DetachedHeadError("HEAD is detached; check out a branch first")

        result = self.run(["symbolic-ref", "--short", "HEAD"])
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None

    def checkout(self, branch: str) -> None:
        """Check out an existing branch."""
        self._run_checked(["checkout", branch], f"Switching to branch '{branch}'")

    def create_branch(self, branch: str) -> None:
        """Create a new branch from HEAD and check it out."""
        self._run_checked(["checkout", "-b", branch], f"Creating branch '{branch}'")

    def rename_branch(self, name: str) -> None:
        """Rename the current branch, overwriting any existing one."""
        self._run_checked(["branch", "-M", name], f"Renaming branch to '{name}'")

    def delete_branch(self, branch: str, force: bool = False) -> None:
        """Delete a branch."""
        args = ["branch", "-D" if force else "-d", branch]
        self._run_checked(args, f"Deleting branch '{branch}'")

    def merge(self, branch: str) -> str:
        """Merge a branch into the current HEAD."""
        result = self._run_checked(["merge", branch], f"Merging branch '{branch}'")
        return result.stdout.strip()

    def remote_url(self, name: str) -> str | None:
        """Get the URL of a remote, or None if it is not configured."""
        result = self.run(["remote", "get-url", name])
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None

    def add_remote(self, name: str, url: str) -> None:
        self._run_checked(["remote", "add", name, url], f"Adding remote '{name}'")

    def add_all(self) -> None:
        """Stage every change in the working tree."""
        self._run_checked(["add", "."], "Staging changes")

    def commit(self, message: str) -> str:
        result = self._run_checked(["commit", "-m", message], "Commit")
        return result.stdout.strip()

    def push(
        self,
        remote: str | None = None,
        branch: str | None = None,
        set_upstream: bool = False,
    ) -> str:
        """Push to the tracked upstream, or to an explicit remote and branch."""
        args = ["push"]
        if set_upstream:
            args.append("-u")
        if remote:
            args.append(remote)
            if branch:
                args.append(branch)

        result = self.run(args)
        if result.returncode != 0:
            err = (result.stderr or result.stdout or "").strip()
            if any(marker in err for marker in NO_UPSTREAM_MARKERS):
                raise NoUpstreamError(
                    f"Push failed: no upstream configured for the current branch\n{err}",
                    stderr=err,
                )
            raise GitCommandError(f"Push failed: {err}", stderr=err)
        return (result.stderr or result.stdout or "").strip()

    def pull(self, remote: str | None = None, branch: str | None = None) -> str:
        args = ["pull"]
        if remote:
            args.append(remote)
            if branch:
                args.append(branch)
        result = self._run_checked(args, "Pull")
        return result.stdout.strip()

    def init(self) -> None:
        """Create an empty repository in the working directory."""
        self._run_checked(["init"], "Initializing repository")

    def get_global_config(self, key: str) -> str | None:
        """Get a global git config value, or None when unset."""
        result = self.run(["config", "--global", "--get", key])
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None

    def set_global_config(self, key: str, value: str) -> None:
        self._run_checked(
            ["config", "--global", key, value], f"Setting global '{key}'"
        )
