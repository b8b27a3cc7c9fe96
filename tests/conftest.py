import subprocess
from pathlib import Path
from typing import Any, Callable, Generator

import click
import pytest
from click.testing import CliRunner, Result

from git_companion.commands._shared import ActiveSession
from git_companion.operations import ConfigStore, GitExecutor


@pytest.fixture
def temp_git_repo(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a temporary git repository with a main branch."""
    subprocess.run(["git", "init"], cwd=tmp_path, check=True)
    subprocess.run(
        ["git", "config", "user.name", "Test User"], cwd=tmp_path, check=True
    )
    subprocess.run(
        ["git", "config", "user.email", "test@example.com"], cwd=tmp_path, check=True
    )

    (tmp_path / "README.md").write_text("# Test Repo")
    subprocess.run(["git", "add", "."], cwd=tmp_path, check=True)
    subprocess.run(["git", "commit", "-m", "Initial commit"], cwd=tmp_path, check=True)

    cur = subprocess.run(
        ["git", "symbolic-ref", "--short", "HEAD"],
        cwd=tmp_path,
        capture_output=True,
        text=True,
        check=True,
    ).stdout.strip()
    if cur != "main":
        subprocess.run(["git", "branch", "-m", cur, "main"], cwd=tmp_path, check=True)

    yield tmp_path


@pytest.fixture
def runner():
    """Create a Click test runner."""
    return CliRunner()


@pytest.fixture
def store(tmp_path: Path) -> ConfigStore:
    return ConfigStore(tmp_path / "config" / "config.json")


@pytest.fixture
def executor(tmp_path: Path) -> GitExecutor:
    return GitExecutor(cwd=tmp_path)


@pytest.fixture
def session(tmp_path: Path) -> ActiveSession:
    return ActiveSession(tmp_path, "main")


@pytest.fixture
def interact(runner: CliRunner) -> Callable[..., tuple[Result, Any]]:
    """Run an interactive function with scripted terminal input.

    Returns the runner result and the function's return value.
    """

    def _interact(func: Callable[..., Any], *args: Any, input: str = "", **kwargs: Any):
        outcome = {}

        @click.command()
        def _command() -> None:
            outcome["value"] = func(*args, **kwargs)

        result = runner.invoke(_command, [], input=input)
        return result, outcome.get("value")

    return _interact
