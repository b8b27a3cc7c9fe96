"""Tests for the branch management sub-menu."""

import pytest
from pytest_check import check

from git_companion.commands.branch import (
    branch_menu,
    create_branch_action,
    delete_branch_action,
    merge_branch_action,
    pull_action,
    pull_current,
    push_action,
    switch_branch_action,
)

BRANCHES = ["feature", "main"]


class TestCurrentBranchGuards:
    """Actions that must never target the checked-out branch."""

    @pytest.mark.parametrize(
        "action, answer, verb",
        [
            (delete_branch_action, "2\n", "delete"),
            (merge_branch_action, "main\n", "merge"),
            (switch_branch_action, "2\n", "switch to"),
        ],
    )
    def test_rejected_without_git_call(self, fake_process, interact, executor, action, answer, verb):
        result, _ = interact(action, executor, BRANCHES, "main", input=answer)

        check.is_not_none(result.exception)
        check.is_in(f"Cannot {verb} the current branch 'main'", str(result.exception))
        check.equal(len(fake_process.calls), 0)


def test_out_of_range_index_is_rejected(fake_process, interact, executor):
    result, _ = interact(switch_branch_action, executor, BRANCHES, "main", input="5\n")
    check.is_in("out of range", str(result.exception))
    check.equal(len(fake_process.calls), 0)


def test_create_branch(fake_process, interact, executor):
    fake_process.register_subprocess(["git", "checkout", "-b", "feature/login"])
    result, _ = interact(create_branch_action, executor, BRANCHES, "main", input="feature/login\n")
    check.is_none(result.exception)
    check.is_in("Created and switched to 'feature/login'", result.output)


def test_switch_by_index(fake_process, interact, executor):
    fake_process.register_subprocess(["git", "checkout", "feature"])
    result, _ = interact(switch_branch_action, executor, BRANCHES, "main", input="1\n")
    check.is_none(result.exception)
    check.equal(fake_process.call_count(["git", "checkout", "feature"]), 1)


def test_switch_by_literal_name_surfaces_git_error(fake_process, interact, executor):
    """Test unknown names go straight to git"""
    fake_process.register_subprocess(
        ["git", "checkout", "nope"],
        returncode=1,
        stderr="error: pathspec 'nope' did not match\n",
    )
    result, _ = interact(switch_branch_action, executor, BRANCHES, "main", input="nope\n")
    check.is_in("did not match", str(result.exception))


@pytest.mark.parametrize("answer, flag", [("n", "-d"), ("y", "-D")])
def test_delete_branch(fake_process, interact, executor, answer, flag):
    fake_process.register_subprocess(["git", "branch", flag, "feature"])
    result, _ = interact(
        delete_branch_action, executor, BRANCHES, "main", input=f"1\n{answer}\n"
    )
    check.is_none(result.exception)
    check.equal(fake_process.call_count(["git", "branch", flag, "feature"]), 1)


def test_merge_branch(fake_process, interact, executor):
    fake_process.register_subprocess(
        ["git", "merge", "feature"], stdout="Fast-forward\n"
    )
    result, _ = interact(merge_branch_action, executor, BRANCHES, "main", input="1\n")
    check.is_none(result.exception)
    check.is_in("Merged 'feature' into 'main'", result.output)


def test_pull_uses_tracking(fake_process, interact, executor):
    fake_process.register_subprocess(
        ["git", "branch", "-vv"], stdout="* main 1a2b3c [origin/main] msg\n"
    )
    fake_process.register_subprocess(["git", "pull"], stdout="Already up to date.\n")
    result, _ = interact(pull_action, executor, BRANCHES, "main")
    check.is_none(result.exception)
    check.is_in("Already up to date.", result.output)


def test_pull_without_tracking_prompts_for_remote(fake_process, interact, executor):
    fake_process.register_subprocess(["git", "branch", "-vv"], stdout="* main 1a2b3c msg\n")
    fake_process.register_subprocess(["git", "pull", "origin", "main"])
    result, _ = interact(pull_action, executor, BRANCHES, "main", input="\n")
    check.is_none(result.exception)
    check.equal(fake_process.call_count(["git", "pull", "origin", "main"]), 1)


@pytest.mark.parametrize(
    "answer, command",
    [
        ("n\n", ["git", "push"]),
        ("y\n\n", ["git", "push", "-u", "origin", "main"]),
    ],
)
def test_push(fake_process, interact, executor, answer, command):
    fake_process.register_subprocess(command)
    result, _ = interact(push_action, executor, BRANCHES, "main", input=answer)
    check.is_none(result.exception)
    check.equal(fake_process.call_count(command), 1)


def test_pull_current_reports_failure(fake_process, interact, session):
    fake_process.register_subprocess(
        ["git", "rev-parse", "--abbrev-ref", "HEAD"], stdout="main\n"
    )
    fake_process.register_subprocess(
        ["git", "branch", "-vv"], stdout="* main 1a2b3c [origin/main] msg\n"
    )
    fake_process.register_subprocess(
        ["git", "pull"], returncode=1, stderr="fatal: unable to access remote\n"
    )
    result, _ = interact(pull_current, session)
    check.is_none(result.exception)
    check.is_in("Pull failed", result.output)


def register_listing(fake_process, occurrences=1, current="main"):
    fake_process.register_subprocess(
        ["git", "rev-parse", "--abbrev-ref", "HEAD"],
        stdout=f"{current}\n",
        occurrences=occurrences,
    )
    fake_process.register_subprocess(
        ["git", "branch", "--format=%(refname:short)"],
        stdout="feature\nmain\n",
        occurrences=occurrences,
    )
    fake_process.register_subprocess(
        ["git", "branch", "-r", "--format=%(refname:short)"],
        stdout="origin/main\n",
        occurrences=occurrences,
    )


def test_branch_menu_return(fake_process, interact, session):
    register_listing(fake_process)
    result, _ = interact(branch_menu, session, input="7\n")
    check.is_none(result.exception)
    check.is_in("Current branch: main", result.output)
    check.is_in("origin/main", result.output)


def test_branch_menu_keeps_running_after_rejection(fake_process, interact, session):
    """Test a rejected action is reported and the menu redraws"""
    register_listing(fake_process, occurrences=2)
    result, _ = interact(branch_menu, session, input="3\n2\n7\n")
    check.is_none(result.exception)
    check.is_in("Cannot delete the current branch 'main'", result.output)
    check.equal(
        fake_process.call_count(["git", "branch", "--format=%(refname:short)"]), 2
    )


def test_branch_menu_reprompts_invalid_choice(fake_process, interact, session):
    register_listing(fake_process)
    result, _ = interact(branch_menu, session, input="9\nabc\n7\n")
    check.is_none(result.exception)
    check.is_in("Choose an option", result.output)


def test_branch_menu_pauses_on_listing_failure(fake_process, interact, session, monkeypatch):
    """Test a listing error stays on screen until acknowledged"""
    pauses = []
    monkeypatch.setattr(
        "git_companion.commands.branch.acknowledge", lambda: pauses.append(True)
    )
    fake_process.register_subprocess(
        ["git", "rev-parse", "--abbrev-ref", "HEAD"], stdout="main\n"
    )
    fake_process.register_subprocess(
        ["git", "branch", "--format=%(refname:short)"],
        returncode=128,
        stderr="fatal: not a git repository\n",
    )

    result, _ = interact(branch_menu, session)

    check.is_none(result.exception)
    check.is_in("Listing branches failed", result.output)
    check.equal(len(pauses), 1)


class TestDetachedHead:
    """The sub-menu with HEAD not on any branch."""

    def test_listing_marks_detached(self, fake_process, interact, session):
        register_listing(fake_process, current="HEAD")
        result, _ = interact(branch_menu, session, input="7\n")
        check.is_none(result.exception)
        check.is_in("Current branch: (detached HEAD)", result.output)
        check.is_not_in("* main", result.output)

    def test_main_can_be_deleted_and_push_is_rejected(self, fake_process, interact, session):
        register_listing(fake_process, occurrences=3, current="HEAD")
        fake_process.register_subprocess(["git", "branch", "-d", "main"])

        result, _ = interact(branch_menu, session, input="3\n2\nn\n6\n7\n")

        check.is_none(result.exception)
        check.equal(fake_process.call_count(["git", "branch", "-d", "main"]), 1)
        check.is_not_in("Cannot delete the current branch", result.output)
        check.is_in("Cannot push from a detached HEAD", result.output)
        check.equal(fake_process.call_count(["git", "push", fake_process.any()]), 0)

    @pytest.mark.parametrize("action", [pull_action, push_action])
    def test_pull_and_push_need_a_branch(self, fake_process, interact, executor, action):
        result, _ = interact(action, executor, BRANCHES, None)
        check.is_in("detached HEAD", str(result.exception))
        check.equal(len(fake_process.calls), 0)
