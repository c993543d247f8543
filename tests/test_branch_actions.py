from __future__ import annotations

from helpers import FakeGitClient

from ide_workspace_tool.actions import (
    CreateBranchAction,
    GitPushAction,
    MergeBranchAction,
    ShowCurrentBranchAction,
    SwitchBranchAction,
)
from ide_workspace_tool.domain.entities import ExecuteRequest


WORKSPACE = "/work/app"


def test_create_branch_offered_only_when_branch_missing() -> None:
    git = FakeGitClient(branches={"main"})
    action = CreateBranchAction(git, "dev")

    descriptor = action.describe(WORKSPACE)
    assert descriptor is not None
    assert descriptor.id == "create_dev_branch"

    git.branches.add("dev")
    assert action.describe(WORKSPACE) is None


def test_switch_branch_hidden_when_already_checked_out() -> None:
    git = FakeGitClient(branches={"main", "dev"}, current="dev")
    action = SwitchBranchAction(git, "dev")

    assert action.describe(WORKSPACE) is None

    git.current = "main"
    descriptor = action.describe(WORKSPACE)
    assert descriptor is not None
    assert descriptor.id == "switch_to_dev"


def test_switch_branch_hidden_when_branch_missing() -> None:
    git = FakeGitClient(branches={"main"}, current="main")

    assert SwitchBranchAction(git, "dev").describe(WORKSPACE) is None


def test_branch_actions_hidden_outside_repository() -> None:
    git = FakeGitClient(is_repo=False, branches={"main", "dev"})

    assert CreateBranchAction(git, "feature").describe(WORKSPACE) is None
    assert SwitchBranchAction(git, "dev").describe(WORKSPACE) is None
    assert MergeBranchAction(git, "dev", "main").describe(WORKSPACE) is None
    assert ShowCurrentBranchAction(git).describe(WORKSPACE) is None
    assert GitPushAction(git).describe(None) is None


def test_create_branch_executes_and_reports() -> None:
    git = FakeGitClient(branches={"main"})

    result = CreateBranchAction(git, "dev").execute(ExecuteRequest(action_id="create_dev_branch"), WORKSPACE)

    assert result.success
    assert ("create_branch", "dev") in git.calls


def test_create_branch_failure_is_reported() -> None:
    git = FakeGitClient(branches={"main"}, fail_on={"create_branch": "fatal: bad ref"})

    result = CreateBranchAction(git, "dev").execute(ExecuteRequest(action_id="create_dev_branch"), WORKSPACE)

    assert not result.success
    assert "fatal: bad ref" in result.message


def test_merge_requires_both_branches() -> None:
    git = FakeGitClient(branches={"main"})
    action = MergeBranchAction(git, "dev", "main")

    assert action.describe(WORKSPACE) is None

    git.branches.add("dev")
    descriptor = action.describe(WORKSPACE)
    assert descriptor is not None
    assert descriptor.id == "merge_dev_to_main"

    result = action.execute(ExecuteRequest(action_id="merge_dev_to_main"), WORKSPACE)
    assert result.success
    assert ("merge_branch", "dev", "main") in git.calls


def test_show_current_branch_embeds_branch_name() -> None:
    git = FakeGitClient(current="feature/login")

    descriptor = ShowCurrentBranchAction(git).describe(WORKSPACE)

    assert descriptor is not None
    assert descriptor.description == "Current branch: feature/login"


def test_push_requires_remote() -> None:
    git = FakeGitClient(remote=None)
    action = GitPushAction(git)

    assert action.describe(WORKSPACE) is None

    git.remote = "https://github.com/coffic/app.git"
    assert action.describe(WORKSPACE) is not None

    result = action.execute(ExecuteRequest(action_id="git_push"), WORKSPACE)
    assert result.success
    assert ("push", "origin", "main") in git.calls
