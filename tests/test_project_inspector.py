from __future__ import annotations

import pytest

from helpers import FakeFileSystem, FakeGitClient, FakeLauncher

from ide_workspace_tool.actions.open_project import BROWSER, GITHUB_DESKTOP, TERMINAL, XCODE, OpenProjectAction
from ide_workspace_tool.application.services.project_inspector import ProjectInspector, hosted_repository_url
from ide_workspace_tool.domain.entities import ExecuteRequest, ProjectType


WORKSPACE = "/work/app"


@pytest.mark.parametrize(
    ("remote", "expected"),
    [
        ("git@github.com:coffic/app.git", "https://github.com/coffic/app"),
        ("https://github.com/coffic/app.git", "https://github.com/coffic/app"),
        ("https://token@gitlab.com/group/sub/app", "https://gitlab.com/group/sub/app"),
        ("ssh://git@bitbucket.org/team/app.git", "https://bitbucket.org/team/app"),
        ("git@git.internal.example:team/app.git", None),
        ("/srv/git/app.git", None),
        ("", None),
        (None, None),
    ],
)
def test_hosted_repository_url(remote, expected) -> None:
    assert hosted_repository_url(remote) == expected


def test_inspect_detects_xcode_and_hosting() -> None:
    git = FakeGitClient(remote="git@github.com:coffic/app.git")
    filesystem = FakeFileSystem(listings={WORKSPACE: ["App.xcodeproj", "Sources"]})

    project = ProjectInspector(git, filesystem).inspect(WORKSPACE)

    assert project == ProjectType(
        is_xcode_project=True,
        has_hosted_repo=True,
        hosted_repo_url="https://github.com/coffic/app",
    )


def test_inspect_plain_directory() -> None:
    project = ProjectInspector(FakeGitClient(is_repo=False), FakeFileSystem()).inspect(WORKSPACE)

    assert project == ProjectType()


def test_open_targets_follow_project_type() -> None:
    inspector = ProjectInspector(FakeGitClient(remote=None), FakeFileSystem())
    launcher = FakeLauncher()

    assert OpenProjectAction(BROWSER, inspector, launcher).describe(WORKSPACE) is None
    assert OpenProjectAction(XCODE, inspector, launcher).describe(WORKSPACE) is None
    assert OpenProjectAction(TERMINAL, inspector, launcher).describe(WORKSPACE) is not None
    assert OpenProjectAction(GITHUB_DESKTOP, inspector, launcher).describe(WORKSPACE) is not None


def test_open_in_xcode_launches_application() -> None:
    inspector = ProjectInspector(FakeGitClient(), FakeFileSystem(listings={WORKSPACE: ["App.xcworkspace"]}))
    launcher = FakeLauncher()
    action = OpenProjectAction(XCODE, inspector, launcher)

    descriptor = action.describe(WORKSPACE)
    result = action.execute(ExecuteRequest(action_id="open_in_xcode"), WORKSPACE)

    assert descriptor is not None
    assert descriptor.description == "Open in Xcode"
    assert result.success
    assert launcher.calls == [("application", "Xcode", WORKSPACE)]


def test_open_in_github_desktop_failure_is_reported() -> None:
    inspector = ProjectInspector(FakeGitClient(), FakeFileSystem())
    action = OpenProjectAction(GITHUB_DESKTOP, inspector, FakeLauncher(fail=True))

    result = action.execute(ExecuteRequest(action_id="open_in_github_desktop"), WORKSPACE)

    assert not result.success
    assert "GitHub Desktop" in result.message
