from __future__ import annotations
"""Default ordered action list offered by the plugin."""

from ide_workspace_tool.application.services.project_inspector import ProjectInspector
from ide_workspace_tool.domain.actions import Action
from ide_workspace_tool.domain.ports import ApplicationLauncherPort, FileSystemPort, GitClientPort

from .branches import CreateBranchAction, GitPushAction, MergeBranchAction, ShowCurrentBranchAction, SwitchBranchAction
from .commit import (
    AI_COMMIT_ONLY_CHINESE,
    AI_COMMIT_PUSH_CHINESE,
    AI_COMMIT_PUSH_ENGLISH,
    AICommitAction,
    GitCommitPushAction,
)
from .open_project import BROWSER, GITHUB_DESKTOP, TERMINAL, XCODE, OpenProjectAction
from .workspace import OpenExplorerAction, ShowWorkspaceAction


def build_default_actions(
    git_client: GitClientPort,
    filesystem: FileSystemPort,
    launcher: ApplicationLauncherPort,
    *,
    development_branch: str = "dev",
    main_branch: str = "main",
) -> list[Action]:
    """Build the registry's action list; order is listing and dispatch order."""
    inspector = ProjectInspector(git_client, filesystem)
    return [
        ShowWorkspaceAction(),
        OpenExplorerAction(launcher),
        GitCommitPushAction(git_client),
        AICommitAction(git_client, AI_COMMIT_PUSH_CHINESE),
        AICommitAction(git_client, AI_COMMIT_PUSH_ENGLISH),
        AICommitAction(git_client, AI_COMMIT_ONLY_CHINESE),
        ShowCurrentBranchAction(git_client),
        CreateBranchAction(git_client, development_branch),
        CreateBranchAction(git_client, main_branch),
        MergeBranchAction(git_client, development_branch, main_branch),
        GitPushAction(git_client),
        OpenProjectAction(GITHUB_DESKTOP, inspector, launcher),
        OpenProjectAction(BROWSER, inspector, launcher),
        OpenProjectAction(XCODE, inspector, launcher),
        OpenProjectAction(TERMINAL, inspector, launcher),
        SwitchBranchAction(git_client, development_branch),
        SwitchBranchAction(git_client, main_branch),
    ]
