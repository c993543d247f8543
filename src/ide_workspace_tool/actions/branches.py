from __future__ import annotations
"""Branch inspection, creation, switching, merging and pushing."""

import logging
from pathlib import Path

from ide_workspace_tool.domain.actions import Action
from ide_workspace_tool.domain.entities import ActionDescriptor, ActionResult, ExecuteRequest
from ide_workspace_tool.domain.errors import CapabilityError
from ide_workspace_tool.domain.ports import GitClientPort


LOGGER = logging.getLogger(__name__)


class ShowCurrentBranchAction(Action):
    def __init__(self, git_client: GitClientPort) -> None:
        self._git = git_client

    @property
    def action_ids(self) -> frozenset[str]:
        return frozenset({"show_current_branch"})

    def describe(self, workspace: str | None) -> ActionDescriptor | None:
        if not workspace or not self._git.is_repository(Path(workspace)):
            return None
        branch = self._git.current_branch(Path(workspace)) or "unknown"
        return ActionDescriptor(id="show_current_branch", description=f"Current branch: {branch}", icon="🔖")

    def execute(self, request: ExecuteRequest, workspace: str) -> ActionResult:
        branch = self._git.current_branch(Path(workspace))
        if branch is None:
            return self._failure("Unable to determine the current branch")
        return self._success(f"Currently on branch: {branch}", branch=branch)


class CreateBranchAction(Action):
    """Offered only while the branch does not exist yet."""

    def __init__(self, git_client: GitClientPort, branch: str) -> None:
        self._git = git_client
        self._branch = branch

    @property
    def name(self) -> str:
        return f"CreateBranchAction[{self._branch}]"

    @property
    def action_id(self) -> str:
        return f"create_{self._branch}_branch"

    @property
    def action_ids(self) -> frozenset[str]:
        return frozenset({self.action_id})

    def describe(self, workspace: str | None) -> ActionDescriptor | None:
        if not workspace:
            return None
        root = Path(workspace)
        if not self._git.is_repository(root) or self._git.branch_exists(root, self._branch):
            return None
        return ActionDescriptor(id=self.action_id, description=f"Create {self._branch} branch", icon="🌱")

    def execute(self, request: ExecuteRequest, workspace: str) -> ActionResult:
        try:
            self._git.create_branch(Path(workspace), self._branch, cancellation=request.cancellation)
        except CapabilityError as error:
            LOGGER.error(
                "branch creation failed",
                extra={"event": "action.branch.create.failed", "branch": self._branch, "error": str(error)},
            )
            return self._failure(f"Create failed: {error}")
        return self._success(f"Created and switched to branch {self._branch}", branch=self._branch)


class SwitchBranchAction(Action):
    """Offered when the branch exists and is not already checked out."""

    def __init__(self, git_client: GitClientPort, branch: str) -> None:
        self._git = git_client
        self._branch = branch

    @property
    def name(self) -> str:
        return f"SwitchBranchAction[{self._branch}]"

    @property
    def action_id(self) -> str:
        return f"switch_to_{self._branch}"

    @property
    def action_ids(self) -> frozenset[str]:
        return frozenset({self.action_id})

    def describe(self, workspace: str | None) -> ActionDescriptor | None:
        if not workspace:
            return None
        root = Path(workspace)
        if not self._git.is_repository(root) or not self._git.branch_exists(root, self._branch):
            return None
        if self._git.current_branch(root) == self._branch:
            return None
        return ActionDescriptor(id=self.action_id, description=f"Switch to {self._branch} branch")

    def execute(self, request: ExecuteRequest, workspace: str) -> ActionResult:
        try:
            self._git.switch_branch(Path(workspace), self._branch, cancellation=request.cancellation)
        except CapabilityError as error:
            LOGGER.error(
                "branch switch failed",
                extra={"event": "action.branch.switch.failed", "branch": self._branch, "error": str(error)},
            )
            return self._failure(f"Switch failed: {error}")
        return self._success(f"Switched to branch {self._branch}", branch=self._branch)


class MergeBranchAction(Action):
    def __init__(self, git_client: GitClientPort, source: str, target: str) -> None:
        self._git = git_client
        self._source = source
        self._target = target

    @property
    def name(self) -> str:
        return f"MergeBranchAction[{self._source}->{self._target}]"

    @property
    def action_id(self) -> str:
        return f"merge_{self._source}_to_{self._target}"

    @property
    def action_ids(self) -> frozenset[str]:
        return frozenset({self.action_id})

    def describe(self, workspace: str | None) -> ActionDescriptor | None:
        if not workspace:
            return None
        root = Path(workspace)
        if not self._git.is_repository(root):
            return None
        if not self._git.branch_exists(root, self._source) or not self._git.branch_exists(root, self._target):
            return None
        return ActionDescriptor(
            id=self.action_id,
            description=f"Merge {self._source} branch into {self._target} branch",
        )

    def execute(self, request: ExecuteRequest, workspace: str) -> ActionResult:
        try:
            self._git.merge_branch(Path(workspace), self._source, self._target, cancellation=request.cancellation)
        except CapabilityError as error:
            LOGGER.error(
                "branch merge failed",
                extra={
                    "event": "action.branch.merge.failed",
                    "source": self._source,
                    "target": self._target,
                    "error": str(error),
                },
            )
            return self._failure(f"Merge failed: {error}")
        return self._success(f"Merged {self._source} into {self._target}")


class GitPushAction(Action):
    def __init__(self, git_client: GitClientPort) -> None:
        self._git = git_client

    @property
    def action_ids(self) -> frozenset[str]:
        return frozenset({"git_push"})

    def describe(self, workspace: str | None) -> ActionDescriptor | None:
        if not workspace:
            return None
        root = Path(workspace)
        if not self._git.is_repository(root) or not self._git.remote_url(root):
            return None
        return ActionDescriptor(id="git_push", description="Push to remote repository")

    def execute(self, request: ExecuteRequest, workspace: str) -> ActionResult:
        root = Path(workspace)
        branch = None
        try:
            request.cancellation.raise_if_cancelled("git push")
            branch = self._git.current_branch(root)
            self._git.push(root, branch, cancellation=request.cancellation)
        except CapabilityError as error:
            LOGGER.error(
                "push failed",
                extra={"event": "action.push.failed", "branch": branch, "error": str(error)},
            )
            return self._failure(f"Push failed: {error}")
        return self._success(f"Pushed {branch} to origin", branch=branch)
