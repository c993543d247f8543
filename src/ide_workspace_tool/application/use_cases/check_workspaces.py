from __future__ import annotations
"""Application use case: detect every supported IDE's workspace and its git state."""

from dataclasses import dataclass
import logging
from pathlib import Path
from typing import Sequence

from ide_workspace_tool.adapters.workspace_resolvers.factory import ResolverFactory
from ide_workspace_tool.domain.ports import GitClientPort


LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class WorkspaceGitState:
    """Git snapshot of one detected workspace."""

    ide_name: str
    workspace: str
    is_repository: bool
    has_changes: bool | None = None
    branch: str | None = None
    remote_url: str | None = None


@dataclass(slots=True)
class CheckWorkspaces:
    resolver_factory: ResolverFactory
    git_client: GitClientPort

    def execute(self, ide_names: Sequence[str]) -> list[WorkspaceGitState]:
        """Resolve each IDE's workspace and collect git facts for the ones found."""
        states: list[WorkspaceGitState] = []
        for ide_name in ide_names:
            resolver = self.resolver_factory(ide_name)
            if resolver is None:
                continue

            workspace = resolver.resolve()
            if not workspace:
                LOGGER.info(
                    "no workspace detected",
                    extra={"event": "check.workspace.missing", "ide": ide_name},
                )
                continue

            root = Path(workspace)
            if not self.git_client.is_repository(root):
                states.append(WorkspaceGitState(ide_name=ide_name, workspace=workspace, is_repository=False))
                continue

            states.append(
                WorkspaceGitState(
                    ide_name=ide_name,
                    workspace=workspace,
                    is_repository=True,
                    has_changes=self.git_client.has_uncommitted_changes(root),
                    branch=self.git_client.current_branch(root),
                    remote_url=self.git_client.remote_url(root),
                )
            )

        LOGGER.info(
            "workspace check completed",
            extra={"event": "check.completed", "detected": len(states)},
        )
        return states
