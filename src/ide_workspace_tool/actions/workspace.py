from __future__ import annotations
"""Actions that show or open the workspace itself."""

import logging
from pathlib import Path

from ide_workspace_tool.domain.actions import Action
from ide_workspace_tool.domain.entities import ActionDescriptor, ActionResult, ExecuteRequest
from ide_workspace_tool.domain.errors import CapabilityError
from ide_workspace_tool.domain.ports import ApplicationLauncherPort


LOGGER = logging.getLogger(__name__)


class ShowWorkspaceAction(Action):
    """Always offered; reports the resolved workspace or its absence."""

    @property
    def action_ids(self) -> frozenset[str]:
        return frozenset({"show_workspace"})

    def describe(self, workspace: str | None) -> ActionDescriptor | None:
        if workspace:
            return ActionDescriptor(id="show_workspace", description=f"Current workspace: {workspace}")
        return ActionDescriptor(id="show_workspace", description="No workspace detected")

    def execute(self, request: ExecuteRequest, workspace: str) -> ActionResult:
        LOGGER.info("showing workspace", extra={"event": "action.show_workspace", "workspace": workspace})
        return self._success(f"Current workspace: {workspace}", workspace=workspace)


class OpenExplorerAction(Action):
    def __init__(self, launcher: ApplicationLauncherPort) -> None:
        self._launcher = launcher

    @property
    def action_ids(self) -> frozenset[str]:
        return frozenset({"open_in_explorer"})

    def describe(self, workspace: str | None) -> ActionDescriptor | None:
        if not workspace:
            return None
        return ActionDescriptor(
            id="open_in_explorer",
            description=f"Open in file explorer: {workspace}",
            icon="🔍",
        )

    def execute(self, request: ExecuteRequest, workspace: str) -> ActionResult:
        try:
            self._launcher.open_in_file_explorer(Path(workspace), cancellation=request.cancellation)
        except CapabilityError as error:
            LOGGER.error(
                "open in file explorer failed",
                extra={"event": "action.open_explorer.failed", "workspace": workspace, "error": str(error)},
            )
            return self._failure(f"Open failed: {error}")
        return self._success(f"Opened {workspace} in the file explorer")
