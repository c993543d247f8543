from __future__ import annotations
"""Open the workspace in external tools (browser, terminal, Xcode, GitHub Desktop)."""

from dataclasses import dataclass
import logging
from pathlib import Path
from typing import Callable

from ide_workspace_tool.application.services.project_inspector import ProjectInspector
from ide_workspace_tool.domain.actions import Action
from ide_workspace_tool.domain.cancellation import CancellationToken
from ide_workspace_tool.domain.entities import ActionDescriptor, ActionResult, ExecuteRequest, ProjectType
from ide_workspace_tool.domain.errors import CapabilityError, LaunchError
from ide_workspace_tool.domain.ports import ApplicationLauncherPort


LOGGER = logging.getLogger(__name__)

Opener = Callable[[ApplicationLauncherPort, Path, ProjectType, CancellationToken], None]


@dataclass(slots=True, frozen=True)
class OpenTarget:
    """Where to open a project and when that makes sense.

    Attributes:
        action_id: Descriptor id.
        label: Display name of the target tool.
        icon: Descriptor icon.
        is_available: Predicate over the derived `ProjectType`.
        open: Callable performing the launch.
    """

    action_id: str
    label: str
    icon: str
    is_available: Callable[[ProjectType], bool]
    open: Opener


def _open_in_browser(
    launcher: ApplicationLauncherPort,
    workspace: Path,
    project: ProjectType,
    cancellation: CancellationToken,
) -> None:
    if not project.hosted_repo_url:
        raise LaunchError("No hosted repository URL found")
    launcher.open_url(project.hosted_repo_url, cancellation=cancellation)


def _open_with(application: str) -> Opener:
    def opener(
        launcher: ApplicationLauncherPort,
        workspace: Path,
        project: ProjectType,
        cancellation: CancellationToken,
    ) -> None:
        launcher.open_with_application(workspace, application, cancellation=cancellation)

    return opener


def _open_in_github_desktop(
    launcher: ApplicationLauncherPort,
    workspace: Path,
    project: ProjectType,
    cancellation: CancellationToken,
) -> None:
    try:
        launcher.run_command(["github", "."], workspace, cancellation=cancellation)
    except LaunchError as error:
        raise LaunchError(f"Failed to open GitHub Desktop; make sure it is installed ({error})") from error


GITHUB_DESKTOP = OpenTarget(
    action_id="open_in_github_desktop",
    label="GitHub Desktop",
    icon="🖥️",
    is_available=lambda project: True,
    open=_open_in_github_desktop,
)
BROWSER = OpenTarget(
    action_id="open_in_browser",
    label="Browser",
    icon="🌐",
    is_available=lambda project: project.has_hosted_repo and bool(project.hosted_repo_url),
    open=_open_in_browser,
)
XCODE = OpenTarget(
    action_id="open_in_xcode",
    label="Xcode",
    icon="📱",
    is_available=lambda project: project.is_xcode_project,
    open=_open_with("Xcode"),
)
TERMINAL = OpenTarget(
    action_id="open_in_terminal",
    label="Terminal",
    icon="⌨️",
    is_available=lambda project: True,
    open=_open_with("Terminal"),
)


class OpenProjectAction(Action):
    def __init__(
        self,
        target: OpenTarget,
        inspector: ProjectInspector,
        launcher: ApplicationLauncherPort,
    ) -> None:
        self._target = target
        self._inspector = inspector
        self._launcher = launcher

    @property
    def name(self) -> str:
        return f"OpenProjectAction[{self._target.label}]"

    @property
    def action_ids(self) -> frozenset[str]:
        return frozenset({self._target.action_id})

    def describe(self, workspace: str | None) -> ActionDescriptor | None:
        if not workspace:
            return None
        if not self._target.is_available(self._inspector.inspect(workspace)):
            return None
        return ActionDescriptor(
            id=self._target.action_id,
            description=f"Open in {self._target.label}",
            icon=self._target.icon,
        )

    def execute(self, request: ExecuteRequest, workspace: str) -> ActionResult:
        project = self._inspector.inspect(workspace)
        try:
            self._target.open(self._launcher, Path(workspace), project, request.cancellation)
        except CapabilityError as error:
            LOGGER.error(
                "open project failed",
                extra={"event": "action.open_project.failed", "target": self._target.label, "error": str(error)},
            )
            return self._failure(str(error))
        return self._success(f"Opened project in {self._target.label}")
