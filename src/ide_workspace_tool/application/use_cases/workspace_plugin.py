from __future__ import annotations
"""Host-facing plugin façade: list applicable actions and execute one by id."""

from dataclasses import dataclass
import logging

from ide_workspace_tool.adapters.workspace_resolvers.factory import ResolverFactory
from ide_workspace_tool.application.services.workspace_cache import WorkspaceCache
from ide_workspace_tool.domain.actions import ActionRegistry
from ide_workspace_tool.domain.entities import ActionDescriptor, ActionResult, AppId, ExecuteRequest
from ide_workspace_tool.domain.ports import WorkspaceResolverPort


LOGGER = logging.getLogger(__name__)

NO_WORKSPACE_MESSAGE = "Unable to determine the workspace path; reopen the IDE and try again"


@dataclass(slots=True)
class WorkspacePlugin:
    """Single entry point consumed by the host.

    Responsibilities:
    - map the overlaid application to its workspace resolver
    - remember the current app and its workspace in `WorkspaceCache`
    - ask `ActionRegistry` for applicable actions or dispatch one
    - never raise to the host: every outcome is a value
    """

    registry: ActionRegistry
    cache: WorkspaceCache
    resolver_factory: ResolverFactory

    def list_actions(self, app_id: AppId, keyword: str | None = None) -> list[ActionDescriptor]:
        """Return descriptors of actions applicable to the app's active workspace.

        Args:
            app_id: Overlaid application identifier supplied by the host.
            keyword: Optional case-insensitive substring filter on descriptions.

        Returns:
            Descriptors in registration order; empty for unsupported applications.
        """
        LOGGER.info(
            "listing actions",
            extra={"event": "plugin.list.start", "app_id": app_id, "keyword": keyword},
        )
        resolver = self.resolver_factory(app_id or "")
        if resolver is None:
            LOGGER.debug("unsupported application", extra={"event": "plugin.list.unsupported", "app_id": app_id})
            return []

        self.cache.save_current_app(app_id)
        workspace = self._resolve(resolver)
        self.cache.save_workspace(app_id, workspace)

        descriptors = self.registry.list_actions(workspace, keyword)
        LOGGER.info(
            "actions listed",
            extra={"event": "plugin.list.completed", "app_id": app_id, "workspace": workspace, "count": len(descriptors)},
        )
        return descriptors

    def execute_action(self, request: ExecuteRequest) -> ActionResult:
        """Execute one action against the cached workspace of the current app.

        On a cache miss the current app's workspace is re-resolved exactly once.
        """
        LOGGER.info(
            "executing action",
            extra={"event": "plugin.execute.start", "action_id": request.action_id, "keyword": request.keyword},
        )
        try:
            workspace = self.cache.get_workspace() or self._re_resolve_current_workspace()
            if not workspace:
                return ActionResult(success=False, message=NO_WORKSPACE_MESSAGE, action_id=request.action_id)
            return self.registry.execute_action(request, workspace)
        except Exception as error:  # noqa: BLE001
            LOGGER.exception(
                "action execution failed",
                extra={"event": "plugin.execute.failed", "action_id": request.action_id},
            )
            return ActionResult(
                success=False,
                message=f"Execution failed: {error or 'unknown error'}",
                action_id=request.action_id,
            )

    def _re_resolve_current_workspace(self) -> str | None:
        current_app = self.cache.get_current_app()
        LOGGER.warning(
            "workspace missing from cache; resolving again",
            extra={"event": "plugin.execute.cache_miss", "app_id": current_app},
        )
        if not current_app:
            return None

        resolver = self.resolver_factory(current_app)
        if resolver is None:
            return None

        workspace = self._resolve(resolver)
        if workspace:
            self.cache.save_workspace(current_app, workspace)
        return workspace

    @staticmethod
    def _resolve(resolver: WorkspaceResolverPort) -> str | None:
        try:
            return resolver.resolve()
        except Exception:  # noqa: BLE001
            LOGGER.exception(
                "workspace resolver raised",
                extra={"event": "plugin.resolve.failed", "resolver": resolver.name},
            )
            return None
