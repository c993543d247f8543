from __future__ import annotations
"""Domain action contract and the registry that lists and dispatches actions."""

from abc import ABC, abstractmethod
import logging
from typing import Sequence

from .entities import ActionDescriptor, ActionResult, ExecuteRequest
from .errors import DuplicateActionIdError


LOGGER = logging.getLogger(__name__)


class Action(ABC):
    """Conditionally available unit of work exposed to the host.

    Implementers should:
    - derive availability from live workspace state inside `describe`, never
      from a cached flag,
    - catch capability failures inside `execute` and report them through
      `ActionResult(success=False, ...)`,
    - declare every id `describe` can ever return in `action_ids`.
    """

    @property
    def name(self) -> str:
        """Stable default action name used in logging."""
        return self.__class__.__name__

    @property
    @abstractmethod
    def action_ids(self) -> frozenset[str]:
        """All descriptor ids this action can produce."""
        raise NotImplementedError

    @abstractmethod
    def describe(self, workspace: str | None) -> ActionDescriptor | None:
        """Return a descriptor when the action applies to the workspace right now.

        Args:
            workspace: Resolved workspace path, or `None` when unknown.

        Returns:
            Descriptor to show to the host, or `None` when not applicable.
        """
        raise NotImplementedError

    @abstractmethod
    def execute(self, request: ExecuteRequest, workspace: str) -> ActionResult:
        """Perform the side-effecting work for one request.

        Args:
            request: Host request carrying the action id and capability context.
            workspace: Workspace path the action operates on.

        Returns:
            ActionResult with execution outcome details.
        """
        raise NotImplementedError

    def _failure(self, message: str, **metadata: object) -> ActionResult:
        return ActionResult(success=False, message=message, action_id=self.name, metadata=dict(metadata))

    def _success(self, message: str, **metadata: object) -> ActionResult:
        return ActionResult(success=True, message=message, action_id=self.name, metadata=dict(metadata))


class ActionRegistry:
    """Ordered, fixed set of `Action` instances.

    Registration order is the listing order and the dispatch order.
    """

    def __init__(self, actions: Sequence[Action]) -> None:
        """Create registry and verify that no two actions share a descriptor id.

        Raises:
            DuplicateActionIdError: when two actions declare an overlapping id.
        """
        self._actions = tuple(actions)
        self._owners = self._index_action_ids(self._actions)
        LOGGER.info(
            "actions registered",
            extra={"event": "registry.actions.registered", "count": len(self._actions)},
        )

    @property
    def actions(self) -> tuple[Action, ...]:
        """Read-only ordered actions configured for this registry."""
        return self._actions

    @property
    def action_ids(self) -> frozenset[str]:
        """Every descriptor id any registered action can produce."""
        return frozenset(self._owners)

    def list_actions(self, workspace: str | None = None, keyword: str | None = None) -> list[ActionDescriptor]:
        """Return descriptors of applicable actions in registration order.

        Args:
            workspace: Resolved workspace path, or `None`.
            keyword: Optional case-insensitive substring matched against descriptions.
        """
        descriptors: list[ActionDescriptor] = []
        for action in self._actions:
            descriptor = self._describe(action, workspace)
            if descriptor is None:
                continue
            if keyword and not self._matches_keyword(descriptor, keyword):
                continue
            descriptors.append(descriptor)

        LOGGER.info(
            "actions listed",
            extra={
                "event": "registry.actions.listed",
                "workspace": workspace,
                "keyword": keyword,
                "count": len(descriptors),
            },
        )
        return descriptors

    def execute_action(self, request: ExecuteRequest, workspace: str) -> ActionResult:
        """Dispatch a request to the first action currently describing itself with its id.

        Never raises: an id that is no longer applicable yields a failure result.
        """
        for action in self._actions:
            descriptor = self._describe(action, workspace)
            if descriptor is None or descriptor.id != request.action_id:
                continue

            LOGGER.info(
                "action dispatched",
                extra={
                    "event": "registry.action.dispatch",
                    "action_id": request.action_id,
                    "action": action.name,
                    "workspace": workspace,
                },
            )
            try:
                result = action.execute(request, workspace)
            except Exception as error:  # noqa: BLE001
                LOGGER.exception(
                    "action raised unexpectedly",
                    extra={"event": "registry.action.crashed", "action_id": request.action_id},
                )
                return ActionResult(
                    success=False,
                    message=f"Action failed: {error}",
                    action_id=request.action_id,
                )
            result.action_id = request.action_id
            LOGGER.info(
                "action completed",
                extra={
                    "event": "registry.action.completed",
                    "action_id": request.action_id,
                    "success": result.success,
                },
            )
            return result

        LOGGER.error(
            "action not found",
            extra={"event": "registry.action.unknown", "action_id": request.action_id, "workspace": workspace},
        )
        return ActionResult(
            success=False,
            message=f"unknown action: {request.action_id}",
            action_id=request.action_id,
        )

    @staticmethod
    def _describe(action: Action, workspace: str | None) -> ActionDescriptor | None:
        try:
            descriptor = action.describe(workspace)
        except Exception:  # noqa: BLE001
            LOGGER.exception(
                "action describe failed; treating as unavailable",
                extra={"event": "registry.action.describe_failed", "action": action.name},
            )
            return None
        if descriptor is not None and descriptor.id not in action.action_ids:
            LOGGER.error(
                "action described an undeclared id; treating as unavailable",
                extra={"event": "registry.action.undeclared_id", "action": action.name, "action_id": descriptor.id},
            )
            return None
        return descriptor

    @staticmethod
    def _matches_keyword(descriptor: ActionDescriptor, keyword: str) -> bool:
        return keyword.lower() in descriptor.description.lower()

    @staticmethod
    def _index_action_ids(actions: Sequence[Action]) -> dict[str, Action]:
        owners: dict[str, Action] = {}
        for action in actions:
            for action_id in sorted(action.action_ids):
                previous = owners.get(action_id)
                if previous is not None:
                    raise DuplicateActionIdError(
                        f"Action id '{action_id}' is declared by both {previous.name} and {action.name}"
                    )
                owners[action_id] = action
        return owners
