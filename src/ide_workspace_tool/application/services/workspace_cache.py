from __future__ import annotations
"""Cross-invocation memory of the last workspace seen per IDE."""

import logging
from pathlib import Path
from typing import Any

from ide_workspace_tool.domain.entities import AppId
from ide_workspace_tool.domain.errors import CacheStorageError
from ide_workspace_tool.domain.ports import CacheStoragePort, FileSystemPort
from ide_workspace_tool.domain.workspace_paths import normalize_workspace_path


LOGGER = logging.getLogger(__name__)

CURRENT_APP_KEY = "_current_app_"


class WorkspaceCache:
    """Persist `{app_id -> workspace path}` plus the current app pointer.

    Every write is a whole-document read-modify-write; last writer wins. Reads
    never raise: an unreadable document behaves like an empty one. A stored
    path that no longer exists on disk is reported as a miss but left in place.
    """

    def __init__(self, storage: CacheStoragePort, filesystem: FileSystemPort) -> None:
        self._storage = storage
        self._filesystem = filesystem

    def save_current_app(self, app_id: AppId) -> None:
        self._update(CURRENT_APP_KEY, app_id)

    def save_workspace(self, app_id: AppId, workspace: str | None) -> None:
        """Record the workspace resolved for an app.

        `None` is stored explicitly: it means resolution was attempted and found
        nothing, which differs from having no entry at all.
        """
        if app_id == CURRENT_APP_KEY:
            LOGGER.warning(
                "refusing to store workspace under reserved key",
                extra={"event": "cache.workspace.reserved_key", "app_id": app_id},
            )
            return
        self._update(app_id, normalize_workspace_path(workspace))

    def get_current_app(self) -> AppId:
        value = self._read().get(CURRENT_APP_KEY)
        return value if isinstance(value, str) else ""

    def get_workspace(self, app_id: AppId | None = None) -> str | None:
        """Return the cached workspace for an app, or the current app when omitted."""
        document = self._read()
        if app_id == CURRENT_APP_KEY:
            return None

        actual_app_id = app_id or document.get(CURRENT_APP_KEY) or ""
        if not isinstance(actual_app_id, str) or not actual_app_id:
            LOGGER.info(
                "no application id available for cache lookup",
                extra={"event": "cache.workspace.no_app"},
            )
            return None

        workspace = document.get(actual_app_id)
        if not isinstance(workspace, str) or not workspace:
            return None

        if not self._filesystem.path_exists(Path(workspace)):
            LOGGER.info(
                "cached workspace no longer exists",
                extra={"event": "cache.workspace.stale", "app_id": actual_app_id, "workspace": workspace},
            )
            return None

        return workspace

    def _read(self) -> dict[str, Any]:
        if not self._storage.exists():
            return {}
        try:
            return self._storage.load()
        except CacheStorageError as error:
            LOGGER.error(
                "workspace cache unreadable",
                extra={"event": "cache.read.failed", "error": str(error)},
            )
            return {}

    def _update(self, key: str, value: str | None) -> None:
        try:
            self._storage.initialize()
            document = self._read()
            document[key] = value
            self._storage.store(document)
        except CacheStorageError as error:
            LOGGER.error(
                "workspace cache write failed",
                extra={"event": "cache.write.failed", "key": key, "error": str(error)},
            )
            return
        LOGGER.debug(
            "workspace cache updated",
            extra={"event": "cache.write.success", "key": key, "value": value},
        )
