from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from ide_workspace_tool.domain.errors import CacheStorageError
from ide_workspace_tool.domain.ports import CacheStoragePort


DEFAULT_CACHE_DIR = Path.home() / ".coffic" / "ide-workspace"
CACHE_FILENAME = "workspace.json"


class JsonFileCacheStorage(CacheStoragePort):
    """Persist the workspace cache as one pretty-printed JSON document."""

    def __init__(self, cache_dir: Path | None = None, *, filename: str = CACHE_FILENAME) -> None:
        self._cache_dir = cache_dir or DEFAULT_CACHE_DIR
        self._path = self._cache_dir / filename
        self._logger = logging.getLogger(__name__)

    @property
    def path(self) -> Path:
        return self._path

    def initialize(self) -> None:
        try:
            self._cache_dir.mkdir(parents=True, exist_ok=True)
        except OSError as error:
            raise CacheStorageError(f"Cannot create cache directory {self._cache_dir}: {error}") from error

    def exists(self) -> bool:
        return self._path.is_file()

    def load(self) -> dict[str, Any]:
        try:
            content = self._path.read_text(encoding="utf-8")
        except OSError as error:
            raise CacheStorageError(f"Cannot read cache file {self._path}: {error}") from error

        try:
            parsed = json.loads(content)
        except json.JSONDecodeError as error:
            raise CacheStorageError(f"Invalid JSON in cache file {self._path}") from error

        if not isinstance(parsed, dict):
            raise CacheStorageError(f"Unexpected cache payload in {self._path}: top-level value must be an object")
        return parsed

    def store(self, document: dict[str, Any]) -> None:
        try:
            self._path.write_text(json.dumps(document, indent=2, ensure_ascii=False), encoding="utf-8")
        except OSError as error:
            raise CacheStorageError(f"Cannot write cache file {self._path}: {error}") from error
        self._logger.debug(
            "cache file written",
            extra={"event": "cache.storage.written", "path": str(self._path), "keys": len(document)},
        )
