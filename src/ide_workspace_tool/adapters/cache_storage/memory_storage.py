from __future__ import annotations

from copy import deepcopy
from typing import Any

from ide_workspace_tool.domain.errors import CacheStorageError
from ide_workspace_tool.domain.ports import CacheStoragePort


class InMemoryCacheStorage(CacheStoragePort):
    """Process-local cache storage, used by tests and embedded hosts."""

    def __init__(self, document: dict[str, Any] | None = None) -> None:
        self._document = deepcopy(document) if document is not None else None
        self.writes = 0

    def initialize(self) -> None:
        return None

    def exists(self) -> bool:
        return self._document is not None

    def load(self) -> dict[str, Any]:
        if self._document is None:
            raise CacheStorageError("Cache document has not been stored yet")
        return deepcopy(self._document)

    def store(self, document: dict[str, Any]) -> None:
        self._document = deepcopy(document)
        self.writes += 1
