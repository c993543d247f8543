from __future__ import annotations
"""Workspace resolver for VS Code and editors built on its storage layout.

VS Code, VS Code Insiders, Cursor and Trae all keep their recently opened
folders either in a legacy `storage.json` or in the `state.vscdb` SQLite
database under `User/globalStorage`.
"""

from dataclasses import dataclass
import json
import logging
import os
from pathlib import Path
import sqlite3
import sys
from typing import Any, Iterable, Mapping

from ide_workspace_tool.domain.ports import WorkspaceResolverPort
from ide_workspace_tool.domain.workspace_paths import FILE_SCHEME, is_remote_uri, normalize_workspace_path


RECENT_PATHS_KEY = "history.recentlyOpenedPathsList"


@dataclass(slots=True, frozen=True)
class EditorProduct:
    """Per-product settings directory names, tried in order."""

    display_name: str
    directory_names: tuple[str, ...]


VSCODE = EditorProduct("VSCode", ("Code", "Code - Insiders"))
CURSOR = EditorProduct("Cursor", ("Cursor",))
TRAE = EditorProduct("Trae", ("Trae",))


@dataclass(slots=True, frozen=True)
class _Candidate:
    path: str
    is_local: bool


class VSCodeFamilyWorkspaceResolver(WorkspaceResolverPort):
    def __init__(
        self,
        product: EditorProduct,
        *,
        home: Path | None = None,
        platform: str = sys.platform,
        env: Mapping[str, str] | None = None,
        sqlite_timeout_seconds: float = 2.0,
    ) -> None:
        self._product = product
        self._home = home or Path.home()
        self._platform = platform
        self._env = env if env is not None else os.environ
        self._sqlite_timeout_seconds = sqlite_timeout_seconds
        self._logger = logging.getLogger(__name__)

    @property
    def name(self) -> str:
        return f"{self._product.display_name}WorkspaceResolver"

    def resolve(self) -> str | None:
        try:
            for storage_path in self.storage_candidates():
                if not storage_path.is_file():
                    continue
                self._logger.debug(
                    "editor storage file found",
                    extra={"event": "resolver.storage.found", "resolver": self.name, "path": str(storage_path)},
                )
                if storage_path.suffix == ".json":
                    workspace = self._parse_json_storage(storage_path)
                elif storage_path.suffix == ".vscdb":
                    workspace = self._parse_sqlite_storage(storage_path)
                else:
                    workspace = None
                if workspace:
                    self._logger.info(
                        "workspace resolved",
                        extra={"event": "resolver.workspace.resolved", "resolver": self.name, "workspace": workspace},
                    )
                    return workspace
        except Exception:  # noqa: BLE001
            self._logger.exception(
                "workspace resolution failed",
                extra={"event": "resolver.workspace.failed", "resolver": self.name},
            )
            return None

        self._logger.info(
            "no workspace found in editor storage",
            extra={"event": "resolver.workspace.missing", "resolver": self.name},
        )
        return None

    def storage_candidates(self) -> list[Path]:
        """Return possible storage files in lookup order for the current platform."""
        candidates: list[Path] = []
        for root in self._product_roots():
            candidates.extend(
                [
                    root / "storage.json",
                    root / "User" / "globalStorage" / "state.vscdb",
                    root / "User" / "globalStorage" / "storage.json",
                ]
            )
        return candidates

    def _product_roots(self) -> list[Path]:
        if self._platform == "darwin":
            base = self._home / "Library" / "Application Support"
        elif self._platform == "win32":
            app_data = self._env.get("APPDATA")
            if not app_data:
                return []
            base = Path(app_data)
        else:
            base = self._home / ".config"
        return [base / directory for directory in self._product.directory_names]

    def _parse_json_storage(self, path: Path) -> str | None:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as error:
            self._logger.error(
                "editor storage json unreadable",
                extra={"event": "resolver.json.failed", "path": str(path), "error": str(error)},
            )
            return None
        if not isinstance(data, dict):
            return None

        for keys in (("openedPathsList", "entries"), (RECENT_PATHS_KEY, "entries")):
            entries = _dig(data, *keys)
            if isinstance(entries, list):
                workspace = self._select_workspace(entries)
                if workspace:
                    return workspace

        folder_uri = _dig(data, "windowState", "lastActiveWindow", "folderUri")
        if isinstance(folder_uri, str):
            return normalize_workspace_path(folder_uri)
        return None

    def _parse_sqlite_storage(self, path: Path) -> str | None:
        uri = f"{path.as_uri()}?mode=ro"
        try:
            connection = sqlite3.connect(uri, uri=True, timeout=self._sqlite_timeout_seconds)
            try:
                rows = connection.execute(
                    "SELECT value FROM ItemTable WHERE key = ?",
                    (RECENT_PATHS_KEY,),
                ).fetchall()
            finally:
                connection.close()
        except sqlite3.Error as error:
            self._logger.debug(
                "editor state database unreadable",
                extra={"event": "resolver.sqlite.failed", "path": str(path), "error": str(error)},
            )
            return None

        if not rows:
            self._logger.debug(
                "no workspace history in editor state database",
                extra={"event": "resolver.sqlite.empty", "path": str(path)},
            )
            return None

        for (value,) in rows:
            if isinstance(value, bytes):
                value = value.decode("utf-8", errors="replace")
            if not isinstance(value, str):
                continue
            try:
                data = json.loads(value)
            except ValueError:
                continue
            entries = data.get("entries") if isinstance(data, dict) else None
            if not isinstance(entries, list):
                continue
            workspace = self._select_workspace(entries)
            if workspace:
                return workspace
        return None

    def _select_workspace(self, entries: Iterable[Any]) -> str | None:
        """Pick the most recent existing local folder, else the most recent remote one."""
        candidates = [candidate for candidate in map(_to_candidate, entries) if candidate is not None]

        for candidate in candidates:
            if candidate.is_local and Path(candidate.path).exists():
                return candidate.path

        for candidate in candidates:
            if not candidate.is_local:
                return candidate.path
        return None


def _to_candidate(entry: Any) -> _Candidate | None:
    if not isinstance(entry, dict):
        return None
    uri = entry.get("folderUri")
    if not isinstance(uri, str):
        return None
    if uri.startswith(FILE_SCHEME):
        path = normalize_workspace_path(uri)
        return _Candidate(path, True) if path else None
    if is_remote_uri(uri):
        path = normalize_workspace_path(uri)
        return _Candidate(path, False) if path else None
    return None


def _dig(data: Any, *keys: Any) -> Any:
    current = data
    for key in keys:
        if isinstance(key, int):
            if not isinstance(current, list) or len(current) <= key:
                return None
        elif not isinstance(current, dict):
            return None
        current = current[key] if isinstance(key, int) else current.get(key)
    return current
