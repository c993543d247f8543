from __future__ import annotations

from pathlib import Path

from ide_workspace_tool.domain.ports import FileSystemPort


class LocalFileSystemAdapter(FileSystemPort):
    def path_exists(self, path: Path) -> bool:
        return path.exists()

    def list_directory(self, path: Path) -> list[Path]:
        try:
            return sorted(path.iterdir())
        except OSError:
            return []
