from __future__ import annotations
"""Hexagonal architecture port interfaces.

Actions, the registry and the plugin façade depend only on these abstractions.
Adapters provide concrete implementations for git, the filesystem, desktop
launching, IDE state files, cache storage and text generation.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Protocol

from .cancellation import CancellationToken


class GitClientPort(ABC):
    """Local git operations against one workspace checkout.

    Query methods report "unknown" states as `False`/`None` instead of raising.
    Mutating methods raise `GitCommandError` on failure.
    """

    @abstractmethod
    def is_repository(self, workspace: Path) -> bool:
        """Return whether the workspace root carries a `.git` marker."""
        raise NotImplementedError

    @abstractmethod
    def status_porcelain(self, workspace: Path, *, cancellation: CancellationToken | None = None) -> str:
        """Return `git status --porcelain` output."""
        raise NotImplementedError

    @abstractmethod
    def has_uncommitted_changes(self, workspace: Path) -> bool:
        """Return whether porcelain status is non-empty."""
        raise NotImplementedError

    @abstractmethod
    def diff_name_status(
        self,
        workspace: Path,
        *,
        staged: bool,
        cancellation: CancellationToken | None = None,
    ) -> str:
        """Return `git diff --name-status` output, staged or unstaged."""
        raise NotImplementedError

    @abstractmethod
    def current_branch(self, workspace: Path) -> str | None:
        """Return the checked-out branch name, or `None` when unknown."""
        raise NotImplementedError

    @abstractmethod
    def remote_url(self, workspace: Path, remote: str = "origin") -> str | None:
        """Return the URL of a remote, or `None` when not configured."""
        raise NotImplementedError

    @abstractmethod
    def branch_exists(self, workspace: Path, branch: str) -> bool:
        """Return whether a local branch exists."""
        raise NotImplementedError

    @abstractmethod
    def create_branch(self, workspace: Path, branch: str, *, cancellation: CancellationToken | None = None) -> None:
        """Create a branch from HEAD and check it out."""
        raise NotImplementedError

    @abstractmethod
    def switch_branch(self, workspace: Path, branch: str, *, cancellation: CancellationToken | None = None) -> None:
        """Check out an existing branch."""
        raise NotImplementedError

    @abstractmethod
    def merge_branch(
        self,
        workspace: Path,
        source: str,
        target: str,
        *,
        cancellation: CancellationToken | None = None,
    ) -> None:
        """Check out `target` and merge `source` into it."""
        raise NotImplementedError

    @abstractmethod
    def add_all(self, workspace: Path, *, cancellation: CancellationToken | None = None) -> None:
        """Stage every change in the working tree."""
        raise NotImplementedError

    @abstractmethod
    def commit(self, workspace: Path, message: str, *, cancellation: CancellationToken | None = None) -> None:
        """Commit staged changes with the given message."""
        raise NotImplementedError

    @abstractmethod
    def push(
        self,
        workspace: Path,
        branch: str | None = None,
        *,
        remote: str = "origin",
        cancellation: CancellationToken | None = None,
    ) -> None:
        """Push a branch (default: current branch) to a remote."""
        raise NotImplementedError


class FileSystemPort(ABC):
    """Filesystem probes abstracted for testability and portability."""

    @abstractmethod
    def path_exists(self, path: Path) -> bool:
        """Return whether a path exists."""
        raise NotImplementedError

    @abstractmethod
    def list_directory(self, path: Path) -> list[Path]:
        """Return direct children of a directory (empty when unreadable)."""
        raise NotImplementedError


class ApplicationLauncherPort(ABC):
    """Desktop integration: file explorer, applications, browser, shell tools."""

    @abstractmethod
    def open_in_file_explorer(self, path: Path, *, cancellation: CancellationToken | None = None) -> None:
        raise NotImplementedError

    @abstractmethod
    def open_with_application(
        self,
        path: Path,
        application: str,
        *,
        cancellation: CancellationToken | None = None,
    ) -> None:
        raise NotImplementedError

    @abstractmethod
    def open_url(self, url: str, *, cancellation: CancellationToken | None = None) -> None:
        raise NotImplementedError

    @abstractmethod
    def run_command(
        self,
        command: list[str],
        cwd: Path,
        *,
        cancellation: CancellationToken | None = None,
    ) -> None:
        raise NotImplementedError


class WorkspaceResolverPort(ABC):
    """Per-IDE strategy for discovering the active workspace path."""

    @property
    def name(self) -> str:
        return self.__class__.__name__

    @abstractmethod
    def resolve(self) -> str | None:
        """Return the best-guess normalized workspace path, or `None`.

        Implementations never raise: failures are logged and reported as `None`.
        """
        raise NotImplementedError


class CacheStoragePort(ABC):
    """Whole-document storage backing `WorkspaceCache`."""

    @abstractmethod
    def initialize(self) -> None:
        """Create backing storage if absent."""
        raise NotImplementedError

    @abstractmethod
    def exists(self) -> bool:
        """Return whether a document has ever been stored."""
        raise NotImplementedError

    @abstractmethod
    def load(self) -> dict[str, Any]:
        """Return the stored document; raise `CacheStorageError` if unreadable."""
        raise NotImplementedError

    @abstractmethod
    def store(self, document: dict[str, Any]) -> None:
        """Replace the stored document; raise `CacheStorageError` on failure."""
        raise NotImplementedError


class TextGeneratorPort(Protocol):
    """Opaque text-completion capability supplied by the host."""

    def generate_text(self, prompt: str) -> str:
        """Return generated text for the prompt, or raise on failure."""
        ...
