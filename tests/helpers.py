"""Shared fake port implementations for tests.

Import from here instead of re-declaring fakes in individual test modules.
"""

from __future__ import annotations

from pathlib import Path

from ide_workspace_tool.domain.cancellation import CancellationToken
from ide_workspace_tool.domain.errors import GitCommandError, LaunchError
from ide_workspace_tool.domain.ports import ApplicationLauncherPort, FileSystemPort, GitClientPort, WorkspaceResolverPort


class FakeGitClient(GitClientPort):
    """In-memory repository state with call recording and failure injection.

    `fail_on` maps a method name (e.g. "push") to the error message it raises.
    """

    def __init__(
        self,
        *,
        is_repo: bool = True,
        branches: set[str] | None = None,
        current: str | None = "main",
        status: str = "",
        staged_diff: str = "",
        unstaged_diff: str = "",
        remote: str | None = None,
        fail_on: dict[str, str] | None = None,
    ) -> None:
        self.is_repo = is_repo
        self.branches = set(branches) if branches is not None else {"main"}
        self.current = current
        self.status = status
        self.staged_diff = staged_diff
        self.unstaged_diff = unstaged_diff
        self.remote = remote
        self.fail_on = dict(fail_on or {})
        self.calls: list[tuple] = []

    def _maybe_fail(self, method: str) -> None:
        if method in self.fail_on:
            raise GitCommandError(self.fail_on[method])

    def is_repository(self, workspace: Path) -> bool:
        return self.is_repo

    def status_porcelain(self, workspace: Path, *, cancellation: CancellationToken | None = None) -> str:
        self._maybe_fail("status_porcelain")
        return self.status

    def has_uncommitted_changes(self, workspace: Path) -> bool:
        return bool(self.status.strip())

    def diff_name_status(self, workspace: Path, *, staged: bool, cancellation: CancellationToken | None = None) -> str:
        self.calls.append(("diff_name_status", staged))
        return self.staged_diff if staged else self.unstaged_diff

    def current_branch(self, workspace: Path) -> str | None:
        return self.current

    def remote_url(self, workspace: Path, remote: str = "origin") -> str | None:
        return self.remote

    def branch_exists(self, workspace: Path, branch: str) -> bool:
        return branch in self.branches

    def create_branch(self, workspace: Path, branch: str, *, cancellation: CancellationToken | None = None) -> None:
        self._maybe_fail("create_branch")
        self.calls.append(("create_branch", branch))
        self.branches.add(branch)
        self.current = branch

    def switch_branch(self, workspace: Path, branch: str, *, cancellation: CancellationToken | None = None) -> None:
        self._maybe_fail("switch_branch")
        self.calls.append(("switch_branch", branch))
        self.current = branch

    def merge_branch(
        self,
        workspace: Path,
        source: str,
        target: str,
        *,
        cancellation: CancellationToken | None = None,
    ) -> None:
        self._maybe_fail("merge_branch")
        self.calls.append(("merge_branch", source, target))
        self.current = target

    def add_all(self, workspace: Path, *, cancellation: CancellationToken | None = None) -> None:
        self._maybe_fail("add_all")
        self.calls.append(("add_all",))

    def commit(self, workspace: Path, message: str, *, cancellation: CancellationToken | None = None) -> None:
        self._maybe_fail("commit")
        self.calls.append(("commit", message))
        self.status = ""

    def push(
        self,
        workspace: Path,
        branch: str | None = None,
        *,
        remote: str = "origin",
        cancellation: CancellationToken | None = None,
    ) -> None:
        if cancellation is not None:
            cancellation.raise_if_cancelled("git push")
        self._maybe_fail("push")
        self.calls.append(("push", remote, branch))


class FakeFileSystem(FileSystemPort):
    def __init__(self, existing: set[str] | None = None, listings: dict[str, list[str]] | None = None) -> None:
        self.existing = set(existing or ())
        self.listings = dict(listings or {})

    def path_exists(self, path: Path) -> bool:
        return str(path) in self.existing

    def list_directory(self, path: Path) -> list[Path]:
        return [path / name for name in self.listings.get(str(path), [])]


class FakeLauncher(ApplicationLauncherPort):
    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.calls: list[tuple] = []

    def _record(self, *call: object) -> None:
        if self.fail:
            raise LaunchError(f"cannot launch {call[0]}")
        self.calls.append(call)

    def open_in_file_explorer(self, path: Path, *, cancellation: CancellationToken | None = None) -> None:
        self._record("explorer", str(path))

    def open_with_application(
        self,
        path: Path,
        application: str,
        *,
        cancellation: CancellationToken | None = None,
    ) -> None:
        self._record("application", application, str(path))

    def open_url(self, url: str, *, cancellation: CancellationToken | None = None) -> None:
        self._record("url", url)

    def run_command(self, command: list[str], cwd: Path, *, cancellation: CancellationToken | None = None) -> None:
        self._record("command", tuple(command), str(cwd))


class FakeResolver(WorkspaceResolverPort):
    def __init__(self, results: list[str | None]) -> None:
        self._results = list(results)
        self.calls = 0

    def resolve(self) -> str | None:
        self.calls += 1
        if len(self._results) > 1:
            return self._results.pop(0)
        return self._results[0] if self._results else None


class StaticTextGenerator:
    def __init__(self, text: str = "", error: Exception | None = None) -> None:
        self.text = text
        self.error = error
        self.prompts: list[str] = []

    def generate_text(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.text
