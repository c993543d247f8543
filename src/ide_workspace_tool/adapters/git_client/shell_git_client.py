from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Callable, Sequence

from ide_workspace_tool.domain.cancellation import CancellationToken
from ide_workspace_tool.domain.errors import GitCommandError
from ide_workspace_tool.domain.ports import GitClientPort


class ShellGitClientAdapter(GitClientPort):
    def __init__(
        self,
        *,
        git_executable: str = "git",
        timeout_seconds: float = 30.0,
        runner: Callable[..., subprocess.CompletedProcess[str]] = subprocess.run,
    ) -> None:
        self._git_executable = git_executable
        self._timeout_seconds = timeout_seconds
        self._runner = runner
        self._logger = logging.getLogger(__name__)

    def is_repository(self, workspace: Path) -> bool:
        return (workspace / ".git").exists()

    def status_porcelain(self, workspace: Path, *, cancellation: CancellationToken | None = None) -> str:
        return self._run_git(["status", "--porcelain"], cwd=workspace, cancellation=cancellation).stdout or ""

    def has_uncommitted_changes(self, workspace: Path) -> bool:
        result = self._run_git_allow_fail(["status", "--porcelain"], cwd=workspace)
        if result is None or result.returncode != 0:
            return False
        return bool((result.stdout or "").strip())

    def diff_name_status(
        self,
        workspace: Path,
        *,
        staged: bool,
        cancellation: CancellationToken | None = None,
    ) -> str:
        args = ["diff", "--cached", "--name-status"] if staged else ["diff", "--name-status"]
        return self._run_git(args, cwd=workspace, cancellation=cancellation).stdout or ""

    def current_branch(self, workspace: Path) -> str | None:
        result = self._run_git_allow_fail(["rev-parse", "--abbrev-ref", "HEAD"], cwd=workspace)
        if result is None or result.returncode != 0:
            return None
        branch = (result.stdout or "").strip()
        return branch or None

    def remote_url(self, workspace: Path, remote: str = "origin") -> str | None:
        result = self._run_git_allow_fail(["remote", "get-url", remote], cwd=workspace)
        if result is None or result.returncode != 0:
            return None
        url = (result.stdout or "").strip()
        return url or None

    def branch_exists(self, workspace: Path, branch: str) -> bool:
        result = self._run_git_allow_fail(["show-ref", "--verify", "--quiet", f"refs/heads/{branch}"], cwd=workspace)
        return result is not None and result.returncode == 0

    def create_branch(self, workspace: Path, branch: str, *, cancellation: CancellationToken | None = None) -> None:
        self._logger.info(
            "creating branch",
            extra={"event": "git.branch.create", "cwd": str(workspace), "branch": branch},
        )
        self._run_git(["checkout", "-b", branch], cwd=workspace, cancellation=cancellation)

    def switch_branch(self, workspace: Path, branch: str, *, cancellation: CancellationToken | None = None) -> None:
        self._logger.info(
            "switching branch",
            extra={"event": "git.branch.switch", "cwd": str(workspace), "branch": branch},
        )
        self._run_git(["checkout", branch], cwd=workspace, cancellation=cancellation)

    def merge_branch(
        self,
        workspace: Path,
        source: str,
        target: str,
        *,
        cancellation: CancellationToken | None = None,
    ) -> None:
        self._logger.info(
            "merging branch",
            extra={"event": "git.branch.merge", "cwd": str(workspace), "source": source, "target": target},
        )
        self._run_git(["checkout", target], cwd=workspace, cancellation=cancellation)
        self._run_git(["merge", "--no-edit", source], cwd=workspace, cancellation=cancellation)

    def add_all(self, workspace: Path, *, cancellation: CancellationToken | None = None) -> None:
        self._run_git(["add", "-A"], cwd=workspace, cancellation=cancellation)

    def commit(self, workspace: Path, message: str, *, cancellation: CancellationToken | None = None) -> None:
        self._logger.info(
            "committing changes",
            extra={"event": "git.commit.start", "cwd": str(workspace), "commit_message": message},
        )
        self._run_git(["commit", "-m", message], cwd=workspace, cancellation=cancellation)

    def push(
        self,
        workspace: Path,
        branch: str | None = None,
        *,
        remote: str = "origin",
        cancellation: CancellationToken | None = None,
    ) -> None:
        target_branch = branch or self.current_branch(workspace)
        if not target_branch or target_branch == "HEAD":
            raise GitCommandError(f"Cannot push: no branch is checked out in {workspace}")
        self._logger.info(
            "pushing branch",
            extra={"event": "git.push.start", "cwd": str(workspace), "remote": remote, "branch": target_branch},
        )
        self._run_git(["push", remote, target_branch], cwd=workspace, cancellation=cancellation)

    def _run_git_allow_fail(self, args: Sequence[str], cwd: Path) -> subprocess.CompletedProcess[str] | None:
        command = [self._git_executable, *args]
        try:
            return self._runner(
                command,
                cwd=str(cwd),
                check=False,
                text=True,
                capture_output=True,
                timeout=self._timeout_seconds,
            )
        except (FileNotFoundError, NotADirectoryError, subprocess.TimeoutExpired) as error:
            self._logger.warning(
                "git query failed",
                extra={
                    "event": "git.query.failed",
                    "command": " ".join(command),
                    "cwd": str(cwd),
                    "error": str(error),
                },
            )
            return None

    def _run_git(
        self,
        args: Sequence[str],
        cwd: Path,
        *,
        cancellation: CancellationToken | None = None,
    ) -> subprocess.CompletedProcess[str]:
        command = [self._git_executable, *args]
        timeout = self._timeout_seconds
        if cancellation is not None:
            cancellation.raise_if_cancelled(f"git {args[0]}")
            timeout = cancellation.bound_timeout(timeout)
        try:
            return self._runner(
                command,
                cwd=str(cwd),
                check=True,
                text=True,
                capture_output=True,
                timeout=timeout,
            )
        except FileNotFoundError as error:
            raise GitCommandError(
                f"Git executable '{self._git_executable}' was not found in PATH"
            ) from error
        except subprocess.TimeoutExpired as error:
            raise GitCommandError(
                f"Git command timed out after {timeout}s: {' '.join(command)}"
            ) from error
        except subprocess.CalledProcessError as error:
            stderr = (error.stderr or "").strip()
            stdout = (error.stdout or "").strip()
            details = stderr or stdout or "No command output"
            self._logger.error(
                "git command failed",
                extra={
                    "event": "git.command.error",
                    "command": " ".join(command),
                    "cwd": str(cwd),
                    "return_code": error.returncode,
                    "details": details,
                },
            )
            raise GitCommandError(
                f"Git command failed ({error.returncode}): {' '.join(command)}\n{details}"
            ) from error
