from __future__ import annotations
"""Desktop launcher that shells out to the platform's `open` equivalent."""

import logging
import subprocess
import sys
from pathlib import Path
from typing import Callable, Sequence

from ide_workspace_tool.domain.cancellation import CancellationToken
from ide_workspace_tool.domain.errors import LaunchError
from ide_workspace_tool.domain.ports import ApplicationLauncherPort


class ShellApplicationLauncher(ApplicationLauncherPort):
    """Launch explorer windows, applications and URLs through shell commands.

    macOS uses `open`, Windows uses `explorer`/`start`, everything else uses
    `xdg-open`. Opening a path with a named application is only supported on
    macOS, where `open -a` resolves application names.
    """

    def __init__(
        self,
        *,
        platform: str = sys.platform,
        timeout_seconds: float = 15.0,
        runner: Callable[..., subprocess.CompletedProcess[str]] = subprocess.run,
    ) -> None:
        self._platform = platform
        self._timeout_seconds = timeout_seconds
        self._runner = runner
        self._logger = logging.getLogger(__name__)

    def open_in_file_explorer(self, path: Path, *, cancellation: CancellationToken | None = None) -> None:
        if self._platform == "darwin":
            command = ["open", str(path)]
        elif self._platform == "win32":
            command = ["explorer", str(path)]
        else:
            command = ["xdg-open", str(path)]
        # explorer.exe exits with 1 even when the window opened
        self._run(command, cwd=None, cancellation=cancellation, check=self._platform != "win32")

    def open_with_application(
        self,
        path: Path,
        application: str,
        *,
        cancellation: CancellationToken | None = None,
    ) -> None:
        if self._platform != "darwin":
            raise LaunchError(f"Opening with '{application}' is only supported on macOS")
        self._run(["open", "-a", application, str(path)], cwd=None, cancellation=cancellation)

    def open_url(self, url: str, *, cancellation: CancellationToken | None = None) -> None:
        if self._platform == "darwin":
            command = ["open", url]
        elif self._platform == "win32":
            command = ["cmd", "/c", "start", "", url]
        else:
            command = ["xdg-open", url]
        self._run(command, cwd=None, cancellation=cancellation)

    def run_command(
        self,
        command: list[str],
        cwd: Path,
        *,
        cancellation: CancellationToken | None = None,
    ) -> None:
        self._run(command, cwd=cwd, cancellation=cancellation)

    def _run(
        self,
        command: Sequence[str],
        *,
        cwd: Path | None,
        cancellation: CancellationToken | None,
        check: bool = True,
    ) -> None:
        timeout = self._timeout_seconds
        if cancellation is not None:
            cancellation.raise_if_cancelled(f"launch {command[0]}")
            timeout = cancellation.bound_timeout(timeout)

        self._logger.info(
            "launching",
            extra={"event": "launcher.run", "command": " ".join(command), "cwd": str(cwd) if cwd else None},
        )
        try:
            self._runner(
                list(command),
                cwd=str(cwd) if cwd else None,
                check=check,
                text=True,
                capture_output=True,
                timeout=timeout,
            )
        except FileNotFoundError as error:
            raise LaunchError(f"Executable '{command[0]}' was not found in PATH") from error
        except subprocess.TimeoutExpired as error:
            raise LaunchError(f"Command timed out after {timeout}s: {' '.join(command)}") from error
        except subprocess.CalledProcessError as error:
            details = (error.stderr or "").strip() or (error.stdout or "").strip() or "No command output"
            raise LaunchError(f"Command failed ({error.returncode}): {' '.join(command)}\n{details}") from error
