from __future__ import annotations
"""Derive `ProjectType` facts for a workspace from filesystem and git probes."""

import re
from pathlib import Path
from urllib.parse import urlsplit

from ide_workspace_tool.domain.entities import ProjectType
from ide_workspace_tool.domain.ports import FileSystemPort, GitClientPort


HOSTING_DOMAINS = frozenset({"github.com", "gitlab.com", "bitbucket.org"})
XCODE_SUFFIXES = (".xcodeproj", ".xcworkspace")

_SCP_LIKE_PATTERN = re.compile(r"^(?:[^@/]+@)?(?P<host>[^:/]+):(?P<path>[^/].*)$")


def hosted_repository_url(remote_url: str | None) -> str | None:
    """Return the browser URL for a remote on a known hosting service.

    Handles `git@host:owner/repo.git`, `ssh://git@host/owner/repo.git` and
    `https://user@host/owner/repo.git`. Unknown hosts yield `None`.
    """
    if not remote_url:
        return None
    value = remote_url.strip()

    if "://" in value:
        parts = urlsplit(value)
        host = (parts.hostname or "").lower()
        path = parts.path
    else:
        match = _SCP_LIKE_PATTERN.match(value)
        if not match:
            return None
        host = match.group("host").lower()
        path = match.group("path")

    if host not in HOSTING_DOMAINS:
        return None

    path = path.strip("/")
    if path.endswith(".git"):
        path = path[: -len(".git")]
    if not path:
        return None
    return f"https://{host}/{path}"


class ProjectInspector:
    def __init__(self, git_client: GitClientPort, filesystem: FileSystemPort) -> None:
        self._git_client = git_client
        self._filesystem = filesystem

    def inspect(self, workspace: str) -> ProjectType:
        root = Path(workspace)
        is_xcode = any(entry.name.endswith(XCODE_SUFFIXES) for entry in self._filesystem.list_directory(root))

        hosted_url = None
        if self._git_client.is_repository(root):
            hosted_url = hosted_repository_url(self._git_client.remote_url(root))

        return ProjectType(
            is_xcode_project=is_xcode,
            has_hosted_repo=hosted_url is not None,
            hosted_repo_url=hosted_url,
        )
