from __future__ import annotations
"""Normalization of workspace locations reported by IDE state files."""

import re
from urllib.parse import unquote, urlsplit


FILE_SCHEME = "file://"
REMOTE_SCHEME = "vscode-remote://"

_WINDOWS_DRIVE_PATTERN = re.compile(r"^/[A-Za-z]:")


def is_remote_uri(value: str) -> bool:
    return value.startswith(REMOTE_SCHEME)


def normalize_workspace_path(value: str | None) -> str | None:
    """Turn a folder URI or path into a plain filesystem path.

    - `file:///Users/me/My%20App` -> `/Users/me/My App`
    - `file:///c%3A/src/app` -> `c:/src/app`
    - `vscode-remote://ssh-remote%2Bbox/home/me/app` -> `/home/me/app`
    - plain paths are returned unchanged; only URIs are percent-decoded, so
      normalizing an already normalized path is a no-op.
    """
    if value is None:
        return None
    raw = value.strip()
    if not raw:
        return None

    if raw.startswith(REMOTE_SCHEME):
        path = unquote(urlsplit(raw).path)
    elif raw.startswith(FILE_SCHEME):
        path = unquote(raw[len(FILE_SCHEME):])
    else:
        return raw

    if _WINDOWS_DRIVE_PATTERN.match(path):
        path = path[1:]
    return path or None
