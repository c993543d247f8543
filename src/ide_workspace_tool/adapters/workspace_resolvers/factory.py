from __future__ import annotations

from pathlib import Path
import sys
from typing import Callable, Mapping

from ide_workspace_tool.domain.ports import WorkspaceResolverPort

from .vscode_family import CURSOR, TRAE, VSCODE, EditorProduct, VSCodeFamilyWorkspaceResolver


ResolverFactory = Callable[[str], "WorkspaceResolverPort | None"]

# Checked in order against the lowercased application id.
_PRODUCT_MARKERS: tuple[tuple[str, EditorProduct], ...] = (
    ("cursor", CURSOR),
    ("trae", TRAE),
    ("vscode", VSCODE),
    ("code", VSCODE),
)

SUPPORTED_APPS: tuple[EditorProduct, ...] = (VSCODE, CURSOR, TRAE)


def product_for_app(app_id: str) -> EditorProduct | None:
    lowered = app_id.lower()
    for marker, product in _PRODUCT_MARKERS:
        if marker in lowered:
            return product
    return None


def build_resolver_factory(
    *,
    home: Path | None = None,
    platform: str = sys.platform,
    env: Mapping[str, str] | None = None,
) -> ResolverFactory:
    """Return a callable mapping an overlaid app id to its workspace resolver."""

    def create_resolver(app_id: str) -> WorkspaceResolverPort | None:
        product = product_for_app(app_id)
        if product is None:
            return None
        return VSCodeFamilyWorkspaceResolver(product, home=home, platform=platform, env=env)

    return create_resolver
