from __future__ import annotations
"""Core domain entities shared by actions, the registry and the plugin façade.

These data models are framework-agnostic so the same objects flow between the
CLI, tests and any host embedding the plugin.
"""

from dataclasses import dataclass, field
from typing import Any, TYPE_CHECKING

from .cancellation import CancellationToken

if TYPE_CHECKING:
    from .ports import TextGeneratorPort


WorkspacePath = str
AppId = str


@dataclass(slots=True, frozen=True)
class ActionDescriptor:
    """Display-ready description of an action that is applicable right now.

    Descriptors are built fresh on every listing call and never stored.

    Attributes:
        id: Identifier unique within one registry.
        description: Human-readable text, may embed live values (branch name).
        icon: Optional display hint (usually an emoji).
    """

    id: str
    description: str
    icon: str | None = None


@dataclass(slots=True)
class ActionResult:
    """Standard result returned by each `Action.execute()` call.

    Attributes:
        success: Whether the action succeeded.
        message: Human-readable action outcome.
        action_id: Identifier of the action that produced the result.
        metadata: Optional structured payload for callers that want details.
    """

    success: bool
    message: str = ""
    action_id: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class ExecuteRequest:
    """Host request to execute one action.

    Attributes:
        action_id: Identifier previously returned in an `ActionDescriptor`.
        keyword: Keyword the host was filtering with, informational only.
        text_generator: Optional text-generation capability supplied by the host.
        cancellation: Token checked before every capability invocation.
    """

    action_id: str
    keyword: str = ""
    text_generator: TextGeneratorPort | None = None
    cancellation: CancellationToken = field(default_factory=CancellationToken)


@dataclass(slots=True, frozen=True)
class ProjectType:
    """Facts about a workspace derived on demand, never persisted."""

    is_xcode_project: bool = False
    has_hosted_repo: bool = False
    hosted_repo_url: str | None = None
