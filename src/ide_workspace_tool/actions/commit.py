from __future__ import annotations
"""Commit actions: plain commit+push and AI-written commit messages.

A commit that succeeded is never rolled back when the push that follows it
fails; the result reports failure and carries `committed=True`.
"""

from dataclasses import dataclass
from datetime import datetime
import logging
from pathlib import Path

from ide_workspace_tool.application.services.commit_message import (
    build_prompt,
    collect_diff_summary,
    decorate_commit_message,
)
from ide_workspace_tool.domain.actions import Action
from ide_workspace_tool.domain.entities import ActionDescriptor, ActionResult, ExecuteRequest
from ide_workspace_tool.domain.errors import CapabilityError
from ide_workspace_tool.domain.ports import GitClientPort


LOGGER = logging.getLogger(__name__)


def _describe_dirty_repository(
    git_client: GitClientPort,
    workspace: str | None,
    action_id: str,
    description_template: str,
    icon: str | None = None,
) -> ActionDescriptor | None:
    if not workspace:
        return None
    root = Path(workspace)
    if not git_client.is_repository(root) or not git_client.has_uncommitted_changes(root):
        return None
    branch = git_client.current_branch(root) or "unknown"
    return ActionDescriptor(id=action_id, description=description_template.format(branch=branch), icon=icon)


class GitCommitPushAction(Action):
    """Commit every change with a timestamped message and push when a remote exists."""

    def __init__(self, git_client: GitClientPort) -> None:
        self._git = git_client

    @property
    def action_ids(self) -> frozenset[str]:
        return frozenset({"git_commit_push"})

    def describe(self, workspace: str | None) -> ActionDescriptor | None:
        return _describe_dirty_repository(
            self._git,
            workspace,
            "git_commit_push",
            "Commit uncommitted changes and push to {branch} branch",
        )

    def execute(self, request: ExecuteRequest, workspace: str) -> ActionResult:
        root = Path(workspace)
        commit_message = f"Update {datetime.now():%Y-%m-%d %H:%M:%S}"
        try:
            self._git.add_all(root, cancellation=request.cancellation)
            self._git.commit(root, commit_message, cancellation=request.cancellation)
        except CapabilityError as error:
            LOGGER.error("commit failed", extra={"event": "action.commit.failed", "error": str(error)})
            return self._failure(f"Commit failed: {error}")

        branch = None
        try:
            request.cancellation.raise_if_cancelled("git push")
            branch = self._git.current_branch(root)
            if not self._git.remote_url(root):
                return self._success(
                    f"Committed locally; no remote repository configured. Commit message: {commit_message}",
                    committed=True,
                    pushed=False,
                )
            self._git.push(root, branch, cancellation=request.cancellation)
        except CapabilityError as error:
            LOGGER.error(
                "push after commit failed",
                extra={"event": "action.commit.push_failed", "branch": branch, "error": str(error)},
            )
            return self._failure(f"Committed but push failed: {error}", committed=True, pushed=False)

        return self._success(
            f"Committed and pushed to {branch}. Commit message: {commit_message}",
            committed=True,
            pushed=True,
        )


@dataclass(slots=True, frozen=True)
class AICommitVariant:
    """Static configuration of one AI commit action."""

    action_id: str
    language: str
    push: bool
    description: str
    icon: str = "🤖"


AI_COMMIT_PUSH_CHINESE = AICommitVariant(
    action_id="git_ai_commit_push_cn",
    language="Chinese",
    push=True,
    description="Generate a Chinese commit message with AI and push to {branch} branch",
)
AI_COMMIT_PUSH_ENGLISH = AICommitVariant(
    action_id="git_ai_commit_push_en",
    language="English",
    push=True,
    description="Generate an English commit message with AI and push to {branch} branch",
)
AI_COMMIT_ONLY_CHINESE = AICommitVariant(
    action_id="git_ai_commit_only_cn",
    language="Chinese",
    push=False,
    description="Generate a Chinese commit message with AI and commit to {branch} branch",
)


class AICommitAction(Action):
    def __init__(self, git_client: GitClientPort, variant: AICommitVariant) -> None:
        self._git = git_client
        self._variant = variant

    @property
    def name(self) -> str:
        return f"AICommitAction[{self._variant.action_id}]"

    @property
    def action_ids(self) -> frozenset[str]:
        return frozenset({self._variant.action_id})

    def describe(self, workspace: str | None) -> ActionDescriptor | None:
        return _describe_dirty_repository(
            self._git,
            workspace,
            self._variant.action_id,
            self._variant.description,
            self._variant.icon,
        )

    def execute(self, request: ExecuteRequest, workspace: str) -> ActionResult:
        generator = request.text_generator
        if generator is None or not callable(getattr(generator, "generate_text", None)):
            return self._failure("AI text generation is not available; cannot write a commit message")

        root = Path(workspace)
        try:
            diff_summary = collect_diff_summary(self._git, root, cancellation=request.cancellation)
        except CapabilityError as error:
            LOGGER.error("reading git changes failed", extra={"event": "action.ai_commit.diff_failed", "error": str(error)})
            return self._failure(f"Unable to read git changes: {error}")

        prompt = build_prompt(self._variant.language, diff_summary)
        LOGGER.info(
            "generating commit message",
            extra={"event": "action.ai_commit.generate", "language": self._variant.language},
        )
        try:
            request.cancellation.raise_if_cancelled("text generation")
            generated = generator.generate_text(prompt)
            request.cancellation.raise_if_cancelled("text generation")
        except Exception as error:  # noqa: BLE001
            LOGGER.error(
                "text generation failed",
                extra={"event": "action.ai_commit.generate_failed", "error": str(error)},
            )
            return self._failure(f"AI commit failed: {error}")

        if not isinstance(generated, str) or not generated.strip():
            return self._failure("AI returned an empty commit message")

        commit_message = decorate_commit_message(generated.strip())
        LOGGER.info(
            "commit message generated",
            extra={"event": "action.ai_commit.generated", "commit_message": commit_message},
        )

        try:
            self._git.add_all(root, cancellation=request.cancellation)
            self._git.commit(root, commit_message, cancellation=request.cancellation)
        except CapabilityError as error:
            LOGGER.error("ai commit failed", extra={"event": "action.ai_commit.commit_failed", "error": str(error)})
            return self._failure(f"AI commit failed: {error}", commit_message=commit_message, committed=False)

        if not self._variant.push:
            return self._success(
                f"AI commit succeeded: {commit_message}",
                commit_message=commit_message,
                committed=True,
                pushed=False,
            )

        try:
            request.cancellation.raise_if_cancelled("git push")
            self._git.push(root, self._git.current_branch(root), cancellation=request.cancellation)
        except CapabilityError as error:
            LOGGER.error("ai commit push failed", extra={"event": "action.ai_commit.push_failed", "error": str(error)})
            return self._failure(
                f"Committed but push failed: {error}",
                commit_message=commit_message,
                committed=True,
                pushed=False,
            )

        return self._success(
            f"AI commit pushed: {commit_message}",
            commit_message=commit_message,
            committed=True,
            pushed=True,
        )
