"""Tests for plain and AI-assisted commit actions."""

from __future__ import annotations

from helpers import FakeGitClient, StaticTextGenerator

from ide_workspace_tool.actions.commit import (
    AI_COMMIT_ONLY_CHINESE,
    AI_COMMIT_PUSH_ENGLISH,
    AICommitAction,
    GitCommitPushAction,
)
from ide_workspace_tool.application.services.commit_message import (
    build_prompt,
    collect_diff_summary,
    decorate_commit_message,
)
from ide_workspace_tool.domain.cancellation import CancellationToken
from ide_workspace_tool.domain.entities import ExecuteRequest


WORKSPACE = "/work/app"


# =============================================================================
# Commit message helpers
# =============================================================================


def test_decorate_known_tag_gets_emoji() -> None:
    assert decorate_commit_message("Feature: add login") == "🆕 Feature: add login"


def test_decorate_tag_match_is_case_insensitive() -> None:
    assert decorate_commit_message("bugfix: null check") == "🐛 bugfix: null check"


def test_decorate_unknown_tag_is_unchanged() -> None:
    assert decorate_commit_message("unknown: foo") == "unknown: foo"


def test_decorate_without_tag_is_unchanged() -> None:
    assert decorate_commit_message("just words") == "just words"
    assert decorate_commit_message("Feature add login") == "Feature add login"


def test_prompt_contains_language_types_and_diff() -> None:
    prompt = build_prompt("English", "M\tapp.py")

    assert "Write the description in English" in prompt
    assert "   - Feature: implement a new feature" in prompt
    assert "M\tapp.py" in prompt
    assert "{language}" not in prompt


def test_diff_summary_prefers_staged_changes() -> None:
    git = FakeGitClient(status=" M a.py\n", staged_diff="M\tstaged.py\n", unstaged_diff="M\tunstaged.py\n")

    summary = collect_diff_summary(git, WORKSPACE)

    assert "staged.py" in summary
    assert "unstaged.py" not in summary
    assert ("diff_name_status", False) not in git.calls


def test_diff_summary_falls_back_to_unstaged_changes() -> None:
    git = FakeGitClient(status=" M a.py\n", staged_diff="  \n", unstaged_diff="M\tunstaged.py\n")

    summary = collect_diff_summary(git, WORKSPACE)

    assert "unstaged.py" in summary
    assert summary.startswith("Status:\n M a.py")


# =============================================================================
# Actions
# =============================================================================


def test_commit_actions_hidden_without_changes() -> None:
    git = FakeGitClient(status="")

    assert GitCommitPushAction(git).describe(WORKSPACE) is None
    assert AICommitAction(git, AI_COMMIT_PUSH_ENGLISH).describe(WORKSPACE) is None


def test_ai_commit_description_embeds_branch() -> None:
    git = FakeGitClient(status=" M a.py\n", current="dev")

    descriptor = AICommitAction(git, AI_COMMIT_PUSH_ENGLISH).describe(WORKSPACE)

    assert descriptor is not None
    assert descriptor.id == "git_ai_commit_push_en"
    assert descriptor.description.endswith("push to dev branch")
    assert descriptor.icon == "🤖"


def test_ai_commit_without_generator_reports_failure() -> None:
    git = FakeGitClient(status=" M a.py\n")

    result = AICommitAction(git, AI_COMMIT_PUSH_ENGLISH).execute(
        ExecuteRequest(action_id="git_ai_commit_push_en"), WORKSPACE
    )

    assert not result.success
    assert "not available" in result.message
    assert git.calls == []


def test_ai_commit_blank_generation_is_failure() -> None:
    git = FakeGitClient(status=" M a.py\n")
    request = ExecuteRequest(action_id="git_ai_commit_push_en", text_generator=StaticTextGenerator("   \n"))

    result = AICommitAction(git, AI_COMMIT_PUSH_ENGLISH).execute(request, WORKSPACE)

    assert not result.success
    assert not any(call[0] == "commit" for call in git.calls)


def test_ai_commit_generator_error_is_failure() -> None:
    git = FakeGitClient(status=" M a.py\n")
    generator = StaticTextGenerator(error=ConnectionError("network down"))
    request = ExecuteRequest(action_id="git_ai_commit_push_en", text_generator=generator)

    result = AICommitAction(git, AI_COMMIT_PUSH_ENGLISH).execute(request, WORKSPACE)

    assert not result.success
    assert "network down" in result.message


def test_ai_commit_and_push_uses_decorated_message() -> None:
    git = FakeGitClient(status=" M a.py\n", staged_diff="M\ta.py\n", current="main", remote="git@github.com:a/b.git")
    generator = StaticTextGenerator("  Feature: add login  \n")
    request = ExecuteRequest(action_id="git_ai_commit_push_en", text_generator=generator)

    result = AICommitAction(git, AI_COMMIT_PUSH_ENGLISH).execute(request, WORKSPACE)

    assert result.success
    assert result.metadata["commit_message"] == "🆕 Feature: add login"
    assert git.calls[-3:] == [
        ("add_all",),
        ("commit", "🆕 Feature: add login"),
        ("push", "origin", "main"),
    ]
    assert "English" in generator.prompts[0]


def test_ai_commit_only_does_not_push() -> None:
    git = FakeGitClient(status=" M a.py\n")
    request = ExecuteRequest(action_id="git_ai_commit_only_cn", text_generator=StaticTextGenerator("Typo: 修正拼写"))

    result = AICommitAction(git, AI_COMMIT_ONLY_CHINESE).execute(request, WORKSPACE)

    assert result.success
    assert not any(call[0] == "push" for call in git.calls)
    assert "Chinese" in request.text_generator.prompts[0]


def test_push_failure_after_commit_keeps_commit() -> None:
    git = FakeGitClient(status=" M a.py\n", fail_on={"push": "rejected"})
    request = ExecuteRequest(action_id="git_ai_commit_push_en", text_generator=StaticTextGenerator("Test: add cases"))

    result = AICommitAction(git, AI_COMMIT_PUSH_ENGLISH).execute(request, WORKSPACE)

    assert not result.success
    assert result.metadata["committed"] is True
    assert ("commit", "🧪 Test: add cases") in git.calls


def test_cancelled_request_skips_generation() -> None:
    git = FakeGitClient(status=" M a.py\n")
    token = CancellationToken()
    token.cancel()
    generator = StaticTextGenerator("Feature: x")
    request = ExecuteRequest(action_id="git_ai_commit_push_en", text_generator=generator, cancellation=token)

    result = AICommitAction(git, AI_COMMIT_PUSH_ENGLISH).execute(request, WORKSPACE)

    assert not result.success
    assert "cancelled" in result.message
    assert generator.prompts == []


def test_commit_push_without_remote_commits_locally() -> None:
    git = FakeGitClient(status=" M a.py\n", remote=None)

    result = GitCommitPushAction(git).execute(ExecuteRequest(action_id="git_commit_push"), WORKSPACE)

    assert result.success
    assert result.metadata == {"committed": True, "pushed": False}
    assert not any(call[0] == "push" for call in git.calls)


def test_commit_push_with_remote_pushes_current_branch() -> None:
    git = FakeGitClient(status=" M a.py\n", current="dev", remote="git@github.com:a/b.git")

    result = GitCommitPushAction(git).execute(ExecuteRequest(action_id="git_commit_push"), WORKSPACE)

    assert result.success
    assert git.calls[-1] == ("push", "origin", "dev")


def test_commit_failure_is_reported() -> None:
    git = FakeGitClient(status=" M a.py\n", fail_on={"commit": "nothing to commit"})

    result = GitCommitPushAction(git).execute(ExecuteRequest(action_id="git_commit_push"), WORKSPACE)

    assert not result.success
    assert "nothing to commit" in result.message


class CancellingTextGenerator(StaticTextGenerator):
    def __init__(self, text: str, token: CancellationToken) -> None:
        super().__init__(text)
        self.token = token

    def generate_text(self, prompt: str) -> str:
        self.token.cancel()
        return super().generate_text(prompt)


def test_cancellation_during_generation_skips_commit() -> None:
    git = FakeGitClient(status=" M a.py\n")
    token = CancellationToken()
    request = ExecuteRequest(
        action_id="git_ai_commit_push_en",
        text_generator=CancellingTextGenerator("Feature: x", token),
        cancellation=token,
    )

    result = AICommitAction(git, AI_COMMIT_PUSH_ENGLISH).execute(request, WORKSPACE)

    assert not result.success
    assert not any(call[0] in {"add_all", "commit"} for call in git.calls)


def test_expired_deadline_after_commit_skips_push() -> None:
    git = FakeGitClient(status=" M a.py\n", remote="git@github.com:a/b.git")
    token = CancellationToken(deadline_seconds=0)

    result = GitCommitPushAction(git).execute(ExecuteRequest(action_id="git_commit_push", cancellation=token), WORKSPACE)

    assert not result.success
    assert result.metadata["committed"] is True
    assert not any(call[0] == "push" for call in git.calls)
