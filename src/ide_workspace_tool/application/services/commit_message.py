from __future__ import annotations
"""Prompt construction and post-processing for AI-generated commit messages."""

from dataclasses import dataclass
import re
from pathlib import Path

from ide_workspace_tool.domain.cancellation import CancellationToken
from ide_workspace_tool.domain.ports import GitClientPort


@dataclass(slots=True, frozen=True)
class CommitType:
    emoji: str
    tag: str
    example: str


COMMIT_TYPES: tuple[CommitType, ...] = (
    CommitType("🐛", "Bugfix", "fix the xxx problem"),
    CommitType("🎨", "Chore", "tidy up and refactor code"),
    CommitType("👷", "CI", "CI related changes"),
    CommitType("🔧", "Config", "configuration file changes"),
    CommitType("🐳", "Docker", "Docker related changes"),
    CommitType("📖", "Document", "documentation updates"),
    CommitType("🆕", "Feature", "implement a new feature"),
    CommitType("🎉", "FirstCommit", "initialize the project"),
    CommitType("🌍", "I18n", "internationalization"),
    CommitType("🐎", "Improve", "performance improvements"),
    CommitType("🔖", "Release", "release a version"),
    CommitType("🗑️", "Trash", "remove files or code"),
    CommitType("✏️", "Typo", "fix spelling mistakes"),
    CommitType("💄", "UI", "UI and style updates"),
    CommitType("📦", "PackageUpdate", "package management updates"),
    CommitType("🧪", "Test", "test related changes"),
)

PROMPT_TEMPLATE = """Write a concise, clear commit message for the Git changes below.

Requirements:
1. Write the description in {language}
2. No more than 80 characters
3. Use exactly this format: English type + colon + space + {language} description
{types}
4. Choose the type that best matches the changes
5. The {language} description must be specific and meaningful; use the examples as guidance, do not copy them
6. Return only the commit message itself, nothing else

Git changes:
{diff}

Commit Message:"""

_LEADING_TAG_PATTERN = re.compile(r"^([A-Za-z]+):")


def collect_diff_summary(
    git_client: GitClientPort,
    workspace: Path,
    *,
    cancellation: CancellationToken | None = None,
) -> str:
    """Combine porcelain status with the staged name-status diff.

    The unstaged diff stands in when nothing is staged.
    """
    status = git_client.status_porcelain(workspace, cancellation=cancellation)
    changes = git_client.diff_name_status(workspace, staged=True, cancellation=cancellation)
    if not changes.strip():
        changes = git_client.diff_name_status(workspace, staged=False, cancellation=cancellation)
    return f"Status:\n{status}\n\nChanged files:\n{changes}"


def build_prompt(language: str, diff_summary: str, commit_types: tuple[CommitType, ...] = COMMIT_TYPES) -> str:
    types_list = "\n".join(f"   - {commit_type.tag}: {commit_type.example}" for commit_type in commit_types)
    return (
        PROMPT_TEMPLATE.replace("{language}", language)
        .replace("{types}", types_list)
        .replace("{diff}", diff_summary)
    )


def decorate_commit_message(message: str, commit_types: tuple[CommitType, ...] = COMMIT_TYPES) -> str:
    """Prefix `Tag: text` with the tag's emoji; leave anything unrecognized untouched."""
    match = _LEADING_TAG_PATTERN.match(message)
    if not match:
        return message

    tag = match.group(1).lower()
    for commit_type in commit_types:
        if commit_type.tag.lower() == tag:
            return f"{commit_type.emoji} {message}"
    return message
