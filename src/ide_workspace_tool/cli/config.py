from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from ide_workspace_tool.adapters.cache_storage.json_file_storage import DEFAULT_CACHE_DIR


SUPPORTED_COMMANDS = {"list", "exec", "check-workspace"}


@dataclass(slots=True)
class AppConfig:
    command: str
    app_id: str | None
    keyword: str | None
    action_id: str | None
    cache_dir: Path
    git_executable: str
    git_timeout_seconds: float
    action_deadline_seconds: float | None
    ai_api_base_url: str
    ai_api_key: str | None
    ai_model: str
    ai_timeout_seconds: float
    log_level: str
    log_file: Path | None


def load_config(args, env: Mapping[str, str]) -> AppConfig:
    command = _normalize_empty(args.command)
    app_id = _normalize_empty(getattr(args, "app", None)) or _normalize_empty(env.get("IDE_WORKSPACE_APP"))
    keyword = _normalize_empty(getattr(args, "keyword", None))
    action_id = _normalize_empty(getattr(args, "action_id", None))

    if command not in SUPPORTED_COMMANDS:
        valid = ", ".join(sorted(SUPPORTED_COMMANDS))
        raise ValueError(f"Unsupported command '{command}'. Allowed values: {valid}")

    if command == "list" and not app_id:
        raise ValueError("Missing application id. Use --app or set IDE_WORKSPACE_APP")

    if command == "exec" and not action_id:
        raise ValueError("Missing action id")

    cache_dir_raw = _normalize_empty(env.get("IDE_WORKSPACE_CACHE_DIR"))
    cache_dir = Path(cache_dir_raw).expanduser() if cache_dir_raw else DEFAULT_CACHE_DIR

    git_executable = _normalize_empty(env.get("GIT_EXECUTABLE")) or "git"
    git_timeout_seconds = _parse_positive_float(env.get("GIT_TIMEOUT_SECONDS"), "GIT_TIMEOUT_SECONDS", default=30.0)

    raw_deadline = _normalize_empty(env.get("ACTION_DEADLINE_SECONDS"))
    action_deadline_seconds = (
        _parse_positive_float(raw_deadline, "ACTION_DEADLINE_SECONDS", default=0.0) if raw_deadline else None
    )

    ai_api_base_url = _normalize_empty(env.get("AI_API_BASE_URL")) or "https://api.openai.com/v1"
    ai_api_key = _normalize_empty(env.get("AI_API_KEY"))
    ai_model = _normalize_empty(env.get("AI_MODEL")) or "gpt-4o-mini"
    ai_timeout_seconds = _parse_positive_float(env.get("AI_TIMEOUT_SECONDS"), "AI_TIMEOUT_SECONDS", default=60.0)

    log_level = (_normalize_empty(env.get("LOG_LEVEL")) or "INFO").upper()
    log_file_raw = _normalize_empty(env.get("LOG_FILE"))

    return AppConfig(
        command=command,
        app_id=app_id,
        keyword=keyword,
        action_id=action_id,
        cache_dir=cache_dir,
        git_executable=git_executable,
        git_timeout_seconds=git_timeout_seconds,
        action_deadline_seconds=action_deadline_seconds,
        ai_api_base_url=ai_api_base_url,
        ai_api_key=ai_api_key,
        ai_model=ai_model,
        ai_timeout_seconds=ai_timeout_seconds,
        log_level=log_level,
        log_file=Path(log_file_raw).expanduser() if log_file_raw else None,
    )


def _parse_positive_float(value: str | None, name: str, *, default: float) -> float:
    raw = _normalize_empty(value)
    if raw is None:
        return default
    try:
        parsed = float(raw)
    except ValueError as error:
        raise ValueError(f"{name} must be a number") from error
    if parsed <= 0:
        raise ValueError(f"{name} must be greater than 0")
    return parsed


def _normalize_empty(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None
