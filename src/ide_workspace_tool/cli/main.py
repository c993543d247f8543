from __future__ import annotations

import argparse
import logging
import os
from typing import Sequence

from ide_workspace_tool.actions import build_default_actions
from ide_workspace_tool.adapters.cache_storage.json_file_storage import JsonFileCacheStorage
from ide_workspace_tool.adapters.filesystem.local_filesystem import LocalFileSystemAdapter
from ide_workspace_tool.adapters.git_client.shell_git_client import ShellGitClientAdapter
from ide_workspace_tool.adapters.launcher.shell_launcher import ShellApplicationLauncher
from ide_workspace_tool.adapters.text_generation.openai_compatible import OpenAICompatibleTextGenerator
from ide_workspace_tool.adapters.workspace_resolvers.factory import (
    SUPPORTED_APPS,
    ResolverFactory,
    build_resolver_factory,
)
from ide_workspace_tool.application.services.workspace_cache import WorkspaceCache
from ide_workspace_tool.application.use_cases.check_workspaces import CheckWorkspaces, WorkspaceGitState
from ide_workspace_tool.application.use_cases.workspace_plugin import WorkspacePlugin
from ide_workspace_tool.cli.config import AppConfig, load_config
from ide_workspace_tool.domain.actions import ActionRegistry
from ide_workspace_tool.domain.cancellation import CancellationToken
from ide_workspace_tool.domain.entities import ActionDescriptor, ActionResult, ExecuteRequest
from ide_workspace_tool.logging_utils import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ide-workspace",
        description="List and run contextual actions for the workspace open in your IDE.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List actions available for an IDE's workspace.")
    list_parser.add_argument(
        "--app",
        required=False,
        help="Overlaid application id (e.g. com.microsoft.VSCode). Falls back to IDE_WORKSPACE_APP.",
    )
    list_parser.add_argument("--keyword", required=False, help="Only show actions whose description contains this.")

    exec_parser = subparsers.add_parser("exec", help="Execute an action against the cached workspace.")
    exec_parser.add_argument("action_id", help="Action id printed by the list command.")
    exec_parser.add_argument("--keyword", required=False, help="Keyword the action was listed with.")

    subparsers.add_parser("check-workspace", help="Detect IDE workspaces and report their git state.")

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = load_config(args=args, env=os.environ)
    except ValueError as error:
        parser.error(str(error))

    configure_logging(config.log_level, config.log_file)
    logger = logging.getLogger(__name__)
    logger.info(
        "cli configuration resolved",
        extra={
            "event": "cli.config.resolved",
            "command": config.command,
            "app_id": config.app_id,
            "cache_dir": str(config.cache_dir),
            "git_timeout_seconds": config.git_timeout_seconds,
            "action_deadline_seconds": config.action_deadline_seconds,
            "ai_enabled": config.ai_api_key is not None,
        },
    )

    git_client = ShellGitClientAdapter(
        git_executable=config.git_executable,
        timeout_seconds=config.git_timeout_seconds,
    )
    resolver_factory = build_resolver_factory()

    if config.command == "check-workspace":
        checker = CheckWorkspaces(resolver_factory=resolver_factory, git_client=git_client)
        _print_workspace_states(checker.execute([product.display_name for product in SUPPORTED_APPS]))
        return 0

    plugin = _build_plugin(config, git_client, resolver_factory)

    if config.command == "list":
        _print_descriptors(plugin.list_actions(config.app_id or "", config.keyword))
        return 0

    cancellation = CancellationToken(config.action_deadline_seconds)
    request = ExecuteRequest(
        action_id=config.action_id or "",
        keyword=config.keyword or "",
        text_generator=_build_text_generator(config, cancellation),
        cancellation=cancellation,
    )
    result = plugin.execute_action(request)
    _print_result(result)
    return 0 if result.success else 1


def _build_plugin(
    config: AppConfig,
    git_client: ShellGitClientAdapter,
    resolver_factory: ResolverFactory,
) -> WorkspacePlugin:
    filesystem = LocalFileSystemAdapter()
    registry = ActionRegistry(
        build_default_actions(
            git_client=git_client,
            filesystem=filesystem,
            launcher=ShellApplicationLauncher(),
        )
    )
    cache = WorkspaceCache(JsonFileCacheStorage(config.cache_dir), filesystem)
    return WorkspacePlugin(registry=registry, cache=cache, resolver_factory=resolver_factory)


def _build_text_generator(
    config: AppConfig,
    cancellation: CancellationToken | None = None,
) -> OpenAICompatibleTextGenerator | None:
    if not config.ai_api_key:
        return None
    return OpenAICompatibleTextGenerator(
        api_key=config.ai_api_key,
        model=config.ai_model,
        api_base_url=config.ai_api_base_url,
        timeout_seconds=config.ai_timeout_seconds,
        cancellation=cancellation,
    )


def _print_descriptors(descriptors: list[ActionDescriptor]) -> None:
    if not descriptors:
        print("No actions available")
        return
    for descriptor in descriptors:
        icon = f"{descriptor.icon} " if descriptor.icon else ""
        print(f"{descriptor.id}\t{icon}{descriptor.description}")


def _print_result(result: ActionResult) -> None:
    status = "ok" if result.success else "failed"
    print(f"[{status}] {result.action_id}: {result.message}")


def _print_workspace_states(states: list[WorkspaceGitState]) -> None:
    if not states:
        print("No IDE workspace detected")
        return
    for state in states:
        print(f"{state.ide_name}: {state.workspace}")
        if not state.is_repository:
            print("  not a git repository")
            continue
        print(f"  uncommitted changes: {'yes' if state.has_changes else 'no'}")
        print(f"  branch: {state.branch or 'unknown'}")
        print(f"  remote: {state.remote_url or 'not set'}")
