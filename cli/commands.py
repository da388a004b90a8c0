"""CLI command handlers for Prompt Partner.

Updates:
  v0.2.1 - 2026-10-18 - Let the clipboard adapter own Qt start-up for compose --copy.
  v0.2.0 - 2026-10-16 - Add expand and collapse-all handlers backed by persisted state.
  v0.1.1 - 2026-10-16 - Report clipboard failures with a dedicated exit code.
  v0.1.0 - 2026-10-15 - Introduce list, add, update, delete, and compose handlers.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from core import build_prompt_preview
from models.prompt_model import PromptDraft

from .utils import format_preview, print_and_log

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from core.workspace import PromptWorkspace
else:  # pragma: no cover - runtime placeholders for type-only imports
    PromptWorkspace = Any

CommandHandler = Callable[[PromptWorkspace | None, argparse.Namespace, logging.Logger], int]

EXIT_OK = 0
EXIT_COMMAND_ERROR = 5
EXIT_CLIPBOARD_ERROR = 6


@dataclass(frozen=True)
class CommandSpec:
    """Metadata for dispatching CLI command handlers."""

    handler: CommandHandler
    requires_workspace: bool = True


def _require_workspace(workspace: PromptWorkspace | None) -> PromptWorkspace:
    if workspace is None:
        raise ValueError("A prompt workspace is required for this command.")
    return workspace


def _draft_from_args(args: argparse.Namespace) -> PromptDraft:
    return PromptDraft(
        name=getattr(args, "name", "") or "",
        content=getattr(args, "content", "") or "",
        tags=getattr(args, "tags", "") or "",
    )


def _report_load_failure(workspace: PromptWorkspace, logger: logging.Logger) -> int:
    print(workspace.empty_message)
    logger.error("Unable to load prompts: %s", workspace.load_error)
    print(f"Error: {workspace.load_error}", file=sys.stderr)
    return EXIT_COMMAND_ERROR


def run_list(
    workspace: PromptWorkspace | None,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    workspace = _require_workspace(workspace)
    if not asyncio.run(workspace.refresh()):
        return _report_load_failure(workspace, logger)
    workspace.set_query(getattr(args, "query", "") or "")
    if getattr(args, "expanded", False):
        previews = [
            build_prompt_preview(prompt, expanded=True) for prompt in workspace.visible_prompts()
        ]
    else:
        previews = workspace.previews()
    if not previews:
        print(workspace.empty_message)
        return EXIT_OK
    print("\n\n".join(format_preview(preview) for preview in previews))
    return EXIT_OK


def run_add(
    workspace: PromptWorkspace | None,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    workspace = _require_workspace(workspace)
    prompt = asyncio.run(workspace.add_prompt(_draft_from_args(args)))
    if prompt is None:
        print_and_log(logger, logging.ERROR, f"Failed to add prompt: {workspace.last_error}")
        return EXIT_COMMAND_ERROR
    print_and_log(logger, logging.INFO, f"Added prompt {prompt.id}: {prompt.name}")
    return EXIT_OK


def run_update(
    workspace: PromptWorkspace | None,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    workspace = _require_workspace(workspace)
    prompt = asyncio.run(workspace.update_prompt(args.prompt_id, _draft_from_args(args)))
    if prompt is None:
        print_and_log(
            logger,
            logging.ERROR,
            f"Failed to update prompt {args.prompt_id}: {workspace.last_error}",
        )
        return EXIT_COMMAND_ERROR
    print_and_log(logger, logging.INFO, f"Updated prompt {prompt.id}: {prompt.name}")
    return EXIT_OK


def run_delete(
    workspace: PromptWorkspace | None,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    workspace = _require_workspace(workspace)
    if not asyncio.run(workspace.delete_prompt(args.prompt_id)):
        print_and_log(
            logger,
            logging.ERROR,
            f"Failed to delete prompt {args.prompt_id}: {workspace.last_error}",
        )
        return EXIT_COMMAND_ERROR
    print_and_log(logger, logging.INFO, f"Deleted prompt {args.prompt_id}")
    return EXIT_OK


def run_compose(
    workspace: PromptWorkspace | None,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    workspace = _require_workspace(workspace)
    if not asyncio.run(workspace.refresh()):
        return _report_load_failure(workspace, logger)
    workspace.clear_selection()
    for prompt_id in args.prompt_ids:
        if not workspace.is_selected(prompt_id):
            workspace.toggle_selection(prompt_id)
    known_ids = {prompt.id for prompt in workspace.prompts}
    missing = [str(prompt_id) for prompt_id in args.prompt_ids if prompt_id not in known_ids]
    if missing:
        logger.warning("Skipping unknown prompt id(s): %s", ", ".join(missing))
    master_prompt = workspace.master_prompt
    if not master_prompt:
        print_and_log(logger, logging.ERROR, "No matching prompts selected; nothing to compose.")
        return EXIT_COMMAND_ERROR
    print(master_prompt)
    if not getattr(args, "copy", False):
        return EXIT_OK
    result = asyncio.run(workspace.copy_master_prompt())
    if not result.success:
        print_and_log(logger, logging.ERROR, result.message)
        return EXIT_CLIPBOARD_ERROR
    print_and_log(logger, logging.INFO, result.message)
    return EXIT_OK


def run_expand(
    workspace: PromptWorkspace | None,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    workspace = _require_workspace(workspace)
    expanded = workspace.toggle_expanded(args.prompt_id)
    state = "expanded" if expanded else "collapsed"
    print_and_log(logger, logging.INFO, f"Prompt {args.prompt_id} {state}")
    return EXIT_OK


def run_collapse_all(
    workspace: PromptWorkspace | None,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    del args
    workspace = _require_workspace(workspace)
    workspace.collapse_all()
    print_and_log(logger, logging.INFO, "All prompts collapsed")
    return EXIT_OK


COMMAND_SPECS: dict[str | None, CommandSpec] = {
    "list": CommandSpec(run_list),
    "add": CommandSpec(run_add),
    "update": CommandSpec(run_update),
    "delete": CommandSpec(run_delete),
    "compose": CommandSpec(run_compose),
    "expand": CommandSpec(run_expand),
    "collapse-all": CommandSpec(run_collapse_all),
}


__all__ = ["COMMAND_SPECS", "CommandSpec"]
