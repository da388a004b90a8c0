"""Shared CLI utility functions for Prompt Partner commands.

Updates:
  v0.1.2 - 2026-10-18 - Show the estimated token count in preview headers.
  v0.1.1 - 2026-10-16 - Add prompt preview rendering for the list command.
  v0.1.0 - 2026-10-15 - Stdout logging and path description helpers.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from logging import Logger

    from core.expand_state import PromptPreview
else:  # pragma: no cover - runtime placeholders for type-only imports
    Logger = PromptPreview = Any


def print_and_log(logger: Logger, level: int, message: str) -> None:
    """Log *message* at *level* and mirror it to stdout."""
    logger.log(level, message)
    print(message)


def describe_path(
    path_value: object,
    *,
    expect_directory: bool,
    allow_missing_file: bool = False,
) -> str:
    """Return a human-friendly description of *path_value* suitability."""
    try:
        path = Path(path_value) if path_value is not None else None
    except TypeError:
        path = None
    if path is None:
        return "not set"

    resolved = path.expanduser()
    if resolved.exists():
        if expect_directory and not resolved.is_dir():
            return f"{resolved} (exists but is not a directory)"
        if not expect_directory and resolved.is_dir():
            return f"{resolved} (exists but is a directory)"
        return f"{resolved} (exists)"

    message = f"{resolved} (missing)"
    if not expect_directory and allow_missing_file:
        message = f"{resolved} (missing - created on demand)"
    parent = resolved.parent
    if not parent.exists():
        message += f", parent missing: {parent}"
    return message


def format_preview(preview: PromptPreview) -> str:
    """Return a plain-text block describing *preview*."""
    marker = "-" if preview.expanded else "+"
    lines = [f"[{marker}] {preview.prompt_id}: {preview.name} (~{preview.token_count} tokens)"]
    lines.extend(f"    {line}" for line in preview.content.splitlines() or [""])
    if preview.truncated:
        lines.append("    ...")
    if preview.tags:
        lines.append(f"    Tags: {preview.tags}")
    if preview.created_at is not None:
        lines.append(f"    Created: {preview.created_at.isoformat(sep=' ', timespec='seconds')}")
    return "\n".join(lines)
