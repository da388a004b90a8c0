"""Argument parser for Prompt Partner CLI.

Updates:
  v0.2.0 - 2026-10-16 - Add expand and collapse-all commands.
  v0.1.0 - 2026-10-15 - Introduce list, add, update, delete, and compose commands.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from models.prompt_model import PromptId


def prompt_id_arg(value: str) -> PromptId:
    """Parse a prompt identifier, preferring integers as issued by the REST API."""
    text = value.strip()
    if not text:
        raise argparse.ArgumentTypeError("prompt id must not be empty")
    try:
        return int(text)
    except ValueError:
        return text


def _add_draft_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--name", required=True, help="Prompt display name.")
    parser.add_argument("--content", required=True, help="Prompt text.")
    parser.add_argument(
        "--tags",
        default="",
        help="Comma-separated tags (e.g. 'coding, python').",
    )


def build_parser() -> argparse.ArgumentParser:
    """Return the configured argument parser."""
    parser = argparse.ArgumentParser(description="Prompt Partner command line")
    parser.add_argument(
        "--logging-config",
        type=Path,
        default=None,
        help="Path to logging configuration file (INI format)",
    )
    parser.add_argument(
        "--print-settings",
        action="store_true",
        help="Print resolved settings and exit",
    )

    subparsers = parser.add_subparsers(dest="command")

    list_parser = subparsers.add_parser("list", help="List prompts, optionally filtered.")
    list_parser.add_argument(
        "--query",
        default="",
        help="Case-insensitive text matched against prompt names and tags.",
    )
    list_parser.add_argument(
        "--expanded",
        action="store_true",
        help="Show every prompt expanded regardless of its saved state.",
    )

    add_parser = subparsers.add_parser("add", help="Create a new prompt.")
    _add_draft_arguments(add_parser)

    update_parser = subparsers.add_parser("update", help="Replace an existing prompt.")
    update_parser.add_argument("prompt_id", type=prompt_id_arg, help="Prompt id to update.")
    _add_draft_arguments(update_parser)

    delete_parser = subparsers.add_parser("delete", help="Delete a prompt.")
    delete_parser.add_argument("prompt_id", type=prompt_id_arg, help="Prompt id to delete.")

    compose_parser = subparsers.add_parser(
        "compose",
        help="Compose the given prompts, in order, into a master prompt.",
    )
    compose_parser.add_argument(
        "prompt_ids",
        nargs="+",
        type=prompt_id_arg,
        help="Prompt ids in selection order.",
    )
    compose_parser.add_argument(
        "--copy",
        action="store_true",
        help="Copy the master prompt to the system clipboard.",
    )

    expand_parser = subparsers.add_parser(
        "expand",
        help="Toggle the saved expanded state of a prompt.",
    )
    expand_parser.add_argument("prompt_id", type=prompt_id_arg, help="Prompt id to toggle.")

    subparsers.add_parser("collapse-all", help="Collapse every prompt.")

    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Return parsed CLI arguments for the Prompt Partner launcher."""
    return build_parser().parse_args(argv)
