"""Application entry point for Prompt Partner.

Updates:
  v0.2.0 - 2026-10-16 - Default to the list command when no subcommand is given.
  v0.1.1 - 2026-10-16 - Modularise CLI parsing, commands, and settings summary helpers.
  v0.1.0 - 2026-10-15 - Wire settings, workspace factory, and CLI commands.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cli.commands import COMMAND_SPECS
from cli.parser import parse_args
from cli.runtime import setup_logging
from cli.settings_summary import print_settings_summary
from config import SettingsError, load_settings
from core import PromptPartnerError, build_workspace

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from collections.abc import Sequence

    from config import PromptPartnerSettings
    from core.workspace import PromptWorkspace

DEFAULT_COMMAND = "list"


def _initialise_workspace(
    settings: PromptPartnerSettings,
    logger: logging.Logger,
) -> PromptWorkspace | None:
    try:
        return build_workspace(settings)
    except (PromptPartnerError, ValueError, OSError) as exc:
        logger.error("Failed to initialise workspace: %s", exc)
        return None


def main(argv: Sequence[str] | None = None) -> int:
    """Entrypoint that wires settings, the workspace, and CLI commands."""
    args = parse_args(argv)
    setup_logging(args.logging_config)

    logger = logging.getLogger("prompt_partner.main")
    try:
        settings = load_settings()
    except SettingsError as exc:
        cause = exc.__cause__
        logger.error("Failed to load settings: %s%s", exc, f" ({cause})" if cause else "")
        return 2

    if args.print_settings:
        print_settings_summary(settings)
        return 0

    command = getattr(args, "command", None) or DEFAULT_COMMAND
    spec = COMMAND_SPECS[command]
    if command == DEFAULT_COMMAND and not hasattr(args, "query"):
        args.query = ""
        args.expanded = False

    workspace = None
    if spec.requires_workspace:
        workspace = _initialise_workspace(settings, logger)
        if workspace is None:
            return 3
    return spec.handler(workspace, args, logger)


if __name__ == "__main__":
    raise SystemExit(main())
