"""Runtime boot helpers for Prompt Partner CLI.

Updates:
  v0.1.2 - 2026-10-18 - Leave Qt start-up to the clipboard adapter.
  v0.1.1 - 2026-10-16 - Start a QGuiApplication on demand for clipboard export.
  v0.1.0 - 2026-10-15 - Logging configuration helper for the CLI entry point.
"""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path

DEFAULT_LOGGING_CONFIG = Path("config/logging.conf")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(logging_conf_path: Path | None) -> None:
    """Configure logging using *logging_conf_path* when available."""
    path = logging_conf_path or DEFAULT_LOGGING_CONFIG
    if path.exists():
        try:
            logging.config.fileConfig(path, disable_existing_loggers=False)
            return
        except (OSError, KeyError, ValueError, RuntimeError) as exc:
            logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
            logging.getLogger("prompt_partner.runtime").warning(
                "Invalid logging configuration %s: %s", path, exc
            )
            return
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)

