"""Printable summaries for Prompt Partner configuration.

Updates:
  v0.1.1 - 2026-10-18 - Show the clipboard ownership hold window.
  v0.1.0 - 2026-10-15 - Settings summary rendering for --print-settings.
"""

from __future__ import annotations

import os

from config import CONFIG_JSON_ENV, PromptPartnerSettings

from .utils import describe_path


def print_settings_summary(settings: PromptPartnerSettings) -> None:
    """Emit a readable summary of configuration values."""
    config_source = os.getenv(CONFIG_JSON_ENV) or "config/config.json (optional)"
    ui_state_desc = describe_path(
        settings.ui_state_path,
        expect_directory=False,
        allow_missing_file=True,
    )
    lines = [
        "Prompt Partner configuration summary",
        "------------------------------------",
        f"Configuration file: {config_source}",
        f"Prompt API URL: {settings.api_url}",
        f"Request timeout (seconds): {settings.request_timeout_seconds:g}",
        "",
        "Presentation state",
        "------------------",
        f"UI state file: {ui_state_desc}",
        f"Expanded state key: {settings.expanded_state_key}",
        f"Collapsed preview lines: {settings.preview_lines}",
        f"Collapsed tag preview characters: {settings.tag_preview_chars}",
        "",
        "Clipboard",
        "---------",
        f"Ownership hold (seconds): {settings.clipboard_hold_seconds:g}",
    ]
    print("\n".join(lines))
