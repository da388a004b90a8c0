"""Configuration helpers for Prompt Partner.

Updates: v0.1.1 - 2026-10-16 - Expose preview defaults alongside the settings loader.
Updates: v0.1.0 - 2026-10-10 - Package scaffold.
"""

from .settings import (
    CONFIG_JSON_ENV,
    DEFAULT_API_URL,
    DEFAULT_EXPANDED_STATE_KEY,
    DEFAULT_PREVIEW_LINES,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    DEFAULT_TAG_PREVIEW_CHARS,
    PromptPartnerSettings,
    SettingsError,
    load_settings,
)

__all__ = [
    "CONFIG_JSON_ENV",
    "DEFAULT_API_URL",
    "DEFAULT_EXPANDED_STATE_KEY",
    "DEFAULT_PREVIEW_LINES",
    "DEFAULT_REQUEST_TIMEOUT_SECONDS",
    "DEFAULT_TAG_PREVIEW_CHARS",
    "PromptPartnerSettings",
    "SettingsError",
    "load_settings",
]
