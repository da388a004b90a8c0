"""Settings management utilities for Prompt Partner configuration.

Updates:
  v0.2.2 - 2026-10-18 - Reuse core defaults and add the clipboard hold setting.
  v0.2.1 - 2026-10-17 - Accept un-prefixed PROMPT_API_URL alias for the REST endpoint.
  v0.2.0 - 2026-10-16 - Add preview sizing and expanded-state key settings.
  v0.1.1 - 2026-10-12 - Validate API URL scheme and request timeout.
  v0.1.0 - 2026-10-10 - Introduce PromptPartnerSettings with JSON file and env sources.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, cast
from urllib.parse import urlparse

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from core.clipboard import DEFAULT_CLIPBOARD_HOLD_SECONDS
from core.expand_state import (
    DEFAULT_EXPANDED_STATE_KEY,
    DEFAULT_PREVIEW_LINES,
    DEFAULT_TAG_PREVIEW_CHARS,
)
from core.store import DEFAULT_API_URL

DEFAULT_REQUEST_TIMEOUT_SECONDS = 10.0
CONFIG_JSON_ENV = "PROMPT_PARTNER_CONFIG_JSON"

_ENV_ALIASES: dict[str, list[str]] = {
    "api_url": ["API_URL", "api_url", "PROMPT_API_URL"],
    "request_timeout_seconds": ["REQUEST_TIMEOUT_SECONDS", "request_timeout_seconds"],
    "ui_state_path": ["UI_STATE_PATH", "ui_state_path"],
    "expanded_state_key": ["EXPANDED_STATE_KEY", "expanded_state_key"],
    "preview_lines": ["PREVIEW_LINES", "preview_lines"],
    "tag_preview_chars": ["TAG_PREVIEW_CHARS", "tag_preview_chars"],
    "clipboard_hold_seconds": ["CLIPBOARD_HOLD_SECONDS", "clipboard_hold_seconds"],
}


class SettingsError(Exception):
    """Raised when Prompt Partner configuration cannot be loaded or validated."""


class PromptPartnerSettings(BaseSettings):
    """Application configuration sourced from environment variables or JSON files."""

    api_url: str = Field(
        default=DEFAULT_API_URL,
        description="Base URL of the prompt REST API.",
    )
    request_timeout_seconds: float = Field(
        default=DEFAULT_REQUEST_TIMEOUT_SECONDS,
        description="Timeout applied to every prompt store request.",
    )
    ui_state_path: Path = Field(
        default=Path("data") / "ui_state.json",
        description="JSON file holding persisted presentation state.",
    )
    expanded_state_key: str = Field(default=DEFAULT_EXPANDED_STATE_KEY)
    preview_lines: int = Field(
        default=DEFAULT_PREVIEW_LINES,
        description="Content lines shown for a collapsed prompt.",
    )
    tag_preview_chars: int = Field(
        default=DEFAULT_TAG_PREVIEW_CHARS,
        description="Characters of the tags string shown for a collapsed prompt.",
    )
    clipboard_hold_seconds: float = Field(
        default=DEFAULT_CLIPBOARD_HOLD_SECONDS,
        description="Seconds a short-lived process keeps serving an X11/Wayland clipboard.",
    )

    model_config = cast(
        "SettingsConfigDict",
        {
            "env_prefix": "PROMPT_PARTNER_",
            "case_sensitive": False,
            "populate_by_name": True,
        },
    )

    @field_validator("api_url", mode="before")
    def _normalise_api_url(cls, value: Any) -> str:
        """Trim whitespace and trailing slashes, requiring an http(s) URL."""
        if value is None:
            raise ValueError("api_url is required")
        cleaned = str(value).strip().rstrip("/")
        parsed = urlparse(cleaned)
        if parsed.scheme not in {"http", "https"} or not parsed.netloc:
            raise ValueError("api_url must be an http(s) URL")
        return cleaned

    @field_validator("request_timeout_seconds")
    def _validate_timeout(cls, value: float) -> float:
        """Ensure the request timeout is positive."""
        if value <= 0:
            raise ValueError("request_timeout_seconds must be greater than zero")
        return value

    @field_validator("ui_state_path", mode="before")
    def _normalise_path(cls, value: Any) -> Path:
        """Expand user-relative paths and coerce values to Path instances."""
        if value is None:
            raise ValueError("a filesystem path is required")
        return Path(str(value)).expanduser().resolve()

    @field_validator("expanded_state_key", mode="before")
    def _strip_key(cls, value: Any) -> str:
        text = str(value or "").strip()
        if not text:
            raise ValueError("expanded_state_key must not be blank")
        return text

    @field_validator("preview_lines")
    def _validate_preview_lines(cls, value: int) -> int:
        if not 1 <= value <= 20:
            raise ValueError("preview_lines must be between 1 and 20")
        return value

    @field_validator("tag_preview_chars")
    def _validate_tag_preview_chars(cls, value: int) -> int:
        if value < 4:
            raise ValueError("tag_preview_chars must be at least 4")
        return value

    @field_validator("clipboard_hold_seconds")
    def _validate_clipboard_hold(cls, value: float) -> float:
        if value < 0:
            raise ValueError("clipboard_hold_seconds must not be negative")
        return value

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
    ]:
        """Define configuration source precedence.

        Order (highest → lowest):
            1. Explicit keyword arguments (e.g. load_settings(api_url="...")).
            2. JSON configuration file.
            3. Environment variables / aliases.
            4. File secrets.
        """

        def env_with_aliases(_: BaseSettings | None = None) -> dict[str, Any]:
            data: dict[str, Any] = {}
            config_dict = cast("dict[str, Any]", cls.model_config)
            prefix = str(config_dict.get("env_prefix", ""))
            for field, keys in _ENV_ALIASES.items():
                for key in keys:
                    candidates = [f"{prefix}{key}", f"{prefix}{key.upper()}"]
                    if key.isupper() and key.startswith("PROMPT_"):
                        candidates.append(key)
                    value = next(
                        (
                            os.environ[candidate].strip()
                            for candidate in candidates
                            if os.environ.get(candidate, "").strip()
                        ),
                        None,
                    )
                    if value is not None:
                        data[field] = value
                        break
            return data

        return (
            init_settings,
            cls._json_config_settings_source(settings_cls),
            cast("PydanticBaseSettingsSource", env_with_aliases),
            file_secret_settings,
        )

    @classmethod
    def _json_config_settings_source(
        cls,
        _: type[BaseSettings],
    ) -> PydanticBaseSettingsSource:
        """Return settings extracted from an optional JSON config file."""

        def _loader(_: BaseSettings | None = None) -> dict[str, Any]:
            explicit_path = os.getenv(CONFIG_JSON_ENV)
            if explicit_path:
                path = Path(explicit_path).expanduser()
                if not path.exists():
                    raise SettingsError(f"Configuration file not found: {path}")
            else:
                path = Path("config") / "config.json"
                if not path.exists():
                    return {}
            try:
                raw_contents = path.read_text(encoding="utf-8")
            except OSError as exc:  # pragma: no cover - filesystem failure is env-specific
                raise SettingsError(f"Unable to read configuration file: {path}") from exc
            try:
                data = json.loads(raw_contents)
            except json.JSONDecodeError as exc:
                raise SettingsError(f"Invalid JSON in configuration file: {path}") from exc
            if not isinstance(data, dict):
                raise SettingsError(f"Configuration file {path} must contain a JSON object")
            mapping_data = cast("Mapping[object, Any]", data)
            data_dict = {str(key): value for key, value in mapping_data.items()}
            unknown = sorted(key for key in data_dict if key not in _ENV_ALIASES)
            if unknown:
                logger.warning(
                    "Ignoring unknown key(s) %s in configuration file %s",
                    ", ".join(unknown),
                    path,
                )
            return {key: value for key, value in data_dict.items() if key in _ENV_ALIASES}

        return cast("PydanticBaseSettingsSource", _loader)


def load_settings(**overrides: Any) -> PromptPartnerSettings:
    """Return validated settings, raising SettingsError on failure."""
    try:
        return PromptPartnerSettings(**overrides)
    except SettingsError:
        raise
    except ValidationError as exc:
        raise SettingsError("Invalid Prompt Partner configuration") from exc


logger = logging.getLogger("prompt_partner.settings")
