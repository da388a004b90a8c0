"""Pytest configuration for shared test fixtures and environment hooks.

Updates:
  v0.2.0 - 2026-10-16 - Add shared prompt fixtures and isolated settings environment.
  v0.1.0 - 2026-10-10 - Force Qt offscreen platform for headless test runs.
"""

from __future__ import annotations

import os
from datetime import UTC, datetime
from typing import Any

import pytest

from models.prompt_model import Prompt

_SETTINGS_ENV_VARS = (
    "PROMPT_PARTNER_CONFIG_JSON",
    "PROMPT_PARTNER_API_URL",
    "PROMPT_PARTNER_REQUEST_TIMEOUT_SECONDS",
    "PROMPT_PARTNER_UI_STATE_PATH",
    "PROMPT_PARTNER_EXPANDED_STATE_KEY",
    "PROMPT_PARTNER_PREVIEW_LINES",
    "PROMPT_PARTNER_TAG_PREVIEW_CHARS",
    "PROMPT_PARTNER_CLIPBOARD_HOLD_SECONDS",
    "PROMPT_API_URL",
)


def pytest_configure(config: Any) -> None:
    """Ensure Qt uses the offscreen platform during tests to avoid GUI aborts."""
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture()
def clean_settings_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove Prompt Partner configuration variables from the environment."""
    for name in _SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def sample_prompts() -> list[Prompt]:
    """Return the prompts used by the search and composition scenarios."""
    created = datetime(2026, 10, 1, 9, 30, tzinfo=UTC)
    return [
        Prompt(
            id=1,
            name="Coding Guide",
            content="Write clean code",
            tags="coding,python",
            created_at=created,
        ),
        Prompt(
            id=2,
            name="Writing Tutorial",
            content="Write a story",
            tags="writing,creative",
            created_at=created,
        ),
        Prompt(
            id=3,
            name="Python Tips",
            content="Use list comprehensions",
            tags="python,tips",
            created_at=created,
        ),
    ]
