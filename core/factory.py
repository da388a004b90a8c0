"""Factories for constructing PromptWorkspace instances from validated settings.

Updates:
  v0.1.2 - 2026-10-18 - Pass the clipboard hold window to the Qt adapter.
  v0.1.1 - 2026-10-16 - Allow callers to inject store, state, and clipboard collaborators.
  v0.1.0 - 2026-10-15 - Introduce build_workspace for the CLI and desktop bootstrap.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .clipboard import QtClipboard
from .expand_state import ExpandCollapseStore
from .store import HttpPromptStore
from .ui_state import JsonFileKeyValueStore
from .workspace import PromptWorkspace

if TYPE_CHECKING:  # pragma: no cover - typing only
    from config import PromptPartnerSettings

    from .clipboard import Clipboard
    from .store import PromptStore
    from .ui_state import KeyValueStore
else:  # pragma: no cover - typing only
    PromptPartnerSettings = Any

factory_logger = logging.getLogger("prompt_partner.factory")

__all__ = ["build_workspace"]


def build_workspace(
    settings: PromptPartnerSettings,
    *,
    store: PromptStore | None = None,
    kv_store: KeyValueStore | None = None,
    clipboard: Clipboard | None = None,
) -> PromptWorkspace:
    """Return a workspace wired from *settings* and any supplied collaborators."""
    if store is None:
        store = HttpPromptStore(
            base_url=settings.api_url,
            timeout=settings.request_timeout_seconds,
        )
        factory_logger.debug("Using HTTP prompt store at %s", settings.api_url)
    if kv_store is None:
        kv_store = JsonFileKeyValueStore(settings.ui_state_path)
        factory_logger.debug("Persisting UI state to %s", settings.ui_state_path)
    expand_state = ExpandCollapseStore(kv_store, key=settings.expanded_state_key)
    if clipboard is None:
        clipboard = QtClipboard(hold_seconds=settings.clipboard_hold_seconds)
    return PromptWorkspace(
        store,
        expand_state,
        clipboard,
        preview_lines=settings.preview_lines,
        tag_preview_chars=settings.tag_preview_chars,
    )
