"""Core service layer for Prompt Partner.

Updates:
  v0.3.1 - 2026-10-18 - Export the preview token estimate.
  v0.3.0 - 2026-10-16 - Export PromptWorkspace and the build_workspace factory.
  v0.2.0 - 2026-10-14 - Export expand state, clipboard, and master prompt composer APIs.
  v0.1.0 - 2026-10-10 - Surface prompt search, selection, and store collaborators.
"""

from .clipboard import Clipboard, MemoryClipboard, QtClipboard
from .composer import MASTER_PROMPT_SEPARATOR, MasterPromptComposer, compose_master_prompt
from .exceptions import (
    ClipboardError,
    EmptyMasterPromptError,
    MasterPromptExportError,
    PromptNotFoundError,
    PromptPartnerError,
    PromptStoreError,
    PromptValidationError,
    StateStorageError,
)
from .expand_state import (
    DEFAULT_EXPANDED_STATE_KEY,
    ExpandCollapseStore,
    PromptPreview,
    build_prompt_preview,
    estimate_token_count,
)
from .factory import build_workspace
from .search import filter_prompts, is_blank_query, prompt_matches
from .selection import SelectionTracker
from .store import HttpPromptStore, InMemoryPromptStore, PromptStore
from .ui_state import (
    JsonFileKeyValueStore,
    KeyValueStore,
    MemoryKeyValueStore,
    QSettingsKeyValueStore,
)
from .workspace import EMPTY_LIST_MESSAGE, ExportResult, ListStatus, PromptWorkspace

__all__ = [
    "Clipboard",
    "ClipboardError",
    "DEFAULT_EXPANDED_STATE_KEY",
    "EMPTY_LIST_MESSAGE",
    "EmptyMasterPromptError",
    "ExpandCollapseStore",
    "ExportResult",
    "HttpPromptStore",
    "InMemoryPromptStore",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "ListStatus",
    "MASTER_PROMPT_SEPARATOR",
    "MasterPromptComposer",
    "MasterPromptExportError",
    "MemoryClipboard",
    "MemoryKeyValueStore",
    "PromptNotFoundError",
    "PromptPartnerError",
    "PromptPreview",
    "PromptStore",
    "PromptStoreError",
    "PromptValidationError",
    "PromptWorkspace",
    "QSettingsKeyValueStore",
    "QtClipboard",
    "SelectionTracker",
    "StateStorageError",
    "build_prompt_preview",
    "build_workspace",
    "compose_master_prompt",
    "estimate_token_count",
    "filter_prompts",
    "is_blank_query",
    "prompt_matches",
]
