"""Per-prompt expand/collapse state with write-through persistence.

Updates:
  v0.2.1 - 2026-10-18 - Attach an approximate token count to every preview.
  v0.2.0 - 2026-10-14 - Add collapsed/expanded preview policy for list renderers.
  v0.1.1 - 2026-10-13 - Prune entries for prompts that no longer exist.
  v0.1.0 - 2026-10-11 - Introduce ExpandCollapseStore backed by a KeyValueStore port.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, cast

from .exceptions import StateStorageError

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime

    from models.prompt_model import Prompt, PromptId

    from .ui_state import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_EXPANDED_STATE_KEY = "promptPartner.expandedStates"
DEFAULT_PREVIEW_LINES = 3
DEFAULT_TAG_PREVIEW_CHARS = 40
_TAG_ELLIPSIS = "..."
_CHARS_PER_TOKEN = 4

__all__ = [
    "DEFAULT_EXPANDED_STATE_KEY",
    "DEFAULT_PREVIEW_LINES",
    "DEFAULT_TAG_PREVIEW_CHARS",
    "ExpandCollapseStore",
    "PromptPreview",
    "build_prompt_preview",
    "estimate_token_count",
]


def _state_key(prompt_id: PromptId | str) -> str:
    """Return the persisted mapping key for *prompt_id*."""
    return str(prompt_id)


class ExpandCollapseStore:
    """Track which prompts are expanded and persist every change immediately.

    Absent entries mean collapsed. When the backing store is unavailable or
    holds a corrupt payload the store starts empty and keeps working in memory.
    """

    def __init__(
        self,
        storage: KeyValueStore,
        *,
        key: str = DEFAULT_EXPANDED_STATE_KEY,
    ) -> None:
        """Bind the store to *storage* and hydrate the persisted mapping."""
        self._storage = storage
        self._key = key
        self._expanded: dict[str, bool] = self._load()

    @property
    def key(self) -> str:
        """Return the namespaced storage key."""
        return self._key

    def is_expanded(self, prompt_id: PromptId) -> bool:
        """Return True when *prompt_id* was explicitly expanded."""
        return self._expanded.get(_state_key(prompt_id), False)

    def toggle(self, prompt_id: PromptId) -> bool:
        """Flip the state for *prompt_id*, persist it, and return the new state."""
        state_key = _state_key(prompt_id)
        expanded = not self._expanded.get(state_key, False)
        if expanded:
            self._expanded[state_key] = True
        else:
            self._expanded.pop(state_key, None)
        self._persist()
        return expanded

    def collapse_all(self) -> None:
        """Collapse every prompt."""
        self._expanded.clear()
        self._persist()

    def expanded_ids(self) -> list[str]:
        """Return the keys of all expanded prompts."""
        return [state_key for state_key, value in self._expanded.items() if value]

    def prune(self, known_ids: Iterable[PromptId]) -> list[str]:
        """Drop entries for prompts missing from *known_ids* and return them."""
        known = {_state_key(prompt_id) for prompt_id in known_ids}
        stale = [state_key for state_key in self._expanded if state_key not in known]
        if not stale:
            return []
        for state_key in stale:
            del self._expanded[state_key]
        self._persist()
        return stale

    def _load(self) -> dict[str, bool]:
        try:
            raw_value = self._storage.get(self._key)
        except StateStorageError:
            logger.warning("Expanded prompt state unavailable; starting collapsed.", exc_info=True)
            return {}
        if raw_value is None:
            return {}
        text = str(raw_value).strip()
        if not text:
            return {}
        try:
            payload = json.loads(text)
        except json.JSONDecodeError:
            logger.warning("Invalid expanded prompt state payload; resetting to collapsed.")
            return {}
        if not isinstance(payload, Mapping):
            logger.warning("Expanded prompt state must be a JSON object; resetting.")
            return {}
        mapping = cast("Mapping[object, object]", payload)
        states: dict[str, bool] = {}
        for raw_key, raw_state in mapping.items():
            if not isinstance(raw_state, bool):
                logger.warning("Ignoring non-boolean expanded state for prompt %s", raw_key)
                continue
            if raw_state:
                states[str(raw_key)] = True
        return states

    def _persist(self) -> None:
        payload = json.dumps(self._expanded, sort_keys=True)
        try:
            self._storage.set(self._key, payload)
        except StateStorageError:
            logger.warning("Unable to persist expanded prompt state", exc_info=True)


@dataclass(frozen=True, slots=True)
class PromptPreview:
    """Presentation snapshot of a prompt for collapsed or expanded rows."""

    prompt_id: PromptId
    name: str
    content: str
    tags: str
    expanded: bool
    truncated: bool = False
    created_at: datetime | None = None
    token_count: int = 0


def estimate_token_count(text: str) -> int:
    """Approximate the LLM token count of *text* at four characters per token."""
    if not text:
        return 0
    return max(1, len(text) // _CHARS_PER_TOKEN)


def _truncate_tags(tags: str, limit: int) -> str:
    if len(tags) <= limit:
        return tags
    cut = tags[: max(limit - len(_TAG_ELLIPSIS), 0)].rstrip(", ")
    return f"{cut}{_TAG_ELLIPSIS}"


def build_prompt_preview(
    prompt: Prompt,
    *,
    expanded: bool,
    preview_lines: int = DEFAULT_PREVIEW_LINES,
    tag_preview_chars: int = DEFAULT_TAG_PREVIEW_CHARS,
) -> PromptPreview:
    """Return the row content a renderer shows for *prompt*.

    Collapsed rows carry the first *preview_lines* lines of content and a tag
    preview capped at *tag_preview_chars* characters. Expanded rows carry the
    full content, the full tags string, and the creation timestamp. Both carry
    the token estimate of the full content.
    """
    tags = prompt.tags or ""
    if expanded:
        return PromptPreview(
            prompt_id=prompt.id,
            name=prompt.name,
            content=prompt.content,
            tags=tags,
            expanded=True,
            created_at=prompt.created_at,
            token_count=estimate_token_count(prompt.content),
        )
    lines = prompt.content.splitlines()
    line_limit = max(preview_lines, 1)
    truncated = len(lines) > line_limit
    content = "\n".join(lines[:line_limit]) if truncated else prompt.content
    return PromptPreview(
        prompt_id=prompt.id,
        name=prompt.name,
        content=content,
        tags=_truncate_tags(tags, max(tag_preview_chars, len(_TAG_ELLIPSIS) + 1)),
        expanded=False,
        truncated=truncated,
        token_count=estimate_token_count(prompt.content),
    )
