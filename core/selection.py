"""Ordered multi-selection of prompt identifiers.

Updates:
  v0.1.1 - 2026-10-13 - Add prune helper for ids of deleted prompts.
  v0.1.0 - 2026-10-10 - Introduce SelectionTracker with toggle/clear semantics.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from models.prompt_model import PromptId

logger = logging.getLogger(__name__)

__all__ = ["SelectionTracker"]


class SelectionTracker:
    """Set of selected prompt ids that remembers insertion order.

    The most recently selected id is always last, which is also the order the
    master prompt is composed in.
    """

    def __init__(self, ids: Iterable[PromptId] | None = None) -> None:
        """Seed the tracker with *ids*, dropping duplicates."""
        self._ids: dict[PromptId, None] = dict.fromkeys(ids or ())

    @property
    def ids(self) -> tuple[PromptId, ...]:
        """Return the selected ids in selection order."""
        return tuple(self._ids)

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self) -> Iterator[PromptId]:
        return iter(tuple(self._ids))

    def __contains__(self, prompt_id: object) -> bool:
        return prompt_id in self._ids

    def __repr__(self) -> str:
        return f"SelectionTracker({list(self._ids)!r})"

    def is_selected(self, prompt_id: PromptId) -> bool:
        """Return True when *prompt_id* is part of the selection."""
        return prompt_id in self._ids

    def toggle(self, prompt_id: PromptId) -> bool:
        """Remove *prompt_id* when selected, otherwise append it; return the new state."""
        if prompt_id in self._ids:
            del self._ids[prompt_id]
            logger.debug("Deselected prompt %s", prompt_id)
            return False
        self._ids[prompt_id] = None
        logger.debug("Selected prompt %s", prompt_id)
        return True

    def clear(self) -> None:
        """Drop every selected id."""
        self._ids.clear()

    def prune(self, known_ids: Iterable[PromptId]) -> list[PromptId]:
        """Forget ids missing from *known_ids* and return the removed ones."""
        known = set(known_ids)
        stale = [prompt_id for prompt_id in self._ids if prompt_id not in known]
        for prompt_id in stale:
            del self._ids[prompt_id]
        return stale
