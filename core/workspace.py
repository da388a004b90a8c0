"""Session state tying prompt search, selection, expand state, and composition together.

The workspace is the single state object a prompt list view renders from. It
owns a snapshot of the store's prompts, the current search query, the
selection, the expand/collapse store, and the master prompt composer. Store
and clipboard failures are absorbed into status fields so a view never has to
handle exceptions.

Updates:
  v0.2.2 - 2026-10-18 - Keep the creation timestamp when an update response omits it.
  v0.2.1 - 2026-10-17 - Keep the search query across refreshes and additions.
  v0.2.0 - 2026-10-16 - Separate load errors from empty collections via ListStatus.
  v0.1.1 - 2026-10-15 - Prune selection and expand entries after refresh.
  v0.1.0 - 2026-10-14 - Introduce PromptWorkspace.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING

from .composer import MasterPromptComposer
from .exceptions import (
    EmptyMasterPromptError,
    MasterPromptExportError,
    PromptStoreError,
    PromptValidationError,
)
from .expand_state import (
    DEFAULT_PREVIEW_LINES,
    DEFAULT_TAG_PREVIEW_CHARS,
    build_prompt_preview,
)
from .search import filter_prompts
from .selection import SelectionTracker

if TYPE_CHECKING:
    from models.prompt_model import Prompt, PromptDraft, PromptId

    from .clipboard import Clipboard
    from .expand_state import ExpandCollapseStore, PromptPreview
    from .store import PromptStore

logger = logging.getLogger(__name__)

EMPTY_LIST_MESSAGE = "No prompts found. Add a new prompt."
COPY_SUCCESS_MESSAGE = "Master prompt copied to clipboard."

__all__ = [
    "COPY_SUCCESS_MESSAGE",
    "EMPTY_LIST_MESSAGE",
    "ExportResult",
    "ListStatus",
    "PromptWorkspace",
]


class ListStatus(Enum):
    """What the prompt list currently displays."""

    READY = "ready"
    EMPTY = "empty"
    ERROR = "error"


@dataclass(slots=True)
class ExportResult:
    """Outcome of a master prompt clipboard export."""

    success: bool
    message: str


class PromptWorkspace:
    """Explicit state for one prompt browsing and composition session."""

    def __init__(
        self,
        store: PromptStore,
        expand_state: ExpandCollapseStore,
        clipboard: Clipboard,
        *,
        preview_lines: int = DEFAULT_PREVIEW_LINES,
        tag_preview_chars: int = DEFAULT_TAG_PREVIEW_CHARS,
    ) -> None:
        self._store = store
        self._expand_state = expand_state
        self._composer = MasterPromptComposer(clipboard)
        self._selection = SelectionTracker()
        self._preview_lines = preview_lines
        self._tag_preview_chars = tag_preview_chars
        self.prompts: list[Prompt] = []
        self.query = ""
        self.load_error: str | None = None
        self.last_error: str | None = None

    # ------------------------------------------------------------------
    # Collaborators
    # ------------------------------------------------------------------
    @property
    def store(self) -> PromptStore:
        return self._store

    @property
    def selection(self) -> SelectionTracker:
        return self._selection

    @property
    def expand_state(self) -> ExpandCollapseStore:
        return self._expand_state

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------
    def set_query(self, query: str) -> None:
        """Replace the search query; it is stored exactly as typed."""
        self.query = query

    def clear_query(self) -> None:
        self.query = ""

    def visible_prompts(self) -> list[Prompt]:
        """Return the prompts matching the current query."""
        return filter_prompts(self.prompts, self.query)

    def list_status(self) -> ListStatus:
        """Return whether the list is populated, empty, or failed to load."""
        if self.load_error is not None:
            return ListStatus.ERROR
        if not self.visible_prompts():
            return ListStatus.EMPTY
        return ListStatus.READY

    @property
    def empty_message(self) -> str | None:
        """Return the placeholder text shown instead of the list, if any."""
        if self.list_status() is ListStatus.READY:
            return None
        return EMPTY_LIST_MESSAGE

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------
    def toggle_selection(self, prompt_id: PromptId) -> bool:
        return self._selection.toggle(prompt_id)

    def clear_selection(self) -> None:
        self._selection.clear()

    def is_selected(self, prompt_id: PromptId) -> bool:
        return self._selection.is_selected(prompt_id)

    @property
    def has_selection(self) -> bool:
        """Return True when the clear-selection action should be offered."""
        return len(self._selection) > 0

    # ------------------------------------------------------------------
    # Expand / collapse
    # ------------------------------------------------------------------
    def toggle_expanded(self, prompt_id: PromptId) -> bool:
        return self._expand_state.toggle(prompt_id)

    def collapse_all(self) -> None:
        self._expand_state.collapse_all()

    def is_expanded(self, prompt_id: PromptId) -> bool:
        return self._expand_state.is_expanded(prompt_id)

    def previews(self) -> list[PromptPreview]:
        """Return presentation rows for the visible prompts."""
        return [
            build_prompt_preview(
                prompt,
                expanded=self._expand_state.is_expanded(prompt.id),
                preview_lines=self._preview_lines,
                tag_preview_chars=self._tag_preview_chars,
            )
            for prompt in self.visible_prompts()
        ]

    # ------------------------------------------------------------------
    # Composition
    # ------------------------------------------------------------------
    @property
    def master_prompt(self) -> str:
        """Return the composed content of the selected prompts."""
        return self._composer.compose(self.prompts, self._selection)

    @property
    def can_copy(self) -> bool:
        return bool(self.master_prompt)

    async def copy_master_prompt(self) -> ExportResult:
        """Export the master prompt and report the outcome."""
        try:
            await self._composer.export_to_clipboard(self.master_prompt)
        except EmptyMasterPromptError as exc:
            logger.warning("Master prompt export skipped: %s", exc)
            return ExportResult(success=False, message=str(exc))
        except MasterPromptExportError as exc:
            logger.warning("Master prompt export failed: %s", exc, exc_info=True)
            return ExportResult(success=False, message=str(exc))
        return ExportResult(success=True, message=COPY_SUCCESS_MESSAGE)

    # ------------------------------------------------------------------
    # Store operations
    # ------------------------------------------------------------------
    async def refresh(self) -> bool:
        """Reload prompts from the store; return False when the load failed."""
        try:
            prompts = await self._store.list_prompts()
        except PromptStoreError as exc:
            logger.warning("Unable to load prompts: %s", exc)
            self.prompts = []
            self.load_error = str(exc)
            return False
        self.prompts = list(prompts)
        self.load_error = None
        known_ids = [prompt.id for prompt in self.prompts]
        stale = self._selection.prune(known_ids)
        if stale:
            logger.debug("Dropped stale selection ids %s", stale)
        self._expand_state.prune(known_ids)
        return True

    async def add_prompt(self, draft: PromptDraft) -> Prompt | None:
        """Create a prompt; return None and record ``last_error`` when rejected."""
        try:
            prompt = await self._store.create_prompt(draft)
        except (PromptValidationError, PromptStoreError) as exc:
            self._record_failure("create", exc)
            return None
        self.last_error = None
        self.prompts.append(prompt)
        return prompt

    async def update_prompt(self, prompt_id: PromptId, draft: PromptDraft) -> Prompt | None:
        """Replace a prompt; return None and record ``last_error`` when rejected."""
        try:
            prompt = await self._store.update_prompt(prompt_id, draft)
        except (PromptValidationError, PromptStoreError) as exc:
            self._record_failure("update", exc)
            return None
        self.last_error = None
        existing = next((item for item in self.prompts if item.id == prompt_id), None)
        if prompt.created_at is None and existing is not None:
            prompt = replace(prompt, created_at=existing.created_at)
        self.prompts = [prompt if item.id == prompt_id else item for item in self.prompts]
        return prompt

    async def delete_prompt(self, prompt_id: PromptId) -> bool:
        """Delete a prompt and drop it from the selection."""
        try:
            await self._store.delete_prompt(prompt_id)
        except PromptStoreError as exc:
            self._record_failure("delete", exc)
            return False
        self.last_error = None
        self.prompts = [item for item in self.prompts if item.id != prompt_id]
        if self._selection.is_selected(prompt_id):
            self._selection.toggle(prompt_id)
        return True

    def _record_failure(self, action: str, exc: Exception) -> None:
        self.last_error = str(exc)
        if isinstance(exc, PromptValidationError):
            logger.info("Prompt %s rejected: %s", action, exc)
        else:
            logger.warning("Prompt %s failed: %s", action, exc)
