"""Tests for the prompt workspace session state.

Updates:
  v0.1.3 - 2026-10-18 - Cover update responses without a creation timestamp.
  v0.1.2 - 2026-10-17 - Cover query persistence across additions.
  v0.1.1 - 2026-10-16 - Cover load error versus empty list status.
  v0.1.0 - 2026-10-14 - Cover selection, expand state, and master prompt export.
"""

from __future__ import annotations

import json
import logging

import pytest
from pytest import LogCaptureFixture

from core.clipboard import MemoryClipboard
from core.exceptions import PromptStoreError
from core.expand_state import DEFAULT_EXPANDED_STATE_KEY, ExpandCollapseStore
from core.store import InMemoryPromptStore
from core.ui_state import MemoryKeyValueStore
from core.workspace import (
    COPY_SUCCESS_MESSAGE,
    EMPTY_LIST_MESSAGE,
    ListStatus,
    PromptWorkspace,
)
from models.prompt_model import Prompt, PromptDraft, PromptId


class _UnavailableStore(InMemoryPromptStore):
    """Prompt store that fails every request like an unreachable server."""

    async def list_prompts(self) -> list[Prompt]:
        raise PromptStoreError("Prompt store request failed with HTTP 500")

    async def create_prompt(self, draft: PromptDraft) -> Prompt:
        raise PromptStoreError("Prompt store request failed with HTTP 500")


class _StatusOnlyUpdateStore(InMemoryPromptStore):
    """Store whose update answers carry no creation timestamp."""

    async def update_prompt(self, prompt_id: PromptId, draft: PromptDraft) -> Prompt:
        await super().update_prompt(prompt_id, draft)
        return draft.to_prompt(prompt_id)


class _FailingClipboard:
    async def write_text(self, text: str) -> None:
        raise OSError("clipboard busy")


def _workspace(
    prompts: list[Prompt] | None = None,
    *,
    store: InMemoryPromptStore | None = None,
    kv_store: MemoryKeyValueStore | None = None,
    clipboard: object | None = None,
) -> PromptWorkspace:
    return PromptWorkspace(
        store if store is not None else InMemoryPromptStore(prompts or []),
        ExpandCollapseStore(kv_store if kv_store is not None else MemoryKeyValueStore()),
        clipboard if clipboard is not None else MemoryClipboard(),  # type: ignore[arg-type]
    )


@pytest.mark.asyncio()
async def test_refresh_loads_prompts(sample_prompts: list[Prompt]) -> None:
    workspace = _workspace(sample_prompts)

    assert await workspace.refresh() is True

    assert workspace.prompts == sample_prompts
    assert workspace.list_status() is ListStatus.READY
    assert workspace.empty_message is None


@pytest.mark.asyncio()
async def test_query_filters_visible_prompts(sample_prompts: list[Prompt]) -> None:
    workspace = _workspace(sample_prompts)
    await workspace.refresh()

    workspace.set_query("python")
    assert [prompt.id for prompt in workspace.visible_prompts()] == [1, 3]

    workspace.set_query("no such prompt")
    assert workspace.list_status() is ListStatus.EMPTY
    assert workspace.empty_message == EMPTY_LIST_MESSAGE

    workspace.clear_query()
    assert workspace.visible_prompts() == sample_prompts


@pytest.mark.asyncio()
async def test_failed_refresh_is_distinguished_from_empty(caplog: LogCaptureFixture) -> None:
    workspace = _workspace(store=_UnavailableStore())

    with caplog.at_level(logging.WARNING, logger="core.workspace"):
        assert await workspace.refresh() is False

    assert workspace.prompts == []
    assert workspace.load_error is not None
    assert workspace.list_status() is ListStatus.ERROR
    assert workspace.empty_message == EMPTY_LIST_MESSAGE
    assert "Unable to load prompts" in caplog.text


@pytest.mark.asyncio()
async def test_empty_store_reports_empty_status() -> None:
    workspace = _workspace([])

    await workspace.refresh()

    assert workspace.load_error is None
    assert workspace.list_status() is ListStatus.EMPTY


@pytest.mark.asyncio()
async def test_master_prompt_follows_selection(sample_prompts: list[Prompt]) -> None:
    workspace = _workspace(sample_prompts)
    await workspace.refresh()

    assert workspace.can_copy is False
    workspace.toggle_selection(1)
    workspace.toggle_selection(3)

    assert workspace.has_selection
    assert workspace.master_prompt == "Write clean code\n\nUse list comprehensions"
    assert workspace.can_copy is True

    workspace.clear_selection()
    assert workspace.master_prompt == ""
    assert not workspace.has_selection


@pytest.mark.asyncio()
async def test_copy_master_prompt_success(sample_prompts: list[Prompt]) -> None:
    clipboard = MemoryClipboard()
    workspace = _workspace(sample_prompts, clipboard=clipboard)
    await workspace.refresh()
    workspace.toggle_selection(2)

    result = await workspace.copy_master_prompt()

    assert result.success is True
    assert result.message == COPY_SUCCESS_MESSAGE
    assert clipboard.text == "Write a story"


@pytest.mark.asyncio()
async def test_copy_with_empty_selection_reports_failure(sample_prompts: list[Prompt]) -> None:
    clipboard = MemoryClipboard()
    workspace = _workspace(sample_prompts, clipboard=clipboard)
    await workspace.refresh()

    result = await workspace.copy_master_prompt()

    assert result.success is False
    assert clipboard.writes == 0


@pytest.mark.asyncio()
async def test_clipboard_failure_reports_failure_and_keeps_selection(
    sample_prompts: list[Prompt],
    caplog: LogCaptureFixture,
) -> None:
    workspace = _workspace(sample_prompts, clipboard=_FailingClipboard())
    await workspace.refresh()
    workspace.toggle_selection(1)

    with caplog.at_level(logging.WARNING, logger="core.workspace"):
        result = await workspace.copy_master_prompt()

    assert result.success is False
    assert "Failed to copy" in result.message
    assert workspace.is_selected(1)
    assert "Master prompt export failed" in caplog.text


@pytest.mark.asyncio()
async def test_add_prompt_keeps_query(sample_prompts: list[Prompt]) -> None:
    workspace = _workspace(sample_prompts)
    await workspace.refresh()
    workspace.set_query("python")

    added = await workspace.add_prompt(PromptDraft(name="Shell Tricks", content="Use xargs"))

    assert added is not None
    assert added in workspace.prompts
    assert added not in workspace.visible_prompts()
    assert workspace.query == "python"

    matching = await workspace.add_prompt(
        PromptDraft(name="Typing", content="Annotate", tags="python")
    )
    assert matching in workspace.visible_prompts()


@pytest.mark.asyncio()
async def test_add_prompt_without_content_is_blocked() -> None:
    workspace = _workspace([])

    result = await workspace.add_prompt(PromptDraft(name="Invalid Prompt", content=""))

    assert result is None
    assert workspace.last_error == "Prompt content is required."
    assert workspace.prompts == []


@pytest.mark.asyncio()
async def test_add_prompt_store_failure_records_error() -> None:
    workspace = _workspace(store=_UnavailableStore())

    result = await workspace.add_prompt(PromptDraft(name="Name", content="Body"))

    assert result is None
    assert workspace.last_error is not None


@pytest.mark.asyncio()
async def test_update_prompt_replaces_snapshot_entry(sample_prompts: list[Prompt]) -> None:
    workspace = _workspace(sample_prompts)
    await workspace.refresh()

    updated = await workspace.update_prompt(2, PromptDraft(name="Story Starter", content="Once"))

    assert updated is not None
    assert [prompt.name for prompt in workspace.prompts] == [
        "Coding Guide",
        "Story Starter",
        "Python Tips",
    ]
    assert await workspace.update_prompt(99, PromptDraft(name="x", content="y")) is None
    assert workspace.last_error is not None


@pytest.mark.asyncio()
async def test_update_keeps_created_at_missing_from_response(sample_prompts: list[Prompt]) -> None:
    workspace = _workspace(store=_StatusOnlyUpdateStore(sample_prompts))
    await workspace.refresh()

    updated = await workspace.update_prompt(3, PromptDraft(name="Python Idioms", content="Zen"))

    assert updated is not None
    assert updated.created_at == sample_prompts[2].created_at
    assert workspace.prompts[2].created_at == sample_prompts[2].created_at
    assert workspace.prompts[2].name == "Python Idioms"
    workspace.toggle_expanded(3)
    assert workspace.previews()[2].created_at == sample_prompts[2].created_at


@pytest.mark.asyncio()
async def test_delete_prompt_drops_selection(sample_prompts: list[Prompt]) -> None:
    workspace = _workspace(sample_prompts)
    await workspace.refresh()
    workspace.toggle_selection(1)
    workspace.toggle_selection(2)

    assert await workspace.delete_prompt(1) is True

    assert not workspace.is_selected(1)
    assert workspace.selection.ids == (2,)
    assert [prompt.id for prompt in workspace.prompts] == [2, 3]
    assert await workspace.delete_prompt(1) is False


@pytest.mark.asyncio()
async def test_refresh_prunes_stale_selection_and_expand_state(
    sample_prompts: list[Prompt],
) -> None:
    kv_store = MemoryKeyValueStore({DEFAULT_EXPANDED_STATE_KEY: '{"1": true, "8": true}'})
    store = InMemoryPromptStore(sample_prompts)
    workspace = _workspace(store=store, kv_store=kv_store)
    workspace.toggle_selection(8)
    workspace.toggle_selection(1)

    await workspace.refresh()

    assert workspace.selection.ids == (1,)
    raw_state = kv_store.get(DEFAULT_EXPANDED_STATE_KEY)
    assert raw_state is not None
    assert json.loads(raw_state) == {"1": True}


@pytest.mark.asyncio()
async def test_previews_follow_expand_state(sample_prompts: list[Prompt]) -> None:
    workspace = _workspace(sample_prompts)
    await workspace.refresh()

    assert workspace.toggle_expanded(3) is True
    previews = {preview.prompt_id: preview for preview in workspace.previews()}

    assert previews[3].expanded is True
    assert previews[3].created_at is not None
    assert previews[1].expanded is False
    assert previews[1].created_at is None

    workspace.collapse_all()
    assert not workspace.is_expanded(3)


@pytest.mark.asyncio()
async def test_expand_state_does_not_affect_composition(sample_prompts: list[Prompt]) -> None:
    workspace = _workspace(sample_prompts)
    await workspace.refresh()
    workspace.toggle_selection(2)
    before = workspace.master_prompt

    workspace.toggle_expanded(2)

    assert workspace.master_prompt == before
    assert workspace.selection.ids == (2,)
