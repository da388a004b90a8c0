"""Tests for prompt payload parsing and draft validation.

Updates:
  v0.1.1 - 2026-10-15 - Cover SQLite timestamps and null tags.
  v0.1.0 - 2026-10-09 - Cover Prompt payload helpers.
"""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from models.prompt_model import Prompt, PromptDraft, split_tags


def test_from_payload_accepts_sqlite_timestamp_and_null_tags() -> None:
    prompt = Prompt.from_payload(
        {
            "id": "12",
            "name": "Coding Guide",
            "content": "Write clean code",
            "tags": None,
            "created_at": "2026-10-01 09:30:00",
        }
    )

    assert prompt.id == 12
    assert prompt.tags == ""
    assert prompt.created_at == datetime(2026, 10, 1, 9, 30, tzinfo=UTC)


def test_from_payload_keeps_unparseable_timestamp_as_none() -> None:
    prompt = Prompt.from_payload({"id": 1, "name": "A", "content": "", "created_at": "soon"})

    assert prompt.created_at is None


def test_from_payload_keeps_non_numeric_ids() -> None:
    prompt = Prompt.from_payload({"id": " abc-1 ", "name": "A", "content": "body"})

    assert prompt.id == "abc-1"


@pytest.mark.parametrize(
    "payload",
    [
        {"id": 1, "name": "  ", "content": "body"},
        {"id": None, "name": "A", "content": "body"},
        {"id": True, "name": "A", "content": "body"},
    ],
)
def test_from_payload_rejects_malformed_records(payload: dict[str, object]) -> None:
    with pytest.raises(ValueError):
        Prompt.from_payload(payload)


def test_to_payload_serialises_timestamp() -> None:
    created = datetime(2026, 10, 1, 9, 30, tzinfo=UTC)
    prompt = Prompt(id=1, name="A", content="body", tags="x", created_at=created)

    assert prompt.to_payload() == {
        "id": 1,
        "name": "A",
        "content": "body",
        "tags": "x",
        "created_at": "2026-10-01T09:30:00+00:00",
    }


def test_tag_list_splits_and_trims() -> None:
    prompt = Prompt(id=1, name="A", content="body", tags=" coding , python,, ")

    assert prompt.tag_list == ["coding", "python"]
    assert split_tags(None) == []


def test_draft_validation_requires_content_then_name() -> None:
    with pytest.raises(ValueError, match="content"):
        PromptDraft(name="", content=" ").validate()
    with pytest.raises(ValueError, match="name"):
        PromptDraft(name=" ", content="body").validate()
    PromptDraft(name="Valid", content="body").validate()


def test_draft_to_prompt() -> None:
    draft = PromptDraft(name="New", content="Body", tags="t")

    assert draft.to_payload() == {"name": "New", "content": "Body", "tags": "t"}
    assert draft.to_prompt(5) == Prompt(id=5, name="New", content="Body", tags="t")
