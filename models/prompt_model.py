"""Prompt data model definitions.

Updates:
  v0.2.1 - 2026-10-15 - Tolerate SQLite-style timestamps and null tags in REST payloads.
  v0.2.0 - 2026-10-13 - Add PromptDraft validation for create/update requests.
  v0.1.0 - 2026-10-09 - Initial Prompt schema with REST payload helpers.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping

PromptId = int | str

_SQLITE_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def _coerce_prompt_id(value: Any) -> PromptId:
    """Return *value* as an int when it looks numeric, else as a trimmed string."""
    if isinstance(value, bool) or value is None:
        raise ValueError("Prompt payload is missing a usable 'id'.")
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if not text:
        raise ValueError("Prompt payload is missing a usable 'id'.")
    try:
        return int(text)
    except ValueError:
        return text


def _parse_timestamp(value: Any) -> datetime | None:
    """Parse ISO-8601 or SQLite timestamps; unparseable values become ``None``."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=UTC)
    text = str(value).strip()
    if not text:
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        try:
            parsed = datetime.strptime(text, _SQLITE_TIMESTAMP_FORMAT)
        except ValueError:
            return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


def split_tags(tags: str | None) -> list[str]:
    """Return the individual, trimmed tags contained in a comma-separated string."""
    if not tags:
        return []
    return [part.strip() for part in tags.split(",") if part.strip()]


@dataclass(frozen=True, slots=True)
class Prompt:
    """Immutable snapshot of a stored prompt."""
    id: PromptId
    name: str
    content: str
    tags: str = ""
    created_at: datetime | None = None

    @property
    def tag_list(self) -> list[str]:
        """Return the individual tags of this prompt."""
        return split_tags(self.tags)

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON payload shape used by the prompt REST API."""
        return {
            "id": self.id,
            "name": self.name,
            "content": self.content,
            "tags": self.tags,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> Prompt:
        """Create a Prompt from a REST payload, raising ``ValueError`` when malformed."""
        name = data.get("name")
        if name is None or not str(name).strip():
            raise ValueError("Prompt payload requires a non-empty 'name' field.")
        return cls(
            id=_coerce_prompt_id(data.get("id")),
            name=str(name),
            content=str(data.get("content") or ""),
            tags=str(data.get("tags") or ""),
            created_at=_parse_timestamp(data.get("created_at")),
        )


@dataclass(frozen=True, slots=True)
class PromptDraft:
    """User supplied fields for creating or replacing a prompt."""
    name: str
    content: str
    tags: str = ""

    def validate(self) -> None:
        """Raise ``ValueError`` when the draft cannot be sent to the store."""
        if not (self.content or "").strip():
            raise ValueError("Prompt content is required.")
        if not (self.name or "").strip():
            raise ValueError("Prompt name is required.")

    def to_payload(self) -> dict[str, str]:
        """Return the request body for create/update calls."""
        return {"name": self.name, "content": self.content, "tags": self.tags or ""}

    def to_prompt(
        self,
        prompt_id: PromptId,
        *,
        created_at: datetime | None = None,
    ) -> Prompt:
        """Materialise the draft as a stored prompt with *prompt_id*."""
        return Prompt(
            id=prompt_id,
            name=self.name,
            content=self.content,
            tags=self.tags or "",
            created_at=created_at,
        )


__all__ = ["Prompt", "PromptDraft", "PromptId", "split_tags"]
