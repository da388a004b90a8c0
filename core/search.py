"""Free-text prompt filtering by name and tags.

Matching is a plain case-insensitive substring test against either the prompt
name or the raw comma-separated tags string. The query is never trimmed,
tokenised, or folded; a blank query leaves the collection untouched.

Updates:
  v0.1.1 - 2026-10-12 - Treat whitespace-only queries as empty.
  v0.1.0 - 2026-10-10 - Extract name/tag filtering from the prompt list view.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from models.prompt_model import Prompt

__all__ = ["filter_prompts", "is_blank_query", "prompt_matches"]


def is_blank_query(query: str | None) -> bool:
    """Return True when *query* should not filter anything."""
    return not query or not query.strip()


def prompt_matches(prompt: Prompt, query: str) -> bool:
    """Return True when *query* is a substring of the prompt name or tags string."""
    if is_blank_query(query):
        return True
    needle = query.lower()
    return needle in prompt.name.lower() or needle in (prompt.tags or "").lower()


def filter_prompts(prompts: Sequence[Prompt], query: str | None) -> list[Prompt]:
    """Return the prompts matching *query*, preserving their original order."""
    if query is None or is_blank_query(query):
        return list(prompts)
    return [prompt for prompt in prompts if prompt_matches(prompt, query)]
