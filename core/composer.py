"""Master prompt composition and clipboard export.

The master prompt is the content of every selected prompt, in selection
order, joined by one blank line. Ids that no longer resolve to a prompt are
skipped without error.

Updates:
  v0.1.1 - 2026-10-15 - Chain clipboard failures into ClipboardError.
  v0.1.0 - 2026-10-14 - Introduce compose_master_prompt and MasterPromptComposer.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .exceptions import ClipboardError, EmptyMasterPromptError

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from models.prompt_model import Prompt, PromptId

    from .clipboard import Clipboard

logger = logging.getLogger(__name__)

MASTER_PROMPT_SEPARATOR = "\n\n"

__all__ = ["MASTER_PROMPT_SEPARATOR", "MasterPromptComposer", "compose_master_prompt"]


def compose_master_prompt(prompts: Sequence[Prompt], selection: Iterable[PromptId]) -> str:
    """Return the selected prompts' content joined in selection order."""
    by_id = {prompt.id: prompt for prompt in prompts}
    parts: list[str] = []
    for prompt_id in selection:
        prompt = by_id.get(prompt_id)
        if prompt is None:
            logger.debug("Skipping stale selection id %s", prompt_id)
            continue
        parts.append(prompt.content)
    return MASTER_PROMPT_SEPARATOR.join(parts)


class MasterPromptComposer:
    """Compose master prompts and export them through a clipboard."""

    def __init__(self, clipboard: Clipboard) -> None:
        self._clipboard = clipboard

    def compose(self, prompts: Sequence[Prompt], selection: Iterable[PromptId]) -> str:
        """Return the master prompt for *selection* over *prompts*."""
        return compose_master_prompt(prompts, selection)

    async def export_to_clipboard(self, text: str) -> None:
        """Copy *text* to the clipboard.

        Raises:
            EmptyMasterPromptError: *text* is empty; the clipboard is not touched.
            ClipboardError: the clipboard write failed.
        """
        if not text:
            raise EmptyMasterPromptError("Nothing to copy: select at least one prompt.")
        try:
            await self._clipboard.write_text(text)
        except ClipboardError:
            raise
        except Exception as exc:  # noqa: BLE001 - clipboard backends raise arbitrary errors
            raise ClipboardError("Failed to copy master prompt to the clipboard.") from exc
        logger.debug("Copied master prompt (%d characters) to the clipboard", len(text))
