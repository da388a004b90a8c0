"""Data models for Prompt Partner.

Updates: v0.2.0 - 2026-10-13 - Export PromptDraft alongside Prompt.
Updates: v0.1.0 - 2026-10-09 - Export Prompt dataclass.
"""

from .prompt_model import Prompt, PromptDraft, PromptId, split_tags

__all__ = [
    "Prompt",
    "PromptDraft",
    "PromptId",
    "split_tags",
]
