"""Common exception classes for the core package.

All exceptions ultimately inherit from :class:`PromptPartnerError`, allowing
callers to catch a single base class for any workspace failure while still
distinguishing input errors, store failures, and clipboard export failures.

Pure computations (filtering, selection toggles, composition) never raise;
only the effectful boundaries below have an error channel.

Updates:
  v0.3.0 - 2026-10-14 - Add master prompt export exception hierarchy.
  v0.2.0 - 2026-10-12 - Add StateStorageError for the key-value UI state port.
  v0.1.0 - 2026-10-09 - Created module with prompt store and validation errors.
"""

from __future__ import annotations


class PromptPartnerError(Exception):
    """Base exception for Prompt Partner failures."""


class PromptValidationError(PromptPartnerError, ValueError):
    """Raised when a create/update request is rejected before reaching the store."""


# ---------------------------------------------------------------------------
# Prompt store collaborator errors
# ---------------------------------------------------------------------------


class PromptStoreError(PromptPartnerError):
    """Raised when the prompt store cannot list, create, update, or delete prompts."""


class PromptNotFoundError(PromptStoreError):
    """Raised when the prompt store reports that a prompt does not exist."""


# ---------------------------------------------------------------------------
# Durable UI state
# ---------------------------------------------------------------------------


class StateStorageError(PromptPartnerError):
    """Raised when the durable key-value store cannot be read or written."""


# ---------------------------------------------------------------------------
# Master prompt export
# ---------------------------------------------------------------------------


class MasterPromptExportError(PromptPartnerError):
    """Base class for master prompt clipboard export failures."""


class EmptyMasterPromptError(MasterPromptExportError):
    """Raised when an export is requested for an empty master prompt."""


class ClipboardError(MasterPromptExportError):
    """Raised when the system clipboard rejects or fails a write."""


__all__ = [
    "ClipboardError",
    "EmptyMasterPromptError",
    "MasterPromptExportError",
    "PromptNotFoundError",
    "PromptPartnerError",
    "PromptStoreError",
    "PromptValidationError",
    "StateStorageError",
]
