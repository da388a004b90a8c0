"""Prompt store collaborators: the REST API client and an in-memory store.

Updates:
  v0.2.1 - 2026-10-16 - Complete id-only create responses from the submitted draft.
  v0.2.0 - 2026-10-13 - Validate drafts before any network request.
  v0.1.1 - 2026-10-12 - Map 404 responses to PromptNotFoundError.
  v0.1.0 - 2026-10-10 - Introduce PromptStore protocol with HTTPX and in-memory backends.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import httpx

from models.prompt_model import Prompt

from .exceptions import PromptNotFoundError, PromptStoreError, PromptValidationError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from models.prompt_model import PromptDraft, PromptId

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:5001"
DEFAULT_TIMEOUT_SECONDS = 10.0

__all__ = [
    "DEFAULT_API_URL",
    "DEFAULT_TIMEOUT_SECONDS",
    "HttpPromptStore",
    "InMemoryPromptStore",
    "PromptStore",
]


@runtime_checkable
class PromptStore(Protocol):
    """Asynchronous CRUD interface over stored prompts."""

    async def list_prompts(self) -> list[Prompt]:
        """Return every stored prompt."""
        ...

    async def create_prompt(self, draft: PromptDraft) -> Prompt:
        """Persist *draft* and return the stored prompt."""
        ...

    async def update_prompt(self, prompt_id: PromptId, draft: PromptDraft) -> Prompt:
        """Replace the prompt identified by *prompt_id* with *draft*."""
        ...

    async def delete_prompt(self, prompt_id: PromptId) -> None:
        """Remove the prompt identified by *prompt_id*."""
        ...


def _validate_draft(draft: PromptDraft) -> None:
    try:
        draft.validate()
    except ValueError as exc:
        raise PromptValidationError(str(exc)) from exc


def _prompt_from_payload(payload: Any) -> Prompt:
    if not isinstance(payload, dict):
        raise PromptStoreError("Prompt store returned an unexpected payload.")
    try:
        return Prompt.from_payload(payload)
    except ValueError as exc:
        raise PromptStoreError(f"Prompt store returned an invalid prompt: {exc}") from exc


@dataclass(slots=True)
class HttpPromptStore:
    """HTTPX-backed client for the prompt REST API."""

    base_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    client_factory: Callable[[], httpx.AsyncClient] | None = None

    def __post_init__(self) -> None:
        """Normalise the base URL."""
        cleaned = (self.base_url or "").strip().rstrip("/")
        if not cleaned:
            raise ValueError("Prompt store base URL is required")
        self.base_url = cleaned

    async def list_prompts(self) -> list[Prompt]:
        """Fetch every prompt with ``GET /prompts``."""
        data = await self._request("GET", "/prompts")
        if not isinstance(data, list):
            raise PromptStoreError("Prompt store returned a non-list prompt collection.")
        prompts: list[Prompt] = []
        for entry in data:
            prompts.append(_prompt_from_payload(entry))
        logger.debug("Fetched %d prompts from %s", len(prompts), self.base_url)
        return prompts

    async def create_prompt(self, draft: PromptDraft) -> Prompt:
        """Create a prompt with ``POST /prompts``."""
        _validate_draft(draft)
        data = await self._request("POST", "/prompts", json=draft.to_payload())
        if isinstance(data, dict) and "id" in data and "name" not in data:
            # The reference server only echoes the new id.
            try:
                return Prompt.from_payload({**draft.to_payload(), "id": data["id"]})
            except ValueError as exc:
                raise PromptStoreError(f"Prompt store returned an invalid id: {exc}") from exc
        return _prompt_from_payload(data)

    async def update_prompt(self, prompt_id: PromptId, draft: PromptDraft) -> Prompt:
        """Replace a prompt with ``PUT /prompts/{id}``."""
        _validate_draft(draft)
        data = await self._request("PUT", f"/prompts/{prompt_id}", json=draft.to_payload())
        if isinstance(data, dict) and "name" not in data:
            return draft.to_prompt(prompt_id)
        return _prompt_from_payload(data)

    async def delete_prompt(self, prompt_id: PromptId) -> None:
        """Delete a prompt with ``DELETE /prompts/{id}``."""
        await self._request("DELETE", f"/prompts/{prompt_id}", expect_json=False)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any | None = None,
        expect_json: bool = True,
    ) -> Any:
        manage_client = self.client_factory is None
        if self.client_factory is None:
            client = httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout)
        else:
            client = self.client_factory()
        try:
            response = await client.request(method, path, json=json)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            if status == 404:
                raise PromptNotFoundError(f"Prompt not found: {method} {path}") from exc
            raise PromptStoreError(f"Prompt store request failed with HTTP {status}") from exc
        except httpx.HTTPError as exc:
            raise PromptStoreError(f"Prompt store request failed: {method} {path}") from exc
        finally:
            if manage_client:
                await client.aclose()
        if not expect_json:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise PromptStoreError("Prompt store returned invalid JSON") from exc


class InMemoryPromptStore:
    """Process-local prompt store with sequential integer ids."""

    def __init__(self, prompts: Iterable[Prompt] | None = None) -> None:
        """Seed the store with *prompts* in the given order."""
        self._prompts: dict[PromptId, Prompt] = {}
        for prompt in prompts or ():
            self._prompts[prompt.id] = prompt
        numeric_ids = [prompt_id for prompt_id in self._prompts if isinstance(prompt_id, int)]
        self._next_id = max(numeric_ids, default=0) + 1

    async def list_prompts(self) -> list[Prompt]:
        """Return a snapshot of every stored prompt."""
        return list(self._prompts.values())

    async def create_prompt(self, draft: PromptDraft) -> Prompt:
        """Store *draft* under the next free id."""
        _validate_draft(draft)
        prompt = draft.to_prompt(self._next_id, created_at=datetime.now(UTC))
        self._next_id += 1
        self._prompts[prompt.id] = prompt
        return prompt

    async def update_prompt(self, prompt_id: PromptId, draft: PromptDraft) -> Prompt:
        """Replace the stored prompt, keeping its creation timestamp."""
        _validate_draft(draft)
        existing = self._prompts.get(prompt_id)
        if existing is None:
            raise PromptNotFoundError(f"Prompt not found: {prompt_id}")
        prompt = draft.to_prompt(prompt_id, created_at=existing.created_at)
        self._prompts[prompt_id] = prompt
        return prompt

    async def delete_prompt(self, prompt_id: PromptId) -> None:
        """Remove the stored prompt."""
        if self._prompts.pop(prompt_id, None) is None:
            raise PromptNotFoundError(f"Prompt not found: {prompt_id}")
