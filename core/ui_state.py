"""Durable key-value ports used to persist UI presentation state.

The desktop client persists per-session preferences through ``QSettings``;
headless runs and the CLI use a small JSON file instead. Both satisfy the
:class:`KeyValueStore` protocol so state objects never touch a global store.

Updates:
  v0.1.3 - 2026-10-18 - Treat undecodable state files as unreadable.
  v0.1.2 - 2026-10-15 - Replace JSON state files atomically.
  v0.1.1 - 2026-10-13 - Add QSettings adapter mirroring the layout preference helpers.
  v0.1.0 - 2026-10-11 - Introduce KeyValueStore protocol with JSON and memory backends.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol, cast, runtime_checkable

from .exceptions import StateStorageError

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from PySide6.QtCore import QSettings
else:  # pragma: no cover - runtime placeholders for type-only imports
    QSettings = Any

logger = logging.getLogger(__name__)

__all__ = [
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "MemoryKeyValueStore",
    "QSettingsKeyValueStore",
]


@runtime_checkable
class KeyValueStore(Protocol):
    """Minimal string key/value persistence contract."""

    def get(self, key: str) -> str | None:
        """Return the stored value for *key* or ``None`` when absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Durably store *value* under *key* before returning."""
        ...


class MemoryKeyValueStore:
    """Process-local store used by tests and ephemeral sessions."""

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        """Optionally seed the store with *initial* values."""
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        """Return the value stored for *key*."""
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        """Store *value* for *key*."""
        self._values[key] = value


class JsonFileKeyValueStore:
    """Persist string values inside a single JSON object file."""

    def __init__(self, path: Path | str) -> None:
        """Bind the store to *path*; the file is created on first write."""
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        """Return the backing file path."""
        return self._path

    def get(self, key: str) -> str | None:
        """Return the value stored for *key*, raising StateStorageError on unreadable files."""
        value = self._read_all().get(key)
        if value is None:
            return None
        return str(value)

    def set(self, key: str, value: str) -> None:
        """Write *value* for *key*, replacing the file atomically."""
        try:
            data = self._read_all()
        except StateStorageError:
            logger.warning("Discarding unreadable UI state file %s", self._path)
            data = {}
        data[key] = value
        payload = json.dumps(data, indent=2, ensure_ascii=False)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                dir=self._path.parent,
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(payload)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StateStorageError(f"Unable to write UI state file: {self._path}") from exc

    def _read_all(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            contents = self._path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise StateStorageError(f"Unable to read UI state file: {self._path}") from exc
        if not contents.strip():
            return {}
        try:
            parsed = json.loads(contents)
        except json.JSONDecodeError as exc:
            raise StateStorageError(f"Invalid JSON in UI state file: {self._path}") from exc
        if not isinstance(parsed, Mapping):
            raise StateStorageError(f"UI state file {self._path} must contain a JSON object")
        mapping = cast("Mapping[object, Any]", parsed)
        return {str(key): value for key, value in mapping.items()}


class QSettingsKeyValueStore:
    """Adapter storing values in a Qt ``QSettings`` handle."""

    def __init__(self, settings: QSettings) -> None:
        """Wrap an existing QSettings instance."""
        self._settings = settings

    def get(self, key: str) -> str | None:
        """Return the stored string for *key*."""
        try:
            raw_value = self._settings.value(key, None)
        except Exception as exc:  # pragma: no cover - platform specific
            raise StateStorageError(f"Unable to read setting '{key}'") from exc
        if raw_value is None:
            return None
        return str(raw_value)

    def set(self, key: str, value: str) -> None:
        """Store *value* and flush it to the platform backend."""
        self._settings.setValue(key, value)
        try:
            self._settings.sync()
        except Exception as exc:  # pragma: no cover - platform specific
            raise StateStorageError(f"Unable to sync setting '{key}'") from exc
