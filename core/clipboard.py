"""Clipboard boundary for master prompt export.

Updates:
  v0.2.0 - 2026-10-18 - Start Qt on demand, refuse headless platforms, hold X11/Wayland selections.
  v0.1.1 - 2026-10-15 - Verify Qt clipboard writes by reading the text back.
  v0.1.0 - 2026-10-14 - Introduce Clipboard protocol and Qt-backed adapter.
"""

from __future__ import annotations

import asyncio
import logging
import os
import sys
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from .exceptions import ClipboardError

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

DEFAULT_CLIPBOARD_HOLD_SECONDS = 10.0
_PLATFORM_ENV_VARS = ("QT_QPA_PLATFORM", "WAYLAND_DISPLAY", "DISPLAY")
# Platforms where the clipboard content lives in the owning process.
_SELECTION_PLATFORMS = frozenset({"xcb", "wayland"})
_HOLD_POLL_SECONDS = 0.05

_qt_application: Any = None

__all__ = [
    "DEFAULT_CLIPBOARD_HOLD_SECONDS",
    "Clipboard",
    "MemoryClipboard",
    "QtClipboard",
]


@runtime_checkable
class Clipboard(Protocol):
    """Asynchronous text clipboard."""

    async def write_text(self, text: str) -> None:
        """Place *text* on the clipboard, raising on failure."""
        ...


class MemoryClipboard:
    """Clipboard that keeps the last written text in memory."""

    def __init__(self) -> None:
        self.text: str | None = None
        self.writes = 0

    async def write_text(self, text: str) -> None:
        """Remember *text* as the clipboard contents."""
        self.text = text
        self.writes += 1


def _qt_platform_available() -> bool:
    """Return False on Linux when neither a display server nor a QPA platform is set."""
    if not sys.platform.startswith("linux"):
        return True
    return any(os.environ.get(name, "").strip() for name in _PLATFORM_ENV_VARS)


def _default_qt_clipboard() -> Any:
    global _qt_application

    # Qt aborts the process when it cannot load a platform plugin.
    if not _qt_platform_available():
        raise ClipboardError("Clipboard unavailable: no display server is configured.")
    try:
        from PySide6.QtGui import QGuiApplication
    except ImportError as exc:
        raise ClipboardError("Clipboard unavailable: PySide6 is not installed.") from exc

    if QGuiApplication.instance() is None:
        _qt_application = QGuiApplication([sys.argv[0] if sys.argv else "prompt-partner"])
        logger.debug("Started Qt application on platform %s", QGuiApplication.platformName())
    clipboard = QGuiApplication.clipboard()
    if clipboard is None:  # pragma: no cover - platform specific
        raise ClipboardError("Clipboard unavailable on this platform.")
    return clipboard


def _qt_platform_name() -> str:
    from PySide6.QtGui import QGuiApplication

    return QGuiApplication.platformName()


def _process_qt_events() -> None:
    from PySide6.QtCore import QCoreApplication

    QCoreApplication.processEvents()


class QtClipboard:
    """Write text through ``QGuiApplication.clipboard()``.

    Qt's clipboard API is synchronous and reports nothing on failure, so the
    text is read back after ``setText`` and a mismatch is treated as a failed
    write. A ``QGuiApplication`` is started when none is running.

    On X11 and Wayland the writing process owns the clipboard content. With a
    positive *hold_seconds* the adapter keeps serving Qt events until another
    client (usually a clipboard manager) takes ownership, and raises
    :class:`ClipboardError` when nobody does before the deadline. Short-lived
    processes such as the CLI need this; a running desktop client passes 0.
    """

    def __init__(
        self,
        clipboard_supplier: Callable[[], Any] | None = None,
        *,
        hold_seconds: float = 0.0,
        platform_name: Callable[[], str] | None = None,
        process_events: Callable[[], None] | None = None,
    ) -> None:
        """Use *clipboard_supplier* to obtain the Qt clipboard handle when given."""
        self._clipboard_supplier = clipboard_supplier or _default_qt_clipboard
        self._hold_seconds = max(hold_seconds, 0.0)
        self._platform_name = platform_name or _qt_platform_name
        self._process_events = process_events or _process_qt_events

    @property
    def hold_seconds(self) -> float:
        return self._hold_seconds

    async def write_text(self, text: str) -> None:
        """Write *text* and confirm the platform clipboard now holds it."""
        try:
            clipboard = self._clipboard_supplier()
            clipboard.setText(text)
            written = clipboard.text()
        except ClipboardError:
            raise
        except Exception as exc:  # noqa: BLE001 - Qt raises platform-specific errors
            raise ClipboardError("Clipboard write failed.") from exc
        if written != text:
            logger.warning("Clipboard read-back did not match the written text")
            raise ClipboardError("Clipboard did not accept the master prompt.")
        if self._hold_seconds > 0:
            await self._hold_until_released(clipboard)

    async def _hold_until_released(self, clipboard: Any) -> None:
        try:
            platform = self._platform_name()
        except Exception as exc:  # noqa: BLE001 - Qt raises platform-specific errors
            raise ClipboardError("Clipboard platform could not be determined.") from exc
        if platform not in _SELECTION_PLATFORMS:
            return
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self._hold_seconds
        logger.debug("Holding %s clipboard ownership for up to %.1fs", platform, self._hold_seconds)
        while clipboard.ownsClipboard():
            if loop.time() >= deadline:
                raise ClipboardError(
                    "No clipboard manager took over the master prompt; "
                    "it is lost when this process exits."
                )
            self._process_events()
            await asyncio.sleep(_HOLD_POLL_SECONDS)
        logger.debug("Clipboard ownership passed to another client")
