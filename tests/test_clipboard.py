"""Tests for the Qt clipboard adapter using fake clipboard handles.

Updates:
  v0.2.0 - 2026-10-18 - Cover headless refusal, missing PySide6, and ownership hold.
  v0.1.0 - 2026-10-15 - Cover read-back verification and supplier failures.
"""

from __future__ import annotations

import sys

import pytest
from pytest import MonkeyPatch

from core.clipboard import Clipboard, MemoryClipboard, QtClipboard
from core.exceptions import ClipboardError


class _FakeQtClipboard:
    def __init__(self, *, drop_writes: bool = False, owned_polls: int = 0) -> None:
        self._text = ""
        self._drop_writes = drop_writes
        self._owned_polls = owned_polls
        self.ownership_checks = 0

    def setText(self, text: str) -> None:  # noqa: N802 - Qt API
        if not self._drop_writes:
            self._text = text

    def text(self) -> str:
        return self._text

    def ownsClipboard(self) -> bool:  # noqa: N802 - Qt API
        self.ownership_checks += 1
        return self._owned_polls < 0 or self.ownership_checks <= self._owned_polls


class _EventPump:
    def __init__(self) -> None:
        self.calls = 0

    def __call__(self) -> None:
        self.calls += 1


def _headless_linux(monkeypatch: MonkeyPatch) -> None:
    monkeypatch.setattr(sys, "platform", "linux")
    for name in ("QT_QPA_PLATFORM", "WAYLAND_DISPLAY", "DISPLAY"):
        monkeypatch.delenv(name, raising=False)


def test_adapters_satisfy_protocol() -> None:
    assert isinstance(MemoryClipboard(), Clipboard)
    assert isinstance(QtClipboard(lambda: _FakeQtClipboard()), Clipboard)


@pytest.mark.asyncio()
async def test_qt_clipboard_writes_text() -> None:
    handle = _FakeQtClipboard()
    clipboard = QtClipboard(lambda: handle)

    await clipboard.write_text("master prompt")

    assert handle.text() == "master prompt"
    assert handle.ownership_checks == 0


@pytest.mark.asyncio()
async def test_qt_clipboard_rejects_mismatched_read_back() -> None:
    clipboard = QtClipboard(lambda: _FakeQtClipboard(drop_writes=True))

    with pytest.raises(ClipboardError):
        await clipboard.write_text("master prompt")


@pytest.mark.asyncio()
async def test_qt_clipboard_wraps_supplier_errors() -> None:
    def _supplier() -> _FakeQtClipboard:
        raise RuntimeError("no display")

    clipboard = QtClipboard(_supplier)

    with pytest.raises(ClipboardError) as excinfo:
        await clipboard.write_text("master prompt")

    assert isinstance(excinfo.value.__cause__, RuntimeError)


@pytest.mark.asyncio()
async def test_qt_clipboard_propagates_clipboard_errors_unchanged() -> None:
    def _supplier() -> _FakeQtClipboard:
        raise ClipboardError("Clipboard unavailable: no Qt application is running.")

    with pytest.raises(ClipboardError, match="no Qt application"):
        await QtClipboard(_supplier).write_text("master prompt")


@pytest.mark.asyncio()
async def test_headless_linux_is_reported_without_starting_qt(monkeypatch: MonkeyPatch) -> None:
    _headless_linux(monkeypatch)

    with pytest.raises(ClipboardError, match="no display server"):
        await QtClipboard().write_text("master prompt")


@pytest.mark.asyncio()
async def test_missing_pyside_is_reported_as_clipboard_error(monkeypatch: MonkeyPatch) -> None:
    monkeypatch.setenv("DISPLAY", ":0")
    monkeypatch.setitem(sys.modules, "PySide6.QtGui", None)

    with pytest.raises(ClipboardError, match="PySide6 is not installed") as excinfo:
        await QtClipboard().write_text("master prompt")

    assert isinstance(excinfo.value.__cause__, ImportError)


@pytest.mark.asyncio()
async def test_hold_waits_until_another_client_owns_the_clipboard() -> None:
    handle = _FakeQtClipboard(owned_polls=3)
    pump = _EventPump()
    clipboard = QtClipboard(
        lambda: handle,
        hold_seconds=5.0,
        platform_name=lambda: "xcb",
        process_events=pump,
    )

    await clipboard.write_text("master prompt")

    assert handle.ownership_checks == 4
    assert pump.calls == 3


@pytest.mark.asyncio()
async def test_hold_fails_when_nobody_takes_ownership() -> None:
    handle = _FakeQtClipboard(owned_polls=-1)
    clipboard = QtClipboard(
        lambda: handle,
        hold_seconds=0.1,
        platform_name=lambda: "wayland",
        process_events=_EventPump(),
    )

    with pytest.raises(ClipboardError, match="lost when this process exits"):
        await clipboard.write_text("master prompt")


@pytest.mark.asyncio()
async def test_hold_is_skipped_where_clipboard_outlives_the_process() -> None:
    handle = _FakeQtClipboard(owned_polls=-1)
    pump = _EventPump()
    clipboard = QtClipboard(
        lambda: handle,
        hold_seconds=5.0,
        platform_name=lambda: "windows",
        process_events=pump,
    )

    await clipboard.write_text("master prompt")

    assert handle.ownership_checks == 0
    assert pump.calls == 0


def test_negative_hold_is_treated_as_disabled() -> None:
    assert QtClipboard(lambda: _FakeQtClipboard(), hold_seconds=-1.0).hold_seconds == 0.0
