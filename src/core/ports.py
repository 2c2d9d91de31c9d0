"""Ports (interfaces) used by the navigation dispatcher.

Ports define the minimal contracts for the host editor and the UI event
loop so that the core can be driven by Textual or by test fakes.
"""

from __future__ import annotations

from typing import Callable, Protocol

from core.models import Entry, Field


class EditorPort(Protocol):
    """Operations the host document view and entry editor must offer."""

    def select_record(self, entry: Entry) -> None:
        ...

    def set_editor_visible(self, visible: bool) -> None:
        ...

    def focus_field(self, field: Field) -> None:
        """Best-effort focus request; a missing field is a no-op."""
        ...


class DialogPort(Protocol):
    """Host signal used to dismiss the integrity check dialog."""

    def close_dialog(self) -> None:
        ...


class SchedulerPort(Protocol):
    """Posts work to a later turn of the single UI event loop."""

    def post(self, callback: Callable[[], None]) -> None:
        ...
