"""Row activation handling (core domain).

Clicking a row selects the entry that owns the message, shows the entry
editor and asks the editor to focus the implicated field. A double click
does the same and then closes the dialog.
"""

from __future__ import annotations

import logging
import time
from enum import Enum, IntEnum
from typing import Callable, Hashable, Optional

from core.models import Field, IntegrityMessage
from core.ports import DialogPort, EditorPort, SchedulerPort

LOGGER = logging.getLogger(__name__)

DEFAULT_DOUBLE_CLICK_INTERVAL = 0.5


class MouseButton(IntEnum):
    """Mouse buttons, numbered the way terminal mouse events report them."""

    PRIMARY = 1
    MIDDLE = 2
    SECONDARY = 3


class ClickState(Enum):
    IDLE = "idle"
    AWAITING_SECOND_CLICK = "awaiting-second-click"


class ClickClassifier:
    """Tell single from double clicks without relying on toolkit click counts.

    After a click the classifier waits ``interval`` seconds for a second click
    on the same row. Anything else (timeout, another row) starts over as a
    single click.
    """

    def __init__(
        self,
        interval: float = DEFAULT_DOUBLE_CLICK_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._interval = interval
        self._clock = clock
        self._state = ClickState.IDLE
        self._row_key: Optional[Hashable] = None
        self._clicked_at = 0.0

    @property
    def state(self) -> ClickState:
        if self._state is ClickState.AWAITING_SECOND_CLICK and self._expired(self._clock()):
            return ClickState.IDLE
        return self._state

    def register(self, row_key: Hashable) -> int:
        """Record a click on ``row_key`` and return the click count (1 or 2)."""

        now = self._clock()
        if (
            self._state is ClickState.AWAITING_SECOND_CLICK
            and self._row_key == row_key
            and not self._expired(now)
        ):
            self.reset()
            return 2
        self._state = ClickState.AWAITING_SECOND_CLICK
        self._row_key = row_key
        self._clicked_at = now
        return 1

    def reset(self) -> None:
        self._state = ClickState.IDLE
        self._row_key = None

    def _expired(self, now: float) -> bool:
        return now - self._clicked_at > self._interval


class NavigationDispatcher:
    """Translate row activations into editor navigation commands."""

    def __init__(
        self,
        editor: EditorPort,
        dialog: DialogPort,
        scheduler: SchedulerPort,
        classifier: Optional[ClickClassifier] = None,
    ) -> None:
        self._editor = editor
        self._dialog = dialog
        self._scheduler = scheduler
        self._classifier = classifier or ClickClassifier()

    def on_row_clicked(self, row_key: Hashable, message: IntegrityMessage, button: int) -> None:
        """Handle a mouse click on the row bound to ``message``."""

        if button != MouseButton.PRIMARY:
            return
        click_count = self._classifier.register(row_key)
        self.activate(message, close=click_count == 2)

    def activate(self, message: IntegrityMessage, close: bool = False) -> None:
        """Navigate to ``message``; close the dialog afterwards when asked."""

        LOGGER.info(
            "Navigating to %s (%s)",
            message.entry.citation_key or message.entry.entry_id,
            message.field.name,
        )
        self._editor.select_record(message.entry)
        self._editor.set_editor_visible(True)
        # The editor only shows the new entry's controls after its next refresh.
        self._scheduler.post(self._focus_callback(message.field))
        if close:
            self._dialog.close_dialog()

    def _focus_callback(self, field: Field) -> Callable[[], None]:
        def _focus() -> None:
            self._editor.focus_field(field)

        return _focus
