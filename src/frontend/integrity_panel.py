"""Integrity check panel: filterable table of integrity messages."""

from __future__ import annotations

from typing import Any, Optional

from rich.text import Text
from textual import events, on
from textual.binding import Binding
from textual.containers import Container, Horizontal, Vertical
from textual.coordinate import Coordinate
from textual.message import Message
from textual.widgets import Button, DataTable, Static
from textual.widgets.data_table import ColumnKey, RowKey

from adapters.textual_scheduler import TextualScheduler
from core.models import Column, IntegrityMessage
from core.navigation import ClickClassifier, MouseButton, NavigationDispatcher
from core.ports import EditorPort
from core.view_model import IntegrityCheckViewModel

from .constants import ACCENT, FILTER_MARKER
from .modals import ColumnFilterScreen


class MessagesTable(DataTable):
    """Data table that reports which mouse button clicked which row."""

    BINDINGS = [Binding("enter", "select_cursor", "Go to field", show=True)]

    class RowClicked(Message):
        def __init__(self, table: "MessagesTable", row_key: RowKey, button: int) -> None:
            self.table = table
            self.row_key = row_key
            self.button = button
            super().__init__()

        @property
        def control(self) -> "MessagesTable":
            return self.table

    class RowActivated(Message):
        def __init__(self, table: "MessagesTable", row_key: RowKey) -> None:
            self.table = table
            self.row_key = row_key
            super().__init__()

        @property
        def control(self) -> "MessagesTable":
            return self.table

    def on_click(self, event: events.Click) -> None:
        # Runs before the DataTable handler, which stops the event.
        row_index = event.style.meta.get("row")
        if not isinstance(row_index, int) or not 0 <= row_index < self.row_count:
            return
        row_key = self.coordinate_to_cell_key(Coordinate(row_index, 0)).row_key
        self.post_message(self.RowClicked(self, row_key, event.button))

    def action_select_cursor(self) -> None:
        super().action_select_cursor()
        row_key = self.cursor_row_key
        if row_key is not None:
            self.post_message(self.RowActivated(self, row_key))

    @property
    def cursor_row_key(self) -> Optional[RowKey]:
        if not 0 <= self.cursor_row < self.row_count:
            return None
        return self.coordinate_to_cell_key(Coordinate(self.cursor_row, 0)).row_key


class IntegrityCheckPanel(Container):
    """Non-modal "Check integrity" dialog docked under the library view."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("ctrl+r", "reset_filters", "Reset filters"),
    ]

    def __init__(
        self,
        messages: list[IntegrityMessage],
        editor: EditorPort,
        double_click_interval: float = 0.5,
        message_clip_chars: int = 64,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self._view_model = IntegrityCheckViewModel(messages)
        self._editor = editor
        self._double_click_interval = double_click_interval
        self._clip_chars = message_clip_chars
        self._dispatcher: Optional[NavigationDispatcher] = None
        self._table_ready = False

    @property
    def view_model(self) -> IntegrityCheckViewModel:
        return self._view_model

    def compose(self):
        with Vertical(id="integrity-panel"):
            with Horizontal(id="integrity-header"):
                yield Static(self._title_text(), id="integrity-title")
                yield Button("Close", id="integrity-close")
            with Horizontal(id="integrity-filters"):
                for column in self._view_model.columns:
                    yield Button(self._filter_label(column), id=f"filter-{column.value}", classes="filter-btn")
                yield Button("Reset filters", id="integrity-reset", variant="warning")
            yield MessagesTable(id="integrity-table", cursor_type="row")
            yield Static("", id="integrity-status")

    def on_mount(self) -> None:
        self._dispatcher = NavigationDispatcher(
            editor=self._editor,
            dialog=self,
            scheduler=TextualScheduler(self.app),
            classifier=ClickClassifier(self._double_click_interval),
        )
        table = self.query_one("#integrity-table", MessagesTable)
        table.zebra_stripes = True
        table.styles.height = "1fr"
        self._view_model.subscribe(self._refresh_table)
        self._table_ready = True
        self._refresh_table()

    def reset_all_filters(self) -> None:
        """Show every message again and clear all column filter markers."""

        self._view_model.reset_all_filters()

    def close_dialog(self) -> None:
        self.remove()

    def action_close(self) -> None:
        self.close_dialog()

    def action_reset_filters(self) -> None:
        self.reset_all_filters()

    @on(Button.Pressed, "#integrity-close")
    def _on_close_pressed(self) -> None:
        self.close_dialog()

    @on(Button.Pressed, "#integrity-reset")
    def _on_reset_pressed(self) -> None:
        self.reset_all_filters()

    @on(Button.Pressed, ".filter-btn")
    def _on_filter_pressed(self, event: Button.Pressed) -> None:
        column = Column((event.button.id or "").removeprefix("filter-"))
        self.app.push_screen(ColumnFilterScreen(self._view_model, column))

    def on_messages_table_row_clicked(self, event: MessagesTable.RowClicked) -> None:
        event.stop()
        message = self._message_for(event.row_key)
        if message is None or self._dispatcher is None:
            return
        self._dispatcher.on_row_clicked(event.row_key.value, message, event.button)

    def on_messages_table_row_activated(self, event: MessagesTable.RowActivated) -> None:
        event.stop()
        message = self._message_for(event.row_key)
        if message is None or self._dispatcher is None:
            return
        self._dispatcher.on_row_clicked(event.row_key.value, message, MouseButton.PRIMARY)

    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        message = self._message_for(event.row_key)
        if message is not None:
            self._set_status(message.message)

    def _refresh_table(self) -> None:
        if not self._table_ready:
            return
        table = self.query_one("#integrity-table", MessagesTable)
        previous_key = table.cursor_row_key
        table.clear()
        if not table.columns:
            for column in self._view_model.columns:
                table.add_column(self._column_label(column), key=column.value)
        for column in self._view_model.columns:
            table.columns[ColumnKey(column.value)].label = self._column_label(column)
        for index, message in enumerate(self._view_model.messages):
            if not self._view_model.is_visible(message):
                continue
            key, field_name, text = self._view_model.row_values(message)
            table.add_row(key, field_name, self._clip_text(text, self._clip_chars), key=str(index))
        if previous_key is not None and previous_key in table.rows:
            table.move_cursor(row=table.get_row_index(previous_key))
        table.refresh()
        for column in self._view_model.columns:
            button = self.query_one(f"#filter-{column.value}", Button)
            button.label = self._filter_label(column)
            button.set_class(self._view_model.is_filtered(column), "filter-active")
        self._set_status("")

    def _message_for(self, row_key: Optional[RowKey]) -> Optional[IntegrityMessage]:
        if row_key is None or row_key.value is None:
            return None
        try:
            return self._view_model.messages[int(row_key.value)]
        except (ValueError, IndexError):
            return None

    def _set_status(self, detail: str) -> None:
        shown = len(self._view_model.visible_messages())
        total = len(self._view_model.messages)
        summary = f"{shown} of {total} messages"
        if detail:
            summary = f"{summary} | {detail}"
        self.query_one("#integrity-status", Static).update(summary)

    def _column_label(self, column: Column) -> Text:
        if self._view_model.is_filtered(column):
            return Text.assemble(column.heading, (FILTER_MARKER, ACCENT))
        return Text(column.heading)

    def _filter_label(self, column: Column) -> str:
        label = f"{column.heading} filter"
        if self._view_model.is_filtered(column):
            return label + FILTER_MARKER
        return label

    @staticmethod
    def _clip_text(value: str, limit: int) -> str:
        if len(value) <= limit:
            return value
        return value[: limit - 3] + "..."

    @staticmethod
    def _title_text() -> Text:
        return Text.assemble(("CHECK", ACCENT), (" INTEGRITY", "bold"))
