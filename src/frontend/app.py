"""Main Textual app: library view with the integrity check panel."""

from __future__ import annotations

import logging
from typing import Any

from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Container, Horizontal, Vertical
from textual.widgets import DataTable, Footer, Static

from adapters.report_loader import Report
from core.models import Entry, Field

from .constants import ACCENT
from .integrity_panel import IntegrityCheckPanel
from .library import EntryEditor, EntryTable

LOGGER = logging.getLogger(__name__)


class IntegrityCheckApp(App):
    """Library browser that hosts the integrity check panel.

    The app is the editor the panel navigates: it selects entries in the
    library table, shows the entry editor and focuses field inputs.
    """

    BINDINGS = [
        ("c", "check_integrity", "Check integrity"),
        ("e", "toggle_editor", "Editor"),
        ("q", "quit", "Quit"),
    ]

    CSS_PATH = "app.tcss"

    def __init__(
        self,
        report: Report,
        double_click_interval: float = 0.5,
        message_clip_chars: int = 64,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self._library_report = report
        self._entries_by_id = {entry.entry_id: entry for entry in report.entries}
        self._double_click_interval = double_click_interval
        self._message_clip_chars = message_clip_chars

    def compose(self) -> ComposeResult:
        with Container(id="header"):
            with Vertical(id="header-left"):
                yield Static(self._title_text(), id="title")
                yield Static(
                    f"{len(self._library_report.entries)} entries, {len(self._library_report.messages)} messages",
                    classes="subtle",
                )
        with Horizontal(id="library-body"):
            yield EntryTable(self._library_report.entries, id="entry-table")
            yield EntryEditor(id="entry-editor")
        yield Container(id="dialog-area")
        yield Footer()

    def on_mount(self) -> None:
        self.action_check_integrity()

    def action_check_integrity(self) -> None:
        panels = self.query(IntegrityCheckPanel)
        if panels:
            # Reopening shows everything again.
            panel = panels.first()
            panel.reset_all_filters()
            panel.query_one("#integrity-table").focus()
            return
        self.query_one("#dialog-area", Container).mount(
            IntegrityCheckPanel(
                list(self._library_report.messages),
                editor=self,
                double_click_interval=self._double_click_interval,
                message_clip_chars=self._message_clip_chars,
            )
        )

    def action_toggle_editor(self) -> None:
        editor = self.query_one("#entry-editor", EntryEditor)
        self.set_editor_visible(not editor.display)

    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        if event.data_table.id != "entry-table" or event.row_key.value is None:
            return
        entry = self._entries_by_id.get(event.row_key.value)
        if entry is not None:
            self.query_one("#entry-editor", EntryEditor).show_entry(entry)

    def select_record(self, entry: Entry) -> None:
        # The editor is updated first so the cursor move below is a no-op for it.
        self.query_one("#entry-editor", EntryEditor).show_entry(entry)
        self.query_one("#entry-table", EntryTable).select_entry(entry)

    def set_editor_visible(self, visible: bool) -> None:
        self.query_one("#entry-editor", EntryEditor).display = visible

    def focus_field(self, field: Field) -> None:
        if not self.query_one("#entry-editor", EntryEditor).focus_field(field.name):
            LOGGER.debug("No input for field %s in the entry editor", field.name)

    @staticmethod
    def _title_text() -> Text:
        return Text.assemble(
            ("INTEGRITY", ACCENT),
            (" > Library", "bold"),
        )
