"""Library view and entry editor used as the navigation target."""

from __future__ import annotations

from typing import Any, Iterable, Optional

from textual.app import ComposeResult
from textual.containers import Container, Vertical, VerticalScroll
from textual.widgets import DataTable, Input, Static

from core.models import Entry

LIBRARY_COLUMNS = ("author", "title", "year")
CITATION_KEY_FIELD = "citationkey"


class EntryTable(DataTable):
    """Table listing every entry of the library, keyed by entry id."""

    def __init__(self, entries: Iterable[Entry], **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._library_entries = list(entries)

    def on_mount(self) -> None:
        self.cursor_type = "row"
        self.zebra_stripes = True
        self.add_column("key", key="citation_key", width=14)
        for name in LIBRARY_COLUMNS:
            self.add_column(name, key=name, width=28)
        self.load(self._library_entries)

    def load(self, entries: Iterable[Entry]) -> None:
        self.clear()
        for entry in entries:
            self.add_row(
                entry.citation_key or "",
                *[entry.fields.get(name, "") for name in LIBRARY_COLUMNS],
                key=entry.entry_id,
            )

    def select_entry(self, entry: Entry) -> None:
        self.move_cursor(row=self.get_row_index(entry.entry_id))


class EntryFields(VerticalScroll):
    """Label/input pairs for the fields of one entry.

    Inputs are identified by position; field names may differ only by case
    or punctuation and still need distinct widget ids.
    """

    def __init__(self, entry: Entry, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.entry = entry
        names = [name for name in entry.fields if name.lower() != CITATION_KEY_FIELD]
        self._pending_focus: Optional[str] = None
        self._input_ids = {CITATION_KEY_FIELD: "field-0"}
        for index, name in enumerate(names, start=1):
            self._input_ids[name] = f"field-{index}"

    def input_id(self, field_name: str) -> Optional[str]:
        """Return the id of the input editing ``field_name``, exact name first."""

        if field_name in self._input_ids:
            return self._input_ids[field_name]
        folded = field_name.lower()
        for name, input_id in self._input_ids.items():
            if name.lower() == folded:
                return input_id
        return None

    def focus_input(self, input_id: str) -> None:
        matches = self.query(f"#{input_id}")
        if matches:
            matches.first().focus()
        else:
            # Not composed yet; focus once mounted.
            self._pending_focus = input_id

    def on_mount(self) -> None:
        if self._pending_focus is not None:
            self.focus_input(self._pending_focus)
            self._pending_focus = None

    def compose(self) -> ComposeResult:
        for name, input_id in self._input_ids.items():
            if name == CITATION_KEY_FIELD:
                value = self.entry.citation_key or ""
            else:
                value = self.entry.fields[name]
            yield Static(name, classes="form-label")
            yield Input(value, name=name, id=input_id)


class EntryEditor(Container):
    """Editor pane showing the fields of the selected entry."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._fields: Optional[EntryFields] = None

    def compose(self) -> ComposeResult:
        with Vertical(id="editor-header"):
            yield Static("Entry editor", id="editor-title")

    def show_entry(self, entry: Entry) -> None:
        if self._fields is not None:
            if self._fields.entry == entry:
                return
            self._fields.remove()
        # Inputs appear once the new container has been composed.
        self._fields = EntryFields(entry)
        self.mount(self._fields)
        self.query_one("#editor-title", Static).update(f"Entry editor: {entry.citation_key or entry.entry_id}")

    def focus_field(self, field_name: str) -> bool:
        if self._fields is None:
            return False
        input_id = self._fields.input_id(field_name)
        if input_id is None:
            return False
        self._fields.focus_input(input_id)
        return True
