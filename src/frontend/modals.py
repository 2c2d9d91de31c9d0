"""Modal dialogs for the integrity check panel."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, SelectionList, Static

from core.models import Column
from core.view_model import IntegrityCheckViewModel

from .constants import EMPTY_VALUE_LABEL


class ColumnFilterScreen(ModalScreen[None]):
    """Checklist of the distinct values of one column.

    Toggling a value filters the table immediately; the screen only needs to
    be closed, there is nothing to apply.
    """

    BINDINGS = [("escape", "close", "Close")]

    def __init__(self, view_model: IntegrityCheckViewModel, column: Column) -> None:
        super().__init__()
        self._view_model = view_model
        self._column = column

    def compose(self) -> ComposeResult:
        options = self._view_model.filter_options(self._column)
        yield Container(
            Static(f"Filter: {self._column.heading}", classes="modal-title"),
            Static(self._summary(), id="filter-summary", classes="modal-body"),
            SelectionList[str](
                *[(option.value or EMPTY_VALUE_LABEL, option.value, option.selected) for option in options],
                id="filter-values",
            ),
            Horizontal(
                Button("All", id="filter-all"),
                Button("None", id="filter-none"),
                Button("Close", id="filter-close", variant="primary"),
                classes="modal-actions",
            ),
            classes="modal-dialog modal-dialog--filter",
        )

    def on_mount(self) -> None:
        self.query_one("#filter-values", SelectionList).focus()

    def on_selection_list_selection_toggled(self, event: SelectionList.SelectionToggled) -> None:
        self._view_model.toggle_filter(self._column, event.selection.value)
        self._update_summary()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        values = self.query_one("#filter-values", SelectionList)
        if event.button.id == "filter-all":
            self._view_model.set_filter(
                self._column,
                [option.value for option in self._view_model.filter_options(self._column)],
            )
            values.select_all()
        elif event.button.id == "filter-none":
            self._view_model.set_filter(self._column, [])
            values.deselect_all()
        else:
            self.dismiss(None)
            return
        self._update_summary()

    def action_close(self) -> None:
        self.dismiss(None)

    def _update_summary(self) -> None:
        self.query_one("#filter-summary", Static).update(self._summary())

    def _summary(self) -> str:
        options = self._view_model.filter_options(self._column)
        selected = sum(1 for option in options if option.selected)
        if selected == len(options):
            return f"All values ({len(options)})"
        return f"{selected} of {len(options)} selected"
