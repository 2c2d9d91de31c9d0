"""View-model behind the integrity check dialog."""

from __future__ import annotations

from typing import Callable, Iterable, List, Sequence

from core.filters import FilterEngine, FilterOption
from core.models import COLUMNS, Column, IntegrityMessage, column_value


class IntegrityCheckViewModel:
    """Holds the scan result and mediates column filtering for the table.

    The message sequence is fixed for the lifetime of the dialog; only the
    derived visibility changes when the user filters.
    """

    def __init__(self, messages: Iterable[IntegrityMessage]) -> None:
        self._messages: tuple[IntegrityMessage, ...] = tuple(messages)
        self._filters: FilterEngine[IntegrityMessage, Column] = FilterEngine(column_value)
        self._filters.initialize(COLUMNS, self._messages)

    @property
    def messages(self) -> Sequence[IntegrityMessage]:
        return self._messages

    @property
    def columns(self) -> tuple[Column, ...]:
        return COLUMNS

    def row_values(self, message: IntegrityMessage) -> tuple[str, ...]:
        return tuple(column_value(message, column) for column in COLUMNS)

    def filter_options(self, column: Column) -> List[FilterOption]:
        return self._filters.get_filter_options(column)

    def toggle_filter(self, column: Column, value: str) -> None:
        self._filters.toggle_value(column, value)

    def set_filter(self, column: Column, values: Iterable[str]) -> None:
        self._filters.set_selected(column, values)

    def is_visible(self, message: IntegrityMessage) -> bool:
        return self._filters.is_row_visible(message)

    def visible_messages(self) -> List[IntegrityMessage]:
        return self._filters.visible_rows()

    def is_filtered(self, column: Column) -> bool:
        return self._filters.column_filter(column).active

    def active_columns(self) -> List[Column]:
        return self._filters.active_columns()

    def reset_all_filters(self) -> None:
        self._filters.reset_all()

    def subscribe(self, callback: Callable[[], None]) -> None:
        self._filters.subscribe(callback)
