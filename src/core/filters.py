"""Per-column value filtering (core domain).

Every displayed column owns a :class:`ColumnFilter` holding the distinct
values seen in that column (the domain) and the subset currently let through.
A row is visible only when each of its column values is selected, so filters
on different columns combine as a conjunction.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Generic, Iterable, List, Sequence, TypeVar

LOGGER = logging.getLogger(__name__)

RowT = TypeVar("RowT")
ColumnT = TypeVar("ColumnT")


@dataclass
class ColumnFilter(Generic[ColumnT]):
    """Filter state for one column."""

    column: ColumnT
    domain: frozenset[str] = frozenset()
    selected: set[str] = field(default_factory=set)

    @property
    def active(self) -> bool:
        """True while some value of the domain is filtered out."""

        return self.selected != self.domain

    def accepts(self, value: str) -> bool:
        return value in self.selected

    def reset(self) -> None:
        self.selected = set(self.domain)


@dataclass(frozen=True)
class FilterOption:
    """One entry of a column filter menu."""

    value: str
    selected: bool


class FilterEngine(Generic[RowT, ColumnT]):
    """Owns one column filter per column and decides row visibility."""

    def __init__(self, value_of: Callable[[RowT, ColumnT], str]) -> None:
        self._value_of = value_of
        self._filters: dict[ColumnT, ColumnFilter[ColumnT]] = {}
        self._rows: tuple[RowT, ...] = ()
        self._visible: List[bool] = []
        self._listeners: List[Callable[[], None]] = []

    def initialize(self, columns: Iterable[ColumnT], rows: Sequence[RowT]) -> None:
        """Build every column domain from ``rows`` and select everything."""

        self._rows = tuple(rows)
        self._filters = {}
        for column in columns:
            domain = frozenset(self._value_of(row, column) for row in self._rows)
            self._filters[column] = ColumnFilter(column=column, domain=domain, selected=set(domain))
        self._recompute()
        LOGGER.debug(
            "Filters initialized for %s columns over %s rows",
            len(self._filters),
            len(self._rows),
        )

    @property
    def columns(self) -> List[ColumnT]:
        return list(self._filters)

    def column_filter(self, column: ColumnT) -> ColumnFilter[ColumnT]:
        return self._filters[column]

    def get_filter_options(self, column: ColumnT) -> List[FilterOption]:
        """Return the column domain as menu options, sorted by value."""

        column_filter = self._filters[column]
        return [
            FilterOption(value=value, selected=value in column_filter.selected)
            for value in sorted(column_filter.domain)
        ]

    def toggle_value(self, column: ColumnT, value: str) -> None:
        """Flip whether ``value`` passes the filter of ``column``."""

        column_filter = self._filters[column]
        if value not in column_filter.domain:
            LOGGER.debug("Ignoring toggle of unknown value %r in %s", value, column)
            return
        if value in column_filter.selected:
            column_filter.selected.discard(value)
        else:
            column_filter.selected.add(value)
        self._changed()

    def set_selected(self, column: ColumnT, values: Iterable[str]) -> None:
        """Replace the selection of ``column``; values outside the domain are dropped."""

        column_filter = self._filters[column]
        column_filter.selected = set(values) & column_filter.domain
        self._changed()

    def is_row_visible(self, row: RowT) -> bool:
        return all(
            column_filter.accepts(self._value_of(row, column))
            for column, column_filter in self._filters.items()
        )

    def visible_rows(self) -> List[RowT]:
        return [row for row, visible in zip(self._rows, self._visible) if visible]

    def active_columns(self) -> List[ColumnT]:
        return [column for column, column_filter in self._filters.items() if column_filter.active]

    def reset_all(self) -> None:
        """Select every value of every column again."""

        for column_filter in self._filters.values():
            column_filter.reset()
        self._changed()

    def subscribe(self, listener: Callable[[], None]) -> None:
        """Register a callback fired after visibility was recomputed."""

        self._listeners.append(listener)

    def _changed(self) -> None:
        self._recompute()
        LOGGER.debug("Filters changed: %s of %s rows visible", sum(self._visible), len(self._rows))
        for listener in list(self._listeners):
            listener()

    def _recompute(self) -> None:
        self._visible = [self.is_row_visible(row) for row in self._rows]
