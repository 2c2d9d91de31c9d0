"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to any report-format or UI-specific types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional


@dataclass(frozen=True)
class Entry:
    """Opaque reference to one bibliographic record."""

    entry_id: str
    citation_key: Optional[str] = None
    fields: Mapping[str, str] = field(default_factory=dict, compare=False, hash=False)


@dataclass(frozen=True)
class Field:
    """Reference to one attribute of an entry."""

    name: str
    label: Optional[str] = None

    @property
    def display_name(self) -> str:
        if self.label:
            return self.label
        return self.name.capitalize()


@dataclass(frozen=True)
class IntegrityMessage:
    """A single integrity finding as produced by the upstream scan."""

    entry: Entry
    field: Field
    message: str


class Column(str, Enum):
    """Columns displayed by the integrity check table, in display order."""

    KEY = "key"
    FIELD = "field"
    MESSAGE = "message"

    @property
    def heading(self) -> str:
        return self.value.capitalize()


COLUMNS: tuple[Column, ...] = (Column.KEY, Column.FIELD, Column.MESSAGE)


def column_value(message: IntegrityMessage, column: Column) -> str:
    """Return the display string of ``message`` for ``column``.

    Entries without a citation key render as an empty string.
    """

    if column is Column.KEY:
        return message.entry.citation_key or ""
    if column is Column.FIELD:
        return message.field.display_name
    if column is Column.MESSAGE:
        return message.message
    raise ValueError(f"Unsupported column: {column}")
