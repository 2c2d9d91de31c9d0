"""JSON report to core model mapping adapter.

This keeps the report file format out of the core; the core only ever sees
``Entry``, ``Field`` and ``IntegrityMessage`` instances.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union

from core.models import Entry, Field, IntegrityMessage

LOGGER = logging.getLogger(__name__)


class ReportError(ValueError):
    """Raised when a report file cannot be turned into messages."""


@dataclass(frozen=True)
class Report:
    """Entries of a library together with the integrity messages about them."""

    entries: tuple[Entry, ...]
    messages: tuple[IntegrityMessage, ...]


def load_report(path: Union[str, Path]) -> Report:
    """Read and parse a report file."""

    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ReportError(f"{path}: invalid JSON at line {exc.lineno}: {exc.msg}") from exc
    report = parse_report(data)
    LOGGER.info(
        "Loaded %s entries and %s messages from %s",
        len(report.entries),
        len(report.messages),
        path,
    )
    return report


def parse_report(data: Any) -> Report:
    """Build core models from an already decoded report object."""

    if not isinstance(data, dict):
        raise ReportError("report root must be an object")

    entries: dict[str, Entry] = {}
    for index, raw in enumerate(data.get("entries", [])):
        entry = _parse_entry(index, raw)
        if entry.entry_id in entries:
            raise ReportError(f"entries[{index}]: duplicate id {entry.entry_id!r}")
        entries[entry.entry_id] = entry

    messages = [
        _parse_message(index, raw, entries)
        for index, raw in enumerate(data.get("messages", []))
    ]
    return Report(entries=tuple(entries.values()), messages=tuple(messages))


def _parse_entry(index: int, raw: Any) -> Entry:
    if not isinstance(raw, dict):
        raise ReportError(f"entries[{index}]: must be an object")
    entry_id = raw.get("id")
    if not entry_id:
        raise ReportError(f"entries[{index}]: id is required")
    fields = raw.get("fields", {}) or {}
    if not isinstance(fields, dict):
        raise ReportError(f"entries[{index}]: fields must be an object")
    # An empty citation key is the same as a missing one.
    citation_key = raw.get("citation_key") or None
    return Entry(
        entry_id=str(entry_id),
        citation_key=citation_key,
        fields={str(name): "" if value is None else str(value) for name, value in fields.items()},
    )


def _parse_message(index: int, raw: Any, entries: dict[str, Entry]) -> IntegrityMessage:
    if not isinstance(raw, dict):
        raise ReportError(f"messages[{index}]: must be an object")
    for key in ("entry", "field", "message"):
        if key not in raw:
            raise ReportError(f"messages[{index}]: {key} is required")
    entry = entries.get(str(raw["entry"]))
    if entry is None:
        raise ReportError(f"messages[{index}]: unknown entry {raw['entry']!r}")
    return IntegrityMessage(
        entry=entry,
        field=Field(name=str(raw["field"]), label=raw.get("field_label") or None),
        message=str(raw["message"]),
    )
