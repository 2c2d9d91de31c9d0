"""Shared constants for the Textual UI."""

from __future__ import annotations


ACCENT = "#2AABEE"
FILTER_MARKER = " *"
EMPTY_VALUE_LABEL = "(empty)"
