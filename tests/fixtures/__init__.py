"""Synthetic incident report line streams."""

from .reports import (
    HEADER_LINES,
    INLINE_ENTRY_LINES,
    MULTILINE_ENTRY_LINES,
    report_lines,
    undated_entry_lines,
)

__all__ = [
    "HEADER_LINES",
    "INLINE_ENTRY_LINES",
    "MULTILINE_ENTRY_LINES",
    "report_lines",
    "undated_entry_lines",
]
