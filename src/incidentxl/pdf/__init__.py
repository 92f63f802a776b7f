"""Text extraction and parsing of incident report documents."""

from __future__ import annotations

__all__ = [
    "boundary",
    "dates",
    "factors",
    "incident_blocks",
    "incident_header",
    "incident_parser",
    "incident_tokens",
    "presection",
    "schema",
    "text_lines",
    "vocab",
]
