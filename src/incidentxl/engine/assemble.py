"""Entry validation, ordering and numbering."""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from datetime import datetime
from typing import Iterable, List, Sequence, Tuple

from incidentxl.errors import ConversionError
from incidentxl.pdf.dates import DATE_TOKEN_RE
from incidentxl.pdf.schema import INCIDENT_DATETIME_LABEL, SHEET_NAME, spreadsheet_row
from incidentxl.report.model import IncidentEntry

LOGGER = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1)
VALIDATION_WINDOW = 5

# A date run straight into another date or into letters, e.g. "3/1/20243/2/2024"
# or "3/2/2024Dining".
_GLUED_DATE_RE = re.compile(
    r"\d{1,2}/\d{1,2}/(?:\d{4}|\d{2})(?:[A-Za-z]|\d{1,2}/)|[A-Za-z]\d{1,2}/\d{1,2}/\d{2}"
)


def sort_key(entry: IncidentEntry) -> Tuple[datetime, str]:
    return (entry.incident_instant or EPOCH, entry.resident_name)


def order_entries(entries: Iterable[IncidentEntry]) -> Tuple[IncidentEntry, ...]:
    """Sort newest incident first (undated last, name descending on ties) and number 1..N."""

    ordered = sorted(entries, key=sort_key, reverse=True)
    return tuple(
        replace(entry, incident_number=position)
        for position, entry in enumerate(ordered, start=1)
    )


def looks_like_merged_columns(entry: IncidentEntry) -> bool:
    """Return ``True`` when ``entry`` shows the glued-columns vendor layout."""

    texts = (entry.admission, entry.incident_datetime, entry.location, entry.room_number)
    if any(_GLUED_DATE_RE.search(text) for text in texts if text):
        return True
    return bool(DATE_TOKEN_RE.search(entry.location) or DATE_TOKEN_RE.search(entry.room_number))


def validate_entries(
    entries: Sequence[IncidentEntry],
    source_name: str = "",
    *,
    window: int = VALIDATION_WINDOW,
) -> None:
    """Reject the document when the first ``window`` entries all lack an incident instant.

    ``entries`` must be in source order. Raises :class:`ConversionError`.
    """

    head: List[IncidentEntry] = list(entries[:window])
    if not head or any(entry.incident_instant is not None for entry in head):
        return

    rows = [spreadsheet_row(position) for position in range(len(head))]
    merged = any(looks_like_merged_columns(entry) for entry in head)
    LOGGER.warning(
        "Rejecting %s: first %d entries have no parseable incident date/time (merged=%s)",
        source_name or "<lines>",
        len(head),
        merged,
    )
    raise ConversionError(
        f"Missing incident date/time for the first {len(head)} entries",
        file_name=source_name,
        sheet_name=SHEET_NAME,
        row_numbers=rows,
        missing_fields=[INCIDENT_DATETIME_LABEL],
        looks_like_merged_columns=merged,
    )


__all__ = [
    "EPOCH",
    "VALIDATION_WINDOW",
    "looks_like_merged_columns",
    "order_entries",
    "sort_key",
    "validate_entries",
]
