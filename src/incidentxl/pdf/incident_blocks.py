"""Per-entry field parsing for the incident line stream."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from incidentxl.report.model import IncidentEntry

from .boundary import (
    Layout,
    is_entry_start,
    next_nonempty,
    read_entry_header,
    split_admission_incident,
)
from .dates import DATE_TOKEN_RE, normalize_date_value, normalize_datetime_value
from .factors import collect_factors
from .presection import parse_pre_section
from .schema import INCIDENT_TYPE

LOGGER = logging.getLogger(__name__)

NURSING_MARKER = "Nursing Description"
NOTES_MARKER = "Notes"


@dataclass(frozen=True, slots=True)
class EntryParse:
    """A parsed entry and the index where the next one may start."""

    entry: IncidentEntry
    next_index: int


def collect_until(lines: Sequence[str], index: int, token: str) -> Tuple[List[str], int]:
    """Collect non-blank stripped lines until a line equal to ``token``.

    The marker line is consumed but not returned. Runs to end of input when the
    marker never appears.
    """

    collected: List[str] = []
    while index < len(lines):
        stripped = lines[index].strip()
        index += 1
        if stripped == token:
            break
        if stripped:
            collected.append(stripped)
    return collected, index


def parse_entry(lines: Sequence[str], index: int) -> EntryParse:
    """Parse the entry whose boundary line sits at ``lines[index]``."""

    header = read_entry_header(lines[index])
    index += 1
    inline = header.layout is Layout.INLINE

    if inline:
        admission, incident = header.admission, header.incident
    else:
        if DATE_TOKEN_RE.search(header.remainder):
            first_line = header.remainder
        else:
            first_line, index = next_nonempty(lines, index)
        admission, incident, index = split_admission_incident(first_line, lines, index)

    pre_lines, index = collect_until(lines, index, NURSING_MARKER)
    pre = parse_pre_section(pre_lines, inline=inline)

    narrative_lines, index = collect_until(lines, index, NOTES_MARKER)
    scan = collect_factors(lines, index)

    display, instant = normalize_datetime_value(incident)
    if instant is None:
        LOGGER.debug("Unparsed incident date/time for %s: %r", header.name, incident)

    entry = IncidentEntry(
        resident_name=header.name,
        resident_id=header.resident_id,
        admission=normalize_date_value(admission),
        incident_datetime=display,
        incident_instant=instant,
        location=header.location if inline else pre.location,
        room_number=header.room if inline else pre.room,
        immediate_action_text=" ".join(narrative_lines).strip(),
        nursing_description=pre.narrative,
        incident_type=INCIDENT_TYPE,
        witnessed=pre.witnessed,
        sent_to_hospital=pre.sent_to_hospital,
        injuries_during=frozenset(pre.injuries),
        injuries_post=frozenset(),
        factors=scan.factors,
    )
    return EntryParse(entry=entry, next_index=scan.resume_index)


def parse_entries(lines: Sequence[str]) -> List[IncidentEntry]:
    """Return every entry in ``lines`` in source order."""

    entries: List[IncidentEntry] = []
    index = 0
    while index < len(lines):
        if not is_entry_start(lines[index]):
            index += 1
            continue
        parsed = parse_entry(lines, index)
        entries.append(parsed.entry)
        index = max(parsed.next_index, index + 1)
    LOGGER.debug("Parsed %d entries from %d lines", len(entries), len(lines))
    return entries


__all__ = [
    "EntryParse",
    "NOTES_MARKER",
    "NURSING_MARKER",
    "collect_until",
    "parse_entries",
    "parse_entry",
]
