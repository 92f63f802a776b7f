"""Entry boundary detection and inline / multi-line layout resolution."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

from .dates import DATE_TOKEN_RE
from .incident_tokens import split_room_suffix

NON_ENTRY_PREFIXES: Tuple[str, ...] = ("Total ", "Page #")

_DIGIT_RE = re.compile(r"\d")
_DIGIT_RUN_RE = re.compile(r"\d+")

# Admission date glued (or space-separated) to the incident date-time, then the
# location/room tail. A trailing zone is only taken in its three-letter form
# right after the meridiem. Two-digit years are tried after four-digit ones so that
# "3/1/243/2/2024" still splits at the right place.
_INLINE_RE = re.compile(
    r"^\s*(?P<admission>\d{1,2}/\d{1,2}/(?:\d{4}|\d{2}))\s*"
    r"(?P<incident>\d{1,2}/\d{1,2}/(?:\d{4}|\d{2})\s*\d{1,2}:\d{2}\s*(?:[AaPp][Mm](?:\s+[ECMP][SD]T\b)?)?)"
    r"(?P<rest>.*)$"
)


class Layout(str, Enum):
    INLINE = "inline"
    MULTILINE = "multiline"


@dataclass(frozen=True, slots=True)
class EntryHeader:
    """Fields recovered from an entry boundary line."""

    name: str
    resident_id: str
    layout: Layout
    remainder: str = ""
    admission: str = ""
    incident: str = ""
    location: str = ""
    room: str = ""


def is_entry_start(text: str) -> bool:
    """Return ``True`` when ``text`` looks like the first line of an entry."""

    stripped = (text or "").strip()
    if not stripped or "(" not in stripped:
        return False
    if stripped.startswith(NON_ENTRY_PREFIXES):
        return False
    return bool(_DIGIT_RE.search(stripped))


def split_name_id(line: str) -> Tuple[str, str, str]:
    """Split ``"Name (12345)rest"`` into ``(name, resident_id, rest)``.

    The identifier is the first digit run inside the parenthesised part; it is
    empty when no digits are present. ``rest`` is whatever follows the closing
    parenthesis (or the digits, when the parenthesis is never closed).
    """

    stripped = (line or "").strip()
    if "(" not in stripped:
        return stripped, "", ""
    name, _, tail = stripped.partition("(")
    inside, closed, after = tail.partition(")")
    match = _DIGIT_RUN_RE.search(inside)
    resident_id = match.group(0) if match else ""
    if closed:
        rest = after
    elif match:
        rest = inside[match.end():]
    else:
        rest = ""
    return name.strip(), resident_id, rest.strip()


def detect_layout(remainder: str) -> Tuple[Layout, Optional[re.Match[str]]]:
    """Classify the text after the closing parenthesis of a boundary line."""

    match = _INLINE_RE.match(remainder or "")
    if match:
        return Layout.INLINE, match
    return Layout.MULTILINE, None


def read_entry_header(line: str) -> EntryHeader:
    """Parse a boundary line into an :class:`EntryHeader`.

    Inline headers carry admission, incident date-time, location and room;
    multi-line headers only carry the name, identifier and any leftover text.
    """

    name, resident_id, remainder = split_name_id(line)
    layout, match = detect_layout(remainder)
    if match is None:
        return EntryHeader(name=name, resident_id=resident_id, layout=layout, remainder=remainder)

    location, room = split_room_suffix(match.group("rest"))
    return EntryHeader(
        name=name,
        resident_id=resident_id,
        layout=layout,
        remainder=remainder,
        admission=match.group("admission"),
        incident=match.group("incident").strip(),
        location=location,
        room=room,
    )


def next_nonempty(lines: Sequence[str], index: int) -> Tuple[str, int]:
    """Return the next non-blank stripped line at or after ``index`` and the index past it."""

    while index < len(lines):
        candidate = lines[index].strip()
        index += 1
        if candidate:
            return candidate, index
    return "", index


def split_admission_incident(first_line: str, lines: Sequence[str], index: int) -> Tuple[str, str, int]:
    """Return ``(admission, incident, next_index)`` for a multi-line entry.

    The first date on ``first_line`` is the admission; the incident date-time
    is the rest of the line from the second date onwards, or the next
    non-blank line when the first line holds a single date.
    """

    matches = list(DATE_TOKEN_RE.finditer(first_line))
    if not matches:
        return first_line.strip(), "", index
    admission = matches[0].group(0)
    incident = ""
    if len(matches) >= 2:
        incident = first_line[matches[1].start():].strip()
    if not incident:
        incident, index = next_nonempty(lines, index)
    return admission, incident, index


__all__ = [
    "EntryHeader",
    "Layout",
    "NON_ENTRY_PREFIXES",
    "detect_layout",
    "is_entry_start",
    "next_nonempty",
    "read_entry_header",
    "split_admission_incident",
    "split_name_id",
]
