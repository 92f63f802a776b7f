"""Best-effort date and date-time normalization for extracted report text."""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Iterable, Optional, Pattern, Tuple

DATE_TOKEN_RE = re.compile(r"\d{1,2}/\d{1,2}/(?:\d{4}|\d{2})")

_BARE_DATE_RE = re.compile(r"^(?P<month>\d{1,2})/(?P<day>\d{1,2})/(?P<year>\d{4}|\d{2})$")
_TIMEZONE_RE = re.compile(r"\b(?:[ECMP][SD]?T)\b")

_DATETIME_PATTERNS: Iterable[Pattern[str]] = (
    re.compile(
        r"(?P<month>\d{1,2})/(?P<day>\d{1,2})/(?P<year>\d{4}|\d{2})\s*"
        r"(?P<hour>\d{1,2}):(?P<minute>\d{2})\s*(?P<meridiem>AM|PM)",
        re.IGNORECASE,
    ),
    re.compile(
        r"(?P<month>\d{1,2})/(?P<day>\d{1,2})/(?P<year>\d{4}|\d{2})\s*"
        r"(?P<hour>\d{1,2}):(?P<minute>\d{2})"
    ),
)


def expand_year(year: int) -> int:
    """Map two-digit years onto the 2000s."""

    return 2000 + year if year < 100 else year


def format_mdyyyy(value: date) -> str:
    """Return ``value`` formatted as unpadded ``M/D/YYYY``."""

    return f"{value.month}/{value.day}/{value.year:04d}"


def format_display_datetime(value: datetime) -> str:
    """Return ``value`` as ``M/D/YYYY H:MMAM`` (12-hour clock)."""

    hour = value.hour % 12 or 12
    meridiem = "PM" if value.hour >= 12 else "AM"
    return f"{format_mdyyyy(value)} {hour}:{value.minute:02d}{meridiem}"


def parse_date_value(value: str) -> Optional[date]:
    """Return the calendar date for ``M/D/YY[YY]`` text, or ``None``."""

    match = _BARE_DATE_RE.match((value or "").strip())
    if not match:
        return None
    try:
        return date(
            expand_year(int(match.group("year"))),
            int(match.group("month")),
            int(match.group("day")),
        )
    except ValueError:
        return None


def normalize_date_value(value: str) -> str:
    """Return ``value`` in canonical ``M/D/YYYY`` form.

    Accepts ``M/D/YYYY``, ``M/D/YY``, ``MM/DD/YYYY`` and ``MM/DD/YY``. Values
    that do not parse to a valid calendar date come back trimmed but
    otherwise unchanged.
    """

    stripped = (value or "").strip()
    if not stripped:
        return ""
    parsed = parse_date_value(stripped)
    if parsed is None:
        return stripped
    return format_mdyyyy(parsed)


def strip_timezone(value: str) -> str:
    """Remove stray timezone markers such as ``ET`` or ``CST``."""

    cleaned = _TIMEZONE_RE.sub("", value or "")
    return re.sub(r"\s{2,}", " ", cleaned).strip()


def normalize_datetime_value(value: str) -> Tuple[str, Optional[datetime]]:
    """Return ``(display, instant)`` for an incident date-time token.

    The 12-hour pattern is tried before the 24-hour one. When neither yields a
    valid date-time the trimmed input is returned with no instant.
    """

    stripped = (value or "").strip()
    cleaned = strip_timezone(stripped)
    if not cleaned:
        return "", None

    for pattern in _DATETIME_PATTERNS:
        match = pattern.search(cleaned)
        if not match:
            continue
        instant = _build_datetime(match)
        if instant is not None:
            return format_display_datetime(instant), instant
    return stripped, None


def _build_datetime(match: re.Match[str]) -> Optional[datetime]:
    parts = match.groupdict()
    hour = int(parts["hour"])
    meridiem = (parts.get("meridiem") or "").upper()
    if meridiem:
        if not 1 <= hour <= 12:
            return None
        if meridiem == "PM" and hour < 12:
            hour += 12
        elif meridiem == "AM" and hour == 12:
            hour = 0
    try:
        return datetime(
            expand_year(int(parts["year"])),
            int(parts["month"]),
            int(parts["day"]),
            hour,
            int(parts["minute"]),
        )
    except ValueError:
        return None


__all__ = [
    "DATE_TOKEN_RE",
    "expand_year",
    "format_display_datetime",
    "format_mdyyyy",
    "normalize_date_value",
    "normalize_datetime_value",
    "parse_date_value",
    "strip_timezone",
]
