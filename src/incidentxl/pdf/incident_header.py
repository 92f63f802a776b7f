"""Report header (metadata) extraction."""

from __future__ import annotations

import re
from typing import Dict, Iterable

from incidentxl.report.model import ReportMetadata

_LABEL_SPACING_RE = re.compile(r"\b(Resident Status|Incident Status|Unit|Floor)\s+:")


def _label_value(line: str, label: str) -> str:
    return line.split(label, 1)[1].strip()


def _tidy_labels(line: str) -> str:
    return _LABEL_SPACING_RE.sub(r"\1:", line)


def _is_facility_candidate(line: str) -> bool:
    return ":" not in line and "Incident" not in line and not line.startswith("Page #")


def parse_metadata(lines: Iterable[str]) -> ReportMetadata:
    """Scan ``lines`` once for the report header fields.

    ``Date:``, ``Time:`` and ``User:`` are matched on the leading label and the
    first occurrence wins. The facility is the first plain line (no colon, no
    ``Incident``, not a page marker) after the ``User:`` line. The three
    status lines are kept verbatim apart from label spacing. Scanning stops
    once the reporting period and the facility are both known.
    """

    found: Dict[str, str] = {}
    for raw in lines:
        stripped = raw.strip()
        if not stripped:
            continue
        if "date_value" not in found and stripped.startswith("Date:"):
            found["date_value"] = _label_value(stripped, "Date:")
        elif "time_value" not in found and stripped.startswith("Time:"):
            found["time_value"] = _label_value(stripped, "Time:")
        elif "user" not in found and stripped.startswith("User:"):
            found["user"] = _label_value(stripped, "User:")
        elif stripped.startswith("Resident Status"):
            found.setdefault("resident_status_line", _tidy_labels(stripped))
        elif stripped.startswith("Incident Status"):
            found.setdefault("incident_status_line", _tidy_labels(stripped))
        elif stripped.startswith("Reporting Period"):
            found.setdefault("reporting_period_line", stripped)
        elif "facility" not in found and found.get("user") and _is_facility_candidate(stripped):
            found["facility"] = stripped

        if "reporting_period_line" in found and "facility" in found:
            break

    return ReportMetadata(**found)


__all__ = ["parse_metadata"]
