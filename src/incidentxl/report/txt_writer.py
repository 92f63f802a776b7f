"""TXT digest writer for parsed incident reports."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from incidentxl.pdf.incident_tokens import Flag

from .model import IncidentEntry, ParsedReport

_FACTOR_TITLES = {
    "environmental": "Environmental",
    "physiological": "Physiological",
    "situational": "Situational",
}


def count_entries(entries: Iterable[IncidentEntry]) -> Dict[str, int]:
    """Return the digest counts for ``entries``."""

    counts = {"entries": 0, "witnessed": 0, "sent_to_hospital": 0, "undated": 0}
    for entry in entries:
        counts["entries"] += 1
        if entry.witnessed is Flag.Y:
            counts["witnessed"] += 1
        if entry.sent_to_hospital is Flag.Y:
            counts["sent_to_hospital"] += 1
        if entry.incident_instant is None:
            counts["undated"] += 1
    return counts


def write_report(
    report: ParsedReport,
    out_path: Path,
    generated_at: Optional[datetime] = None,
) -> Path:
    """Write the binder-ready TXT digest to ``out_path`` and return the path."""
    out_path.parent.mkdir(parents=True, exist_ok=True)

    meta = report.metadata
    facility = meta.facility or "Unknown facility"
    header = f"{facility} · Source: {report.source_name or '<unknown>'}"
    stamp_line = f"Date: {meta.date_value or '-'} · Time: {meta.time_value or '-'} · User: {meta.user or '-'}"
    counts = count_entries(report.entries)
    counts_line = (
        "Entries: {entries} · Witnessed: {witnessed} · Sent to Hospital: {sent_to_hospital} · "
        "Undated: {undated}"
    ).format(**counts)

    lines: List[str] = [header, stamp_line, counts_line]
    for status_line in (meta.resident_status_line, meta.incident_status_line, meta.reporting_period_line):
        if status_line:
            lines.append(status_line)
    lines.append("")

    lines.append("Incidents —")
    if report.entries:
        for entry in report.entries:
            lines.extend(_format_entry(entry))
    else:
        lines.append("No incidents found")

    lines.append("")
    generated_stamp = (generated_at or datetime.now()).strftime("%m/%d/%Y %H:%M")
    lines.append(f"Generated: {generated_stamp}")

    out_path.write_text("\n".join(lines), encoding="utf-8")
    return out_path


def _format_entry(entry: IncidentEntry) -> List[str]:
    when = entry.incident_datetime or "date unknown"
    title = f"#{entry.incident_number_text or '?'} — {when} — {entry.resident_name}"
    if entry.resident_id:
        title = f"{title} ({entry.resident_id})"

    block = [title]
    block.append(
        "   Location: {location} · Room: {room} · Witnessed: {witnessed} · Sent to Hospital: {sent}".format(
            location=entry.location or "-",
            room=entry.room_number or "-",
            witnessed=entry.witnessed,
            sent=entry.sent_to_hospital,
        )
    )
    if entry.admission:
        block.append(f"   Admission: {entry.admission}")
    if entry.injuries_during:
        block.append(f"   Injuries: {_joined(entry.injuries_during)}")
    for group, labels in entry.factors.groups():
        if labels:
            block.append(f"   {_FACTOR_TITLES[group]}: {_joined(labels)}")
    if entry.immediate_action_text:
        block.append(f"   Immediate Action: {entry.immediate_action_text}")
    if entry.nursing_description:
        block.append(f"   Nursing Description: {entry.nursing_description}")
    return block


def _joined(labels: Iterable[str]) -> str:
    return ", ".join(sorted(labels))


__all__ = ["count_entries", "write_report"]
