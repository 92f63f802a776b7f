"""Report data structures shared by the parser and the output writers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import FrozenSet, Optional, Tuple

from incidentxl.pdf.incident_tokens import Flag


@dataclass(frozen=True, slots=True)
class FactorSets:
    """Canonical predisposing factors grouped by checklist."""

    environmental: FrozenSet[str] = frozenset()
    physiological: FrozenSet[str] = frozenset()
    situational: FrozenSet[str] = frozenset()

    def groups(self) -> Tuple[Tuple[str, FrozenSet[str]], ...]:
        return (
            ("environmental", self.environmental),
            ("physiological", self.physiological),
            ("situational", self.situational),
        )

    def __bool__(self) -> bool:
        return bool(self.environmental or self.physiological or self.situational)


@dataclass(frozen=True, slots=True)
class ReportMetadata:
    """Header fields printed once at the top of the source report."""

    date_value: str = ""
    time_value: str = ""
    user: str = ""
    facility: str = ""
    resident_status_line: str = ""
    incident_status_line: str = ""
    reporting_period_line: str = ""


@dataclass(frozen=True, slots=True)
class IncidentEntry:
    """One fall incident recovered from the report text.

    ``incident_datetime`` is the display string and ``incident_instant`` the
    parsed value of the same token; the instant is ``None`` when the token did
    not parse. ``incident_number`` stays ``None`` until the entries are
    ordered.
    """

    resident_name: str
    resident_id: str = ""
    admission: str = ""
    incident_datetime: str = ""
    incident_instant: Optional[datetime] = None
    location: str = ""
    room_number: str = ""
    immediate_action_text: str = ""
    nursing_description: str = ""
    incident_number: Optional[int] = None
    incident_status: str = ""
    incident_type: str = "Fall"
    witnessed: Flag = Flag.UNKNOWN
    sent_to_hospital: Flag = Flag.UNKNOWN
    injuries_during: FrozenSet[str] = frozenset()
    injuries_post: FrozenSet[str] = frozenset()
    factors: FactorSets = field(default_factory=FactorSets)

    @property
    def incident_number_text(self) -> str:
        return "" if self.incident_number is None else str(self.incident_number)


@dataclass(frozen=True, slots=True)
class ParsedReport:
    """Everything recovered from one source document."""

    metadata: ReportMetadata
    entries: Tuple[IncidentEntry, ...]
    source_name: str = ""

    def __len__(self) -> int:
        return len(self.entries)


__all__ = ["FactorSets", "IncidentEntry", "ParsedReport", "ReportMetadata"]
