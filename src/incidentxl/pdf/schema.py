"""Fixed column schema for the incident analysis workbook."""

from __future__ import annotations

from typing import Dict, Final, Tuple

REPORT_TITLE: Final[str] = "Incident By Incident Type"
SHEET_NAME: Final[str] = "incident_analysis_report"
FOOTER_TEXT: Final[str] = "Privileged and Confidential - Not part of the Medical Record - Do not Copy"
INCIDENT_TYPE: Final[str] = "Fall"
INCIDENT_DATETIME_LABEL: Final[str] = "Incident Date/Time"

# Rows 1-8 hold metadata, group bands and column headers; entries start on row 9.
HEADER_ROWS: Final[int] = 8

DEFAULT_COL_WIDTH: Final[int] = 18
COLUMN_WIDTHS: Final[Dict[int, int]] = {
    0: 22,
    1: 20,
    2: 52,
    3: 36,
    4: 32,
    5: 42,
    6: 32,
    7: 32,
    8: 24,
    10: 26,
    11: 36,
    12: 90,
    13: 90,
}

# start column -> end column (0-based, inclusive) for values spanning spacer slots
MERGED_VALUE_COLUMNS: Final[Dict[int, int]] = {
    8: 9,
    15: 16,
    19: 20,
    30: 32,
    40: 41,
}

COLUMN_HEADERS: Final[Tuple[str, ...]] = (
    "Incident #",
    "Incident Type",
    "Resident Name",
    "Resident ID",
    "Admission",
    "Incident Date/Time",
    "Incident Location",
    "Incident Status",
    "Witnessed",
    "",
    "Sent to Hospital",
    "Resident Room Number",
    "Immediate Action Taken",
    "Incident Nursing Description",
    # Injury noted - during
    "Abrasion",
    "Bruise",
    "",
    "Burn",
    "Fracture",
    "HIR initiated",
    "",
    "Hematoma",
    "Laceration",
    "None noted at time of incident",
    "Other",
    "Red area only",
    "Reddened Area",
    "Skin Tear",
    "Sprain",
    "Suspected Fracture",
    "Unable to determine",
    "",
    "",
    # Injury noted - post
    "Abrasion",
    "Bruise",
    "Burn",
    "Fracture",
    "HIR initiated",
    "Hematoma",
    "Laceration",
    "None noted at time of incident",
    "",
    "Other",
    "Red area only",
    "Reddened Area",
    "Skin Tear",
    "Sprain",
    "Suspected Fracture",
    "Unable to determine",
    # Predisposing factors - environmental
    "Clutter",
    "Crowding",
    "Furniture",
    "Noise",
    "Other",
    "Pets",
    "Poor Lighting",
    "Rugs/Carpeting",
    "Wet Floor",
    # Predisposing factors - physiological
    "Anticoagulant Therapy",
    "Antihypertensive medication",
    "Confused",
    "Current UTI",
    "Drowsy",
    "Gait Imbalance",
    "Hypotensive",
    "Impaired Memory",
    "Incontinent",
    "Other",
    "Recent Illness",
    "Recent change in Cognition",
    "Recent change in Medications/New Medications",
    "Sedated",
    "Weakness/Fainted",
    # Predisposing factors - situational
    "Active Exit Seeker",
    "Admitted within Last 72h",
    "Ambulating with Assist",
    "Ambulating without Assist",
    "Bed/chair alarm ringing ",
    "Call bell within reach",
    "Chair tilted",
    "Dislikes Roommate",
    "During Transfer",
    "Floor mat in place",
    "Hip protectors in place",
    "Improper Footwear",
    "Incorrect diet texture",
    "Incorrect fluid consistency",
    "Large Groups",
    "Lax/suppository in previous 24 hours",
    "Other",
    "Recent Room Change",
    "Restraint-Seat belt",
    "Restraint-chair prevents rising",
    "Restraint-table top",
    "Scheduled toileting plan",
    "Side rail(s) down",
    "Side rail(s) up",
    "Using Cane",
    "Using Walker",
    "Using Wheeled Walker",
    "Using wheelchair",
    "Wanderer",
)

# Half-open [start, stop) slices of COLUMN_HEADERS per checklist.
INJURY_DURING_RANGE: Final[Tuple[int, int]] = (14, 32)
INJURY_POST_RANGE: Final[Tuple[int, int]] = (33, 49)
ENVIRONMENTAL_RANGE: Final[Tuple[int, int]] = (49, 58)
PHYSIOLOGICAL_RANGE: Final[Tuple[int, int]] = (58, 73)
SITUATIONAL_RANGE: Final[Tuple[int, int]] = (73, 102)

# (label, first column, last column) for row 7; 1-based inclusive like the sheet itself.
GROUP_BANDS: Final[Tuple[Tuple[str, int, int], ...]] = (
    ("", 1, 14),
    ("Injury Noted - During", 15, 33),
    ("Injury Noted - Post", 34, 49),
    ("Predisposing Factors (Environmental)", 50, 58),
    ("Predisposing Factors (Physiological)", 59, 73),
    ("Predisposing Factors (Situational)", 74, 102),
)


def column_width(index: int) -> int:
    """Return the preferred display width for the 0-based column ``index``."""

    return COLUMN_WIDTHS.get(index, DEFAULT_COL_WIDTH)


def merge_end(index: int) -> int:
    """Return the last column a value written at ``index`` spans."""

    return MERGED_VALUE_COLUMNS.get(index, index)


def spreadsheet_row(position: int) -> int:
    """Return the 1-based sheet row for the 0-based entry ``position``."""

    return HEADER_ROWS + position + 1


__all__ = [
    "COLUMN_HEADERS",
    "COLUMN_WIDTHS",
    "DEFAULT_COL_WIDTH",
    "ENVIRONMENTAL_RANGE",
    "FOOTER_TEXT",
    "GROUP_BANDS",
    "HEADER_ROWS",
    "INCIDENT_DATETIME_LABEL",
    "INCIDENT_TYPE",
    "INJURY_DURING_RANGE",
    "INJURY_POST_RANGE",
    "MERGED_VALUE_COLUMNS",
    "PHYSIOLOGICAL_RANGE",
    "REPORT_TITLE",
    "SHEET_NAME",
    "SITUATIONAL_RANGE",
    "column_width",
    "merge_end",
    "spreadsheet_row",
]
