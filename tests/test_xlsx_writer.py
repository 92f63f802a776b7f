from __future__ import annotations

from pathlib import Path

from openpyxl import load_workbook

from incidentxl.pdf.incident_parser import parse_report
from incidentxl.pdf.schema import COLUMN_HEADERS, FOOTER_TEXT, SHEET_NAME
from incidentxl.pdf.vocab import ENVIRONMENTAL_LOOKUP, INJURY_DURING_LOOKUP, PHYSIOLOGICAL_LOOKUP
from incidentxl.report.xlsx_writer import build_workbook, entry_cells, write_workbook

from .fixtures import INLINE_ENTRY_LINES, MULTILINE_ENTRY_LINES, report_lines


def _report():
    return parse_report(report_lines(INLINE_ENTRY_LINES, MULTILINE_ENTRY_LINES), source_name="falls.pdf")


def test_workbook_round_trips_through_openpyxl(tmp_path: Path) -> None:
    out_path = write_workbook(_report(), tmp_path / "out" / "falls.xlsx")
    assert out_path.exists()

    ws = load_workbook(out_path)[SHEET_NAME]

    assert ws["A1"].value == "Date:  3/5/2024"
    assert ws["J1"].value == "Sunrise Manor"
    assert ws["J2"].value == "Incident By Incident Type"
    assert ws["A3"].value == "User:  Nurse Admin"
    assert ws["A4"].value == "Resident Status: Active"
    assert ws["A6"].value == "Reporting Period : 3/1/2024 - 3/31/2024"
    assert ws["O7"].value == "Injury Noted - During"
    assert ws["BV7"].value == "Predisposing Factors (Situational)"

    header = [ws.cell(row=8, column=col + 1).value for col in range(len(COLUMN_HEADERS))]
    assert header[:9] == list(COLUMN_HEADERS[:9])
    assert header[9] is None
    assert header[101] == "Wanderer"

    # Row 9 is the newest incident.
    assert ws["A9"].value == "1"
    assert ws["C9"].value == "John Smith"
    assert ws["F9"].value == "3/4/2024 9:05AM"
    assert ws["I9"].value == "N"
    assert ws["K9"].value == "Y"
    assert ws["L9"].value == "West 200-2"
    assert ws.cell(row=9, column=INJURY_DURING_LOOKUP.slot_for("Bruise") + 1).value == "Y"
    assert ws.cell(row=9, column=PHYSIOLOGICAL_LOOKUP.slot_for("Gait Imbalance") + 1).value == "Y"

    assert ws["C10"].value == "Jane Doe"
    assert ws["G10"].value == "Common Room"
    assert ws.cell(row=10, column=ENVIRONMENTAL_LOOKUP.slot_for("Wet Floor") + 1).value == "Y"
    assert ws.cell(row=10, column=ENVIRONMENTAL_LOOKUP.slot_for("Clutter") + 1).value is None

    assert ws["A11"].value == FOOTER_TEXT
    assert ws.freeze_panes == "A9"
    assert ws.column_dimensions["C"].width == 52

    merged = {str(cell_range) for cell_range in ws.merged_cells.ranges}
    assert {"A1:I1", "J1:T1", "U1:AF1", "A3:AF3", "I8:J8", "I9:J9", "A11:CX11"} <= merged


def test_entry_cells_leave_unknown_flags_blank() -> None:
    report = parse_report(
        report_lines(
            [
                "Pat Lee (777)",
                "1/2/2024 1/3/2024 7:45 PM",
                "Nursing Description",
                "Notes",
            ]
        )
    )
    cells = entry_cells(report.entries[0])
    assert cells[8] == ""
    assert cells[10] == ""
    assert cells[5] == "1/3/2024 7:45PM"
    assert set(cells) == set(range(14)) - {9}


def test_empty_report_still_has_layout() -> None:
    ws = build_workbook(parse_report(report_lines())).active
    assert ws.title == SHEET_NAME
    assert ws["A8"].value == "Incident #"
    assert ws["A9"].value == FOOTER_TEXT
