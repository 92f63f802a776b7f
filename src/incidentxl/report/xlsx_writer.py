"""Excel workbook writer for the incident analysis layout."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from incidentxl.pdf.schema import (
    COLUMN_HEADERS,
    FOOTER_TEXT,
    GROUP_BANDS,
    HEADER_ROWS,
    REPORT_TITLE,
    SHEET_NAME,
    column_width,
    merge_end,
)
from incidentxl.pdf.vocab import FACTOR_LOOKUPS, INJURY_DURING_LOOKUP, VocabularyLookup

from .model import IncidentEntry, ParsedReport, ReportMetadata

LOGGER = logging.getLogger(__name__)

_THIN = Side(style="thin")
_THIN_BORDER = Border(left=_THIN, right=_THIN, top=_THIN, bottom=_THIN)

_HEADER_FONT = Font(name="Arial", size=11, bold=True)
_HEADER_FILL = PatternFill(start_color="FF808080", end_color="FF808080", fill_type="solid")
_HEADER_ALIGN = Alignment(horizontal="center", vertical="center", wrap_text=True)

_DATA_FONT = Font(name="Arial", size=10)
_DATA_ALIGN = Alignment(vertical="top", wrap_text=True)

_GROUP_FONT = Font(name="Arial", size=10, bold=True)
_GROUP_FILL = PatternFill(start_color="FFD6E3F0", end_color="FFD6E3F0", fill_type="solid")
_GROUP_ALIGN = Alignment(horizontal="center", vertical="center")

_META_FONT = Font(name="Arial", size=11, bold=True)
_META_ALIGN = Alignment(horizontal="left", vertical="center")

_FOOTER_FONT = Font(name="Arial", size=10, italic=True)

_GROUP_ROW = HEADER_ROWS - 1
_COLUMN_HEADER_ROW = HEADER_ROWS
_ROW_HEIGHT = 32
_GROUP_ROW_HEIGHT = 27


def _style(cell, font: Font, alignment: Alignment, *, fill: PatternFill | None = None, border: bool = False) -> None:
    cell.font = font
    cell.alignment = alignment
    if fill is not None:
        cell.fill = fill
    if border:
        cell.border = _THIN_BORDER


def _write_span(ws: Worksheet, row: int, first_col: int, last_col: int, value: str, **style) -> None:
    """Write ``value`` at ``(row, first_col)`` merged through ``last_col`` (1-based)."""

    cell = ws.cell(row=row, column=first_col, value=value)
    _style(cell, **style)
    if last_col > first_col:
        ws.merge_cells(start_row=row, start_column=first_col, end_row=row, end_column=last_col)


def _write_value(ws: Worksheet, row: int, col: int, value: str) -> None:
    """Write a data ``value`` at 0-based ``col`` honouring the value merge spans."""

    _write_span(
        ws,
        row,
        col + 1,
        merge_end(col) + 1,
        value,
        font=_DATA_FONT,
        alignment=_DATA_ALIGN,
        border=True,
    )


def _apply_column_widths(ws: Worksheet) -> None:
    for col in range(len(COLUMN_HEADERS)):
        ws.column_dimensions[get_column_letter(col + 1)].width = column_width(col)


def _write_metadata_rows(ws: Worksheet, meta: ReportMetadata) -> None:
    meta_style = {"font": _META_FONT, "alignment": _META_ALIGN}
    _write_span(ws, 1, 1, 9, f"Date:  {meta.date_value}", **meta_style)
    _write_span(ws, 1, 10, 20, meta.facility, **meta_style)
    _write_span(ws, 1, 21, 32, "Facility #: ", **meta_style)
    _write_span(ws, 2, 1, 9, f"Time: {meta.time_value}", **meta_style)
    _write_span(ws, 2, 10, 20, REPORT_TITLE, **meta_style)
    _write_span(ws, 3, 1, 32, f"User:  {meta.user}", **meta_style)
    _write_span(ws, 4, 1, 32, meta.resident_status_line or "Resident Status:", **meta_style)
    _write_span(ws, 5, 1, 32, meta.incident_status_line or "Incident Status:", **meta_style)
    _write_span(ws, 6, 1, 32, meta.reporting_period_line or "Reporting Period :", **meta_style)


def _write_group_row(ws: Worksheet) -> None:
    for label, first_col, last_col in GROUP_BANDS:
        _write_span(
            ws,
            _GROUP_ROW,
            first_col,
            last_col,
            label,
            font=_GROUP_FONT,
            alignment=_GROUP_ALIGN,
            fill=_GROUP_FILL,
            border=True,
        )
    ws.row_dimensions[_GROUP_ROW].height = _GROUP_ROW_HEIGHT


def _write_column_headers(ws: Worksheet) -> None:
    for col, label in enumerate(COLUMN_HEADERS):
        if not label:
            continue
        _write_span(
            ws,
            _COLUMN_HEADER_ROW,
            col + 1,
            merge_end(col) + 1,
            label,
            font=_HEADER_FONT,
            alignment=_HEADER_ALIGN,
            fill=_HEADER_FILL,
            border=True,
        )
    ws.row_dimensions[_COLUMN_HEADER_ROW].height = _ROW_HEIGHT


def _checklist_slots(labels: Iterable[str], lookup: VocabularyLookup) -> Iterable[int]:
    for label in labels:
        slot = lookup.slot_for(label)
        if slot is None:
            LOGGER.debug("No %s column for %r", lookup.name, label)
            continue
        yield slot


def entry_cells(entry: IncidentEntry) -> Dict[int, str]:
    """Return ``{0-based column: text}`` for one entry row."""

    cells: Dict[int, str] = {
        0: entry.incident_number_text,
        1: entry.incident_type,
        2: entry.resident_name,
        3: entry.resident_id,
        4: entry.admission,
        5: entry.incident_datetime,
        6: entry.location,
        7: entry.incident_status,
        8: entry.witnessed.cell_value,
        10: entry.sent_to_hospital.cell_value,
        11: entry.room_number,
        12: entry.immediate_action_text,
        13: entry.nursing_description,
    }
    for slot in _checklist_slots(entry.injuries_during, INJURY_DURING_LOOKUP):
        cells[slot] = "Y"
    for group, labels in entry.factors.groups():
        for slot in _checklist_slots(labels, FACTOR_LOOKUPS[group]):
            cells[slot] = "Y"
    return cells


def _write_entries(ws: Worksheet, entries: Iterable[IncidentEntry]) -> int:
    row = HEADER_ROWS
    for entry in entries:
        row += 1
        ws.row_dimensions[row].height = _ROW_HEIGHT
        for col, value in sorted(entry_cells(entry).items()):
            _write_value(ws, row, col, value)
    return row


def _write_footer(ws: Worksheet, row: int) -> None:
    _write_span(
        ws,
        row,
        1,
        len(COLUMN_HEADERS),
        FOOTER_TEXT,
        font=_FOOTER_FONT,
        alignment=_META_ALIGN,
    )


def build_workbook(report: ParsedReport) -> Workbook:
    """Return an in-memory workbook for ``report``."""

    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_NAME
    _apply_column_widths(ws)
    _write_metadata_rows(ws, report.metadata)
    _write_group_row(ws)
    _write_column_headers(ws)
    last_row = _write_entries(ws, report.entries)
    _write_footer(ws, last_row + 1)
    ws.freeze_panes = f"A{HEADER_ROWS + 1}"
    return wb


def write_workbook(report: ParsedReport, out_path: Path) -> Path:
    """Write ``report`` as an ``.xlsx`` workbook to ``out_path`` and return the path."""

    out_path.parent.mkdir(parents=True, exist_ok=True)
    wb = build_workbook(report)
    wb.save(out_path)
    LOGGER.info("Wrote workbook %s (%d entries)", out_path, len(report.entries))
    return out_path


__all__ = ["build_workbook", "entry_cells", "write_workbook"]
