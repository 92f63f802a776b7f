from __future__ import annotations

from pathlib import Path

import fitz  # type: ignore
import pytest

from incidentxl.pdf.incident_parser import parse_document
from incidentxl.pdf.text_lines import read_lines, split_lines

from .fixtures import INLINE_ENTRY_LINES, report_lines


def _make_pdf(tmp_path: Path, lines) -> Path:
    doc = fitz.open()
    page = doc.new_page(width=612, height=792)
    y = 40
    for line in lines:
        if line:
            page.insert_text((36, y), line, fontsize=9)
        y += 14
    pdf_path = tmp_path / "falls.pdf"
    doc.save(pdf_path)
    doc.close()
    return pdf_path


def test_split_lines_drops_carriage_returns() -> None:
    assert split_lines("a\r\nb\nc") == ["a", "b", "c"]
    assert split_lines("") == [""]


def test_read_lines_from_pdf(tmp_path: Path) -> None:
    pdf_path = _make_pdf(tmp_path, ["Date: 3/5/2024", "User: Nurse Admin"])
    lines = [line.strip() for line in read_lines(pdf_path)]
    assert "Date: 3/5/2024" in lines
    assert "User: Nurse Admin" in lines


def test_parse_document_from_pdf(tmp_path: Path) -> None:
    pdf_path = _make_pdf(tmp_path, report_lines(INLINE_ENTRY_LINES))
    report = parse_document(pdf_path)
    assert report.source_name == "falls.pdf"
    assert report.metadata.facility == "Sunrise Manor"
    assert [entry.resident_id for entry in report.entries] == ["12345"]
    assert report.entries[0].room_number == "West 100-1"


def test_read_lines_from_text(tmp_path: Path) -> None:
    source = tmp_path / "falls.txt"
    source.write_text("Date: 3/5/2024\r\nUser: Nurse Admin\n", encoding="utf-8")
    assert read_lines(source) == ["Date: 3/5/2024", "User: Nurse Admin", ""]


def test_read_lines_rejects_unknown_inputs(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        read_lines(tmp_path / "missing.pdf")
    other = tmp_path / "falls.docx"
    other.write_text("x", encoding="utf-8")
    with pytest.raises(ValueError):
        read_lines(other)
