"""End-to-end parsing of synthetic line streams."""

from __future__ import annotations

import unittest
from datetime import datetime

from incidentxl.errors import ConversionError
from incidentxl.pdf.incident_blocks import collect_until, parse_entries
from incidentxl.pdf.incident_parser import parse_report
from incidentxl.pdf.incident_tokens import Flag

from .fixtures import INLINE_ENTRY_LINES, MULTILINE_ENTRY_LINES, report_lines, undated_entry_lines


class InlineEntryTests(unittest.TestCase):
    def test_inline_entry(self) -> None:
        report = parse_report(report_lines(INLINE_ENTRY_LINES), source_name="falls.pdf")
        self.assertEqual(len(report), 1)
        entry = report.entries[0]
        self.assertEqual(entry.resident_name, "Jane Doe")
        self.assertEqual(entry.resident_id, "12345")
        self.assertEqual(entry.admission, "3/1/2024")
        self.assertEqual(entry.incident_datetime, "3/2/2024 2:15PM")
        self.assertEqual(entry.incident_instant, datetime(2024, 3, 2, 14, 15))
        self.assertEqual(entry.location, "Common Room")
        self.assertEqual(entry.room_number, "West 100-1")
        self.assertIs(entry.witnessed, Flag.Y)
        self.assertIs(entry.sent_to_hospital, Flag.N)
        self.assertEqual(entry.factors.environmental, frozenset({"Wet Floor", "Poor Lighting"}))
        self.assertEqual(entry.factors.physiological, frozenset())
        self.assertEqual(entry.nursing_description, "Resident found on floor")
        self.assertEqual(entry.immediate_action_text, "Assisted back to bed")
        self.assertEqual(entry.incident_number, 1)
        self.assertEqual(entry.incident_type, "Fall")
        self.assertEqual(report.metadata.facility, "Sunrise Manor")
        self.assertEqual(report.source_name, "falls.pdf")


class MultiLineEntryTests(unittest.TestCase):
    def test_multiline_entry(self) -> None:
        entries = parse_entries(report_lines(MULTILINE_ENTRY_LINES))
        self.assertEqual(len(entries), 1)
        entry = entries[0]
        self.assertEqual(entry.resident_name, "John Smith")
        self.assertEqual(entry.admission, "2/10/2023")
        self.assertEqual(entry.incident_datetime, "3/4/2024 9:05AM")
        self.assertEqual(entry.location, "Hallway")
        self.assertEqual(entry.room_number, "West 200-2")
        self.assertIs(entry.witnessed, Flag.N)
        self.assertIs(entry.sent_to_hospital, Flag.Y)
        self.assertEqual(entry.injuries_during, frozenset({"Bruise", "Skin Tear"}))
        self.assertEqual(entry.injuries_post, frozenset())
        self.assertEqual(entry.factors.physiological, frozenset({"Gait Imbalance", "Weakness/Fainted"}))
        self.assertEqual(entry.factors.situational, frozenset({"Using Walker"}))
        self.assertEqual(entry.immediate_action_text, "Found sitting near door")
        self.assertIsNone(entry.incident_number)

    def test_admission_date_on_the_boundary_line(self) -> None:
        lines = [
            "John Smith (67890) 2/10/2023",
            "3/4/2024 9:05 AM",
            "Hallway",
            "N",
            "West 200-2",
            "Y",
            "Nursing Description",
            "Notes",
        ]
        entry = parse_entries(report_lines(lines))[0]
        self.assertEqual(entry.admission, "2/10/2023")
        self.assertEqual(entry.incident_datetime, "3/4/2024 9:05AM")
        self.assertEqual(entry.location, "Hallway")
        self.assertEqual(entry.room_number, "West 200-2")

    def test_entries_are_ordered_newest_first(self) -> None:
        report = parse_report(report_lines(INLINE_ENTRY_LINES, MULTILINE_ENTRY_LINES))
        self.assertEqual([entry.resident_name for entry in report.entries], ["John Smith", "Jane Doe"])
        self.assertEqual([entry.incident_number for entry in report.entries], [1, 2])
        self.assertEqual(report.entries[1].factors.environmental, frozenset({"Wet Floor", "Poor Lighting"}))

    def test_parsing_is_idempotent(self) -> None:
        lines = report_lines(INLINE_ENTRY_LINES, MULTILINE_ENTRY_LINES)
        self.assertEqual(parse_report(lines), parse_report(lines))

    def test_report_without_entries(self) -> None:
        report = parse_report(report_lines())
        self.assertEqual(report.entries, ())
        self.assertEqual(report.metadata.user, "Nurse Admin")


class ValidationTests(unittest.TestCase):
    def test_five_undated_entries_are_rejected(self) -> None:
        lines = report_lines(*(undated_entry_lines(number) for number in range(1, 6)))
        with self.assertRaises(ConversionError) as ctx:
            parse_report(lines, source_name="broken.pdf")
        error = ctx.exception
        self.assertIsInstance(error, ValueError)
        self.assertEqual(error.file_name, "broken.pdf")
        self.assertEqual(error.sheet_name, "incident_analysis_report")
        self.assertEqual(error.row_numbers, (9, 10, 11, 12, 13))
        self.assertEqual(error.missing_fields, ("Incident Date/Time",))
        self.assertFalse(error.looks_like_merged_columns)

    def test_one_dated_entry_is_enough(self) -> None:
        entries = [undated_entry_lines(number) for number in range(1, 6)]
        entries[2] = undated_entry_lines(3, incident="3/1/2024 10:00 AM")
        report = parse_report(report_lines(*entries))
        self.assertEqual(len(report), 5)
        self.assertEqual(report.entries[0].resident_name, "Resident 3")
        self.assertEqual(report.entries[-1].incident_datetime, "Pending")

    def test_fewer_than_five_undated_entries_are_rejected(self) -> None:
        lines = report_lines(undated_entry_lines(1), undated_entry_lines(2))
        with self.assertRaises(ConversionError) as ctx:
            parse_report(lines)
        self.assertEqual(ctx.exception.row_numbers, (9, 10))

    def test_only_the_first_five_are_checked(self) -> None:
        entries = [undated_entry_lines(number) for number in range(1, 6)]
        entries.append(undated_entry_lines(6, incident="3/1/2024 10:00 AM"))
        with self.assertRaises(ConversionError):
            parse_report(report_lines(*entries))

    def test_glued_columns_are_flagged(self) -> None:
        glued = ["Glued Resident (4242)3/1/20243/2/2024Dining", "Nursing Description", "Notes"]
        with self.assertRaises(ConversionError) as ctx:
            parse_report(report_lines(glued))
        self.assertTrue(ctx.exception.looks_like_merged_columns)


class CollectUntilTests(unittest.TestCase):
    def test_marker_consumed_and_blank_lines_dropped(self) -> None:
        lines = ["a", "", " b ", "Notes", "c"]
        self.assertEqual(collect_until(lines, 0, "Notes"), (["a", "b"], 4))

    def test_missing_marker_runs_to_end(self) -> None:
        self.assertEqual(collect_until(["a", "b"], 0, "Notes"), (["a", "b"], 2))


if __name__ == "__main__":
    unittest.main()
