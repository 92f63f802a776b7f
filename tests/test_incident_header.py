"""Report header extraction tests."""

from __future__ import annotations

import unittest

from incidentxl.pdf.incident_header import parse_metadata
from incidentxl.report.model import ReportMetadata

from .fixtures import HEADER_LINES


class MetadataTests(unittest.TestCase):
    def test_header_fields(self) -> None:
        meta = parse_metadata(HEADER_LINES)
        self.assertEqual(meta.date_value, "3/5/2024")
        self.assertEqual(meta.time_value, "10:00 AM")
        self.assertEqual(meta.user, "Nurse Admin")
        self.assertEqual(meta.facility, "Sunrise Manor")
        self.assertEqual(meta.resident_status_line, "Resident Status: Active")
        self.assertEqual(meta.incident_status_line, "Incident Status: Completed")
        self.assertEqual(meta.reporting_period_line, "Reporting Period : 3/1/2024 - 3/31/2024")

    def test_facility_waits_for_user(self) -> None:
        lines = ["Fall Report Export", "Date: 1/2/2024", "User: Pat Lee", "Page # 1", "Oak Ridge"]
        meta = parse_metadata(lines)
        self.assertEqual(meta.facility, "Oak Ridge")

    def test_facility_skips_incident_lines(self) -> None:
        lines = ["User: Pat Lee", "Incident By Incident Type", "Oak Ridge"]
        self.assertEqual(parse_metadata(lines).facility, "Oak Ridge")

    def test_first_occurrence_wins(self) -> None:
        lines = ["Date: 1/2/2024", "User: Pat Lee", "Oak Ridge", "Date: 9/9/2024"]
        self.assertEqual(parse_metadata(lines).date_value, "1/2/2024")

    def test_scan_stops_after_period_and_facility(self) -> None:
        lines = [
            "User: Pat Lee",
            "Oak Ridge",
            "Reporting Period : 3/1/2024 - 3/31/2024",
            "Time: 09:00",
            "Resident Status : Active",
        ]
        meta = parse_metadata(lines)
        self.assertEqual(meta.facility, "Oak Ridge")
        self.assertEqual(meta.time_value, "")
        self.assertEqual(meta.resident_status_line, "")

    def test_unit_and_floor_spacing(self) -> None:
        meta = parse_metadata(["Resident Status : Active Unit : All Floor : 2"])
        self.assertEqual(meta.resident_status_line, "Resident Status: Active Unit: All Floor: 2")

    def test_missing_fields_default_to_empty(self) -> None:
        self.assertEqual(parse_metadata([]), ReportMetadata())
        self.assertEqual(parse_metadata(["", "random text"]).facility, "")


if __name__ == "__main__":
    unittest.main()
