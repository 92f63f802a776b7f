from __future__ import annotations

import pytest

from incidentxl.pdf.incident_tokens import Flag, is_room_token, normalize_bool, split_room_suffix


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Y", Flag.Y),
        ("yes", Flag.Y),
        (" YES ", Flag.Y),
        ("n", Flag.N),
        ("No", Flag.N),
        ("", Flag.UNKNOWN),
        (None, Flag.UNKNOWN),
        ("maybe", Flag.UNKNOWN),
        ("Yes, staff present", Flag.UNKNOWN),
    ],
)
def test_normalize_bool_is_total(raw, expected) -> None:
    flag = normalize_bool(raw)
    assert flag is expected
    assert str(flag) in {"Y", "N", "unknown"}


def test_unknown_flag_writes_blank_cell() -> None:
    assert Flag.UNKNOWN.cell_value == ""
    assert Flag.Y.cell_value == "Y"
    assert not Flag.UNKNOWN.known


def test_split_room_suffix_separates_glued_room() -> None:
    assert split_room_suffix("Common RoomWest 100-1") == ("Common Room", "West 100-1")
    assert split_room_suffix("Dining Room East 12") == ("Dining Room", "East 12")
    assert split_room_suffix("Hallway") == ("Hallway", "")


def test_is_room_token() -> None:
    assert is_room_token("West 200-2")
    assert is_room_token("114")
    assert not is_room_token("Hallway")
    assert not is_room_token("Common RoomWest 100-1")
