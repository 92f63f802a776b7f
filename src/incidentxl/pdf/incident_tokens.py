"""Token helpers for Y/N markers and room numbers in incident text."""

from __future__ import annotations

import re
from enum import Enum
from typing import Optional, Tuple


class Flag(str, Enum):
    """Tri-state value for the witnessed / sent-to-hospital columns."""

    Y = "Y"
    N = "N"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value

    @property
    def known(self) -> bool:
        return self is not Flag.UNKNOWN

    @property
    def cell_value(self) -> str:
        """Spreadsheet text: ``Y``/``N``, blank when unknown."""

        return self.value if self.known else ""


_TRUE_TOKENS = frozenset({"y", "yes"})
_FALSE_TOKENS = frozenset({"n", "no"})

ROOM_SUFFIX_RE = re.compile(r"(?P<wing>East|West)\s*(?P<number>\d+(?:-\d+)?)\s*$")
ROOM_ONLY_RE = re.compile(r"^(?:(?:East|West)\s*)?\d+(?:-\d+)?$")


def normalize_bool(value: Optional[str]) -> Flag:
    """Map ``y``/``yes`` to ``Y`` and ``n``/``no`` to ``N``; anything else is unknown."""

    if not value:
        return Flag.UNKNOWN
    key = value.strip().lower()
    if key in _TRUE_TOKENS:
        return Flag.Y
    if key in _FALSE_TOKENS:
        return Flag.N
    return Flag.UNKNOWN


def split_room_suffix(text: str) -> Tuple[str, str]:
    """Split a trailing ``East|West <n>[-<n>]`` room off ``text``.

    Returns ``(location, room)``; ``room`` is empty when no suffix is present.
    The wing and number are rejoined with one space, so ``"Common RoomWest
    100-1"`` becomes ``("Common Room", "West 100-1")``.
    """

    stripped = (text or "").strip()
    match = ROOM_SUFFIX_RE.search(stripped)
    if not match:
        return stripped, ""
    location = stripped[: match.start()].strip()
    return location, f"{match.group('wing')} {match.group('number')}"


def is_room_token(text: str) -> bool:
    """Return ``True`` when ``text`` is a room number standing on its own."""

    return bool(ROOM_ONLY_RE.match((text or "").strip()))


__all__ = [
    "Flag",
    "ROOM_ONLY_RE",
    "ROOM_SUFFIX_RE",
    "is_room_token",
    "normalize_bool",
    "split_room_suffix",
]
