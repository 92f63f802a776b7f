"""Checklist vocabulary lookups built from the workbook column schema."""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Sequence

from .schema import (
    COLUMN_HEADERS,
    ENVIRONMENTAL_RANGE,
    INJURY_DURING_RANGE,
    PHYSIOLOGICAL_RANGE,
    SITUATIONAL_RANGE,
)

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_key(value: str) -> str:
    """Collapse internal whitespace, trim and lowercase ``value``."""

    return _WHITESPACE_RE.sub(" ", value or "").strip().lower()


@dataclass(frozen=True, slots=True)
class VocabularyEntry:
    """Column slot and canonical label for one checklist phrase."""

    slot: int
    label: str


class VocabularyLookup:
    """Read-only ``normalized phrase -> VocabularyEntry`` table."""

    __slots__ = ("name", "_entries")

    def __init__(self, name: str, entries: Mapping[str, VocabularyEntry]) -> None:
        self.name = name
        self._entries = MappingProxyType(dict(entries))

    def __contains__(self, phrase: object) -> bool:
        return isinstance(phrase, str) and normalize_key(phrase) in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, phrase: str) -> Optional[VocabularyEntry]:
        return self._entries.get(normalize_key(phrase))

    def canonical(self, phrase: str) -> Optional[str]:
        """Return the canonical label for ``phrase`` or ``None`` when unknown."""

        entry = self.get(phrase)
        return entry.label if entry else None

    def slot_for(self, phrase: str) -> Optional[int]:
        entry = self.get(phrase)
        return entry.slot if entry else None

    def __repr__(self) -> str:
        return f"VocabularyLookup({self.name!r}, {len(self)} phrases)"


def build_lookup(
    headers: Sequence[str],
    start: int,
    stop: int,
    *,
    name: str = "",
) -> VocabularyLookup:
    """Index ``headers[start:stop]``, skipping blank spacer labels.

    Keys are normalized with :func:`normalize_key`; values carry the schema
    index and the label with surrounding whitespace trimmed. A repeated key
    keeps the last slot seen.
    """

    entries: Dict[str, VocabularyEntry] = {}
    for index in range(max(0, start), min(stop, len(headers))):
        label = headers[index].strip()
        if not label:
            continue
        entries[normalize_key(label)] = VocabularyEntry(slot=index, label=label)
    return VocabularyLookup(name, entries)


INJURY_DURING_LOOKUP = build_lookup(COLUMN_HEADERS, *INJURY_DURING_RANGE, name="injury_during")
ENVIRONMENTAL_LOOKUP = build_lookup(COLUMN_HEADERS, *ENVIRONMENTAL_RANGE, name="environmental")
PHYSIOLOGICAL_LOOKUP = build_lookup(COLUMN_HEADERS, *PHYSIOLOGICAL_RANGE, name="physiological")
SITUATIONAL_LOOKUP = build_lookup(COLUMN_HEADERS, *SITUATIONAL_RANGE, name="situational")

FACTOR_LOOKUPS: Mapping[str, VocabularyLookup] = MappingProxyType(
    {
        "environmental": ENVIRONMENTAL_LOOKUP,
        "physiological": PHYSIOLOGICAL_LOOKUP,
        "situational": SITUATIONAL_LOOKUP,
    }
)


__all__ = [
    "ENVIRONMENTAL_LOOKUP",
    "FACTOR_LOOKUPS",
    "INJURY_DURING_LOOKUP",
    "PHYSIOLOGICAL_LOOKUP",
    "SITUATIONAL_LOOKUP",
    "VocabularyEntry",
    "VocabularyLookup",
    "build_lookup",
    "normalize_key",
]
