"""Predisposing-factor section walker.

Runs after an entry's ``Notes`` marker and stops at the next entry boundary,
which it reports back through ``resume_index`` instead of consuming it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Mapping, Optional, Sequence, Set, Tuple

from incidentxl.report.model import FactorSets

from .boundary import is_entry_start
from .vocab import FACTOR_LOOKUPS, VocabularyLookup

LOGGER = logging.getLogger(__name__)

_SKIP_PREFIXES: Tuple[str, ...] = (
    "Total ",
    "Privileged and Confidential",
    "Page #",
    "Fall Incidents",
    "Date:",
    "Time:",
    "User:",
    "Resident Name",
    "Admission Date",
)


class Section(str, Enum):
    NONE = "none"
    ENVIRONMENTAL = "environmental"
    PHYSIOLOGICAL = "physiological"
    SITUATIONAL = "situational"


_SECTION_MARKERS: Tuple[Tuple[str, Section], ...] = (
    ("predisposing environmental", Section.ENVIRONMENTAL),
    ("predisposing physiological", Section.PHYSIOLOGICAL),
    ("predisposing situation", Section.SITUATIONAL),
)


@dataclass(frozen=True, slots=True)
class FactorScan:
    """Collected factors and the index of the first unconsumed line."""

    factors: FactorSets
    resume_index: int


@dataclass(slots=True)
class _Collector:
    lookups: Mapping[str, VocabularyLookup]
    section: Section = Section.NONE
    found: Dict[Section, Set[str]] = field(default_factory=dict)

    def add_phrases(self, text: str) -> None:
        if self.section is Section.NONE:
            return
        lookup = self.lookups[self.section.value]
        bucket = self.found.setdefault(self.section, set())
        for chunk in text.split(","):
            cleaned = chunk.strip()
            if not cleaned:
                continue
            label = lookup.canonical(cleaned)
            if label is not None:
                bucket.add(label)
            else:
                LOGGER.debug("Unrecognized %s factor: %r", self.section.value, cleaned)

    def result(self) -> FactorSets:
        return FactorSets(
            environmental=frozenset(self.found.get(Section.ENVIRONMENTAL, ())),
            physiological=frozenset(self.found.get(Section.PHYSIOLOGICAL, ())),
            situational=frozenset(self.found.get(Section.SITUATIONAL, ())),
        )


def section_for_line(text: str) -> Optional[Section]:
    """Return the section a header line opens, or ``None``."""

    lowered = text.lower()
    for marker, section in _SECTION_MARKERS:
        if marker in lowered:
            return section
    return None


def is_skippable(text: str) -> bool:
    """Return ``True`` for report furniture that never changes the section state."""

    return not text or text.startswith(_SKIP_PREFIXES)


def _after_colon(text: str) -> str:
    _, colon, tail = text.partition(":")
    return tail if colon else text


def collect_factors(
    lines: Sequence[str],
    start: int,
    lookups: Mapping[str, VocabularyLookup] = FACTOR_LOOKUPS,
) -> FactorScan:
    """Walk ``lines`` from ``start`` collecting predisposing factors.

    Returns when the next entry boundary is reached (its index becomes
    ``resume_index``) or at end of input.
    """

    collector = _Collector(lookups=lookups)
    index = start
    while index < len(lines):
        stripped = lines[index].strip()
        if is_skippable(stripped):
            index += 1
            continue
        # Also true for factor lines such as "Side rail(s) up, Admitted within Last 72h".
        if is_entry_start(stripped):
            break
        index += 1

        section = section_for_line(stripped)
        if section is not None:
            collector.section = section
            _, colon, tail = stripped.partition(":")
            if colon:
                collector.add_phrases(tail)
            continue
        if stripped == "Notes":
            continue
        collector.add_phrases(_after_colon(stripped))

    return FactorScan(factors=collector.result(), resume_index=index)


def factor_labels(factors: FactorSets) -> Iterable[Tuple[str, str]]:
    """Yield ``(group, label)`` pairs in a stable order."""

    for group, labels in factors.groups():
        for label in sorted(labels):
            yield group, label


__all__ = [
    "FactorScan",
    "FactorSets",
    "Section",
    "collect_factors",
    "factor_labels",
    "is_skippable",
    "section_for_line",
]
