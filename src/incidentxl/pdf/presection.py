"""Backward peeling of the block that precedes the Nursing Description marker.

The block ends with a fixed run of positional fields (location, witnessed,
room, sent to hospital, injuries). Each field is peeled off the end by a small
named step; steps are composed into per-layout pipelines so a vendor variant
can swap one heuristic without touching the rest.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Optional, Sequence, Tuple

from .incident_tokens import Flag, is_room_token, normalize_bool, split_room_suffix
from .vocab import INJURY_DURING_LOOKUP, VocabularyLookup


@dataclass(frozen=True, slots=True)
class PeelState:
    """Lines still to be peeled plus the fields recovered so far."""

    remaining: Tuple[str, ...]
    injuries: Tuple[str, ...] = ()
    sent_to_hospital: Flag = Flag.UNKNOWN
    witnessed: Flag = Flag.UNKNOWN
    room: str = ""
    location: str = ""

    @property
    def last(self) -> Optional[str]:
        return self.remaining[-1] if self.remaining else None

    def drop_last(self) -> Tuple[str, ...]:
        return self.remaining[:-1]

    @property
    def narrative(self) -> str:
        return " ".join(self.remaining).strip()


PeelStep = Callable[[PeelState], PeelState]


@dataclass(frozen=True, slots=True)
class PreSection:
    """Fields recovered from one pre-section block."""

    narrative: str = ""
    location: str = ""
    witnessed: Flag = Flag.UNKNOWN
    room: str = ""
    sent_to_hospital: Flag = Flag.UNKNOWN
    injuries: Tuple[str, ...] = ()


def peel_injuries(lookup: VocabularyLookup = INJURY_DURING_LOOKUP) -> PeelStep:
    """Peel every trailing line that is a known injury phrase."""

    def step(state: PeelState) -> PeelState:
        remaining = list(state.remaining)
        injuries = list(state.injuries)
        while remaining:
            label = lookup.canonical(remaining[-1])
            if label is None:
                break
            injuries.insert(0, label)
            remaining.pop()
        return replace(state, remaining=tuple(remaining), injuries=tuple(injuries))

    step.__name__ = "peel_injuries"
    return step


def peel_flag(field: str) -> PeelStep:
    """Peel one trailing Y/N token into ``field`` when present."""

    def step(state: PeelState) -> PeelState:
        if state.last is None:
            return state
        flag = normalize_bool(state.last)
        if not flag.known:
            return state
        return replace(state, remaining=state.drop_last(), **{field: flag})

    step.__name__ = f"peel_flag[{field}]"
    return step


def peel_line(field: str) -> PeelStep:
    """Peel the trailing line into ``field`` whatever it contains."""

    def step(state: PeelState) -> PeelState:
        if state.last is None:
            return state
        return replace(state, remaining=state.drop_last(), **{field: state.last})

    step.__name__ = f"peel_line[{field}]"
    return step


def split_merged_room(state: PeelState) -> PeelState:
    """Split ``"<location><East|West n-n>"`` on the trailing line into two lines.

    Runs only when the trailing line is not already a room on its own.
    """

    last = state.last
    if last is None or is_room_token(last):
        return state
    location, room = split_room_suffix(last)
    if not room or not location:
        return state
    return replace(state, remaining=state.drop_last() + (location, room))


MULTILINE_STEPS: Tuple[PeelStep, ...] = (
    peel_injuries(),
    peel_flag("sent_to_hospital"),
    split_merged_room,
    peel_line("room"),
    peel_flag("witnessed"),
    peel_line("location"),
)

# Inline entries carry location and room on the boundary line.
INLINE_STEPS: Tuple[PeelStep, ...] = (
    peel_injuries(),
    peel_flag("sent_to_hospital"),
    peel_flag("witnessed"),
)


def run_pipeline(lines: Sequence[str], steps: Sequence[PeelStep]) -> PreSection:
    """Apply ``steps`` in order to ``lines`` and return the recovered fields."""

    state = PeelState(remaining=tuple(line.strip() for line in lines if line and line.strip()))
    for step in steps:
        state = step(state)
    return PreSection(
        narrative=state.narrative,
        location=state.location,
        witnessed=state.witnessed,
        room=state.room,
        sent_to_hospital=state.sent_to_hospital,
        injuries=state.injuries,
    )


def parse_pre_section(lines: Sequence[str], *, inline: bool = False) -> PreSection:
    """Peel the pre-section ``lines`` using the pipeline for the entry layout."""

    return run_pipeline(lines, INLINE_STEPS if inline else MULTILINE_STEPS)


__all__ = [
    "INLINE_STEPS",
    "MULTILINE_STEPS",
    "PeelState",
    "PeelStep",
    "PreSection",
    "parse_pre_section",
    "peel_flag",
    "peel_injuries",
    "peel_line",
    "run_pipeline",
    "split_merged_room",
]
