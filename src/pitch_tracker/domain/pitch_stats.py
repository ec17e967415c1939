"""Derived statistics over the pitch log.

Every function here is pure: it reads the events it is given and never
mutates them. Rates over an empty log are ``None`` (reported as N/A) rather
than a division by zero.
"""

from __future__ import annotations

import math
from collections import defaultdict
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from pitch_tracker.domain.pitch import PitchEvent, PitchType


@dataclass(frozen=True)
class PitchSummary:
    total: int
    strikes: int
    whiffs: int

    @property
    def strike_rate(self) -> float | None:
        return _rate(self.strikes, self.total)

    @property
    def whiff_rate(self) -> float | None:
        return _rate(self.whiffs, self.total)


@dataclass(frozen=True)
class PitchTypeLine:
    pitch_type: PitchType
    total: int
    strike_rate: float | None
    whiff_rate: float | None


class RecentEvents:
    """Most-recent-first view over the tail of a pitch log.

    Iterating walks the underlying sequence backwards on every pass, so the
    view can be iterated any number of times without copying the log.
    """

    def __init__(self, events: Sequence[PitchEvent], n: int) -> None:
        self._events = events
        self._count = max(0, min(n, len(events)))

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[PitchEvent]:
        last = len(self._events) - 1
        for offset in range(self._count):
            yield self._events[last - offset]

    def __bool__(self) -> bool:
        return self._count > 0


def _rate(numerator: int, denominator: int) -> float | None:
    if denominator == 0:
        return None
    return numerator / denominator


def total_pitches(events: Sequence[PitchEvent]) -> int:
    return len(events)


def strike_rate(events: Sequence[PitchEvent]) -> float | None:
    return _rate(sum(1 for e in events if e.is_strike), len(events))


def whiff_rate(events: Sequence[PitchEvent]) -> float | None:
    return _rate(sum(1 for e in events if e.is_whiff), len(events))


def summarize(events: Sequence[PitchEvent]) -> PitchSummary:
    return PitchSummary(
        total=len(events),
        strikes=sum(1 for e in events if e.is_strike),
        whiffs=sum(1 for e in events if e.is_whiff),
    )


def pitch_type_breakdown(events: Sequence[PitchEvent]) -> tuple[PitchTypeLine, ...]:
    """Per pitch type totals and rates, omitting types never thrown.

    Rows follow the canonical pitch type order, not first appearance.
    """
    grouped: defaultdict[PitchType, list[PitchEvent]] = defaultdict(list)
    for event in events:
        grouped[event.pitch_type].append(event)

    lines: list[PitchTypeLine] = []
    for pitch_type in PitchType:
        subset = grouped.get(pitch_type)
        if not subset:
            continue
        lines.append(
            PitchTypeLine(
                pitch_type=pitch_type,
                total=total_pitches(subset),
                strike_rate=strike_rate(subset),
                whiff_rate=whiff_rate(subset),
            )
        )
    return tuple(lines)


def recent_events(events: Sequence[PitchEvent], n: int) -> RecentEvents:
    return RecentEvents(events, n)


def format_rate(rate: float | None) -> str:
    """Render a rate as a whole percentage rounded half up, or ``N/A``."""
    if rate is None:
        return "N/A"
    return f"{math.floor(rate * 100 + 0.5)}%"
