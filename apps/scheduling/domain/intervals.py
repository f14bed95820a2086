"""Wall-clock interval algebra.

Open time for one date is kept as a sorted list of disjoint half-open
``[start, end)`` intervals measured in minutes since midnight. Exceptions
are applied with :func:`subtract` and :func:`union`, so a blocked range
that only partially overlaps an open interval splits it instead of being
ignored.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Iterable

from shared.domain.base import ValueObject

from .errors import ScheduleValidationError

MINUTES_PER_DAY = 24 * 60


def parse_clock(value, *, field: str | None = None) -> int:
    """Return minutes since midnight for ``HH:MM``, ``HH:MM:SS`` or a ``time``."""

    if isinstance(value, time):
        return value.hour * 60 + value.minute
    if not isinstance(value, str):
        raise ScheduleValidationError(f"Expected a HH:MM time, got {value!r}.", field=field)
    parts = value.strip().split(":")
    if len(parts) not in (2, 3) or not all(part.isdigit() for part in parts):
        raise ScheduleValidationError(f"Invalid time {value!r}, expected HH:MM.", field=field)
    hours, minutes = int(parts[0]), int(parts[1])
    if hours > 23 or minutes > 59 or (len(parts) == 3 and int(parts[2]) > 59):
        raise ScheduleValidationError(f"Invalid time {value!r}, expected HH:MM.", field=field)
    return hours * 60 + minutes


def format_clock(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def to_time(minutes: int) -> time:
    return time(minutes // 60, minutes % 60)


@dataclass(frozen=True, order=True)
class TimeInterval(ValueObject):
    """Half-open wall-clock interval, no date and no timezone attached."""

    start: int
    end: int

    def __post_init__(self):
        if not (0 <= self.start < MINUTES_PER_DAY and 0 < self.end <= MINUTES_PER_DAY):
            raise ScheduleValidationError(
                f"Interval {self.start}-{self.end} falls outside a single day."
            )
        if self.start >= self.end:
            raise ScheduleValidationError(
                f"Start time {format_clock(self.start)} must be before end time {format_clock(self.end)}."
            )

    @classmethod
    def from_strings(cls, start, end) -> "TimeInterval":
        return cls(parse_clock(start, field="start"), parse_clock(end, field="end"))

    @property
    def length(self) -> int:
        return self.end - self.start

    def overlaps(self, other: "TimeInterval") -> bool:
        return self.start < other.end and other.start < self.end

    def contains(self, other: "TimeInterval") -> bool:
        return self.start <= other.start and other.end <= self.end

    def as_dict(self) -> dict:
        return {"start": format_clock(self.start), "end": format_clock(self.end)}

    def __str__(self):
        return f"{format_clock(self.start)}-{format_clock(self.end)}"


# Whole-day exceptions open the date from midnight to 23:59.
FULL_DAY = TimeInterval(0, MINUTES_PER_DAY - 1)


def normalize(intervals: Iterable[TimeInterval]) -> list[TimeInterval]:
    """Sort and merge overlapping or touching intervals."""

    merged: list[TimeInterval] = []
    for interval in sorted(intervals):
        if merged and interval.start <= merged[-1].end:
            last = merged[-1]
            if interval.end > last.end:
                merged[-1] = TimeInterval(last.start, interval.end)
            continue
        merged.append(interval)
    return merged


def union(intervals: Iterable[TimeInterval], added: TimeInterval) -> list[TimeInterval]:
    return normalize([*intervals, added])


def subtract(intervals: Iterable[TimeInterval], blocked: TimeInterval) -> list[TimeInterval]:
    """Remove ``blocked`` from every interval, splitting where needed."""

    result: list[TimeInterval] = []
    for interval in normalize(intervals):
        if not interval.overlaps(blocked):
            result.append(interval)
            continue
        if interval.start < blocked.start:
            result.append(TimeInterval(interval.start, blocked.start))
        if blocked.end < interval.end:
            result.append(TimeInterval(blocked.end, interval.end))
    return result


def find_overlap(intervals: Iterable[TimeInterval]) -> tuple[TimeInterval, TimeInterval] | None:
    """Return the first pair of overlapping intervals, if any.

    Touching intervals (``09:00-12:00`` and ``12:00-15:00``) do not overlap.
    """

    ordered = sorted(intervals)
    for previous, current in zip(ordered, ordered[1:]):
        if current.start < previous.end:
            return previous, current
    return None
