"""Slot generation.

Resolved open intervals are cut into atomic slots of the facility's
increment. A renter then picks a start slot and a total duration; only
starts with enough contiguous open time for that duration are bookable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from shared.domain.base import ValueObject

from .config import AvailabilityConfig
from .errors import ScheduleValidationError
from .intervals import TimeInterval, format_clock, normalize

DEFAULT_DURATION_CEILING = 8 * 60


@dataclass(frozen=True, order=True)
class Slot(ValueObject):
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start

    def as_dict(self) -> dict:
        return {"start": format_clock(self.start), "end": format_clock(self.end)}

    def __str__(self):
        return f"{format_clock(self.start)}-{format_clock(self.end)}"


def _validate_increment(increment: int) -> None:
    if increment <= 0:
        raise ScheduleValidationError("Increment must be a positive number of minutes.", field="availability_increment")


def slots_in(interval: TimeInterval, increment: int) -> list[Slot]:
    """Walk ``interval`` in ``increment`` steps; a trailing partial step is dropped."""

    _validate_increment(increment)
    slots = []
    cursor = interval.start
    while cursor + increment <= interval.end:
        slots.append(Slot(cursor, cursor + increment))
        cursor += increment
    return slots


def generate_slots(intervals: Iterable[TimeInterval], increment: int) -> list[Slot]:
    """Concatenate slots of every interval, in interval then chronological order."""

    slots: list[Slot] = []
    for interval in intervals:
        slots.extend(slots_in(interval, increment))
    return slots


def duration_options(config: AvailabilityConfig, ceiling: int = DEFAULT_DURATION_CEILING) -> list[int]:
    """Selectable rental durations: effective minimum to ``ceiling`` in increment steps."""

    increment = config.availability_increment
    _validate_increment(increment)
    return list(range(config.effective_minimum_duration, ceiling + 1, increment))


def validate_duration(
    config: AvailabilityConfig,
    duration: int,
    ceiling: int = DEFAULT_DURATION_CEILING,
) -> int:
    increment = config.availability_increment
    if duration % increment:
        raise ScheduleValidationError(
            f"Duration must be a multiple of the {increment}-minute increment.", field="duration"
        )
    if duration < config.effective_minimum_duration:
        raise ScheduleValidationError(
            f"Duration must be at least {config.effective_minimum_duration} minutes.", field="duration"
        )
    if duration > ceiling:
        raise ScheduleValidationError(f"Duration cannot exceed {ceiling} minutes.", field="duration")
    return duration


def bookable_starts(intervals: Iterable[TimeInterval], increment: int, duration: int) -> list[Slot]:
    """Start slots followed by ``duration`` minutes of contiguous open time.

    Intervals are normalized first, so back-to-back intervals count as
    contiguous.
    """

    starts: list[Slot] = []
    for interval in normalize(intervals):
        for slot in slots_in(interval, increment):
            if slot.start + duration <= interval.end:
                starts.append(slot)
    return starts
