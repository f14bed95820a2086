"""Availability resolver.

Merges a facility's weekly schedule with its date exceptions into the
authoritative open intervals for each calendar date. The resolver works on
data fetched once for a whole window; it never queries per date.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable

from shared.domain.value_objects import DateRange

from .exceptions import AvailabilityException
from .intervals import FULL_DAY, TimeInterval, subtract, union
from .schedule import WeeklySchedule, day_of_week


@dataclass(frozen=True)
class ResolvedDay:
    date: date
    day_of_week: int
    intervals: tuple[TimeInterval, ...] = ()
    exceptions: tuple[AvailabilityException, ...] = field(default=(), compare=False)

    @property
    def is_available(self) -> bool:
        return bool(self.intervals)

    @property
    def open_minutes(self) -> int:
        return sum(interval.length for interval in self.intervals)


def apply_exception(intervals: list[TimeInterval], exception: AvailabilityException) -> list[TimeInterval]:
    """Apply one exception to a date's open intervals.

    Whole-day exceptions replace everything. Timed blocks are subtracted,
    timed additions are unioned, regardless of baseline boundaries.
    """

    if exception.is_whole_day:
        return [FULL_DAY] if exception.is_available else []
    if exception.is_available:
        return union(intervals, exception.interval)
    return subtract(intervals, exception.interval)


class AvailabilityResolver:
    def __init__(
        self,
        schedule: WeeklySchedule,
        exceptions: Iterable[AvailabilityException] = (),
    ) -> None:
        self.schedule = schedule
        # Store order is preserved per date; duplicates all apply, last wins.
        self._by_date: dict[date, list[AvailabilityException]] = defaultdict(list)
        for exception in exceptions:
            self._by_date[exception.exception_date].append(exception)

    def exceptions_on(self, day: date) -> list[AvailabilityException]:
        return list(self._by_date.get(day, ()))

    def resolve(self, day: date) -> ResolvedDay:
        weekday = day_of_week(day)
        intervals = self.schedule.intervals_for(weekday)
        applied = self.exceptions_on(day)
        for exception in applied:
            intervals = apply_exception(intervals, exception)
        return ResolvedDay(
            date=day,
            day_of_week=weekday,
            intervals=tuple(intervals),
            exceptions=tuple(applied),
        )

    def resolve_range(self, window: DateRange) -> list[ResolvedDay]:
        return [self.resolve(day) for day in window.days()]
