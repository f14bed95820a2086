"""Weekly schedule model.

Weekdays are numbered Sunday=0 .. Saturday=6. A weekday with no open
intervals is closed all day. The schedule is always written as a whole:
the seven-day payload replaces every stored row for the facility.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Mapping

from .errors import ScheduleValidationError
from .intervals import TimeInterval, find_overlap, format_clock, normalize

SUNDAY, MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY = range(7)

DAY_NAMES = {
    SUNDAY: "Sunday",
    MONDAY: "Monday",
    TUESDAY: "Tuesday",
    WEDNESDAY: "Wednesday",
    THURSDAY: "Thursday",
    FRIDAY: "Friday",
    SATURDAY: "Saturday",
}

# Presentation order only; numbering stays Sunday-first.
PRESENTATION_ORDER = (MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY, SUNDAY)


def day_of_week(day: date) -> int:
    """Sunday-first weekday number for a calendar date."""

    return (day.weekday() + 1) % 7


@dataclass
class DaySchedule:
    day_of_week: int
    is_available: bool = False
    time_slots: list[TimeInterval] = field(default_factory=list)

    def __post_init__(self):
        if self.day_of_week not in DAY_NAMES:
            raise ScheduleValidationError(
                f"day_of_week must be between 0 (Sunday) and 6 (Saturday), got {self.day_of_week}.",
                field="day_of_week",
            )
        # An open day without intervals is closed.
        if not self.time_slots:
            self.is_available = False

    @property
    def name(self) -> str:
        return DAY_NAMES[self.day_of_week]

    @property
    def open_intervals(self) -> list[TimeInterval]:
        if not self.is_available:
            return []
        return normalize(self.time_slots)

    def as_dict(self) -> dict:
        return {
            "day": self.day_of_week,
            "day_name": self.name,
            "is_available": self.is_available,
            "time_slots": [slot.as_dict() for slot in sorted(self.time_slots)],
        }


class WeeklySchedule:
    """Dense seven-day schedule for one facility."""

    def __init__(self, days: Mapping[int, DaySchedule] | None = None) -> None:
        days = dict(days or {})
        self._days = {
            number: days.get(number) or DaySchedule(number)
            for number in DAY_NAMES
        }

    @classmethod
    def closed(cls) -> "WeeklySchedule":
        return cls()

    @classmethod
    def from_rows(cls, rows: Iterable[tuple[int, TimeInterval, bool]]) -> "WeeklySchedule":
        """Build from stored ``(day_of_week, interval, is_available)`` rows.

        Rows flagged unavailable carry no open time. Overlapping rows are
        kept as stored and merged when the day is resolved.
        """

        slots: dict[int, list[TimeInterval]] = {number: [] for number in DAY_NAMES}
        for number, interval, is_available in rows:
            if number not in slots:
                raise ScheduleValidationError(f"Stored day_of_week {number} is out of range.")
            if is_available:
                slots[number].append(interval)
        return cls({
            number: DaySchedule(number, is_available=bool(intervals), time_slots=sorted(intervals))
            for number, intervals in slots.items()
        })

    @classmethod
    def from_payload(cls, days: Iterable[Mapping]) -> "WeeklySchedule":
        """Validate a complete seven-day write.

        Each payload item is ``{"day", "is_available", "time_slots": [{"start", "end"}]}``.
        Overlapping intervals within a day are rejected.
        """

        parsed: dict[int, DaySchedule] = {}
        for item in days:
            number = item.get("day")
            if not isinstance(number, int) or isinstance(number, bool):
                raise ScheduleValidationError("Each day needs an integer 'day' (0=Sunday).", field="days")
            if number in parsed:
                raise ScheduleValidationError(f"Day {number} appears more than once.", field="days")
            intervals = [
                TimeInterval.from_strings(slot.get("start"), slot.get("end"))
                for slot in item.get("time_slots") or []
            ]
            overlap = find_overlap(intervals)
            if overlap:
                first, second = overlap
                raise ScheduleValidationError(
                    f"{DAY_NAMES.get(number, number)}: intervals {first} and {second} overlap.",
                    field="days",
                )
            parsed[number] = DaySchedule(
                number,
                is_available=bool(item.get("is_available")),
                time_slots=sorted(intervals),
            )

        missing = sorted(set(DAY_NAMES) - set(parsed))
        if missing:
            names = ", ".join(DAY_NAMES[number] for number in missing)
            raise ScheduleValidationError(
                f"The full weekly schedule is required; missing: {names}.",
                field="days",
            )
        return cls(parsed)

    @classmethod
    def from_template(cls, key: str) -> "WeeklySchedule":
        template = WEEKLY_TEMPLATES.get(key)
        if template is None:
            raise ScheduleValidationError(f"Unknown schedule template {key!r}.", field="template")
        slots: dict[int, list[TimeInterval]] = {}
        for number, start, end in template["pattern"]:
            slots.setdefault(number, []).append(TimeInterval.from_strings(start, end))
        return cls({
            number: DaySchedule(number, is_available=True, time_slots=intervals)
            for number, intervals in slots.items()
        })

    def day(self, number: int) -> DaySchedule:
        return self._days[number]

    def intervals_for(self, number: int) -> list[TimeInterval]:
        return self._days[number].open_intervals

    def ordered_days(self) -> list[DaySchedule]:
        return [self._days[number] for number in PRESENTATION_ORDER]

    def to_rows(self) -> list[tuple[int, TimeInterval]]:
        """Rows to insert: one per open interval of every available day."""

        return [
            (number, interval)
            for number, day in sorted(self._days.items())
            if day.is_available
            for interval in day.time_slots
        ]

    def as_tuples(self) -> set[tuple[int, str, str, bool]]:
        return {
            (number, format_clock(interval.start), format_clock(interval.end), True)
            for number, interval in self.to_rows()
        }

    def __eq__(self, other):
        if not isinstance(other, WeeklySchedule):
            return NotImplemented
        return self.as_tuples() == other.as_tuples()

    def __repr__(self):
        open_days = [day.name for day in self.ordered_days() if day.is_available]
        return f"WeeklySchedule(open={open_days})"


WEEKLY_TEMPLATES = {
    "business-hours": {
        "name": "Business Hours",
        "description": "Monday-Friday 9am-5pm",
        "pattern": [(day, "09:00", "17:00") for day in (MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY)],
    },
    "extended-hours": {
        "name": "Extended Business Hours",
        "description": "Monday-Friday 8am-6pm",
        "pattern": [(day, "08:00", "18:00") for day in (MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY)],
    },
    "weekends-only": {
        "name": "Weekends Only",
        "description": "Saturday-Sunday 10am-8pm",
        "pattern": [(SUNDAY, "10:00", "20:00"), (SATURDAY, "10:00", "20:00")],
    },
    "after-school": {
        "name": "After School & Weekends",
        "description": "Monday-Friday 3:30pm-9pm, Weekends 9am-9pm",
        "pattern": [
            (SUNDAY, "09:00", "21:00"),
            *[(day, "15:30", "21:00") for day in (MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY)],
            (SATURDAY, "09:00", "21:00"),
        ],
    },
    "full-week": {
        "name": "Full Week",
        "description": "Monday-Sunday 8am-10pm",
        "pattern": [(day, "08:00", "22:00") for day in DAY_NAMES],
    },
}
