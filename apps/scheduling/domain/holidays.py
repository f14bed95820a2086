"""Holiday calendars used to pre-populate closing exceptions."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable

from .exceptions import AvailabilityException, ExceptionType


@dataclass(frozen=True)
class Holiday:
    id: int
    name: str
    holiday_date: date
    description: str = ""


def holiday_exceptions(facility_id, holidays: Iterable[Holiday]) -> list[AvailabilityException]:
    """One whole-day closing exception per selected holiday date."""

    exceptions = []
    seen: set[date] = set()
    for holiday in sorted(holidays, key=lambda item: (item.holiday_date, item.name)):
        if holiday.holiday_date in seen:
            continue
        seen.add(holiday.holiday_date)
        exceptions.append(AvailabilityException.create(
            facility_id,
            holiday.holiday_date,
            is_available=False,
            exception_type=ExceptionType.HOLIDAY,
            notes=holiday.name,
        ))
    return exceptions


def _nth_weekday(year: int, month: int, weekday: int, n: int) -> date:
    """``n``-th ``weekday`` (Monday=0) of the month; ``n=-1`` is the last one."""

    if n > 0:
        first = date(year, month, 1)
        return first + timedelta(days=(weekday - first.weekday()) % 7 + 7 * (n - 1))
    last = date(year, month + 1, 1) - timedelta(days=1) if month < 12 else date(year, 12, 31)
    return last - timedelta(days=(last.weekday() - weekday) % 7)


def common_holidays(year: int) -> list[tuple[str, str, date]]:
    """US holidays offered as closures: ``(name, description, date)``."""

    return [
        ("New Year's Day", "January 1st", date(year, 1, 1)),
        ("Martin Luther King Jr. Day", "Third Monday in January", _nth_weekday(year, 1, 0, 3)),
        ("Presidents Day", "Third Monday in February", _nth_weekday(year, 2, 0, 3)),
        ("Memorial Day", "Last Monday in May", _nth_weekday(year, 5, 0, -1)),
        ("Independence Day", "July 4th", date(year, 7, 4)),
        ("Labor Day", "First Monday in September", _nth_weekday(year, 9, 0, 1)),
        ("Columbus Day", "Second Monday in October", _nth_weekday(year, 10, 0, 2)),
        ("Veterans Day", "November 11th", date(year, 11, 11)),
        ("Thanksgiving", "Fourth Thursday in November", _nth_weekday(year, 11, 3, 4)),
        ("Christmas Eve", "December 24th", date(year, 12, 24)),
        ("Christmas Day", "December 25th", date(year, 12, 25)),
        ("New Year's Eve", "December 31st", date(year, 12, 31)),
    ]
