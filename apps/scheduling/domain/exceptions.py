"""Date-specific overrides of the weekly schedule."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

from shared.domain.base import Entity

from .errors import ScheduleValidationError
from .intervals import TimeInterval, format_clock, parse_clock


class ExceptionType(str, Enum):
    """Classification only; every type is resolved the same way."""

    MANUAL = "manual"
    HOLIDAY = "holiday"
    MAINTENANCE = "maintenance"
    RECURRING = "recurring"


@dataclass(eq=False)
class AvailabilityException(Entity):
    """Blocks (``is_available=False``) or adds availability on one date.

    Without ``interval`` the exception covers the whole day.
    """

    facility_id: int | None = None
    exception_date: date | None = None
    interval: TimeInterval | None = None
    is_available: bool = False
    exception_type: ExceptionType = ExceptionType.MANUAL
    notes: str = ""

    @classmethod
    def create(
        cls,
        facility_id,
        exception_date,
        *,
        start_time=None,
        end_time=None,
        is_available: bool = False,
        exception_type=ExceptionType.MANUAL,
        notes: str | None = "",
    ) -> "AvailabilityException":
        """Validate a new exception before anything touches the store."""

        if exception_date in (None, ""):
            raise ScheduleValidationError("An exception date is required.", field="exception_date")
        if isinstance(exception_date, str):
            try:
                exception_date = date.fromisoformat(exception_date)
            except ValueError:
                raise ScheduleValidationError(
                    f"Invalid date {exception_date!r}, expected YYYY-MM-DD.",
                    field="exception_date",
                ) from None

        has_start = start_time not in (None, "")
        has_end = end_time not in (None, "")
        if has_start != has_end:
            raise ScheduleValidationError(
                "Provide both start and end time, or neither for a whole-day exception.",
                field="start_time" if not has_start else "end_time",
            )
        interval = None
        if has_start:
            start = parse_clock(start_time, field="start_time")
            end = parse_clock(end_time, field="end_time")
            if start >= end:
                raise ScheduleValidationError("Start time must be before end time.", field="end_time")
            interval = TimeInterval(start, end)

        try:
            exception_type = ExceptionType(exception_type)
        except ValueError:
            choices = ", ".join(choice.value for choice in ExceptionType)
            raise ScheduleValidationError(
                f"Unknown exception type {exception_type!r}; expected one of {choices}.",
                field="exception_type",
            ) from None

        return cls(
            facility_id=facility_id,
            exception_date=exception_date,
            interval=interval,
            is_available=bool(is_available),
            exception_type=exception_type,
            notes=notes or "",
        )

    @property
    def is_whole_day(self) -> bool:
        return self.interval is None

    @property
    def start_time(self) -> str | None:
        return format_clock(self.interval.start) if self.interval else None

    @property
    def end_time(self) -> str | None:
        return format_clock(self.interval.end) if self.interval else None

    def __str__(self):
        span = "all day" if self.is_whole_day else str(self.interval)
        action = "open" if self.is_available else "closed"
        return f"{self.exception_date} {span} {action} ({self.exception_type.value})"
