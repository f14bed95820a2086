"""
Scheduling Queries

Read side of the scheduling app. Every query loads its data once per
call: a resolved window fetches the weekly schedule and the window's
exceptions in two reads and resolves every date in memory.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional
import logging

from django.conf import settings  # type: ignore

from shared.domain.value_objects import DateRange, Money

from apps.scheduling.domain.config import AvailabilityConfig
from apps.scheduling.domain.errors import ScheduleValidationError
from apps.scheduling.domain.exceptions import AvailabilityException
from apps.scheduling.domain.holidays import Holiday
from apps.scheduling.domain.intervals import TimeInterval
from apps.scheduling.domain.resolver import AvailabilityResolver, ResolvedDay
from apps.scheduling.domain.schedule import WEEKLY_TEMPLATES, WeeklySchedule
from apps.scheduling.domain.slots import (
    DEFAULT_DURATION_CEILING,
    Slot,
    bookable_starts,
    duration_options,
    generate_slots,
    validate_duration,
)
from apps.scheduling.repositories import (
    DjangoExceptionRepository,
    DjangoFacilityAvailabilityRepository,
    DjangoHolidayRepository,
    DjangoWeeklyScheduleRepository,
    ExceptionRepository,
    FacilityAvailabilityRepository,
    HolidayRepository,
    WeeklyScheduleRepository,
)

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_DAYS = 30
MAX_WINDOW_DAYS = 366


@dataclass
class DayAvailability:
    """Everything a renter needs to pick a start time on one date"""
    day: ResolvedDay
    config: AvailabilityConfig
    slots: List[Slot] = field(default_factory=list)
    duration_options: List[int] = field(default_factory=list)
    duration: Optional[int] = None
    bookable_starts: List[Slot] = field(default_factory=list)
    price: Optional[Money] = None

    @property
    def intervals(self) -> List[TimeInterval]:
        return list(self.day.intervals)


def window_from_params(start: Optional[date], end: Optional[date] = None, days: Optional[int] = None) -> DateRange:
    """
    Build a date window for a query

    ``end`` wins over ``days``; with neither the configured default
    window length is used. Windows longer than a year are rejected.
    """
    if start is None:
        raise ScheduleValidationError("A start date is required.", field="start")
    if end is None:
        if days is None:
            days = getattr(settings, "SCHEDULING_DEFAULT_WINDOW_DAYS", DEFAULT_WINDOW_DAYS)
        if days < 1:
            raise ScheduleValidationError("days must be at least 1.", field="days")
        window = DateRange.starting(start, days)
    else:
        if end < start:
            raise ScheduleValidationError("end must not be before start.", field="end")
        window = DateRange(start, end)

    if len(window) > MAX_WINDOW_DAYS:
        raise ScheduleValidationError(f"A window may span at most {MAX_WINDOW_DAYS} days.", field="end")
    return window


class AvailabilityQueryService:
    def __init__(
        self,
        facility_repo: Optional[FacilityAvailabilityRepository] = None,
        schedule_repo: Optional[WeeklyScheduleRepository] = None,
        exception_repo: Optional[ExceptionRepository] = None,
        holiday_repo: Optional[HolidayRepository] = None,
        duration_ceiling: Optional[int] = None,
    ):
        self.facility_repo = facility_repo or DjangoFacilityAvailabilityRepository()
        self.schedule_repo = schedule_repo or DjangoWeeklyScheduleRepository()
        self.exception_repo = exception_repo or DjangoExceptionRepository()
        self.holiday_repo = holiday_repo or DjangoHolidayRepository()
        if duration_ceiling is None:
            duration_ceiling = getattr(settings, "SCHEDULING_DURATION_CEILING", DEFAULT_DURATION_CEILING)
        self.duration_ceiling = duration_ceiling

    def config(self, facility_id) -> AvailabilityConfig:
        return self.facility_repo.get(facility_id).config

    def weekly_schedule(self, facility_id) -> WeeklySchedule:
        self.facility_repo.get(facility_id)
        return self.schedule_repo.get(facility_id)

    def exceptions(self, facility_id, window: Optional[DateRange] = None) -> List[AvailabilityException]:
        self.facility_repo.get(facility_id)
        return self.exception_repo.list(facility_id, window)

    def resolver(self, facility_id, window: DateRange) -> AvailabilityResolver:
        schedule = self.schedule_repo.get(facility_id)
        exceptions = self.exception_repo.list(facility_id, window)
        return AvailabilityResolver(schedule, exceptions)

    def resolve(self, facility_id, window: DateRange) -> List[ResolvedDay]:
        """Resolved open intervals for every date of ``window``"""
        self.facility_repo.get(facility_id)
        days = self.resolver(facility_id, window).resolve_range(window)
        logger.debug(
            f"Resolved {len(days)} days for facility {facility_id} "
            f"({window.start_date}..{window.end_date}), {sum(d.is_available for d in days)} open"
        )
        return days

    def day_slots(self, facility_id, day: date, duration: Optional[int] = None) -> DayAvailability:
        """
        Slots, duration choices and bookable starts for one date

        Without ``duration`` the effective minimum rental duration is
        used to compute the bookable starts. A minimum above the duration
        ceiling stays bookable; ``duration_options`` is then empty.
        """
        facility = self.facility_repo.get(facility_id)
        config = facility.config
        if duration is None:
            duration = config.effective_minimum_duration
        ceiling = max(self.duration_ceiling, config.effective_minimum_duration)
        duration = validate_duration(config, duration, ceiling)

        resolved = self.resolver(facility_id, DateRange.single(day)).resolve(day)
        increment = config.availability_increment
        starts = bookable_starts(resolved.intervals, increment, duration)

        return DayAvailability(
            day=resolved,
            config=config,
            slots=generate_slots(resolved.intervals, increment),
            duration_options=duration_options(config, self.duration_ceiling),
            duration=duration,
            bookable_starts=starts,
            price=facility.price_terms.quote(duration) if facility.price_terms else None,
        )

    def holiday_templates(self) -> List[Holiday]:
        return self.holiday_repo.templates()

    def selected_holidays(self, facility_id) -> List[Holiday]:
        self.facility_repo.get(facility_id)
        return self.holiday_repo.selected(facility_id)

    @staticmethod
    def weekly_templates() -> List[dict]:
        return [
            {"key": key, "name": template["name"], "description": template["description"]}
            for key, template in WEEKLY_TEMPLATES.items()
        ]
