"""
Facility Availability Aggregate

Consistency boundary for every scheduling write of one facility: the
weekly schedule, its exceptions, its configuration and its holiday
selection. Each mutation records the domain event published after commit.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional

from shared.domain.base import Aggregate

from .config import AvailabilityConfig
from .events import (
    AvailabilityConfigUpdated,
    AvailabilityExceptionCreated,
    AvailabilityExceptionDeleted,
    HolidaySelectionReplaced,
    WeeklyScheduleReplaced,
)
from .exceptions import AvailabilityException
from .pricing import PriceTerms
from .schedule import WeeklySchedule


@dataclass(eq=False)
class FacilityAvailability(Aggregate):
    """
    Usage:
        facility = config_repo.get(facility_id)
        facility.replace_schedule(schedule)
        uow.collect_events(facility)
    """

    config: AvailabilityConfig = field(default_factory=AvailabilityConfig)
    price_terms: Optional[PriceTerms] = None
    is_public: bool = True

    def replace_schedule(self, schedule: WeeklySchedule) -> WeeklySchedule:
        rows = schedule.to_rows()
        self.add_event(WeeklyScheduleReplaced(
            aggregate_id=self.id,
            open_days=sorted({number for number, _ in rows}),
            interval_count=len(rows),
        ))
        return schedule

    def record_exception_created(self, exception: AvailabilityException):
        self.add_event(AvailabilityExceptionCreated(
            aggregate_id=self.id,
            exception_id=exception.id,
            exception_date=exception.exception_date,
            exception_type=exception.exception_type.value,
            is_available=exception.is_available,
        ))

    def record_exception_deleted(self, exception: AvailabilityException):
        if exception.facility_id != self.id:
            raise ValueError(
                f"Exception {exception.id} belongs to facility {exception.facility_id}, not {self.id}"
            )
        self.add_event(AvailabilityExceptionDeleted(
            aggregate_id=self.id,
            exception_id=exception.id,
            exception_date=exception.exception_date,
        ))

    def update_config(
        self,
        *,
        increment=None,
        minimum_rental_duration=...,
        timezone=None,
        notes=None,
    ) -> AvailabilityConfig:
        """
        Apply a configuration edit

        The increment goes first so a minimum it invalidates is reset to
        "unset" before the rest of the edit is validated. ``...`` leaves
        the minimum untouched; ``None`` explicitly unsets it.
        """
        previous = self.config
        config = previous
        if increment is not None:
            config = config.with_increment(increment)
        reset = previous.minimum_rental_duration is not None and config.minimum_rental_duration is None
        if minimum_rental_duration is not ...:
            config = config.with_minimum_duration(minimum_rental_duration)
            if minimum_rental_duration is not None:
                reset = False
        if timezone is not None:
            config = config.with_timezone(timezone)
        if notes is not None:
            config = config.with_notes(notes)

        self.config = config
        self.add_event(AvailabilityConfigUpdated(
            aggregate_id=self.id,
            availability_increment=config.availability_increment,
            minimum_rental_duration=config.minimum_rental_duration,
            minimum_duration_reset=reset,
        ))
        return config

    def select_holidays(self, template_ids: Iterable[int], dates: Iterable[date]):
        self.add_event(HolidaySelectionReplaced(
            aggregate_id=self.id,
            holiday_template_ids=sorted(set(template_ids)),
            exception_dates=sorted(set(dates)),
        ))

