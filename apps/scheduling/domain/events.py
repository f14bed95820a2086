"""
Scheduling Domain Events

Published after the write that produced them has committed.
``aggregate_id`` is always the facility id.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from shared.domain.base import DomainEvent


@dataclass
class WeeklyScheduleReplaced(DomainEvent):
    """Every weekly row of the facility was replaced"""
    open_days: List[int] = field(default_factory=list)
    interval_count: int = 0


@dataclass
class AvailabilityExceptionCreated(DomainEvent):
    exception_id: Optional[int] = None
    exception_date: Optional[date] = None
    exception_type: str = ""
    is_available: bool = False


@dataclass
class AvailabilityExceptionDeleted(DomainEvent):
    exception_id: Optional[int] = None
    exception_date: Optional[date] = None


@dataclass
class AvailabilityConfigUpdated(DomainEvent):
    """
    Facility availability settings changed

    ``minimum_duration_reset`` is set when an increment change dropped a
    minimum rental duration that was no longer longer than the increment.
    """
    availability_increment: int = 0
    minimum_rental_duration: Optional[int] = None
    minimum_duration_reset: bool = False


@dataclass
class HolidaySelectionReplaced(DomainEvent):
    holiday_template_ids: List[int] = field(default_factory=list)
    exception_dates: List[date] = field(default_factory=list)
