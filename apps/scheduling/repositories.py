"""
Scheduling Repositories

Abstract store contract used by the command handlers and the query
service, and its Django ORM implementation. Handlers receive repository
instances through their constructors, so tests can pass in-memory doubles.

Every Django ``DatabaseError`` leaves this module as a ``StoreError``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import contextmanager
from functools import reduce
from typing import Iterable, List, Optional
import logging
import operator

from django.db import DatabaseError, transaction  # type: ignore
from django.db.models import Q  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore

from apps.facilities.models import Facility
from shared.domain.value_objects import DateRange

from .domain.config import AvailabilityConfig
from .domain.errors import ExceptionNotFound, FacilityNotFound, ScheduleReplaceError, StoreError
from .domain.exceptions import AvailabilityException, ExceptionType
from .domain.facility_availability import FacilityAvailability
from .domain.holidays import Holiday
from .domain.intervals import TimeInterval, parse_clock, to_time
from .domain.pricing import PriceTerms, PriceUnit
from .domain.schedule import WeeklySchedule
from .models import AvailabilityException as AvailabilityExceptionModel
from .models import FacilitySelectedHoliday, HolidayTemplate, WeeklyScheduleEntry

logger = logging.getLogger(__name__)


# ===== Store contract =====

class WeeklyScheduleRepository(ABC):
    @abstractmethod
    def get(self, facility_id) -> WeeklySchedule:
        """Dense seven-day schedule; weekdays without rows are closed"""

    @abstractmethod
    def replace(self, facility_id, schedule: WeeklySchedule) -> int:
        """Delete every row of the facility, then insert the new ones"""


class ExceptionRepository(ABC):
    @abstractmethod
    def add(self, exception: AvailabilityException) -> AvailabilityException:
        """Persist and return the exception with its assigned id"""

    @abstractmethod
    def list(self, facility_id, window: Optional[DateRange] = None) -> List[AvailabilityException]:
        """Exceptions inside ``window`` (inclusive), ordered by date"""

    @abstractmethod
    def get(self, exception_id) -> AvailabilityException:
        """Raises ExceptionNotFound"""

    @abstractmethod
    def delete(self, exception_id) -> None:
        """Raises ExceptionNotFound"""

    def delete_holiday_closures(self, facility_id, holidays: Iterable[Holiday]) -> int:
        """
        Delete the whole-day closures generated for ``holidays``

        Only blocking, whole-day ``holiday`` exceptions whose date and notes
        match a holiday are removed; exceptions the owner created stay.
        """
        generated = {(holiday.holiday_date, holiday.name) for holiday in holidays}
        deleted = 0
        for exception in self.list(facility_id):
            if _is_holiday_closure(exception, generated):
                self.delete(exception.id)
                deleted += 1
        return deleted


class FacilityAvailabilityRepository(ABC):
    @abstractmethod
    def get(self, facility_id, *, lock: bool = False) -> FacilityAvailability:
        """Raises FacilityNotFound"""

    @abstractmethod
    def save(self, facility: FacilityAvailability) -> None:
        """Persist the availability settings"""


class HolidayRepository(ABC):
    @abstractmethod
    def templates(self) -> List[Holiday]:
        """System holiday calendar, ordered by date"""

    @abstractmethod
    def selected(self, facility_id) -> List[Holiday]:
        pass

    @abstractmethod
    def replace_selection(self, facility_id, template_ids: Iterable[int]) -> List[Holiday]:
        """Replace the facility's selection; unknown ids are skipped"""


def _is_holiday_closure(exception: AvailabilityException, generated: set) -> bool:
    return (
        exception.exception_type is ExceptionType.HOLIDAY
        and exception.is_whole_day
        and not exception.is_available
        and (exception.exception_date, exception.notes) in generated
    )


# ===== Django implementation =====

@contextmanager
def store_errors(action: str):
    """Translate database failures into StoreError"""
    try:
        yield
    except DatabaseError as exc:
        logger.error(f"Store failure while trying to {action}: {exc}")
        raise StoreError(f"Failed to {action}", exc) from exc


def _lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


def _exception_from_row(row) -> AvailabilityException:
    interval = None
    if row.start_time is not None and row.end_time is not None:
        interval = TimeInterval(parse_clock(row.start_time), parse_clock(row.end_time))
    return AvailabilityException(
        id=row.id,
        facility_id=row.facility_id,
        exception_date=row.exception_date,
        interval=interval,
        is_available=row.is_available,
        exception_type=ExceptionType(row.exception_type),
        notes=row.notes or "",
    )


def _holiday_from_row(row) -> Holiday:
    return Holiday(
        id=row.id,
        name=row.name,
        holiday_date=row.holiday_date,
        description=row.description,
    )


class DjangoWeeklyScheduleRepository(WeeklyScheduleRepository):
    def get(self, facility_id) -> WeeklySchedule:
        with store_errors(f"fetch the weekly schedule of facility {facility_id}"):
            rows = list(
                WeeklyScheduleEntry.objects.filter(facility_id=facility_id)
                .order_by("day_of_week", "start_time")
                .values_list("day_of_week", "start_time", "end_time", "is_available")
            )
        return WeeklySchedule.from_rows(
            (day, TimeInterval(parse_clock(start), parse_clock(end)), is_available)
            for day, start, end, is_available in rows
        )

    def replace(self, facility_id, schedule: WeeklySchedule) -> int:
        with store_errors(f"clear the weekly schedule of facility {facility_id}"):
            deleted, _ = WeeklyScheduleEntry.objects.filter(facility_id=facility_id).delete()

        entries = [
            WeeklyScheduleEntry(
                facility_id=facility_id,
                day_of_week=day,
                start_time=to_time(interval.start),
                end_time=to_time(interval.end),
                is_available=True,
            )
            for day, interval in schedule.to_rows()
        ]
        try:
            WeeklyScheduleEntry.objects.bulk_create(entries)
        except DatabaseError as exc:
            raise ScheduleReplaceError(facility_id, deleted, exc) from exc
        return len(entries)


class DjangoExceptionRepository(ExceptionRepository):
    def add(self, exception: AvailabilityException) -> AvailabilityException:
        with store_errors(f"create an availability exception for facility {exception.facility_id}"):
            row = AvailabilityExceptionModel.objects.create(
                facility_id=exception.facility_id,
                exception_date=exception.exception_date,
                start_time=to_time(exception.interval.start) if exception.interval else None,
                end_time=to_time(exception.interval.end) if exception.interval else None,
                is_available=exception.is_available,
                exception_type=exception.exception_type.value,
                notes=exception.notes or None,
            )
        exception.id = row.id
        return exception

    def list(self, facility_id, window: Optional[DateRange] = None) -> List[AvailabilityException]:
        qs = AvailabilityExceptionModel.objects.filter(facility_id=facility_id)
        if window is not None:
            qs = qs.filter(exception_date__gte=window.start_date, exception_date__lte=window.end_date)
        with store_errors(f"fetch availability exceptions of facility {facility_id}"):
            rows = list(qs.order_by("exception_date", "id"))
        return [_exception_from_row(row) for row in rows]

    def get(self, exception_id) -> AvailabilityException:
        with store_errors(f"fetch availability exception {exception_id}"):
            row = AvailabilityExceptionModel.objects.filter(pk=exception_id).first()
        if row is None:
            raise ExceptionNotFound(exception_id)
        return _exception_from_row(row)

    def delete(self, exception_id) -> None:
        with store_errors(f"delete availability exception {exception_id}"):
            deleted, _ = AvailabilityExceptionModel.objects.filter(pk=exception_id).delete()
        if not deleted:
            raise ExceptionNotFound(exception_id)

    def delete_holiday_closures(self, facility_id, holidays: Iterable[Holiday]) -> int:
        matches = [Q(exception_date=holiday.holiday_date, notes=holiday.name) for holiday in holidays]
        if not matches:
            return 0
        with store_errors(f"clear holiday closures of facility {facility_id}"):
            deleted, _ = AvailabilityExceptionModel.objects.filter(
                reduce(operator.or_, matches),
                facility_id=facility_id,
                exception_type=AvailabilityExceptionModel.ExceptionType.HOLIDAY,
                start_time__isnull=True,
                end_time__isnull=True,
                is_available=False,
            ).delete()
        return deleted


class DjangoFacilityAvailabilityRepository(FacilityAvailabilityRepository):
    def get(self, facility_id, *, lock: bool = False) -> FacilityAvailability:
        qs = Facility.objects.filter(pk=facility_id)
        if lock:
            qs = _lock_queryset_if_possible(qs)
        with store_errors(f"fetch facility {facility_id}"):
            facility = qs.first()
        if facility is None:
            raise FacilityNotFound(facility_id)

        return FacilityAvailability(
            id=facility.pk,
            config=AvailabilityConfig(
                availability_increment=facility.availability_increment,
                minimum_rental_duration=facility.minimum_rental_duration,
                timezone=facility.availability_timezone,
                notes=facility.availability_notes or "",
            ),
            price_terms=PriceTerms(
                unit_price=facility.price,
                price_unit=PriceUnit(facility.price_unit),
                currency=facility.currency,
            ),
            is_public=facility.status == Facility.Status.ACTIVE,
        )

    def save(self, facility: FacilityAvailability) -> None:
        config = facility.config
        with store_errors(f"save availability settings of facility {facility.id}"):
            updated = Facility.objects.filter(pk=facility.id).update(
                availability_increment=config.availability_increment,
                minimum_rental_duration=config.minimum_rental_duration,
                availability_timezone=config.timezone,
                availability_notes=config.notes or None,
            )
        if not updated:
            raise FacilityNotFound(facility.id)


class DjangoHolidayRepository(HolidayRepository):
    def templates(self) -> List[Holiday]:
        with store_errors("fetch holiday templates"):
            rows = list(HolidayTemplate.objects.filter(is_system_holiday=True).order_by("holiday_date", "name"))
        return [_holiday_from_row(row) for row in rows]

    def selected(self, facility_id) -> List[Holiday]:
        with store_errors(f"fetch selected holidays of facility {facility_id}"):
            rows = list(
                HolidayTemplate.objects.filter(selections__facility_id=facility_id).order_by("holiday_date", "name")
            )
        return [_holiday_from_row(row) for row in rows]

    def replace_selection(self, facility_id, template_ids: Iterable[int]) -> List[Holiday]:
        template_ids = set(template_ids)
        with store_errors(f"replace selected holidays of facility {facility_id}"):
            FacilitySelectedHoliday.objects.filter(facility_id=facility_id).delete()
            templates = list(
                HolidayTemplate.objects.filter(pk__in=template_ids, is_system_holiday=True)
                .order_by("holiday_date", "name")
            )
            FacilitySelectedHoliday.objects.bulk_create(
                FacilitySelectedHoliday(facility_id=facility_id, holiday_template=template)
                for template in templates
            )
        skipped = template_ids - {template.pk for template in templates}
        if skipped:
            logger.warning(f"Ignored unknown holiday templates {sorted(skipped)} for facility {facility_id}")
        return [_holiday_from_row(row) for row in templates]
