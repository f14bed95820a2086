"""In-memory stores and fixtures for scheduling tests."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from itertools import count

import pytest

from shared.application.uow import AbstractUnitOfWork

from apps.scheduling.domain.config import AvailabilityConfig
from apps.scheduling.domain.errors import ExceptionNotFound, FacilityNotFound, ScheduleReplaceError
from apps.scheduling.domain.facility_availability import FacilityAvailability
from apps.scheduling.domain.holidays import Holiday
from apps.scheduling.domain.pricing import PriceTerms, PriceUnit
from apps.scheduling.domain.schedule import WeeklySchedule
from apps.scheduling.repositories import (
    ExceptionRepository,
    FacilityAvailabilityRepository,
    HolidayRepository,
    WeeklyScheduleRepository,
)

FACILITY_ID = 1


class InMemoryFacilityRepository(FacilityAvailabilityRepository):
    def __init__(self, *facilities: FacilityAvailability):
        self._facilities = {facility.id: facility for facility in facilities}
        self.locked: list = []

    def get(self, facility_id, *, lock: bool = False) -> FacilityAvailability:
        try:
            stored = self._facilities[facility_id]
        except KeyError:
            raise FacilityNotFound(facility_id) from None
        if lock:
            self.locked.append(facility_id)
        return FacilityAvailability(
            id=stored.id,
            config=stored.config,
            price_terms=stored.price_terms,
            is_public=stored.is_public,
        )

    def save(self, facility: FacilityAvailability) -> None:
        if facility.id not in self._facilities:
            raise FacilityNotFound(facility.id)
        self._facilities[facility.id] = FacilityAvailability(
            id=facility.id,
            config=facility.config,
            price_terms=facility.price_terms,
            is_public=facility.is_public,
        )


class InMemoryScheduleRepository(WeeklyScheduleRepository):
    """Non-transactional store: a failed insert leaves the rows deleted."""

    def __init__(self):
        self.rows: dict = {}
        self.fail_insert = False
        self.reads = 0

    def get(self, facility_id) -> WeeklySchedule:
        self.reads += 1
        return WeeklySchedule.from_rows(
            (day, interval, True) for day, interval in self.rows.get(facility_id, [])
        )

    def replace(self, facility_id, schedule: WeeklySchedule) -> int:
        deleted = len(self.rows.pop(facility_id, []))
        if self.fail_insert:
            raise ScheduleReplaceError(facility_id, deleted, RuntimeError("insert rejected"))
        self.rows[facility_id] = schedule.to_rows()
        return len(self.rows[facility_id])


class InMemoryExceptionRepository(ExceptionRepository):
    def __init__(self):
        self.items: dict = {}
        self._ids = count(1)
        self.reads = 0

    def add(self, exception):
        exception.id = next(self._ids)
        self.items[exception.id] = exception
        return exception

    def list(self, facility_id, window=None):
        self.reads += 1
        found = [
            exception for exception in self.items.values()
            if exception.facility_id == facility_id
            and (window is None or window.contains(exception.exception_date))
        ]
        return sorted(found, key=lambda exception: (exception.exception_date, exception.id))

    def get(self, exception_id):
        try:
            return self.items[exception_id]
        except KeyError:
            raise ExceptionNotFound(exception_id) from None

    def delete(self, exception_id) -> None:
        if self.items.pop(exception_id, None) is None:
            raise ExceptionNotFound(exception_id)


class InMemoryHolidayRepository(HolidayRepository):
    def __init__(self, *holidays):
        self._holidays = {holiday.id: holiday for holiday in holidays}
        self._selected: dict = {}

    def templates(self):
        return sorted(self._holidays.values(), key=lambda holiday: (holiday.holiday_date, holiday.name))

    def selected(self, facility_id):
        return [self._holidays[pk] for pk in self._selected.get(facility_id, [])]

    def replace_selection(self, facility_id, template_ids):
        chosen = sorted(
            (self._holidays[pk] for pk in set(template_ids) if pk in self._holidays),
            key=lambda holiday: (holiday.holiday_date, holiday.name),
        )
        self._selected[facility_id] = [holiday.id for holiday in chosen]
        return chosen


class FakeUnitOfWork(AbstractUnitOfWork):
    """Publishes collected events straight into ``published`` on commit."""

    instances: list = []

    def __init__(self):
        super().__init__()
        self.committed = False
        self.rolled_back = False
        self.published: list = []
        FakeUnitOfWork.instances.append(self)

    def commit(self):
        self.committed = True
        self.published.extend(self._events)
        self._events.clear()

    def rollback(self):
        self.rolled_back = True
        self._events.clear()


@pytest.fixture
def uow_factory():
    FakeUnitOfWork.instances = []
    return FakeUnitOfWork


@pytest.fixture
def facility():
    return FacilityAvailability(
        id=FACILITY_ID,
        config=AvailabilityConfig(availability_increment=30),
        price_terms=PriceTerms(unit_price=Decimal("40.00"), price_unit=PriceUnit.HOUR),
    )


@pytest.fixture
def facility_repo(facility):
    return InMemoryFacilityRepository(facility)


@pytest.fixture
def schedule_repo():
    return InMemoryScheduleRepository()


@pytest.fixture
def exception_repo():
    return InMemoryExceptionRepository()


@pytest.fixture
def holiday_repo():
    return InMemoryHolidayRepository(
        Holiday(1, "Independence Day", date(2024, 7, 4)),
        Holiday(2, "Thanksgiving", date(2024, 11, 28)),
        Holiday(3, "Christmas Day", date(2024, 12, 25)),
    )
