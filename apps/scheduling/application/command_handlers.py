"""
Scheduling Command Handlers

Use cases that change a facility's availability. Each handler validates
its input before touching the store, then performs the write inside one
unit of work so a "replace all" delete and its insert commit together.

Commands:
- ReplaceWeeklyScheduleCommand: Save the complete seven-day schedule
- ApplyWeeklyTemplateCommand: Replace the schedule with a named template
- CreateAvailabilityExceptionCommand: Block or open time on one date
- DeleteAvailabilityExceptionCommand: Remove one exception
- UpdateAvailabilityConfigCommand: Edit increment, minimum, timezone, notes
- ReplaceHolidaySelectionCommand: Choose holidays and pre-populate closures
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, List, Optional
import logging

from shared.application.uow import AbstractUnitOfWork, DjangoUnitOfWork

from apps.scheduling.domain.config import AvailabilityConfig
from apps.scheduling.domain.errors import ExceptionNotFound, ScheduleReplaceError
from apps.scheduling.domain.exceptions import AvailabilityException, ExceptionType
from apps.scheduling.domain.holidays import Holiday, holiday_exceptions
from apps.scheduling.domain.schedule import WeeklySchedule
from apps.scheduling.repositories import (
    ExceptionRepository,
    FacilityAvailabilityRepository,
    HolidayRepository,
    WeeklyScheduleRepository,
)

logger = logging.getLogger(__name__)

UNCHANGED: Any = ...


# ===== Commands =====

@dataclass
class ReplaceWeeklyScheduleCommand:
    """
    Full weekly schedule write

    ``days`` must list all seven weekdays, closed ones included:
    ``{"day": 0, "is_available": False, "time_slots": []}``.
    """
    facility_id: int
    days: List[dict] = field(default_factory=list)


@dataclass
class ApplyWeeklyTemplateCommand:
    facility_id: int
    template: str


@dataclass
class CreateAvailabilityExceptionCommand:
    facility_id: int
    exception_date: Optional[date]
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    is_available: bool = False
    exception_type: str = ExceptionType.MANUAL.value
    notes: str = ''


@dataclass
class DeleteAvailabilityExceptionCommand:
    facility_id: int
    exception_id: int


@dataclass
class UpdateAvailabilityConfigCommand:
    """``UNCHANGED`` keeps the current minimum; ``None`` unsets it"""
    facility_id: int
    availability_increment: Optional[int] = None
    minimum_rental_duration: Any = UNCHANGED
    timezone: Optional[str] = None
    notes: Optional[str] = None


@dataclass
class ReplaceHolidaySelectionCommand:
    facility_id: int
    holiday_template_ids: List[int] = field(default_factory=list)


# ===== Command Handlers =====

class _FacilityHandler:
    def __init__(
        self,
        facility_repo: FacilityAvailabilityRepository,
        uow_factory: Callable[[], AbstractUnitOfWork] = DjangoUnitOfWork,
    ):
        self.facility_repo = facility_repo
        self.uow_factory = uow_factory


class ReplaceWeeklyScheduleHandler(_FacilityHandler):
    """
    Handler for ReplaceWeeklySchedule command

    1. Validate the seven-day payload (no store access yet)
    2. Lock the facility row
    3. Delete the old rows and insert the new ones in one transaction
    4. Publish WeeklyScheduleReplaced after commit
    """

    def __init__(self, facility_repo, schedule_repo: WeeklyScheduleRepository, uow_factory=DjangoUnitOfWork):
        super().__init__(facility_repo, uow_factory)
        self.schedule_repo = schedule_repo

    def handle(self, command: ReplaceWeeklyScheduleCommand) -> WeeklySchedule:
        schedule = WeeklySchedule.from_payload(command.days)
        return self._replace(command.facility_id, schedule)

    def _replace(self, facility_id, schedule: WeeklySchedule) -> WeeklySchedule:
        logger.info(f"Replacing weekly schedule of facility {facility_id}: {schedule!r}")

        with self.uow_factory() as uow:
            facility = self.facility_repo.get(facility_id, lock=True)
            facility.replace_schedule(schedule)
            try:
                written = self.schedule_repo.replace(facility_id, schedule)
            except ScheduleReplaceError as e:
                logger.critical(
                    f"Weekly schedule insert failed for facility {facility_id} after deleting "
                    f"{e.rows_deleted} rows; the facility has no bookable hours unless the "
                    f"transaction rolls back: {e}"
                )
                raise
            uow.collect_events(facility)

        logger.info(f"Weekly schedule of facility {facility_id} saved ({written} intervals)")
        return schedule


class ApplyWeeklyTemplateHandler(ReplaceWeeklyScheduleHandler):
    def handle(self, command: ApplyWeeklyTemplateCommand) -> WeeklySchedule:
        schedule = WeeklySchedule.from_template(command.template)
        return self._replace(command.facility_id, schedule)


class CreateAvailabilityExceptionHandler(_FacilityHandler):
    def __init__(self, facility_repo, exception_repo: ExceptionRepository, uow_factory=DjangoUnitOfWork):
        super().__init__(facility_repo, uow_factory)
        self.exception_repo = exception_repo

    def handle(self, command: CreateAvailabilityExceptionCommand) -> AvailabilityException:
        """
        Create one exception

        No collision check: a second exception on the same date is stored
        as another row and both apply at resolve time.
        """
        exception = AvailabilityException.create(
            command.facility_id,
            command.exception_date,
            start_time=command.start_time,
            end_time=command.end_time,
            is_available=command.is_available,
            exception_type=command.exception_type,
            notes=command.notes,
        )

        with self.uow_factory() as uow:
            facility = self.facility_repo.get(command.facility_id, lock=True)
            exception = self.exception_repo.add(exception)
            facility.record_exception_created(exception)
            uow.collect_events(facility)

        logger.info(f"Created availability exception {exception.id} for facility {command.facility_id}: {exception}")
        return exception


class DeleteAvailabilityExceptionHandler(_FacilityHandler):
    def __init__(self, facility_repo, exception_repo: ExceptionRepository, uow_factory=DjangoUnitOfWork):
        super().__init__(facility_repo, uow_factory)
        self.exception_repo = exception_repo

    def handle(self, command: DeleteAvailabilityExceptionCommand) -> AvailabilityException:
        with self.uow_factory() as uow:
            facility = self.facility_repo.get(command.facility_id, lock=True)
            exception = self.exception_repo.get(command.exception_id)
            if exception.facility_id != facility.id:
                raise ExceptionNotFound(command.exception_id)
            self.exception_repo.delete(exception.id)
            facility.record_exception_deleted(exception)
            uow.collect_events(facility)

        logger.info(f"Deleted availability exception {exception.id} of facility {command.facility_id}")
        return exception


class UpdateAvailabilityConfigHandler(_FacilityHandler):
    """
    Handler for UpdateAvailabilityConfig command

    An increment change that makes the stored minimum rental duration
    invalid resets the minimum to "unset" before anything is persisted.
    """

    def handle(self, command: UpdateAvailabilityConfigCommand) -> AvailabilityConfig:
        with self.uow_factory() as uow:
            facility = self.facility_repo.get(command.facility_id, lock=True)
            previous = facility.config
            config = facility.update_config(
                increment=command.availability_increment,
                minimum_rental_duration=command.minimum_rental_duration,
                timezone=command.timezone,
                notes=command.notes,
            )
            self.facility_repo.save(facility)
            uow.collect_events(facility)

        if previous.minimum_rental_duration is not None and config.minimum_rental_duration is None:
            logger.info(
                f"Minimum rental duration of facility {command.facility_id} reset "
                f"(was {previous.minimum_rental_duration}, increment now {config.availability_increment})"
            )
        return config


class ReplaceHolidaySelectionHandler(_FacilityHandler):
    """
    Handler for ReplaceHolidaySelection command

    Closures generated for the previous selection are removed and
    one whole-day closure is created per newly selected holiday date.
    """

    def __init__(
        self,
        facility_repo,
        holiday_repo: HolidayRepository,
        exception_repo: ExceptionRepository,
        uow_factory=DjangoUnitOfWork,
    ):
        super().__init__(facility_repo, uow_factory)
        self.holiday_repo = holiday_repo
        self.exception_repo = exception_repo

    def handle(self, command: ReplaceHolidaySelectionCommand) -> List[Holiday]:
        facility_id = command.facility_id

        with self.uow_factory() as uow:
            facility = self.facility_repo.get(facility_id, lock=True)
            previous = self.holiday_repo.selected(facility_id)
            selected = self.holiday_repo.replace_selection(facility_id, command.holiday_template_ids)

            self.exception_repo.delete_holiday_closures(facility_id, previous)
            created = [
                self.exception_repo.add(exception)
                for exception in holiday_exceptions(facility_id, selected)
            ]

            facility.select_holidays(
                [holiday.id for holiday in selected],
                [exception.exception_date for exception in created],
            )
            uow.collect_events(facility)

        logger.info(
            f"Facility {facility_id} holiday selection replaced: "
            f"{len(selected)} holidays, {len(created)} closures"
        )
        return selected
