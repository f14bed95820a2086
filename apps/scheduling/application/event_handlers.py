"""
Scheduling Event Handlers

Subscribers for the scheduling domain events. They emit one structured
audit record per committed change; registration happens in
``SchedulingConfig.ready()``.
"""

import structlog

from shared.application.message_bus import MessageBus

from apps.scheduling.domain.events import (
    AvailabilityConfigUpdated,
    AvailabilityExceptionCreated,
    AvailabilityExceptionDeleted,
    HolidaySelectionReplaced,
    WeeklyScheduleReplaced,
)

logger = structlog.get_logger("apps.scheduling.audit")


def log_weekly_schedule_replaced(event: WeeklyScheduleReplaced):
    logger.info(
        "weekly_schedule_replaced",
        facility_id=event.aggregate_id,
        open_days=event.open_days,
        interval_count=event.interval_count,
        event_id=str(event.event_id),
    )


def log_exception_created(event: AvailabilityExceptionCreated):
    logger.info(
        "availability_exception_created",
        facility_id=event.aggregate_id,
        exception_id=event.exception_id,
        exception_date=str(event.exception_date),
        exception_type=event.exception_type,
        is_available=event.is_available,
    )


def log_exception_deleted(event: AvailabilityExceptionDeleted):
    logger.info(
        "availability_exception_deleted",
        facility_id=event.aggregate_id,
        exception_id=event.exception_id,
        exception_date=str(event.exception_date),
    )


def log_config_updated(event: AvailabilityConfigUpdated):
    log = logger.warning if event.minimum_duration_reset else logger.info
    log(
        "availability_config_updated",
        facility_id=event.aggregate_id,
        availability_increment=event.availability_increment,
        minimum_rental_duration=event.minimum_rental_duration,
        minimum_duration_reset=event.minimum_duration_reset,
    )


def log_holiday_selection_replaced(event: HolidaySelectionReplaced):
    logger.info(
        "holiday_selection_replaced",
        facility_id=event.aggregate_id,
        holiday_template_ids=event.holiday_template_ids,
        closures=[str(day) for day in event.exception_dates],
    )


def register_event_handlers(bus: MessageBus):
    bus.register_event_handler(WeeklyScheduleReplaced, log_weekly_schedule_replaced)
    bus.register_event_handler(AvailabilityExceptionCreated, log_exception_created)
    bus.register_event_handler(AvailabilityExceptionDeleted, log_exception_deleted)
    bus.register_event_handler(AvailabilityConfigUpdated, log_config_updated)
    bus.register_event_handler(HolidaySelectionReplaced, log_holiday_selection_replaced)
