"""Storage for weekly schedules, exceptions and holiday calendars.

Times are naive wall-clock values interpreted in the facility's
``availability_timezone``.
"""

from __future__ import annotations

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class WeeklyScheduleEntry(models.Model):
    """One open interval of a weekday (0=Sunday ... 6=Saturday)."""

    facility = models.ForeignKey(
        "facilities.Facility",
        on_delete=models.CASCADE,
        related_name="weekly_schedule",
    )
    day_of_week = models.PositiveSmallIntegerField()
    start_time = models.TimeField()
    end_time = models.TimeField()
    is_available = models.BooleanField(default=True)

    class Meta:
        verbose_name = _("Weekly schedule entry")
        verbose_name_plural = _("Weekly schedule entries")
        ordering = ["day_of_week", "start_time"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(day_of_week__gte=0) & models.Q(day_of_week__lte=6),
                name="weekly_schedule_valid_day",
            ),
            models.CheckConstraint(
                condition=models.Q(end_time__gt=models.F("start_time")),
                name="weekly_schedule_valid_interval",
            ),
        ]
        indexes = [
            models.Index(fields=["facility", "day_of_week"], name="scheduling__facilit_4d7a2c_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.facility_id}: day {self.day_of_week} {self.start_time:%H:%M}-{self.end_time:%H:%M}"


class AvailabilityException(models.Model):
    """Date-specific override; both times empty means the whole day."""

    class ExceptionType(models.TextChoices):
        MANUAL = "manual", _("Manual")
        HOLIDAY = "holiday", _("Holiday")
        MAINTENANCE = "maintenance", _("Maintenance")
        RECURRING = "recurring", _("Recurring")

    facility = models.ForeignKey(
        "facilities.Facility",
        on_delete=models.CASCADE,
        related_name="availability_exceptions",
    )
    exception_date = models.DateField()
    start_time = models.TimeField(null=True, blank=True)
    end_time = models.TimeField(null=True, blank=True)
    is_available = models.BooleanField(default=False)
    exception_type = models.CharField(
        max_length=20,
        choices=ExceptionType.choices,
        default=ExceptionType.MANUAL,
    )
    notes = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Availability exception")
        verbose_name_plural = _("Availability exceptions")
        ordering = ["exception_date", "id"]
        constraints = [
            models.CheckConstraint(
                condition=(
                    models.Q(start_time__isnull=True, end_time__isnull=True)
                    | models.Q(start_time__isnull=False, end_time__isnull=False, end_time__gt=models.F("start_time"))
                ),
                name="availability_exception_valid_times",
            ),
        ]
        indexes = [
            models.Index(fields=["facility", "exception_date"], name="scheduling__facilit_9b3e51_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.facility_id}: {self.exception_date} ({self.exception_type})"


class HolidayTemplate(models.Model):
    """A named calendar date that facilities can close on."""

    name = models.CharField(max_length=100)
    description = models.CharField(max_length=255, blank=True)
    holiday_date = models.DateField()
    is_system_holiday = models.BooleanField(default=True)

    class Meta:
        verbose_name = _("Holiday template")
        verbose_name_plural = _("Holiday templates")
        ordering = ["holiday_date", "name"]
        constraints = [
            models.UniqueConstraint(fields=["name", "holiday_date"], name="holiday_template_unique_date"),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.holiday_date})"


class FacilitySelectedHoliday(models.Model):
    facility = models.ForeignKey(
        "facilities.Facility",
        on_delete=models.CASCADE,
        related_name="selected_holidays",
    )
    holiday_template = models.ForeignKey(
        HolidayTemplate,
        on_delete=models.CASCADE,
        related_name="selections",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Selected holiday")
        verbose_name_plural = _("Selected holidays")
        constraints = [
            models.UniqueConstraint(
                fields=["facility", "holiday_template"],
                name="selected_holiday_unique",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.facility_id}: {self.holiday_template_id}"
