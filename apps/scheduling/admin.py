"""Admin registrations for the scheduling domain."""

from __future__ import annotations

from django.contrib import admin

from .models import AvailabilityException, FacilitySelectedHoliday, HolidayTemplate, WeeklyScheduleEntry


class WeeklyScheduleEntryInline(admin.TabularInline):
    model = WeeklyScheduleEntry
    extra = 0
    fields = ("day_of_week", "start_time", "end_time", "is_available")


class AvailabilityExceptionInline(admin.TabularInline):
    model = AvailabilityException
    extra = 0
    fields = ("exception_date", "start_time", "end_time", "is_available", "exception_type", "notes")


@admin.register(AvailabilityException)
class AvailabilityExceptionAdmin(admin.ModelAdmin):
    list_display = ("facility", "exception_date", "start_time", "end_time", "is_available", "exception_type")
    list_filter = ("exception_type", "is_available")
    search_fields = ("facility__name", "notes")
    date_hierarchy = "exception_date"
    readonly_fields = ("created_at", "updated_at")


@admin.register(HolidayTemplate)
class HolidayTemplateAdmin(admin.ModelAdmin):
    list_display = ("name", "holiday_date", "is_system_holiday")
    list_filter = ("is_system_holiday",)
    search_fields = ("name",)


@admin.register(FacilitySelectedHoliday)
class FacilitySelectedHolidayAdmin(admin.ModelAdmin):
    list_display = ("facility", "holiday_template", "created_at")
    search_fields = ("facility__name", "holiday_template__name")
