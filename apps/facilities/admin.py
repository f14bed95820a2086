"""Admin registrations for facilities domain."""

from __future__ import annotations

from django.contrib import admin

from apps.scheduling.admin import AvailabilityExceptionInline, WeeklyScheduleEntryInline

from .models import Facility, FacilityCategory


@admin.register(FacilityCategory)
class FacilityCategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "slug")
    search_fields = ("name",)
    prepopulated_fields = {"slug": ("name",)}


@admin.register(Facility)
class FacilityAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "city",
        "state",
        "category",
        "status",
        "price",
        "price_unit",
        "availability_increment",
        "owner",
    )
    list_filter = ("status", "state", "category", "price_unit")
    search_fields = ("name", "city", "owner__email", "owner__username")
    readonly_fields = ("slug", "created_at", "updated_at", "approved_at")
    inlines = (WeeklyScheduleEntryInline, AvailabilityExceptionInline)
    actions = ("approve_facilities",)

    @admin.action(description="Approve selected facilities")
    def approve_facilities(self, request, queryset):  # type: ignore
        for facility in queryset:
            facility.approve()
