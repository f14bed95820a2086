"""URL routing for the scheduling domain.

``facility_urlpatterns`` is mounted under each facility by the facilities
router; ``urlpatterns`` holds the facility-independent catalogues.
"""

from __future__ import annotations

from django.urls import path  # type: ignore

from .views import (
    ApplyWeeklyTemplateView,
    AvailabilityConfigView,
    AvailabilityExceptionDetailView,
    AvailabilityExceptionListView,
    DaySlotsView,
    HolidaySelectionView,
    HolidayTemplateListView,
    ResolvedAvailabilityView,
    WeeklyScheduleView,
    WeeklyTemplateListView,
)

facility_urlpatterns = [
    path("", ResolvedAvailabilityView.as_view(), name="facility-availability"),
    path("config/", AvailabilityConfigView.as_view(), name="facility-availability-config"),
    path("weekly/", WeeklyScheduleView.as_view(), name="facility-weekly-schedule"),
    path(
        "weekly/apply-template/",
        ApplyWeeklyTemplateView.as_view(),
        name="facility-weekly-schedule-template",
    ),
    path(
        "exceptions/",
        AvailabilityExceptionListView.as_view(),
        name="facility-availability-exception-list",
    ),
    path(
        "exceptions/<int:pk>/",
        AvailabilityExceptionDetailView.as_view(),
        name="facility-availability-exception-detail",
    ),
    path("slots/", DaySlotsView.as_view(), name="facility-availability-slots"),
    path("holidays/", HolidaySelectionView.as_view(), name="facility-holiday-selection"),
]

urlpatterns = [
    path("templates/", WeeklyTemplateListView.as_view(), name="weekly-template-list"),
    path("holiday-templates/", HolidayTemplateListView.as_view(), name="holiday-template-list"),
]
