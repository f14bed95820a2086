"""URL routing for the facilities domain."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import SimpleRouter  # type: ignore

from apps.scheduling.urls import facility_urlpatterns

from .views import FacilityCategoryViewSet, FacilityViewSet

router = SimpleRouter()
router.register(r"categories", FacilityCategoryViewSet, basename="facility-category")
router.register(r"", FacilityViewSet, basename="facility")

urlpatterns = [
    path("", include(router.urls)),
    path("<int:facility_id>/availability/", include(facility_urlpatterns)),
]
