"""Scheduling API views.

Every facility-scoped view loads the facility once, checks owner-or-admin
rights for writes and hides non-active facilities from everyone else.
Domain errors are turned into responses in ``handle_exception``.
"""

from __future__ import annotations

import logging

from django.shortcuts import get_object_or_404  # type: ignore
from rest_framework import permissions, status  # type: ignore
from rest_framework.exceptions import NotFound  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.facilities.models import Facility
from apps.facilities.permissions import IsFacilityOwnerOrAdmin, is_admin
from shared.domain.value_objects import DateRange

from .application.command_handlers import (
    UNCHANGED,
    ApplyWeeklyTemplateCommand,
    ApplyWeeklyTemplateHandler,
    CreateAvailabilityExceptionCommand,
    CreateAvailabilityExceptionHandler,
    DeleteAvailabilityExceptionCommand,
    DeleteAvailabilityExceptionHandler,
    ReplaceHolidaySelectionCommand,
    ReplaceHolidaySelectionHandler,
    ReplaceWeeklyScheduleCommand,
    ReplaceWeeklyScheduleHandler,
    UpdateAvailabilityConfigCommand,
    UpdateAvailabilityConfigHandler,
)
from .application.queries import AvailabilityQueryService, window_from_params
from .domain.errors import (
    ExceptionNotFound,
    FacilityNotFound,
    ScheduleReplaceError,
    ScheduleValidationError,
    StoreError,
)
from .repositories import (
    DjangoExceptionRepository,
    DjangoFacilityAvailabilityRepository,
    DjangoHolidayRepository,
    DjangoWeeklyScheduleRepository,
)
from .serializers import (
    AvailabilityConfigSerializer,
    AvailabilityConfigWriteSerializer,
    AvailabilityExceptionSerializer,
    AvailabilityExceptionWriteSerializer,
    DaySlotsQuerySerializer,
    DaySlotsSerializer,
    ExceptionListQuerySerializer,
    HolidaySelectionWriteSerializer,
    HolidaySerializer,
    ResolvedDaySerializer,
    WeeklyScheduleWriteSerializer,
    WeeklyTemplateApplySerializer,
    WeeklyTemplateSerializer,
    WindowQuerySerializer,
)

logger = logging.getLogger(__name__)


def _schedule_payload(schedule) -> dict:
    return {"days": [day.as_dict() for day in schedule.ordered_days()]}


class SchedulingErrorMixin:
    """Map scheduling domain errors onto HTTP responses."""

    def handle_exception(self, exc):  # type: ignore
        if isinstance(exc, ScheduleValidationError):
            return Response(exc.as_detail(), status=status.HTTP_400_BAD_REQUEST)
        if isinstance(exc, (FacilityNotFound, ExceptionNotFound)):
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)
        if isinstance(exc, ScheduleReplaceError):
            return Response(
                {
                    "detail": "The weekly schedule could not be saved. Re-submit the full schedule.",
                    "code": "schedule_replace_failed",
                },
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        if isinstance(exc, StoreError):
            return Response(
                {"detail": "Availability storage is unavailable, try again later.", "code": "store_unavailable"},
                status=status.HTTP_503_SERVICE_UNAVAILABLE,
            )
        return super().handle_exception(exc)


class FacilityScheduleMixin(SchedulingErrorMixin):
    """Helper mixin to load the facility and check permissions."""

    facility_lookup_url_kwarg = "facility_id"
    permission_classes = [IsFacilityOwnerOrAdmin]

    def initial(self, request, *args, **kwargs):  # type: ignore
        super().initial(request, *args, **kwargs)
        facility_id = kwargs.get(self.facility_lookup_url_kwarg)
        self.facility_object = get_object_or_404(Facility, pk=facility_id)
        if not self._can_view(request.user, self.facility_object):
            raise NotFound("Facility not found.")
        self.check_object_permissions(request, self.facility_object)

    @staticmethod
    def _can_view(user, facility: Facility) -> bool:
        if facility.status == Facility.Status.ACTIVE:
            return True
        if not user.is_authenticated:
            return False
        return is_admin(user) or facility.owner_id == user.id

    def get_facility(self) -> Facility:
        return self.facility_object

    def get_query_service(self) -> AvailabilityQueryService:
        return AvailabilityQueryService()


class AvailabilityConfigView(FacilityScheduleMixin, APIView):
    """Read and edit the facility's increment, minimum duration, timezone and notes."""

    def get(self, request, facility_id):  # type: ignore
        config = self.get_query_service().config(facility_id)
        return Response(AvailabilityConfigSerializer(config).data)

    def put(self, request, facility_id):  # type: ignore
        serializer = AvailabilityConfigWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        handler = UpdateAvailabilityConfigHandler(DjangoFacilityAvailabilityRepository())
        config = handler.handle(UpdateAvailabilityConfigCommand(
            facility_id=facility_id,
            availability_increment=data.get("availability_increment"),
            minimum_rental_duration=data.get("minimum_rental_duration", UNCHANGED),
            timezone=data.get("timezone"),
            notes=data.get("notes"),
        ))
        return Response(AvailabilityConfigSerializer(config).data)

    def patch(self, request, facility_id):  # type: ignore
        return self.put(request, facility_id)


class WeeklyScheduleView(FacilityScheduleMixin, APIView):
    """Read the weekly schedule or replace all seven days at once."""

    def get(self, request, facility_id):  # type: ignore
        schedule = self.get_query_service().weekly_schedule(facility_id)
        return Response(_schedule_payload(schedule))

    def put(self, request, facility_id):  # type: ignore
        serializer = WeeklyScheduleWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        handler = ReplaceWeeklyScheduleHandler(
            DjangoFacilityAvailabilityRepository(),
            DjangoWeeklyScheduleRepository(),
        )
        schedule = handler.handle(ReplaceWeeklyScheduleCommand(
            facility_id=facility_id,
            days=[dict(day) for day in serializer.validated_data["days"]],
        ))
        return Response(_schedule_payload(schedule))


class ApplyWeeklyTemplateView(FacilityScheduleMixin, APIView):
    def post(self, request, facility_id):  # type: ignore
        serializer = WeeklyTemplateApplySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        handler = ApplyWeeklyTemplateHandler(
            DjangoFacilityAvailabilityRepository(),
            DjangoWeeklyScheduleRepository(),
        )
        schedule = handler.handle(ApplyWeeklyTemplateCommand(
            facility_id=facility_id,
            template=serializer.validated_data["template"],
        ))
        return Response(_schedule_payload(schedule))


class AvailabilityExceptionListView(FacilityScheduleMixin, APIView):
    """List exceptions (optionally inside ``start``..``end``) or create one."""

    def get(self, request, facility_id):  # type: ignore
        query = ExceptionListQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        window = None
        if query.validated_data.get("start"):
            window = DateRange(query.validated_data["start"], query.validated_data["end"])

        exceptions = self.get_query_service().exceptions(facility_id, window)
        return Response(AvailabilityExceptionSerializer(exceptions, many=True).data)

    def post(self, request, facility_id):  # type: ignore
        serializer = AvailabilityExceptionWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        handler = CreateAvailabilityExceptionHandler(
            DjangoFacilityAvailabilityRepository(),
            DjangoExceptionRepository(),
        )
        exception = handler.handle(CreateAvailabilityExceptionCommand(
            facility_id=facility_id,
            exception_date=data["exception_date"],
            start_time=data.get("start_time"),
            end_time=data.get("end_time"),
            is_available=data["is_available"],
            exception_type=data["exception_type"],
            notes=data.get("notes") or "",
        ))
        return Response(AvailabilityExceptionSerializer(exception).data, status=status.HTTP_201_CREATED)


class AvailabilityExceptionDetailView(FacilityScheduleMixin, APIView):
    def delete(self, request, facility_id, pk):  # type: ignore
        handler = DeleteAvailabilityExceptionHandler(
            DjangoFacilityAvailabilityRepository(),
            DjangoExceptionRepository(),
        )
        handler.handle(DeleteAvailabilityExceptionCommand(facility_id=facility_id, exception_id=pk))
        return Response(status=status.HTTP_204_NO_CONTENT)


class ResolvedAvailabilityView(FacilityScheduleMixin, APIView):
    """Effective open intervals for every date of a window."""

    def get(self, request, facility_id):  # type: ignore
        query = WindowQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        data = query.validated_data
        window = window_from_params(data["start"], data.get("end"), data.get("days"))

        days = self.get_query_service().resolve(facility_id, window)
        return Response({
            "start": window.start_date.isoformat(),
            "end": window.end_date.isoformat(),
            "timezone": self.get_facility().availability_timezone,
            "days": ResolvedDaySerializer(days, many=True).data,
        })


class DaySlotsView(FacilityScheduleMixin, APIView):
    """Slots, duration choices and bookable start times for one date."""

    def get(self, request, facility_id):  # type: ignore
        query = DaySlotsQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        availability = self.get_query_service().day_slots(
            facility_id,
            query.validated_data["date"],
            query.validated_data.get("duration"),
        )
        return Response(DaySlotsSerializer(availability).data)


class HolidaySelectionView(FacilityScheduleMixin, APIView):
    def get(self, request, facility_id):  # type: ignore
        holidays = self.get_query_service().selected_holidays(facility_id)
        return Response(HolidaySerializer(holidays, many=True).data)

    def put(self, request, facility_id):  # type: ignore
        serializer = HolidaySelectionWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        handler = ReplaceHolidaySelectionHandler(
            DjangoFacilityAvailabilityRepository(),
            DjangoHolidayRepository(),
            DjangoExceptionRepository(),
        )
        holidays = handler.handle(ReplaceHolidaySelectionCommand(
            facility_id=facility_id,
            holiday_template_ids=serializer.validated_data["holiday_template_ids"],
        ))
        return Response(HolidaySerializer(holidays, many=True).data)


class WeeklyTemplateListView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request):  # type: ignore
        templates = AvailabilityQueryService.weekly_templates()
        return Response(WeeklyTemplateSerializer(templates, many=True).data)


class HolidayTemplateListView(SchedulingErrorMixin, APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request):  # type: ignore
        holidays = AvailabilityQueryService().holiday_templates()
        return Response(HolidaySerializer(holidays, many=True).data)
