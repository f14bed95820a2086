"""Facility API views."""

from __future__ import annotations

import logging

from django.db.models import Q  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.filters import OrderingFilter, SearchFilter  # type: ignore
from rest_framework.response import Response  # type: ignore

from .filters import FacilityFilterSet
from .models import Facility, FacilityCategory
from .permissions import IsFacilityOwnerOrAdmin, is_admin
from .serializers import FacilityCategorySerializer, FacilitySerializer, FacilityWriteSerializer

logger = logging.getLogger(__name__)


class FacilityViewSet(viewsets.ModelViewSet):
    """Viewset for listing and managing facilities."""

    queryset = Facility.objects.select_related("owner", "category")
    permission_classes = [IsFacilityOwnerOrAdmin]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    filterset_class = FacilityFilterSet
    search_fields = ["name", "description", "city"]
    ordering_fields = ["price", "created_at", "capacity"]

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        user = self.request.user
        if not user.is_authenticated:
            return qs.filter(status=Facility.Status.ACTIVE)
        if is_admin(user):
            return qs
        return qs.filter(Q(status=Facility.Status.ACTIVE) | Q(owner=user))

    def get_serializer_class(self):  # type: ignore
        if self.action in {"create", "update", "partial_update"}:
            return FacilityWriteSerializer
        return FacilitySerializer

    def perform_create(self, serializer):  # type: ignore
        facility = serializer.save()
        logger.info(f"Facility {facility.pk} created by user {facility.owner_id}, awaiting approval")

    @action(detail=True, methods=["post"], permission_classes=[permissions.IsAdminUser])
    def approve(self, request, pk=None):  # type: ignore
        facility = self.get_object()
        facility.approve()
        logger.info(f"Facility {facility.pk} approved by {request.user.pk}")
        return Response(FacilitySerializer(facility).data)

    @action(detail=True, methods=["post"])
    def deactivate(self, request, pk=None):  # type: ignore
        facility = self.get_object()
        if facility.status != Facility.Status.ACTIVE:
            return Response(
                {"detail": "Only active facilities can be deactivated."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        facility.deactivate()
        return Response(FacilitySerializer(facility).data)


class FacilityCategoryViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = FacilityCategory.objects.all()
    serializer_class = FacilityCategorySerializer
    permission_classes = [permissions.AllowAny]
    pagination_class = None
