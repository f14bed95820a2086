"""Serializers for the facilities domain."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from rest_framework import serializers  # type: ignore

from apps.scheduling.domain.config import STATE_TIMEZONES, timezone_for_state
from shared.domain.value_objects import SUPPORTED_CURRENCIES

from .models import Facility, FacilityCategory


class FacilityCategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = FacilityCategory
        fields = ["id", "slug", "name", "description"]


class FacilitySerializer(serializers.ModelSerializer):
    owner = serializers.ReadOnlyField(source="owner_id")
    category = FacilityCategorySerializer(read_only=True)

    class Meta:
        model = Facility
        fields = [
            "id",
            "owner",
            "category",
            "name",
            "slug",
            "description",
            "status",
            "address",
            "city",
            "state",
            "zip_code",
            "price",
            "price_unit",
            "currency",
            "capacity",
            "availability_increment",
            "minimum_rental_duration",
            "availability_timezone",
            "availability_notes",
            "approved_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class FacilityWriteSerializer(serializers.ModelSerializer):
    """Listing fields only; availability settings go through the scheduling API."""

    category = serializers.PrimaryKeyRelatedField(
        queryset=FacilityCategory.objects.all(),
        required=False,
        allow_null=True,
    )

    class Meta:
        model = Facility
        fields = [
            "id",
            "category",
            "name",
            "description",
            "address",
            "city",
            "state",
            "zip_code",
            "price",
            "price_unit",
            "currency",
            "capacity",
        ]
        read_only_fields = ["id"]

    def validate_state(self, value: str) -> str:  # type: ignore
        value = value.strip().upper()
        if value not in STATE_TIMEZONES:
            raise serializers.ValidationError("Unknown two-letter state code.")
        return value

    def validate_currency(self, value: str) -> str:  # type: ignore
        value = value.upper()
        if value not in SUPPORTED_CURRENCIES:
            raise serializers.ValidationError(f"Currency must be one of {', '.join(SUPPORTED_CURRENCIES)}.")
        return value

    def create(self, validated_data):  # type: ignore
        request = self.context["request"]
        validated_data["owner"] = request.user
        validated_data["availability_timezone"] = timezone_for_state(
            validated_data.get("state"),
            default=settings.SCHEDULING_DEFAULT_TIMEZONE,
        )
        return super().create(validated_data)

    def to_representation(self, instance):  # type: ignore
        return FacilitySerializer(instance, context=self.context).data
