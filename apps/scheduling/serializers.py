"""Serializers for the scheduling API.

Write serializers only check payload shape; the scheduling rules live in
the domain and surface as ``ScheduleValidationError``. Read serializers
render domain objects, not model instances.
"""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .domain.config import INCREMENT_OPTIONS, minimum_duration_options
from .domain.exceptions import ExceptionType
from .domain.schedule import DAY_NAMES


class TimeSlotSerializer(serializers.Serializer):
    start = serializers.CharField()
    end = serializers.CharField()


class DayScheduleSerializer(serializers.Serializer):
    day = serializers.IntegerField(min_value=0, max_value=6)
    is_available = serializers.BooleanField(default=False)
    time_slots = TimeSlotSerializer(many=True, required=False, default=list)


class WeeklyScheduleWriteSerializer(serializers.Serializer):
    days = DayScheduleSerializer(many=True)


class WeeklyTemplateApplySerializer(serializers.Serializer):
    template = serializers.CharField()


class AvailabilityConfigWriteSerializer(serializers.Serializer):
    availability_increment = serializers.IntegerField(required=False)
    minimum_rental_duration = serializers.IntegerField(required=False, allow_null=True)
    timezone = serializers.CharField(required=False)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class AvailabilityConfigSerializer(serializers.Serializer):
    availability_increment = serializers.IntegerField()
    minimum_rental_duration = serializers.IntegerField(allow_null=True)
    effective_minimum_duration = serializers.IntegerField()
    timezone = serializers.CharField()
    notes = serializers.CharField(allow_blank=True)
    increment_options = serializers.SerializerMethodField()
    minimum_duration_options = serializers.SerializerMethodField()

    def get_increment_options(self, config):  # type: ignore
        return list(INCREMENT_OPTIONS)

    def get_minimum_duration_options(self, config):  # type: ignore
        return minimum_duration_options(config.availability_increment)


class AvailabilityExceptionWriteSerializer(serializers.Serializer):
    exception_date = serializers.DateField()
    start_time = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    end_time = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    is_available = serializers.BooleanField(default=False)
    exception_type = serializers.ChoiceField(
        choices=[choice.value for choice in ExceptionType],
        default=ExceptionType.MANUAL.value,
    )
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True, default="")


class AvailabilityExceptionSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    exception_date = serializers.DateField()
    start_time = serializers.CharField(allow_null=True)
    end_time = serializers.CharField(allow_null=True)
    is_whole_day = serializers.BooleanField()
    is_available = serializers.BooleanField()
    exception_type = serializers.SerializerMethodField()
    notes = serializers.CharField(allow_blank=True)

    def get_exception_type(self, exception):  # type: ignore
        return exception.exception_type.value


class IntervalSerializer(serializers.Serializer):
    start = serializers.SerializerMethodField()
    end = serializers.SerializerMethodField()

    def get_start(self, interval):  # type: ignore
        return interval.as_dict()["start"]

    def get_end(self, interval):  # type: ignore
        return interval.as_dict()["end"]


class ResolvedDaySerializer(serializers.Serializer):
    date = serializers.DateField()
    day_of_week = serializers.IntegerField()
    day_name = serializers.SerializerMethodField()
    is_available = serializers.BooleanField()
    open_minutes = serializers.IntegerField()
    intervals = IntervalSerializer(many=True)
    exceptions = serializers.SerializerMethodField()

    def get_day_name(self, day):  # type: ignore
        return DAY_NAMES[day.day_of_week]

    def get_exceptions(self, day):  # type: ignore
        return [exception.id for exception in day.exceptions]


class WindowQuerySerializer(serializers.Serializer):
    start = serializers.DateField()
    end = serializers.DateField(required=False)
    days = serializers.IntegerField(required=False, min_value=1)


class ExceptionListQuerySerializer(serializers.Serializer):
    start = serializers.DateField(required=False)
    end = serializers.DateField(required=False)

    def validate(self, attrs):  # type: ignore
        if bool(attrs.get("start")) != bool(attrs.get("end")):
            raise serializers.ValidationError("Provide both start and end, or neither.")
        if attrs.get("start") and attrs["end"] < attrs["start"]:
            raise serializers.ValidationError("end must not be before start.")
        return attrs


class DaySlotsQuerySerializer(serializers.Serializer):
    date = serializers.DateField()
    duration = serializers.IntegerField(required=False, min_value=1)


class DaySlotsSerializer(serializers.Serializer):
    """Slot picker payload for one date."""

    date = serializers.SerializerMethodField()
    is_available = serializers.SerializerMethodField()
    intervals = IntervalSerializer(many=True)
    availability_increment = serializers.SerializerMethodField()
    slots = IntervalSerializer(many=True)
    duration = serializers.IntegerField()
    duration_options = serializers.ListField(child=serializers.IntegerField())
    bookable_starts = IntervalSerializer(many=True)
    price = serializers.SerializerMethodField()

    def get_date(self, availability):  # type: ignore
        return availability.day.date.isoformat()

    def get_is_available(self, availability):  # type: ignore
        return availability.day.is_available

    def get_availability_increment(self, availability):  # type: ignore
        return availability.config.availability_increment

    def get_price(self, availability):  # type: ignore
        if availability.price is None:
            return None
        return {"amount": str(availability.price.amount), "currency": availability.price.currency}


class HolidaySerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    holiday_date = serializers.DateField()
    description = serializers.CharField(allow_blank=True)


class HolidaySelectionWriteSerializer(serializers.Serializer):
    holiday_template_ids = serializers.ListField(
        child=serializers.IntegerField(min_value=1),
        allow_empty=True,
    )


class WeeklyTemplateSerializer(serializers.Serializer):
    key = serializers.CharField()
    name = serializers.CharField()
    description = serializers.CharField()

