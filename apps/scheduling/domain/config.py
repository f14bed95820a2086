"""Facility-level availability settings."""

from __future__ import annotations

from dataclasses import dataclass, replace
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from shared.domain.base import ValueObject

from .errors import ScheduleValidationError

INCREMENT_OPTIONS = (15, 30, 60, 120, 240)
MINIMUM_DURATION_OPTIONS = (30, 60, 120, 240, 480, 960)

DEFAULT_INCREMENT = 30
DEFAULT_TIMEZONE = "America/New_York"

STATE_TIMEZONES = {
    **dict.fromkeys(
        ["CT", "DE", "FL", "GA", "ME", "MD", "MA", "NH", "NJ", "NY", "NC", "OH",
         "PA", "RI", "SC", "VT", "VA", "WV", "DC"],
        "America/New_York",
    ),
    **dict.fromkeys(
        ["AL", "AR", "IL", "IA", "KS", "KY", "LA", "MN", "MS", "MO", "NE", "ND",
         "OK", "SD", "TN", "TX", "WI"],
        "America/Chicago",
    ),
    "AZ": "America/Phoenix",
    **dict.fromkeys(["CO", "ID", "MT", "NV", "NM", "UT", "WY"], "America/Denver"),
    **dict.fromkeys(["CA", "OR", "WA"], "America/Los_Angeles"),
    "AK": "America/Anchorage",
    "HI": "Pacific/Honolulu",
}


def minimum_duration_options(increment: int) -> list[int]:
    """Minimum durations a user may pick for ``increment``; "unset" is always allowed."""

    return [value for value in MINIMUM_DURATION_OPTIONS if value > increment]


def timezone_for_state(state: str | None, default: str = DEFAULT_TIMEZONE) -> str:
    if not state:
        return default
    return STATE_TIMEZONES.get(state.strip().upper(), default)


def validate_timezone(name: str) -> str:
    if not name:
        raise ScheduleValidationError("A timezone is required.", field="timezone")
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        raise ScheduleValidationError(f"Unknown timezone {name!r}.", field="timezone") from None
    return name


@dataclass(frozen=True)
class AvailabilityConfig(ValueObject):
    """Parameters of slot generation for one facility.

    ``minimum_rental_duration=None`` means "same as the increment". When
    set it is strictly greater than the increment; that is enforced here,
    at the editing boundary, and trusted by the resolver.
    """

    availability_increment: int = DEFAULT_INCREMENT
    minimum_rental_duration: int | None = None
    timezone: str = DEFAULT_TIMEZONE
    notes: str = ""

    @property
    def effective_minimum_duration(self) -> int:
        return self.minimum_rental_duration or self.availability_increment

    def with_increment(self, increment: int) -> "AvailabilityConfig":
        """Change the increment, dropping a minimum duration it invalidates."""

        if increment not in INCREMENT_OPTIONS:
            raise ScheduleValidationError(
                f"Increment must be one of {', '.join(map(str, INCREMENT_OPTIONS))} minutes.",
                field="availability_increment",
            )
        minimum = self.minimum_rental_duration
        if minimum is not None and minimum <= increment:
            minimum = None
        return replace(self, availability_increment=increment, minimum_rental_duration=minimum)

    def with_minimum_duration(self, minimum: int | None) -> "AvailabilityConfig":
        if minimum is not None and minimum not in minimum_duration_options(self.availability_increment):
            raise ScheduleValidationError(
                f"Minimum rental duration must be longer than the {self.availability_increment}-minute "
                f"increment and one of {', '.join(map(str, MINIMUM_DURATION_OPTIONS))} minutes.",
                field="minimum_rental_duration",
            )
        return replace(self, minimum_rental_duration=minimum)

    def with_timezone(self, name: str) -> "AvailabilityConfig":
        return replace(self, timezone=validate_timezone(name))

    def with_notes(self, notes: str | None) -> "AvailabilityConfig":
        return replace(self, notes=notes or "")

    def as_dict(self) -> dict:
        return {
            "availability_increment": self.availability_increment,
            "minimum_rental_duration": self.minimum_rental_duration,
            "timezone": self.timezone,
            "notes": self.notes,
        }
