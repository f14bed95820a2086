from datetime import date

import pytest

from apps.scheduling.domain.config import AvailabilityConfig
from apps.scheduling.domain.errors import ScheduleValidationError
from apps.scheduling.domain.exceptions import AvailabilityException
from apps.scheduling.domain.intervals import TimeInterval
from apps.scheduling.domain.resolver import AvailabilityResolver
from apps.scheduling.domain.schedule import MONDAY, WeeklySchedule
from apps.scheduling.domain.slots import (
    bookable_starts,
    duration_options,
    generate_slots,
    slots_in,
    validate_duration,
)


def iv(start, end):
    return TimeInterval.from_strings(start, end)


def labels(slots):
    return [str(slot) for slot in slots]


def test_monday_nine_to_five_in_half_hours():
    slots = generate_slots([iv("09:00", "17:00")], 30)
    assert len(slots) == 16
    assert str(slots[0]) == "09:00-09:30"
    assert str(slots[-1]) == "16:30-17:00"


def test_lunch_block_removes_two_slots():
    schedule = WeeklySchedule.from_rows([(MONDAY, iv("09:00", "17:00"), True)])
    lunch = AvailabilityException.create(1, date(2024, 6, 3), start_time="12:00", end_time="13:00")
    resolved = AvailabilityResolver(schedule, [lunch]).resolve(date(2024, 6, 3))

    slots = generate_slots(resolved.intervals, 30)

    assert len(slots) == 14
    assert "11:30-12:00" in labels(slots)
    assert "12:00-12:30" not in labels(slots)
    assert "13:00-13:30" in labels(slots)


@pytest.mark.parametrize("increment", [15, 30, 60, 120, 240])
def test_slot_count_is_floor_of_length_over_increment(increment):
    interval = iv("09:10", "17:00")
    slots = slots_in(interval, increment)
    assert len(slots) == interval.length // increment
    assert all(slot.length == increment for slot in slots)
    assert all(interval.start <= slot.start and slot.end <= interval.end for slot in slots)


def test_trailing_partial_slot_is_dropped():
    assert labels(slots_in(iv("09:00", "10:45"), 30)) == ["09:00-09:30", "09:30-10:00", "10:00-10:30"]


def test_interval_shorter_than_increment_yields_nothing():
    assert slots_in(iv("09:00", "09:45"), 60) == []


def test_non_positive_increment_is_rejected():
    with pytest.raises(ScheduleValidationError):
        slots_in(iv("09:00", "10:00"), 0)


def test_slots_follow_interval_order():
    slots = generate_slots([iv("09:00", "10:00"), iv("13:00", "14:00")], 60)
    assert labels(slots) == ["09:00-10:00", "13:00-14:00"]


def test_duration_options_start_at_effective_minimum():
    assert duration_options(AvailabilityConfig(availability_increment=60)) == [60, 120, 180, 240, 300, 360, 420, 480]
    config = AvailabilityConfig(availability_increment=60, minimum_rental_duration=120)
    assert duration_options(config)[0] == 120
    assert duration_options(config)[-1] == 480


def test_duration_options_with_large_increment():
    assert duration_options(AvailabilityConfig(availability_increment=240)) == [240, 480]


class TestValidateDuration:
    config = AvailabilityConfig(availability_increment=30, minimum_rental_duration=60)

    def test_accepts_multiple_of_increment(self):
        assert validate_duration(self.config, 90) == 90

    def test_rejects_non_multiple(self):
        with pytest.raises(ScheduleValidationError):
            validate_duration(self.config, 75)

    def test_rejects_below_minimum(self):
        with pytest.raises(ScheduleValidationError):
            validate_duration(self.config, 30)

    def test_rejects_above_ceiling(self):
        with pytest.raises(ScheduleValidationError):
            validate_duration(self.config, 510)


def test_bookable_starts_need_contiguous_time():
    intervals = [iv("09:00", "12:00"), iv("13:00", "17:00")]
    starts = bookable_starts(intervals, 30, 120)
    assert labels(starts)[0] == "09:00-09:30"
    assert "10:00-10:30" in labels(starts)
    assert "10:30-11:00" not in labels(starts)
    assert labels(starts)[-1] == "15:00-15:30"


def test_bookable_starts_treat_touching_intervals_as_contiguous():
    starts = bookable_starts([iv("09:00", "10:00"), iv("10:00", "11:00")], 60, 120)
    assert labels(starts) == ["09:00-10:00"]
