from datetime import time

import pytest

from apps.scheduling.domain.errors import ScheduleValidationError
from apps.scheduling.domain.intervals import (
    FULL_DAY,
    TimeInterval,
    find_overlap,
    format_clock,
    normalize,
    parse_clock,
    subtract,
    to_time,
    union,
)


def iv(start, end):
    return TimeInterval.from_strings(start, end)


@pytest.mark.parametrize("value, minutes", [
    ("00:00", 0),
    ("09:30", 570),
    ("23:59", 1439),
    ("17:00:00", 1020),
    (time(8, 15), 495),
])
def test_parse_clock(value, minutes):
    assert parse_clock(value) == minutes


@pytest.mark.parametrize("value", ["24:00", "9", "09:60", "ab:cd", "", None, 930])
def test_parse_clock_rejects_malformed_values(value):
    with pytest.raises(ScheduleValidationError):
        parse_clock(value, field="start")


def test_format_and_to_time():
    assert format_clock(570) == "09:30"
    assert to_time(1439) == time(23, 59)


def test_interval_requires_start_before_end():
    with pytest.raises(ScheduleValidationError):
        iv("12:00", "12:00")
    with pytest.raises(ScheduleValidationError):
        iv("13:00", "12:00")


def test_full_day_ends_at_2359():
    assert FULL_DAY.as_dict() == {"start": "00:00", "end": "23:59"}
    assert FULL_DAY.length == 1439


def test_touching_intervals_do_not_overlap():
    assert not iv("09:00", "12:00").overlaps(iv("12:00", "15:00"))
    assert find_overlap([iv("12:00", "15:00"), iv("09:00", "12:00")]) is None


def test_find_overlap_reports_pair():
    first, second = find_overlap([iv("13:00", "17:00"), iv("09:00", "14:00")])
    assert (str(first), str(second)) == ("09:00-14:00", "13:00-17:00")


def test_normalize_merges_overlapping_and_touching():
    merged = normalize([iv("13:00", "15:00"), iv("09:00", "12:00"), iv("12:00", "13:30")])
    assert merged == [iv("09:00", "15:00")]


def test_subtract_splits_interval():
    assert subtract([iv("09:00", "17:00")], iv("12:00", "13:00")) == [
        iv("09:00", "12:00"),
        iv("13:00", "17:00"),
    ]


def test_subtract_partial_overlap_trims_edges():
    assert subtract([iv("09:00", "12:00"), iv("13:00", "17:00")], iv("11:00", "14:00")) == [
        iv("09:00", "11:00"),
        iv("14:00", "17:00"),
    ]


def test_subtract_covering_block_removes_everything():
    assert subtract([iv("09:00", "17:00")], iv("08:00", "18:00")) == []


def test_union_extends_beyond_schedule_boundaries():
    assert union([iv("09:00", "17:00")], iv("16:00", "20:00")) == [iv("09:00", "20:00")]
    assert union([], iv("10:00", "14:00")) == [iv("10:00", "14:00")]
