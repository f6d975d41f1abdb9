"""Tests for time ranges and the interval overlap check."""

from __future__ import annotations

from datetime import time
from decimal import Decimal

import pytest

from shared.domain.value_objects import TimeRange, format_minutes, times_overlap, to_minutes


@pytest.mark.parametrize(
    "value, expected",
    [
        ("00:00", 0),
        ("09:30", 570),
        ("24:00", 1440),
        (time(18, 15), 1095),
        (600, 600),
    ],
)
def test_to_minutes(value, expected) -> None:
    assert to_minutes(value) == expected


def test_format_minutes_pads_hours_and_minutes() -> None:
    assert format_minutes(65) == "01:05"
    assert format_minutes(1440) == "24:00"


def test_partial_overlap_is_detected_both_ways() -> None:
    assert times_overlap("10:00", "12:00", "11:00", "13:00")
    assert times_overlap("11:00", "13:00", "10:00", "12:00")


def test_adjacent_intervals_do_not_overlap() -> None:
    assert not times_overlap("10:00", "12:00", "12:00", "13:00")
    assert not times_overlap("12:00", "13:00", "10:00", "12:00")


def test_contained_interval_overlaps() -> None:
    assert times_overlap("09:00", "22:00", "15:00", "16:00")
    assert times_overlap("15:00", "16:00", "09:00", "22:00")


def test_identical_intervals_overlap() -> None:
    assert times_overlap("10:00", "11:00", "10:00", "11:00")


def test_time_range_rejects_empty_or_inverted_interval() -> None:
    with pytest.raises(ValueError):
        TimeRange.between("12:00", "12:00")
    with pytest.raises(ValueError):
        TimeRange.between("13:00", "12:00")
    with pytest.raises(ValueError):
        TimeRange(0, 1441)


def test_time_range_length_in_hours() -> None:
    slot = TimeRange.between("10:00", "11:30")

    assert slot.minutes == 90
    assert slot.hours == Decimal("1.5")


def test_time_range_overlap_requires_time_range() -> None:
    with pytest.raises(TypeError):
        TimeRange.between("10:00", "11:00").overlaps_with(("10:00", "11:00"))  # type: ignore[arg-type]


def test_time_range_is_a_value() -> None:
    assert TimeRange.between("10:00", "11:00") == TimeRange(600, 660)
    assert TimeRange(600, 660).to_dict() == {"start": "10:00", "end": "11:00"}
    assert str(TimeRange(600, 660)) == "10:00-11:00"
