"""
Common Value Objects

Value objects used across multiple domains:
- TimeRange: A half-open interval of minutes within one day (start inclusive, end exclusive)

Overlap checks for field bookings are built on top of TimeRange.
"""

from dataclasses import dataclass
from datetime import time
from decimal import Decimal
from typing import Union

from shared.domain.base import ValueObject

MINUTES_PER_DAY = 24 * 60

TimeLike = Union[str, time, int]


def to_minutes(value: TimeLike) -> int:
    """
    Convert "HH:MM", a datetime.time or a minute count to minutes since midnight.

    "24:00" is accepted as the end of the day.
    """
    if isinstance(value, int):
        return value
    if isinstance(value, time):
        return value.hour * 60 + value.minute
    hours, minutes = value.split(":")[:2]
    return int(hours) * 60 + int(minutes)


def format_minutes(minutes: int) -> str:
    """Render minutes since midnight as "HH:MM" (1440 renders as "24:00")."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def times_overlap(start1: TimeLike, end1: TimeLike, start2: TimeLike, end2: TimeLike) -> bool:
    """
    Check whether [start1, end1) and [start2, end2) share any instant.

    Intervals that only touch at a boundary do not overlap.
    """
    s1, e1 = to_minutes(start1), to_minutes(end1)
    s2, e2 = to_minutes(start2), to_minutes(end2)
    return s1 < e2 and s2 < e1


@dataclass(frozen=True)
class TimeRange(ValueObject):
    """
    Time range value object

    Represents [start, end) in minutes since midnight.
    Used for booking intervals and availability slots.
    """
    start: int
    end: int

    def __post_init__(self):
        if not 0 <= self.start < self.end <= MINUTES_PER_DAY:
            raise ValueError(
                f"Invalid time range: {format_minutes(self.start)} - {format_minutes(self.end)}"
            )

    @classmethod
    def between(cls, start: TimeLike, end: TimeLike) -> 'TimeRange':
        return cls(to_minutes(start), to_minutes(end))

    def overlaps_with(self, other: 'TimeRange') -> bool:
        """
        Check if this range overlaps with another

        Examples:
            - 10:00-12:00 overlaps with 11:00-13:00 -> True
            - 10:00-12:00 overlaps with 12:00-13:00 -> False (adjacent)
        """
        if not isinstance(other, TimeRange):
            raise TypeError("Can only check overlap with another TimeRange")
        return times_overlap(self.start, self.end, other.start, other.end)

    @property
    def minutes(self) -> int:
        return self.end - self.start

    @property
    def hours(self) -> Decimal:
        """Length of the range in fractional hours."""
        return Decimal(self.minutes) / Decimal(60)

    def to_dict(self) -> dict:
        return {"start": format_minutes(self.start), "end": format_minutes(self.end)}

    def __str__(self):
        return f"{format_minutes(self.start)}-{format_minutes(self.end)}"

    def __repr__(self):
        return f"TimeRange({format_minutes(self.start)!r}, {format_minutes(self.end)!r})"
