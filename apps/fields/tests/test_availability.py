"""Tests for field availability and free slot computation."""

from __future__ import annotations

from datetime import date, time, timedelta
from decimal import Decimal

import pytest

from apps.bookings.models import Booking
from apps.fields import services
from apps.fields.models import Field

pytestmark = pytest.mark.django_db


def upcoming(weekday: int) -> date:
    """A date at least a week ahead falling on ``weekday`` (0 = Monday)."""

    start = date.today() + timedelta(days=7)
    return start + timedelta(days=(weekday - start.weekday()) % 7)


@pytest.fixture
def field() -> Field:
    return Field.objects.create(name="Main pitch", hourly_rate=Decimal("20.00"))


def book(field: Field, on_date: date, start: str, end: str, status=Booking.Status.PENDING) -> Booking:
    return Booking.objects.create(
        field=field,
        date=on_date,
        start_time=start,
        end_time=end,
        status=status,
        is_external=True,
        contact_name="Walk-in",
    )


def test_free_field_is_available(field) -> None:
    assert services.is_available(field, upcoming(0), "10:00", "12:00")


def test_overlapping_booking_blocks_slot(field) -> None:
    monday = upcoming(0)
    book(field, monday, "10:00", "12:00")

    assert not services.is_available(field, monday, "11:00", "13:00")
    assert not services.is_available(field, monday, "09:00", "10:30")


def test_adjacent_booking_does_not_block(field) -> None:
    monday = upcoming(0)
    book(field, monday, "10:00", "12:00")

    assert services.is_available(field, monday, "12:00", "13:00")
    assert services.is_available(field, monday, "08:00", "10:00")


def test_booking_on_other_date_does_not_block(field) -> None:
    monday = upcoming(0)
    book(field, monday + timedelta(days=1), "10:00", "12:00")

    assert services.is_available(field, monday, "10:00", "12:00")


@pytest.mark.parametrize("status", [Booking.Status.CANCELLED, Booking.Status.COMPLETED])
def test_inactive_bookings_do_not_block(field, status) -> None:
    monday = upcoming(0)
    book(field, monday, "10:00", "12:00", status=status)

    assert services.is_available(field, monday, "10:00", "12:00")


def test_excluded_booking_is_ignored(field) -> None:
    monday = upcoming(0)
    booking = book(field, monday, "10:00", "12:00")

    assert services.is_available(field, monday, "10:00", "12:00", exclude_booking_id=booking.pk)


def test_field_in_maintenance_is_never_available(field) -> None:
    field.status = Field.Status.MAINTENANCE
    field.save()

    assert not services.is_available(field, upcoming(0), "10:00", "12:00")
    assert services.available_slots(field, upcoming(0)) == []


def test_weekday_slots_cover_opening_hours(field) -> None:
    slots = services.available_slots(field, upcoming(0))

    assert len(slots) == 13
    assert slots[0].to_dict() == {"start": "09:00", "end": "10:00"}
    assert slots[-1].to_dict() == {"start": "21:00", "end": "22:00"}


def test_weekend_slots_use_weekend_hours(field) -> None:
    slots = services.available_slots(field, upcoming(5))

    assert len(slots) == 12
    assert slots[-1].to_dict() == {"start": "20:00", "end": "21:00"}


def test_booked_slots_are_removed_and_restored_on_cancel(field) -> None:
    monday = upcoming(0)
    booking = book(field, monday, "10:00", "12:00")

    starts = [slot.to_dict()["start"] for slot in services.available_slots(field, monday)]
    assert "10:00" not in starts
    assert "11:00" not in starts
    assert "12:00" in starts

    booking.status = Booking.Status.CANCELLED
    booking.save()

    starts = [slot.to_dict()["start"] for slot in services.available_slots(field, monday)]
    assert "10:00" in starts
    assert "11:00" in starts


def test_custom_opening_hours(field) -> None:
    field.weekday_opens_at = time(18, 0)
    field.weekday_closes_at = time(20, 0)
    field.save()

    slots = services.available_slots(field, upcoming(2))

    assert [str(slot) for slot in slots] == ["18:00-19:00", "19:00-20:00"]


def test_half_hour_opening_starts_at_next_whole_hour(field) -> None:
    field.weekday_opens_at = time(9, 30)
    field.weekday_closes_at = time(12, 30)
    field.save()

    slots = services.available_slots(field, upcoming(2))

    assert [str(slot) for slot in slots] == ["10:00-11:00", "11:00-12:00"]


def test_usage_stats_count_completed_bookings(field) -> None:
    monday = upcoming(0)
    done = book(field, monday, "10:00", "12:00", status=Booking.Status.COMPLETED)
    done.total_price = Decimal("40.00")
    done.payment_status = Booking.PaymentStatus.PAID
    done.save()
    book(field, monday, "15:00", "16:00", status=Booking.Status.CANCELLED)

    stats = services.field_usage_stats(field, monday, monday)

    assert stats["total_bookings"] == 1
    assert stats["total_hours"] == Decimal("2.00")
    assert stats["total_revenue"] == Decimal("40.00")
    # 120 of 780 open minutes
    assert stats["occupancy_rate"] == Decimal("15.38")
