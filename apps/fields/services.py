"""Field availability engine."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Any

from django.db.models import QuerySet  # type: ignore

from apps.bookings.models import Booking
from shared.domain.exceptions import NotFoundError
from shared.domain.value_objects import TimeLike, TimeRange
from shared.infrastructure.repository import DjangoRepository, Patch, lock_if_possible

from .domain.pricing import calculate_price
from .models import Field

logger = logging.getLogger(__name__)

SLOT_MINUTES = 60


class FieldNotFoundError(NotFoundError):
    code = "FIELD_NOT_FOUND"
    default_message = "Field not found"


fields = DjangoRepository(Field, not_found=FieldNotFoundError)


def get_field(field_id: Any, *, lock: bool = False) -> Field:
    """Load a field, raising FieldNotFoundError when it does not exist."""

    return fields.get(field_id, lock=lock)


def change_status(field_id: Any, status: str) -> Field:
    field = fields.update(field_id, Patch.of(status=status))
    logger.info(f"Field {field.pk} status changed to {field.status}")
    return field


def blocking_bookings(field: Field, on_date: date, *, exclude_booking_id=None) -> QuerySet:
    """Pending and confirmed bookings of ``field`` on ``on_date``."""

    queryset = Booking.objects.filter(
        field=field,
        date=on_date,
        status__in=Booking.BLOCKING_STATUSES,
    )
    if exclude_booking_id is not None:
        queryset = queryset.exclude(pk=exclude_booking_id)
    return lock_if_possible(queryset)


def _occupied_ranges(field: Field, on_date: date, *, exclude_booking_id=None) -> list[TimeRange]:
    rows = blocking_bookings(field, on_date, exclude_booking_id=exclude_booking_id).values_list(
        "start_time", "end_time"
    )
    return [TimeRange.between(start, end) for start, end in rows]


def is_available(
    field: Field,
    on_date: date,
    start: TimeLike,
    end: TimeLike,
    *,
    exclude_booking_id=None,
) -> bool:
    """
    True when [start, end) on ``on_date`` is free on ``field``.

    A field in maintenance is never available. Otherwise the interval must
    not overlap any pending or confirmed booking of the same date.
    """

    if field.in_maintenance:
        return False

    requested = TimeRange.between(start, end)
    for occupied in _occupied_ranges(field, on_date, exclude_booking_id=exclude_booking_id):
        if occupied.overlaps_with(requested):
            return False
    return True


def candidate_slots(field: Field, on_date: date) -> list[TimeRange]:
    """
    One-hour slots aligned to the hour inside the day's operating window.

    A field opening at 09:30 offers its first slot at 10:00; no slot starts
    before opening or runs past closing.
    """

    opens_at, closes_at = field.operating_hours(on_date)
    first_hour = opens_at.hour + (1 if opens_at.minute or opens_at.second else 0)
    return [
        TimeRange(hour * 60, hour * 60 + SLOT_MINUTES)
        for hour in range(first_hour, closes_at.hour)
    ]


def available_slots(field: Field, on_date: date) -> list[TimeRange]:
    """
    Free one-hour slots of ``field`` on ``on_date``.

    Computed from the current bookings on every call; nothing is cached.
    """

    if field.in_maintenance:
        return []

    occupied = _occupied_ranges(field, on_date)
    return [
        slot
        for slot in candidate_slots(field, on_date)
        if not any(slot.overlaps_with(taken) for taken in occupied)
    ]


def quote_price(
    field: Field,
    start: TimeLike,
    end: TimeLike,
    *,
    is_weekend: bool = False,
    with_lighting: bool = False,
    is_member: bool = False,
) -> Decimal:
    return calculate_price(
        field.rate_card,
        start,
        end,
        is_weekend=is_weekend,
        with_lighting=with_lighting,
        is_member=is_member,
    )


def field_usage_stats(field: Field, start_date: date, end_date: date) -> dict:
    """
    Completed bookings of ``field`` between two dates (inclusive).

    Occupancy is measured against the weekday opening hours of every day in
    the period.
    """

    completed = Booking.objects.filter(
        field=field,
        date__gte=start_date,
        date__lte=end_date,
        status=Booking.Status.COMPLETED,
    )

    total_minutes = 0
    total_revenue = Decimal("0.00")
    total_bookings = 0
    for booking in completed:
        total_bookings += 1
        total_minutes += booking.time_range.minutes
        if booking.payment_status == Booking.PaymentStatus.PAID:
            total_revenue += booking.total_price

    days = (end_date - start_date).days + 1
    open_minutes = TimeRange.between(field.weekday_opens_at, field.weekday_closes_at).minutes
    available_minutes = max(days, 0) * open_minutes
    occupancy = (
        Decimal(total_minutes * 100) / Decimal(available_minutes) if available_minutes else Decimal("0")
    )

    return {
        "total_bookings": total_bookings,
        "total_hours": (Decimal(total_minutes) / Decimal(60)).quantize(Decimal("0.01")),
        "total_revenue": total_revenue,
        "occupancy_rate": occupancy.quantize(Decimal("0.01")),
    }

