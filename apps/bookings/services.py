"""
Booking lifecycle services.

State machine:
- PENDING -> CONFIRMED -> COMPLETED
- PENDING | CONFIRMED -> CANCELLED

Payment status is tracked separately (PENDING -> PAID, or PENDING ->
CANCELLED when the booking is cancelled); a confirmed booking may still
be waiting for payment.

Creation strategy:
1. Start database transaction (atomic)
2. Load the field with SELECT FOR UPDATE, serializing bookings per field
3. Check availability against pending/confirmed bookings of the date
4. Price the booking once and persist it as PENDING
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, time
from decimal import Decimal
from typing import Any, Iterable

from django.db import transaction  # type: ignore
from django.db.models import Count, Q, Sum  # type: ignore
from django.utils import timezone  # type: ignore

from apps.fields.models import is_weekend
from apps.fields.services import get_field, is_available, quote_price
from shared.domain.exceptions import ConflictError, NotFoundError
from shared.domain.value_objects import TimeRange
from shared.infrastructure.repository import DjangoRepository, Patch

from .models import Booking

logger = logging.getLogger(__name__)


class BookingNotFoundError(NotFoundError):
    code = "BOOKING_NOT_FOUND"
    default_message = "Booking not found"


class SlotUnavailableError(ConflictError):
    """Raised when the field is busy (or in maintenance) for the requested slot."""

    code = "SLOT_UNAVAILABLE"
    default_message = "Field is not available for the selected time"


class InvalidBookingTransitionError(ConflictError):
    code = "INVALID_TRANSITION"


class BookingPaymentError(ConflictError):
    code = "PAYMENT_NOT_ALLOWED"


bookings = DjangoRepository(Booking, not_found=BookingNotFoundError)

# Informational fields that may change after creation; the slot and the price may not.
EDITABLE_FIELDS = frozenset({"purpose", "notes", "contact_name", "contact_phone", "contact_email"})


@dataclass
class BookingRequest:
    """Everything needed to claim a slot on a field."""
    field_id: Any
    date: date
    start_time: time
    end_time: time
    member: Any = None
    is_external: bool = False
    contact_name: str = ""
    contact_phone: str = ""
    contact_email: str = ""
    purpose: str = ""
    with_lighting: bool = False
    notes: str = ""

    @property
    def is_member(self) -> bool:
        return self.member is not None and not self.is_external


def create_booking(request: BookingRequest) -> Booking:
    """
    Claim ``request``'s slot and return the new PENDING booking.

    Raises:
        FieldNotFoundError: the field does not exist
        SlotUnavailableError: the slot overlaps an active booking or the field is in maintenance
    """

    slot = TimeRange.between(request.start_time, request.end_time)
    logger.info(f"Creating booking for field {request.field_id} on {request.date} {slot}")

    with transaction.atomic():
        field = get_field(request.field_id, lock=True)

        if not is_available(field, request.date, request.start_time, request.end_time):
            logger.warning(f"Slot {request.date} {slot} unavailable on field {field.pk}")
            raise SlotUnavailableError(
                f"Field '{field.name}' is not available on {request.date} {slot}"
            )

        total_price = quote_price(
            field,
            request.start_time,
            request.end_time,
            is_weekend=is_weekend(request.date),
            with_lighting=request.with_lighting,
            is_member=request.is_member,
        )

        booking = bookings.create(
            field=field,
            member=request.member,
            is_external=request.is_external,
            contact_name=request.contact_name,
            contact_phone=request.contact_phone,
            contact_email=request.contact_email,
            purpose=request.purpose,
            date=request.date,
            start_time=request.start_time,
            end_time=request.end_time,
            with_lighting=request.with_lighting,
            notes=request.notes,
            total_price=total_price,
            status=Booking.Status.PENDING,
            payment_status=Booking.PaymentStatus.PENDING,
        )

    logger.info(f"Booking {booking.pk} created, total {booking.total_price}")
    return booking


def _transition(
    booking_id: Any,
    target: str,
    allowed_from: Iterable[str],
    **changes: Any,
) -> Booking:
    with transaction.atomic():
        booking = bookings.get(booking_id, lock=True)
        if booking.status not in allowed_from:
            raise InvalidBookingTransitionError(
                f"Booking {booking.pk} cannot move from {booking.status} to {target}"
            )
        booking = bookings.update(booking, Patch.of(status=target, **changes))
    logger.info(f"Booking {booking.pk} is now {booking.status}")
    return booking


def confirm_booking(booking_id: Any) -> Booking:
    return _transition(
        booking_id,
        Booking.Status.CONFIRMED,
        [Booking.Status.PENDING],
        confirmed_at=timezone.now(),
    )


def complete_booking(booking_id: Any) -> Booking:
    return _transition(
        booking_id,
        Booking.Status.COMPLETED,
        [Booking.Status.CONFIRMED],
        completed_at=timezone.now(),
    )


def cancel_booking(booking_id: Any, reason: str = "") -> Booking:
    """
    Cancel a pending or confirmed booking, freeing its slot.

    Cancelling an already cancelled booking returns it unchanged.
    """

    with transaction.atomic():
        booking = bookings.get(booking_id, lock=True)
        if booking.status == Booking.Status.CANCELLED:
            logger.info(f"Booking {booking.pk} already cancelled")
            return booking
        if booking.status not in Booking.BLOCKING_STATUSES:
            raise InvalidBookingTransitionError(
                f"Booking {booking.pk} cannot be cancelled from {booking.status}"
            )

        changes: dict[str, Any] = {
            "status": Booking.Status.CANCELLED,
            "cancelled_at": timezone.now(),
            "cancellation_reason": (reason or "")[:255],
        }
        if reason:
            changes["notes"] = reason
        if booking.payment_status == Booking.PaymentStatus.PENDING:
            changes["payment_status"] = Booking.PaymentStatus.CANCELLED
        booking = bookings.update(booking, Patch(changes))

    logger.info(f"Booking {booking.pk} cancelled, reason: {reason or '-'}")
    return booking


def mark_booking_paid(booking_id: Any, payment_reference: str) -> Booking:
    """Record the payment; the lifecycle status is left as is."""

    with transaction.atomic():
        booking = bookings.get(booking_id, lock=True)
        if booking.status == Booking.Status.CANCELLED:
            raise BookingPaymentError(f"Booking {booking.pk} is cancelled")
        booking = bookings.update(
            booking,
            Patch.of(
                payment_status=Booking.PaymentStatus.PAID,
                payment_reference=payment_reference,
                paid_at=timezone.now(),
            ),
        )
    logger.info(f"Booking {booking.pk} paid with reference {payment_reference}")
    return booking


def update_booking(booking_id: Any, patch: Patch) -> Booking:
    """Change informational fields; date, times and price stay as booked."""

    forbidden = set(patch.changes) - EDITABLE_FIELDS
    if forbidden:
        raise ValueError(f"Fields cannot be changed after booking: {', '.join(sorted(forbidden))}")
    return bookings.update(booking_id, patch)


def bookings_for_date(on_date: date):
    return bookings.find_by(date=on_date).select_related("field", "member").order_by("start_time")


def upcoming_bookings(limit: int = 10):
    today = timezone.localdate()
    return (
        bookings.find_by(date__gte=today, status__in=Booking.BLOCKING_STATUSES)
        .select_related("field", "member")
        .order_by("date", "start_time")[:limit]
    )


def booking_statistics(start_date: date | None = None, end_date: date | None = None) -> dict:
    queryset = bookings.objects
    if start_date and end_date:
        queryset = queryset.filter(date__gte=start_date, date__lte=end_date)

    by_status = {choice: 0 for choice in Booking.Status.values}
    for row in queryset.values("status").annotate(total=Count("id")):
        by_status[row["status"]] = row["total"]

    totals = queryset.aggregate(
        total=Count("id"),
        external=Count("id", filter=Q(is_external=True)),
        revenue=Sum("total_price", filter=Q(payment_status=Booking.PaymentStatus.PAID)),
    )
    return {
        "total": totals["total"],
        "by_status": by_status,
        "total_revenue": totals["revenue"] or Decimal("0.00"),
        "external_bookings": totals["external"],
        "member_bookings": totals["total"] - totals["external"],
    }
