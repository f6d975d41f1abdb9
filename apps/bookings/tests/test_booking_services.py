"""Service level tests for the booking lifecycle and scheduled completion."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import time, timedelta
from decimal import Decimal

import pytest
from django.db import connections
from django.utils import timezone

from apps.bookings import services
from apps.bookings.models import Booking
from apps.bookings.services import BookingRequest, SlotUnavailableError
from apps.bookings.tasks import complete_finished_bookings
from apps.fields.models import Field
from shared.infrastructure.repository import Patch

pytestmark = pytest.mark.django_db


@pytest.fixture
def field() -> Field:
    return Field.objects.create(name="Training pitch", hourly_rate=Decimal("15.00"))


def external_request(field: Field, on_date, start: time, end: time) -> BookingRequest:
    return BookingRequest(
        field_id=field.pk,
        date=on_date,
        start_time=start,
        end_time=end,
        is_external=True,
        contact_name="Visitors FC",
    )


def test_overlapping_request_is_refused(field) -> None:
    tomorrow = timezone.localdate() + timedelta(days=1)
    services.create_booking(external_request(field, tomorrow, time(10), time(12)))

    with pytest.raises(SlotUnavailableError):
        services.create_booking(external_request(field, tomorrow, time(11), time(13)))


def test_cancel_keeps_reason_as_note(field) -> None:
    tomorrow = timezone.localdate() + timedelta(days=1)
    booking = services.create_booking(external_request(field, tomorrow, time(10), time(12)))

    cancelled = services.cancel_booking(booking.pk, "Team withdrew")

    assert cancelled.notes == "Team withdrew"
    assert cancelled.cancellation_reason == "Team withdrew"


def test_paid_booking_keeps_payment_status_on_cancel(field) -> None:
    tomorrow = timezone.localdate() + timedelta(days=1)
    booking = services.create_booking(external_request(field, tomorrow, time(10), time(12)))
    services.mark_booking_paid(booking.pk, "REC-2030-000010")

    cancelled = services.cancel_booking(booking.pk)

    assert cancelled.status == Booking.Status.CANCELLED
    assert cancelled.payment_status == Booking.PaymentStatus.PAID


def test_update_refuses_slot_changes(field) -> None:
    tomorrow = timezone.localdate() + timedelta(days=1)
    booking = services.create_booking(external_request(field, tomorrow, time(10), time(12)))

    with pytest.raises(ValueError):
        services.update_booking(booking.pk, Patch.of(start_time=time(14)))


def test_task_completes_only_finished_confirmed_bookings(field) -> None:
    today = timezone.localdate()
    finished = services.create_booking(external_request(field, today - timedelta(days=1), time(10), time(11)))
    services.confirm_booking(finished.pk)
    pending = services.create_booking(external_request(field, today - timedelta(days=1), time(12), time(13)))
    upcoming = services.create_booking(external_request(field, today + timedelta(days=1), time(10), time(11)))
    services.confirm_booking(upcoming.pk)

    result = complete_finished_bookings.delay().get()

    assert result == {"completed": 1}
    assert Booking.objects.get(pk=finished.pk).status == Booking.Status.COMPLETED
    assert Booking.objects.get(pk=finished.pk).completed_at is not None
    assert Booking.objects.get(pk=pending.pk).status == Booking.Status.PENDING
    assert Booking.objects.get(pk=upcoming.pk).status == Booking.Status.CONFIRMED


def test_bookings_for_date_are_ordered_by_start(field) -> None:
    tomorrow = timezone.localdate() + timedelta(days=1)
    services.create_booking(external_request(field, tomorrow, time(15), time(16)))
    services.create_booking(external_request(field, tomorrow, time(9), time(10)))

    starts = [booking.start_time for booking in services.bookings_for_date(tomorrow)]

    assert starts == [time(9), time(15)]


@pytest.mark.django_db(transaction=True)
def test_concurrent_requests_for_one_slot_book_it_once(field) -> None:
    tomorrow = timezone.localdate() + timedelta(days=1)

    def attempt(_):
        try:
            services.create_booking(external_request(field, tomorrow, time(18), time(19)))
            return "booked"
        except SlotUnavailableError:
            return "refused"
        finally:
            connections.close_all()

    with ThreadPoolExecutor(max_workers=6) as pool:
        outcomes = list(pool.map(attempt, range(6)))

    assert outcomes.count("booked") == 1
    assert outcomes.count("refused") == 5
    assert Booking.objects.filter(field=field, date=tomorrow).count() == 1
