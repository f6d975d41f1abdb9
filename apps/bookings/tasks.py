"""Celery tasks for the booking domain."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore
from django.db.models import Q  # type: ignore
from django.utils import timezone  # type: ignore

from shared.domain.exceptions import DomainError

from .models import Booking
from .services import complete_booking

logger = logging.getLogger(__name__)


@shared_task(name="bookings.complete_finished_bookings")
def complete_finished_bookings() -> dict[str, int]:
    """
    Mark confirmed bookings whose time has already ended as completed.

    Runs every 15 minutes through Celery Beat.

    Returns:
        dict: {"completed": number of bookings completed}
    """
    now = timezone.localtime()
    today = now.date()

    finished = Booking.objects.filter(status=Booking.Status.CONFIRMED).filter(
        Q(date__lt=today) | Q(date=today, end_time__lte=now.time())
    )

    completed = 0
    for booking_id in finished.values_list("id", flat=True):
        try:
            complete_booking(booking_id)
            completed += 1
        except DomainError as exc:
            # Cancelled or completed by a concurrent request meanwhile.
            logger.warning(f"Booking {booking_id} not completed: {exc.message}")

    if completed:
        logger.info(f"Completed {completed} finished bookings")

    return {"completed": completed}
