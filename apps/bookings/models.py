"""Booking models for club fields."""

from __future__ import annotations

from decimal import Decimal

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.value_objects import TimeRange


class Booking(models.Model):
    """Claim on one field for one contiguous interval of one date."""

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending confirmation")
        CONFIRMED = "confirmed", _("Confirmed")
        COMPLETED = "completed", _("Completed")
        CANCELLED = "cancelled", _("Cancelled")

    class PaymentStatus(models.TextChoices):
        PENDING = "pending", _("Waiting for payment")
        PAID = "paid", _("Paid")
        CANCELLED = "cancelled", _("Cancelled")

    # Statuses that hold the slot; a new booking may not overlap these.
    BLOCKING_STATUSES = (Status.PENDING, Status.CONFIRMED)

    field = models.ForeignKey(
        "fields.Field",
        on_delete=models.PROTECT,
        related_name="bookings",
    )
    member = models.ForeignKey(
        "members.Member",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="bookings",
    )
    is_external = models.BooleanField(
        default=False,
        help_text=_("Booked by someone outside the club; priced without member discount."),
    )
    contact_name = models.CharField(max_length=150, blank=True)
    contact_phone = models.CharField(max_length=30, blank=True)
    contact_email = models.EmailField(blank=True)
    purpose = models.CharField(max_length=255, blank=True)

    date = models.DateField()
    start_time = models.TimeField()
    end_time = models.TimeField()
    with_lighting = models.BooleanField(default=False)

    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    payment_status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING,
    )
    payment_reference = models.CharField(max_length=100, blank=True)
    total_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text=_("Computed once when the booking is created."),
    )

    notes = models.TextField(blank=True)
    cancellation_reason = models.CharField(max_length=255, blank=True)
    confirmed_at = models.DateTimeField(null=True, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)
    paid_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["-date", "start_time"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_time__gt=models.F("start_time")),
                name="booking_valid_times",
            ),
        ]
        indexes = [
            models.Index(fields=["field", "date", "status"], name="booking_field_date_idx"),
            models.Index(fields=["status"], name="booking_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.pk} {self.field_id} {self.date} {self.time_range}"

    @property
    def time_range(self) -> TimeRange:
        return TimeRange.between(self.start_time, self.end_time)
