"""Financial domain models."""

from __future__ import annotations

from decimal import Decimal

from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Payment(models.Model):
    """Payment made by a member, identified by its receipt number."""

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        PAID = "paid", _("Paid")
        OVERDUE = "overdue", _("Overdue")
        CANCELLED = "cancelled", _("Cancelled")

    class Type(models.TextChoices):
        MONTHLY_FEE = "monthly_fee", _("Monthly fee")
        REGISTRATION = "registration", _("Registration")
        FIELD_BOOKING = "field_booking", _("Field booking")
        ORDER = "order", _("Shop order")
        EVENT = "event", _("Event")
        OTHER = "other", _("Other")

    member = models.ForeignKey(
        "members.Member",
        on_delete=models.PROTECT,
        related_name="payments",
    )
    receipt_number = models.CharField(max_length=24, unique=True, editable=False)
    type = models.CharField(max_length=20, choices=Type.choices, default=Type.OTHER)
    concept = models.CharField(max_length=255)
    amount = models.DecimalField(max_digits=10, decimal_places=2)
    discount = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    surcharge = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    total_amount = models.DecimalField(max_digits=10, decimal_places=2, editable=False)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    due_date = models.DateField(null=True, blank=True)
    paid_at = models.DateTimeField(null=True, blank=True)
    payment_method = models.CharField(max_length=50, blank=True)
    related_entity_type = models.CharField(
        max_length=20,
        blank=True,
        help_text=_("booking or order when the payment settles one of them."),
    )
    related_entity_id = models.PositiveBigIntegerField(null=True, blank=True)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Payment")
        verbose_name_plural = _("Payments")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["related_entity_type", "related_entity_id"], name="payment_related_entity_idx"),
        ]

    def __str__(self) -> str:
        return f"Payment {self.receipt_number} ({self.status})"

    def mark_paid(self, payment_method: str = "") -> None:
        self.status = self.Status.PAID
        if payment_method:
            self.payment_method = payment_method
        self.paid_at = timezone.now()
        self.save(update_fields=["status", "payment_method", "paid_at", "updated_at"])
