"""Field (pitch) models."""

from __future__ import annotations

from datetime import date, time
from decimal import Decimal

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from .domain.pricing import RateCard


class Field(models.Model):
    """A bookable pitch."""

    class Status(models.TextChoices):
        AVAILABLE = "available", _("Available")
        OCCUPIED = "occupied", _("Occupied")
        MAINTENANCE = "maintenance", _("Maintenance")
        RESERVED = "reserved", _("Reserved")

    class Type(models.TextChoices):
        NATURAL_GRASS = "natural_grass", _("Natural grass")
        ARTIFICIAL_GRASS = "artificial_grass", _("Artificial grass")
        INDOOR = "indoor", _("Indoor")
        FUTSAL = "futsal", _("Futsal")

    name = models.CharField(max_length=120)
    type = models.CharField(max_length=20, choices=Type.choices, default=Type.ARTIFICIAL_GRASS)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.AVAILABLE)
    capacity = models.PositiveIntegerField(default=22)
    has_lighting = models.BooleanField(default=False)

    weekday_opens_at = models.TimeField(default=time(9, 0))
    weekday_closes_at = models.TimeField(default=time(22, 0))
    weekend_opens_at = models.TimeField(default=time(9, 0))
    weekend_closes_at = models.TimeField(default=time(21, 0))

    hourly_rate = models.DecimalField(max_digits=10, decimal_places=2)
    member_discount_pct = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text=_("Percentage taken off the total for members."),
    )
    weekend_surcharge_pct = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text=_("Percentage added to the base rate on Saturdays and Sundays."),
    )
    lighting_rate = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text=_("Fixed amount per hour when lighting is requested."),
    )

    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Field")
        verbose_name_plural = _("Fields")
        ordering = ["name"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(weekday_closes_at__gt=models.F("weekday_opens_at")),
                name="field_valid_weekday_hours",
            ),
            models.CheckConstraint(
                condition=models.Q(weekend_closes_at__gt=models.F("weekend_opens_at")),
                name="field_valid_weekend_hours",
            ),
        ]

    def __str__(self) -> str:
        return self.name

    @property
    def rate_card(self) -> RateCard:
        return RateCard(
            hourly_rate=self.hourly_rate,
            member_discount_pct=self.member_discount_pct,
            weekend_surcharge_pct=self.weekend_surcharge_pct,
            lighting_rate=self.lighting_rate,
        )

    @property
    def in_maintenance(self) -> bool:
        return self.status == self.Status.MAINTENANCE

    def operating_hours(self, on_date: date) -> tuple[time, time]:
        """Opening and closing time for the day type of ``on_date``."""

        if is_weekend(on_date):
            return self.weekend_opens_at, self.weekend_closes_at
        return self.weekday_opens_at, self.weekday_closes_at


def is_weekend(on_date: date) -> bool:
    return on_date.weekday() >= 5
