import datetime
from decimal import Decimal

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Field",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=120)),
                (
                    "type",
                    models.CharField(
                        choices=[
                            ("natural_grass", "Natural grass"),
                            ("artificial_grass", "Artificial grass"),
                            ("indoor", "Indoor"),
                            ("futsal", "Futsal"),
                        ],
                        default="artificial_grass",
                        max_length=20,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("available", "Available"),
                            ("occupied", "Occupied"),
                            ("maintenance", "Maintenance"),
                            ("reserved", "Reserved"),
                        ],
                        default="available",
                        max_length=20,
                    ),
                ),
                ("capacity", models.PositiveIntegerField(default=22)),
                ("has_lighting", models.BooleanField(default=False)),
                ("weekday_opens_at", models.TimeField(default=datetime.time(9, 0))),
                ("weekday_closes_at", models.TimeField(default=datetime.time(22, 0))),
                ("weekend_opens_at", models.TimeField(default=datetime.time(9, 0))),
                ("weekend_closes_at", models.TimeField(default=datetime.time(21, 0))),
                ("hourly_rate", models.DecimalField(decimal_places=2, max_digits=10)),
                (
                    "member_discount_pct",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        help_text="Percentage taken off the total for members.",
                        max_digits=5,
                    ),
                ),
                (
                    "weekend_surcharge_pct",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        help_text="Percentage added to the base rate on Saturdays and Sundays.",
                        max_digits=5,
                    ),
                ),
                (
                    "lighting_rate",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        help_text="Fixed amount per hour when lighting is requested.",
                        max_digits=10,
                    ),
                ),
                ("notes", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Field",
                "verbose_name_plural": "Fields",
                "ordering": ["name"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(weekday_closes_at__gt=models.F("weekday_opens_at")),
                        name="field_valid_weekday_hours",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(weekend_closes_at__gt=models.F("weekend_opens_at")),
                        name="field_valid_weekend_hours",
                    ),
                ],
            },
        ),
    ]
