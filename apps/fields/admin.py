"""Admin registration for fields."""

from __future__ import annotations

from django.contrib import admin

from .models import Field


@admin.register(Field)
class FieldAdmin(admin.ModelAdmin):
    list_display = ("name", "type", "status", "hourly_rate", "has_lighting")
    list_filter = ("type", "status", "has_lighting")
    search_fields = ("name",)
    fieldsets = (
        (None, {"fields": ("name", "type", "status", "capacity", "has_lighting", "notes")}),
        (
            "Operating hours",
            {"fields": ("weekday_opens_at", "weekday_closes_at", "weekend_opens_at", "weekend_closes_at")},
        ),
        (
            "Rate card",
            {"fields": ("hourly_rate", "member_discount_pct", "weekend_surcharge_pct", "lighting_rate")},
        ),
    )
