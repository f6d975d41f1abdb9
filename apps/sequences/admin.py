"""Admin registration for sequence counters."""

from __future__ import annotations

from django.contrib import admin

from .models import Counter


@admin.register(Counter)
class CounterAdmin(admin.ModelAdmin):
    list_display = ("name", "value", "updated_at")
    readonly_fields = ("updated_at",)
    search_fields = ("name",)
