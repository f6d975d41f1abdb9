"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "field",
        "date",
        "start_time",
        "end_time",
        "member",
        "status",
        "payment_status",
        "total_price",
    )
    list_filter = ("status", "payment_status", "date", "is_external", "field")
    search_fields = ("contact_name", "member__member_number", "payment_reference")
    readonly_fields = (
        "total_price",
        "confirmed_at",
        "completed_at",
        "cancelled_at",
        "paid_at",
        "created_at",
        "updated_at",
    )
