"""Admin registration for payments."""

from __future__ import annotations

from django.contrib import admin

from .models import Payment


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ("receipt_number", "member", "type", "total_amount", "status", "due_date", "paid_at")
    list_filter = ("status", "type")
    search_fields = ("receipt_number", "member__member_number", "concept")
    readonly_fields = ("receipt_number", "total_amount", "created_at", "updated_at")
