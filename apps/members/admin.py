"""Admin registration for members."""

from __future__ import annotations

from django.contrib import admin

from .models import Member


@admin.register(Member)
class MemberAdmin(admin.ModelAdmin):
    list_display = ("member_number", "first_name", "last_name", "status", "join_date")
    list_filter = ("status",)
    search_fields = ("member_number", "first_name", "last_name", "email")
    readonly_fields = ("member_number", "created_at", "updated_at")
