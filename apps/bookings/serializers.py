"""Serializers for the booking domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.members.models import Member

from .models import Booking
from .services import EDITABLE_FIELDS, BookingRequest, create_booking

TIME_FORMAT = "%H:%M"


class BookingCreateSerializer(serializers.Serializer):
    """Request to book a field slot."""

    field_id = serializers.IntegerField()
    date = serializers.DateField()
    start_time = serializers.TimeField()
    end_time = serializers.TimeField()
    member = serializers.PrimaryKeyRelatedField(
        queryset=Member.objects.all(),
        required=False,
        allow_null=True,
    )
    is_external = serializers.BooleanField(default=False)
    contact_name = serializers.CharField(required=False, allow_blank=True, max_length=150)
    contact_phone = serializers.CharField(required=False, allow_blank=True, max_length=30)
    contact_email = serializers.EmailField(required=False, allow_blank=True)
    purpose = serializers.CharField(required=False, allow_blank=True, max_length=255)
    with_lighting = serializers.BooleanField(default=False)
    notes = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs):  # type: ignore
        if attrs["start_time"] >= attrs["end_time"]:
            raise serializers.ValidationError("End time must be after start time.")
        if not attrs.get("member") and not attrs.get("is_external"):
            raise serializers.ValidationError("A booking needs a member or must be marked as external.")
        if attrs.get("is_external") and not attrs.get("contact_name"):
            raise serializers.ValidationError({"contact_name": "Required for external bookings."})
        return attrs

    def create(self, validated_data):  # type: ignore
        return create_booking(BookingRequest(**validated_data))


class BookingSerializer(serializers.ModelSerializer):
    """Detailed booking representation."""

    field_id = serializers.ReadOnlyField(source="field.id")
    field_name = serializers.ReadOnlyField(source="field.name")
    member_id = serializers.ReadOnlyField(source="member.id")
    start_time = serializers.TimeField(format=TIME_FORMAT, read_only=True)
    end_time = serializers.TimeField(format=TIME_FORMAT, read_only=True)

    class Meta:
        model = Booking
        fields = [
            "id",
            "field_id",
            "field_name",
            "member_id",
            "is_external",
            "contact_name",
            "contact_phone",
            "contact_email",
            "purpose",
            "date",
            "start_time",
            "end_time",
            "with_lighting",
            "status",
            "payment_status",
            "payment_reference",
            "total_price",
            "notes",
            "cancellation_reason",
            "confirmed_at",
            "completed_at",
            "cancelled_at",
            "paid_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [name for name in fields if name not in EDITABLE_FIELDS]


class BookingCancelSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, default="")


class BookingPaymentSerializer(serializers.Serializer):
    payment_reference = serializers.CharField(max_length=100)


class UpcomingQuerySerializer(serializers.Serializer):
    limit = serializers.IntegerField(min_value=1, max_value=100, default=10)


class StatisticsQuerySerializer(serializers.Serializer):
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)

    def validate(self, attrs):  # type: ignore
        start, end = attrs.get("start_date"), attrs.get("end_date")
        if start and end and start > end:
            raise serializers.ValidationError("start_date must not be after end_date.")
        return attrs
