"""Serializers for fields, availability queries and price quotes."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Field

TIME_FORMAT = "%H:%M"


class FieldSerializer(serializers.ModelSerializer):
    weekday_opens_at = serializers.TimeField(format=TIME_FORMAT, required=False)
    weekday_closes_at = serializers.TimeField(format=TIME_FORMAT, required=False)
    weekend_opens_at = serializers.TimeField(format=TIME_FORMAT, required=False)
    weekend_closes_at = serializers.TimeField(format=TIME_FORMAT, required=False)

    class Meta:
        model = Field
        fields = [
            "id",
            "name",
            "type",
            "status",
            "capacity",
            "has_lighting",
            "weekday_opens_at",
            "weekday_closes_at",
            "weekend_opens_at",
            "weekend_closes_at",
            "hourly_rate",
            "member_discount_pct",
            "weekend_surcharge_pct",
            "lighting_rate",
            "notes",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]


class AvailabilityQuerySerializer(serializers.Serializer):
    date = serializers.DateField()
    start_time = serializers.TimeField()
    end_time = serializers.TimeField()

    def validate(self, attrs):  # type: ignore
        if attrs["start_time"] >= attrs["end_time"]:
            raise serializers.ValidationError("End time must be after start time.")
        return attrs


class SlotsQuerySerializer(serializers.Serializer):
    date = serializers.DateField()


class UsageQuerySerializer(serializers.Serializer):
    start_date = serializers.DateField()
    end_date = serializers.DateField()


class PriceQuoteSerializer(serializers.Serializer):
    start_time = serializers.TimeField()
    end_time = serializers.TimeField()
    is_weekend = serializers.BooleanField(default=False)
    with_lighting = serializers.BooleanField(default=False)
    is_member = serializers.BooleanField(default=False)

    def validate(self, attrs):  # type: ignore
        if attrs["start_time"] >= attrs["end_time"]:
            raise serializers.ValidationError("End time must be after start time.")
        return attrs


class FieldStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Field.Status.choices)
