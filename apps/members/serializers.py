"""Serializers for member records."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Member
from .services import create_member


class MemberSerializer(serializers.ModelSerializer):
    full_name = serializers.ReadOnlyField()

    class Meta:
        model = Member
        fields = [
            "id",
            "member_number",
            "first_name",
            "last_name",
            "full_name",
            "email",
            "phone",
            "status",
            "join_date",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "member_number", "created_at", "updated_at"]

    def create(self, validated_data):  # type: ignore
        return create_member(**validated_data)
