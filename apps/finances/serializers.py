"""Serializers for the finance domain (payments)."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Payment
from .services import create_payment


class PaymentSerializer(serializers.ModelSerializer):
    """Payment records; receipt number and total are computed on create."""

    class Meta:
        model = Payment
        fields = [
            "id",
            "member",
            "receipt_number",
            "type",
            "concept",
            "amount",
            "discount",
            "surcharge",
            "total_amount",
            "status",
            "due_date",
            "paid_at",
            "payment_method",
            "related_entity_type",
            "related_entity_id",
            "notes",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "receipt_number",
            "total_amount",
            "status",
            "paid_at",
            "created_at",
            "updated_at",
        ]

    def create(self, validated_data):  # type: ignore
        return create_payment(**validated_data)
