"""Serializers for products and orders."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.members.models import Member

from .models import Order, OrderItem, Product
from .services import OrderLine, create_order


class ProductSerializer(serializers.ModelSerializer):
    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "description",
            "category",
            "price",
            "member_price",
            "has_stock",
            "stock_quantity",
            "available_sizes",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["created_at", "updated_at"]

    def validate_available_sizes(self, value):  # type: ignore
        if not isinstance(value, list) or not all(isinstance(size, str) for size in value):
            raise serializers.ValidationError("Expected a list of size labels.")
        return value


class StockQuantitySerializer(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=0)


class LowStockQuerySerializer(serializers.Serializer):
    threshold = serializers.IntegerField(min_value=0, required=False)


class AvailabilityQuerySerializer(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=1, default=1)
    size = serializers.CharField(required=False, allow_blank=True)


class OrderItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = OrderItem
        fields = [
            "id",
            "product",
            "product_name",
            "size",
            "quantity",
            "unit_price",
            "total_price",
            "stock_reserved",
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "member",
            "status",
            "items",
            "subtotal",
            "discount",
            "total",
            "delivery_method",
            "delivery_address",
            "payment_reference",
            "notes",
            "delivered_at",
            "cancelled_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class OrderLineSerializer(serializers.Serializer):
    product_id = serializers.IntegerField()
    quantity = serializers.IntegerField(min_value=1)
    size = serializers.CharField(required=False, allow_blank=True, default="")


class OrderCreateSerializer(serializers.Serializer):
    member = serializers.PrimaryKeyRelatedField(
        queryset=Member.objects.all(),
        required=False,
        allow_null=True,
    )
    items = OrderLineSerializer(many=True, allow_empty=False)
    delivery_method = serializers.ChoiceField(
        choices=Order.DeliveryMethod.choices,
        default=Order.DeliveryMethod.PICKUP,
    )
    is_member = serializers.BooleanField(default=False)
    delivery_address = serializers.JSONField(required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, default="")

    def validate(self, attrs):  # type: ignore
        if attrs["delivery_method"] == Order.DeliveryMethod.DELIVERY and not attrs.get("delivery_address"):
            raise serializers.ValidationError({"delivery_address": "Required for delivery orders."})
        if attrs.get("is_member") and not attrs.get("member"):
            raise serializers.ValidationError({"member": "Member prices need a member."})
        return attrs

    def create(self, validated_data):  # type: ignore
        lines = [OrderLine(**line) for line in validated_data.pop("items")]
        return create_order(items=lines, **validated_data)


class OrderDiscountSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)


class OrderPaymentSerializer(serializers.Serializer):
    payment_reference = serializers.CharField(max_length=100)
