"""Admin registration for the shop."""

from __future__ import annotations

from django.contrib import admin

from .models import Order, OrderItem, Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("name", "category", "price", "member_price", "has_stock", "stock_quantity", "is_active")
    list_filter = ("category", "has_stock", "is_active")
    search_fields = ("name", "description")


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ("product", "product_name", "size", "quantity", "unit_price", "total_price", "stock_reserved")
    can_delete = False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("id", "member", "status", "total", "delivery_method", "created_at")
    list_filter = ("status", "delivery_method")
    readonly_fields = ("subtotal", "discount", "total", "delivered_at", "cancelled_at", "created_at", "updated_at")
    inlines = [OrderItemInline]
