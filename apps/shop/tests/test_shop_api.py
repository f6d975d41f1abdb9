"""Integration tests for product and order endpoints."""

from __future__ import annotations

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.members.services import create_member
from apps.shop.models import Order, Product


class ShopAPITests(APITestCase):
    def setUp(self) -> None:
        self.staff = get_user_model().objects.create_user(username="storekeeper", password="ShopPass123")
        self.client.force_authenticate(self.staff)
        self.member = create_member(first_name="Ana", last_name="Ruiz")
        self.shirt = Product.objects.create(
            name="Home shirt",
            price=Decimal("40.00"),
            member_price=Decimal("32.00"),
            has_stock=True,
            stock_quantity=5,
            available_sizes=["S", "M", "L"],
        )

    def _order(self, quantity: int, size: str = "M", **extra):
        payload = {
            "member": self.member.id,
            "items": [{"product_id": self.shirt.id, "quantity": quantity, "size": size}],
            "is_member": True,
        }
        payload.update(extra)
        return self.client.post(reverse("order-list"), payload, format="json")

    def test_create_order_reserves_stock(self) -> None:
        response = self._order(3)

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["status"], Order.Status.PENDING)
        self.assertEqual(response.data["total"], "96.00")
        self.assertEqual(len(response.data["items"]), 1)
        self.shirt.refresh_from_db()
        self.assertEqual(self.shirt.stock_quantity, 2)

    def test_order_beyond_stock_is_conflict(self) -> None:
        response = self._order(10)

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)
        self.assertEqual(response.data["error"]["code"], "PRODUCT_UNAVAILABLE")
        self.assertEqual(response.data["error"]["message"], "unavailable: Home shirt")

    def test_delivery_needs_address(self) -> None:
        response = self._order(1, delivery_method=Order.DeliveryMethod.DELIVERY)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertIn("delivery_address", response.data)

    def test_cancel_twice_restores_stock_once(self) -> None:
        created = self._order(3)
        cancel_url = reverse("order-cancel", args=[created.data["id"]])

        self.assertEqual(self.client.post(cancel_url).status_code, status.HTTP_200_OK)
        second = self.client.post(cancel_url)

        self.assertEqual(second.status_code, status.HTTP_200_OK, second.data)
        self.assertEqual(second.data["status"], Order.Status.CANCELLED)
        self.shirt.refresh_from_db()
        self.assertEqual(self.shirt.stock_quantity, 5)

    def test_discount_and_payment(self) -> None:
        created = self._order(1)
        order_id = created.data["id"]

        discounted = self.client.post(reverse("order-discount", args=[order_id]), {"amount": "2.00"}, format="json")
        paid = self.client.post(
            reverse("order-pay", args=[order_id]),
            {"payment_reference": "REC-2030-000003"},
            format="json",
        )

        self.assertEqual(discounted.data["total"], "30.00")
        self.assertEqual(paid.status_code, status.HTTP_200_OK, paid.data)
        self.assertEqual(paid.data["payment_reference"], "REC-2030-000003")

    def test_cancel_unknown_order_returns_not_found(self) -> None:
        response = self.client.post(reverse("order-cancel", args=[9999]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND, response.data)
        self.assertEqual(response.data["error"]["code"], "ORDER_NOT_FOUND")

    def test_product_availability_and_stock_actions(self) -> None:
        availability_url = reverse("product-availability", args=[self.shirt.id])

        self.assertFalse(self.client.get(availability_url, {"quantity": 10}).data["available"])
        self.assertTrue(self.client.get(availability_url, {"quantity": 5, "size": "L"}).data["available"])

        increased = self.client.post(
            reverse("product-increase-stock", args=[self.shirt.id]), {"quantity": 3}, format="json"
        )
        self.assertEqual(increased.data["stock_quantity"], 8)

        decreased = self.client.post(
            reverse("product-decrease-stock", args=[self.shirt.id]), {"quantity": 20}, format="json"
        )
        self.assertEqual(decreased.data["stock_quantity"], 0)

        counted = self.client.post(reverse("product-stock", args=[self.shirt.id]), {"quantity": 4}, format="json")
        self.assertEqual(counted.data["stock_quantity"], 4)

    def test_low_stock_listing(self) -> None:
        response = self.client.get(reverse("product-low-stock"))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual([item["name"] for item in response.data], ["Home shirt"])

    def test_statistics_summarise_orders(self) -> None:
        created = self._order(1)
        order_id = created.data["id"]
        for action in ("confirm", "preparing", "ready", "deliver"):
            self.client.post(reverse(f"order-{action}", args=[order_id]))
        self._order(2)

        response = self.client.get(reverse("order-statistics"))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["total"], 2)
        self.assertEqual(response.data["by_status"]["delivered"], 1)
        self.assertEqual(response.data["by_status"]["pending"], 1)
        self.assertEqual(response.data["total_revenue"], Decimal("32.00"))
        self.assertEqual(response.data["average_order_value"], Decimal("32.00"))

    def test_low_stock_rejects_non_numeric_threshold(self) -> None:
        response = self.client.get(reverse("product-low-stock"), {"threshold": "many"})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
