"""Integration tests for field API endpoints."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.fields.models import Field


class FieldAPITests(APITestCase):
    def setUp(self) -> None:
        self.staff = get_user_model().objects.create_user(username="groundskeeper", password="PitchPass123")
        self.field = Field.objects.create(
            name="Main pitch",
            hourly_rate=Decimal("20.00"),
            member_discount_pct=Decimal("10"),
            weekend_surcharge_pct=Decimal("20"),
            lighting_rate=Decimal("5.00"),
            has_lighting=True,
        )
        self.client.force_authenticate(self.staff)
        start = date.today() + timedelta(days=7)
        self.monday = start + timedelta(days=(0 - start.weekday()) % 7)

    def test_price_quote_applies_all_adjustments(self) -> None:
        url = reverse("field-price", args=[self.field.id])
        payload = {
            "start_time": "10:00",
            "end_time": "12:00",
            "is_weekend": True,
            "with_lighting": True,
            "is_member": True,
        }

        response = self.client.post(url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["price"], "52.20")

    def test_slots_lists_free_hours(self) -> None:
        url = reverse("field-slots", args=[self.field.id])

        response = self.client.get(url, {"date": str(self.monday)})

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(len(response.data), 13)
        self.assertEqual(response.data[0], {"start": "09:00", "end": "10:00"})

    def test_availability_for_free_slot(self) -> None:
        url = reverse("field-availability", args=[self.field.id])

        response = self.client.get(
            url,
            {"date": str(self.monday), "start_time": "10:00", "end_time": "11:00"},
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertTrue(response.data["available"])

    def test_maintenance_status_closes_field(self) -> None:
        url = reverse("field-change-status", args=[self.field.id])

        response = self.client.post(url, {"status": Field.Status.MAINTENANCE}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        slots = self.client.get(reverse("field-slots", args=[self.field.id]), {"date": str(self.monday)})
        self.assertEqual(slots.data, [])

    def test_unknown_field_returns_not_found(self) -> None:
        url = reverse("field-slots", args=[9999])

        response = self.client.get(url, {"date": str(self.monday)})

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND, response.data)
        self.assertEqual(response.data["error"]["code"], "FIELD_NOT_FOUND")
