"""Tests for payments and receipt numbering."""

from __future__ import annotations

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.finances.models import Payment
from apps.finances.services import calculate_total_amount, create_payment, format_receipt_number
from apps.members.services import create_member


def test_receipt_number_format() -> None:
    assert format_receipt_number(42, 2025) == "REC-2025-000042"


def test_total_applies_discount_and_surcharge() -> None:
    total = calculate_total_amount(Decimal("50.00"), Decimal("5.00"), Decimal("2.50"))

    assert total == Decimal("47.50")


class PaymentAPITests(APITestCase):
    def setUp(self) -> None:
        self.staff = get_user_model().objects.create_user(username="treasurer", password="ClubPass123")
        self.client.force_authenticate(self.staff)
        self.member = create_member(first_name="Ana", last_name="Ruiz")
        self.year = timezone.localdate().year

    def test_receipts_are_consecutive(self) -> None:
        first = create_payment(member=self.member, concept="Monthly fee", amount=Decimal("30.00"))
        second = create_payment(member=self.member, concept="Monthly fee", amount=Decimal("30.00"))

        self.assertEqual(first.receipt_number, f"REC-{self.year}-000001")
        self.assertEqual(second.receipt_number, f"REC-{self.year}-000002")

    def test_create_computes_total(self) -> None:
        payload = {
            "member": self.member.id,
            "type": Payment.Type.OTHER,
            "concept": "Field booking",
            "amount": "40.00",
            "discount": "4.00",
        }

        response = self.client.post(reverse("payment-list"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["receipt_number"], f"REC-{self.year}-000001")
        self.assertEqual(response.data["total_amount"], "36.00")
        self.assertEqual(response.data["status"], Payment.Status.PENDING)

    def test_pay_marks_payment_paid(self) -> None:
        payment = create_payment(member=self.member, concept="Kit", amount=Decimal("25.00"))

        response = self.client.post(
            reverse("payment-pay", args=[payment.id]),
            {"payment_method": "card"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["status"], Payment.Status.PAID)
        self.assertEqual(response.data["payment_method"], "card")
        self.assertIsNotNone(response.data["paid_at"])
