"""Tests for member numbering."""

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.members.models import Member
from apps.members.services import create_member, format_member_number


def test_member_number_format() -> None:
    assert format_member_number(7, 2025) == "CDC-2025-0007"
    assert format_member_number(12345, 2025) == "CDC-2025-12345"


class MemberAPITests(APITestCase):
    def setUp(self) -> None:
        self.staff = get_user_model().objects.create_user(username="secretary", password="ClubPass123")
        self.client.force_authenticate(self.staff)
        self.year = timezone.localdate().year

    def test_members_get_consecutive_numbers(self) -> None:
        first = create_member(first_name="Ana", last_name="Ruiz")
        second = create_member(first_name="Luis", last_name="Gil")

        self.assertEqual(first.member_number, f"CDC-{self.year}-0001")
        self.assertEqual(second.member_number, f"CDC-{self.year}-0002")
        self.assertEqual(second.full_name, "Luis Gil")

    def test_create_through_api_assigns_number(self) -> None:
        payload = {"first_name": "Marta", "last_name": "Sanz", "email": "marta@example.com"}

        response = self.client.post(reverse("member-list"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["member_number"], f"CDC-{self.year}-0001")
        self.assertEqual(Member.objects.get().status, Member.Status.ACTIVE)

    def test_member_number_cannot_be_chosen_by_client(self) -> None:
        payload = {"first_name": "Marta", "last_name": "Sanz", "member_number": "CDC-1999-9999"}

        response = self.client.post(reverse("member-list"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["member_number"], f"CDC-{self.year}-0001")
