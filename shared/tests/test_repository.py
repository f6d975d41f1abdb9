"""Tests for the generic repository and partial updates."""

from __future__ import annotations

from decimal import Decimal

import pytest

from apps.fields.models import Field
from apps.fields.services import FieldNotFoundError
from shared.domain.exceptions import NotFoundError
from shared.infrastructure.repository import DjangoRepository, Patch

pytestmark = pytest.mark.django_db


@pytest.fixture
def repo() -> DjangoRepository:
    return DjangoRepository(Field, not_found=FieldNotFoundError)


@pytest.fixture
def field(repo) -> Field:
    return repo.create(name="North pitch", hourly_rate=Decimal("20.00"), notes="Fresh lines")


def test_get_returns_stored_record(repo, field) -> None:
    assert repo.get(field.pk) == field


def test_get_missing_record_raises_typed_not_found(repo) -> None:
    with pytest.raises(FieldNotFoundError) as excinfo:
        repo.get(999)

    assert isinstance(excinfo.value, NotFoundError)
    assert excinfo.value.code == "FIELD_NOT_FOUND"


def test_find_tolerates_malformed_primary_key(repo) -> None:
    assert repo.find("not-a-number") is None


def test_update_merges_only_patched_fields(repo, field) -> None:
    updated = repo.update(field.pk, Patch.of(hourly_rate=Decimal("25.00")))

    stored = Field.objects.get(pk=field.pk)
    assert updated.hourly_rate == Decimal("25.00")
    assert stored.hourly_rate == Decimal("25.00")
    assert stored.name == "North pitch"
    assert stored.notes == "Fresh lines"


def test_patch_rejects_unknown_fields(field) -> None:
    with pytest.raises(ValueError):
        Patch.of(colour="green").apply(field)


def test_empty_patch_is_falsy() -> None:
    assert not Patch()
    assert Patch.of(name="x")


def test_delete_removes_record(repo, field) -> None:
    repo.delete(field.pk)

    assert repo.find(field.pk) is None


def test_find_by_filters_on_lookups(repo, field) -> None:
    repo.create(name="Indoor court", hourly_rate=Decimal("30.00"), type=Field.Type.INDOOR)

    assert list(repo.find_by(type=Field.Type.INDOOR).values_list("name", flat=True)) == ["Indoor court"]


def test_paginate_reports_totals(repo) -> None:
    for index in range(5):
        repo.create(name=f"Pitch {index}", hourly_rate=Decimal("10.00"))

    page = repo.paginate(page=2, limit=2, order_by="name")

    assert [item.name for item in page["data"]] == ["Pitch 2", "Pitch 3"]
    assert page["pagination"] == {"page": 2, "limit": 2, "total": 5, "total_pages": 3}
