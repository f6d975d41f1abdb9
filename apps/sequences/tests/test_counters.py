"""Tests for the named counters."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest
from django.db import connections

from apps.sequences.models import Counter
from apps.sequences.services import MEMBER_NUMBER, RECEIPT_NUMBER, current_value, next_value


@pytest.mark.django_db
def test_first_value_is_one() -> None:
    assert current_value(MEMBER_NUMBER) == 0
    assert next_value(MEMBER_NUMBER) == 1


@pytest.mark.django_db
def test_values_are_strictly_sequential() -> None:
    assert [next_value(MEMBER_NUMBER) for _ in range(5)] == [1, 2, 3, 4, 5]
    assert current_value(MEMBER_NUMBER) == 5


@pytest.mark.django_db
def test_counters_are_independent() -> None:
    next_value(MEMBER_NUMBER)
    next_value(MEMBER_NUMBER)

    assert next_value(RECEIPT_NUMBER) == 1
    assert Counter.objects.get(name=MEMBER_NUMBER).value == 2


@pytest.mark.django_db(transaction=True)
def test_concurrent_callers_never_share_a_value() -> None:
    def draw(_):
        try:
            return next_value(RECEIPT_NUMBER)
        finally:
            connections.close_all()

    with ThreadPoolExecutor(max_workers=8) as pool:
        values = list(pool.map(draw, range(40)))

    assert sorted(values) == list(range(1, 41))
