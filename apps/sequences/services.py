"""Sequence generator for human readable identifiers."""

from __future__ import annotations

import logging

from django.db import transaction  # type: ignore
from django.db.models import F  # type: ignore

from .models import Counter

logger = logging.getLogger(__name__)

MEMBER_NUMBER = "member_number"
RECEIPT_NUMBER = "receipt_number"


@transaction.atomic
def next_value(name: str) -> int:
    """
    Return the next value of counter ``name``; the first call returns 1.

    The increment is a single ``UPDATE ... SET value = value + 1`` that holds
    the row lock until the surrounding transaction commits, and the new value
    is read back inside the same transaction. Two callers can therefore never
    receive the same number, regardless of how many processes share the
    database.
    """

    Counter.objects.get_or_create(name=name)
    Counter.objects.filter(name=name).update(value=F("value") + 1)
    value = Counter.objects.values_list("value", flat=True).get(name=name)
    logger.debug(f"Counter {name} issued {value}")
    return value


def current_value(name: str) -> int:
    """Last issued value, 0 when the counter has never been used."""

    return Counter.objects.filter(name=name).values_list("value", flat=True).first() or 0
