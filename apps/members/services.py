"""Member creation with sequential member numbers."""

from __future__ import annotations

import logging

from django.db import transaction  # type: ignore
from django.utils import timezone  # type: ignore

from apps.sequences.services import MEMBER_NUMBER, next_value

from .models import Member

logger = logging.getLogger(__name__)


def format_member_number(sequence: int, year: int) -> str:
    """CDC-<year>-<sequence zero padded to 4 digits>."""

    return f"CDC-{year}-{sequence:04d}"


@transaction.atomic
def create_member(**data) -> Member:
    sequence = next_value(MEMBER_NUMBER)
    member_number = format_member_number(sequence, timezone.localdate().year)
    member = Member.objects.create(member_number=member_number, **data)
    logger.info(f"Member {member.member_number} created (ID: {member.id})")
    return member
