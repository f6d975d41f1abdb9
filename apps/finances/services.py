"""Payment services: receipt numbering and totals."""

from __future__ import annotations

import logging
from decimal import Decimal

from django.db import transaction  # type: ignore
from django.utils import timezone  # type: ignore

from apps.sequences.services import RECEIPT_NUMBER, next_value

from .models import Payment

logger = logging.getLogger(__name__)


def format_receipt_number(sequence: int, year: int) -> str:
    """REC-<year>-<sequence zero padded to 6 digits>."""

    return f"REC-{year}-{sequence:06d}"


def calculate_total_amount(
    amount: Decimal,
    discount: Decimal = Decimal("0.00"),
    surcharge: Decimal = Decimal("0.00"),
) -> Decimal:
    return amount - discount + surcharge


@transaction.atomic
def create_payment(**data) -> Payment:
    """Persist a payment with the next receipt number and its computed total."""

    sequence = next_value(RECEIPT_NUMBER)
    receipt_number = format_receipt_number(sequence, timezone.localdate().year)
    data["total_amount"] = calculate_total_amount(
        data["amount"],
        data.get("discount") or Decimal("0.00"),
        data.get("surcharge") or Decimal("0.00"),
    )
    payment = Payment.objects.create(receipt_number=receipt_number, **data)
    logger.info(f"Payment {payment.receipt_number} created for member {payment.member_id}")
    return payment
