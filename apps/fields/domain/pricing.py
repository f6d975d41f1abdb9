"""
Pricing Calculator

Computes the price of a field booking from the field's rate card.

The order of operations is a business rule and must not be rearranged:

    1. base = hourly_rate * hours
    2. weekend surcharge multiplies the base rate only
    3. lighting adds lighting_rate * hours on top
    4. member discount applies to everything above, lighting included
    5. round half up to cents

Example (20/h, 2 hours, 20% weekend, 5/h lighting, 10% member discount):
    40.00 -> 48.00 -> 58.00 -> 52.20
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from shared.domain.base import ValueObject
from shared.domain.value_objects import TimeLike, TimeRange

CENT = Decimal("0.01")
HUNDRED = Decimal("100")


@dataclass(frozen=True)
class RateCard(ValueObject):
    """Field rates; percentages are expressed as 0-100."""
    hourly_rate: Decimal
    member_discount_pct: Decimal = Decimal("0")
    weekend_surcharge_pct: Decimal = Decimal("0")
    lighting_rate: Decimal = Decimal("0")


def _decimal(value) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def calculate_price(
    rate_card: RateCard,
    start: TimeLike,
    end: TimeLike,
    *,
    is_weekend: bool = False,
    with_lighting: bool = False,
    is_member: bool = False,
) -> Decimal:
    hours = TimeRange.between(start, end).hours

    price = _decimal(rate_card.hourly_rate) * hours

    if is_weekend:
        price *= 1 + _decimal(rate_card.weekend_surcharge_pct) / HUNDRED

    if with_lighting:
        price += _decimal(rate_card.lighting_rate) * hours

    if is_member:
        price *= 1 - _decimal(rate_card.member_discount_pct) / HUNDRED

    return price.quantize(CENT, rounding=ROUND_HALF_UP)
