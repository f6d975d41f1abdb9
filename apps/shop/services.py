"""
Stock allocation and order services.

Order state machine:
- PENDING -> CONFIRMED -> PREPARING -> READY -> DELIVERED
- any state except DELIVERED -> CANCELLED

Creation strategy:
1. Start database transaction (atomic)
2. Lock every product of the order (SELECT FOR UPDATE)
3. Check availability and snapshot the unit price of each line
4. Persist the order as PENDING
5. Deduct stock per tracked line with a conditional UPDATE
   (stock_quantity >= quantity); a failed deduction rolls back the order

Cancellation gives back the stock of the lines flagged ``stock_reserved``
and clears the flag, so a second cancel has nothing left to restore.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Sequence

from django.conf import settings  # type: ignore
from django.core.exceptions import ValidationError  # type: ignore
from django.db import transaction  # type: ignore
from django.db.models import Avg, Count, F, Q, Sum, Value  # type: ignore
from django.db.models.functions import Greatest  # type: ignore
from django.utils import timezone  # type: ignore

from shared.domain.exceptions import ConflictError, NotFoundError
from shared.infrastructure.repository import DjangoRepository, Patch, lock_if_possible

from .models import Order, OrderItem, Product

logger = logging.getLogger(__name__)


class ProductNotFoundError(NotFoundError):
    code = "PRODUCT_NOT_FOUND"
    default_message = "Product not found"


class OrderNotFoundError(NotFoundError):
    code = "ORDER_NOT_FOUND"
    default_message = "Order not found"


class ProductUnavailableError(ConflictError):
    """Inactive product, size not offered, or not enough stock at check time."""

    code = "PRODUCT_UNAVAILABLE"


class InsufficientStockError(ConflictError):
    """Conditional stock deduction matched no row."""

    code = "INSUFFICIENT_STOCK"


class InvalidOrderTransitionError(ConflictError):
    code = "INVALID_TRANSITION"


products = DjangoRepository(Product, not_found=ProductNotFoundError)
orders = DjangoRepository(Order, not_found=OrderNotFoundError)

ORDER_FLOW = {
    Order.Status.CONFIRMED: (Order.Status.PENDING,),
    Order.Status.PREPARING: (Order.Status.CONFIRMED,),
    Order.Status.READY: (Order.Status.PREPARING,),
    Order.Status.DELIVERED: (Order.Status.READY,),
}


@dataclass
class OrderLine:
    product_id: Any
    quantity: int
    size: str = ""


# ---------------------------------------------------------------------------
# Stock
# ---------------------------------------------------------------------------

def get_product(product_id: Any, *, lock: bool = False) -> Product:
    return products.get(product_id, lock=lock)


def check_availability(product: Product, quantity: int, size: str | None = None) -> bool:
    """
    Whether ``quantity`` units (of ``size``) can be sold right now.

    Products without stock tracking are always available once active.
    """

    if not product.is_active:
        return False
    if size and size not in (product.available_sizes or []):
        return False
    if product.has_stock:
        return product.stock_quantity >= quantity
    return True


def decrease_stock(product_id: Any, quantity: int) -> Product:
    """Subtract ``quantity`` with a floor at zero; untracked products are left alone."""

    product = get_product(product_id)
    if not product.has_stock:
        return product

    Product.objects.filter(pk=product.pk).update(
        stock_quantity=Greatest(F("stock_quantity") - quantity, Value(0)),
        updated_at=timezone.now(),
    )
    product.refresh_from_db(fields=["stock_quantity", "updated_at"])
    logger.info(f"Product {product.pk} stock decreased by {quantity} to {product.stock_quantity}")
    return product


def increase_stock(product_id: Any, quantity: int) -> Product:
    product = get_product(product_id)
    Product.objects.filter(pk=product.pk).update(
        stock_quantity=F("stock_quantity") + quantity,
        updated_at=timezone.now(),
    )
    product.refresh_from_db(fields=["stock_quantity", "updated_at"])
    logger.info(f"Product {product.pk} stock increased by {quantity} to {product.stock_quantity}")
    return product


def update_stock(product_id: Any, quantity: int) -> Product:
    """Manual stock count: overwrite the quantity."""

    if quantity < 0:
        raise ValueError("Stock quantity cannot be negative")
    product = products.update(product_id, Patch.of(stock_quantity=quantity))
    logger.info(f"Product {product.pk} stock set to {quantity}")
    return product


def _reserve_stock(product: Product, quantity: int) -> None:
    """Deduct stock only if enough is left, in a single UPDATE."""

    updated = Product.objects.filter(pk=product.pk, stock_quantity__gte=quantity).update(
        stock_quantity=F("stock_quantity") - quantity,
        updated_at=timezone.now(),
    )
    if not updated:
        raise InsufficientStockError(f"Not enough stock for {product.name}")


def low_stock_products(threshold: int | None = None):
    """Active tracked products at or below ``threshold`` units."""

    if threshold is None:
        threshold = getattr(settings, "CLUB_LOW_STOCK_THRESHOLD", 5)
    return products.find_by(has_stock=True, is_active=True, stock_quantity__lte=threshold).order_by(
        "stock_quantity", "name"
    )


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------

def _product_pk(value: Any) -> Any:
    """Caller ids may arrive as strings; compare them as the primary key type."""

    try:
        return Product._meta.pk.to_python(value)
    except ValidationError:
        raise ProductNotFoundError(f"Product {value} not found")


def create_order(
    member: Any,
    items: Sequence[OrderLine],
    delivery_method: str = Order.DeliveryMethod.PICKUP,
    is_member: bool = False,
    delivery_address: dict | None = None,
    notes: str = "",
) -> Order:
    """
    Price ``items``, persist a PENDING order and reserve its stock.

    Raises:
        ProductNotFoundError: a line references a missing product
        ProductUnavailableError: inactive product, unknown size or short stock
        InsufficientStockError: stock ran out between check and deduction
    """

    if not items:
        raise ValueError("An order needs at least one item")

    logger.info(f"Creating order with {len(items)} lines for member {getattr(member, 'pk', member)}")

    with transaction.atomic():
        line_pks = [_product_pk(line.product_id) for line in items]
        product_ids = sorted({pk for pk in line_pks if pk is not None})
        locked = {
            product.pk: product
            for product in lock_if_possible(Product.objects.filter(pk__in=product_ids).order_by("pk"))
        }

        priced: list[tuple[Product, OrderLine, Decimal]] = []
        subtotal = Decimal("0.00")
        for line, pk in zip(items, line_pks):
            product = locked.get(pk)
            if product is None:
                raise ProductNotFoundError(f"Product {line.product_id} not found")
            if not check_availability(product, line.quantity, line.size or None):
                logger.warning(f"Product {product.pk} unavailable for {line.quantity} x {line.size or '-'}")
                raise ProductUnavailableError(f"unavailable: {product.name}")

            unit_price = product.price_for(is_member)
            subtotal += unit_price * line.quantity
            priced.append((product, line, unit_price))

        order = orders.create(
            member=member,
            status=Order.Status.PENDING,
            subtotal=subtotal,
            total=subtotal,
            delivery_method=delivery_method,
            delivery_address=delivery_address,
            notes=notes,
        )

        for product, line, unit_price in priced:
            if product.has_stock:
                _reserve_stock(product, line.quantity)
            OrderItem.objects.create(
                order=order,
                product=product,
                product_name=product.name,
                size=line.size or "",
                quantity=line.quantity,
                unit_price=unit_price,
                total_price=unit_price * line.quantity,
                stock_reserved=product.has_stock,
            )

    logger.info(f"Order {order.pk} created, total {order.total}")
    return order


def cancel_order(order_id: Any) -> Order:
    """
    Cancel an order that has not been delivered and restore its reserved stock.

    Cancelling an already cancelled order returns it unchanged.
    """

    with transaction.atomic():
        order = orders.get(order_id, lock=True)
        if order.status == Order.Status.CANCELLED:
            logger.info(f"Order {order.pk} already cancelled")
            return order
        if order.status == Order.Status.DELIVERED:
            raise InvalidOrderTransitionError(f"Order {order.pk} was delivered and cannot be cancelled")

        reserved = list(lock_if_possible(order.items.filter(stock_reserved=True)))
        for item in reserved:
            Product.objects.filter(pk=item.product_id).update(
                stock_quantity=F("stock_quantity") + item.quantity,
                updated_at=timezone.now(),
            )
            logger.debug(f"Restored {item.quantity} units of product {item.product_id}")
        OrderItem.objects.filter(pk__in=[item.pk for item in reserved]).update(stock_reserved=False)

        order = orders.update(
            order,
            Patch.of(status=Order.Status.CANCELLED, cancelled_at=timezone.now()),
        )

    logger.info(f"Order {order.pk} cancelled")
    return order


def _advance(order_id: Any, target: str, **changes: Any) -> Order:
    with transaction.atomic():
        order = orders.get(order_id, lock=True)
        if order.status not in ORDER_FLOW[target]:
            raise InvalidOrderTransitionError(
                f"Order {order.pk} cannot move from {order.status} to {target}"
            )
        order = orders.update(order, Patch.of(status=target, **changes))
    logger.info(f"Order {order.pk} is now {order.status}")
    return order


def confirm_order(order_id: Any) -> Order:
    return _advance(order_id, Order.Status.CONFIRMED)


def mark_order_preparing(order_id: Any) -> Order:
    return _advance(order_id, Order.Status.PREPARING)


def mark_order_ready(order_id: Any) -> Order:
    return _advance(order_id, Order.Status.READY)


def mark_order_delivered(order_id: Any) -> Order:
    return _advance(order_id, Order.Status.DELIVERED, delivered_at=timezone.now())


def mark_order_paid(order_id: Any, payment_reference: str) -> Order:
    order = orders.update(order_id, Patch.of(payment_reference=payment_reference))
    logger.info(f"Order {order.pk} paid with reference {payment_reference}")
    return order


def apply_discount(order_id: Any, amount: Decimal) -> Order:
    """Set the discount; the total never drops below zero."""

    amount = Decimal(amount)
    if amount < 0:
        raise ValueError("Discount cannot be negative")

    with transaction.atomic():
        order = orders.get(order_id, lock=True)
        total = max(Decimal("0.00"), order.subtotal - amount)
        order = orders.update(order, Patch.of(discount=amount, total=total))
    logger.info(f"Order {order.pk} discounted by {amount}, total {order.total}")
    return order


def order_statistics() -> dict:
    by_status = {choice: 0 for choice in Order.Status.values}
    for row in orders.objects.values("status").annotate(count=Count("id")):
        by_status[row["status"]] = row["count"]

    delivered = Q(status=Order.Status.DELIVERED)
    totals = orders.objects.aggregate(
        count=Count("id"),
        revenue=Sum("total", filter=delivered),
        average=Avg("total", filter=delivered),
    )
    average = totals["average"] or Decimal("0.00")
    return {
        "total": totals["count"],
        "by_status": by_status,
        "total_revenue": totals["revenue"] or Decimal("0.00"),
        "average_order_value": Decimal(average).quantize(Decimal("0.01")),
    }
