"""
Order use cases.

Every function here returns a `Result`. Guard-clause failures raised by the
Order aggregate are caught and turned into failed results, so callers never
see a `DomainError`. Orders are assembled and completed in memory; the
repository is called once, and only for an order that passed every check.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Sequence
from uuid import UUID

from loguru import logger

from webshop.core.config import settings
from webshop.core.metrics import ORDERS_SERVICE_OPERATIONS_TOTAL
from webshop.domain.errors import DomainError, ErrorKind
from webshop.domain.order import Order
from webshop.domain.result import Result
from webshop.service.ports import CartRepository, OrderRepository

EMPTY_ORDER_MESSAGE = "Order must contain at least one item"


@dataclass(frozen=True)
class OrderLine:
    item_id: int
    item_name: str
    unit_price: Decimal
    quantity: int


@dataclass
class PlaceOrderCommand:
    user_id: str
    customer_address: str
    shipping_option: str
    payment_method: str
    items: list[OrderLine] = field(default_factory=list)


def _count(operation: str, status: str) -> None:
    ORDERS_SERVICE_OPERATIONS_TOTAL.labels(
        service=settings.SERVICE_NAME,
        operation=operation,
        status=status,
    ).inc()


def build_order(command: PlaceOrderCommand) -> Order:
    """Create, fill and complete an order. Raises DomainError on the first failed guard."""
    order = Order.create(
        user_id=command.user_id,
        customer_address=command.customer_address,
        shipping_option=command.shipping_option,
        payment_method=command.payment_method,
    )
    for line in command.items:
        order.add_item(
            item_id=line.item_id,
            item_name=line.item_name,
            quantity=line.quantity,
            unit_price=line.unit_price,
        )
    order.complete()
    return order


async def place_order(orders: OrderRepository, command: PlaceOrderCommand) -> Result[UUID]:
    _count("place", "attempt")
    logger.info(
        "Service place_order called for user_id='{user_id}' with {items_count} items",
        user_id=command.user_id,
        items_count=len(command.items),
    )
    if not command.items:
        logger.warning(
            "Service place_order called without items for user_id='{user_id}'",
            user_id=command.user_id,
        )
        _count("place", "no_items")
        return Result.failure(ErrorKind.VALIDATION, EMPTY_ORDER_MESSAGE)

    try:
        order = build_order(command)
    except DomainError as e:
        logger.warning(
            "Service place_order rejected order for user_id='{user_id}': {reason}",
            user_id=command.user_id,
            reason=e.message,
        )
        _count("place", e.kind.value)
        return Result.from_error(e)

    await orders.add(order)
    logger.info(
        "Service place_order persisted order. order_id='{order_id}', user_id='{user_id}', total_amount={total}",
        order_id=str(order.id),
        user_id=order.user_id,
        total=float(order.total_amount),
    )
    _count("place", "success")
    return Result.success(order.id)


async def checkout(
    carts: CartRepository,
    orders: OrderRepository,
    user_id: str,
    customer_address: str,
    shipping_option: str,
    payment_method: str,
) -> Result[UUID]:
    """Turn the user's cart into a completed order and empty the cart."""
    _count("checkout", "attempt")
    logger.info(
        "Service checkout started. user_id='{user_id}', shipping_option='{shipping}'",
        user_id=user_id,
        shipping=shipping_option,
    )
    if not user_id or not user_id.strip():
        _count("checkout", "invalid")
        return Result.failure(ErrorKind.VALIDATION, "user_id is required")

    cart_items = [item for item in await carts.list_for_user(user_id) if item.user_id == user_id]
    if not cart_items:
        logger.warning(
            "Service checkout failed: empty cart for user_id='{user_id}'",
            user_id=user_id,
        )
        _count("checkout", "empty_cart")
        return Result.failure(ErrorKind.VALIDATION, EMPTY_ORDER_MESSAGE)

    command = PlaceOrderCommand(
        user_id=user_id,
        customer_address=customer_address,
        shipping_option=shipping_option,
        payment_method=payment_method,
        items=[
            OrderLine(
                item_id=item.item_id,
                item_name=item.item_name,
                unit_price=item.unit_price,
                quantity=item.quantity,
            )
            for item in cart_items
        ],
    )
    placed = await place_order(orders, command)
    if placed.is_failure:
        _count("checkout", "rejected")
        return placed

    removed = await carts.clear_for_user(user_id)
    logger.info(
        "Service checkout completed. order_id='{order_id}', user_id='{user_id}', cart_rows_removed={removed}",
        order_id=str(placed.value),
        user_id=user_id,
        removed=removed,
    )
    _count("checkout", "success")
    return placed


async def get_order(orders: OrderRepository, order_id: UUID) -> Result[Order]:
    order = await orders.get(order_id)
    if order is None:
        _count("get", "not_found")
        return Result.failure(ErrorKind.NOT_FOUND, f"Order {order_id} not found")
    _count("get", "success")
    return Result.success(order)


async def list_orders(orders: OrderRepository, user_id: str) -> Result[Sequence[Order]]:
    if not user_id or not user_id.strip():
        _count("list", "invalid")
        return Result.failure(ErrorKind.VALIDATION, "user_id is required")
    found = await orders.list_for_user(user_id)
    _count("list", "success")
    return Result.success(list(found))


async def cancel_order(orders: OrderRepository, order_id: UUID) -> Result[Order]:
    logger.info(
        "Service cancel_order called. order_id='{order_id}'",
        order_id=str(order_id),
    )
    order = await orders.get(order_id)
    if order is None:
        _count("cancel", "not_found")
        return Result.failure(ErrorKind.NOT_FOUND, f"Order {order_id} not found")
    try:
        order.cancel()
    except DomainError as e:
        logger.warning(
            "Service cancel_order refused. order_id='{order_id}', status='{status}'",
            order_id=str(order_id),
            status=order.status.value,
        )
        _count("cancel", e.kind.value)
        return Result.from_error(e)
    await orders.update_status(order)
    _count("cancel", "success")
    return Result.success(order)
