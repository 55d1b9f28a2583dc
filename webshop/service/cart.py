from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from loguru import logger

from webshop.core.config import settings
from webshop.core.metrics import CART_SERVICE_OPERATIONS_TOTAL
from webshop.domain.cart import CartItem
from webshop.domain.errors import DomainError, ErrorKind
from webshop.domain.result import Result
from webshop.service.ports import CartRepository


@dataclass
class CartSummary:
    user_id: str
    items: list[CartItem] = field(default_factory=list)
    sub_total: Decimal = Decimal("0")
    total_items: int = 0


def _count(operation: str, status: str) -> None:
    CART_SERVICE_OPERATIONS_TOTAL.labels(
        service=settings.SERVICE_NAME,
        operation=operation,
        status=status,
    ).inc()


def summarize(user_id: str, items: list[CartItem]) -> CartSummary:
    return CartSummary(
        user_id=user_id,
        items=items,
        sub_total=sum((item.total_price for item in items), Decimal("0")),
        total_items=sum(item.quantity for item in items),
    )


async def view_cart(carts: CartRepository, user_id: str) -> Result[CartSummary]:
    logger.info(
        "Service view_cart called. user_id='{user_id}'",
        user_id=user_id,
    )
    if not user_id or not user_id.strip():
        _count("view", "invalid")
        return Result.failure(ErrorKind.VALIDATION, "user_id is required")

    items = list(await carts.list_for_user(user_id))
    # rows owned by other users never reach the summary
    items = [item for item in items if item.user_id == user_id]
    summary = summarize(user_id, items)
    logger.info(
        "Service view_cart completed. user_id='{user_id}', items={items_count}, sub_total={sub_total}",
        user_id=user_id,
        items_count=len(items),
        sub_total=float(summary.sub_total),
    )
    _count("view", "success")
    return Result.success(summary)


async def add_to_cart(
    carts: CartRepository,
    user_id: str,
    item_id: int,
    item_name: str,
    unit_price,
    quantity: int = 1,
) -> Result[CartItem]:
    """
    Put an item in the user's cart.

    Adding an item the user already has bumps the existing row's quantity
    and refreshes its price instead of creating a second row.
    """
    logger.info(
        "Service add_to_cart called. user_id='{user_id}', item_id={item_id}, quantity={quantity}",
        user_id=user_id,
        item_id=item_id,
        quantity=quantity,
    )
    try:
        incoming = CartItem(
            user_id=user_id,
            item_id=item_id,
            item_name=item_name,
            unit_price=unit_price,
            quantity=quantity,
        )
    except DomainError as e:
        logger.warning(
            "Service add_to_cart rejected item. user_id='{user_id}', reason='{reason}'",
            user_id=user_id,
            reason=e.message,
        )
        _count("add", "invalid")
        return Result.from_error(e)

    existing = await carts.get_for_user(user_id, item_id)
    if existing is None:
        saved = await carts.add(incoming)
        _count("add", "created")
        return Result.success(saved)

    existing.update_quantity(existing.quantity + incoming.quantity)
    existing.update_price(incoming.unit_price)
    saved = await carts.update(existing)
    logger.info(
        "Service add_to_cart merged into existing row. user_id='{user_id}', item_id={item_id}, quantity={quantity}",
        user_id=user_id,
        item_id=item_id,
        quantity=saved.quantity,
    )
    _count("add", "merged")
    return Result.success(saved)


async def remove_from_cart(carts: CartRepository, user_id: str, item_id: int) -> Result[None]:
    logger.info(
        "Service remove_from_cart called. user_id='{user_id}', item_id={item_id}",
        user_id=user_id,
        item_id=item_id,
    )
    if not user_id or not user_id.strip():
        _count("remove", "invalid")
        return Result.failure(ErrorKind.VALIDATION, "user_id is required")

    existing = await carts.get_for_user(user_id, item_id)
    if existing is None:
        _count("remove", "not_found")
        return Result.failure(ErrorKind.NOT_FOUND, f"Item {item_id} is not in the cart")
    await carts.remove(existing)
    _count("remove", "success")
    return Result.success()
