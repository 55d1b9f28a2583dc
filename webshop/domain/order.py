"""
Order aggregate.

The Order is the only entry point to its OrderItems: items are added and
removed through the aggregate's commands, each command checks its guards
before touching state, and the total is recomputed after every change to
the item list.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Iterable

from webshop.domain.errors import DuplicateItemError, InvalidStateError, NotFoundError, ValidationError
from webshop.domain.guard import require_item_id, require_price, require_quantity, require_text
from webshop.domain.money import MAX_AMOUNT


class OrderStatus(str, Enum):
    PENDING = "Pending"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"


# once an order has been completed it can only move forward through fulfilment
_NOT_CANCELLABLE = {OrderStatus.COMPLETED, OrderStatus.SHIPPED, OrderStatus.DELIVERED}


class OrderItem:
    """Line of an order. Has no identity outside the Order that owns it."""

    __slots__ = ("item_id", "item_name", "quantity", "unit_price")

    def __init__(self, item_id: int, item_name: str, quantity: int, unit_price):
        self.item_id = require_item_id(item_id)
        self.item_name = require_text(item_name, "item_name")
        self.quantity = require_quantity(quantity)
        self.unit_price = require_price(unit_price)

    @property
    def total_price(self) -> Decimal:
        return self.unit_price * self.quantity

    def __eq__(self, other) -> bool:
        if not isinstance(other, OrderItem):
            return NotImplemented
        return (
            self.item_id == other.item_id
            and self.item_name == other.item_name
            and self.quantity == other.quantity
            and self.unit_price == other.unit_price
        )

    def __repr__(self) -> str:
        return (
            f"OrderItem(item_id={self.item_id}, item_name={self.item_name!r}, "
            f"quantity={self.quantity}, unit_price={self.unit_price})"
        )


class Order:
    def __init__(
        self,
        id: uuid.UUID,
        user_id: str,
        customer_address: str,
        shipping_option: str,
        payment_method: str,
        status: OrderStatus = OrderStatus.PENDING,
        items: Iterable[OrderItem] = (),
        created_at: datetime | None = None,
    ):
        self.id = id
        self.user_id = user_id
        self.customer_address = customer_address
        self.shipping_option = shipping_option
        self.payment_method = payment_method
        self.created_at = created_at or datetime.now(timezone.utc)
        self._status = status
        self._items: list[OrderItem] = list(items)
        self._total_amount = Decimal("0")
        self._recalculate_total()

    @classmethod
    def create(
        cls,
        user_id: str,
        customer_address: str,
        shipping_option: str,
        payment_method: str,
    ) -> Order:
        return cls(
            id=uuid.uuid4(),
            user_id=require_text(user_id, "user_id"),
            customer_address=require_text(customer_address, "customer_address"),
            shipping_option=require_text(shipping_option, "shipping_option"),
            payment_method=require_text(payment_method, "payment_method"),
        )

    @classmethod
    def restore(
        cls,
        id: uuid.UUID,
        user_id: str,
        customer_address: str,
        shipping_option: str,
        payment_method: str,
        status: OrderStatus | str,
        items: Iterable[OrderItem],
        created_at: datetime | None = None,
    ) -> Order:
        """Rebuild an order from stored state without replaying commands."""
        return cls(
            id=id,
            user_id=user_id,
            customer_address=customer_address,
            shipping_option=shipping_option,
            payment_method=payment_method,
            status=OrderStatus(status),
            items=items,
            created_at=created_at,
        )

    @property
    def status(self) -> OrderStatus:
        return self._status

    @property
    def items(self) -> tuple[OrderItem, ...]:
        return tuple(self._items)

    @property
    def total_amount(self) -> Decimal:
        return self._total_amount

    def add_item(self, item_id: int, item_name: str, quantity: int, unit_price) -> OrderItem:
        self._ensure_pending("add items to")
        if self._find(item_id) is not None:
            raise DuplicateItemError(f"Item {item_id} is already in the order")
        item = OrderItem(item_id, item_name, quantity, unit_price)
        if self._total_amount + item.total_price > MAX_AMOUNT:
            raise ValidationError(f"total_amount must not exceed {MAX_AMOUNT}")
        self._items.append(item)
        self._recalculate_total()
        return item

    def remove_item(self, item_id: int) -> None:
        self._ensure_pending("remove items from")
        item = self._find(item_id)
        if item is None:
            raise NotFoundError(f"Item {item_id} is not in the order")
        self._items.remove(item)
        self._recalculate_total()

    def complete(self) -> None:
        if not self._items:
            raise InvalidStateError("Cannot complete an order without items")
        if self._status is not OrderStatus.PENDING:
            raise InvalidStateError(f"Cannot complete an order in status {self._status.value}")
        self._status = OrderStatus.COMPLETED

    def cancel(self) -> None:
        if self._status in _NOT_CANCELLABLE:
            raise InvalidStateError(f"Cannot cancel an order in status {self._status.value}")
        self._status = OrderStatus.CANCELLED

    def _ensure_pending(self, action: str) -> None:
        if self._status is not OrderStatus.PENDING:
            raise InvalidStateError(f"Cannot {action} an order in status {self._status.value}")

    def _find(self, item_id: int) -> OrderItem | None:
        for item in self._items:
            if item.item_id == item_id:
                return item
        return None

    def _recalculate_total(self) -> None:
        self._total_amount = sum((item.total_price for item in self._items), Decimal("0"))

    def __repr__(self) -> str:
        return (
            f"Order(id={self.id}, user_id={self.user_id!r}, status={self._status.value}, "
            f"items={len(self._items)}, total_amount={self._total_amount})"
        )
