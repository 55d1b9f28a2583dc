from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from webshop.domain.guard import require_item_id, require_price, require_quantity, require_text


class CartItem:
    """A catalog item a user has put in their cart."""

    def __init__(
        self,
        user_id: str,
        item_id: int,
        item_name: str,
        unit_price,
        quantity: int = 1,
        id: int | None = None,
        date_added: datetime | None = None,
    ):
        self.id = id
        self.user_id = require_text(user_id, "user_id")
        self.item_id = require_item_id(item_id)
        self.item_name = require_text(item_name, "item_name")
        self._unit_price = require_price(unit_price)
        self._quantity = require_quantity(quantity)
        self.date_added = date_added or datetime.now(timezone.utc)

    @property
    def unit_price(self) -> Decimal:
        return self._unit_price

    @property
    def quantity(self) -> int:
        return self._quantity

    @property
    def total_price(self) -> Decimal:
        return self._unit_price * self._quantity

    def update_quantity(self, quantity: int) -> None:
        self._quantity = require_quantity(quantity)

    def update_price(self, unit_price) -> None:
        self._unit_price = require_price(unit_price)

    def __repr__(self) -> str:
        return (
            f"CartItem(user_id={self.user_id!r}, item_id={self.item_id}, "
            f"quantity={self._quantity}, unit_price={self._unit_price})"
        )
