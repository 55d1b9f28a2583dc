"""
Storage ports used by the cart and order use cases.

The use cases only see these protocols; `webshop.crud` provides the
SQLAlchemy implementations and tests can pass in-memory fakes.
"""

from __future__ import annotations

from typing import Protocol, Sequence
from uuid import UUID

from webshop.domain.cart import CartItem
from webshop.domain.order import Order


class CartRepository(Protocol):
    async def list_for_user(self, user_id: str) -> Sequence[CartItem]: ...

    async def get_for_user(self, user_id: str, item_id: int) -> CartItem | None: ...

    async def add(self, item: CartItem) -> CartItem: ...

    async def update(self, item: CartItem) -> CartItem: ...

    async def remove(self, item: CartItem) -> None: ...

    async def clear_for_user(self, user_id: str) -> int: ...


class OrderRepository(Protocol):
    async def add(self, order: Order) -> Order:
        """Persist the order together with all of its items."""
        ...

    async def get(self, order_id: UUID) -> Order | None: ...

    async def list_for_user(self, user_id: str) -> Sequence[Order]: ...

    async def update_status(self, order: Order) -> Order: ...
