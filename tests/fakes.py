"""In-memory repositories for use case tests."""

from __future__ import annotations

from uuid import UUID

from webshop.domain.cart import CartItem
from webshop.domain.order import Order


class InMemoryCartRepository:
    def __init__(self, items: list[CartItem] | None = None):
        self.items: list[CartItem] = list(items or [])
        self._next_id = 1
        for item in self.items:
            self._assign_id(item)

    def _assign_id(self, item: CartItem) -> None:
        if item.id is None:
            item.id = self._next_id
        self._next_id = max(self._next_id, item.id) + 1

    async def list_for_user(self, user_id: str) -> list[CartItem]:
        return [i for i in self.items if i.user_id == user_id]

    async def get_for_user(self, user_id: str, item_id: int) -> CartItem | None:
        for item in self.items:
            if item.user_id == user_id and item.item_id == item_id:
                return item
        return None

    async def add(self, item: CartItem) -> CartItem:
        self._assign_id(item)
        self.items.append(item)
        return item

    async def update(self, item: CartItem) -> CartItem:
        return item

    async def remove(self, item: CartItem) -> None:
        self.items.remove(item)

    async def clear_for_user(self, user_id: str) -> int:
        before = len(self.items)
        self.items = [i for i in self.items if i.user_id != user_id]
        return before - len(self.items)


class UnfilteredCartRepository(InMemoryCartRepository):
    """Returns every row regardless of owner, like a naive list-all adapter."""

    async def list_for_user(self, user_id: str) -> list[CartItem]:
        return list(self.items)


class InMemoryOrderRepository:
    def __init__(self):
        self.orders: dict[UUID, Order] = {}
        self.add_calls = 0
        self.update_calls = 0

    async def add(self, order: Order) -> Order:
        self.add_calls += 1
        self.orders[order.id] = order
        return order

    async def get(self, order_id: UUID) -> Order | None:
        return self.orders.get(order_id)

    async def list_for_user(self, user_id: str) -> list[Order]:
        return [o for o in self.orders.values() if o.user_id == user_id]

    async def update_status(self, order: Order) -> Order:
        self.update_calls += 1
        self.orders[order.id] = order
        return order
