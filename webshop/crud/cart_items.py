from __future__ import annotations

from loguru import logger
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from webshop.core.config import settings
from webshop.core.metrics import CART_DB_OPERATIONS_TOTAL
from webshop.domain.cart import CartItem
from webshop.domain.money import to_money
from webshop.models.cart_item import CartItemModel


def _to_entity(row: CartItemModel) -> CartItem:
    return CartItem(
        id=row.id,
        user_id=row.user_id,
        item_id=row.item_id,
        item_name=row.item_name,
        unit_price=row.unit_price,
        quantity=row.quantity,
        date_added=row.date_added,
    )


def _count(operation: str, status: str) -> None:
    CART_DB_OPERATIONS_TOTAL.labels(
        service=settings.SERVICE_NAME,
        operation=operation,
        status=status,
    ).inc()


class SqlAlchemyCartRepository:
    def __init__(self, db: AsyncSession):
        self._db = db

    async def list_for_user(self, user_id: str) -> list[CartItem]:
        logger.info(
            "Fetching cart items from DB. user_id='{user_id}'",
            user_id=user_id,
        )
        result = await self._db.execute(
            select(CartItemModel)
            .where(CartItemModel.user_id == user_id)
            .order_by(CartItemModel.date_added, CartItemModel.id)
        )
        items = [_to_entity(row) for row in result.scalars().all()]
        _count("list", "success")
        return items

    async def get_for_user(self, user_id: str, item_id: int) -> CartItem | None:
        row = await self._get_row(user_id, item_id)
        if row is None:
            _count("get", "not_found")
            return None
        _count("get", "success")
        return _to_entity(row)

    async def add(self, item: CartItem) -> CartItem:
        row = CartItemModel(
            user_id=item.user_id,
            item_id=item.item_id,
            item_name=item.item_name,
            unit_price=to_money(item.unit_price),
            quantity=item.quantity,
            date_added=item.date_added,
        )
        self._db.add(row)
        await self._db.flush()
        item.id = row.id
        logger.info(
            "Cart item persisted. id='{id}', user_id='{user_id}', item_id={item_id}",
            id=row.id,
            user_id=item.user_id,
            item_id=item.item_id,
        )
        _count("create", "success")
        return item

    async def update(self, item: CartItem) -> CartItem:
        row = await self._get_row(item.user_id, item.item_id)
        if row is None:
            logger.warning(
                "Cart item vanished before update. user_id='{user_id}', item_id={item_id}",
                user_id=item.user_id,
                item_id=item.item_id,
            )
            _count("update", "not_found")
            raise LookupError(f"Cart item {item.item_id} for user {item.user_id} not found")
        row.item_name = item.item_name
        row.unit_price = to_money(item.unit_price)
        row.quantity = item.quantity
        await self._db.flush()
        logger.debug(
            "Cart item updated. user_id='{user_id}', item_id={item_id}, quantity={quantity}",
            user_id=item.user_id,
            item_id=item.item_id,
            quantity=item.quantity,
        )
        _count("update", "success")
        return item

    async def remove(self, item: CartItem) -> None:
        await self._db.execute(
            delete(CartItemModel).where(
                CartItemModel.user_id == item.user_id,
                CartItemModel.item_id == item.item_id,
            )
        )
        logger.info(
            "Cart item deleted. user_id='{user_id}', item_id={item_id}",
            user_id=item.user_id,
            item_id=item.item_id,
        )
        _count("delete", "success")

    async def clear_for_user(self, user_id: str) -> int:
        res = await self._db.execute(
            delete(CartItemModel).where(CartItemModel.user_id == user_id)
        )
        logger.info(
            "Cart cleared. user_id='{user_id}', removed={removed}",
            user_id=user_id,
            removed=res.rowcount,
        )
        _count("clear", "success")
        return res.rowcount

    async def _get_row(self, user_id: str, item_id: int) -> CartItemModel | None:
        result = await self._db.execute(
            select(CartItemModel).where(
                CartItemModel.user_id == user_id,
                CartItemModel.item_id == item_id,
            )
        )
        return result.scalar_one_or_none()
