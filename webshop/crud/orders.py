from __future__ import annotations

from uuid import UUID

from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from webshop.core.config import settings
from webshop.core.metrics import ORDERS_DB_OPERATIONS_TOTAL
from webshop.domain.money import to_money
from webshop.domain.order import Order, OrderItem
from webshop.models.order import OrderModel
from webshop.models.order_item import OrderItemModel


def _to_entity(row: OrderModel) -> Order:
    return Order.restore(
        id=row.id,
        user_id=row.user_id,
        customer_address=row.customer_address,
        shipping_option=row.shipping_option,
        payment_method=row.payment_method,
        status=row.status,
        items=[
            OrderItem(
                item_id=item.item_id,
                item_name=item.item_name,
                quantity=item.quantity,
                unit_price=item.unit_price,
            )
            for item in row.items
        ],
        created_at=row.created_at,
    )


def _count(operation: str, status: str) -> None:
    ORDERS_DB_OPERATIONS_TOTAL.labels(
        service=settings.SERVICE_NAME,
        operation=operation,
        status=status,
    ).inc()


class SqlAlchemyOrderRepository:
    def __init__(self, db: AsyncSession):
        self._db = db

    async def add(self, order: Order) -> Order:
        row = OrderModel(
            id=order.id,
            user_id=order.user_id,
            customer_address=order.customer_address,
            shipping_option=order.shipping_option,
            payment_method=order.payment_method,
            total_amount=to_money(order.total_amount),
            status=order.status.value,
            created_at=order.created_at,
            items=[
                OrderItemModel(
                    item_id=item.item_id,
                    item_name=item.item_name,
                    quantity=item.quantity,
                    unit_price=to_money(item.unit_price),
                )
                for item in order.items
            ],
        )
        self._db.add(row)
        await self._db.flush()
        logger.info(
            "Order persisted in DB. order_id='{order_id}', user_id='{user_id}', items={items_count}",
            order_id=str(order.id),
            user_id=order.user_id,
            items_count=len(order.items),
        )
        _count("create", "success")
        return order

    async def get(self, order_id: UUID) -> Order | None:
        logger.info(
            "Fetching order from DB. order_id='{order_id}'",
            order_id=str(order_id),
        )
        row = await self._get_row(order_id)
        if row is None:
            logger.warning(
                "Order not found in DB. order_id='{order_id}'",
                order_id=str(order_id),
            )
            _count("get", "not_found")
            return None
        _count("get", "success")
        return _to_entity(row)

    async def list_for_user(self, user_id: str) -> list[Order]:
        logger.info(
            "Fetching orders from DB. user_id='{user_id}'",
            user_id=user_id,
        )
        result = await self._db.execute(
            select(OrderModel)
            .options(selectinload(OrderModel.items))
            .where(OrderModel.user_id == user_id)
            .order_by(OrderModel.created_at)
        )
        orders = [_to_entity(row) for row in result.scalars().all()]
        _count("list", "success")
        return orders

    async def update_status(self, order: Order) -> Order:
        row = await self._get_row(order.id)
        if row is None:
            _count("update_status", "not_found")
            raise LookupError(f"Order {order.id} not found")
        row.status = order.status.value
        row.total_amount = to_money(order.total_amount)
        await self._db.flush()
        logger.info(
            "Order status updated in DB. order_id='{order_id}', status='{status}'",
            order_id=str(order.id),
            status=order.status.value,
        )
        _count("update_status", "success")
        return order

    async def _get_row(self, order_id: UUID) -> OrderModel | None:
        result = await self._db.execute(
            select(OrderModel)
            .options(selectinload(OrderModel.items))
            .where(OrderModel.id == order_id)
        )
        return result.scalar_one_or_none()
