from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from webshop.core.config import settings
from webshop.core.events import order_event
from webshop.core.kafka import kafka_producer
from webshop.crud.orders import SqlAlchemyOrderRepository
from webshop.db import get_db
from webshop.dependencies.depend import get_order_repository, unwrap
from webshop.schemas.order import OrderCreate, OrderCreated, OrderOut
from webshop.service import orders as orders_service
from webshop.service.orders import OrderLine, PlaceOrderCommand

router = APIRouter(prefix="/orders", tags=["Orders"])


@router.post(
    "",
    response_model=OrderCreated,
    status_code=status.HTTP_201_CREATED,
)
async def place_order(
    payload: OrderCreate,
    db: AsyncSession = Depends(get_db),
    orders: SqlAlchemyOrderRepository = Depends(get_order_repository),
):
    logger.info(
        "Create order request received for user_id='{user_id}'",
        user_id=payload.user_id,
    )
    command = PlaceOrderCommand(
        user_id=payload.user_id,
        customer_address=payload.customer_address,
        shipping_option=payload.shipping_option,
        payment_method=payload.payment_method,
        items=[
            OrderLine(
                item_id=item.item_id,
                item_name=item.item_name,
                unit_price=item.unit_price,
                quantity=item.quantity,
            )
            for item in payload.items
        ],
    )
    async with db.begin():
        result = await orders_service.place_order(orders, command)
    order_id = unwrap(result)

    placed = await orders.get(order_id)
    if placed is not None:
        await kafka_producer.send(
            settings.KAFKA_ORDER_TOPIC,
            order_event("ORDER_CREATED", placed),
            key=str(order_id),
        )
    logger.info(
        "Order created. order_id='{order_id}', user_id='{user_id}'",
        order_id=str(order_id),
        user_id=payload.user_id,
    )
    return OrderCreated(order_id=order_id)


@router.get("", response_model=List[OrderOut])
async def list_orders(
    user_id: str = Query(alias="userId"),
    orders: SqlAlchemyOrderRepository = Depends(get_order_repository),
):
    logger.info(
        "List orders request received. user_id='{user_id}'",
        user_id=user_id,
    )
    found = unwrap(await orders_service.list_orders(orders, user_id))
    return [OrderOut.model_validate(order) for order in found]


@router.get("/{order_id}", response_model=OrderOut)
async def get_order(
    order_id: UUID,
    orders: SqlAlchemyOrderRepository = Depends(get_order_repository),
):
    logger.info(
        "Get order request received. order_id='{order_id}'",
        order_id=str(order_id),
    )
    order = unwrap(await orders_service.get_order(orders, order_id))
    return OrderOut.model_validate(order)


@router.post("/{order_id}/cancel", response_model=OrderOut)
async def cancel_order(
    order_id: UUID,
    db: AsyncSession = Depends(get_db),
    orders: SqlAlchemyOrderRepository = Depends(get_order_repository),
):
    logger.info(
        "Cancel order request received. order_id='{order_id}'",
        order_id=str(order_id),
    )
    async with db.begin():
        result = await orders_service.cancel_order(orders, order_id)
    order = unwrap(result)

    await kafka_producer.send(
        settings.KAFKA_ORDER_TOPIC,
        order_event("ORDER_UPDATED", order, reason="cancelled"),
        key=str(order_id),
    )
    return OrderOut.model_validate(order)
