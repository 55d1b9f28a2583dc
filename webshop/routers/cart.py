from fastapi import APIRouter, Depends, Response, status
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from webshop.core.config import settings
from webshop.core.kafka import kafka_producer
from webshop.crud.cart_items import SqlAlchemyCartRepository
from webshop.crud.orders import SqlAlchemyOrderRepository
from webshop.db import get_db
from webshop.dependencies.depend import get_cart_repository, get_order_repository, unwrap
from webshop.core.events import order_event
from webshop.schemas.cart import CartItemIn, CartItemOut, CartSummaryOut, CheckoutIn
from webshop.schemas.order import OrderCreated
from webshop.service import cart as cart_service
from webshop.service import orders as orders_service

router = APIRouter(prefix="/cart", tags=["Cart"])


@router.get("/{user_id}", response_model=CartSummaryOut)
async def view_cart(
    user_id: str,
    carts: SqlAlchemyCartRepository = Depends(get_cart_repository),
):
    logger.info(
        "View cart request received. user_id='{user_id}'",
        user_id=user_id,
    )
    summary = unwrap(await cart_service.view_cart(carts, user_id))
    return CartSummaryOut.model_validate(summary)


@router.post(
    "/{user_id}/items",
    response_model=CartItemOut,
    status_code=status.HTTP_201_CREATED,
)
async def add_item(
    user_id: str,
    payload: CartItemIn,
    db: AsyncSession = Depends(get_db),
    carts: SqlAlchemyCartRepository = Depends(get_cart_repository),
):
    logger.info(
        "Add to cart request received. user_id='{user_id}', item_id={item_id}",
        user_id=user_id,
        item_id=payload.item_id,
    )
    async with db.begin():
        result = await cart_service.add_to_cart(
            carts,
            user_id=user_id,
            item_id=payload.item_id,
            item_name=payload.item_name,
            unit_price=payload.unit_price,
            quantity=payload.quantity,
        )
    return CartItemOut.model_validate(unwrap(result))


@router.delete(
    "/{user_id}/items/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def remove_item(
    user_id: str,
    item_id: int,
    db: AsyncSession = Depends(get_db),
    carts: SqlAlchemyCartRepository = Depends(get_cart_repository),
):
    logger.info(
        "Remove from cart request received. user_id='{user_id}', item_id={item_id}",
        user_id=user_id,
        item_id=item_id,
    )
    async with db.begin():
        result = await cart_service.remove_from_cart(carts, user_id, item_id)
    unwrap(result)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{user_id}/checkout",
    response_model=OrderCreated,
    status_code=status.HTTP_201_CREATED,
)
async def checkout(
    user_id: str,
    payload: CheckoutIn,
    db: AsyncSession = Depends(get_db),
    carts: SqlAlchemyCartRepository = Depends(get_cart_repository),
    orders: SqlAlchemyOrderRepository = Depends(get_order_repository),
):
    logger.info(
        "Checkout request received. user_id='{user_id}'",
        user_id=user_id,
    )
    # order insert and cart clear commit together
    async with db.begin():
        result = await orders_service.checkout(
            carts,
            orders,
            user_id=user_id,
            customer_address=payload.customer_address,
            shipping_option=payload.shipping_option,
            payment_method=payload.payment_method,
        )
    order_id = unwrap(result)

    placed = await orders.get(order_id)
    if placed is not None:
        await kafka_producer.send(
            settings.KAFKA_ORDER_TOPIC,
            order_event("ORDER_CREATED", placed, reason="checkout"),
            key=str(order_id),
        )
    return OrderCreated(order_id=order_id)
