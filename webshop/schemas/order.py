from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List
from uuid import UUID

from pydantic import ConfigDict

from webshop.domain.order import OrderStatus
from webshop.schemas.base import CamelModel


class OrderItemIn(CamelModel):
    item_id: int
    item_name: str
    unit_price: Decimal
    quantity: int


class OrderCreate(CamelModel):
    user_id: str
    customer_address: str
    shipping_option: str
    payment_method: str
    items: List[OrderItemIn] = []


class OrderCreated(CamelModel):
    order_id: UUID


class OrderItemOut(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    item_id: int
    item_name: str
    quantity: int
    unit_price: Decimal
    total_price: Decimal


class OrderOut(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: str
    customer_address: str
    shipping_option: str
    payment_method: str
    total_amount: Decimal
    status: OrderStatus
    created_at: datetime
    items: List[OrderItemOut]
