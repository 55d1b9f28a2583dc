from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List

from pydantic import ConfigDict

from webshop.schemas.base import CamelModel


class CartItemIn(CamelModel):
    item_id: int
    item_name: str
    unit_price: Decimal
    quantity: int = 1


class CartItemOut(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    item_id: int
    item_name: str
    unit_price: Decimal
    quantity: int
    total_price: Decimal
    date_added: datetime | None = None


class CartSummaryOut(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    items: List[CartItemOut]
    sub_total: Decimal
    total_items: int


class CheckoutIn(CamelModel):
    customer_address: str
    shipping_option: str
    payment_method: str
