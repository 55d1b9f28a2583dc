"""Guard clauses shared by the cart and order entities."""

from __future__ import annotations

from decimal import Decimal

from webshop.domain.errors import ValidationError
from webshop.domain.money import CENT, MAX_AMOUNT, to_decimal


def require_text(value: str | None, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value)


def require_item_id(item_id) -> int:
    if isinstance(item_id, bool) or not isinstance(item_id, int) or item_id <= 0:
        raise ValidationError("item_id must be greater than zero")
    return item_id


def require_quantity(quantity) -> int:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise ValidationError("quantity must be greater than zero")
    return quantity


def require_price(unit_price) -> Decimal:
    price = to_decimal(unit_price)
    if not price.is_finite() or price < 0:
        raise ValidationError("unit_price must not be negative")
    if price > MAX_AMOUNT:
        raise ValidationError(f"unit_price must not exceed {MAX_AMOUNT}")
    if price.quantize(CENT) != price:
        raise ValidationError("unit_price must have at most 2 decimal places")
    return price
