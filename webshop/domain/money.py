from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from webshop.domain.errors import ValidationError

CENT = Decimal("0.01")
# largest value a Numeric(10, 2) column holds
MAX_AMOUNT = Decimal("99999999.99")


def to_decimal(value, field_name: str = "unit_price") -> Decimal:
    # floats go through str() so 29.99 stays 29.99 instead of its binary expansion
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise ValidationError(f"{field_name} must be a number")


def to_money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)
