from decimal import Decimal

import pytest

from webshop.domain.cart import CartItem
from webshop.domain.errors import ValidationError


def test_total_price_is_unit_price_times_quantity():
    item = CartItem("testuser", 2, "Mouse", Decimal("29.99"), 3)

    assert item.total_price == Decimal("89.97")


def test_quantity_defaults_to_one():
    item = CartItem("testuser", 2, "Mouse", Decimal("29.99"))

    assert item.quantity == 1
    assert item.date_added is not None


@pytest.mark.parametrize(
    "kwargs",
    [
        {"user_id": ""},
        {"item_id": 0},
        {"item_name": " "},
        {"unit_price": Decimal("-1")},
        {"quantity": 0},
        {"quantity": True},
    ],
)
def test_invalid_fields_are_rejected(kwargs):
    values = {
        "user_id": "testuser",
        "item_id": 2,
        "item_name": "Mouse",
        "unit_price": Decimal("29.99"),
        "quantity": 1,
    }
    values.update(kwargs)

    with pytest.raises(ValidationError):
        CartItem(**values)


def test_update_quantity_revalidates():
    item = CartItem("testuser", 2, "Mouse", Decimal("29.99"), 1)

    item.update_quantity(4)
    assert item.quantity == 4

    with pytest.raises(ValidationError):
        item.update_quantity(0)
    assert item.quantity == 4


def test_update_price_revalidates():
    item = CartItem("testuser", 2, "Mouse", Decimal("29.99"), 2)

    item.update_price(Decimal("19.99"))
    assert item.total_price == Decimal("39.98")

    with pytest.raises(ValidationError):
        item.update_price(Decimal("-5"))
    assert item.unit_price == Decimal("19.99")


@pytest.mark.parametrize("price", [Decimal("0.005"), Decimal("29.999"), Decimal("100000000")])
def test_price_outside_storable_range_is_rejected(price):
    with pytest.raises(ValidationError):
        CartItem("testuser", 2, "Mouse", price, 1)


def test_price_with_trailing_zeros_is_accepted():
    item = CartItem("testuser", 2, "Mouse", Decimal("29.990"), 1)

    assert item.unit_price == Decimal("29.99")
