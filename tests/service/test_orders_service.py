from decimal import Decimal
from uuid import uuid4

import pytest

from webshop.domain.cart import CartItem
from webshop.domain.errors import ErrorKind
from webshop.domain.order import Order, OrderItem, OrderStatus
from webshop.service import orders as orders_service
from webshop.service.orders import OrderLine, PlaceOrderCommand

pytestmark = pytest.mark.asyncio


def make_command(items=None, **overrides) -> PlaceOrderCommand:
    values = {
        "user_id": "testuser",
        "customer_address": "1 Main Street",
        "shipping_option": "Standard",
        "payment_method": "CreditCard",
        "items": items if items is not None else [
            OrderLine(1, "Laptop", Decimal("999.99"), 1),
            OrderLine(2, "Mouse", Decimal("29.99"), 2),
            OrderLine(3, "Keyboard", Decimal("89.99"), 1),
        ],
    }
    values.update(overrides)
    return PlaceOrderCommand(**values)


class TestPlaceOrder:
    async def test_persists_completed_order_and_returns_id(self, orders):
        result = await orders_service.place_order(orders, make_command())

        assert result.is_success
        assert orders.add_calls == 1
        stored = orders.orders[result.value]
        assert stored.status is OrderStatus.COMPLETED
        assert stored.total_amount == Decimal("1149.96")
        assert len(stored.items) == 3

    async def test_empty_items_fail_without_persisting(self, orders):
        result = await orders_service.place_order(orders, make_command(items=[]))

        assert result.is_failure
        assert result.kind is ErrorKind.VALIDATION
        assert "must contain at least one item" in result.error
        assert orders.add_calls == 0

    async def test_duplicate_item_is_returned_not_raised(self, orders):
        command = make_command(
            items=[
                OrderLine(1, "Laptop", Decimal("999.99"), 1),
                OrderLine(1, "Laptop", Decimal("999.99"), 1),
            ]
        )

        result = await orders_service.place_order(orders, command)

        assert result.is_failure
        assert result.kind is ErrorKind.DUPLICATE_ITEM
        assert orders.add_calls == 0

    async def test_invalid_line_is_a_validation_failure(self, orders):
        command = make_command(items=[OrderLine(1, "Laptop", Decimal("999.99"), 0)])

        result = await orders_service.place_order(orders, command)

        assert result.is_failure
        assert result.kind is ErrorKind.VALIDATION
        assert orders.add_calls == 0

    async def test_blank_address_is_a_validation_failure(self, orders):
        result = await orders_service.place_order(orders, make_command(customer_address=" "))

        assert result.is_failure
        assert result.kind is ErrorKind.VALIDATION
        assert orders.add_calls == 0


class TestCheckout:
    async def test_checkout_moves_cart_into_order(self, carts, orders):
        await carts.add(CartItem("testuser", 1, "Laptop", Decimal("999.99"), 1))
        await carts.add(CartItem("testuser", 2, "Mouse", Decimal("29.99"), 2))
        await carts.add(CartItem("otheruser", 3, "Keyboard", Decimal("89.99"), 1))

        result = await orders_service.checkout(
            carts, orders, "testuser", "1 Main Street", "Express", "PayPal"
        )

        assert result.is_success
        order = orders.orders[result.value]
        assert order.total_amount == Decimal("1059.97")
        assert order.shipping_option == "Express"
        assert await carts.list_for_user("testuser") == []
        assert len(await carts.list_for_user("otheruser")) == 1

    async def test_empty_cart_fails(self, carts, orders):
        result = await orders_service.checkout(
            carts, orders, "testuser", "1 Main Street", "Express", "PayPal"
        )

        assert result.is_failure
        assert result.kind is ErrorKind.VALIDATION
        assert orders.add_calls == 0

    async def test_rejected_order_leaves_cart_untouched(self, carts, orders):
        await carts.add(CartItem("testuser", 1, "Laptop", Decimal("999.99"), 1))

        result = await orders_service.checkout(carts, orders, "testuser", "", "Express", "PayPal")

        assert result.is_failure
        assert orders.add_calls == 0
        assert len(await carts.list_for_user("testuser")) == 1


class TestReadAndCancel:
    async def test_get_missing_order_is_not_found(self, orders):
        result = await orders_service.get_order(orders, uuid4())

        assert result.is_failure
        assert result.kind is ErrorKind.NOT_FOUND

    async def test_list_orders_only_returns_users_orders(self, orders):
        await orders_service.place_order(orders, make_command())
        await orders_service.place_order(orders, make_command(user_id="otheruser"))

        result = await orders_service.list_orders(orders, "testuser")

        assert result.is_success
        assert [o.user_id for o in result.value] == ["testuser"]

    async def test_completed_order_cannot_be_cancelled(self, orders):
        placed = await orders_service.place_order(orders, make_command())

        result = await orders_service.cancel_order(orders, placed.value)

        assert result.is_failure
        assert result.kind is ErrorKind.INVALID_STATE
        assert orders.update_calls == 0
        assert orders.orders[placed.value].status is OrderStatus.COMPLETED

    async def test_cancel_missing_order_is_not_found(self, orders):
        result = await orders_service.cancel_order(orders, uuid4())

        assert result.kind is ErrorKind.NOT_FOUND

    async def test_pending_order_is_cancelled_and_saved(self, orders):
        pending = Order.restore(
            id=uuid4(),
            user_id="testuser",
            customer_address="1 Main Street",
            shipping_option="Standard",
            payment_method="CreditCard",
            status=OrderStatus.PENDING,
            items=[OrderItem(1, "Laptop", 1, Decimal("999.99"))],
        )
        orders.orders[pending.id] = pending

        result = await orders_service.cancel_order(orders, pending.id)

        assert result.is_success
        assert result.value.status is OrderStatus.CANCELLED
        assert orders.update_calls == 1
        assert orders.orders[pending.id].status is OrderStatus.CANCELLED
