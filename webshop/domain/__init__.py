from webshop.domain.cart import CartItem
from webshop.domain.errors import (
    DomainError,
    DuplicateItemError,
    ErrorKind,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from webshop.domain.order import Order, OrderItem, OrderStatus
from webshop.domain.result import Result

__all__ = [
    "CartItem",
    "DomainError",
    "DuplicateItemError",
    "ErrorKind",
    "InvalidStateError",
    "NotFoundError",
    "Order",
    "OrderItem",
    "OrderStatus",
    "Result",
    "ValidationError",
]
