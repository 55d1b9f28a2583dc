from webshop.models.base import Base
from webshop.models.cart_item import CartItemModel
from webshop.models.order import OrderModel
from webshop.models.order_item import OrderItemModel

__all__ = ["Base", "CartItemModel", "OrderModel", "OrderItemModel"]
