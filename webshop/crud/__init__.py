from webshop.crud.cart_items import SqlAlchemyCartRepository
from webshop.crud.orders import SqlAlchemyOrderRepository

__all__ = ["SqlAlchemyCartRepository", "SqlAlchemyOrderRepository"]
