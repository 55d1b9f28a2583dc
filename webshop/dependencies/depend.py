from fastapi import Depends, HTTPException, status
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from webshop.crud.cart_items import SqlAlchemyCartRepository
from webshop.crud.orders import SqlAlchemyOrderRepository
from webshop.db import get_db
from webshop.domain.errors import ErrorKind
from webshop.domain.result import Result


def get_cart_repository(db: AsyncSession = Depends(get_db)) -> SqlAlchemyCartRepository:
    return SqlAlchemyCartRepository(db)


def get_order_repository(db: AsyncSession = Depends(get_db)) -> SqlAlchemyOrderRepository:
    return SqlAlchemyOrderRepository(db)


def unwrap(result: Result):
    """Return the result's value or raise the matching 4xx HTTPException."""
    if result.is_success:
        return result.value
    status_code = (
        status.HTTP_404_NOT_FOUND
        if result.kind is ErrorKind.NOT_FOUND
        else status.HTTP_400_BAD_REQUEST
    )
    logger.warning(
        "Use case failed with kind='{kind}': {errors}",
        kind=result.kind.value if result.kind else None,
        errors=result.errors,
    )
    raise HTTPException(status_code=status_code, detail=result.errors)
