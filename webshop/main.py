from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from loguru import logger

from webshop.core.config import settings
from webshop.core.kafka import kafka_producer
from webshop.core.logging import setup_logging
from webshop.db import create_schema
from webshop.middleware.logging import LoggingMiddleware
from webshop.routers import cart as cart_router
from webshop.routers import metrics as metrics_router
from webshop.routers import orders as orders_router


setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application startup")
    if settings.CREATE_SCHEMA_ON_STARTUP:
        await create_schema()
    try:
        await kafka_producer.start()
    except Exception as e:
        logger.warning("Kafka producer not started: {error}", error=str(e))
    yield
    await kafka_producer.stop()
    logger.info("Application shutdown completed")


app = FastAPI(title="WebShop Service", version="0.1.0", lifespan=lifespan)

app.add_middleware(LoggingMiddleware)

app.include_router(cart_router.router)
app.include_router(orders_router.router)
app.include_router(metrics_router.router)


if __name__ == "__main__":
    uvicorn.run("webshop.main:app", host="0.0.0.0", port=8000, reload=True)
