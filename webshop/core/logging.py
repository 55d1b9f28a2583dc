import sys

from loguru import logger

from webshop.core.config import settings


def setup_logging() -> None:
    logger.remove()
    if settings.LOG_JSON:
        logger.add(
            sys.stdout,
            level=settings.LOG_LEVEL,
            serialize=True,
        )
    else:
        logger.add(
            sys.stdout,
            format="{time:YYYY-MM-DDTHH:mm:ssZ} | {level} | " + settings.SERVICE_NAME + " | {message}",
            level=settings.LOG_LEVEL,
        )
    logger.configure(extra={"service": settings.SERVICE_NAME})
