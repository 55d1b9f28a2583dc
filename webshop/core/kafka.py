import json
from typing import Any, Optional

from aiokafka import AIOKafkaProducer
from loguru import logger
from prometheus_client import Counter

from webshop.core.config import settings
from webshop.core.metrics import (
    KAFKA_PRODUCER_MESSAGES_TOTAL,
    KAFKA_PRODUCER_START_TOTAL,
    KAFKA_PRODUCER_STOP_TOTAL,
)


def _count(counter: Counter, result: str) -> None:
    counter.labels(service=settings.SERVICE_NAME, result=result).inc()


def _serialize(value: Any) -> bytes:
    return json.dumps(value, ensure_ascii=False, default=str).encode("utf-8")


class KafkaProducer:
    """Order event publisher. Stays idle unless KAFKA_ENABLED is set."""

    def __init__(self):
        self._producer: Optional[AIOKafkaProducer] = None

    async def start(self):
        if not settings.KAFKA_ENABLED:
            logger.info("Kafka disabled by settings; producer not started")
            return
        if self._producer is not None:
            return
        _count(KAFKA_PRODUCER_START_TOTAL, "attempt")
        producer = AIOKafkaProducer(
            bootstrap_servers=settings.KAFKA_BROKER,
            value_serializer=_serialize,
        )
        await producer.start()
        self._producer = producer
        logger.info("Kafka producer started. broker='{broker}'", broker=settings.KAFKA_BROKER)
        _count(KAFKA_PRODUCER_START_TOTAL, "success")

    async def stop(self):
        if self._producer is None:
            return
        _count(KAFKA_PRODUCER_STOP_TOTAL, "attempt")
        producer, self._producer = self._producer, None
        await producer.stop()
        logger.info("Kafka producer stopped")
        _count(KAFKA_PRODUCER_STOP_TOTAL, "success")

    async def send(self, topic: str, value: Any, key: str | None = None):
        if self._producer is None:
            logger.info(
                "Kafka producer not running; skip send to topic='{topic}' with key='{key}'",
                topic=topic,
                key=key,
            )
            _count(KAFKA_PRODUCER_MESSAGES_TOTAL, "skipped")
            return
        try:
            await self._producer.send_and_wait(
                topic,
                value=value,
                key=(key.encode() if key else None),
            )
        except Exception as e:
            # the order is already committed at this point
            logger.exception(
                "Failed to send Kafka message to topic='{topic}' with key='{key}': {error}",
                topic=topic,
                key=key,
                error=str(e),
            )
            _count(KAFKA_PRODUCER_MESSAGES_TOTAL, "error")
            return
        logger.info(
            "Kafka message sent to topic='{topic}' with key='{key}'",
            topic=topic,
            key=key,
        )
        _count(KAFKA_PRODUCER_MESSAGES_TOTAL, "success")


kafka_producer = KafkaProducer()
