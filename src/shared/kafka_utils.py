"""Kafka producer/consumer helpers."""

import json

import structlog
from aiokafka import AIOKafkaConsumer, AIOKafkaProducer

logger = structlog.get_logger()


async def create_producer(bootstrap_servers: str, client_id: str) -> AIOKafkaProducer:
    """Create and start a Kafka producer that JSON-encodes every value."""
    producer = AIOKafkaProducer(
        bootstrap_servers=bootstrap_servers,
        client_id=client_id,
        value_serializer=lambda v: json.dumps(v, default=str).encode("utf-8"),
    )
    await producer.start()
    logger.info("kafka_producer_started", bootstrap_servers=bootstrap_servers)
    return producer


def build_consumer(
    topic: str,
    bootstrap_servers: str,
    group_id: str,
    client_id: str,
    auto_offset_reset: str = "latest",
) -> AIOKafkaConsumer:
    """Build (but do not start) a consumer that hands out raw byte values."""
    return AIOKafkaConsumer(
        topic,
        bootstrap_servers=bootstrap_servers,
        group_id=group_id,
        client_id=client_id,
        auto_offset_reset=auto_offset_reset,
        enable_auto_commit=True,
    )
