"""Base Kafka consumer: connect, iterate, isolate per-message failures."""

from typing import Any

import structlog
from aiokafka import AIOKafkaConsumer
from aiokafka.errors import KafkaError

from src.domains.fraud.errors import TransportFatalError
from src.shared.kafka_utils import build_consumer

logger = structlog.get_logger()


class BaseConsumer:
    """Owns one AIOKafkaConsumer subscribed to a single topic.

    ``connect()`` is separate from ``run()`` so startup can fail fast: a
    transport error while connecting raises TransportFatalError, whereas an
    error while handling a message is logged and the loop moves on.
    """

    def __init__(
        self,
        topic: str,
        bootstrap_servers: str,
        group_id: str,
        client_id: str = "fraud-detection-system",
        auto_offset_reset: str = "latest",
        consumer: AIOKafkaConsumer | None = None,
    ):
        self.topic = topic
        self.bootstrap_servers = bootstrap_servers
        self.group_id = group_id
        self.client_id = client_id
        self.auto_offset_reset = auto_offset_reset
        self._consumer = consumer
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    async def connect(self) -> None:
        if self._consumer is None:
            self._consumer = build_consumer(
                self.topic,
                bootstrap_servers=self.bootstrap_servers,
                group_id=self.group_id,
                client_id=self.client_id,
                auto_offset_reset=self.auto_offset_reset,
            )
        try:
            await self._consumer.start()
        except (KafkaError, OSError) as exc:
            raise TransportFatalError(
                f"cannot connect to Kafka at {self.bootstrap_servers}: {exc}"
            ) from exc
        logger.info("consumer_started", topic=self.topic, group_id=self.group_id)

    async def run(self) -> None:
        if self._consumer is None:
            raise RuntimeError("connect() must be awaited before run()")
        self._running = True
        try:
            async for msg in self._consumer:
                await self._process_message(msg)
        finally:
            self._running = False
            await self._consumer.stop()

    async def start(self) -> None:
        await self.connect()
        await self.run()

    async def _process_message(self, msg: Any) -> None:
        try:
            await self.handle(msg)
        except Exception:
            logger.exception(
                "message_processing_error",
                topic=msg.topic,
                partition=msg.partition,
                offset=msg.offset,
            )

    async def handle(self, msg: Any) -> None:
        raise NotImplementedError

    async def stop(self) -> None:
        self._running = False
        if self._consumer:
            await self._consumer.stop()
            logger.info("consumer_stopped", topic=self.topic)
