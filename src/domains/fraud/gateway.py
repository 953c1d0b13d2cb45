"""Submission gateway: publishes externally submitted transactions to Kafka."""

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from .errors import PublishError
from .models import SubmissionAck


class SubmissionGateway:
    """Fire-and-forget publisher for the transactions topic.

    ``producer`` is a started aiokafka ``AIOKafkaProducer`` (or anything with
    the same ``send_and_wait``) whose value serializer JSON-encodes dicts. The
    gateway waits for the broker ack only; scoring happens later, in the
    consumer, and its outcome is invisible here.
    """

    def __init__(
        self,
        producer,
        topic: str,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._producer = producer
        self._topic = topic
        self._clock = clock or (lambda: datetime.now(UTC))

    @property
    def topic(self) -> str:
        return self._topic

    async def submit(self, payload: dict[str, Any]) -> SubmissionAck:
        try:
            await self._producer.send_and_wait(self._topic, payload)
        except Exception as exc:
            raise PublishError(f"failed to publish to {self._topic}: {exc}") from exc

        identifier = payload.get("id") or payload.get("transactionId")
        return SubmissionAck(
            topic=self._topic,
            transaction_id=str(identifier) if identifier else None,
            submitted_at=self._clock(),
        )
