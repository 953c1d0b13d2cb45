"""Consumer for payment transaction events."""

from typing import Any

import structlog
from aiokafka import AIOKafkaConsumer

from src.domains.fraud.models import ProcessingOutcome, ProcessingStatus
from src.domains.fraud.pipeline import IngestionPipeline

from .base import BaseConsumer

logger = structlog.get_logger()


class TransactionConsumer(BaseConsumer):
    def __init__(
        self,
        pipeline: IngestionPipeline,
        bootstrap_servers: str,
        group_id: str = "fraud-detection-group",
        topic: str = "transactions",
        client_id: str = "fraud-detection-system",
        auto_offset_reset: str = "latest",
        consumer: AIOKafkaConsumer | None = None,
    ) -> None:
        super().__init__(
            topic=topic,
            bootstrap_servers=bootstrap_servers,
            group_id=group_id,
            client_id=client_id,
            auto_offset_reset=auto_offset_reset,
            consumer=consumer,
        )
        self._pipeline = pipeline

    async def handle(self, msg: Any) -> ProcessingOutcome:
        outcome = await self._pipeline.process(msg.value)
        log_outcome(outcome, topic=msg.topic, partition=msg.partition, offset=msg.offset)
        return outcome


def log_outcome(outcome: ProcessingOutcome, **context: Any) -> None:
    if outcome.status == ProcessingStatus.DISCARDED:
        logger.warning("transaction_discarded", reason=outcome.reason, **context)
        return

    if outcome.status == ProcessingStatus.FAILED:
        logger.error(
            "transaction_processing_failed",
            transaction_id=outcome.transaction_id,
            reason=outcome.reason,
            **context,
        )
        return

    assessment = outcome.assessment
    logger.info(
        "transaction_scored",
        transaction_id=outcome.transaction_id,
        score=assessment.score,
        risk_level=assessment.risk_level.value,
        indicators=[i.code for i in assessment.indicators],
        **context,
    )
    if outcome.alert_id:
        logger.warning(
            "fraud_alert_created",
            alert_id=outcome.alert_id,
            transaction_id=outcome.transaction_id,
            score=assessment.score,
            risk_level=assessment.risk_level.value,
        )
    else:
        logger.info(
            "transaction_marked_clean",
            transaction_id=outcome.transaction_id,
            score=assessment.score,
        )
