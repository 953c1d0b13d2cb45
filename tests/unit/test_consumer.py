"""Unit tests for the Kafka transaction consumer."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from aiokafka.errors import KafkaConnectionError

from src.consumers.transaction_consumer import TransactionConsumer, log_outcome
from src.domains.fraud.errors import TransportFatalError
from src.domains.fraud.models import ProcessingOutcome, ProcessingStatus
from src.domains.fraud.pipeline import IngestionPipeline
from tests.conftest import NOW, SequentialIds, make_kafka_message, utc_config


class _AsyncIterConsumer:
    """Stand-in for AIOKafkaConsumer yielding a fixed list of messages."""

    def __init__(self, messages):
        self._messages = list(messages)
        self.start = AsyncMock()
        self.stop = AsyncMock()

    def __aiter__(self):
        return self

    async def __anext__(self):
        if not self._messages:
            raise StopAsyncIteration
        return self._messages.pop(0)


def _consumer(store, kafka_consumer) -> TransactionConsumer:
    pipeline = IngestionPipeline(
        store, id_generator=SequentialIds(), config=utc_config(), clock=lambda: NOW
    )
    return TransactionConsumer(
        pipeline,
        bootstrap_servers="localhost:9092",
        group_id="test-group",
        consumer=kafka_consumer,
    )


class TestTransactionConsumer:
    def test_defaults(self):
        consumer = TransactionConsumer(MagicMock(), bootstrap_servers="localhost:9092")
        assert consumer.topic == "transactions"
        assert consumer.group_id == "fraud-detection-group"
        assert consumer.client_id == "fraud-detection-system"
        assert not consumer.running

    @pytest.mark.asyncio
    async def test_handle_returns_outcome(self, store, risky_transaction):
        consumer = _consumer(store, MagicMock())
        msg = make_kafka_message(json.dumps(risky_transaction).encode())

        outcome = await consumer.handle(msg)

        assert outcome.status == ProcessingStatus.SUCCESS
        assert outcome.alert_id == "ALERT-1"

    @pytest.mark.asyncio
    async def test_bad_message_does_not_stop_the_loop(self, store, clean_transaction):
        messages = [
            make_kafka_message(b"not json", offset=0),
            make_kafka_message(b'{"amount": 5}', offset=1),
            make_kafka_message(json.dumps(clean_transaction).encode(), offset=2),
        ]
        kafka_consumer = _AsyncIterConsumer(messages)
        consumer = _consumer(store, kafka_consumer)

        await consumer.start()

        kafka_consumer.start.assert_awaited_once()
        kafka_consumer.stop.assert_awaited()
        assert [t.transaction_id for t in store.transactions] == ["txn-clean-001"]

    @pytest.mark.asyncio
    async def test_store_failure_does_not_stop_the_loop(self, store, clean_transaction):
        store.fail_on.add("insert_transaction")
        second = dict(clean_transaction, id="txn-clean-002")
        kafka_consumer = _AsyncIterConsumer(
            [
                make_kafka_message(json.dumps(clean_transaction).encode(), offset=0),
                make_kafka_message(json.dumps(second).encode(), offset=1),
            ]
        )
        consumer = _consumer(store, kafka_consumer)

        with patch.object(consumer, "handle", wraps=consumer.handle) as handle:
            await consumer.start()

        assert handle.await_count == 2

    @pytest.mark.asyncio
    async def test_unexpected_handler_error_is_isolated(self, store):
        kafka_consumer = _AsyncIterConsumer(
            [make_kafka_message(b"{}", offset=0), make_kafka_message(b"{}", offset=1)]
        )
        consumer = _consumer(store, kafka_consumer)
        consumer.handle = AsyncMock(side_effect=[RuntimeError("boom"), None])

        await consumer.start()

        assert consumer.handle.await_count == 2

    @pytest.mark.asyncio
    async def test_connect_failure_is_fatal(self, store):
        kafka_consumer = _AsyncIterConsumer([])
        kafka_consumer.start.side_effect = KafkaConnectionError("no brokers")
        consumer = _consumer(store, kafka_consumer)

        with pytest.raises(TransportFatalError, match="cannot connect to Kafka"):
            await consumer.connect()

    @pytest.mark.asyncio
    async def test_run_requires_connect(self, store):
        consumer = TransactionConsumer(MagicMock(), bootstrap_servers="localhost:9092")

        with pytest.raises(RuntimeError):
            await consumer.run()


class TestLogOutcome:
    def test_discarded_logs_warning(self):
        with patch("src.consumers.transaction_consumer.logger") as logger:
            log_outcome(ProcessingOutcome.discarded("bad json"), offset=3)

        logger.warning.assert_called_once_with("transaction_discarded", reason="bad json", offset=3)

    def test_failed_logs_error(self):
        with patch("src.consumers.transaction_consumer.logger") as logger:
            log_outcome(ProcessingOutcome.failed("PersistenceError: down", transaction_id="t1"))

        logger.error.assert_called_once()
        assert logger.error.call_args.args == ("transaction_processing_failed",)
