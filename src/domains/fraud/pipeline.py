"""Ingestion pipeline: parse -> evaluate -> classify -> record -> alert.

``IngestionPipeline.process`` handles exactly one consumed message and
returns a ProcessingOutcome instead of raising. It never logs; the Kafka
consumer decides how each outcome is reported. Semantics are at-most-once:
a failed message is not retried and is not redirected anywhere.
"""

import json
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any
from zoneinfo import ZoneInfo

from pydantic import TypeAdapter, ValidationError

from src.db.store import DocumentStore
from src.shared.ids import AlertIdGenerator

from .alerts import maybe_create_alert
from .config import FraudConfig, default_config
from .errors import MalformedPayloadError, MissingIdentifierError
from .models import ProcessingOutcome, TransactionPayload
from .recorder import record_transaction
from .rules_engine import RulesEngine

_DATETIME = TypeAdapter(datetime)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


def parse_payload(raw: bytes | str | dict[str, Any]) -> TransactionPayload:
    """Decode one message body into a payload that carries an identifier."""
    if isinstance(raw, dict):
        data = raw
    else:
        try:
            text = raw.decode("utf-8") if isinstance(raw, bytes | bytearray) else raw
            data = json.loads(text, parse_constant=_reject_constant)
        except (UnicodeDecodeError, ValueError, TypeError) as exc:
            raise MalformedPayloadError(f"payload is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise MalformedPayloadError(f"payload must be a JSON object, got {type(data).__name__}")

    try:
        payload = TransactionPayload.from_raw(data)
    except ValidationError as exc:
        raise MalformedPayloadError(f"payload failed validation: {exc}") from exc

    if not payload.identifier:
        raise MissingIdentifierError("payload has neither id nor transactionId")
    return payload


def resolve_timestamp(value: Any, now: datetime, timezone_name: str | None = None) -> datetime:
    """Parse the payload timestamp, falling back to processing time.

    Naive values are read as wall-clock time in the risk timezone (the host's
    zone when none is configured), so the stored value is always aware.
    """
    parsed: datetime | None = None
    if value not in (None, "") and not isinstance(value, bool):
        try:
            parsed = _DATETIME.validate_python(value)
        except ValidationError:
            parsed = None

    if parsed is None:
        parsed = now
    if parsed.tzinfo is None:
        if timezone_name:
            return parsed.replace(tzinfo=ZoneInfo(timezone_name))
        return parsed.astimezone()
    return parsed


class IngestionPipeline:
    """Drives rules engine, recorder and alert generator for one message."""

    def __init__(
        self,
        store: DocumentStore,
        id_generator: Callable[[], str] | None = None,
        config: FraudConfig | None = None,
        rules_engine: RulesEngine | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._config = config or default_config
        self._id_generator = id_generator or AlertIdGenerator(prefix=self._config.alerts.id_prefix)
        self._rules_engine = rules_engine or RulesEngine(config=self._config)
        self._clock = clock or (lambda: datetime.now(UTC))

    async def process(self, raw: bytes | str | dict[str, Any]) -> ProcessingOutcome:
        try:
            payload = parse_payload(raw)
        except (MalformedPayloadError, MissingIdentifierError) as exc:
            return ProcessingOutcome.discarded(str(exc))

        transaction_id = payload.identifier
        try:
            now = self._clock()
            evaluated_at = resolve_timestamp(
                payload.timestamp, now, self._config.patterns.risk_timezone
            )
            assessment = self._rules_engine.evaluate(payload, evaluated_at)

            await record_transaction(self._store, payload, assessment, evaluated_at)

            alert = await maybe_create_alert(
                self._store,
                payload,
                assessment,
                id_generator=self._id_generator,
                config=self._config,
                created_at=now,
            )
        except Exception as exc:
            return ProcessingOutcome.failed(
                f"{type(exc).__name__}: {exc}", transaction_id=transaction_id
            )

        return ProcessingOutcome.succeeded(
            transaction_id, assessment, alert_id=alert.alert_id if alert else None
        )
