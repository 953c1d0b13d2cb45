"""Alert generation for transactions at or above the alerting threshold."""

from collections.abc import Callable
from datetime import UTC, datetime

from src.db.store import DocumentStore

from .config import FraudConfig, default_config
from .models import PENDING_STATUS, Alert, RiskAssessment, TransactionPayload


def should_alert(assessment: RiskAssessment, config: FraudConfig | None = None) -> bool:
    return assessment.score >= (config or default_config).alerts.alert_threshold


def build_alert(
    payload: TransactionPayload,
    assessment: RiskAssessment,
    alert_id: str,
    created_at: datetime,
) -> Alert:
    return Alert(
        alert_id=alert_id,
        transaction_id=payload.identifier,
        transaction=payload.raw,
        ml_score={"score": assessment.score},
        risk_level=assessment.risk_level,
        reasons=list(assessment.indicators),
        status=PENDING_STATUS,
        created_at=created_at,
    )


async def maybe_create_alert(
    store: DocumentStore,
    payload: TransactionPayload,
    assessment: RiskAssessment,
    id_generator: Callable[[], str],
    config: FraudConfig | None = None,
    created_at: datetime | None = None,
) -> Alert | None:
    """Create and persist a PENDING alert when the score warrants it.

    Below the threshold nothing is written and None is returned. No
    deduplication by transaction id is attempted: every qualifying message
    gets its own alert.
    """
    if not should_alert(assessment, config):
        return None

    alert = build_alert(
        payload,
        assessment,
        alert_id=id_generator(),
        created_at=created_at or datetime.now(UTC),
    )
    await store.insert_alert(alert)
    return alert
