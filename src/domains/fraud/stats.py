"""Aggregate counts over stored transactions and alerts, and the bulk purge."""

from src.db.store import DocumentStore

from .models import PENDING_STATUS, PurgeResult, RiskLevel, RiskStats


def format_alert_rate(total_alerts: int, total_transactions: int) -> str:
    """Alerts per hundred transactions with one decimal, "0.0" when empty."""
    if total_transactions <= 0:
        return "0.0"
    return f"{total_alerts / total_transactions * 100:.1f}"


async def compute_stats(store: DocumentStore) -> RiskStats:
    total_transactions = await store.count_transactions()
    total_alerts = await store.count_alerts()
    critical_alerts = await store.count_alerts(risk_level=RiskLevel.CRITICAL)
    pending_alerts = await store.count_alerts(status=PENDING_STATUS)

    return RiskStats(
        total_transactions=total_transactions,
        total_alerts=total_alerts,
        critical_alerts=critical_alerts,
        pending_alerts=pending_alerts,
        alert_rate=format_alert_rate(total_alerts, total_transactions),
    )


async def purge_all(store: DocumentStore) -> PurgeResult:
    """Delete every transaction and alert, then report what is left."""
    deleted_transactions = await store.delete_transactions()
    deleted_alerts = await store.delete_alerts()

    return PurgeResult(
        deleted_transactions=deleted_transactions,
        deleted_alerts=deleted_alerts,
        remaining_transactions=await store.count_transactions(),
        remaining_alerts=await store.count_alerts(),
    )
