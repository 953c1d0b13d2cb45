"""Transaction recorder: one immutable scored record per ingested message."""

from datetime import datetime

from src.db.store import DocumentStore

from .models import RiskAssessment, StoredTransaction, TransactionPayload


def build_stored_transaction(
    payload: TransactionPayload,
    assessment: RiskAssessment,
    timestamp: datetime,
) -> StoredTransaction:
    if not payload.identifier:
        raise ValueError("cannot record a transaction without an identifier")

    return StoredTransaction(
        transaction_id=payload.identifier,
        account_id=payload.account_id,
        amount=payload.amount,
        merchant=payload.merchant,
        category=payload.category,
        location=payload.raw.get("location") if payload.location is not None else None,
        ml_score=assessment.score,
        risk_level=assessment.risk_level,
        fraud_indicators=[indicator.message for indicator in assessment.indicators],
        timestamp=timestamp,
    )


async def record_transaction(
    store: DocumentStore,
    payload: TransactionPayload,
    assessment: RiskAssessment,
    timestamp: datetime,
) -> StoredTransaction:
    transaction = build_stored_transaction(payload, assessment, timestamp)
    await store.insert_transaction(transaction)
    return transaction
