"""Document store for scored transactions and alerts.

Both collections are addressed by business identifiers (``transactionId``,
``alertId``), never by the surrogate primary key. Every write runs in its own
session; nothing couples a transaction write to the alert write that may
follow it.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, Protocol

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.db.models import AlertRecord, TransactionRecord
from src.domains.fraud.errors import PersistenceError
from src.domains.fraud.models import Alert, StoredTransaction

REVIEW_FIELDS = frozenset({"status", "action", "comments", "assigned_to", "reviewed_at"})


class DocumentStore(Protocol):
    async def insert_transaction(self, transaction: StoredTransaction) -> None: ...

    async def insert_alert(self, alert: Alert) -> None: ...

    async def find_transactions(
        self, *, limit: int, offset: int = 0
    ) -> list[StoredTransaction]: ...

    async def find_alerts(
        self,
        *,
        limit: int,
        offset: int = 0,
        status: str | None = None,
        risk_level: str | None = None,
    ) -> list[Alert]: ...

    async def find_alert_and_update(
        self, alert_id: str, updates: dict[str, Any]
    ) -> Alert | None: ...

    async def delete_transactions(self) -> int: ...

    async def delete_alerts(self) -> int: ...

    async def count_transactions(self) -> int: ...

    async def count_alerts(
        self, *, status: str | None = None, risk_level: str | None = None
    ) -> int: ...


def _alert_filters(status: str | None, risk_level: str | None) -> list:
    filters = []
    if status:
        filters.append(AlertRecord.status == status)
    if risk_level:
        filters.append(AlertRecord.risk_level == risk_level)
    return filters


class SqlDocumentStore:
    """PostgreSQL-backed DocumentStore using async SQLAlchemy sessions."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    @asynccontextmanager
    async def _session(self, operation: str) -> AsyncIterator[AsyncSession]:
        try:
            async with self._session_factory() as session:
                yield session
        except (SQLAlchemyError, OSError) as exc:
            raise PersistenceError(f"{operation} failed: {exc}") from exc

    async def insert_transaction(self, transaction: StoredTransaction) -> None:
        async with self._session("insert_transaction") as session:
            session.add(TransactionRecord(**transaction.model_dump()))
            await session.commit()

    async def insert_alert(self, alert: Alert) -> None:
        async with self._session("insert_alert") as session:
            session.add(AlertRecord(**alert.model_dump()))
            await session.commit()

    async def find_transactions(self, *, limit: int, offset: int = 0) -> list[StoredTransaction]:
        stmt = (
            select(TransactionRecord)
            .order_by(TransactionRecord.timestamp.desc())
            .offset(offset)
            .limit(limit)
        )
        async with self._session("find_transactions") as session:
            rows = (await session.scalars(stmt)).all()
        return [StoredTransaction.model_validate(row, from_attributes=True) for row in rows]

    async def find_alerts(
        self,
        *,
        limit: int,
        offset: int = 0,
        status: str | None = None,
        risk_level: str | None = None,
    ) -> list[Alert]:
        stmt = (
            select(AlertRecord)
            .where(*_alert_filters(status, risk_level))
            .order_by(AlertRecord.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        async with self._session("find_alerts") as session:
            rows = (await session.scalars(stmt)).all()
        return [Alert.model_validate(row, from_attributes=True) for row in rows]

    async def find_alert_and_update(self, alert_id: str, updates: dict[str, Any]) -> Alert | None:
        unknown = set(updates) - REVIEW_FIELDS
        if unknown:
            raise ValueError(f"Alert fields are not updatable: {sorted(unknown)}")

        stmt = (
            update(AlertRecord)
            .where(AlertRecord.alert_id == alert_id)
            .values(**updates)
            .returning(AlertRecord)
        )
        async with self._session("find_alert_and_update") as session:
            row = (await session.scalars(stmt)).one_or_none()
            await session.commit()
        if row is None:
            return None
        return Alert.model_validate(row, from_attributes=True)

    async def delete_transactions(self) -> int:
        async with self._session("delete_transactions") as session:
            result = await session.execute(delete(TransactionRecord))
            await session.commit()
        return result.rowcount or 0

    async def delete_alerts(self) -> int:
        async with self._session("delete_alerts") as session:
            result = await session.execute(delete(AlertRecord))
            await session.commit()
        return result.rowcount or 0

    async def count_transactions(self) -> int:
        async with self._session("count_transactions") as session:
            result = await session.execute(select(func.count()).select_from(TransactionRecord))
            return result.scalar_one()

    async def count_alerts(
        self, *, status: str | None = None, risk_level: str | None = None
    ) -> int:
        stmt = (
            select(func.count())
            .select_from(AlertRecord)
            .where(*_alert_filters(status, risk_level))
        )
        async with self._session("count_alerts") as session:
            result = await session.execute(stmt)
            return result.scalar_one()
