"""Alert lifecycle: applies a reviewer's decision to an existing alert."""

from collections.abc import Callable
from datetime import UTC, datetime

from src.db.store import DocumentStore

from .errors import AlertNotFoundError
from .models import Alert


class AlertLifecycleManager:
    def __init__(
        self,
        store: DocumentStore,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._clock = clock or (lambda: datetime.now(UTC))

    async def apply_review(
        self,
        alert_id: str,
        action: str,
        comments: str | None = None,
        assigned_to: str | None = None,
    ) -> Alert:
        """Set status, action, comments, assignee and review time in one update.

        Any action string is accepted and becomes the new status. A second
        review overwrites the first; no history is kept. Raises
        AlertNotFoundError, without writing, when no alert has this id.
        """
        updated = await self._store.find_alert_and_update(
            alert_id,
            {
                "status": action,
                "action": action,
                "comments": comments,
                "assigned_to": assigned_to,
                "reviewed_at": self._clock(),
            },
        )
        if updated is None:
            raise AlertNotFoundError(alert_id)
        return updated
