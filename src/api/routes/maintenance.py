"""Maintenance endpoint: purge every stored transaction and alert."""

from datetime import UTC, datetime

import structlog
from fastapi import APIRouter, Depends

from src.api.deps import get_settings, get_store
from src.api.security import verify_cleanup_password
from src.config import Settings
from src.db.store import DocumentStore
from src.domains.fraud.models import CleanupRequest
from src.domains.fraud.stats import purge_all

logger = structlog.get_logger()
router = APIRouter(prefix="/api/cleanup", tags=["maintenance"])


@router.delete("/all")
async def cleanup_all(
    body: CleanupRequest | None = None,
    store: DocumentStore = Depends(get_store),  # noqa: B008
    app_settings: Settings = Depends(get_settings),  # noqa: B008
) -> dict:
    password = body.password if body is not None else None
    verify_cleanup_password(password, app_settings.cleanup_password)

    timestamp = datetime.now(UTC).isoformat()
    logger.warning("database_cleanup_requested", timestamp=timestamp)

    result = await purge_all(store)

    logger.warning(
        "database_cleanup_completed",
        deleted_transactions=result.deleted_transactions,
        deleted_alerts=result.deleted_alerts,
    )
    return {
        "success": True,
        "message": "Database cleaned successfully",
        "timestamp": timestamp,
        "deleted": {
            "transactions": result.deleted_transactions,
            "alerts": result.deleted_alerts,
        },
        "remaining": {
            "transactions": result.remaining_transactions,
            "alerts": result.remaining_alerts,
        },
    }
