"""Alert listing and review endpoints."""

import structlog
from fastapi import APIRouter, Depends, Query

from src.api.deps import get_lifecycle_manager, get_store
from src.config import settings
from src.db.store import DocumentStore
from src.domains.fraud.lifecycle import AlertLifecycleManager
from src.domains.fraud.models import AlertReview, RiskLevel

logger = structlog.get_logger()
router = APIRouter(prefix="/api/alerts", tags=["alerts"])


@router.get("")
async def list_alerts(
    store: DocumentStore = Depends(get_store),  # noqa: B008
    limit: int = Query(default=settings.listing_limit, ge=1, le=settings.listing_limit),
    offset: int = Query(default=0, ge=0),
    status: str | None = None,
    risk_level: RiskLevel | None = Query(default=None, alias="riskLevel"),  # noqa: B008
) -> dict:
    alerts = await store.find_alerts(
        limit=limit,
        offset=offset,
        status=status,
        risk_level=risk_level.value if risk_level else None,
    )
    return {
        "success": True,
        "data": [a.model_dump(mode="json", by_alias=True) for a in alerts],
    }


@router.put("/{alert_id}")
async def review_alert(
    alert_id: str,
    review: AlertReview,
    manager: AlertLifecycleManager = Depends(get_lifecycle_manager),  # noqa: B008
) -> dict:
    alert = await manager.apply_review(
        alert_id,
        action=review.action,
        comments=review.comments,
        assigned_to=review.assigned_to,
    )
    logger.info(
        "alert_reviewed",
        alert_id=alert_id,
        action=review.action,
        assigned_to=review.assigned_to,
    )
    return {"success": True, "data": alert.model_dump(mode="json", by_alias=True)}
