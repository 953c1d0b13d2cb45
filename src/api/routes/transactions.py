"""Transaction submission and listing endpoints."""

from typing import Any

import structlog
from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse

from src.api.deps import get_gateway, get_store
from src.config import settings
from src.db.store import DocumentStore
from src.domains.fraud.errors import PublishError
from src.domains.fraud.gateway import SubmissionGateway

logger = structlog.get_logger()
router = APIRouter(prefix="/api", tags=["transactions"])


@router.post("/transactions")
async def submit_transaction(
    payload: dict[str, Any] = Body(...),  # noqa: B008
    gateway: SubmissionGateway = Depends(get_gateway),  # noqa: B008
):
    try:
        ack = await gateway.submit(payload)
    except PublishError as exc:
        logger.error("transaction_publish_failed", error=str(exc))
        return JSONResponse(status_code=500, content={"success": False, "message": str(exc)})

    logger.info("transaction_submitted", transaction_id=ack.transaction_id, topic=ack.topic)
    return {"success": True, "data": ack.model_dump(mode="json", by_alias=True)}


@router.get("/transactions")
async def list_transactions(
    store: DocumentStore = Depends(get_store),  # noqa: B008
    limit: int = Query(default=settings.listing_limit, ge=1, le=settings.listing_limit),
    offset: int = Query(default=0, ge=0),
) -> dict:
    transactions = await store.find_transactions(limit=limit, offset=offset)
    return {
        "success": True,
        "data": [t.model_dump(mode="json", by_alias=True) for t in transactions],
    }
