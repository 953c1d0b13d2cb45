"""Aggregate statistics endpoint."""

from fastapi import APIRouter, Depends

from src.api.deps import get_store
from src.db.store import DocumentStore
from src.domains.fraud.stats import compute_stats

router = APIRouter(prefix="/api", tags=["stats"])


@router.get("/stats")
async def get_stats(store: DocumentStore = Depends(get_store)) -> dict:  # noqa: B008
    stats = await compute_stats(store)
    return {"success": True, "data": stats.model_dump(by_alias=True)}
