"""Health and readiness endpoints."""

from datetime import UTC, datetime

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from src.config import settings
from src.db.database import check_db
from src.domains.fraud.config import default_config
from src.domains.fraud.rules_engine import RULES_VERSION

logger = structlog.get_logger()
router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
async def health(request: Request) -> dict:
    from src.main import get_uptime

    fraud_config = getattr(request.app.state, "fraud_config", default_config)
    return {
        "success": True,
        "data": {
            "status": "healthy",
            "service": settings.app_name,
            "version": settings.app_version,
            "rulesVersion": RULES_VERSION,
            "alertThreshold": fraud_config.alerts.alert_threshold,
            "uptimeSeconds": get_uptime(),
            "timestamp": datetime.now(UTC).isoformat(),
        },
    }


@router.get("/ready")
async def ready(request: Request) -> JSONResponse:
    db_ok = False
    engine = getattr(request.app.state, "engine", None)
    if engine is not None:
        try:
            db_ok = await check_db(engine)
        except (SQLAlchemyError, OSError):
            logger.warning("readiness_database_check_failed", exc_info=True)

    consumer = getattr(request.app.state, "consumer", None)
    kafka_ok = consumer is not None and consumer.running

    all_ready = db_ok and kafka_ok
    return JSONResponse(
        status_code=200 if all_ready else 503,
        content={
            "success": all_ready,
            "data": {
                "status": "ready" if all_ready else "degraded",
                "database": db_ok,
                "kafka": kafka_ok,
            },
        },
    )
