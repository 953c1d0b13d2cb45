"""Global exception handling."""

import structlog
from fastapi import Request
from fastapi.responses import JSONResponse

from src.domains.fraud.errors import MaintenanceAuthError, PersistenceError

logger = structlog.get_logger()


def _error_body(error: str, message: str, request_id: str) -> dict:
    return {"success": False, "error": error, "message": message, "request_id": request_id}


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    request_id = getattr(request.state, "request_id", "unknown")

    if isinstance(exc, MaintenanceAuthError):
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": exc.message, "error": exc.error},
        )

    if isinstance(exc, ValueError):
        logger.warning("bad_request", request_id=request_id, error=str(exc))
        return JSONResponse(
            status_code=400, content=_error_body("bad_request", str(exc), request_id)
        )

    if isinstance(exc, PermissionError):
        logger.warning("forbidden", request_id=request_id, error=str(exc))
        return JSONResponse(status_code=403, content=_error_body("forbidden", str(exc), request_id))

    if isinstance(exc, LookupError):
        logger.warning("not_found", request_id=request_id, error=str(exc))
        return JSONResponse(status_code=404, content=_error_body("not_found", str(exc), request_id))

    if isinstance(exc, PersistenceError):
        logger.error("persistence_error", request_id=request_id, error=str(exc))
        return JSONResponse(
            status_code=503,
            content=_error_body(
                "storage_unavailable", "The document store is unavailable", request_id
            ),
        )

    logger.exception("unhandled_exception", request_id=request_id, error=str(exc))
    return JSONResponse(
        status_code=500,
        content=_error_body(
            "internal_server_error", "An unexpected error occurred", request_id
        ),
    )
