"""Shared-secret gate for the bulk purge endpoint."""

import secrets
from typing import Any

import structlog

from src.domains.fraud.errors import MaintenanceAuthError

logger = structlog.get_logger()


def verify_cleanup_password(provided: Any, expected: str | None) -> None:
    """Raise MaintenanceAuthError unless ``provided`` matches the configured secret.

    Missing or empty credential -> 401 MISSING_PASSWORD. Anything else that is
    not the exact secret string, including numbers and booleans, -> 403
    INVALID_PASSWORD. With no secret configured the endpoint is disabled
    (503 MAINTENANCE_DISABLED) rather than falling back to a default.
    """
    if not expected:
        raise MaintenanceAuthError(503, "MAINTENANCE_DISABLED", "Cleanup is not configured")

    if not provided:
        raise MaintenanceAuthError(401, "MISSING_PASSWORD", "Password required")

    if not isinstance(provided, str) or not secrets.compare_digest(
        provided.encode("utf-8"), expected.encode("utf-8")
    ):
        logger.warning("cleanup_rejected_invalid_password")
        raise MaintenanceAuthError(403, "INVALID_PASSWORD", "Invalid password")
