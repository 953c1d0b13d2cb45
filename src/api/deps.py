"""FastAPI dependencies resolving the clients built during startup."""

from fastapi import Depends, Request

from src.config import Settings, settings
from src.db.store import DocumentStore
from src.domains.fraud.gateway import SubmissionGateway
from src.domains.fraud.lifecycle import AlertLifecycleManager


def get_settings() -> Settings:
    return settings


def get_store(request: Request) -> DocumentStore:
    return request.app.state.store


def get_gateway(request: Request) -> SubmissionGateway:
    return request.app.state.gateway


def get_lifecycle_manager(
    store: DocumentStore = Depends(get_store),  # noqa: B008
) -> AlertLifecycleManager:
    return AlertLifecycleManager(store)
