"""FastAPI application entry point for the transaction risk monitor."""

import asyncio
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from aiokafka.errors import KafkaError
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from src.api.middleware.error_handler import global_exception_handler
from src.api.middleware.logging import StructuredLoggingMiddleware
from src.api.routes.alerts import router as alerts_router
from src.api.routes.health import router as health_router
from src.api.routes.maintenance import router as maintenance_router
from src.api.routes.stats import router as stats_router
from src.api.routes.transactions import router as transactions_router
from src.config import settings
from src.consumers.transaction_consumer import TransactionConsumer
from src.db.database import build_engine, build_session_factory, init_db
from src.db.store import SqlDocumentStore
from src.domains.fraud.config import FraudConfig
from src.domains.fraud.errors import PersistenceError, RiskMonitorError, TransportFatalError
from src.domains.fraud.gateway import SubmissionGateway
from src.domains.fraud.pipeline import IngestionPipeline
from src.shared.ids import AlertIdGenerator
from src.shared.kafka_utils import create_producer
from src.shared.logging import setup_logging

logger = structlog.get_logger()

# Track app start time for uptime calculation
APP_START_TIME: float = 0.0


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Wire store, producer, pipeline and consumer; tear them down on exit."""
    global APP_START_TIME
    APP_START_TIME = time.time()
    setup_logging(settings.log_level)

    fraud_config = FraudConfig.from_env()
    logger.info(
        "risk_monitor_starting",
        app_name=settings.app_name,
        version=settings.app_version,
        alert_threshold=fraud_config.alerts.alert_threshold,
        topic=settings.kafka_transactions_topic,
    )

    engine = build_engine(settings.database_url, echo=settings.debug)
    try:
        await init_db(engine)
    except (SQLAlchemyError, OSError) as exc:
        if settings.require_database_on_startup:
            await engine.dispose()
            raise PersistenceError(f"database unavailable at startup: {exc}") from exc
        logger.warning("database_unavailable_at_startup", error=str(exc))

    store = SqlDocumentStore(build_session_factory(engine))

    try:
        producer = await create_producer(
            settings.kafka_bootstrap_servers, client_id=settings.kafka_client_id
        )
    except (KafkaError, OSError) as exc:
        await engine.dispose()
        raise TransportFatalError(
            f"cannot connect producer to Kafka at {settings.kafka_bootstrap_servers}: {exc}"
        ) from exc

    pipeline = IngestionPipeline(
        store,
        id_generator=AlertIdGenerator(prefix=fraud_config.alerts.id_prefix),
        config=fraud_config,
    )
    consumer = TransactionConsumer(
        pipeline,
        bootstrap_servers=settings.kafka_bootstrap_servers,
        group_id=settings.kafka_consumer_group,
        topic=settings.kafka_transactions_topic,
        client_id=settings.kafka_client_id,
        auto_offset_reset=settings.kafka_auto_offset_reset,
    )
    try:
        await consumer.connect()
    except TransportFatalError:
        await producer.stop()
        await engine.dispose()
        raise
    consumer_task = asyncio.create_task(consumer.run())

    app.state.engine = engine
    app.state.store = store
    app.state.fraud_config = fraud_config
    app.state.gateway = SubmissionGateway(producer, topic=settings.kafka_transactions_topic)
    app.state.consumer = consumer

    yield

    logger.info("risk_monitor_shutting_down")
    await consumer.stop()
    consumer_task.cancel()
    await asyncio.gather(consumer_task, return_exceptions=True)
    await producer.stop()
    await engine.dispose()


app = FastAPI(
    title="Transaction Risk Monitor",
    description="Rule-based risk scoring and alerting for payment transactions",
    version=settings.app_version,
    lifespan=lifespan,
)

# CORS for local development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.debug else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Structured logging middleware
app.add_middleware(StructuredLoggingMiddleware)

# Starlette only routes an exception to a handler registered for its class
# (or a base of it); the bare Exception handler is a last resort that still
# re-raises, so the domain bases are registered explicitly.
for exc_class in (RiskMonitorError, LookupError, ValueError, PermissionError, Exception):
    app.add_exception_handler(exc_class, global_exception_handler)

app.include_router(health_router)
app.include_router(transactions_router)
app.include_router(alerts_router)
app.include_router(stats_router)
app.include_router(maintenance_router)


def get_uptime() -> int:
    """Get application uptime in seconds."""
    if APP_START_TIME == 0.0:
        return 0
    return int(time.time() - APP_START_TIME)
