"""Integration tests for the HTTP API against in-memory fakes."""

from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from aiokafka.errors import KafkaTimeoutError
from httpx import ASGITransport, AsyncClient

from src.api.deps import get_gateway, get_settings, get_store
from src.config import Settings
from src.domains.fraud.gateway import SubmissionGateway
from src.domains.fraud.models import Alert, RiskLevel, StoredTransaction
from src.main import app
from tests.conftest import NOW, InMemoryDocumentStore

pytestmark = pytest.mark.integration


@pytest.fixture
def api_store() -> InMemoryDocumentStore:
    store = InMemoryDocumentStore()
    store.transactions.append(
        StoredTransaction(
            transaction_id="txn-1",
            amount=150000,
            ml_score=0.7,
            risk_level=RiskLevel.CRITICAL,
            fraud_indicators=["High amount: ₹150,000"],
            timestamp=NOW,
        )
    )
    store.alerts.extend(
        [
            Alert(
                alert_id="ALERT-1",
                transaction_id="txn-1",
                transaction={"id": "txn-1", "amount": 150000},
                ml_score={"score": 0.7},
                risk_level=RiskLevel.CRITICAL,
                created_at=NOW,
            ),
            Alert(
                alert_id="ALERT-2",
                transaction_id="txn-2",
                transaction={"id": "txn-2"},
                ml_score={"score": 0.45},
                risk_level=RiskLevel.MEDIUM,
                status="FALSE_POSITIVE",
                created_at=NOW,
            ),
        ]
    )
    return store


@pytest.fixture
def producer():
    producer = AsyncMock()
    producer.send_and_wait = AsyncMock()
    return producer


@pytest_asyncio.fixture
async def client(api_store, producer):
    app.dependency_overrides[get_store] = lambda: api_store
    app.dependency_overrides[get_gateway] = lambda: SubmissionGateway(producer, topic="transactions")
    app.dependency_overrides[get_settings] = lambda: Settings(cleanup_password="s3cret")
    try:
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as http:
            yield http
    finally:
        app.dependency_overrides.clear()


class TestHealth:
    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/api/health")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["status"] == "healthy"
        assert data["service"] == "txn-risk-monitor"
        assert data["alertThreshold"] == 0.4
        assert "timestamp" in data
        assert response.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_ready_without_wiring_is_degraded(self, client):
        response = await client.get("/api/ready")

        assert response.status_code == 503
        assert response.json()["data"]["status"] == "degraded"


class TestTransactions:
    @pytest.mark.asyncio
    async def test_submit(self, client, producer):
        response = await client.post("/api/transactions", json={"id": "txn-9", "amount": 10})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["transactionId"] == "txn-9"
        producer.send_and_wait.assert_awaited_once_with(
            "transactions", {"id": "txn-9", "amount": 10}
        )

    @pytest.mark.asyncio
    async def test_submit_broker_down(self, client, producer):
        producer.send_and_wait.side_effect = KafkaTimeoutError()

        response = await client.post("/api/transactions", json={"id": "txn-9"})

        assert response.status_code == 500
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_submit_rejects_non_object(self, client):
        response = await client.post("/api/transactions", json=[1, 2])

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_list(self, client):
        response = await client.get("/api/transactions")

        assert response.status_code == 200
        [txn] = response.json()["data"]
        assert txn["transactionId"] == "txn-1"
        assert txn["mlScore"] == 0.7
        assert txn["riskLevel"] == "CRITICAL"
        assert txn["fraudIndicators"] == ["High amount: ₹150,000"]

    @pytest.mark.asyncio
    async def test_list_rejects_oversized_limit(self, client):
        response = await client.get("/api/transactions", params={"limit": 5001})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_store_outage_is_503(self, client, api_store):
        api_store.fail_on.add("find_transactions")

        response = await client.get("/api/transactions")

        assert response.status_code == 503
        assert response.json()["error"] == "storage_unavailable"


class TestAlerts:
    @pytest.mark.asyncio
    async def test_list_all(self, client):
        response = await client.get("/api/alerts")

        assert response.status_code == 200
        assert {a["alertId"] for a in response.json()["data"]} == {"ALERT-1", "ALERT-2"}

    @pytest.mark.asyncio
    async def test_filter_by_status_and_level(self, client):
        response = await client.get(
            "/api/alerts", params={"status": "PENDING", "riskLevel": "CRITICAL"}
        )

        assert [a["alertId"] for a in response.json()["data"]] == ["ALERT-1"]

    @pytest.mark.asyncio
    async def test_review(self, client, api_store):
        response = await client.put(
            "/api/alerts/ALERT-1",
            json={"action": "CONFIRMED_FRAUD", "comments": "card blocked", "assignedTo": "ana"},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["status"] == "CONFIRMED_FRAUD"
        assert data["assignedTo"] == "ana"
        assert data["reviewedAt"] is not None
        assert api_store.alerts[0].status == "CONFIRMED_FRAUD"

    @pytest.mark.asyncio
    async def test_review_unknown_alert(self, client):
        response = await client.put("/api/alerts/ALERT-404", json={"action": "DISMISSED"})

        assert response.status_code == 404
        assert response.json()["message"] == "Alert not found: ALERT-404"

    @pytest.mark.asyncio
    async def test_review_requires_action(self, client):
        response = await client.put("/api/alerts/ALERT-1", json={"comments": "?"})

        assert response.status_code == 422


class TestStats:
    @pytest.mark.asyncio
    async def test_stats(self, client):
        response = await client.get("/api/stats")

        assert response.status_code == 200
        assert response.json()["data"] == {
            "totalTransactions": 1,
            "totalAlerts": 2,
            "criticalAlerts": 1,
            "pendingAlerts": 1,
            "alertRate": "200.0",
        }


class TestCleanup:
    @pytest.mark.asyncio
    async def test_missing_password(self, client, api_store):
        response = await client.request("DELETE", "/api/cleanup/all", json={})

        assert response.status_code == 401
        assert response.json()["error"] == "MISSING_PASSWORD"
        assert len(api_store.alerts) == 2

    @pytest.mark.asyncio
    async def test_no_body_is_missing_password(self, client):
        response = await client.request("DELETE", "/api/cleanup/all")

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_wrong_password(self, client, api_store):
        response = await client.request("DELETE", "/api/cleanup/all", json={"password": "guess"})

        assert response.status_code == 403
        assert response.json() == {
            "success": False,
            "message": "Invalid password",
            "error": "INVALID_PASSWORD",
        }
        assert len(api_store.transactions) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("password", [140301, True, ["s3cret"], {"value": "s3cret"}])
    async def test_non_string_password_is_invalid(self, client, api_store, password):
        response = await client.request(
            "DELETE", "/api/cleanup/all", json={"password": password}
        )

        assert response.status_code == 403
        assert response.json()["error"] == "INVALID_PASSWORD"
        assert len(api_store.alerts) == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize("password", [0, False, ""])
    async def test_falsy_password_is_missing(self, client, password):
        response = await client.request(
            "DELETE", "/api/cleanup/all", json={"password": password}
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_disabled_without_secret(self, client):
        app.dependency_overrides[get_settings] = lambda: Settings(cleanup_password=None)

        response = await client.request("DELETE", "/api/cleanup/all", json={"password": "x"})

        assert response.status_code == 503
        assert response.json()["error"] == "MAINTENANCE_DISABLED"

    @pytest.mark.asyncio
    async def test_purge(self, client, api_store):
        response = await client.request("DELETE", "/api/cleanup/all", json={"password": "s3cret"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["deleted"] == {"transactions": 1, "alerts": 2}
        assert body["remaining"] == {"transactions": 0, "alerts": 0}
        assert api_store.transactions == []
