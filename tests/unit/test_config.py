"""Tests for application and risk scoring configuration."""

from src.config import Settings
from src.domains.fraud.config import FraudConfig


class TestSettings:
    def test_default_settings(self):
        settings = Settings()
        assert settings.app_name == "txn-risk-monitor"
        assert settings.app_version == "0.1.0"
        assert settings.port == 5000

    def test_settings_from_env(self, monkeypatch):
        monkeypatch.setenv("APP_NAME", "test-app")
        monkeypatch.setenv("PORT", "9000")
        monkeypatch.setenv("DEBUG", "true")
        settings = Settings()
        assert settings.app_name == "test-app"
        assert settings.port == 9000
        assert settings.debug is True

    def test_database_url_default(self):
        settings = Settings()
        assert "postgresql+asyncpg" in settings.database_url

    def test_kafka_settings(self, monkeypatch):
        monkeypatch.delenv("KAFKA_CONSUMER_GROUP", raising=False)
        settings = Settings()
        assert settings.kafka_consumer_group == "fraud-detection-group"
        assert settings.kafka_transactions_topic == "transactions"
        assert settings.kafka_client_id == "fraud-detection-system"

    def test_cleanup_disabled_by_default(self, monkeypatch):
        monkeypatch.delenv("CLEANUP_PASSWORD", raising=False)
        assert Settings().cleanup_password is None


class TestFraudConfig:
    def test_defaults(self):
        config = FraudConfig()
        assert config.alerts.alert_threshold == 0.40
        assert config.risk_levels.critical == 0.70
        assert config.amount.high_amount_min == 100_000
        assert config.weights.high_risk_geography == 0.50

    def test_instances_do_not_share_state(self):
        first = FraudConfig()
        first.alerts.alert_threshold = 0.9
        assert FraudConfig().alerts.alert_threshold == 0.40

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("FRAUD_ALERT_THRESHOLD", "0.55")
        monkeypatch.setenv("FRAUD_HIGH_AMOUNT_MIN", "20000")
        monkeypatch.setenv("FRAUD_RISK_TIMEZONE", "Asia/Kolkata")
        monkeypatch.setenv("FRAUD_ALERT_ID_PREFIX", "RISK")

        config = FraudConfig.from_env()

        assert config.alerts.alert_threshold == 0.55
        assert config.amount.high_amount_min == 20000.0
        assert config.patterns.risk_timezone == "Asia/Kolkata"
        assert config.alerts.id_prefix == "RISK"
        assert config.risk_levels.medium == 0.30
