"""Risk scoring configuration with sensible defaults."""

import os
from dataclasses import dataclass, field


@dataclass
class RuleWeights:
    high_risk_geography: float = 0.50
    cvv_failed: float = 0.30
    avs_failed: float = 0.15
    high_amount: float = 0.20
    medium_amount: float = 0.10
    high_risk_merchant: float = 0.30
    high_risk_category: float = 0.25
    suspicious_device: float = 0.20
    vpn_or_proxy: float = 0.15
    card_testing: float = 0.30
    new_account: float = 0.10
    unusual_time: float = 0.08


@dataclass
class AmountThresholds:
    # Both bounds are exclusive: amount must be strictly greater
    high_amount_min: float = 100_000.0
    medium_amount_min: float = 50_000.0
    currency_symbol: str = "₹"


@dataclass
class WatchLists:
    # Merchant keywords match as substrings; the other lists match exactly
    merchant_keywords: tuple[str, ...] = (
        "UNKNOWN_MERCHANT",
        "CRYPTO_EXCHANGE",
        "OFFSHORE_CASINO",
        "HIGH_RISK_VENDOR",
    )
    categories: tuple[str, ...] = ("GAMBLING", "CRYPTO", "WIRE_TRANSFER", "GIFT_CARDS")
    devices: tuple[str, ...] = (
        "Emulator",
        "Unknown Device",
        "Rooted Android",
        "Jailbroken iPhone",
    )


@dataclass
class PatternThresholds:
    card_testing_min_declines: int = 3
    new_account_max_age_days: float = 30.0
    night_start_hour: int = 23
    night_end_hour: int = 5
    # IANA zone used for hour-of-day checks; None means the host's local zone
    risk_timezone: str | None = None


@dataclass
class RiskLevelThresholds:
    critical: float = 0.70
    high: float = 0.50
    medium: float = 0.30


@dataclass
class AlertSettings:
    alert_threshold: float = 0.40
    id_prefix: str = "ALERT"


@dataclass
class FraudConfig:
    weights: RuleWeights = field(default_factory=RuleWeights)
    amount: AmountThresholds = field(default_factory=AmountThresholds)
    watchlists: WatchLists = field(default_factory=WatchLists)
    patterns: PatternThresholds = field(default_factory=PatternThresholds)
    risk_levels: RiskLevelThresholds = field(default_factory=RiskLevelThresholds)
    alerts: AlertSettings = field(default_factory=AlertSettings)

    @classmethod
    def from_env(cls) -> "FraudConfig":
        """Load config with env var overrides. Env vars use FRAUD_ prefix."""
        config = cls()

        # Amount overrides
        if v := os.getenv("FRAUD_HIGH_AMOUNT_MIN"):
            config.amount.high_amount_min = float(v)
        if v := os.getenv("FRAUD_MEDIUM_AMOUNT_MIN"):
            config.amount.medium_amount_min = float(v)
        if v := os.getenv("FRAUD_CURRENCY_SYMBOL"):
            config.amount.currency_symbol = v

        # Pattern overrides
        if v := os.getenv("FRAUD_CARD_TESTING_MIN_DECLINES"):
            config.patterns.card_testing_min_declines = int(v)
        if v := os.getenv("FRAUD_NEW_ACCOUNT_MAX_AGE_DAYS"):
            config.patterns.new_account_max_age_days = float(v)
        if v := os.getenv("FRAUD_RISK_TIMEZONE"):
            config.patterns.risk_timezone = v

        # Risk level overrides
        if v := os.getenv("FRAUD_CRITICAL_THRESHOLD"):
            config.risk_levels.critical = float(v)
        if v := os.getenv("FRAUD_HIGH_THRESHOLD"):
            config.risk_levels.high = float(v)
        if v := os.getenv("FRAUD_MEDIUM_THRESHOLD"):
            config.risk_levels.medium = float(v)

        # Alert overrides
        if v := os.getenv("FRAUD_ALERT_THRESHOLD"):
            config.alerts.alert_threshold = float(v)
        if v := os.getenv("FRAUD_ALERT_ID_PREFIX"):
            config.alerts.id_prefix = v

        return config


# Module-level default instance
default_config = FraudConfig()
