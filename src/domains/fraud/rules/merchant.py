"""Merchant and merchant-category watchlist rules."""

from datetime import datetime

from ..config import FraudConfig
from ..models import IndicatorCode, RuleResult, TransactionPayload
from .base import FraudRule


class HighRiskMerchantRule(FraudRule):
    """Triggers when the merchant name contains any watchlisted keyword."""

    rule_id = "high_risk_merchant"
    code = IndicatorCode.HIGH_RISK_MERCHANT
    category = "merchant"

    def evaluate(
        self,
        payload: TransactionPayload,
        evaluated_at: datetime,
        config: FraudConfig,
    ) -> RuleResult:
        merchant = payload.merchant
        if not merchant or not any(
            keyword in merchant for keyword in config.watchlists.merchant_keywords
        ):
            return self._not_triggered()

        return self._triggered(
            weight=config.weights.high_risk_merchant,
            details=f"Suspicious merchant: {merchant}",
        )


class HighRiskCategoryRule(FraudRule):
    rule_id = "high_risk_category"
    code = IndicatorCode.HIGH_RISK_MERCHANT_CATEGORY
    category = "merchant"

    def evaluate(
        self,
        payload: TransactionPayload,
        evaluated_at: datetime,
        config: FraudConfig,
    ) -> RuleResult:
        if payload.category not in config.watchlists.categories:
            return self._not_triggered()

        return self._triggered(
            weight=config.weights.high_risk_category,
            details=f"Category: {payload.category}",
        )
