"""Geography and network-anonymity rules."""

from datetime import datetime

from ..config import FraudConfig
from ..models import IndicatorCode, RuleResult, TransactionPayload
from .base import FraudRule


class HighRiskGeographyRule(FraudRule):
    """Triggers when the payload's location is tagged ``risk == "high"``."""

    rule_id = "high_risk_geography"
    code = IndicatorCode.HIGH_RISK_GEOGRAPHY
    category = "geo"

    def evaluate(
        self,
        payload: TransactionPayload,
        evaluated_at: datetime,
        config: FraudConfig,
    ) -> RuleResult:
        location = payload.location
        if location is None or location.risk != "high":
            return self._not_triggered()

        return self._triggered(
            weight=config.weights.high_risk_geography,
            details=f"High risk geography: {location.country or 'unknown'}",
        )


class AnonymizingNetworkRule(FraudRule):
    """Triggers for traffic routed through a VPN, proxy or Tor."""

    rule_id = "vpn_or_proxy"
    code = IndicatorCode.VPN_OR_PROXY_DETECTED
    category = "geo"

    def evaluate(
        self,
        payload: TransactionPayload,
        evaluated_at: datetime,
        config: FraudConfig,
    ) -> RuleResult:
        if not (payload.is_vpn or payload.is_tor):
            return self._not_triggered()

        details = "Tor network detected" if payload.is_tor else "VPN/proxy detected"
        return self._triggered(weight=config.weights.vpn_or_proxy, details=details)
