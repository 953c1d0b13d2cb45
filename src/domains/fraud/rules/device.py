"""Device fingerprint rules."""

from datetime import datetime

from ..config import FraudConfig
from ..models import IndicatorCode, RuleResult, TransactionPayload
from .base import FraudRule


class SuspiciousDeviceRule(FraudRule):
    rule_id = "suspicious_device"
    code = IndicatorCode.SUSPICIOUS_DEVICE
    category = "device"

    def evaluate(
        self,
        payload: TransactionPayload,
        evaluated_at: datetime,
        config: FraudConfig,
    ) -> RuleResult:
        if payload.device not in config.watchlists.devices:
            return self._not_triggered()

        return self._triggered(
            weight=config.weights.suspicious_device,
            details="Suspicious device detected",
        )
