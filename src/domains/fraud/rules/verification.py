"""Card verification rules (CVV and AVS)."""

from datetime import datetime

from ..config import FraudConfig
from ..models import IndicatorCode, RuleResult, TransactionPayload
from .base import FraudRule


class CvvVerificationRule(FraudRule):
    rule_id = "cvv_verification"
    code = IndicatorCode.CVV_VERIFICATION_FAILED
    category = "verification"

    def evaluate(
        self,
        payload: TransactionPayload,
        evaluated_at: datetime,
        config: FraudConfig,
    ) -> RuleResult:
        # Only an explicit False counts; an absent flag is not a failure
        if payload.cvv_match is not False:
            return self._not_triggered()
        return self._triggered(
            weight=config.weights.cvv_failed,
            details="CVV verification failed",
        )


class AddressVerificationRule(FraudRule):
    rule_id = "address_verification"
    code = IndicatorCode.ADDRESS_VERIFICATION_FAILED
    category = "verification"

    def evaluate(
        self,
        payload: TransactionPayload,
        evaluated_at: datetime,
        config: FraudConfig,
    ) -> RuleResult:
        if payload.avs_match is not False:
            return self._not_triggered()
        return self._triggered(
            weight=config.weights.avs_failed,
            details="Address verification failed",
        )
