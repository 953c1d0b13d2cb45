"""Abstract base class for risk rules."""

from abc import ABC, abstractmethod
from datetime import datetime

from ..config import FraudConfig
from ..models import IndicatorCode, RuleResult, TransactionPayload


class FraudRule(ABC):
    """Base class for all risk rules.

    Rules are pure: they look only at the payload, the resolved evaluation
    time and the config, and return a RuleResult. A triggered result carries
    the rule's additive weight and the indicator message.
    """

    rule_id: str
    code: IndicatorCode
    category: str  # "geo" | "verification" | "amount" | "merchant" | "device" | "patterns"

    @abstractmethod
    def evaluate(
        self,
        payload: TransactionPayload,
        evaluated_at: datetime,
        config: FraudConfig,
    ) -> RuleResult:
        """Evaluate this rule and return a RuleResult."""
        ...

    def _not_triggered(self) -> RuleResult:
        return RuleResult(
            rule_name=self.rule_id,
            triggered=False,
            category=self.category,
        )

    def _triggered(self, weight: float, details: str) -> RuleResult:
        return RuleResult(
            rule_name=self.rule_id,
            triggered=True,
            weight=weight,
            code=self.code,
            details=details,
            category=self.category,
        )
