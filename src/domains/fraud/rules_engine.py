"""Rule-based risk engine with additive scoring."""

from datetime import datetime

from .config import FraudConfig, default_config
from .models import RiskAssessment, RiskIndicator, RiskLevel, RuleResult, TransactionPayload
from .rules import ALL_RULES, FraudRule

RULES_VERSION = "rules-v3.2"


def classify_risk_level(score: float, config: FraudConfig | None = None) -> RiskLevel:
    """Map a score to a level. Lower bounds are closed, highest checked first."""
    thresholds = (config or default_config).risk_levels
    if score >= thresholds.critical:
        return RiskLevel.CRITICAL
    if score >= thresholds.high:
        return RiskLevel.HIGH
    if score >= thresholds.medium:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


class RulesEngine:
    """Evaluates a transaction payload against the risk rules.

    Scoring is a plain additive sum:
    1. Run every rule in order -> list[RuleResult]
    2. Score = sum of the weights of triggered rules, rounded to 4 places
    3. Level = classify_risk_level(score)
    4. Indicators keep rule order, not severity order

    The engine has no side effects; identical payload and evaluation time
    always give an identical assessment.
    """

    def __init__(
        self,
        config: FraudConfig | None = None,
        rules: list[FraudRule] | None = None,
    ) -> None:
        self._config = config or default_config
        self._rules = list(rules) if rules is not None else list(ALL_RULES)

    @property
    def rules(self) -> list[FraudRule]:
        return list(self._rules)

    def run_rules(self, payload: TransactionPayload, evaluated_at: datetime) -> list[RuleResult]:
        return [rule.evaluate(payload, evaluated_at, self._config) for rule in self._rules]

    def evaluate(self, payload: TransactionPayload, evaluated_at: datetime) -> RiskAssessment:
        triggered = [r for r in self.run_rules(payload, evaluated_at) if r.triggered]

        score = round(sum(r.weight for r in triggered), 4)

        return RiskAssessment(
            score=score,
            risk_level=classify_risk_level(score, self._config),
            indicators=tuple(RiskIndicator(code=str(r.code), message=r.details) for r in triggered),
        )
