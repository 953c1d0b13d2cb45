"""Behavioural pattern rules: card testing, account age, time of day."""

from datetime import datetime
from zoneinfo import ZoneInfo

from ..config import FraudConfig
from ..models import IndicatorCode, RuleResult, TransactionPayload
from .base import FraudRule


def local_hour(evaluated_at: datetime, timezone_name: str | None) -> int:
    """Hour of day in the risk timezone. Naive datetimes are already local."""
    if evaluated_at.tzinfo is None:
        return evaluated_at.hour
    if timezone_name:
        return evaluated_at.astimezone(ZoneInfo(timezone_name)).hour
    return evaluated_at.astimezone().hour


class CardTestingRule(FraudRule):
    """Repeated recent declines are the classic card-testing signature."""

    rule_id = "card_testing"
    code = IndicatorCode.CARD_TESTING_PATTERN
    category = "patterns"

    def evaluate(
        self,
        payload: TransactionPayload,
        evaluated_at: datetime,
        config: FraudConfig,
    ) -> RuleResult:
        declines = payload.previous_declines
        if declines is None or declines < config.patterns.card_testing_min_declines:
            return self._not_triggered()

        return self._triggered(
            weight=config.weights.card_testing,
            details=f"Previous declines: {declines}",
        )


class NewAccountRule(FraudRule):
    rule_id = "new_account"
    code = IndicatorCode.NEW_ACCOUNT_RISK
    category = "patterns"

    def evaluate(
        self,
        payload: TransactionPayload,
        evaluated_at: datetime,
        config: FraudConfig,
    ) -> RuleResult:
        age = payload.account_age
        if age is None or age >= config.patterns.new_account_max_age_days:
            return self._not_triggered()

        return self._triggered(weight=config.weights.new_account, details="New account risk")


class UnusualHourRule(FraudRule):
    """Triggers for night-time activity: at or after 23:00, at or before 05:59."""

    rule_id = "unusual_hour"
    code = IndicatorCode.UNUSUAL_TRANSACTION_TIME
    category = "patterns"

    def evaluate(
        self,
        payload: TransactionPayload,
        evaluated_at: datetime,
        config: FraudConfig,
    ) -> RuleResult:
        hour = local_hour(evaluated_at, config.patterns.risk_timezone)
        if config.patterns.night_end_hour < hour < config.patterns.night_start_hour:
            return self._not_triggered()

        return self._triggered(weight=config.weights.unusual_time, details="Night-time transaction")
