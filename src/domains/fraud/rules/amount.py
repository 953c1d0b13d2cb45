"""Amount-based risk rules."""

from datetime import datetime

from ..config import FraudConfig
from ..models import IndicatorCode, RuleResult, TransactionPayload
from .base import FraudRule


def format_amount(amount: float) -> str:
    """Group thousands, drop the fraction for whole amounts (150000 -> 150,000)."""
    if float(amount).is_integer():
        return f"{int(amount):,}"
    return f"{amount:,.2f}".rstrip("0").rstrip(".")


class UnusualAmountRule(FraudRule):
    """Two exclusive tiers: high above ``high_amount_min``, medium above
    ``medium_amount_min`` up to and including ``high_amount_min``."""

    rule_id = "unusual_amount"
    code = IndicatorCode.UNUSUAL_TRANSACTION_AMOUNT
    category = "amount"

    def evaluate(
        self,
        payload: TransactionPayload,
        evaluated_at: datetime,
        config: FraudConfig,
    ) -> RuleResult:
        amount = payload.amount
        if amount is None:
            return self._not_triggered()

        symbol = config.amount.currency_symbol
        if amount > config.amount.high_amount_min:
            return self._triggered(
                weight=config.weights.high_amount,
                details=f"High amount: {symbol}{format_amount(amount)}",
            )
        if amount > config.amount.medium_amount_min:
            return self._triggered(
                weight=config.weights.medium_amount,
                details=f"Medium amount: {symbol}{format_amount(amount)}",
            )
        return self._not_triggered()
