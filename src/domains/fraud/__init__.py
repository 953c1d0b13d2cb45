"""Transaction risk scoring domain."""

from .config import FraudConfig, default_config
from .models import (
    PENDING_STATUS,
    Alert,
    ProcessingOutcome,
    ProcessingStatus,
    RiskAssessment,
    RiskIndicator,
    RiskLevel,
    StoredTransaction,
    TransactionPayload,
)
from .rules import ALL_RULES
from .rules_engine import RulesEngine, classify_risk_level

__all__ = [
    "ALL_RULES",
    "PENDING_STATUS",
    "Alert",
    "FraudConfig",
    "ProcessingOutcome",
    "ProcessingStatus",
    "RiskAssessment",
    "RiskIndicator",
    "RiskLevel",
    "RulesEngine",
    "StoredTransaction",
    "TransactionPayload",
    "classify_risk_level",
    "default_config",
]
