"""Pydantic models for the fraud domain."""

from collections.abc import Callable
from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, model_validator
from pydantic.alias_generators import to_camel

PENDING_STATUS = "PENDING"


class RiskLevel(StrEnum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class IndicatorCode(StrEnum):
    HIGH_RISK_GEOGRAPHY = "HIGH_RISK_GEOGRAPHY"
    CVV_VERIFICATION_FAILED = "CVV_VERIFICATION_FAILED"
    ADDRESS_VERIFICATION_FAILED = "ADDRESS_VERIFICATION_FAILED"
    UNUSUAL_TRANSACTION_AMOUNT = "UNUSUAL_TRANSACTION_AMOUNT"
    HIGH_RISK_MERCHANT = "HIGH_RISK_MERCHANT"
    HIGH_RISK_MERCHANT_CATEGORY = "HIGH_RISK_MERCHANT_CATEGORY"
    SUSPICIOUS_DEVICE = "SUSPICIOUS_DEVICE"
    VPN_OR_PROXY_DETECTED = "VPN_OR_PROXY_DETECTED"
    CARD_TESTING_PATTERN = "CARD_TESTING_PATTERN"
    NEW_ACCOUNT_RISK = "NEW_ACCOUNT_RISK"
    UNUSUAL_TRANSACTION_TIME = "UNUSUAL_TRANSACTION_TIME"


class ProcessingStatus(StrEnum):
    SUCCESS = "success"
    DISCARDED = "discarded"
    FAILED = "failed"


class CamelModel(BaseModel):
    """Serialises with camelCase keys, accepts either spelling on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Inbound payload
# ---------------------------------------------------------------------------


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def _is_integral(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, int) or (isinstance(value, float) and value.is_integer())


def _is_str(value: Any) -> bool:
    return isinstance(value, str)


def _is_bool(value: Any) -> bool:
    return isinstance(value, bool)


def _is_dict(value: Any) -> bool:
    return isinstance(value, dict)


def _is_identifier(value: Any) -> bool:
    return isinstance(value, str) or _is_integral(value)


def _drop_mistyped(
    model: type[BaseModel], data: Any, checks: dict[str, Callable[[Any], bool]]
) -> Any:
    """Null out fields whose JSON type is wrong so they read as absent."""
    if not isinstance(data, dict):
        return data
    cleaned = dict(data)
    for name, check in checks.items():
        info = model.model_fields[name]
        for key in {name, info.alias or name}:
            value = cleaned.get(key)
            if value is not None and not check(value):
                cleaned[key] = None
    return cleaned


class TransactionLocation(BaseModel):
    model_config = ConfigDict(extra="allow")

    risk: str | None = None
    country: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _clean(cls, data: Any) -> Any:
        return _drop_mistyped(cls, data, {"risk": _is_str, "country": _is_str})


_PAYLOAD_CHECKS: dict[str, Callable[[Any], bool]] = {
    "id": _is_identifier,
    "transaction_id": _is_identifier,
    "account_id": _is_identifier,
    "amount": _is_number,
    "merchant": _is_str,
    "category": _is_str,
    "location": _is_dict,
    "cvv_match": _is_bool,
    "avs_match": _is_bool,
    "device": _is_str,
    "is_vpn": _is_bool,
    "is_tor": _is_bool,
    "previous_declines": _is_integral,
    "account_age": _is_number,
}


class TransactionPayload(CamelModel):
    """A transaction event as it arrives on the channel.

    Every field is optional. A field carrying the wrong JSON type is treated
    as absent, so the rule that reads it does not fire. Unknown fields are
    kept, and :attr:`raw` returns the untouched original document.
    """

    model_config = ConfigDict(extra="allow")

    id: str | None = None
    transaction_id: str | None = None
    account_id: str | None = None
    amount: float | None = None
    merchant: str | None = None
    category: str | None = None
    location: TransactionLocation | None = None
    cvv_match: bool | None = None
    avs_match: bool | None = None
    device: str | None = None
    is_vpn: bool | None = Field(default=None, alias="isVPN")
    is_tor: bool | None = Field(default=None, alias="isTor")
    previous_declines: int | None = None
    account_age: float | None = None
    timestamp: Any = None

    _raw: dict[str, Any] = PrivateAttr(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _clean(cls, data: Any) -> Any:
        data = _drop_mistyped(cls, data, _PAYLOAD_CHECKS)
        if isinstance(data, dict):
            for key in ("id", "transaction_id", "transactionId", "account_id", "accountId"):
                value = data.get(key)
                if _is_integral(value):
                    data[key] = str(int(value)) if value else None
            for key in ("previous_declines", "previousDeclines"):
                if _is_integral(data.get(key)):
                    data[key] = int(data[key])
        return data

    @classmethod
    def from_raw(cls, data: dict[str, Any]) -> "TransactionPayload":
        payload = cls.model_validate(data)
        payload._raw = dict(data)
        return payload

    @property
    def identifier(self) -> str | None:
        """``id`` wins over ``transactionId``; empty values count as missing."""
        return self.id or self.transaction_id or None

    @property
    def raw(self) -> dict[str, Any]:
        if self._raw:
            return dict(self._raw)
        return self.model_dump(by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# Scoring output
# ---------------------------------------------------------------------------


class RuleResult(BaseModel):
    rule_name: str
    triggered: bool
    weight: float = 0.0
    code: IndicatorCode | None = None
    details: str = ""
    category: str = ""


class RiskIndicator(CamelModel):
    model_config = ConfigDict(frozen=True)

    code: str
    message: str


class RiskAssessment(CamelModel):
    model_config = ConfigDict(frozen=True)

    score: float = Field(ge=0.0)
    risk_level: RiskLevel
    indicators: tuple[RiskIndicator, ...] = ()


# ---------------------------------------------------------------------------
# Persisted documents
# ---------------------------------------------------------------------------


class StoredTransaction(CamelModel):
    transaction_id: str
    account_id: str | None = None
    amount: float | None = None
    merchant: str | None = None
    category: str | None = None
    location: dict[str, Any] | None = None
    ml_score: float
    risk_level: RiskLevel
    fraud_indicators: list[str] = []
    timestamp: datetime


class Alert(CamelModel):
    alert_id: str
    transaction_id: str
    transaction: dict[str, Any]
    ml_score: dict[str, float]
    risk_level: RiskLevel
    reasons: list[RiskIndicator] = []
    status: str = PENDING_STATUS
    assigned_to: str | None = None
    reviewed_at: datetime | None = None
    action: str | None = None
    comments: str | None = None
    created_at: datetime


# ---------------------------------------------------------------------------
# Pipeline, gateway and API models
# ---------------------------------------------------------------------------


class ProcessingOutcome(BaseModel):
    """Result of handling one consumed message."""

    status: ProcessingStatus
    reason: str = ""
    transaction_id: str | None = None
    assessment: RiskAssessment | None = None
    alert_id: str | None = None

    @classmethod
    def succeeded(
        cls, transaction_id: str, assessment: RiskAssessment, alert_id: str | None = None
    ) -> "ProcessingOutcome":
        return cls(
            status=ProcessingStatus.SUCCESS,
            transaction_id=transaction_id,
            assessment=assessment,
            alert_id=alert_id,
        )

    @classmethod
    def discarded(cls, reason: str) -> "ProcessingOutcome":
        return cls(status=ProcessingStatus.DISCARDED, reason=reason)

    @classmethod
    def failed(cls, reason: str, transaction_id: str | None = None) -> "ProcessingOutcome":
        return cls(status=ProcessingStatus.FAILED, reason=reason, transaction_id=transaction_id)


class SubmissionAck(CamelModel):
    topic: str
    transaction_id: str | None = None
    submitted_at: datetime


class AlertReview(CamelModel):
    action: str
    comments: str | None = None
    assigned_to: str | None = None


class RiskStats(CamelModel):
    total_transactions: int
    total_alerts: int
    critical_alerts: int
    pending_alerts: int
    alert_rate: str


class CleanupRequest(BaseModel):
    # Any JSON value is accepted; the gate decides whether it is a credential
    password: Any = None


class PurgeResult(BaseModel):
    deleted_transactions: int
    deleted_alerts: int
    remaining_transactions: int
    remaining_alerts: int
