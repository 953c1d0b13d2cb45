"""Exceptions raised by the risk scoring domain."""


class RiskMonitorError(Exception):
    """Base class for all domain errors."""


class MalformedPayloadError(RiskMonitorError, ValueError):
    """Message body is not a JSON object."""


class MissingIdentifierError(RiskMonitorError, ValueError):
    """Payload parsed but carries neither ``id`` nor ``transactionId``."""


class PersistenceError(RiskMonitorError):
    """A write or read against the document store failed."""


class PublishError(RiskMonitorError):
    """The submission gateway could not enqueue a transaction."""


class TransportFatalError(RiskMonitorError):
    """The Kafka transport could not be reached at startup."""


class AlertNotFoundError(RiskMonitorError, LookupError):
    def __init__(self, alert_id: str) -> None:
        super().__init__(f"Alert not found: {alert_id}")
        self.alert_id = alert_id


class MaintenanceAuthError(RiskMonitorError, PermissionError):
    """Rejected call to the bulk purge endpoint."""

    def __init__(self, status_code: int, error: str, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.error = error
        self.message = message
