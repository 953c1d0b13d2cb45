"""Risk rules package.

Exports ALL_RULES (list of all rule instances, in evaluation order) and the
individual rule classes for direct use. Indicator order in an assessment
follows this list.
"""

from .amount import UnusualAmountRule, format_amount
from .base import FraudRule
from .device import SuspiciousDeviceRule
from .geo import AnonymizingNetworkRule, HighRiskGeographyRule
from .merchant import HighRiskCategoryRule, HighRiskMerchantRule
from .patterns import CardTestingRule, NewAccountRule, UnusualHourRule, local_hour
from .verification import AddressVerificationRule, CvvVerificationRule

# All rule instances in evaluation order
ALL_RULES: list[FraudRule] = [
    HighRiskGeographyRule(),
    CvvVerificationRule(),
    AddressVerificationRule(),
    UnusualAmountRule(),
    HighRiskMerchantRule(),
    HighRiskCategoryRule(),
    SuspiciousDeviceRule(),
    AnonymizingNetworkRule(),
    CardTestingRule(),
    NewAccountRule(),
    UnusualHourRule(),
]

__all__ = [
    "ALL_RULES",
    "FraudRule",
    "format_amount",
    "local_hour",
    # Geo
    "HighRiskGeographyRule",
    "AnonymizingNetworkRule",
    # Verification
    "CvvVerificationRule",
    "AddressVerificationRule",
    # Amount
    "UnusualAmountRule",
    # Merchant
    "HighRiskMerchantRule",
    "HighRiskCategoryRule",
    # Device
    "SuspiciousDeviceRule",
    # Patterns
    "CardTestingRule",
    "NewAccountRule",
    "UnusualHourRule",
]
