"""Synthetic transaction payload generator with risky-signal injection."""

import random
from datetime import UTC, datetime, timedelta
from typing import Any

import numpy as np

from .utils.distributions import account_age_days, decline_count, is_night_hour, log_normal_sample
from .utils.geography import (
    location_to_payload,
    random_domestic_location,
    random_high_risk_location,
)

DEFAULT_CONFIG: dict[str, Any] = {
    "num_accounts": 200,
    "time_span_days": 30,
    "risky_injection_rate": 0.1,
    "amount_distribution": {"log_normal_mean": 8.0, "log_normal_std": 1.3},
    "account_age_mean_days": 400,
    "merchants": ["Corner Grocery", "City Fuel", "Metro Pharmacy", "BookNook", "Cafe Chai"],
    "categories": ["GROCERIES", "FUEL", "HEALTH", "RETAIL", "DINING"],
    "devices": ["iPhone 15", "Pixel 8", "Galaxy S24", "Chrome on Windows", "Safari on macOS"],
}

RISKY_MERCHANTS = [
    "CRYPTO_EXCHANGE_ALPHA",
    "OFFSHORE_CASINO_77",
    "UNKNOWN_MERCHANT",
    "HIGH_RISK_VENDOR_X",
]
RISKY_CATEGORIES = ["GAMBLING", "CRYPTO", "WIRE_TRANSFER", "GIFT_CARDS"]
RISKY_DEVICES = ["Emulator", "Unknown Device", "Rooted Android", "Jailbroken iPhone"]

# Each injector flips one payload field to its risky value
RISK_SIGNALS = (
    "geography",
    "cvv",
    "avs",
    "amount",
    "merchant",
    "category",
    "device",
    "vpn",
    "declines",
    "new_account",
    "night",
)


class TransactionGenerator:
    """Seeded generator of flat transaction payloads.

    Both ``random`` and a numpy Generator are seeded so a given seed and
    config always yield the same stream.
    """

    def __init__(self, config: dict[str, Any] | None = None, seed: int = 42):
        self.config = {**DEFAULT_CONFIG, **(config or {})}
        self.seed = seed
        random.seed(seed)
        self.rng = np.random.default_rng(seed)

    def generate(self, num_transactions: int = 1000) -> list[dict[str, Any]]:
        config = self.config
        base_time = datetime(2026, 1, 1, tzinfo=UTC)
        end_time = base_time + timedelta(days=config["time_span_days"])

        accounts = [
            {
                "account_id": f"ACC{n:06d}",
                "age": account_age_days(self.rng, config["account_age_mean_days"]),
                "device": random.choice(config["devices"]),
            }
            for n in range(config["num_accounts"])
        ]

        payloads = []
        for _ in range(num_transactions):
            account = random.choice(accounts)
            payload = self._clean_payload(account, base_time, end_time)
            if random.random() < config["risky_injection_rate"]:
                signals = random.sample(RISK_SIGNALS, k=random.randint(2, 5))
                self._inject(payload, signals)
            payloads.append(payload)

        payloads.sort(key=lambda p: p["timestamp"])
        return payloads

    def _transaction_id(self) -> str:
        return f"TXN{random.getrandbits(64):016X}"

    def _daytime(self, start: datetime, end: datetime) -> datetime:
        """Random instant between start and end outside the night window."""
        span = max(1, int((end - start).total_seconds()))
        txn_time = start + timedelta(seconds=random.randint(0, span))
        while is_night_hour(txn_time.hour):
            txn_time = start + timedelta(seconds=random.randint(0, span))
        return txn_time

    @staticmethod
    def _money(value: float) -> float:
        return round(float(value), 2)

    def _clean_payload(
        self, account: dict[str, Any], start: datetime, end: datetime
    ) -> dict[str, Any]:
        amount_dist = self.config["amount_distribution"]
        txn_time = self._daytime(start, end)

        return {
            "id": self._transaction_id(),
            "accountId": account["account_id"],
            "amount": self._money(
                log_normal_sample(
                    self.rng,
                    amount_dist["log_normal_mean"],
                    amount_dist["log_normal_std"],
                    min_val=10.0,
                    max_val=45_000.0,
                )
            ),
            "merchant": random.choice(self.config["merchants"]),
            "category": random.choice(self.config["categories"]),
            "location": location_to_payload(random_domestic_location()),
            "cvvMatch": True,
            "avsMatch": True,
            "device": account["device"],
            "isVPN": False,
            "isTor": False,
            "previousDeclines": min(decline_count(self.rng, 0.2), 2),
            "accountAge": max(account["age"], 30),
            "timestamp": txn_time.isoformat(),
        }

    def _inject(self, payload: dict[str, Any], signals: list[str]) -> None:
        for signal in signals:
            if signal == "geography":
                payload["location"] = location_to_payload(random_high_risk_location())
            elif signal == "cvv":
                payload["cvvMatch"] = False
            elif signal == "avs":
                payload["avsMatch"] = False
            elif signal == "amount":
                payload["amount"] = self._money(random.uniform(50_001, 250_000))
            elif signal == "merchant":
                payload["merchant"] = random.choice(RISKY_MERCHANTS)
            elif signal == "category":
                payload["category"] = random.choice(RISKY_CATEGORIES)
            elif signal == "device":
                payload["device"] = random.choice(RISKY_DEVICES)
            elif signal == "vpn":
                payload["isVPN"] = True
                payload["isTor"] = random.random() < 0.3
            elif signal == "declines":
                payload["previousDeclines"] = random.randint(3, 9)
            elif signal == "new_account":
                payload["accountAge"] = random.randint(0, 29)
            elif signal == "night":
                ts = datetime.fromisoformat(payload["timestamp"])
                night = ts.replace(hour=random.choice([23, 0, 1, 2, 3, 4, 5]))
                payload["timestamp"] = night.isoformat()
        payload["injectedSignals"] = sorted(signals)
