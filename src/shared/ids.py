"""Alert identifier generation."""

import secrets
import string
import time
from collections.abc import Callable

_ALPHABET = string.digits + string.ascii_lowercase


class AlertIdGenerator:
    """Produces ids of the form ``ALERT<13-digit epoch ms><random base-36>``.

    The millisecond prefix keeps ids roughly time-ordered; the random suffix
    drawn from ``secrets`` separates ids minted in the same millisecond. No
    state is shared between calls, so concurrent callers need no locking.
    Uniqueness is probabilistic: the ``alerts.alert_id`` unique index is the
    backstop.
    """

    def __init__(
        self,
        prefix: str = "ALERT",
        random_length: int = 10,
        clock_ms: Callable[[], int] | None = None,
    ) -> None:
        if random_length < 1:
            raise ValueError("random_length must be at least 1")
        self.prefix = prefix
        self.random_length = random_length
        self._clock_ms = clock_ms or (lambda: time.time_ns() // 1_000_000)

    def __call__(self) -> str:
        suffix = "".join(secrets.choice(_ALPHABET) for _ in range(self.random_length))
        return f"{self.prefix}{self._clock_ms():013d}{suffix}"
