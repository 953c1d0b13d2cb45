"""Statistical distribution helpers for realistic data generation."""

import numpy as np


def log_normal_sample(
    rng: np.random.Generator,
    mean: float,
    std: float,
    min_val: float = 0.01,
    max_val: float | None = None,
) -> float:
    value = float(rng.lognormal(mean, std))
    value = max(value, min_val)
    if max_val is not None:
        value = min(value, max_val)
    return value


def account_age_days(rng: np.random.Generator, mean_days: float) -> int:
    """Account ages are heavily right-skewed: most accounts are old."""
    return int(rng.exponential(mean_days))


def decline_count(rng: np.random.Generator, rate: float) -> int:
    return int(rng.poisson(rate))


def is_night_hour(hour: int, start: int = 23, end: int = 5) -> bool:
    return hour >= start or hour <= end
