"""
Confidence Decay Module

Older transactions count for less: stored confidence decays exponentially
with a configurable half-life (one year by default).
"""

import math
import time

from .models import clamp
from .settings import get_settings

MILLIS_PER_DAY = 1000.0 * 60 * 60 * 24


def _now_millis() -> int:
    return int(time.time() * 1000)


def _decay_rate(half_life_days: float | None) -> float:
    # Non-positive overrides fall back to the configured half-life
    if half_life_days is not None and half_life_days > 0:
        half_life = half_life_days
    else:
        half_life = get_settings().confidence_half_life_days
    return math.log(2.0) / half_life


def decay_factor(days: float, half_life_days: float | None = None) -> float:
    """Decay factor after a number of days, in [0, 1].

    Future dates (negative days) do not boost confidence, and very old
    dates underflow to 0.0 rather than raising.
    """
    if math.isnan(days):
        return 0.0
    elapsed = max(days, 0.0)
    return clamp(math.exp(-_decay_rate(half_life_days) * elapsed))


def days_since(transaction_timestamp: int, now: int | None = None) -> float:
    """Days elapsed between an epoch-millisecond timestamp and now."""
    now = _now_millis() if now is None else now
    return (now - transaction_timestamp) / MILLIS_PER_DAY


def effective_confidence(
    base_confidence: float,
    transaction_timestamp: int,
    now: int | None = None,
    half_life_days: float | None = None
) -> float:
    """Confidence of a stored transaction after time decay.

    Args:
        base_confidence: Confidence recorded at capture time
        transaction_timestamp: Transaction time in epoch milliseconds
        now: Reference time in epoch milliseconds (defaults to current time)
        half_life_days: Override for the configured half-life

    Returns:
        Effective confidence between 0.0 and 1.0
    """
    factor = decay_factor(days_since(transaction_timestamp, now), half_life_days)
    return clamp(base_confidence * factor)


def is_confidence_valid(
    base_confidence: float,
    transaction_timestamp: int,
    threshold: float = 0.5,
    now: int | None = None,
    half_life_days: float | None = None
) -> bool:
    """Check whether decayed confidence is still at or above a threshold."""
    effective = effective_confidence(base_confidence, transaction_timestamp, now, half_life_days)
    return effective >= threshold
