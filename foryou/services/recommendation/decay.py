import math
import time

from foryou.core.constants import MS_PER_DAY


def now_ms() -> float:
    """Current time as epoch milliseconds."""
    return time.time() * 1000


def days_since(timestamp: float, now: float | None = None) -> float:
    """Elapsed days between an epoch-ms timestamp and now, never negative (clock skew, future saves)."""
    current = now_ms() if now is None else now
    return max(0.0, (current - timestamp) / MS_PER_DAY)


def recency_score(days: float, decay_days: float) -> float:
    """
    Exponential decay in (0, 1]: 1.0 at zero elapsed days, exp(-1) after one horizon.
    A non-positive horizon disables recency and yields 0.
    """
    if decay_days <= 0:
        return 0.0
    return math.exp(-days / decay_days)
