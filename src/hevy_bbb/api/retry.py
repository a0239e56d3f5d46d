"""
Bounded retry with backoff.

Attempting → Success | Retryable(wait) → Attempting | Fatal.
Independent of the HTTP client: the caller supplies the operation, the
retryability predicate, and the backoff schedule.
"""

import logging
import time
from typing import Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

RATE_LIMIT_MARKERS = ("429", "rate limit")


def is_rate_limit_error(error: Exception) -> bool:
    """True when the error text mentions a 429 or a rate limit (case-sensitive)."""
    if error is None:
        return False
    text = str(error)
    return any(marker in text for marker in RATE_LIMIT_MARKERS)


def exponential_backoff(base: float = 10) -> Callable[[int], float]:
    """Delay before attempt n (1-indexed retries): base * 2**n → 20, 40, 80, 160 for base 10."""
    def delay(attempt: int) -> float:
        return base * (2 ** attempt)
    return delay


def retry(
    operation: Callable[[], T],
    *,
    attempts: int = 5,
    is_retryable: Callable[[Exception], bool] = is_rate_limit_error,
    backoff: Callable[[int], float] = None,
    sleep: Callable[[float], None] = time.sleep,
    on_retry: Optional[Callable[[int, float, Exception], None]] = None,
) -> T:
    """Run operation up to `attempts` times.

    Sleeps backoff(n) before attempt n (n ≥ 1). Stops at the first success
    or the first error the predicate rejects.

    Raises:
        The last error, once it is fatal or attempts run out.
    """
    if attempts < 1:
        raise ValueError("attempts must be >= 1")
    backoff = backoff or exponential_backoff()

    last_error: Optional[Exception] = None
    for attempt in range(attempts):
        if attempt > 0:
            delay = backoff(attempt)
            if on_retry is not None:
                on_retry(attempt, delay, last_error)
            sleep(delay)
        try:
            return operation()
        except Exception as e:
            last_error = e
            if not is_retryable(e):
                raise

    raise last_error
