"""
Fixed-window rate limiting.

Tracks attempt counts per key inside fixed time windows. Used to guard
login-type actions against credential stuffing.

Buckets live in process memory. Each consume() is an atomic
check-and-increment under a lock, so concurrent attempts against the same
key never both slip under the limit. Stale buckets are reclaimed by
reap_expired(), which the API lifespan calls periodically.
"""

import logging
import math
import time
from dataclasses import dataclass
from threading import Lock
from typing import Callable, Optional

logger = logging.getLogger(__name__)


@dataclass
class Bucket:
    """Attempt counter for one key within one window."""

    count: int
    reset_at: float
    """Absolute end of the window (seconds since epoch)"""


@dataclass(frozen=True)
class RateLimitDecision:
    """Outcome of a single consume() call."""

    allowed: bool
    remaining: int
    reset_at: float

    def retry_after_seconds(self, now: Optional[float] = None) -> int:
        """
        Whole seconds the caller should wait before retrying.

        Always at least 1.
        """
        now = time.time() if now is None else now
        return max(1, math.ceil(self.reset_at - now))


def rate_limit_key(action: str, client_ip: str, identifier: str) -> str:
    """
    Build a limiter key from the action, caller IP and attempt identifier.

    The identifier is normalized (trimmed, lowercased) so case variations of
    the same email share a bucket.
    """
    normalized = identifier.strip().lower()
    return f"{action}:{client_ip}:{normalized}"


class RateLimiter:
    """
    In-memory fixed-window rate limiter.

    Example:
        limiter = RateLimiter()
        decision = limiter.consume("admin-login:1.2.3.4:a@b.com", 8, 600)
        if not decision.allowed:
            retry_after = decision.retry_after_seconds()
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        """
        Initialize the limiter.

        Args:
            clock: Returns the current time in seconds. Injectable for tests.
        """
        self._clock = clock
        self._buckets: dict[str, Bucket] = {}
        self._lock = Lock()

    def now(self) -> float:
        """Current time according to the limiter's clock."""
        return self._clock()

    def consume(self, key: str, max_attempts: int, window_seconds: float) -> RateLimitDecision:
        """
        Record one attempt for key and decide whether it is allowed.

        Args:
            key: Limiter key, usually from rate_limit_key()
            max_attempts: Attempts allowed per window
            window_seconds: Window length in seconds

        Returns:
            RateLimitDecision. A rejected attempt leaves the bucket untouched.
        """
        with self._lock:
            now = self._clock()
            bucket = self._buckets.get(key)

            if bucket is None or now >= bucket.reset_at:
                reset_at = now + window_seconds
                self._buckets[key] = Bucket(count=1, reset_at=reset_at)
                return RateLimitDecision(
                    allowed=True,
                    remaining=max(0, max_attempts - 1),
                    reset_at=reset_at,
                )

            if bucket.count >= max_attempts:
                return RateLimitDecision(allowed=False, remaining=0, reset_at=bucket.reset_at)

            bucket.count += 1
            return RateLimitDecision(
                allowed=True,
                remaining=max(0, max_attempts - bucket.count),
                reset_at=bucket.reset_at,
            )

    def clear(self, key: str) -> None:
        """Drop any bucket for key (after a successful authentication)."""
        with self._lock:
            self._buckets.pop(key, None)

    def reap_expired(self, grace_seconds: float = 0.0) -> int:
        """
        Evict buckets whose window ended more than grace_seconds ago.

        Returns:
            Number of buckets evicted
        """
        with self._lock:
            cutoff = self._clock() - grace_seconds
            stale = [key for key, bucket in self._buckets.items() if bucket.reset_at <= cutoff]
            for key in stale:
                del self._buckets[key]

        if stale:
            logger.debug(f"Evicted {len(stale)} expired rate-limit bucket(s)")
        return len(stale)

    def __len__(self) -> int:
        with self._lock:
            return len(self._buckets)
