"""In-memory storage for rate limiting counters.

This module provides a thread-safe in-memory storage for tracking rate limit
tokens using a token bucket algorithm. A limit of ``max_requests`` per
``window_seconds`` maps to a bucket of that capacity refilled at
one token every ``window_seconds / max_requests`` seconds.
"""

import time
from dataclasses import dataclass
from threading import Lock


@dataclass
class TokenBucket:
    """Token bucket for a specific key (limiter name and client IP)."""

    tokens: float
    last_updated: float


class RateLimitStorage:
    """Thread-safe in-memory storage for rate limit counters."""

    def __init__(self, cleanup_interval: int = 3600):
        """Initialize storage.

        Args:
            cleanup_interval: Interval in seconds to clean up stale entries.
        """
        self._storage: dict[str, TokenBucket] = {}
        self._lock = Lock()
        self._last_cleanup = time.time()
        self._cleanup_interval = cleanup_interval

    def consume(
        self, key: str, max_requests: int, window_seconds: float
    ) -> tuple[bool, int, float]:
        """Attempt to consume a token for the given key.

        Args:
            key: The unique bucket key.
            max_requests: Bucket capacity (requests allowed per window).
            window_seconds: Time for an empty bucket to refill completely.

        Returns:
            A tuple of (is_allowed, remaining_tokens, retry_or_reset_seconds).
            When denied, the last element is the wait until one token is back.
        """
        now = time.time()
        capacity = float(max(1, max_requests))
        seconds_per_token = window_seconds / capacity

        with self._lock:
            if now - self._last_cleanup > self._cleanup_interval:
                self._cleanup_stale(now, window_seconds)

            bucket = self._storage.get(key)

            if bucket is None:
                # First request consumes one token right away
                bucket = TokenBucket(tokens=capacity - 1.0, last_updated=now)
                self._storage[key] = bucket
                return True, int(bucket.tokens), seconds_per_token

            elapsed = now - bucket.last_updated
            bucket.tokens = min(capacity, bucket.tokens + elapsed / seconds_per_token)
            bucket.last_updated = now

            if bucket.tokens >= 1.0:
                bucket.tokens -= 1.0
                reset_seconds = (capacity - bucket.tokens) * seconds_per_token
                return True, int(bucket.tokens), reset_seconds

            wait_seconds = (1.0 - bucket.tokens) * seconds_per_token
            return False, 0, wait_seconds

    def reset(self) -> None:
        """Drop all buckets."""
        with self._lock:
            self._storage.clear()

    def _cleanup_stale(self, now: float, window_seconds: float) -> None:
        """Remove buckets untouched for longer than the cleanup interval or window."""
        stale_threshold = max(self._cleanup_interval, window_seconds)
        to_delete = [
            k for k, v in self._storage.items()
            if now - v.last_updated > stale_threshold
        ]
        for k in to_delete:
            del self._storage[k]
        self._last_cleanup = now


# Global instance
rate_limit_storage = RateLimitStorage()
