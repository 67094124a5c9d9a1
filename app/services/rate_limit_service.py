"""
Rate limit stores for the contact form.

Fixed-window counters keyed by the caller's source address. A counter is
created on the first hit from an address and starts over once its window
has elapsed.
"""

import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Protocol

import redis

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateLimitResult:
    """Outcome of counting one hit.

    Attributes:
        allowed: False once the hit count exceeds the limit for the window
        count: Hits recorded in the current window, this one included
        limit: Hits allowed per window
        retry_after_seconds: Seconds until the current window resets
    """
    allowed: bool
    count: int
    limit: int
    retry_after_seconds: int


class RateLimitStore(Protocol):
    def hit(self, key: str) -> RateLimitResult: ...

    def reset(self, key: Optional[str] = None) -> None: ...


@dataclass
class _Counter:
    count: int
    window_start: float


class InMemoryRateLimitStore:
    """Process-local counter store guarded by a lock."""

    def __init__(
        self,
        window_seconds: int = 15 * 60,
        max_hits: int = 5,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.window_seconds = window_seconds
        self.max_hits = max_hits
        self._clock = clock
        self._counters: Dict[str, _Counter] = {}
        self._lock = threading.Lock()

    def hit(self, key: str) -> RateLimitResult:
        with self._lock:
            now = self._clock()
            counter = self._counters.get(key)
            if counter is None or now - counter.window_start >= self.window_seconds:
                counter = _Counter(count=0, window_start=now)
                self._counters[key] = counter
            counter.count += 1

            # drop other expired windows so the dict does not grow forever
            if len(self._counters) > 1024:
                self._purge_expired(now)

            remaining = self.window_seconds - (now - counter.window_start)
            return RateLimitResult(
                allowed=counter.count <= self.max_hits,
                count=counter.count,
                limit=self.max_hits,
                retry_after_seconds=max(1, math.ceil(remaining)),
            )

    def reset(self, key: Optional[str] = None) -> None:
        with self._lock:
            if key is None:
                self._counters.clear()
            else:
                self._counters.pop(key, None)

    def _purge_expired(self, now: float) -> None:
        expired = [
            k for k, c in self._counters.items()
            if now - c.window_start >= self.window_seconds
        ]
        for k in expired:
            del self._counters[k]


class RedisRateLimitStore:
    """Counter store shared between processes through Redis.

    INCR is atomic, so concurrent hits for one address are never lost. The
    key expiry is set when the counter is created and marks the window end.
    """

    def __init__(
        self,
        client: "redis.Redis",
        window_seconds: int = 15 * 60,
        max_hits: int = 5,
        prefix: str = "contact-rate-limit:",
    ):
        self.client = client
        self.window_seconds = window_seconds
        self.max_hits = max_hits
        self.prefix = prefix

    def hit(self, key: str) -> RateLimitResult:
        redis_key = f"{self.prefix}{key}"
        count = int(self.client.incr(redis_key))
        if count == 1:
            self.client.expire(redis_key, self.window_seconds)
            ttl = self.window_seconds
        else:
            ttl = int(self.client.ttl(redis_key))
            if ttl < 0:
                # key lost its expiry, start a fresh window
                self.client.expire(redis_key, self.window_seconds)
                ttl = self.window_seconds

        return RateLimitResult(
            allowed=count <= self.max_hits,
            count=count,
            limit=self.max_hits,
            retry_after_seconds=max(1, ttl),
        )

    def reset(self, key: Optional[str] = None) -> None:
        if key is not None:
            self.client.delete(f"{self.prefix}{key}")
            return
        for redis_key in self.client.scan_iter(match=f"{self.prefix}*"):
            self.client.delete(redis_key)


def build_rate_limit_store(config) -> RateLimitStore:
    """Create the rate limit store selected by RATE_LIMIT_BACKEND."""
    if config.RATE_LIMIT_BACKEND == "redis":
        logger.info(f"Using Redis rate limit store at {config.REDIS_HOST}:{config.REDIS_PORT}")
        client = redis.Redis(host=config.REDIS_HOST, port=config.REDIS_PORT, decode_responses=True)
        return RedisRateLimitStore(
            client,
            window_seconds=config.RATE_LIMIT_WINDOW_SECONDS,
            max_hits=config.RATE_LIMIT_MAX_SUBMISSIONS,
        )

    if config.RATE_LIMIT_BACKEND != "memory":
        raise ValueError(f"Unknown RATE_LIMIT_BACKEND: {config.RATE_LIMIT_BACKEND}")

    return InMemoryRateLimitStore(
        window_seconds=config.RATE_LIMIT_WINDOW_SECONDS,
        max_hits=config.RATE_LIMIT_MAX_SUBMISSIONS,
    )
