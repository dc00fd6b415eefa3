"""
Fixed-window rate limiting for import-like endpoints.

Each identity gets a counter and the time its window opened. The counter
resets once more than `window_seconds` have passed since then; it is not a
sliding window. State lives in process memory: one limiter per process,
created in the app lifespan, not shared between server instances.
"""

import logging
import math
import time
from dataclasses import dataclass
from threading import Lock
from typing import Callable

from fastapi import Depends, Request

from taskee.dependencies import Actor, get_current_actor
from taskee.errors import RateLimited

logger = logging.getLogger(__name__)


@dataclass
class RateBucket:
    count: int
    window_start: float


class FixedWindowRateLimiter:
    def __init__(self, limit: int = 5, window_seconds: float = 60, clock: Callable[[], float] = time.monotonic):
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._buckets: dict[str, RateBucket] = {}
        self._lock = Lock()

    def hit(self, key: str) -> int:
        """Count one request for `key`. Returns the requests left in the window.

        Raises RateLimited, carrying the seconds until the window resets.
        """
        with self._lock:
            now = self._clock()
            bucket = self._buckets.get(key)

            if bucket is None or now - bucket.window_start > self.window_seconds:
                self._buckets[key] = RateBucket(count=1, window_start=now)
                return self.limit - 1

            if bucket.count >= self.limit:
                elapsed = now - bucket.window_start
                retry_after = max(1, math.ceil(self.window_seconds - elapsed))
                logger.warning("Rate limit exceeded for %s (%d/%d)", key, bucket.count, self.limit)
                raise RateLimited(retry_after)

            bucket.count += 1
            return self.limit - bucket.count


def identity_key(request: Request, actor: Actor | None) -> str:
    if actor is not None:
        return f"user:{actor.user_id}"
    if request.client and request.client.host:
        return f"ip:{request.client.host}"
    return "anonymous"


def get_import_rate_limiter(request: Request) -> FixedWindowRateLimiter:
    return request.app.state.import_rate_limiter


def import_rate_limit(
    request: Request,
    actor: Actor = Depends(get_current_actor),
    limiter: FixedWindowRateLimiter = Depends(get_import_rate_limiter),
) -> None:
    """FastAPI dependency guarding import endpoints."""
    remaining = limiter.hit(identity_key(request, actor))
    request.state.rate_limit_remaining = remaining
