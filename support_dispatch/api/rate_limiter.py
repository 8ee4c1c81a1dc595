"""
Fixed-window rate limiter keyed by client address.
"""

import math
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from fastapi import Request
from loguru import logger

from support_dispatch.config.settings import settings
from support_dispatch.utils.errors import RateLimitExceeded


@dataclass
class _Window:
    count: int
    reset_at: float  # seconds on the limiter's clock


def client_key(request: Request) -> str:
    """First X-Forwarded-For entry, then X-Real-IP, then "unknown"."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    return request.headers.get("x-real-ip") or "unknown"


class FixedWindowRateLimiter:
    """
    Counts requests per key in fixed windows.

    Every request in a window counts, rejected ones included. Expired windows
    are evicted lazily on the next hit.
    """

    def __init__(
        self,
        window_ms: Optional[int] = None,
        max_requests: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.window = (window_ms or settings.rate_limit_window_ms) / 1000
        self.max_requests = max_requests or settings.rate_limit_max
        self.clock = clock
        self._windows: Dict[str, _Window] = {}

    def _evict_expired(self, now: float) -> None:
        expired = [key for key, w in self._windows.items() if now > w.reset_at]
        for key in expired:
            del self._windows[key]

    def hit(self, key: str) -> None:
        """
        Record a request for key.

        Raises:
            RateLimitExceeded: key is over its budget for the current window
        """
        now = self.clock()
        self._evict_expired(now)

        window = self._windows.get(key)
        if window is None:
            self._windows[key] = _Window(count=1, reset_at=now + self.window)
            return

        window.count += 1
        if window.count > self.max_requests:
            retry_after = max(1, math.ceil(window.reset_at - now))
            logger.warning(f"Rate limit exceeded for {key} (retry in {retry_after}s)")
            raise RateLimitExceeded(retry_after=retry_after)

    async def __call__(self, request: Request) -> None:
        """FastAPI dependency"""
        self.hit(client_key(request))


async def enforce_rate_limit(request: Request) -> None:
    """Router dependency that applies the app's limiter."""
    await request.app.state.rate_limiter(request)
