"""In-memory fixed-window rate limiter.

Notes:
- Per-process only: running multiple workers multiplies the effective limit.
- Thread-safe: uses a lock around shared state.
- Windows are anchored at the first request of each key, not at clock
  boundaries.
"""

from __future__ import annotations

import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import Callable

from bfhl_api.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult

logger = logging.getLogger(__name__)


@dataclass
class _WindowState:
    window_start: float
    count: int


class InMemoryFixedWindowRateLimiter(AbstractRateLimiter):
    """Rate limiter using a fixed time window per key.

    A key's window opens with its first request and lasts ``window_seconds``.
    Every request inside the window increments the counter, including
    rejected ones; the request is rejected once the counter exceeds ``limit``.
    The first request after the window has elapsed starts a new window.

    Expired entries are evicted by ``sweep``, which ``consume`` also runs at
    most once per ``sweep_interval_seconds``.

    Important:
        This limiter is per-process only. If the API runs with multiple workers
        (e.g., multiple Uvicorn/Gunicorn workers), each worker will enforce its
        own independent limits.
    """

    def __init__(
        self,
        *,
        limit: int,
        window_seconds: float,
        clock: Callable[[], float] = time.time,
        sweep_interval_seconds: float | None = None,
    ) -> None:
        """Initialize the in-memory rate limiter.

        Args:
            limit: Maximum number of allowed units per window.
            window_seconds: Size of the fixed window in seconds.
            clock: Time source function returning UNIX time in seconds.
            sweep_interval_seconds: Minimum delay between automatic sweeps of
                expired entries (defaults to five windows).

        Raises:
            ValueError: If limit, window_seconds or sweep interval are invalid.
        """
        if limit < 1:
            raise ValueError("limit must be >= 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be > 0")
        if sweep_interval_seconds is not None and sweep_interval_seconds <= 0:
            raise ValueError("sweep_interval_seconds must be > 0")

        self._limit = limit
        self._window_seconds = window_seconds
        self._clock = clock
        self._sweep_interval = sweep_interval_seconds or window_seconds * 5
        self._lock = threading.RLock()
        self._state_by_key: dict[str, _WindowState] = {}
        self._last_sweep = clock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._state_by_key)

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def window_seconds(self) -> float:
        return self._window_seconds

    def _is_expired(self, state: _WindowState, now: float) -> bool:
        return now - state.window_start > self._window_seconds

    def sweep(self, now: float | None = None) -> int:
        """Drop every key whose window has elapsed.

        Args:
            now: UNIX time in seconds; defaults to the limiter clock.

        Returns:
            Number of evicted keys.
        """
        if now is None:
            now = self._clock()

        with self._lock:
            expired = [
                key for key, state in self._state_by_key.items()
                if self._is_expired(state, now)
            ]
            for key in expired:
                del self._state_by_key[key]
            self._last_sweep = now

        if expired:
            logger.debug(
                "rate_limit.swept",
                extra={"evicted": len(expired), "tracked": len(self._state_by_key)},
            )
        return len(expired)

    def consume(self, key: str, *, cost: int = 1) -> RateLimitResult:
        """Consume rate limit budget for the provided key.

        Args:
            key: Unique identifier for rate limiting (e.g., client address).
            cost: Units to consume (default 1).

        Returns:
            RateLimitResult with allowance decision and metadata.

        Raises:
            ValueError: If key is empty or cost is invalid.
        """
        if cost < 1:
            raise ValueError("cost must be >= 1")
        if not key:
            raise ValueError("key must be a non-empty string")

        now = self._clock()

        with self._lock:
            if now - self._last_sweep >= self._sweep_interval:
                self.sweep(now)

            state = self._state_by_key.get(key)
            if state is None or self._is_expired(state, now):
                state = _WindowState(window_start=now, count=cost)
                self._state_by_key[key] = state
            else:
                state.count += cost

            count = state.count
            reset_at = state.window_start + self._window_seconds

        remaining = max(0, self._limit - count)
        if count <= self._limit:
            return RateLimitResult(
                allowed=True,
                limit=self._limit,
                remaining=remaining,
                reset_at=int(math.ceil(reset_at)),
                retry_after_seconds=None,
            )

        return RateLimitResult(
            allowed=False,
            limit=self._limit,
            remaining=0,
            reset_at=int(math.ceil(reset_at)),
            retry_after_seconds=max(1, int(math.ceil(reset_at - now))),
        )
