"""Rate limiting middleware.

This module wires the rate limiting adapter into the HTTP layer. It runs as
middleware rather than a route dependency so every request (unknown paths
included) consumes budget.

Rate limiting strategy:
- Fixed window per client address (``ip:<host>``).
- Fails open: a limiter failure is logged and the request proceeds.
"""

from __future__ import annotations

import hashlib
import logging

from fastapi import Request, Response

from bfhl_api.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult
from bfhl_api.adapters.rate_limit.in_memory import InMemoryFixedWindowRateLimiter
from bfhl_api.core.config import settings
from bfhl_api.schemas.envelope import error_response

logger = logging.getLogger(__name__)


_limiter: AbstractRateLimiter | None = None
_limiter_config: tuple[int, int, int] | None = None


def get_rate_limiter() -> AbstractRateLimiter:
    """Return a process-wide rate limiter instance.

    The instance is cached in-module to preserve state across requests.
    If configuration changes (primarily in tests), the limiter is rebuilt.
    """

    global _limiter, _limiter_config

    config = (
        settings.app.rate_limit_requests,
        settings.app.rate_limit_window_seconds,
        settings.app.rate_limit_sweep_interval_seconds,
    )

    if _limiter is None or _limiter_config != config:
        _limiter = InMemoryFixedWindowRateLimiter(
            limit=settings.app.rate_limit_requests,
            window_seconds=settings.app.rate_limit_window_seconds,
            sweep_interval_seconds=settings.app.rate_limit_sweep_interval_seconds,
        )
        _limiter_config = config

    return _limiter


def set_rate_limiter(limiter: AbstractRateLimiter | None) -> None:
    """Install a specific limiter (or drop the cached one when None)."""

    global _limiter, _limiter_config

    _limiter = limiter
    _limiter_config = None if limiter is None else (
        settings.app.rate_limit_requests,
        settings.app.rate_limit_window_seconds,
        settings.app.rate_limit_sweep_interval_seconds,
    )


def build_rate_limit_key(request: Request) -> str:
    client_host = request.client.host if request.client else None
    return f"ip:{client_host or 'unknown'}"


def _hash_limiter_key(key: str) -> str:
    """Hash the rate limit key for logging without exposing client addresses."""
    return hashlib.sha256(key.encode()).hexdigest()[:16]


def _throttle_headers(result: RateLimitResult) -> dict[str, str]:
    if not settings.app.rate_limit_include_headers:
        return {}
    return {
        "Retry-After": str(result.retry_after_seconds or 0),
        "X-RateLimit-Limit": str(result.limit),
        "X-RateLimit-Remaining": str(result.remaining),
        "X-RateLimit-Reset": str(result.reset_at),
        "X-Error-Code": "rate_limited",
    }


async def rate_limit_middleware(request: Request, call_next) -> Response:
    """HTTP middleware enforcing the per-client request budget.

    Consumes one unit per request. Over budget the request is answered with a
    429 envelope and never reaches routing.

    Args:
        request: The incoming HTTP request object.
        call_next: The next middleware/route handler in the stack.

    Returns:
        Response: 429 envelope when throttled, otherwise the downstream response.
    """

    if not settings.app.rate_limit_enabled:
        return await call_next(request)

    try:
        key = build_rate_limit_key(request)
        result = get_rate_limiter().consume(key)
    except Exception as exc:
        logger.warning(
            "rate_limit.error",
            extra={"error_type": type(exc).__name__, "error_msg": str(exc)},
        )
        return await call_next(request)

    if result.allowed:
        return await call_next(request)

    logger.warning(
        "rate_limit.exceeded",
        extra={
            "key_hash": _hash_limiter_key(key),
            "limit": result.limit,
            "window_s": settings.app.rate_limit_window_seconds,
            "retry_after_s": result.retry_after_seconds,
        },
    )
    return error_response(429, "Too many requests", headers=_throttle_headers(result))
