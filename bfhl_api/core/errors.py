"""Application-level exception types.

This module defines domain errors used across services/adapters, enabling
consistent error handling, logging, and API responses. Every error renders as
the same response envelope; the HTTP status is chosen by error type in
``bfhl_api.core.exception_handlers``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NotRequired, TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context for observability.

    Details are logged, never serialized into the response envelope.
    """

    field: str
    limit: int
    actual_value: int
    retry_after: float
    provider: str
    model: str
    upstream_status: int
    context: NotRequired[dict[str, Any]]


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message.
        details: Optional structured details for debugging/observability.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


class ValidationAppError(AppError):
    """Raised when request input fails validation."""


class NotFoundAppError(AppError):
    """Raised when no route matches the request."""


class PayloadTooLargeAppError(AppError):
    """Raised when the request body exceeds the configured limit."""


class RateLimitedAppError(AppError):
    """Raised when a client exhausted its request budget."""


class ConfigurationAppError(AppError):
    """Raised when required server configuration is missing."""


class ServiceUnavailableAppError(AppError):
    """Raised when an optional backing service is not configured."""


class LLMAppError(AppError):
    """Raised when the LLM provider call fails for an unclassified reason."""


class LLMNetworkError(LLMAppError):
    """Raised when the LLM provider could not be reached or timed out."""


class LLMAuthenticationError(LLMAppError):
    """Raised when the LLM provider rejected the configured credential."""


class LLMEmptyResponseError(LLMAppError):
    """Raised when the LLM provider answered without any text."""
