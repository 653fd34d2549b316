"""Validation and dispatch for ``POST /bfhl``.

A request body is decoded, validated into one ``BfhlRequest`` variant, then
executed against the numeric kernels or the AI service:

    validate (parse_bfhl_request) → execute (BfhlDispatcher.execute) → respond
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Callable

from bfhl_api.adapters.llm.base import AbstractLLMClient
from bfhl_api.core.errors import ValidationAppError
from bfhl_api.schemas.bfhl import (
    ALLOWED_KEYS,
    FIBONACCI_MAX_TERMS,
    LCM_MAX_BITS,
    MAX_SAFE_INTEGER,
    AIRequest,
    BfhlRequest,
    FibonacciRequest,
    HcfRequest,
    LcmRequest,
    PrimeRequest,
)
from bfhl_api.services import math_kernels
from bfhl_api.services.ai_service import AIService

logger = logging.getLogger(__name__)


def _invalid(code: str, message: str, field: str | None = None) -> ValidationAppError:
    return ValidationAppError(
        code=code,
        message=message,
        details={"field": field} if field else None,
    )


def as_integer(value: Any) -> int | None:
    """Return ``value`` as an int if it is a JSON integer, else None.

    Integral floats (``5.0``) count as integers; booleans never do.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def decode_json_body(raw: bytes) -> dict[str, Any]:
    """Decode a raw request body into a JSON object.

    An empty body decodes to ``{}`` so it fails the single-key check instead.

    Raises:
        ValidationAppError: If the body is not valid JSON or not an object.
    """
    if not raw.strip():
        return {}
    try:
        body = json.loads(raw)
    except (ValueError, UnicodeDecodeError):
        raise _invalid("invalid_json", "Invalid JSON body")
    if not isinstance(body, dict):
        raise _invalid("invalid_json", "Invalid JSON body")
    return body


def _parse_integer_list(key: str, value: Any) -> tuple[int, ...]:
    if not isinstance(value, list) or not value:
        raise _invalid("invalid_array", f"{key} must be a non-empty array", key)
    numbers = []
    for item in value:
        number = as_integer(item)
        if number is None or abs(number) > MAX_SAFE_INTEGER:
            raise _invalid("invalid_array_item", f"{key} array must contain integers", key)
        numbers.append(number)
    return tuple(numbers)


def parse_bfhl_request(body: dict[str, Any]) -> BfhlRequest:
    """Validate a decoded body into its request variant.

    Args:
        body: Decoded JSON object.

    Returns:
        BfhlRequest: The variant matching the single top-level key.

    Raises:
        ValidationAppError: On any deviation from the accepted shapes.
    """
    if len(body) != 1:
        raise _invalid("invalid_key_count", "Request must contain exactly one top-level key")

    key, value = next(iter(body.items()))
    if key not in ALLOWED_KEYS:
        raise _invalid("unsupported_key", "Unsupported key provided", key)

    if key == "fibonacci":
        n = as_integer(value)
        if n is None or n <= 0 or n > FIBONACCI_MAX_TERMS:
            raise _invalid(
                "invalid_fibonacci",
                f"fibonacci must be an integer in range 1..{FIBONACCI_MAX_TERMS}",
                key,
            )
        return FibonacciRequest(n=n)

    if key == "AI":
        if not isinstance(value, str) or not value.strip():
            raise _invalid("invalid_question", "AI must be a non-empty string", key)
        return AIRequest(question=value.strip())

    values = _parse_integer_list(key, value)
    if key == "prime":
        return PrimeRequest(values=values)
    if key == "hcf":
        return HcfRequest(values=values)
    return LcmRequest(values=values)


class BfhlDispatcher:
    """Execute validated requests.

    The LLM client is resolved through ``llm_provider`` only when an AI
    request is executed, so a missing credential never affects the numeric
    operations and is reported after the question itself was validated.
    """

    def __init__(self, llm_provider: Callable[[], AbstractLLMClient]) -> None:
        self._llm_provider = llm_provider

    async def execute(self, request: BfhlRequest) -> Any:
        """Run the operation of ``request`` and return the envelope ``data``."""
        logger.info("bfhl.dispatched", extra={"operation": request.key})

        if isinstance(request, FibonacciRequest):
            return math_kernels.fibonacci_series(request.n)
        if isinstance(request, PrimeRequest):
            # Trial division on large values must not block the event loop
            loop = asyncio.get_running_loop()
            return await loop.run_in_executor(None, math_kernels.filter_primes, request.values)
        if isinstance(request, HcfRequest):
            return math_kernels.gcd_many(request.values)
        if isinstance(request, LcmRequest):
            try:
                return math_kernels.lcm_many(request.values, max_bits=LCM_MAX_BITS)
            except OverflowError:
                raise _invalid("lcm_too_large", "lcm result too large", request.key)
        if isinstance(request, AIRequest):
            service = AIService(llm=self._llm_provider())
            return await service.answer(request.question)

        raise TypeError(f"Unhandled request type: {type(request).__name__}")
