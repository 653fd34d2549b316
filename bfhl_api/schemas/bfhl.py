"""Validated ``POST /bfhl`` request variants.

Each body key maps to exactly one variant carrying its already-validated
payload, so execution never re-inspects raw JSON.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

FIBONACCI_MAX_TERMS = 1000

# Array items must lie within the exactly representable range of a double.
MAX_SAFE_INTEGER = 2**53 - 1

# An lcm wider than this (the largest finite double) is refused.
LCM_MAX_BITS = 1024


@dataclass(frozen=True)
class FibonacciRequest:
    """``{"fibonacci": n}`` with ``1 <= n <= 1000``."""

    n: int
    key = "fibonacci"


@dataclass(frozen=True)
class PrimeRequest:
    """``{"prime": [...]}``: non-empty list of safe integers."""

    values: tuple[int, ...]
    key = "prime"


@dataclass(frozen=True)
class HcfRequest:
    """``{"hcf": [...]}``: non-empty list of safe integers."""

    values: tuple[int, ...]
    key = "hcf"


@dataclass(frozen=True)
class LcmRequest:
    """``{"lcm": [...]}``: non-empty list of safe integers."""

    values: tuple[int, ...]
    key = "lcm"


@dataclass(frozen=True)
class AIRequest:
    """``{"AI": "question"}``: stripped, non-blank question."""

    question: str
    key = "AI"


BfhlRequest = Union[FibonacciRequest, PrimeRequest, HcfRequest, LcmRequest, AIRequest]

ALLOWED_KEYS = ("fibonacci", "prime", "lcm", "hcf", "AI")
