"""Pure number-theory kernels behind the numeric ``/bfhl`` operations.

Inputs are assumed validated (plain ``int`` values, non-empty sequences);
validation lives in ``bfhl_api.services.bfhl_service``.
"""

from __future__ import annotations

import math
from functools import reduce
from typing import Iterable, Sequence


def fibonacci_series(n: int) -> list[int]:
    """Return the first ``n`` Fibonacci numbers, starting 0, 1, 1, 2, ...

    Args:
        n: Number of terms; ``n <= 0`` yields an empty list.

    Returns:
        list[int]: The sequence, exact for any ``n`` (Python ints are unbounded).
    """
    series: list[int] = []
    if n <= 0:
        return series
    series.append(0)
    if n == 1:
        return series
    series.append(1)
    while len(series) < n:
        series.append(series[-1] + series[-2])
    return series


def is_prime(x: int) -> bool:
    """Trial-division primality test over odd divisors up to ``isqrt(x)``."""
    if x <= 1:
        return False
    if x <= 3:
        return True
    if x % 2 == 0:
        return False
    limit = math.isqrt(x)
    for divisor in range(3, limit + 1, 2):
        if x % divisor == 0:
            return False
    return True


def filter_primes(values: Iterable[int]) -> list[int]:
    """Keep the prime values, preserving input order and duplicates."""
    return [value for value in values if is_prime(value)]


def gcd(a: int, b: int) -> int:
    """Greatest common divisor by Euclid's algorithm; ``gcd(a, 0) == |a|``."""
    a, b = abs(a), abs(b)
    if not b:
        return a
    return gcd(b, a % b)


def lcm(a: int, b: int) -> int:
    """Least common multiple; 0 when either operand is 0."""
    if a == 0 or b == 0:
        return 0
    return abs(a // gcd(a, b) * b)


def gcd_many(values: Sequence[int]) -> int:
    """Fold ``gcd`` over a non-empty sequence (a single value is returned as is)."""
    if not values:
        raise ValueError("gcd_many requires at least one value")
    return reduce(gcd, values)


def lcm_many(values: Sequence[int], max_bits: int | None = None) -> int:
    """Fold ``lcm`` over a non-empty sequence (a single value is returned as is).

    Raises:
        ValueError: If ``values`` is empty.
        OverflowError: If a running result needs more than ``max_bits`` bits.
    """
    if not values:
        raise ValueError("lcm_many requires at least one value")
    result = values[0]
    for value in values[1:]:
        result = lcm(result, value)
        if max_bits is not None and result.bit_length() > max_bits:
            raise OverflowError(f"lcm exceeds {max_bits} bits")
    return result
