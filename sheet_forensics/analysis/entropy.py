from __future__ import annotations

import math
import numbers
from collections.abc import Callable, Iterable
from decimal import Decimal
from functools import lru_cache

"""Entropy signatures for numeric cell values.

A signature is a non-negative integer that collapses "engineered" numbers
(calendar years, round numbers, common fractions, square roots of short
decimals) to small integers, while leaving arbitrary-looking measurements
with long digit strings. Scores derived from signatures are used as ranking
and threshold quantities by the detection strategies.

The fuzzy checks are an ordered list of predicates; the first one returning
a signature wins, otherwise the plain digit signature is used.
"""

__all__ = [
    "EntropyInputError",
    "number_entropy",
    "entropy_score",
    "sequence_entropy_score",
    "digit_signature",
]

YEAR_SIGNATURE = 100
MIN_YEAR = 1900
MAX_YEAR = 2030

# Values with at most this many fractional digits are taken at face value
MAX_SIMPLE_FRACTIONAL_DIGITS = 2
MAX_DENOMINATOR = 99
# Decimal numerators (27.62/3) only explain a repeating tail longer than this
MIN_REPEATING_FRACTIONAL_DIGITS = 6
FRACTION_TOLERANCE = 5e-5
# Below this magnitude a square is always "simple" (rounds to zero)
MIN_SQUARE_ROOT_MAGNITUDE = 0.01
# Relative slack for binary floating point noise (0.1 + 0.2 etc.)
FLOAT_NOISE = 1e-12


class EntropyInputError(ValueError):
    """Raised when a value cannot be given an entropy signature."""


def _normalize(value: numbers.Real) -> int | float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise EntropyInputError(f"not a real number: {value!r}")
    if isinstance(value, numbers.Integral):
        return int(value)
    as_float = float(value)
    if not math.isfinite(as_float):
        raise EntropyInputError(f"non-finite value: {value!r}")
    return as_float


def _decimal_parts(value: int | float) -> tuple[int, int]:
    """Return (digits, fractional digit count) of the shortest decimal form of abs(value)."""
    if isinstance(value, int):
        dec = Decimal(abs(value))
    else:
        # repr() is the shortest string that round-trips, so no digits are invented
        dec = Decimal(repr(abs(value)))
    _, digit_tuple, exponent = dec.as_tuple()
    digits = int("".join(str(d) for d in digit_tuple))
    exponent = int(exponent)
    # 2000.0 has no fractional digits
    while digits and digits % 10 == 0 and exponent < 0:
        digits //= 10
        exponent += 1
    return digits, max(0, -exponent)


def digit_signature(value: int | float) -> int:
    """Digits of abs(value) with the decimal point removed and trailing zeros stripped."""
    digits, _ = _decimal_parts(value)
    while digits and digits % 10 == 0:
        digits //= 10
    return digits


def _tolerance(value: float, fractional_digits: int, scale: float = 1.0) -> float:
    precision = scale * 10.0 ** -fractional_digits
    return min(FRACTION_TOLERANCE, precision + FLOAT_NOISE * max(1.0, abs(value)))


def _year_signature(value: int | float, fractional_digits: int) -> int | None:
    if fractional_digits == 0 and MIN_YEAR <= value <= MAX_YEAR:
        return YEAR_SIGNATURE
    return None


def _fraction_signature(value: int | float, fractional_digits: int) -> int | None:
    if fractional_digits <= MAX_SIMPLE_FRACTIONAL_DIGITS:
        return None
    tolerance = _tolerance(value, fractional_digits)
    # Whole numerators first (13/3), then short decimal numerators (27.62/3)
    passes: tuple[int | None, ...] = (None,)
    if fractional_digits > MIN_REPEATING_FRACTIONAL_DIGITS:
        passes += (MAX_SIMPLE_FRACTIONAL_DIGITS,)
    for decimals in passes:
        for denominator in range(1, MAX_DENOMINATOR + 1):
            numerator = round(value * denominator, decimals)
            if numerator and abs(value - numerator / denominator) <= tolerance:
                return digit_signature(numerator)
    return None


def _square_root_signature(value: int | float, fractional_digits: int) -> int | None:
    if fractional_digits <= MAX_SIMPLE_FRACTIONAL_DIGITS or value < MIN_SQUARE_ROOT_MAGNITUDE:
        return None
    squared = value * value
    candidate = round(squared, MAX_SIMPLE_FRACTIONAL_DIGITS)
    if candidate and abs(squared - candidate) <= _tolerance(value, fractional_digits, 2 * value):
        return digit_signature(candidate)
    return None


_PATTERN_CHECKS: tuple[Callable[[int | float, int], int | None], ...] = (
    _year_signature,
    _fraction_signature,
    _square_root_signature,
)


def number_entropy(value: numbers.Real) -> int:
    """Return the entropy signature of a single number.

    Examples:
        >>> number_entropy(2025)
        100
        >>> number_entropy(12000)
        12
        >>> number_entropy(4.333333333333333)
        13
        >>> number_entropy(-1.327)
        1327

    Raises:
        EntropyInputError: if value is not a finite real number
    """
    normalized = abs(_normalize(value))
    _, fractional_digits = _decimal_parts(normalized)
    for check in _PATTERN_CHECKS:
        signature = check(normalized, fractional_digits)
        if signature is not None:
            return signature
    return digit_signature(normalized)


@lru_cache(maxsize=65536)
def entropy_score(signature: int) -> float:
    """Monotonic score of a signature: bits needed to write it, 0 for 0."""
    if signature < 0:
        raise EntropyInputError(f"signature must be non-negative: {signature}")
    return math.log2(signature + 1)


def sequence_entropy_score(values: Iterable[numbers.Real]) -> float:
    """Sum of per-value entropy scores."""
    return sum(entropy_score(number_entropy(v)) for v in values)
