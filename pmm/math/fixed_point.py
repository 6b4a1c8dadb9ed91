"""18-decimal fixed-point math for PMM pricing.

All values are non-negative integers scaled by 10^18. Every operation
states its rounding direction explicitly; the curve solvers pick floor or
ceiling per term so that rounding error always accrues to the pool.

Every intermediate product goes through SafeInt, so a value that does not
fit in uint256 raises Overflow instead of silently growing or wrapping.
"""

from __future__ import annotations

from pmm.constants import ONE
from pmm.errors import SqrtDidNotConverge
from pmm.safe_int import S

__all__ = [
    "ONE",
    "mul_floor",
    "mul_ceil",
    "div_floor",
    "div_ceil",
    "reciprocal_floor",
    "reciprocal_ceil",
    "isqrt",
]

# Newton iteration from an upper bound converges in ~log2(bits) steps;
# 255 is far above what a 256-bit input can need.
_SQRT_MAX_ITERATIONS = 255


def mul_floor(a: int, b: int) -> int:
    """Multiply with floor rounding: (a * b) // 10^18"""
    return ((S(a) * S(b)) // ONE).value


def mul_ceil(a: int, b: int) -> int:
    """Multiply with ceiling rounding: (a * b + 10^18 - 1) // 10^18"""
    return (S(a) * S(b)).ceiling_div(ONE).value


def div_floor(a: int, b: int) -> int:
    """Divide with floor rounding: (a * 10^18) // b

    Raises:
        DivisionByZero: If b is zero
    """
    return ((S(a) * ONE) // S(b)).value


def div_ceil(a: int, b: int) -> int:
    """Divide with ceiling rounding: (a * 10^18 + b - 1) // b

    Raises:
        DivisionByZero: If b is zero
    """
    return (S(a) * ONE).ceiling_div(S(b)).value


def reciprocal_floor(a: int) -> int:
    """Return 1 / a rounded down."""
    return div_floor(ONE, a)


def reciprocal_ceil(a: int) -> int:
    """Return 1 / a rounded up."""
    return div_ceil(ONE, a)


def isqrt(x: int) -> int:
    """Integer square root: the largest r with r * r <= x.

    Babylonian iteration starting from a power of two that is known to be
    >= sqrt(x). From that side the sequence decreases monotonically and
    stops at floor(sqrt(x)). No floating point is involved.

    Args:
        x: Non-negative integer (any magnitude up to 2^256-1)

    Returns:
        floor(sqrt(x))

    Raises:
        Overflow: If x is outside the uint256 range
        SqrtDidNotConverge: If the iteration bound is exhausted
    """
    x = S(x).value
    if x == 0:
        return 0

    z = 1 << ((x.bit_length() + 1) // 2)
    for _ in range(_SQRT_MAX_ITERATIONS):
        y = (z + x // z) // 2
        if y >= z:
            return z
        z = y

    raise SqrtDidNotConverge(f"isqrt({x}) did not converge in {_SQRT_MAX_ITERATIONS} steps")
