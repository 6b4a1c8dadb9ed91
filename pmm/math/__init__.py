"""Mathematical utilities for the PMM engine.

This package provides the fixed-point primitives the curve solvers use:
- 18-decimal multiply/divide with explicit floor or ceiling rounding
- Integer square root
"""

from pmm.math.fixed_point import (
    ONE,
    div_ceil,
    div_floor,
    isqrt,
    mul_ceil,
    mul_floor,
    reciprocal_ceil,
    reciprocal_floor,
)

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
