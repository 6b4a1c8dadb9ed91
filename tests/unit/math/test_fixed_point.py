"""Tests for 18-decimal fixed-point primitives.

This module tests:
- Floor/ceiling multiply and divide, including the rounding gap
- Reciprocals used for quote-denominated prices
- Integer square root bounds
- Overflow instead of wraparound
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from pmm.errors import DivisionByZero, Overflow
from pmm.math import (
    ONE,
    div_ceil,
    div_floor,
    isqrt,
    mul_ceil,
    mul_floor,
    reciprocal_ceil,
    reciprocal_floor,
)
from pmm.safe_int import UINT256_MAX

# Operands small enough that a * b and a * ONE stay inside uint256
operands = st.integers(min_value=0, max_value=2**100)
divisors = st.integers(min_value=1, max_value=2**100)


class TestMultiply:
    """Tests for mul_floor and mul_ceil."""

    def test_mul_floor(self) -> None:
        """(10^18 + 1)^2 / 10^18 = 10^18 + 2 + 1/10^18, floored."""
        assert mul_floor(ONE + 1, ONE + 1) == ONE + 2

    def test_mul_ceil(self) -> None:
        """Same product, rounded up."""
        assert mul_ceil(ONE + 1, ONE + 1) == ONE + 3

    def test_mul_exact(self) -> None:
        """Exact products round the same both ways."""
        assert mul_floor(2 * ONE, 3 * ONE) == 6 * ONE
        assert mul_ceil(2 * ONE, 3 * ONE) == 6 * ONE

    def test_mul_by_zero(self) -> None:
        assert mul_floor(0, 5 * ONE) == 0
        assert mul_ceil(0, 5 * ONE) == 0

    def test_mul_overflow_raises(self) -> None:
        with pytest.raises(Overflow):
            mul_floor(UINT256_MAX, 2)

    @given(a=operands, b=operands)
    def test_mul_rounding_gap(self, a: int, b: int) -> None:
        """Ceiling is floor, or floor + 1 when the product is inexact."""
        floor = mul_floor(a, b)
        ceil = mul_ceil(a, b)
        assert floor <= ceil <= floor + 1
        assert (ceil == floor) == ((a * b) % ONE == 0)


class TestDivide:
    """Tests for div_floor and div_ceil."""

    def test_div_floor(self) -> None:
        """1 / 3 in 18 decimals."""
        assert div_floor(ONE, 3 * ONE) == 333_333_333_333_333_333

    def test_div_ceil(self) -> None:
        assert div_ceil(ONE, 3 * ONE) == 333_333_333_333_333_334

    def test_div_by_zero_raises(self) -> None:
        with pytest.raises(DivisionByZero):
            div_floor(ONE, 0)
        with pytest.raises(DivisionByZero):
            div_ceil(ONE, 0)

    def test_div_overflow_raises(self) -> None:
        """a * ONE must fit in uint256."""
        with pytest.raises(Overflow):
            div_floor(UINT256_MAX // 10, 1)

    @given(a=operands, b=divisors)
    def test_div_rounding_bounds(self, a: int, b: int) -> None:
        """floor <= exact <= ceil, at most one unit apart."""
        floor = div_floor(a, b)
        ceil = div_ceil(a, b)
        assert floor * b <= a * ONE <= ceil * b
        assert ceil - floor in (0, 1)

    @given(
        a=st.integers(min_value=0, max_value=10**30),
        b=st.integers(min_value=2, max_value=10**30),
    )
    def test_mul_div_does_not_exceed_input(self, a: int, b: int) -> None:
        """Rounding down twice never gives back more than was put in."""
        assert mul_floor(div_floor(a, b), b) <= a


class TestReciprocal:
    """Tests for reciprocal_floor and reciprocal_ceil."""

    def test_reciprocal_of_two(self) -> None:
        """1 / 2 is exact."""
        assert reciprocal_floor(2 * ONE) == ONE // 2
        assert reciprocal_ceil(2 * ONE) == ONE // 2

    def test_reciprocal_of_three(self) -> None:
        assert reciprocal_floor(3 * ONE) == 333_333_333_333_333_333
        assert reciprocal_ceil(3 * ONE) == 333_333_333_333_333_334

    def test_reciprocal_of_zero_raises(self) -> None:
        with pytest.raises(DivisionByZero):
            reciprocal_floor(0)


class TestIsqrt:
    """Tests for the Babylonian integer square root."""

    @pytest.mark.parametrize(
        "x,expected",
        [
            (0, 0),
            (1, 1),
            (2, 1),
            (3, 1),
            (4, 2),
            (15, 3),
            (16, 4),
            (ONE * ONE, ONE),
            (UINT256_MAX, 2**128 - 1),
        ],
    )
    def test_known_values(self, x: int, expected: int) -> None:
        assert isqrt(x) == expected

    def test_negative_raises(self) -> None:
        with pytest.raises(Overflow):
            isqrt(-1)

    @given(x=st.integers(min_value=0, max_value=UINT256_MAX))
    def test_floor_sqrt_bounds(self, x: int) -> None:
        """r^2 <= x < (r + 1)^2"""
        r = isqrt(x)
        assert r * r <= x < (r + 1) * (r + 1)
