"""PMM curve math.

Core math functions for the proactive market maker curve. Prices are
anchored at an oracle price i; the depth parameter k blends a linear
(constant-sum) curve at k=0 with a constant-product curve at k=1.

On the side of the pool that is below its equilibrium target V0, the
marginal price at balance V is

    P(V) = i * (1 - k + k * (V0 / V)^2)

The three functions below are the closed forms used to trade along that
curve. Rounding direction is part of each contract: every term is rounded
so that the pool never pays out more than the exact real-valued result.

IMPORTANT: All arithmetic uses SafeInt (directly or through the fixed-point
helpers); an intermediate outside uint256 raises Overflow.
"""

from __future__ import annotations

from enum import Enum

from pmm.constants import ONE
from pmm.errors import Overflow
from pmm.math.fixed_point import div_ceil, div_floor, isqrt, mul_floor
from pmm.safe_int import S, SafeInt

from .errors import InvalidCurveRange

__all__ = [
    "Sign",
    "integrate_curve",
    "solve_quadratic_for_trade",
    "solve_target_for_rebalance",
]


class Sign(Enum):
    """Sign tag for a magnitude that may be conceptually negative."""

    POSITIVE = 1
    NEGATIVE = -1


def _signed_difference(positive: int, negative: int) -> tuple[int, Sign]:
    """Return |positive - negative| with its sign, without negative integers."""
    if positive >= negative:
        return (S(positive) - negative).value, Sign.POSITIVE
    return (S(negative) - positive).value, Sign.NEGATIVE


def integrate_curve(v0: int, v1: int, v2: int, price: int, k: int) -> int:
    """Value of moving a short-side balance between v1 and v2.

    Definite integral of P(V) from v2 to v1 on the curve anchored at v0:

        i * (v1 - v2) * (1 - k + k * v0^2 / (v1 * v2))

    Order of operations (fixed):
        fair = i * (v1 - v2)                       (floor)
        ratio = (v0 * v0 // v1) / v2               (inner floor, outer ceil)
        result = fair * (1 - k + k * ratio)        (floor)

    The ceiling on ratio biases the penalty term toward the pool while the
    fair-value term stays unbiased.

    Args:
        v0: Equilibrium target of the short side
        v1: Balance at the upper end of the segment
        v2: Balance at the lower end of the segment
        price: Oracle price, value of one short-side unit in the other token
        k: Depth parameter in [0, ONE]

    Returns:
        Amount of the other token equivalent to the segment

    Raises:
        InvalidCurveRange: Unless v0 >= v1 >= v2 > 0
    """
    if not (v0 >= v1 >= v2 > 0):
        raise InvalidCurveRange(v0, v1, v2)

    fair_amount = mul_floor(price, (S(v1) - v2).value)
    v0_v0_v1 = (S(v0) * v0) // v1
    ratio = div_ceil(v0_v0_v1.value, v2)
    penalty = mul_floor(k, ratio)

    return mul_floor(fair_amount, (S(ONE) - k + penalty).value)


def solve_quadratic_for_trade(q0: int, q1: int, value: int, increasing: bool, k: int) -> int:
    """New short-side balance q2 after a trade worth `value` at the oracle price.

    Solves (1 - k) * q2^2 + b * q2 - k * q0^2 = 0 for the positive root,
    where

        -b = (1 - k) * q1 - k * q0^2 / q1 + value    (increasing)
        -b = (1 - k) * q1 - k * q0^2 / q1 - value    (decreasing)

    giving q2 = (-b + sqrt(b^2 + 4(1-k)k * q0^2)) / (2(1 - k)).

    -b is carried as an unsigned magnitude with an explicit Sign, never as a
    wrapped integer. The final division rounds DOWN when the balance
    increases (the pool receives, so the trader is credited slightly less)
    and UP when it decreases (the pool pays, so slightly more stays in the
    pool).

    At k = ONE the leading coefficient vanishes and the equation is linear:
    q2 = k * q0^2 / b, rounded with the same rule.

    Args:
        q0: Equilibrium target of the side being solved
        q1: Current balance of that side
        value: Oracle-priced size of the trade in that side's units
        increasing: True if the trade adds to this side, False if it removes
        k: Depth parameter in [0, ONE]

    Returns:
        New balance q2

    Raises:
        Overflow: If an intermediate exceeds uint256, or the trade would
            require an unbounded balance (k = ONE, increasing)
    """
    k_q0 = mul_floor(k, q0)
    k_q0_q0_q1 = ((S(k_q0) * q0) // q1).value  # k * q0^2 / q1
    one_minus_k_q1 = mul_floor((S(ONE) - k).value, q1)  # (1 - k) * q1

    if increasing:
        positive = (S(one_minus_k_q1) + value).value
        negative = k_q0_q0_q1
    else:
        positive = one_minus_k_q1
        negative = (S(k_q0_q0_q1) + value).value

    minus_b, minus_b_sign = _signed_difference(positive, negative)

    if k == ONE:
        return _solve_linear_for_trade(S(k_q0) * q0, minus_b, minus_b_sign, increasing)

    # 4(1-k) * k * q0^2
    discriminant = mul_floor(((S(ONE) - k) * 4).value, (S(k_q0) * q0).value)
    square_root = isqrt((S(minus_b) * minus_b + discriminant).value)

    if minus_b_sign is Sign.POSITIVE:
        numerator = (S(minus_b) + square_root).value
    else:
        numerator = (S(square_root) - minus_b).value
    denominator = ((S(ONE) - k) * 2).value

    if increasing:
        return div_floor(numerator, denominator)
    return div_ceil(numerator, denominator)


def _solve_linear_for_trade(
    k_q0_q0: SafeInt, minus_b: int, minus_b_sign: Sign, increasing: bool
) -> int:
    """q2 = k * q0^2 / b for the k = ONE curve."""
    if minus_b_sign is Sign.POSITIVE:
        # b <= 0: no finite balance absorbs the trade
        raise Overflow(f"Unbounded balance: trade value exceeds curve capacity (-b={minus_b})")
    if increasing:
        return (k_q0_q0 // minus_b).value
    return k_q0_q0.ceiling_div(minus_b).value


def solve_target_for_rebalance(v1: int, k: int, fair_amount: int) -> int:
    """Equilibrium target v0 for a short side at v1 whose gap is worth fair_amount.

    Inverts integrate_curve over [v1, v0]:

        v0 = v1 * (1 + (sqrt(1 + 4k * fair / v1) - 1) / 2k)

    Order of operations (fixed):
        r = 4 * (k * fair) / v1                    (inner floor, outer ceil)
        s = sqrt((r + 1) * 1)                      (floor)
        premium = (s - 1) / 2k                     (ceil)
        v0 = v1 * (1 + premium)                    (floor)

    At k = 0 the curve is linear and v0 = v1 + fair_amount.

    Args:
        v1: Current balance of the short side
        k: Depth parameter in [0, ONE]
        fair_amount: Oracle value, in short-side units, of the long side's excess

    Returns:
        Target v0, always >= v1
    """
    if k == 0:
        return (S(v1) + fair_amount).value

    r = div_ceil((S(mul_floor(k, fair_amount)) * 4).value, v1)
    s = isqrt(((S(r) + ONE) * ONE).value)
    premium = div_ceil((S(s) - ONE).value, (S(k) * 2).value)

    return mul_floor(v1, (S(ONE) + premium).value)
