"""PMM swap execution.

price_trade turns a trade request and a pool snapshot into the amounts
that change hands. It runs four ordered phases: validate, classify, price,
finalize. No phase has side effects apart from marking the caller's
SwapContext, so a failure at any point leaves nothing half-applied.

Pricing is done in an oriented frame: X is the token the trader pays, Y
the token the trader receives, and prices are quoted as Y per X. One code
path then serves both base-in and quote-in trades:

    regime        exact-in (sell dx)                 exact-out (buy dy)
    ----------    --------------------------------   ------------------------------
    balanced      quadratic on Y from (y0, y0)       integrate on Y (y0, y0, y0-dy)
    Y short       quadratic on Y from (y0', y)       integrate on Y (y0', y, y-dy)
    X short       integrate on X back to x0',        quadratic on X from (x0', x),
                  remainder quadratic on Y from      remainder integrate on Y from
                  (y0, min(y, y0))                   (y0, min(y, y0))

The remainder starts from Y's real balance, so a pool with both sides
below target still charges for the scarce Y it gives up.

Rounding always favours the pool: outputs round down, inputs round up.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from pmm.constants import K_MAX, K_MIN
from pmm.math.fixed_point import mul_ceil, mul_floor, reciprocal_ceil, reciprocal_floor
from pmm.oracle.errors import InvalidPrice
from pmm.safe_int import S

from .errors import (
    BothBalancesRequiredNonZero,
    InsufficientLiquidity,
    InvalidDepthParameter,
    RecomputeDetected,
    ThresholdViolated,
)
from .pmm_math import integrate_curve, solve_quadratic_for_trade
from .pools import OrientedPool, PoolSnapshot
from .r_status import RStatus, adjusted_targets, classify

logger = structlog.get_logger()


@dataclass(frozen=True)
class TradeRequest:
    """A trade against the pool.

    Attributes:
        token_in_is_base: True if the trader pays base and receives quote
        is_exact_in: True if specified_amount is the input, False if it is the output
        specified_amount: Exact input (exact-in) or exact output (exact-out)
        threshold_amount: Minimum output (exact-in) or maximum input (exact-out)
    """

    token_in_is_base: bool
    is_exact_in: bool
    specified_amount: int
    threshold_amount: int

    def __post_init__(self) -> None:
        if self.specified_amount < 0:
            raise ValueError(f"specified_amount must be non-negative, got {self.specified_amount}")
        if self.threshold_amount < 0:
            raise ValueError(f"threshold_amount must be non-negative, got {self.threshold_amount}")


@dataclass(frozen=True)
class TradeResult:
    """Amounts exchanged by a priced trade.

    Attributes:
        amount_in: Amount the trader pays
        amount_out: Amount the trader receives
        status_before: Pool regime the trade was priced in
    """

    amount_in: int
    amount_out: int
    status_before: RStatus


@dataclass
class SwapContext:
    """Per-swap state owned by the caller.

    A context may be used for pricing exactly once. Reusing it within the
    same logical swap raises RecomputeDetected.

    Attributes:
        priced: True once price_trade has run with this context
        last_result: Result of the successful pricing, if any
    """

    priced: bool = False
    last_result: TradeResult | None = None


# =============================================================================
# Public entry point
# =============================================================================


def price_trade(
    snapshot: PoolSnapshot,
    request: TradeRequest,
    context: SwapContext | None = None,
) -> TradeResult:
    """Price a trade against a pool snapshot.

    Args:
        snapshot: Pool state in 18-decimal fixed point
        request: Trade to price; amounts in 18-decimal fixed point
        context: Recompute guard for this logical swap. Without one the
            call is not guarded.

    Returns:
        TradeResult in 18-decimal fixed point

    Raises:
        InvalidDepthParameter: If k is outside [0, 10^18]
        BothBalancesRequiredNonZero: If either balance is zero
        InvalidPrice: If the oracle price is zero
        InsufficientLiquidity: If the trade would empty the output side
        RecomputeDetected: If the context was already used for pricing
        ThresholdViolated: If the slippage limit is not met
        Overflow: If an intermediate does not fit in uint256
    """
    _validate(snapshot)

    status = classify(
        snapshot.base_balance,
        snapshot.quote_balance,
        snapshot.target_base,
        snapshot.target_quote,
    )
    target_base, target_quote = adjusted_targets(snapshot, status)
    pool = _orient(snapshot, request, target_base, target_quote)
    x_short = _is_input_short(status, request.token_in_is_base)

    amount = request.specified_amount
    if amount == 0:
        amount_in, amount_out = 0, 0
    elif request.is_exact_in:
        amount_in, amount_out = amount, _sell(pool, status, x_short, amount)
    else:
        amount_in, amount_out = _buy(pool, status, x_short, amount), amount

    result = TradeResult(amount_in=amount_in, amount_out=amount_out, status_before=status)
    _finalize(pool, request, result, context)

    logger.debug(
        "pmm_trade_priced",
        status=status.value,
        token_in_is_base=request.token_in_is_base,
        is_exact_in=request.is_exact_in,
        amount_in=amount_in,
        amount_out=amount_out,
    )
    return result


# =============================================================================
# Phases
# =============================================================================


def _validate(snapshot: PoolSnapshot) -> None:
    if not K_MIN <= snapshot.k <= K_MAX:
        logger.debug("pmm_invalid_depth_parameter", k=snapshot.k)
        raise InvalidDepthParameter(snapshot.k)

    if snapshot.base_balance == 0 or snapshot.quote_balance == 0:
        logger.debug(
            "pmm_empty_balance",
            base_balance=snapshot.base_balance,
            quote_balance=snapshot.quote_balance,
        )
        raise BothBalancesRequiredNonZero(snapshot.base_balance, snapshot.quote_balance)

    if snapshot.oracle_price == 0:
        logger.debug("pmm_invalid_oracle_price", oracle_price=snapshot.oracle_price)
        raise InvalidPrice(snapshot.oracle_price)


def _orient(
    snapshot: PoolSnapshot,
    request: TradeRequest,
    target_base: int,
    target_quote: int,
) -> OrientedPool:
    """Express the snapshot as (X in, Y out) for this request."""
    price = snapshot.oracle_price

    if request.token_in_is_base:
        # Y per X is quote per base: the oracle price itself
        return OrientedPool(
            x=snapshot.base_balance,
            x0=target_base,
            y=snapshot.quote_balance,
            y0=target_quote,
            k=snapshot.k,
            price_out_per_in=price,
            price_in_per_out=reciprocal_ceil(price),
        )

    # Y per X is base per quote; an exact-in output rounds it down, an
    # exact-out input rounds it up
    if request.is_exact_in:
        price_out_per_in = reciprocal_floor(price)
    else:
        price_out_per_in = reciprocal_ceil(price)
    return OrientedPool(
        x=snapshot.quote_balance,
        x0=target_quote,
        y=snapshot.base_balance,
        y0=target_base,
        k=snapshot.k,
        price_out_per_in=price_out_per_in,
        price_in_per_out=price,
    )


def _is_input_short(status: RStatus, token_in_is_base: bool) -> bool:
    """True if the token the trader pays is the pool's short side."""
    if status is RStatus.EXCESS_QUOTE:
        return token_in_is_base
    if status is RStatus.EXCESS_BASE:
        return not token_in_is_base
    return False


def _finalize(
    pool: OrientedPool,
    request: TradeRequest,
    result: TradeResult,
    context: SwapContext | None,
) -> None:
    if result.amount_out >= pool.y:
        logger.debug(
            "pmm_insufficient_liquidity",
            amount_out=result.amount_out,
            balance_out=pool.y,
        )
        raise InsufficientLiquidity(
            f"Output {result.amount_out} would empty the pool balance {pool.y}"
        )

    if context is not None:
        if context.priced:
            logger.debug("pmm_recompute_detected")
            raise RecomputeDetected("Swap context was already used for pricing")
        context.priced = True

    if request.is_exact_in:
        if result.amount_out < request.threshold_amount:
            logger.debug(
                "pmm_threshold_violated",
                amount_out=result.amount_out,
                min_amount_out=request.threshold_amount,
            )
            raise ThresholdViolated(result.amount_out, request.threshold_amount, is_exact_in=True)
    elif result.amount_in > request.threshold_amount:
        logger.debug(
            "pmm_threshold_violated",
            amount_in=result.amount_in,
            max_amount_in=request.threshold_amount,
        )
        raise ThresholdViolated(result.amount_in, request.threshold_amount, is_exact_in=False)

    if context is not None:
        context.last_result = result


# =============================================================================
# Exact-in: sell dx of X, receive Y
# =============================================================================


def _sell(pool: OrientedPool, status: RStatus, x_short: bool, dx: int) -> int:
    if status is RStatus.BALANCED:
        return _sell_along_y(pool, pool.y0, dx)
    if x_short:
        return _sell_back_to_target(pool, dx)
    return _sell_along_y(pool, pool.y, dx)


def _sell_along_y(pool: OrientedPool, y_from: int, dx: int) -> int:
    """Take Y down its curve starting from y_from, which is at most y0."""
    value = mul_floor(pool.price_out_per_in, dx)
    y2 = solve_quadratic_for_trade(pool.y0, y_from, value, False, pool.k)
    return S(y_from).saturating_sub(y2).value


def _sell_back_to_target(pool: OrientedPool, dx: int) -> int:
    """X is short; paying X moves it back toward target, possibly past it."""
    back_x = (S(pool.x0) - pool.x).value
    back_y = S(pool.y).saturating_sub(pool.y0).value

    if dx < back_x:
        out = integrate_curve(pool.x0, pool.x + dx, pool.x, pool.price_out_per_in, pool.k)
        return min(out, back_y)
    if dx == back_x:
        return back_y

    # Y after the back leg: y0 if Y was long, its own balance if Y is short too
    y_after = pool.y - back_y
    logger.debug("pmm_sell_crosses_target", back_x=back_x, back_y=back_y, y_after=y_after)
    return (S(back_y) + _sell_along_y(pool, y_after, dx - back_x)).value


# =============================================================================
# Exact-out: buy dy of Y, pay X
# =============================================================================


def _buy(pool: OrientedPool, status: RStatus, x_short: bool, dy: int) -> int:
    if dy >= pool.y:
        logger.debug("pmm_insufficient_liquidity", amount_out=dy, balance_out=pool.y)
        raise InsufficientLiquidity(f"Cannot buy {dy} from a pool balance of {pool.y}")

    if status is RStatus.BALANCED:
        return _buy_along_y(pool, pool.y0, dy)
    if x_short:
        return _buy_back_to_target(pool, dy)
    return _buy_along_y(pool, pool.y, dy)


def _buy_along_y(pool: OrientedPool, y_from: int, dy: int) -> int:
    if dy >= y_from:
        raise InsufficientLiquidity(f"Cannot buy {dy} beyond the balance {y_from}")
    return integrate_curve(pool.y0, y_from, y_from - dy, pool.price_in_per_out, pool.k)


def _buy_back_to_target(pool: OrientedPool, dy: int) -> int:
    back_x = (S(pool.x0) - pool.x).value
    back_y = S(pool.y).saturating_sub(pool.y0).value

    if dy < back_y:
        value = mul_ceil(pool.price_in_per_out, dy)
        x2 = solve_quadratic_for_trade(pool.x0, pool.x, value, True, pool.k)
        return S(x2).saturating_sub(pool.x).value
    if dy == back_y:
        return back_x

    y_after = pool.y - back_y
    logger.debug("pmm_buy_crosses_target", back_x=back_x, back_y=back_y, y_after=y_after)
    return (S(back_x) + _buy_along_y(pool, y_after, dy - back_y)).value
