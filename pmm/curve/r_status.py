"""Pool regime classification.

The regime (R status) says which side of the pool, if any, is below its
equilibrium target. It is derived on every call from the current balances
and never stored.
"""

from __future__ import annotations

from enum import Enum

import structlog

from pmm.math.fixed_point import div_floor, mul_floor
from pmm.safe_int import S

from .pmm_math import solve_target_for_rebalance
from .pools import PoolSnapshot

logger = structlog.get_logger()


class RStatus(str, Enum):
    """Which side of the pool holds more than its target."""

    BALANCED = "balanced"
    EXCESS_QUOTE = "excess_quote"  # base is short
    EXCESS_BASE = "excess_base"  # quote is short


def classify(base_balance: int, quote_balance: int, target_base: int, target_quote: int) -> RStatus:
    """Classify the pool regime from balances and targets.

    BALANCED only when both sides sit exactly on target. Any quote surplus
    is EXCESS_QUOTE; every other state, including both sides below target,
    is EXCESS_BASE.
    """
    if base_balance == target_base and quote_balance == target_quote:
        return RStatus.BALANCED
    if quote_balance > target_quote:
        return RStatus.EXCESS_QUOTE
    return RStatus.EXCESS_BASE


def adjusted_targets(snapshot: PoolSnapshot, status: RStatus) -> tuple[int, int]:
    """Re-derive the short side's target from the long side's surplus.

    The short side's target is set to the balance it would reach if the
    long side's surplus were traded back along the curve at the oracle
    price. This keeps the two targets consistent with each other, so the
    short side never sits above its own target.

    Args:
        snapshot: Current pool state
        status: Regime from classify()

    Returns:
        (target_base, target_quote) with the short side adjusted
    """
    target_base = snapshot.target_base
    target_quote = snapshot.target_quote

    if status is RStatus.EXCESS_QUOTE:
        quote_excess = S(snapshot.quote_balance).saturating_sub(target_quote).value
        fair_base = div_floor(quote_excess, snapshot.oracle_price)
        target_base = solve_target_for_rebalance(snapshot.base_balance, snapshot.k, fair_base)
    elif status is RStatus.EXCESS_BASE:
        base_excess = S(snapshot.base_balance).saturating_sub(target_base).value
        fair_quote = mul_floor(snapshot.oracle_price, base_excess)
        target_quote = solve_target_for_rebalance(snapshot.quote_balance, snapshot.k, fair_quote)

    logger.debug(
        "pmm_targets_adjusted",
        status=status.value,
        target_base=target_base,
        target_quote=target_quote,
    )
    return target_base, target_quote
