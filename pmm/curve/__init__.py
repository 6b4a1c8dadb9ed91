"""PMM curve pricing.

This package prices trades against a proactive market maker curve: a
synthetic liquidity curve anchored at an oracle price whose depth is set by
a single parameter k (0 = constant sum, 1 = constant product).

Layers:
- pmm_math: closed-form curve solvers
- r_status: pool regime classification and target adjustment
- swap: trade dispatch, exact-in/exact-out conversion and invariants
"""

# Errors
from .errors import (
    BothBalancesRequiredNonZero,
    CurveError,
    InsufficientLiquidity,
    InvalidCurveRange,
    InvalidDepthParameter,
    InvalidScalingFactor,
    RecomputeDetected,
    ThresholdViolated,
)

# Curve math
from .pmm_math import Sign, integrate_curve, solve_quadratic_for_trade, solve_target_for_rebalance

# Pool dataclasses
from .pools import OrientedPool, PoolSnapshot

# Regime classification
from .r_status import RStatus, adjusted_targets, classify

# Scaling helpers
from .scaling import scale_down_down, scale_down_up, scale_up, scaling_factor

# Swap execution
from .swap import SwapContext, TradeRequest, TradeResult, price_trade

__all__ = [
    # Pool dataclasses
    "PoolSnapshot",
    "OrientedPool",
    # Curve math
    "Sign",
    "integrate_curve",
    "solve_quadratic_for_trade",
    "solve_target_for_rebalance",
    # Regime classification
    "RStatus",
    "classify",
    "adjusted_targets",
    # Swap execution
    "TradeRequest",
    "TradeResult",
    "SwapContext",
    "price_trade",
    # Scaling helpers
    "scaling_factor",
    "scale_up",
    "scale_down_down",
    "scale_down_up",
    # Errors
    "CurveError",
    "InvalidCurveRange",
    "InvalidDepthParameter",
    "InvalidScalingFactor",
    "BothBalancesRequiredNonZero",
    "InsufficientLiquidity",
    "RecomputeDetected",
    "ThresholdViolated",
]
