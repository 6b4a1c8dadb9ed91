"""PMM curve and swap error classes.

Each error maps to one terminal outcome of a pricing call. Parameters
are kept as attributes so callers can react without parsing messages.
"""

from pmm.errors import PmmError


class CurveError(PmmError):
    """Base error for curve pricing and swap execution."""

    pass


class InvalidCurveRange(CurveError):
    """integrate_curve requires v0 >= v1 >= v2 > 0."""

    def __init__(self, v0: int, v1: int, v2: int) -> None:
        self.v0 = v0
        self.v1 = v1
        self.v2 = v2
        super().__init__(f"Invalid curve range: v0={v0}, v1={v1}, v2={v2}")


class InvalidDepthParameter(CurveError):
    """Depth parameter k is outside [0, 1]."""

    def __init__(self, k: int) -> None:
        self.k = k
        super().__init__(f"Depth parameter k={k} outside [0, 10^18]")


class BothBalancesRequiredNonZero(CurveError):
    """One side of the pool is empty."""

    def __init__(self, base_balance: int, quote_balance: int) -> None:
        self.base_balance = base_balance
        self.quote_balance = quote_balance
        super().__init__(
            f"Both balances must be non-zero: base={base_balance}, quote={quote_balance}"
        )


class InsufficientLiquidity(CurveError):
    """The pool cannot supply the requested output."""

    pass


class RecomputeDetected(CurveError):
    """Pricing was invoked twice within one logical swap."""

    pass


class ThresholdViolated(CurveError):
    """Slippage protection tripped.

    For exact-in trades amount is the computed output and threshold the
    minimum accepted; for exact-out trades amount is the computed input and
    threshold the maximum accepted.
    """

    def __init__(self, amount: int, threshold: int, *, is_exact_in: bool) -> None:
        self.amount = amount
        self.threshold = threshold
        self.is_exact_in = is_exact_in
        if is_exact_in:
            message = f"Output {amount} below minimum {threshold}"
        else:
            message = f"Input {amount} above maximum {threshold}"
        super().__init__(message)


class InvalidScalingFactor(CurveError):
    """Token decimals must be in [0, 18], so the scaling factor is a positive power of ten."""

    pass
