"""Decimal scaling helpers.

Ledger balances and trader amounts are in each token's native decimals;
the curve math runs in 18-decimal fixed point. Scaling up is exact,
scaling down states its rounding direction.
"""

from pmm.constants import MAX_TOKEN_DECIMALS
from pmm.safe_int import S

from .errors import InvalidScalingFactor


def scaling_factor(decimals: int) -> int:
    """Factor that lifts a token with `decimals` decimals to 18 (e.g. 10^12 for USDC).

    Raises:
        InvalidScalingFactor: If decimals is outside [0, 18]
    """
    if not 0 <= decimals <= MAX_TOKEN_DECIMALS:
        raise InvalidScalingFactor(
            f"Token decimals must be in [0, {MAX_TOKEN_DECIMALS}], got {decimals}"
        )
    return 10 ** (MAX_TOKEN_DECIMALS - decimals)


def scale_up(amount: int, factor: int) -> int:
    """Scale a native token amount to 18 decimals.

    Args:
        amount: Amount in the token's native decimals
        factor: Scaling factor from scaling_factor()

    Returns:
        Amount in 18-decimal fixed point

    Raises:
        InvalidScalingFactor: If factor <= 0
        Overflow: If the scaled amount exceeds uint256
    """
    if factor <= 0:
        raise InvalidScalingFactor(f"Scaling factor must be positive, got {factor}")
    return (S(amount) * factor).value


def scale_down_down(amount: int, factor: int) -> int:
    """Scale an 18-decimal amount back to native decimals, rounding down.

    Used for amounts the pool pays out.
    """
    if factor <= 0:
        raise InvalidScalingFactor(f"Scaling factor must be positive, got {factor}")
    return (S(amount) // factor).value


def scale_down_up(amount: int, factor: int) -> int:
    """Scale an 18-decimal amount back to native decimals, rounding up.

    Used for amounts the pool receives.
    """
    if factor <= 0:
        raise InvalidScalingFactor(f"Scaling factor must be positive, got {factor}")
    return S(amount).ceiling_div(factor).value
