"""Numeric constants shared across the PMM engine."""

from pmm.safe_int import UINT256_MAX

# 18-decimal fixed-point scale. Every price, balance and depth parameter
# that crosses a component boundary is an integer scaled by this value.
ONE = 10**18

# Token decimals above this cannot be scaled up into the fixed-point domain
MAX_TOKEN_DECIMALS = 18

# Depth parameter bounds (inclusive)
K_MIN = 0
K_MAX = ONE

__all__ = ["ONE", "MAX_TOKEN_DECIMALS", "K_MIN", "K_MAX", "UINT256_MAX"]
