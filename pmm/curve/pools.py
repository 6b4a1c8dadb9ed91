"""PMM pool state dataclasses.

PoolSnapshot is the read-only view of one pool at pricing time. It is built
fresh for every swap from the ledger balances, the configured targets and
the oracle price, and is never cached between calls.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PoolSnapshot:
    """Pool state in 18-decimal fixed point.

    Attributes:
        base_balance: Base token held by the pool (B)
        quote_balance: Quote token held by the pool (Q)
        target_base: Equilibrium base balance (B0), must be positive
        target_quote: Equilibrium quote balance (Q0), must be positive
        k: Depth parameter; 0 is constant-sum, 10^18 is constant-product
        oracle_price: Quote per base (i)
    """

    base_balance: int
    quote_balance: int
    target_base: int
    target_quote: int
    k: int
    oracle_price: int


@dataclass(frozen=True)
class OrientedPool:
    """Snapshot re-expressed as input side X and output side Y.

    Targets here are already adjusted, so a short side always satisfies
    balance <= target.

    Attributes:
        x: Balance of the token the trader pays
        x0: Target of the token the trader pays
        y: Balance of the token the trader receives
        y0: Target of the token the trader receives
        k: Depth parameter
        price_out_per_in: Value of one X unit in Y
        price_in_per_out: Value of one Y unit in X
    """

    x: int
    x0: int
    y: int
    y0: int
    k: int
    price_out_per_in: int
    price_in_per_out: int
