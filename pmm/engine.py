"""PMM engine: the swap host.

PmmEngine ties the pieces together for one pool. On every call it reads
the ledger balances and a fresh oracle price, lifts everything to 18
decimals, prices the trade with price_trade and converts the result back
to native token units. It holds no state between calls; the ledger is
only ever read, and moving tokens is the caller's job.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Protocol, runtime_checkable

import structlog

from pmm.curve.pools import PoolSnapshot
from pmm.curve.r_status import adjusted_targets, classify
from pmm.curve.scaling import scale_down_down, scale_down_up, scale_up, scaling_factor
from pmm.curve.swap import SwapContext, TradeRequest, TradeResult, price_trade
from pmm.models.config import PoolConfig
from pmm.oracle.adapter import OracleAdapter
from pmm.oracle.feeds import PriceFeed
from pmm.safe_int import UINT256_MAX

logger = structlog.get_logger()


@runtime_checkable
class Ledger(Protocol):
    """Read-only view of the pool's custody balances."""

    def get_balances(self) -> tuple[int, int]:
        """Return (base, quote) held for the pool, in native token units."""
        ...


class PmmEngine:
    """Prices swaps for one PMM pool.

    Usage:
        engine = PmmEngine(config, ledger, feed)
        result = engine.swap(
            TradeRequest(token_in_is_base=True, is_exact_in=True,
                         specified_amount=10**18, threshold_amount=0),
            SwapContext(),
        )
    """

    def __init__(
        self,
        config: PoolConfig,
        ledger: Ledger,
        feed: PriceFeed,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.config = config
        self.ledger = ledger
        self.oracle = OracleAdapter(feed, config.feed_id, config.max_staleness, clock)
        self.base_factor = scaling_factor(config.base_decimals)
        self.quote_factor = scaling_factor(config.quote_decimals)

    def swap(self, request: TradeRequest, context: SwapContext) -> TradeResult:
        """Price a trade in native token units.

        The threshold is scaled up with the rest of the request; since
        amount_out is floored and amount_in is ceiled on the way back,
        the 18-decimal threshold check is equivalent to the native one.

        Args:
            request: Trade in native token units
            context: Caller-owned, single-use recompute guard

        Returns:
            TradeResult in native token units (amount_out rounded down,
            amount_in rounded up)

        Raises:
            StalePrice, InvalidPrice: If the oracle reading is unusable
            CurveError: Any pricing failure from price_trade
        """
        in_factor, out_factor = self._factors(request)
        if request.is_exact_in:
            scaled = TradeRequest(
                token_in_is_base=request.token_in_is_base,
                is_exact_in=True,
                specified_amount=scale_up(request.specified_amount, in_factor),
                threshold_amount=_scale_threshold(request.threshold_amount, out_factor),
            )
        else:
            scaled = TradeRequest(
                token_in_is_base=request.token_in_is_base,
                is_exact_in=False,
                specified_amount=scale_up(request.specified_amount, out_factor),
                threshold_amount=_scale_threshold(request.threshold_amount, in_factor),
            )
        return self._execute(scaled, context)

    def quote(self, request: TradeRequest) -> TradeResult:
        """Price a trade without slippage protection or a caller context.

        request.threshold_amount is ignored. Nothing is recorded, so a
        quote can be taken any number of times.
        """
        in_factor, out_factor = self._factors(request)
        if request.is_exact_in:
            scaled = TradeRequest(
                token_in_is_base=request.token_in_is_base,
                is_exact_in=True,
                specified_amount=scale_up(request.specified_amount, in_factor),
                threshold_amount=0,
            )
        else:
            scaled = TradeRequest(
                token_in_is_base=request.token_in_is_base,
                is_exact_in=False,
                specified_amount=scale_up(request.specified_amount, out_factor),
                threshold_amount=UINT256_MAX,
            )
        return self._execute(scaled, SwapContext())

    def expected_targets(self) -> tuple[int, int]:
        """Equilibrium targets implied by the current balances, in native units.

        Returns:
            (target_base, target_quote) with the short side re-derived
        """
        snapshot = self.snapshot()
        status = classify(
            snapshot.base_balance,
            snapshot.quote_balance,
            snapshot.target_base,
            snapshot.target_quote,
        )
        target_base, target_quote = adjusted_targets(snapshot, status)
        return (
            scale_down_down(target_base, self.base_factor),
            scale_down_down(target_quote, self.quote_factor),
        )

    def snapshot(self) -> PoolSnapshot:
        """Fresh 18-decimal pool state from the ledger, config and oracle."""
        base_balance, quote_balance = self.ledger.get_balances()
        price = self.oracle.get_price()
        return PoolSnapshot(
            base_balance=scale_up(base_balance, self.base_factor),
            quote_balance=scale_up(quote_balance, self.quote_factor),
            target_base=scale_up(self.config.target_base, self.base_factor),
            target_quote=scale_up(self.config.target_quote, self.quote_factor),
            k=self.config.k,
            oracle_price=price,
        )

    def _factors(self, request: TradeRequest) -> tuple[int, int]:
        """(input factor, output factor) for the request's direction."""
        if request.token_in_is_base:
            return self.base_factor, self.quote_factor
        return self.quote_factor, self.base_factor

    def _execute(self, scaled: TradeRequest, context: SwapContext) -> TradeResult:
        in_factor, out_factor = self._factors(scaled)
        result = price_trade(self.snapshot(), scaled, context)

        native = TradeResult(
            amount_in=scale_down_up(result.amount_in, in_factor),
            amount_out=scale_down_down(result.amount_out, out_factor),
            status_before=result.status_before,
        )
        logger.debug(
            "pmm_swap_priced",
            feed_id=self.config.feed_id,
            status=native.status_before.value,
            amount_in=native.amount_in,
            amount_out=native.amount_out,
        )
        return native


def _scale_threshold(threshold: int, factor: int) -> int:
    """Scale a native threshold up, saturating at uint256.

    No 18-decimal amount exceeds 2^256-1, so a saturated threshold decides
    the check exactly as the unscaled one would.
    """
    return min(threshold * factor, UINT256_MAX)
