"""Pytest configuration and fixtures."""

from collections.abc import Callable

import pytest

from pmm.models import PoolConfig
from tests.helpers import FEED_ID, NOW, ONE, FakeLedger, StaticPriceFeed, make_reading


@pytest.fixture
def clock() -> Callable[[], float]:
    """Clock frozen at NOW."""
    return lambda: NOW


@pytest.fixture
def unit_price_feed() -> StaticPriceFeed:
    """Feed quoting 1.0 (1e8 with expo -8), published at NOW."""
    return StaticPriceFeed(make_reading(100_000_000))


@pytest.fixture
def pool_config() -> PoolConfig:
    """1000/1000 pool of two 18-decimal tokens with k = 0.5 and a 60s window."""
    return PoolConfig(
        feed_id=FEED_ID,
        max_staleness=60,
        k=ONE // 2,
        target_base=1000 * ONE,
        target_quote=1000 * ONE,
    )


@pytest.fixture
def balanced_ledger() -> FakeLedger:
    """Ledger sitting exactly on the pool_config targets."""
    return FakeLedger(base=1000 * ONE, quote=1000 * ONE)
