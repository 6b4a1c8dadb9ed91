"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Fixed-point unit, feed id and frozen clock
- factories: Snapshot, request and reading factories plus ledger/feed fakes
"""

from tests.helpers.constants import FEED_ID, NOW, ONE, USDC_DECIMALS
from tests.helpers.factories import (
    FakeLedger,
    StaticPriceFeed,
    make_reading,
    make_request,
    make_snapshot,
)

__all__ = [
    # Constants
    "ONE",
    "FEED_ID",
    "NOW",
    "USDC_DECIMALS",
    # Factories
    "make_snapshot",
    "make_request",
    "make_reading",
    # Fakes
    "FakeLedger",
    "StaticPriceFeed",
]
