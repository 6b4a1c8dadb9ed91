"""Price feed interface.

The engine never talks to an oracle network directly. It reads the latest
stored reading from anything that implements PriceFeed; verifying and
posting signed updates is the feed's concern.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class PriceReading:
    """A raw oracle reading: the price is price * 10^expo.

    Attributes:
        price: Raw signed integer price
        conf: Confidence interval, in the same units as price
        expo: Signed decimal exponent (typically negative, e.g. -8)
        publish_time: Unix timestamp of publication, in seconds
    """

    price: int
    conf: int
    expo: int
    publish_time: int


@runtime_checkable
class PriceFeed(Protocol):
    """Source of the latest stored price for a feed id."""

    def get_price_unsafe(self, feed_id: str) -> PriceReading:
        """Return the latest reading without any freshness check."""
        ...
