"""Oracle adapter: raw feed reading to an 18-decimal price.

Freshness is enforced here, before a pool snapshot is ever built, so the
pricing code can assume any price it receives is current.
"""

from __future__ import annotations

import time
from collections.abc import Callable

import structlog

from pmm.constants import MAX_TOKEN_DECIMALS
from pmm.safe_int import S

from .errors import InvalidPrice, StalePrice
from .feeds import PriceFeed, PriceReading

logger = structlog.get_logger()


def to_fixed_point(reading: PriceReading) -> int:
    """Rescale raw * 10^expo to an 18-decimal integer.

    Exponents above -18 scale up exactly; exponents below -18 scale down
    with floor rounding.

    Raises:
        InvalidPrice: If the raw price is not positive or rescales to zero
        Overflow: If the rescaled price exceeds uint256
    """
    if reading.price <= 0:
        raise InvalidPrice(reading.price)

    shift = MAX_TOKEN_DECIMALS + reading.expo
    if shift >= 0:
        price = (S(reading.price) * 10**shift).value
    else:
        price = (S(reading.price) // 10**-shift).value

    if price == 0:
        raise InvalidPrice(reading.price)
    return price


def get_price(feed: PriceFeed, feed_id: str, max_staleness: int, now: int) -> int:
    """Read a feed and return its price as an 18-decimal value.

    Args:
        feed: Price source
        feed_id: Identifier of the price feed
        max_staleness: Maximum accepted age in seconds
        now: Current unix time in seconds

    Returns:
        Price in 18-decimal fixed point

    Raises:
        StalePrice: If |now - publish_time| > max_staleness
        InvalidPrice: If the price is not positive or rescales to zero
    """
    reading = feed.get_price_unsafe(feed_id)

    age = abs(now - reading.publish_time)
    if age > max_staleness:
        logger.debug(
            "oracle_stale_price",
            feed_id=feed_id,
            age=age,
            max_staleness=max_staleness,
        )
        raise StalePrice(age, max_staleness)

    try:
        price = to_fixed_point(reading)
    except InvalidPrice:
        logger.debug("oracle_invalid_price", feed_id=feed_id, raw=reading.price, expo=reading.expo)
        raise

    logger.debug("oracle_price_read", feed_id=feed_id, price=price, age=age)
    return price


class OracleAdapter:
    """A price feed bound to one feed id, staleness window and clock.

    Usage:
        adapter = OracleAdapter(feed, feed_id, max_staleness=60)
        price = adapter.get_price()
    """

    def __init__(
        self,
        feed: PriceFeed,
        feed_id: str,
        max_staleness: int,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.feed = feed
        self.feed_id = feed_id
        self.max_staleness = max_staleness
        self._clock = clock

    def get_price(self) -> int:
        """Fresh 18-decimal price from the bound feed."""
        return get_price(self.feed, self.feed_id, self.max_staleness, int(self._clock()))
