"""Reference price access.

Converts oracle readings into the 18-decimal prices the curve uses and
rejects stale or invalid readings.
"""

from .adapter import OracleAdapter, get_price, to_fixed_point
from .errors import InvalidPrice, OracleError, StalePrice
from .feeds import PriceFeed, PriceReading

__all__ = [
    # Feed interface
    "PriceFeed",
    "PriceReading",
    # Adapter
    "OracleAdapter",
    "get_price",
    "to_fixed_point",
    # Errors
    "OracleError",
    "StalePrice",
    "InvalidPrice",
]
