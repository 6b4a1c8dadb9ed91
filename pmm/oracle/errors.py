"""Oracle error classes."""

from pmm.errors import PmmError


class OracleError(PmmError):
    """Base error for reference price reads."""

    pass


class StalePrice(OracleError):
    """The price was published too long ago (or too far in the future)."""

    def __init__(self, age: int, max_age: int) -> None:
        self.age = age
        self.max_age = max_age
        super().__init__(f"Stale price: age {age}s exceeds maximum {max_age}s")


class InvalidPrice(OracleError):
    """The raw price is not positive, or rescales to zero."""

    def __init__(self, raw: int) -> None:
        self.raw = raw
        super().__init__(f"Invalid oracle price: {raw}")
