"""Checked unsigned integer wrapper for pricing arithmetic.

This module provides SafeInt, a lightweight wrapper that makes arithmetic
behave like checked uint256 math:
- Results above 2^256-1 raise Overflow
- Subtraction below zero raises Underflow
- Division by zero raises DivisionByZero

All three are Overflow subclasses, so callers that only care about
"the result is not representable" can catch a single class.

Usage pattern:
    from pmm.safe_int import S

    def calculate(a: int, b: int, c: int) -> int:
        # Wrap at entry
        sa, sb, sc = S(a), S(b), S(c)

        # Natural arithmetic - automatically checked
        result = (sa * sb) // sc  # Raises if sc == 0
        remainder = sa - sb       # Raises if sb > sa

        # Unwrap at exit
        return result.value
"""

from __future__ import annotations

from pmm.errors import DivisionByZero, Overflow, Underflow

UINT256_MAX = 2**256 - 1


def _checked(value: int, op: str) -> int:
    """Return value if it fits in uint256, raise otherwise."""
    if value < 0:
        raise Underflow(f"Underflow: {op} = {value}")
    if value > UINT256_MAX:
        raise Overflow(f"Overflow: {op} exceeds uint256")
    return value


class SafeInt:
    """Non-negative integer with checked arithmetic operations.

    Wraps an integer and provides arithmetic operators that raise
    descriptive errors instead of producing out-of-range results.
    Every intermediate value is kept inside [0, 2^256-1], matching the
    checked math of the on-chain pricing code.

    Attributes:
        value: The underlying integer value (read-only)
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | SafeInt) -> None:
        """Create a SafeInt from an integer or another SafeInt.

        Raises:
            TypeError: If value is not an int or SafeInt
            Underflow: If value is negative
            Overflow: If value exceeds uint256
        """
        if isinstance(value, SafeInt):
            self._value = value._value
        elif isinstance(value, int) and not isinstance(value, bool):
            self._value = _checked(value, str(value))
        else:
            raise TypeError(f"SafeInt requires int, got {type(value).__name__}")

    @property
    def value(self) -> int:
        """The underlying integer value."""
        return self._value

    def __repr__(self) -> str:
        return f"SafeInt({self._value})"

    def __str__(self) -> str:
        return str(self._value)

    def __hash__(self) -> int:
        return hash(self._value)

    # --- Arithmetic operations ---

    def __add__(self, other: SafeInt | int) -> SafeInt:
        """Add two values.

        Raises:
            Overflow: If the sum exceeds uint256
        """
        other_val = _extract_value(other)
        return SafeInt(_checked(self._value + other_val, f"{self._value} + {other_val}"))

    def __radd__(self, other: int) -> SafeInt:
        return SafeInt(_checked(other + self._value, f"{other} + {self._value}"))

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        """Subtract other from self.

        Raises:
            Underflow: If result would be negative
        """
        other_val = _extract_value(other)
        return SafeInt(_checked(self._value - other_val, f"{self._value} - {other_val}"))

    def __rsub__(self, other: int) -> SafeInt:
        return SafeInt(_checked(other - self._value, f"{other} - {self._value}"))

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        """Multiply two values.

        Raises:
            Overflow: If the product exceeds uint256
        """
        other_val = _extract_value(other)
        return SafeInt(_checked(self._value * other_val, f"{self._value} * {other_val}"))

    def __rmul__(self, other: int) -> SafeInt:
        return SafeInt(_checked(other * self._value, f"{other} * {self._value}"))

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Integer division.

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Division by zero: {self._value} // 0")
        return SafeInt(self._value // other_val)

    def __rfloordiv__(self, other: int) -> SafeInt:
        if self._value == 0:
            raise DivisionByZero(f"Division by zero: {other} // 0")
        return SafeInt(other // self._value)

    # --- Comparison operations ---

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeInt):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return NotImplemented
        return not result

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _extract_value(other)

    def __le__(self, other: SafeInt | int) -> bool:
        return self._value <= _extract_value(other)

    def __gt__(self, other: SafeInt | int) -> bool:
        return self._value > _extract_value(other)

    def __ge__(self, other: SafeInt | int) -> bool:
        return self._value >= _extract_value(other)

    # --- Conversion ---

    def __int__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        """True if non-zero."""
        return self._value != 0

    def __index__(self) -> int:
        return self._value

    # --- Named operations ---

    def ceiling_div(self, other: SafeInt | int) -> SafeInt:
        """Ceiling division (rounds up).

        Equivalent to: (self + other - 1) // other

        Raises:
            DivisionByZero: If other is zero
            Overflow: If self + other - 1 exceeds uint256
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Ceiling division by zero: {self._value}")
        return (self + (other_val - 1)) // other_val

    def saturating_sub(self, other: SafeInt | int) -> SafeInt:
        """Subtract, clamping result to zero instead of raising.

        Unlike __sub__, this never raises Underflow.
        """
        other_val = _extract_value(other)
        return SafeInt(max(0, self._value - other_val))


def _extract_value(x: SafeInt | int) -> int:
    """Extract integer value from SafeInt or int."""
    if isinstance(x, SafeInt):
        return x._value
    return x


# Convenience alias for concise code
S = SafeInt
