"""Base error classes for the PMM engine.

Every failure the engine can report derives from PmmError. Arithmetic
failures derive from Overflow: a result outside the unsigned 256-bit range
is never wrapped or truncated.
"""


class PmmError(Exception):
    """Base error for all PMM engine failures."""

    pass


class Overflow(PmmError, ArithmeticError):
    """Arithmetic result is outside [0, 2^256-1]."""

    pass


class Underflow(Overflow):
    """Subtraction would produce a negative result."""

    pass


class DivisionByZero(Overflow):
    """Division or modulo by zero."""

    pass


class SqrtDidNotConverge(Overflow):
    """Babylonian square root iteration did not converge."""

    pass
