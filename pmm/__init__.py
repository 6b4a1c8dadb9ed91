"""PMM pricing engine - proactive market maker curve pricing."""

from pmm.engine import Ledger, PmmEngine
from pmm.errors import DivisionByZero, Overflow, PmmError, SqrtDidNotConverge, Underflow

__version__ = "0.1.0"
__all__ = [
    "PmmEngine",
    "Ledger",
    "PmmError",
    "Overflow",
    "Underflow",
    "DivisionByZero",
    "SqrtDidNotConverge",
    "__version__",
]
