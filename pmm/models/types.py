"""Shared type definitions for PMM configuration models."""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from pmm.safe_int import UINT256_MAX


def validate_uint256(value: Any) -> int:
    """Validate that a value is a uint256, given as an int or a decimal string.

    Large values are usually written as strings in JSON and environment
    variables, so both forms are accepted.

    Args:
        value: Value to validate (string or int)

    Returns:
        The value as an int

    Raises:
        ValueError: If value is not a non-negative integer within uint256 range
    """
    if isinstance(value, bool):
        raise ValueError("Uint256 must be an integer, got bool")

    if isinstance(value, int):
        int_value = value
    elif isinstance(value, str):
        try:
            int_value = int(value.strip())
        except ValueError as err:
            raise ValueError(f"Uint256 must be a decimal integer string: '{value}'") from err
    else:
        raise ValueError(f"Uint256 must be string or int, got {type(value).__name__}")

    if int_value < 0:
        raise ValueError(f"Uint256 cannot be negative: {value}")
    if int_value > UINT256_MAX:
        raise ValueError(f"Uint256 overflow: {value} > 2^256-1")
    return int_value


# 256-bit unsigned integer, accepted as int or decimal string
Uint256 = Annotated[
    int,
    BeforeValidator(validate_uint256),
    Field(description="256-bit unsigned integer"),
]

# Price feed identifier (32 bytes = 64 hex chars)
FeedId = Annotated[str, Field(pattern=r"^0x[a-fA-F0-9]{64}$")]
