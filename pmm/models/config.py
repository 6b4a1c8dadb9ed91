"""Pool configuration.

A pool is configured by a JSON file (camelCase keys) whose values can be
overridden per deployment through PMM_* environment variables:

    {
        "feedId": "0xff61...",
        "maxStaleness": 60,
        "k": "500000000000000000",
        "targetBase": "1000000000000000000000",
        "targetQuote": "2000000000",
        "baseDecimals": 18,
        "quoteDecimals": 6
    }

Targets are in each token's native decimals; k is 18-decimal fixed point.
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

import structlog
from pydantic import BaseModel, Field

from pmm.constants import MAX_TOKEN_DECIMALS, ONE

from .types import FeedId, Uint256

logger = structlog.get_logger()


@dataclass(frozen=True)
class EngineDefaults:
    """Fallback values for settings a pool config may omit.

    Attributes:
        max_staleness: Maximum accepted oracle age in seconds (default: 1 hour)
        k: Depth parameter (default: 0.5)
    """

    max_staleness: int = 3600
    k: int = ONE // 2


# Default configuration instance
DEFAULT_ENGINE_DEFAULTS = EngineDefaults()

# Environment variable -> PoolConfig field
ENV_OVERRIDES = {
    "PMM_FEED_ID": "feed_id",
    "PMM_MAX_STALENESS": "max_staleness",
    "PMM_K": "k",
    "PMM_TARGET_BASE": "target_base",
    "PMM_TARGET_QUOTE": "target_quote",
    "PMM_BASE_DECIMALS": "base_decimals",
    "PMM_QUOTE_DECIMALS": "quote_decimals",
}


class PoolConfig(BaseModel):
    """Static configuration of one PMM pool.

    k is not range-checked here: an out-of-range k is rejected when a trade
    is priced, as InvalidDepthParameter.
    """

    feed_id: FeedId = Field(alias="feedId")
    max_staleness: int = Field(
        default=DEFAULT_ENGINE_DEFAULTS.max_staleness, ge=0, alias="maxStaleness"
    )
    k: Uint256 = Field(default=DEFAULT_ENGINE_DEFAULTS.k)
    target_base: Uint256 = Field(alias="targetBase")
    target_quote: Uint256 = Field(alias="targetQuote")
    base_decimals: int = Field(default=18, ge=0, le=MAX_TOKEN_DECIMALS, alias="baseDecimals")
    quote_decimals: int = Field(default=18, ge=0, le=MAX_TOKEN_DECIMALS, alias="quoteDecimals")

    model_config = {"populate_by_name": True, "frozen": True}


def load_pool_config(path: Path | str, env: Mapping[str, str] | None = None) -> PoolConfig:
    """Load a pool config from JSON, applying PMM_* environment overrides.

    Args:
        path: Path to the JSON config file
        env: Environment to read overrides from (default: os.environ)

    Returns:
        Validated PoolConfig

    Raises:
        FileNotFoundError: If the file does not exist
        json.JSONDecodeError: If the file is not valid JSON
        pydantic.ValidationError: If the merged config is invalid
    """
    if env is None:
        env = os.environ

    with open(path) as f:
        data = json.load(f)

    for var, field_name in ENV_OVERRIDES.items():
        if var not in env:
            continue
        # Write under the alias and drop the field name so the override wins
        alias = PoolConfig.model_fields[field_name].alias or field_name
        data.pop(field_name, None)
        data[alias] = env[var]
        logger.debug("pool_config_env_override", variable=var, field=field_name)

    config = PoolConfig.model_validate(data)
    logger.debug(
        "pool_config_loaded",
        path=str(path),
        feed_id=config.feed_id,
        k=config.k,
        max_staleness=config.max_staleness,
    )
    return config
