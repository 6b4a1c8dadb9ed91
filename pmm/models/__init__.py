"""Pydantic models for PMM pool configuration."""

from pmm.models.config import (
    DEFAULT_ENGINE_DEFAULTS,
    ENV_OVERRIDES,
    EngineDefaults,
    PoolConfig,
    load_pool_config,
)
from pmm.models.types import FeedId, Uint256

__all__ = [
    # Types
    "FeedId",
    "Uint256",
    # Config
    "PoolConfig",
    "EngineDefaults",
    "DEFAULT_ENGINE_DEFAULTS",
    "ENV_OVERRIDES",
    "load_pool_config",
]
