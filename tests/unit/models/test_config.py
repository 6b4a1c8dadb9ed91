"""Tests for pool configuration loading."""

import dataclasses
import json

import pytest
from pydantic import ValidationError

from pmm.models import DEFAULT_ENGINE_DEFAULTS, PoolConfig, load_pool_config
from tests.helpers import FEED_ID, ONE


@pytest.fixture
def config_file(tmp_path):
    """Write a JSON config and return its path."""

    def write(data: dict):
        path = tmp_path / "config.json"
        path.write_text(json.dumps(data))
        return path

    return write


def minimal_config() -> dict:
    return {
        "feedId": FEED_ID,
        "targetBase": "1000000000000000000000",
        "targetQuote": "2000000000",
        "quoteDecimals": 6,
    }


class TestPoolConfig:
    """Tests for the PoolConfig model."""

    def test_camel_case_aliases(self) -> None:
        config = PoolConfig.model_validate(minimal_config())

        assert config.feed_id == FEED_ID
        assert config.target_base == 1000 * ONE
        assert config.target_quote == 2_000_000_000
        assert config.quote_decimals == 6

    def test_populate_by_name(self) -> None:
        config = PoolConfig(feed_id=FEED_ID, target_base=1, target_quote=2)
        assert (config.target_base, config.target_quote) == (1, 2)

    def test_defaults(self) -> None:
        config = PoolConfig.model_validate(minimal_config())

        assert config.max_staleness == DEFAULT_ENGINE_DEFAULTS.max_staleness == 3600
        assert config.k == DEFAULT_ENGINE_DEFAULTS.k == ONE // 2
        assert config.base_decimals == 18

    def test_k_above_one_accepted(self) -> None:
        """An out-of-range k is rejected at pricing time, not at load time."""
        config = PoolConfig.model_validate({**minimal_config(), "k": str(3 * ONE // 2)})
        assert config.k == 3 * ONE // 2

    @pytest.mark.parametrize(
        "override",
        [
            {"feedId": "0x1234"},
            {"targetBase": "-1"},
            {"targetBase": "abc"},
            {"k": 1.5},
            {"baseDecimals": 19},
            {"quoteDecimals": -1},
            {"maxStaleness": -5},
        ],
    )
    def test_invalid_values_rejected(self, override: dict) -> None:
        with pytest.raises(ValidationError):
            PoolConfig.model_validate({**minimal_config(), **override})

    def test_missing_target_rejected(self) -> None:
        data = minimal_config()
        del data["targetQuote"]
        with pytest.raises(ValidationError):
            PoolConfig.model_validate(data)

    def test_frozen(self) -> None:
        config = PoolConfig.model_validate(minimal_config())
        with pytest.raises(ValidationError):
            config.k = 0

    def test_engine_defaults_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_ENGINE_DEFAULTS.k = 0  # type: ignore[misc]


class TestLoadPoolConfig:
    """Tests for load_pool_config."""

    def test_load_from_file(self, config_file) -> None:
        path = config_file({**minimal_config(), "maxStaleness": 60, "k": "0"})

        config = load_pool_config(path, env={})

        assert config.max_staleness == 60
        assert config.k == 0
        assert config.target_base == 1000 * ONE

    def test_env_overrides_file(self, config_file) -> None:
        path = config_file({**minimal_config(), "maxStaleness": 60})
        env = {"PMM_MAX_STALENESS": "120", "PMM_K": str(ONE)}

        config = load_pool_config(path, env=env)

        assert config.max_staleness == 120
        assert config.k == ONE

    def test_env_overrides_snake_case_key(self, config_file) -> None:
        """Overrides win even when the file uses field names."""
        data = {**minimal_config(), "base_decimals": 8}

        config = load_pool_config(config_file(data), env={"PMM_BASE_DECIMALS": "12"})

        assert config.base_decimals == 12

    def test_env_supplies_missing_field(self, config_file) -> None:
        data = minimal_config()
        del data["feedId"]

        config = load_pool_config(config_file(data), env={"PMM_FEED_ID": FEED_ID})

        assert config.feed_id == FEED_ID

    def test_reads_process_environment_by_default(self, config_file, monkeypatch) -> None:
        monkeypatch.setenv("PMM_TARGET_QUOTE", "5")
        config = load_pool_config(config_file(minimal_config()))
        assert config.target_quote == 5

    def test_invalid_env_value_rejected(self, config_file) -> None:
        with pytest.raises(ValidationError):
            load_pool_config(config_file(minimal_config()), env={"PMM_QUOTE_DECIMALS": "42"})

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError):
            load_pool_config(tmp_path / "missing.json", env={})
