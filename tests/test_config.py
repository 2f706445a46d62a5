"""Tests for configuration dataclasses."""

import json

import pytest
from dataclasses import FrozenInstanceError

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from serieslog.config import (
    BatchConfig,
    Config,
    LoggerConfig,
    config_from_dict,
    load_config,
    save_config,
    serialize_config,
)


class TestLoggerConfig:
    """Tests for LoggerConfig dataclass."""

    def test_default_values(self):
        """Test that default values are set correctly."""
        config = LoggerConfig()
        assert config.enabled is True
        assert config.directory == "logs"
        assert config.base_name == "series"
        assert config.timestamped is False
        assert config.max_series is None

    def test_frozen_immutability(self):
        """Test that frozen dataclass cannot be modified."""
        config = LoggerConfig()
        with pytest.raises(FrozenInstanceError):
            config.base_name = "other"

    def test_invalid_max_series(self):
        """Test that a non-positive cap is rejected."""
        with pytest.raises(ValueError):
            LoggerConfig(max_series=0)

    def test_empty_base_name(self):
        """Test that an empty base name is rejected."""
        with pytest.raises(ValueError):
            LoggerConfig(base_name="  ")


class TestBatchConfig:
    """Tests for BatchConfig dataclass."""

    def test_default_values(self):
        """Test default batch parameters."""
        config = BatchConfig()
        assert config.save_interval == 100
        assert config.clear_on_final is False

    def test_invalid_interval(self):
        """Test that a non-positive interval is rejected."""
        with pytest.raises(ValueError):
            BatchConfig(save_interval=0)


class TestSerialization:
    """Tests for dict / JSON conversion."""

    def test_serialize_config(self):
        """Nested dataclasses become nested dicts."""
        data = serialize_config(Config())
        assert data["logger"]["base_name"] == "series"
        assert data["batch"]["save_interval"] == 100

    def test_from_dict_partial(self):
        """Missing sections and keys use defaults."""
        config = config_from_dict({"logger": {"timestamped": True}})
        assert config.logger.timestamped is True
        assert config.logger.directory == "logs"
        assert config.batch == BatchConfig()

    def test_from_dict_unknown_key(self):
        """Unknown keys are rejected."""
        with pytest.raises(ValueError):
            config_from_dict({"logger": {"colour": "blue"}})

    def test_json_roundtrip(self, temp_dir):
        """A saved config loads back equal."""
        config = Config(
            logger=LoggerConfig(directory="out", max_series=8),
            batch=BatchConfig(save_interval=5, clear_on_final=True),
        )
        path = temp_dir / "config.json"
        save_config(config, path)
        assert json.loads(path.read_text(encoding="utf-8"))["logger"]["max_series"] == 8
        assert load_config(path) == config
