"""
Tests for configuration loading.
"""

from pathlib import Path

import pytest

from careslots.config import AppConfig, DefaultsConfig


def _write(tmp_path: Path, content: str) -> Path:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(content, encoding="utf-8")
    return config_path


class TestAppConfig:
    """Tests for AppConfig."""

    def test_defaults(self):
        """Test the built-in defaults."""
        config = AppConfig()

        assert config.defaults.slot_duration_minutes == 30
        assert config.data_file is None
        assert config.api is None
        assert config.log_level == "WARNING"

    def test_load_from_yaml(self, tmp_path):
        """Test loading a full configuration."""
        config_path = _write(
            tmp_path,
            "defaults:\n"
            "  slot_duration_minutes: 60\n"
            "api:\n"
            "  base_url: https://api.example.com/api/\n"
            "  token: secret\n"
            "log_level: debug\n",
        )

        config = AppConfig.load_from_yaml(config_path)

        assert config.defaults.slot_duration_minutes == 60
        assert config.api.base_url == "https://api.example.com/api"
        assert config.api.token == "secret"
        assert config.api.timeout_seconds == 10
        assert config.log_level == "DEBUG"

    def test_relative_data_file_resolves_next_to_config(self, tmp_path):
        """Test that data_file is relative to the config file."""
        config_path = _write(tmp_path, "data_file: providers.json\n")

        config = AppConfig.load_from_yaml(config_path)

        assert config.data_file == tmp_path / "providers.json"

    def test_empty_file_uses_defaults(self, tmp_path):
        """Test that an empty file is a valid configuration."""
        config = AppConfig.load_from_yaml(_write(tmp_path, ""))

        assert config.defaults.slot_duration_minutes == 30

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            AppConfig.load_from_yaml(tmp_path / "config.yaml")

    def test_invalid_yaml(self, tmp_path):
        """Test that broken YAML raises ValueError."""
        with pytest.raises(ValueError, match="Invalid YAML"):
            AppConfig.load_from_yaml(_write(tmp_path, "defaults: [unclosed\n"))

    def test_non_mapping_root(self, tmp_path):
        """Test that the root must be a mapping."""
        with pytest.raises(ValueError, match="mapping"):
            AppConfig.load_from_yaml(_write(tmp_path, "- just\n- a list\n"))

    def test_unknown_log_level(self):
        """Test that unknown log levels are rejected."""
        with pytest.raises(ValueError):
            AppConfig(log_level="chatty")

    def test_invalid_api_url(self):
        """Test that the API URL needs a scheme."""
        with pytest.raises(ValueError):
            AppConfig(api={"base_url": "api.example.com"})


class TestDefaultsConfig:
    """Tests for DefaultsConfig."""

    @pytest.mark.parametrize("duration", [0, -15, 1441])
    def test_invalid_duration(self, duration):
        """Test that the slot duration must fit within one day."""
        with pytest.raises(ValueError, match="slot_duration_minutes"):
            DefaultsConfig(slot_duration_minutes=duration)

    def test_valid_duration(self):
        """Test a typical slot duration."""
        assert DefaultsConfig(slot_duration_minutes=45).slot_duration_minutes == 45
