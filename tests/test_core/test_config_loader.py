"""
Tests for the configuration loader module.

Tests config loading, parsing, path resolution, and error handling.
"""

import json
import pytest
from pathlib import Path

from textkit.core.config_loader import (
    Config,
    PathsConfig,
    TextConfig,
    get_config,
    reload_config,
)
from textkit.core.exceptions import ConfigurationError


class TestPathsConfig:
    """Tests for PathsConfig dataclass."""

    def test_paths_config_creation(self, temp_dir: Path):
        """Test creating PathsConfig with a logs directory."""
        config = PathsConfig(logs_directory=temp_dir / "logs")

        assert config.logs_directory == temp_dir / "logs"

    def test_paths_config_default(self):
        """Test that file logging is disabled by default."""
        assert PathsConfig().logs_directory is None


class TestConfigFromFile:
    """Tests for loading config from file."""

    def test_load_valid_config(self, temp_config: Path, reset_config_singleton):
        """Test loading a valid configuration file."""
        config = Config.from_file(temp_config)

        assert config.text.slug_separator == "_"
        assert config.text.snake_delimiter == "-"
        assert config.text.limit_length == 20
        assert config.text.words_end == " [more]"
        assert config.logging.level == "DEBUG"

    def test_load_missing_config_raises_error(self, temp_dir: Path):
        """Test that loading non-existent config raises ConfigurationError."""
        fake_path = temp_dir / "nonexistent" / "config.json"

        with pytest.raises(ConfigurationError) as exc_info:
            Config.from_file(fake_path)

        assert "not found" in str(exc_info.value.message).lower()

    def test_load_invalid_json_raises_error(self, temp_dir: Path):
        """Test that invalid JSON raises ConfigurationError."""
        config_dir = temp_dir / "config"
        config_dir.mkdir()
        config_path = config_dir / "config.json"
        config_path.write_text("{ invalid json }")

        with pytest.raises(ConfigurationError) as exc_info:
            Config.from_file(config_path)

        assert "invalid json" in str(exc_info.value.message).lower()

    def test_load_non_object_raises_error(self, temp_dir: Path):
        """Test that a JSON document that is not an object is rejected."""
        config_path = temp_dir / "config.json"
        config_path.write_text("[1, 2, 3]")

        with pytest.raises(ConfigurationError):
            Config.from_file(config_path)

    def test_config_resolves_relative_paths(self, temp_dir: Path):
        """Test that a relative logs directory is resolved from the project root."""
        config_dir = temp_dir / "config"
        config_dir.mkdir()
        config_path = config_dir / "config.json"
        config_path.write_text(json.dumps({"paths": {"logs_directory": "output/logs"}}))

        config = Config.from_file(config_path)

        assert config.paths.logs_directory.is_absolute()
        assert config.paths.logs_directory == temp_dir.resolve() / "output" / "logs"

    def test_config_default_values(self, temp_dir: Path, reset_config_singleton):
        """Test that missing config values get defaults."""
        config_dir = temp_dir / "config"
        config_dir.mkdir()
        config_path = config_dir / "config.json"
        config_path.write_text(json.dumps({"text": {"limit_length": 50}}))

        config = Config.from_file(config_path)

        assert config.text.limit_length == 50
        assert config.text.slug_separator == "-"
        assert config.text.random_length == 16
        assert config.paths.logs_directory is None
        assert config.logging.backup_count == 5

    def test_defaults_match_text_config(self):
        """Test that Config.defaults() carries the TextConfig defaults."""
        config = Config.defaults()

        assert config.text == TextConfig()


class TestGetConfig:
    """Tests for the get_config singleton function."""

    def test_get_config_returns_same_instance(self, temp_config: Path, reset_config_singleton):
        """Test that get_config returns singleton instance."""
        config1 = get_config(temp_config)
        config2 = get_config()

        assert config1 is config2

    def test_get_config_searches_upward(
        self, temp_config: Path, monkeypatch, reset_config_singleton
    ):
        """Test that config/config.json is found from a nested directory."""
        nested = temp_config.parent.parent / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)

        config = get_config()

        assert config.text.slug_separator == "_"

    def test_get_config_without_file_raises(
        self, temp_dir: Path, monkeypatch, reset_config_singleton
    ):
        """Test that a missing config/config.json raises ConfigurationError."""
        monkeypatch.chdir(temp_dir)

        with pytest.raises(ConfigurationError):
            get_config()

    def test_reload_config_creates_new_instance(self, temp_config: Path, reset_config_singleton):
        """Test that reload_config creates a fresh instance."""
        _config1 = get_config(temp_config)  # noqa: F841

        with open(temp_config, "r") as f:
            data = json.load(f)
        data["text"]["slug_separator"] = "."
        with open(temp_config, "w") as f:
            json.dump(data, f)

        config2 = reload_config(temp_config)

        assert config2.text.slug_separator == "."
