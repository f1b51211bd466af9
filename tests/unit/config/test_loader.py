"""Tests for config loader with JSON and YAML support."""

import json
from pathlib import Path

from pydantic import ValidationError
import pytest
import yaml

import workfs.core.config.loader as config_loader
from workfs.core.config import AppConfig


@pytest.fixture
def sample_config_data():
    """Sample configuration data for testing."""
    return {
        "facade": {"default_scheme": "memfs", "use_trash": False},
        "memory_scheme": "memfs",
        "readonly_schemes": ["archive"],
        "logging": {"level": "DEBUG", "format": "%(message)s"},
    }


def test_detect_format_json():
    """Test format detection for JSON files."""
    assert config_loader.detect_format("config.json") == "json"
    assert config_loader.detect_format(Path("CONFIG.JSON")) == "json"


def test_detect_format_yaml():
    """Test format detection for YAML files."""
    assert config_loader.detect_format("config.yaml") == "yaml"
    assert config_loader.detect_format("config.yml") == "yaml"


def test_detect_format_invalid():
    """Test format detection for invalid extensions."""
    with pytest.raises(ValueError, match="Unsupported config format"):
        config_loader.detect_format("config.txt")


def test_load_config_json(tmp_path, sample_config_data):
    """Test loading JSON config."""
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps(sample_config_data))

    config = config_loader.load_config(config_file)
    assert config["facade"]["default_scheme"] == "memfs"
    assert config["readonly_schemes"] == ["archive"]


def test_load_config_yaml(tmp_path, sample_config_data):
    """Test loading YAML config."""
    config_file = tmp_path / "config.yaml"
    config_file.write_text(yaml.safe_dump(sample_config_data))

    assert config_loader.load_config(config_file) == sample_config_data


def test_load_config_missing_file(tmp_path):
    """Test loading a missing file raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        config_loader.load_config(tmp_path / "missing.yaml")


def test_load_config_invalid_json(tmp_path):
    """Test invalid JSON raises ValueError."""
    config_file = tmp_path / "bad.json"
    config_file.write_text("{not json")

    with pytest.raises(ValueError, match="Invalid JSON"):
        config_loader.load_config(config_file)


def test_load_config_invalid_yaml(tmp_path):
    """Test invalid YAML raises ValueError."""
    config_file = tmp_path / "bad.yaml"
    config_file.write_text("key: [unclosed")

    with pytest.raises(ValueError, match="Invalid YAML"):
        config_loader.load_config(config_file)


def test_load_config_empty_yaml(tmp_path):
    """Test an empty YAML file yields an empty mapping."""
    config_file = tmp_path / "empty.yaml"
    config_file.write_text("")

    assert config_loader.load_config(config_file) == {}


def test_load_config_non_mapping(tmp_path):
    """Test a top-level list is rejected."""
    config_file = tmp_path / "list.yaml"
    config_file.write_text("- a\n- b\n")

    with pytest.raises(ValueError, match="Expected a mapping"):
        config_loader.load_config(config_file)


class TestLoadAppConfig:
    """Tests for validated app config loading."""

    def test_explicit_path(self, tmp_path, sample_config_data, monkeypatch):
        """Test a config file is validated into AppConfig."""
        monkeypatch.delenv(config_loader.LOG_LEVEL_ENV, raising=False)
        config_file = tmp_path / "workfs.yaml"
        config_file.write_text(yaml.safe_dump(sample_config_data))

        config = config_loader.load_app_config(config_file)

        assert isinstance(config, AppConfig)
        assert config.facade.default_scheme == "memfs"
        assert config.facade.use_trash is False
        assert config.readonly_schemes == ["archive"]
        assert config.logging.level == "DEBUG"

    def test_missing_default_file_uses_defaults(self, tmp_path, monkeypatch):
        """Test defaults apply when workfs.yaml is absent."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv(config_loader.LOG_LEVEL_ENV, raising=False)

        config = config_loader.load_app_config()

        assert config == AppConfig()
        assert config.facade.default_scheme == "file"
        assert config.facade.use_trash is True

    def test_default_file_is_picked_up(self, tmp_path, monkeypatch):
        """Test workfs.yaml in the working directory is loaded."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv(config_loader.LOG_LEVEL_ENV, raising=False)
        (tmp_path / "workfs.yaml").write_text("memory_scheme: scratch\n")

        assert config_loader.load_app_config().memory_scheme == "scratch"

    def test_explicit_missing_path_raises(self, tmp_path):
        """Test an explicit path must exist."""
        with pytest.raises(FileNotFoundError):
            config_loader.load_app_config(tmp_path / "nope.yaml")

    def test_env_overrides_log_level(self, tmp_path, sample_config_data, monkeypatch):
        """Test WORKFS_LOG_LEVEL wins over the file."""
        monkeypatch.setenv(config_loader.LOG_LEVEL_ENV, "warning")
        config_file = tmp_path / "workfs.json"
        config_file.write_text(json.dumps(sample_config_data))

        assert config_loader.load_app_config(config_file).logging.level == "WARNING"

    def test_invalid_values_raise_validation_error(self, tmp_path, monkeypatch):
        """Test invalid settings are rejected by validation."""
        monkeypatch.delenv(config_loader.LOG_LEVEL_ENV, raising=False)
        config_file = tmp_path / "workfs.yaml"
        config_file.write_text("logging:\n  level: LOUD\n")

        with pytest.raises(ValidationError):
            config_loader.load_app_config(config_file)
