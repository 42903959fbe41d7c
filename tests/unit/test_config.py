"""Unit tests for configuration loading."""

from __future__ import annotations

from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest

from afas_update.config import CONFIG_FILE_NAME, ConfigLoader, UpdateConfig
from afas_update.constants import DEFAULT_CHANGE, DEFAULT_VALIDATION


class TestUpdateConfig:
    """Test suite for UpdateConfig class."""

    def test_default_config(self):
        """Test default configuration values."""
        config = UpdateConfig()

        assert config.schema_dir is None
        assert config.output_format == "json"
        assert config.pretty is False
        assert config.indent is None
        assert config.change_behavior == DEFAULT_CHANGE == 23
        assert config.validation_behavior == DEFAULT_VALIDATION == 7

    def test_config_is_immutable(self):
        """Test that config is frozen and cannot be modified."""
        config = UpdateConfig()

        with pytest.raises(FrozenInstanceError):
            config.pretty = True  # type: ignore[misc]

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"output_format": "yaml"},
            {"indent": 0},
            {"change_behavior": 64},
            {"change_behavior": -1},
            {"validation_behavior": 16},
        ],
    )
    def test_invalid_values_are_rejected(self, kwargs):
        """Out-of-range values raise ValueError."""
        with pytest.raises(ValueError):
            UpdateConfig(**kwargs)

    def test_from_env(self, monkeypatch, tmp_path):
        """Environment variables override the defaults."""
        monkeypatch.setenv("AFAS_SCHEMA_DIR", str(tmp_path))
        monkeypatch.setenv("AFAS_OUTPUT_FORMAT", " XML ")
        monkeypatch.setenv("AFAS_PRETTY", "yes")
        monkeypatch.setenv("AFAS_INDENT", "3")
        monkeypatch.setenv("AFAS_CHANGE_BEHAVIOR", "0")
        monkeypatch.setenv("AFAS_VALIDATION_BEHAVIOR", "15")

        config = UpdateConfig.from_env()

        assert config.schema_dir == tmp_path
        assert config.output_format == "xml"
        assert config.pretty is True
        assert config.indent == 3
        assert config.change_behavior == 0
        assert config.validation_behavior == 15


class TestConfigLoader:
    """Test suite for ConfigLoader."""

    def test_load_without_file_uses_environment(self, monkeypatch, tmp_path):
        """Without a config file the environment values are returned."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("AFAS_INDENT", "8")

        config = ConfigLoader.load()

        assert config.indent == 8
        assert config.output_format == "json"

    def test_load_from_toml(self, tmp_path):
        """All tables of the config file are applied."""
        config_file = tmp_path / CONFIG_FILE_NAME
        config_file.write_text(
            "[paths]\n"
            'schema_dir = "schemas"\n'
            "[output]\n"
            'format = "xml"\n'
            "pretty = true\n"
            "indent = 4\n"
            "[behavior]\n"
            "change = 55\n"
            "validation = 15\n",
            encoding="utf-8",
        )

        config = ConfigLoader.load(config_file)

        assert config.schema_dir == tmp_path / "schemas"
        assert config.output_format == "xml"
        assert config.pretty is True
        assert config.indent == 4
        assert config.change_behavior == 55
        assert config.validation_behavior == 15

    def test_absolute_schema_dir_is_kept(self, tmp_path):
        """An absolute schema_dir is not resolved against the file location."""
        schema_dir = Path(tmp_path / "elsewhere").resolve()
        config_file = tmp_path / CONFIG_FILE_NAME
        config_file.write_text(
            f"[paths]\nschema_dir = {str(schema_dir)!r}\n", encoding="utf-8"
        )

        assert ConfigLoader.load(config_file).schema_dir == schema_dir

    def test_broken_toml_warns_and_falls_back(self, tmp_path):
        """An unparsable file produces a warning and the environment config."""
        config_file = tmp_path / CONFIG_FILE_NAME
        config_file.write_text("[output\nformat = ", encoding="utf-8")

        with pytest.warns(UserWarning, match="Failed to load config"):
            config = ConfigLoader.load(config_file)

        assert config == UpdateConfig()

    def test_invalid_value_warns_and_falls_back(self, tmp_path):
        """A value rejected by UpdateConfig is reported as a warning."""
        config_file = tmp_path / CONFIG_FILE_NAME
        config_file.write_text('[output]\nformat = "yaml"\n', encoding="utf-8")

        with pytest.warns(UserWarning, match="output_format"):
            config = ConfigLoader.load(config_file)

        assert config.output_format == "json"
