"""Tests for configuration loading and validation."""

import os
from pathlib import Path

import pytest
from pydantic import ValidationError

from fix_locator.config.loader import load_config, substitute_env_vars, validate_config
from fix_locator.config.schema import (
    FinderConfig,
    FixLocatorConfig,
    LocatorConfig,
    LoggingConfig,
    PreferencesConfig,
)


class TestSubstituteEnvVars:
    """Test environment variable substitution."""

    def test_substitute_single_var(self, monkeypatch: pytest.MonkeyPatch):
        """Test substituting a single environment variable."""
        monkeypatch.setenv("TEST_PREFS_DIR", "/tmp/prefs")
        assert substitute_env_vars("path: ${TEST_PREFS_DIR}/p.json") == "path: /tmp/prefs/p.json"

    def test_missing_env_var_raises(self):
        """Test that missing environment variables raise ValueError."""
        os.environ.pop("FIX_LOCATOR_TEST_MISSING", None)
        with pytest.raises(ValueError, match="FIX_LOCATOR_TEST_MISSING"):
            substitute_env_vars("${FIX_LOCATOR_TEST_MISSING}")

    def test_no_substitution_needed(self):
        """Test text without variables."""
        assert substitute_env_vars("level: INFO") == "level: INFO"


class TestLocatorConfig:
    """Test LocatorConfig validation."""

    def test_default_values(self):
        """Test default locator configuration values."""
        config = LocatorConfig()
        assert config.min_text_anchor_length == 3
        assert config.text_window == 5
        assert config.class_window == 10
        assert config.comment_lookback == 10

    def test_window_bounds(self):
        """Test that windows are bounded."""
        LocatorConfig(text_window=0)
        LocatorConfig(text_window=50)

        with pytest.raises(ValidationError):
            LocatorConfig(text_window=-1)
        with pytest.raises(ValidationError):
            LocatorConfig(class_window=101)


class TestFinderConfig:
    """Test FinderConfig validation."""

    def test_default_values(self):
        """Test default finder configuration values."""
        config = FinderConfig()
        assert ".tsx" in config.source_extensions
        assert config.excluded_paths == ["node_modules"]
        assert config.max_ranked_files == 10
        assert config.auto_select_max_results == 3

    def test_extensions_lowercased(self):
        """Test that extensions are normalized to lowercase."""
        assert FinderConfig(source_extensions=[".TSX", ".Vue"]).source_extensions == [
            ".tsx",
            ".vue",
        ]

    @pytest.mark.parametrize("ext", ["tsx", ".", ""])
    def test_invalid_extension_rejected(self, ext):
        """Test that extensions without a leading dot are rejected."""
        with pytest.raises(ValidationError):
            FinderConfig(source_extensions=[ext])


class TestPreferencesConfig:
    """Test PreferencesConfig validation."""

    def test_default_keys(self):
        """Test default storage keys."""
        config = PreferencesConfig()
        assert config.repo_key == "domain-repos"
        assert config.search_type_key == "search-types"

    def test_empty_key_rejected(self):
        """Test that empty keys are rejected."""
        with pytest.raises(ValidationError):
            PreferencesConfig(repo_key="")


class TestLoggingConfig:
    """Test LoggingConfig validation."""

    def test_invalid_level_rejected(self):
        """Test that unknown log levels are rejected."""
        with pytest.raises(ValidationError):
            LoggingConfig(level="TRACE")


class TestFixLocatorConfig:
    """Test the root settings."""

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch):
        """Test nested settings from environment variables."""
        monkeypatch.setenv("FIX_LOCATOR_LOCATOR__TEXT_WINDOW", "7")
        assert FixLocatorConfig().locator.text_window == 7


class TestLoadConfig:
    """Test configuration loading from YAML."""

    def test_load_valid_config(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        """Test loading a valid configuration file."""
        monkeypatch.setenv("TEST_PREFS_PATH", str(tmp_path / "prefs.json"))
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            """
locator:
  text_window: 8
finder:
  source_extensions: [".tsx", ".jsx"]
  max_ranked_files: 5
preferences:
  path: ${TEST_PREFS_PATH}
logging:
  level: DEBUG
  format: json
"""
        )

        config = load_config(config_file)

        assert config.locator.text_window == 8
        assert config.locator.class_window == 10
        assert config.finder.source_extensions == [".tsx", ".jsx"]
        assert config.finder.max_ranked_files == 5
        assert config.preferences.path == tmp_path / "prefs.json"
        assert config.logging.level == "DEBUG"
        assert config.logging.format == "json"

    def test_empty_file_uses_defaults(self, tmp_path: Path):
        """Test that an empty file gives the default configuration."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")

        config = load_config(config_file)
        assert config.locator == LocatorConfig()

    def test_missing_file_raises(self, tmp_path: Path):
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_non_mapping_root_raises(self, tmp_path: Path):
        """Test that a list root is rejected."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("- a\n- b\n")

        with pytest.raises(ValueError, match="mapping"):
            load_config(config_file)

    def test_schema_error_raises(self, tmp_path: Path):
        """Test that schema violations raise ValidationError."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("finder:\n  max_ranked_files: 0\n")

        with pytest.raises(ValidationError):
            load_config(config_file)


class TestValidateConfig:
    """Test cross-field validation."""

    def test_same_preference_keys_rejected(self):
        """Test that the two preference keys must differ."""
        config = FixLocatorConfig(
            preferences=PreferencesConfig(repo_key="prefs", search_type_key="prefs")
        )
        with pytest.raises(ValueError, match="must differ"):
            validate_config(config)

    def test_auto_select_above_ranked_files_rejected(self):
        """Test that auto-selection cannot exceed the ranked file limit."""
        config = FixLocatorConfig(
            finder=FinderConfig(max_ranked_files=2, auto_select_max_results=3)
        )
        with pytest.raises(ValueError, match="auto_select_max_results"):
            validate_config(config)

    def test_defaults_valid(self):
        """Test that the defaults pass validation."""
        validate_config(FixLocatorConfig())
