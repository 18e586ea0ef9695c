"""Tests for manify.core.config."""

from pathlib import Path

import pytest

from manify.core.config import LoggingConfig, ManifyConfig, load_config
from manify.core.exceptions import ConfigurationError


class TestDefaults:
    """Test default configuration values."""

    def test_manify_config_defaults(self):
        """Test ManifyConfig defaults match the CLI defaults."""
        config = ManifyConfig()
        assert config.destination == "docs/"
        assert config.source == "."
        assert config.manifest_name == "composer.json"
        assert config.heading_prefix == "wp"
        assert config.scan_plugins is True
        assert config.logging == LoggingConfig()

    def test_missing_pyproject_gives_defaults(self, tmp_path, monkeypatch):
        """Test that no pyproject.toml in cwd yields defaults."""
        monkeypatch.chdir(tmp_path)
        assert load_config() == ManifyConfig()


class TestLoadFromToml:
    """Test loading [tool.manify] from TOML files."""

    def test_reads_tool_manify_table(self, tmp_path):
        """Test values from pyproject.toml are applied."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text(
            '[tool.manify]\n'
            'destination = "build/docs"\n'
            'heading_prefix = "acme"\n'
            'scan_plugins = false\n'
            '\n'
            '[tool.manify.logging]\n'
            'level = "debug"\n'
            'format = "rich"\n'
        )

        config = load_config(pyproject)

        assert config.destination == "build/docs"
        assert config.heading_prefix == "acme"
        assert config.scan_plugins is False
        assert config.logging.level == "DEBUG"
        assert config.logging.format == "rich"

    def test_pyproject_without_section_gives_defaults(self, tmp_path):
        """Test a pyproject.toml without [tool.manify] uses defaults."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[project]\nname = "x"\n')
        assert load_config(pyproject) == ManifyConfig()

    def test_flat_toml_file(self, tmp_path):
        """Test a standalone TOML file without a tool table."""
        config_file = tmp_path / "manify.toml"
        config_file.write_text('manifest_name = "plugin.json"\n')
        assert load_config(config_file).manifest_name == "plugin.json"

    def test_explicit_missing_file_raises(self, tmp_path):
        """Test an explicit path that does not exist is an error."""
        with pytest.raises(ConfigurationError, match="file not found"):
            load_config(tmp_path / "missing.toml")

    def test_invalid_toml_raises(self, tmp_path):
        """Test broken TOML is reported as a configuration error."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool.manify\n")
        with pytest.raises(ConfigurationError, match="invalid TOML"):
            load_config(pyproject)

    def test_unknown_key_raises(self, tmp_path):
        """Test unknown keys in [tool.manify] are rejected."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[tool.manify]\ndestinaton = "docs"\n')
        with pytest.raises(ConfigurationError, match="destinaton"):
            load_config(pyproject)

    def test_invalid_log_level_raises(self, tmp_path):
        """Test an unknown log level is rejected."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[tool.manify.logging]\nlevel = "loud"\n')
        with pytest.raises(ConfigurationError, match="unknown level"):
            load_config(pyproject)


class TestEnvironmentOverrides:
    """Test MANIFY_* environment variable overrides."""

    def test_env_overrides_toml(self, tmp_path, monkeypatch):
        """Test environment variables win over pyproject.toml."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[tool.manify]\ndestination = "build/docs"\n')
        monkeypatch.setenv("MANIFY_DESTINATION", "env/docs")
        monkeypatch.setenv("MANIFY_SCAN_PLUGINS", "no")
        monkeypatch.setenv("MANIFY_LOG_LEVEL", "info")

        config = load_config(pyproject)

        assert config.destination == "env/docs"
        assert config.scan_plugins is False
        assert config.logging.level == "INFO"

    def test_invalid_boolean_env_raises(self, tmp_path, monkeypatch):
        """Test an unparsable boolean is a configuration error."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("MANIFY_SCAN_PLUGINS", "maybe")
        with pytest.raises(ConfigurationError, match="invalid boolean"):
            load_config()

    def test_config_is_frozen(self):
        """Test configuration objects are immutable."""
        config = ManifyConfig()
        with pytest.raises(AttributeError):
            config.destination = "elsewhere"  # type: ignore[misc]


def test_default_destination_is_relative(tmp_path: Path, monkeypatch):
    """Test the default destination is the relative docs/ folder."""
    monkeypatch.chdir(tmp_path)
    assert not Path(load_config().destination).is_absolute()
