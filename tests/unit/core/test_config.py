"""Tests for configuration loading."""

import os
from pathlib import Path

import pytest

from docmeta.core.config import Config, DateConfig

ENV_VARS = (
    "DOCMETA_CODEC",
    "DOCMETA_TIMEZONE",
    "DOCMETA_CATALOG",
    "DOCMETA_LOG_LEVEL",
    "DOCMETA_CONFIG",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Clear docmeta environment variables for every test."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestConfigDefaults:
    """Tests for default configuration values."""

    def test_defaults(self):
        """Should use XML escaping, local time and WARNING logging."""
        config = Config()

        assert config.codec == "xml"
        assert config.dates == DateConfig()
        assert config.dates.default_timezone is None
        assert config.catalog_paths == []
        assert config.log_level == "WARNING"


class TestConfigFromEnv:
    """Tests for Config.from_env()."""

    def test_no_env(self):
        """Without variables the defaults should apply."""
        assert Config.from_env() == Config()

    def test_env_overrides(self, monkeypatch):
        """Environment variables should override defaults."""
        monkeypatch.setenv("DOCMETA_CODEC", "none")
        monkeypatch.setenv("DOCMETA_TIMEZONE", "Europe/Paris")
        monkeypatch.setenv("DOCMETA_LOG_LEVEL", "debug")

        config = Config.from_env()

        assert config.codec == "none"
        assert config.dates.default_timezone == "Europe/Paris"
        assert config.log_level == "DEBUG"

    def test_catalog_path_list(self, monkeypatch, tmp_path):
        """DOCMETA_CATALOG should split on the path separator."""
        a = tmp_path / "a.yaml"
        b = tmp_path / "b.yaml"
        monkeypatch.setenv("DOCMETA_CATALOG", f"{a}{os.pathsep}{b}")

        assert Config.from_env().catalog_paths == [a, b]


class TestConfigFromFile:
    """Tests for Config.from_file()."""

    def test_from_file(self, tmp_path):
        """Should read values from a TOML file."""
        path = tmp_path / "docmeta.toml"
        path.write_text(
            'codec = "none"\n'
            'log_level = "info"\n'
            'catalog_paths = ["one.yaml", "two.yaml"]\n'
            "\n"
            "[dates]\n"
            'default_timezone = "UTC"\n'
        )

        config = Config.from_file(path)

        assert config.codec == "none"
        assert config.log_level == "INFO"
        assert config.catalog_paths == [Path("one.yaml"), Path("two.yaml")]
        assert config.dates.default_timezone == "UTC"

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        """Environment variables should win over file values."""
        path = tmp_path / "docmeta.toml"
        path.write_text('codec = "none"\n')
        monkeypatch.setenv("DOCMETA_CODEC", "xml")

        assert Config.from_file(path).codec == "xml"

    def test_partial_file(self, tmp_path):
        """Missing keys should keep their defaults."""
        path = tmp_path / "docmeta.toml"
        path.write_text("[dates]\n")

        assert Config.from_file(path) == Config()

    def test_missing_file_raises(self, tmp_path):
        """A missing file should raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            Config.from_file(tmp_path / "missing.toml")


class TestConfigFromEnvOrFile:
    """Tests for Config.from_env_or_file()."""

    def test_explicit_path(self, tmp_path):
        """An explicit path should be loaded."""
        path = tmp_path / "docmeta.toml"
        path.write_text('codec = "none"\n')

        assert Config.from_env_or_file(path).codec == "none"

    def test_config_env_var(self, tmp_path, monkeypatch):
        """DOCMETA_CONFIG should name the file when no path is given."""
        path = tmp_path / "docmeta.toml"
        path.write_text('log_level = "error"\n')
        monkeypatch.setenv("DOCMETA_CONFIG", str(path))

        assert Config.from_env_or_file().log_level == "ERROR"

    def test_env_only(self):
        """Without a path or DOCMETA_CONFIG the environment is used."""
        assert Config.from_env_or_file() == Config()
