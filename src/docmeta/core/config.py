"""Configuration management for docmeta."""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass
class DateConfig:
    """Date normalization configuration."""

    # IANA zone for timestamps without an offset (None = system local zone)
    default_timezone: str | None = None


@dataclass
class Config:
    """Main application configuration."""

    codec: str = "xml"  # Value escaping codec: "xml" or "none"
    dates: DateConfig = field(default_factory=DateConfig)
    catalog_paths: list[Path] = field(default_factory=list)
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        config = cls()
        config._apply_env()
        return config

    @classmethod
    def from_file(cls, path: Path | str) -> "Config":
        """Load configuration from a TOML file, then apply env overrides.

        Args:
            path: Path to the TOML configuration file.

        Returns:
            Config with file values and environment overrides applied.
        """
        with open(path, "rb") as f:
            data = tomllib.load(f)

        config = cls()
        config._apply_mapping(data)
        config._apply_env()
        return config

    @classmethod
    def from_env_or_file(cls, path: Path | str | None = None) -> "Config":
        """Load from an explicit path, DOCMETA_CONFIG, or the environment."""
        if path is None:
            path = os.environ.get("DOCMETA_CONFIG") or None
        if path is not None:
            return cls.from_file(path)
        return cls.from_env()

    def _apply_mapping(self, data: dict[str, Any]) -> None:
        if codec := data.get("codec"):
            self.codec = str(codec)
        if level := data.get("log_level"):
            self.log_level = str(level).upper()
        if catalogs := data.get("catalog_paths"):
            self.catalog_paths = [Path(p) for p in catalogs]

        dates = data.get("dates", {})
        if tz := dates.get("default_timezone"):
            self.dates.default_timezone = str(tz)

    def _apply_env(self) -> None:
        if codec := os.environ.get("DOCMETA_CODEC"):
            self.codec = codec

        if tz := os.environ.get("DOCMETA_TIMEZONE"):
            self.dates.default_timezone = tz

        if catalogs := os.environ.get("DOCMETA_CATALOG"):
            self.catalog_paths = [Path(p) for p in catalogs.split(os.pathsep) if p]

        if level := os.environ.get("DOCMETA_LOG_LEVEL"):
            self.log_level = level.upper()
