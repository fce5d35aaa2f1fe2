"""Core configuration, errors and logging for docmeta."""

from .config import Config, DateConfig
from .exceptions import (
    CatalogError,
    DocMetaError,
    PropertyRegistryError,
    PropertyTypeError,
)
from .logging import configure_logging

__all__ = [
    "Config",
    "DateConfig",
    "DocMetaError",
    "PropertyTypeError",
    "PropertyRegistryError",
    "CatalogError",
    "configure_logging",
]
