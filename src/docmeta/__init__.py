"""docmeta - typed, multi-valued metadata for extracted documents."""

__version__ = "1.0.0"

from docmeta.core.exceptions import DocMetaError, PropertyTypeError
from docmeta.metadata import Metadata, Property, PropertyType, ValueType, catalog

__all__ = [
    "__version__",
    "DocMetaError",
    "PropertyTypeError",
    "Metadata",
    "Property",
    "PropertyType",
    "ValueType",
    "catalog",
]
