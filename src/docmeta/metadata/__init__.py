"""Typed, multi-valued metadata container.

Submodules
----------
names
    QualifiedName, NamespaceRegistry, QualifiedNameResolver
properties
    Property definitions, PropertyRegistry and factory functions
catalog
    Well-known properties and YAML catalog loading
store
    AttributeStore: the ordered multimap behind a container
container
    Metadata: typed accessors and composite fan-out
dates
    DateNormalizer for ISO-8601 variants
codec
    Value escaping codecs
rendering
    XML tree rendering and XPath lookup

Example
-------
>>> from docmeta.metadata import Metadata, catalog
>>> metadata = Metadata()
>>> metadata.set(catalog.TITLE, "Report")
>>> metadata.add(catalog.CREATOR, "Alice")
>>> metadata.get("meta:author")
'Alice'
"""

# =============================================================================
# Names and properties
# =============================================================================
from docmeta.metadata.names import (
    ENTRY_NAMESPACE,
    ENTRY_PREFIX,
    NAMESPACE_PREFIX_DELIMITER,
    NamespaceRegistry,
    QualifiedName,
    QualifiedNameResolver,
)
from docmeta.metadata.properties import (
    Property,
    PropertyRegistry,
    PropertyType,
    ValueType,
    composite,
    external_boolean,
    external_date,
    external_integer,
    external_real,
    external_text,
    external_text_bag,
    get_default_property_registry,
    internal_boolean,
    internal_date,
    internal_integer,
    internal_rational,
    internal_real,
    internal_text,
    internal_text_bag,
    internal_uri,
)
from docmeta.metadata import catalog
from docmeta.metadata.catalog import load_catalog

# =============================================================================
# Storage and container
# =============================================================================
from docmeta.metadata.codec import IdentityCodec, ValueCodec, XmlEscapeCodec, get_codec
from docmeta.metadata.store import AttributeStore
from docmeta.metadata.container import Metadata

# =============================================================================
# Dates
# =============================================================================
from docmeta.metadata.dates import DateNormalizer, format_date, parse_date

__all__ = [
    # Names
    "ENTRY_NAMESPACE",
    "ENTRY_PREFIX",
    "NAMESPACE_PREFIX_DELIMITER",
    "NamespaceRegistry",
    "QualifiedName",
    "QualifiedNameResolver",
    # Properties
    "Property",
    "PropertyRegistry",
    "PropertyType",
    "ValueType",
    "composite",
    "external_boolean",
    "external_date",
    "external_integer",
    "external_real",
    "external_text",
    "external_text_bag",
    "get_default_property_registry",
    "internal_boolean",
    "internal_date",
    "internal_integer",
    "internal_rational",
    "internal_real",
    "internal_text",
    "internal_text_bag",
    "internal_uri",
    "catalog",
    "load_catalog",
    # Storage
    "ValueCodec",
    "XmlEscapeCodec",
    "IdentityCodec",
    "get_codec",
    "AttributeStore",
    "Metadata",
    # Dates
    "DateNormalizer",
    "parse_date",
    "format_date",
]
