"""Well-known property definitions and catalog loading.

Defines the core cross-format properties (Dublin Core, DC Terms, XMP,
TIFF and OpenDocument meta) and loads additional definitions from YAML
catalog files.

Composite properties here keep legacy vendor keys in step with the
standard ones: setting CREATOR also fills ``meta:author``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from loguru import logger

from docmeta.core.exceptions import CatalogError
from docmeta.metadata.names import NAMESPACE_PREFIX_DELIMITER, QualifiedName
from docmeta.metadata.properties import (
    Property,
    PropertyRegistry,
    PropertyType,
    ValueType,
    composite,
    external_date,
    external_integer,
    external_text,
    external_text_bag,
    get_default_property_registry,
    internal_rational,
)

# =============================================================================
# Namespaces
# =============================================================================

DC = "http://purl.org/dc/elements/1.1/"
DCTERMS = "http://purl.org/dc/terms/"
XMP = "http://ns.adobe.com/xap/1.0/"
XMP_TPG = "http://ns.adobe.com/xap/1.0/t/pg/"
TIFF = "http://ns.adobe.com/tiff/1.0/"
META = "urn:oasis:names:tc:opendocument:xmlns:meta:1.0"

NAMESPACES: dict[str, str] = {
    "dc": DC,
    "dcterms": DCTERMS,
    "xmp": XMP,
    "xmpTPg": XMP_TPG,
    "tiff": TIFF,
    "meta": META,
}

# =============================================================================
# Core properties
# =============================================================================

TITLE = external_text("dc:title", DC)
DESCRIPTION = external_text("dc:description", DC)
LANGUAGE = external_text("dc:language", DC)
PUBLISHER = external_text("dc:publisher", DC)
IDENTIFIER = external_text("dc:identifier", DC)
FORMAT = external_text("dc:format", DC)
RIGHTS = external_text("dc:rights", DC)
CONTRIBUTOR = external_text_bag("dc:contributor", DC)

CREATOR = composite(
    external_text_bag("dc:creator", DC),
    [external_text_bag("meta:author", META)],
)
KEYWORDS = composite(
    external_text_bag("dc:subject", DC),
    [external_text_bag("meta:keyword", META)],
)
CREATED = composite(
    external_date("dcterms:created", DCTERMS),
    [external_date("meta:creation-date", META), external_date("xmp:CreateDate", XMP)],
)
MODIFIED = composite(
    external_date("dcterms:modified", DCTERMS),
    [external_date("meta:save-date", META), external_date("xmp:ModifyDate", XMP)],
)

PAGE_COUNT = external_integer("xmpTPg:NPages", XMP_TPG)
IMAGE_WIDTH = external_integer("tiff:ImageWidth", TIFF)
IMAGE_LENGTH = external_integer("tiff:ImageLength", TIFF)
RESOLUTION_HORIZONTAL = internal_rational("tiff:XResolution", TIFF)
RESOLUTION_VERTICAL = internal_rational("tiff:YResolution", TIFF)


# =============================================================================
# Catalog files
# =============================================================================


def load_catalog(path: Path | str, registry: PropertyRegistry | None = None) -> list[Property]:
    """Load property definitions from a YAML (or JSON) catalog file.

    Expected format:

        namespaces:
          acme: https://example.com/ns/acme/
        properties:
          - name: acme:pages
            type: integer
          - name: acme:reviewer
            multi_valued: true
            internal: true
        composites:
          - primary: acme:reviewer
            secondaries: [meta:author]

    Simple properties are registered; composites reference properties by
    name (from this file or already registered) and are returned only.

    Args:
        path: Path to the catalog file.
        registry: Registry to populate (default: the global registry).

    Returns:
        Every definition read, in file order.

    Raises:
        CatalogError: If the file cannot be read or is malformed.
        PropertyRegistryError: If a definition conflicts with a registered one.
    """
    path = Path(path)
    if registry is None:
        registry = get_default_property_registry()

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise CatalogError(path, str(e)) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise CatalogError(path, "top level must be a mapping")

    namespaces = {**NAMESPACES, **(data.get("namespaces") or {})}
    loaded: list[Property] = []

    for entry in data.get("properties") or []:
        prop = _parse_property(entry, namespaces, path)
        registry.register(prop)
        loaded.append(prop)

    for entry in data.get("composites") or []:
        if not isinstance(entry, dict) or "primary" not in entry:
            raise CatalogError(path, f"composite entry needs a primary: {entry!r}")
        primary = _lookup(registry, entry["primary"], path)
        secondaries = [_lookup(registry, name, path) for name in entry.get("secondaries") or []]
        loaded.append(composite(primary, secondaries))

    logger.info(f"Loaded {len(loaded)} properties from catalog {path}")
    return loaded


def _parse_property(entry: Any, namespaces: dict[str, str], path: Path) -> Property:
    if not isinstance(entry, dict) or not entry.get("name"):
        raise CatalogError(path, f"property entry needs a name: {entry!r}")

    name = str(entry["name"])
    type_name = str(entry.get("type", "text")).lower()
    try:
        value_type = ValueType(type_name)
    except ValueError:
        raise CatalogError(path, f"unknown value type {type_name!r} for {name}") from None

    namespace_uri = entry.get("namespace")
    if namespace_uri is None and NAMESPACE_PREFIX_DELIMITER in name:
        namespace_uri = namespaces.get(name.split(NAMESPACE_PREFIX_DELIMITER)[0])

    return Property(
        qname=QualifiedName.parse(name, namespace_uri),
        property_type=PropertyType.SIMPLE,
        value_type=value_type,
        multi_value_permitted=bool(entry.get("multi_valued", False)),
        internal=bool(entry.get("internal", False)),
    )


def _lookup(registry: PropertyRegistry, name: Any, path: Path) -> Property:
    prop = registry.get(str(name))
    if prop is None:
        raise CatalogError(path, f"unknown property {name!r} in composite")
    return prop
