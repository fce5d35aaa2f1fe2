"""Property definitions and the property registry.

A Property describes a well-known metadata attribute: its qualified name,
whether it maps to one slot (SIMPLE) or fans out to several (COMPOSITE),
the type of value it holds, and whether it may hold more than one value.

Definitions are immutable. SIMPLE definitions created through the factory
functions in this module are registered in the default registry so that
bare string keys naming them resolve to the same storage slot.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from loguru import logger

from docmeta.core.exceptions import PropertyRegistryError, PropertyTypeError
from docmeta.metadata.names import QualifiedName


class PropertyType(Enum):
    """How a property maps onto storage slots."""

    SIMPLE = "simple"
    COMPOSITE = "composite"


class ValueType(Enum):
    """Type of the values a property holds."""

    TEXT = "text"
    INTEGER = "integer"
    REAL = "real"
    RATIONAL = "rational"
    DATE = "date"
    BOOLEAN = "boolean"
    URI = "uri"
    URL = "url"
    LOCALE = "locale"
    MIME_TYPE = "mime_type"
    PROPER_NAME = "proper_name"
    OPEN_CHOICE = "open_choice"
    CLOSED_CHOICE = "closed_choice"


@dataclass(frozen=True)
class Property:
    """Immutable definition of a well-known metadata attribute.

    Attributes:
        qname: Qualified name (a COMPOSITE shares its primary's name).
        property_type: SIMPLE or COMPOSITE.
        value_type: Type of the stored values.
        multi_value_permitted: Whether more than one value may be held.
        internal: True for properties set by the processing pipeline
            rather than extracted from document content.
        primary: Primary property of a COMPOSITE.
        secondaries: Secondary properties a COMPOSITE fans out to.
    """

    qname: QualifiedName
    property_type: PropertyType = PropertyType.SIMPLE
    value_type: ValueType = ValueType.TEXT
    multi_value_permitted: bool = False
    internal: bool = False
    primary: Property | None = None
    secondaries: tuple[Property, ...] = ()

    def __post_init__(self) -> None:
        if self.property_type is PropertyType.COMPOSITE:
            if self.primary is None:
                raise ValueError("composite property requires a primary property")
            for member in (self.primary, *self.secondaries):
                if member.property_type is not PropertyType.SIMPLE:
                    raise PropertyTypeError(
                        PropertyType.SIMPLE, member.property_type, member.name
                    )

    @property
    def name(self) -> str:
        """Display name, e.g. ``"dc:title"``."""
        return self.qname.qualified

    @property
    def is_composite(self) -> bool:
        return self.property_type is PropertyType.COMPOSITE

    @property
    def primary_property(self) -> Property:
        """The property typed accessors are checked against."""
        if self.primary is not None:
            return self.primary
        return self

    def __str__(self) -> str:
        return self.name


# =============================================================================
# Registry
# =============================================================================


class PropertyRegistry:
    """Registry of SIMPLE property definitions keyed by display name.

    Example:
        registry = PropertyRegistry()
        registry.register(title)
        registry.get("dc:title")  # title
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._properties: dict[str, Property] = {}

    def register(self, prop: Property, *, override: bool = False) -> Property:
        """Register a SIMPLE property definition.

        Registering an equal definition again is a no-op.

        Args:
            prop: Definition to register.
            override: Replace a different definition under the same name.

        Returns:
            The registered definition.

        Raises:
            ValueError: If the definition is COMPOSITE.
            PropertyRegistryError: If a different definition is registered
                under the same name and override is False.
        """
        if prop.is_composite:
            raise ValueError(f"Composite property '{prop.name}' cannot be registered")

        existing = self._properties.get(prop.name)
        if existing is not None and existing != prop and not override:
            raise PropertyRegistryError(
                f"Property '{prop.name}' is already registered with a different "
                f"definition. Use override=True to replace."
            )
        if existing != prop:
            logger.debug(f"Property registered: {prop.name} ({prop.value_type.name})")
        self._properties[prop.name] = prop
        return prop

    def unregister(self, name: str) -> bool:
        """Remove a registered property."""
        if name in self._properties:
            del self._properties[name]
            return True
        return False

    def get(self, name: str) -> Property | None:
        """Get a property by display name."""
        return self._properties.get(name)

    def is_registered(self, name: str) -> bool:
        """Check if a property is registered."""
        return name in self._properties

    def list_properties(self) -> list[Property]:
        """Get all registered properties sorted by name."""
        return [self._properties[name] for name in sorted(self._properties)]

    def __len__(self) -> int:
        return len(self._properties)

    def __contains__(self, name: object) -> bool:
        return name in self._properties


_default_registry: PropertyRegistry | None = None


def get_default_property_registry() -> PropertyRegistry:
    """Get the default global property registry."""
    global _default_registry
    if _default_registry is None:
        _default_registry = PropertyRegistry()
    return _default_registry


# =============================================================================
# Factories
# =============================================================================


def _simple(
    name: str,
    value_type: ValueType,
    *,
    namespace_uri: str | None,
    internal: bool,
    multi_valued: bool = False,
    registry: PropertyRegistry | None = None,
) -> Property:
    prop = Property(
        qname=QualifiedName.parse(name, namespace_uri),
        property_type=PropertyType.SIMPLE,
        value_type=value_type,
        multi_value_permitted=multi_valued,
        internal=internal,
    )
    if registry is None:
        registry = get_default_property_registry()
    return registry.register(prop)


def internal_text(
    name: str, namespace_uri: str | None = None, *, registry: PropertyRegistry | None = None
) -> Property:
    return _simple(name, ValueType.TEXT, namespace_uri=namespace_uri, internal=True, registry=registry)


def internal_text_bag(
    name: str, namespace_uri: str | None = None, *, registry: PropertyRegistry | None = None
) -> Property:
    """Multi-valued internal text property."""
    return _simple(
        name, ValueType.TEXT, namespace_uri=namespace_uri, internal=True, multi_valued=True,
        registry=registry,
    )


def internal_integer(
    name: str, namespace_uri: str | None = None, *, registry: PropertyRegistry | None = None
) -> Property:
    return _simple(name, ValueType.INTEGER, namespace_uri=namespace_uri, internal=True, registry=registry)


def internal_real(
    name: str, namespace_uri: str | None = None, *, registry: PropertyRegistry | None = None
) -> Property:
    return _simple(name, ValueType.REAL, namespace_uri=namespace_uri, internal=True, registry=registry)


def internal_rational(
    name: str, namespace_uri: str | None = None, *, registry: PropertyRegistry | None = None
) -> Property:
    return _simple(name, ValueType.RATIONAL, namespace_uri=namespace_uri, internal=True, registry=registry)


def internal_date(
    name: str, namespace_uri: str | None = None, *, registry: PropertyRegistry | None = None
) -> Property:
    return _simple(name, ValueType.DATE, namespace_uri=namespace_uri, internal=True, registry=registry)


def internal_boolean(
    name: str, namespace_uri: str | None = None, *, registry: PropertyRegistry | None = None
) -> Property:
    return _simple(name, ValueType.BOOLEAN, namespace_uri=namespace_uri, internal=True, registry=registry)


def internal_uri(
    name: str, namespace_uri: str | None = None, *, registry: PropertyRegistry | None = None
) -> Property:
    return _simple(name, ValueType.URI, namespace_uri=namespace_uri, internal=True, registry=registry)


def external_text(
    name: str, namespace_uri: str | None = None, *, registry: PropertyRegistry | None = None
) -> Property:
    return _simple(name, ValueType.TEXT, namespace_uri=namespace_uri, internal=False, registry=registry)


def external_text_bag(
    name: str, namespace_uri: str | None = None, *, registry: PropertyRegistry | None = None
) -> Property:
    """Multi-valued text property extracted from document content."""
    return _simple(
        name, ValueType.TEXT, namespace_uri=namespace_uri, internal=False, multi_valued=True,
        registry=registry,
    )


def external_integer(
    name: str, namespace_uri: str | None = None, *, registry: PropertyRegistry | None = None
) -> Property:
    return _simple(name, ValueType.INTEGER, namespace_uri=namespace_uri, internal=False, registry=registry)


def external_real(
    name: str, namespace_uri: str | None = None, *, registry: PropertyRegistry | None = None
) -> Property:
    return _simple(name, ValueType.REAL, namespace_uri=namespace_uri, internal=False, registry=registry)


def external_date(
    name: str, namespace_uri: str | None = None, *, registry: PropertyRegistry | None = None
) -> Property:
    return _simple(name, ValueType.DATE, namespace_uri=namespace_uri, internal=False, registry=registry)


def external_boolean(
    name: str, namespace_uri: str | None = None, *, registry: PropertyRegistry | None = None
) -> Property:
    return _simple(name, ValueType.BOOLEAN, namespace_uri=namespace_uri, internal=False, registry=registry)


def composite(primary: Property, secondaries: Iterable[Property] = ()) -> Property:
    """Build a COMPOSITE property over a primary and secondary properties.

    Writes to the composite reach the primary slot and every secondary
    slot. The composite shares the primary's name, value type and
    multi-value permission; it is not itself registered.

    Raises:
        PropertyTypeError: If the primary or a secondary is not SIMPLE.
    """
    return Property(
        qname=primary.qname,
        property_type=PropertyType.COMPOSITE,
        value_type=primary.value_type,
        multi_value_permitted=primary.multi_value_permitted,
        internal=primary.internal,
        primary=primary,
        secondaries=tuple(secondaries),
    )
