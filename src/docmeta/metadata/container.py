"""Typed, multi-valued metadata container.

Metadata holds the attributes extracted from one document: a uniform
multimap of qualified names to string values, independent of the format
that produced them. Typed accessors and property constraints are layered
over the string storage:

- SIMPLE properties that do not permit multiple values reject a second
  ``add``.
- COMPOSITE properties fan every write out to their primary and
  secondary properties.
- Integer, real and date values are stored in canonical string form and
  parsed back on read; unparseable stored text reads as None.

A container is owned by one processing pass and is not synchronized;
callers sharing one across threads must lock around it.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping, Sequence
from datetime import date, datetime
from typing import TYPE_CHECKING, Union

from loguru import logger
from lxml import etree

from docmeta.core.exceptions import PropertyTypeError
from docmeta.metadata.codec import ValueCodec, get_codec
from docmeta.metadata.dates import DateNormalizer, load_timezone
from docmeta.metadata.names import QualifiedName, QualifiedNameResolver
from docmeta.metadata.properties import (
    Property,
    PropertyRegistry,
    PropertyType,
    ValueType,
    get_default_property_registry,
)
from docmeta.metadata.rendering import evaluate_xpath, to_element, to_xml_string
from docmeta.metadata.store import AttributeStore

if TYPE_CHECKING:
    from docmeta.core.config import Config

Key = Union[str, Property]
Value = Union[str, Sequence[str], None]

# Optional sign and decimal digits; readable integers fit in 32 bits
_INTEGER = re.compile(r"[+-]?\d+")
_INTEGER_MIN = -(2**31)
_INTEGER_MAX = 2**31 - 1


class Metadata:
    """A multi-valued metadata container.

    Keys are bare strings (``"title"``, ``"dc:title"``) or Property
    definitions. Strings naming a registered property share its slot.

    Example:
        metadata = Metadata()
        metadata.set("title", "Report")
        metadata.add("author", "Alice")
        metadata.add("author", "Bob")

        metadata.get_all("author")  # ["Alice", "Bob"]
        metadata.is_multi_valued("author")  # True
        metadata.size()  # 2
    """

    def __init__(
        self,
        registry: PropertyRegistry | None = None,
        codec: ValueCodec | None = None,
        dates: DateNormalizer | None = None,
    ) -> None:
        """Initialize an empty container.

        Args:
            registry: Property registry used to resolve string keys
                (default: the global registry).
            codec: Value escaping codec for the backing store.
            dates: Date normalizer for typed date access.
        """
        self.registry = registry if registry is not None else get_default_property_registry()
        self.resolver = QualifiedNameResolver(self.registry)
        self.dates = dates or DateNormalizer()
        self._store = AttributeStore(codec)

    @classmethod
    def from_config(cls, config: "Config", registry: PropertyRegistry | None = None) -> "Metadata":
        """Create a container using configured codec and time zone."""
        return cls(
            registry=registry,
            codec=get_codec(config.codec),
            dates=DateNormalizer(load_timezone(config.dates.default_timezone)),
        )

    # =========================================================================
    # Reads
    # =========================================================================

    def get(self, key: Key | None) -> str | None:
        """Get the first value for a key, or None."""
        if key is None:
            return None
        return self._store.get(self.resolver.resolve(key))

    def get_all(self, key: Key | None) -> list[str]:
        """Get all values for a key in insertion order."""
        if key is None:
            return []
        return self._store.get_all(self.resolver.resolve(key))

    def get_int(self, prop: Property) -> int | None:
        """Get an INTEGER property's value as an int.

        Returns None when the property is not a simple integer property,
        is unset, or holds text that is not a base-10 integer in the
        32-bit signed range.
        """
        primary = prop.primary_property
        if primary.property_type is not PropertyType.SIMPLE:
            return None
        if primary.value_type is not ValueType.INTEGER:
            return None

        value = self.get(prop)
        if value is None:
            return None
        if _INTEGER.fullmatch(value) is None:
            logger.debug(f"Unparseable integer for {prop.name}: {value!r}")
            return None
        number = int(value)
        if not _INTEGER_MIN <= number <= _INTEGER_MAX:
            logger.debug(f"Integer out of range for {prop.name}: {value!r}")
            return None
        return number

    def get_date(self, prop: Property) -> datetime | None:
        """Get a DATE property's value as an aware UTC datetime.

        Returns None when the property is not a simple date property, is
        unset, or holds text in no accepted date format.
        """
        primary = prop.primary_property
        if primary.property_type is not PropertyType.SIMPLE:
            return None
        if primary.value_type is not ValueType.DATE:
            return None

        value = self.get(prop)
        if value is None:
            return None
        return self.dates.parse(value)

    def is_multi_valued(self, key: Key | None) -> bool:
        """Whether a key currently holds more than one value."""
        if key is None:
            return False
        return self._store.count(self.resolver.resolve(key)) > 1

    def names(self) -> list[str]:
        """Names currently holding at least one value."""
        return self._store.names()

    def size(self) -> int:
        """Number of distinct names holding values."""
        return len(self.names())

    @property
    def namespaces(self) -> dict[str, str]:
        """Prefixes registered by writes to this container."""
        return self._store.namespaces.as_dict()

    # =========================================================================
    # Writes
    # =========================================================================

    def add(self, key: Key | None, value: str | None) -> None:
        """Append a value to a key.

        For a COMPOSITE property the value is added to the primary and to
        each secondary property. A secondary that is single-valued and
        already holds a value is overwritten instead.

        Raises:
            PropertyTypeError: If the property is single-valued and
                already holds a value.
        """
        if key is None or value is None:
            return

        prop = self._definition(key)
        if prop is None:
            self._store.add(self.resolver.resolve(key), value)
        elif prop.is_composite:
            self.add(prop.primary_property, value)
            for secondary in prop.secondaries:
                try:
                    self.add(secondary, value)
                except PropertyTypeError:
                    logger.debug(
                        f"Secondary property {secondary.name} already set, overwriting"
                    )
                    self._store.set(self.resolver.resolve(secondary), value)
        else:
            qname = self.resolver.resolve(prop)
            if not prop.multi_value_permitted and self._store.get(qname) is not None:
                raise PropertyTypeError(prop.property_type, property_name=prop.name)
            self._store.add(qname, value)

    def set(self, key: Key | None, value: object) -> None:
        """Replace all values for a key.

        ``value`` may be a string, a sequence of strings, or None to
        clear the key. ``int``, ``float``, ``datetime`` and ``date``
        values are routed to the matching typed setter.

        Raises:
            TypeError: If the key is None or the value type is unsupported.
            PropertyTypeError: From the typed setters, or when several
                values are set on a single-valued property.
        """
        if key is None:
            raise TypeError("property must not be None")

        if isinstance(value, bool):
            raise TypeError("boolean values must be set as text")
        if isinstance(value, int):
            self.set_int(self._require_property(key), value)
        elif isinstance(value, float):
            self.set_real(self._require_property(key), value)
        elif isinstance(value, (datetime, date)):
            self.set_date(self._require_property(key), value)
        elif value is None or isinstance(value, str):
            self._set_values(key, None if value is None else [value])
        elif isinstance(value, Sequence):
            self._set_values(key, [str(v) for v in value if v is not None])
        else:
            raise TypeError(f"unsupported value type: {type(value).__name__}")

    def set_int(self, prop: Property, value: int | None) -> None:
        """Set an INTEGER property.

        Raises:
            PropertyTypeError: If the property is not a simple integer.
        """
        self._check_typed(prop, ValueType.INTEGER)
        self._set_values(prop, None if value is None else [str(value)])

    def set_real(self, prop: Property, value: float | None) -> None:
        """Set a REAL or RATIONAL property.

        Raises:
            PropertyTypeError: If the property is not a simple real or
                rational.
        """
        self._check_typed(prop, ValueType.REAL, ValueType.RATIONAL)
        self._set_values(prop, None if value is None else [str(float(value))])

    def set_date(self, prop: Property, value: datetime | date | None) -> None:
        """Set a DATE property to the normalized text of an instant.

        Raises:
            PropertyTypeError: If the property is not a simple date.
        """
        self._check_typed(prop, ValueType.DATE)
        self._set_values(prop, None if value is None else [self.dates.format(value)])

    def set_all(self, values: Mapping[str, Value]) -> None:
        """Set every name/value pair of a mapping."""
        for name, value in values.items():
            self.set(name, value)

    def remove(self, key: Key | None) -> None:
        """Remove a key and all its values."""
        if key is None:
            return
        self._store.remove(self.resolver.resolve(key))

    # =========================================================================
    # Rendering
    # =========================================================================

    def to_xml(self) -> etree._Element:
        """Render the container as an lxml element tree."""
        return to_element(self._store)

    def get_value_by_xpath(self, expression: str | None) -> str | None:
        """Evaluate an XPath expression against the rendered tree.

        Prefixes registered by writes to this container may be used in
        the expression.
        """
        if expression is None:
            return None
        return evaluate_xpath(self._store, expression)

    def items(self) -> Iterator[tuple[str, list[str]]]:
        """Iterate (display name, values) pairs in insertion order."""
        for qname, values in self._store.items():
            yield qname.display, values

    # =========================================================================
    # Internals
    # =========================================================================

    def _definition(self, key: Key) -> Property | None:
        if isinstance(key, Property):
            return key
        return self.registry.get(key)

    def _require_property(self, key: Key) -> Property:
        prop = self._definition(key)
        if prop is None:
            # Unregistered names behave as multi-valued text
            prop = Property(
                qname=QualifiedName.parse(str(key)),
                value_type=ValueType.TEXT,
                multi_value_permitted=True,
            )
        return prop

    def _check_typed(self, prop: Property, *value_types: ValueType) -> None:
        primary = prop.primary_property
        if primary.property_type is not PropertyType.SIMPLE:
            raise PropertyTypeError(PropertyType.SIMPLE, primary.property_type, prop.name)
        if primary.value_type not in value_types:
            raise PropertyTypeError(value_types[0], primary.value_type, prop.name)

    def _set_values(self, key: Key, values: list[str] | None) -> None:
        prop = self._definition(key)
        targets: list[Key] = [key]
        if prop is not None and prop.is_composite:
            targets = [prop.primary_property, *prop.secondaries]

        # Validate every slot before touching any of them
        if values and len(values) > 1:
            for target in targets:
                target_prop = self._definition(target)
                if target_prop is not None and not target_prop.multi_value_permitted:
                    raise PropertyTypeError(
                        target_prop.property_type, property_name=target_prop.name
                    )

        for target in targets:
            qname = self.resolver.resolve(target)
            self._store.remove(qname)
            for value in values or ():
                self._store.add(qname, value)

    # =========================================================================
    # Protocols
    # =========================================================================

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, (str, Property)):
            return False
        return self.get(key) is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Metadata):
            return NotImplemented
        return self._store == other._store

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        try:
            return to_xml_string(self._store)
        except ValueError as e:
            return f"Error serializing metadata: {e}"

    def __repr__(self) -> str:
        return f"Metadata({dict(self.items())!r})"
