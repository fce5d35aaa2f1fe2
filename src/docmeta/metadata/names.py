"""Qualified names and namespace resolution for metadata keys.

Every key stored in a metadata container is a QualifiedName. Well-known,
namespaced properties keep their own identity; every other key becomes a
generic *entry* in the docmeta namespace, carrying its original string
as the local name.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from docmeta.metadata.properties import Property, PropertyRegistry


NAMESPACE_PREFIX_DELIMITER = ":"
"""Delimiter between a namespace prefix and a local name."""

ENTRY_NAMESPACE = "urn:docmeta:metadata"
"""Namespace of generic entries (keys with no namespaced definition)."""

ENTRY_PREFIX = "docmeta"
"""Registered prefix for ENTRY_NAMESPACE."""


@dataclass(frozen=True)
class QualifiedName:
    """A (namespace, local name, prefix) identity for a metadata key.

    Two names are equal when namespace URI and local name match. The
    prefix is display-only.

    Attributes:
        local_name: Local part of the name.
        namespace_uri: Namespace URI, or None when not namespaced.
        prefix: Display prefix, or None.
    """

    local_name: str
    namespace_uri: str | None = None
    prefix: str | None = field(default=None, compare=False)

    @classmethod
    def parse(cls, name: str, namespace_uri: str | None = None) -> "QualifiedName":
        """Split a bare key into prefix and local name.

        A key with exactly one ``:`` splits into ``(prefix, local)``; any
        other shape keeps the whole string as the local name.

        Args:
            name: Bare key such as ``"dc:title"`` or ``"title"``.
            namespace_uri: Optional namespace to attach.

        Returns:
            Parsed QualifiedName.
        """
        parts = name.split(NAMESPACE_PREFIX_DELIMITER)
        if len(parts) == 2:
            return cls(local_name=parts[1], namespace_uri=namespace_uri, prefix=parts[0] or None)
        return cls(local_name=name, namespace_uri=namespace_uri)

    @property
    def is_namespaced(self) -> bool:
        """Whether the name carries a non-empty namespace URI."""
        return bool(self.namespace_uri)

    @property
    def is_entry(self) -> bool:
        """Whether this is a generic entry name."""
        return self.namespace_uri == ENTRY_NAMESPACE

    @property
    def qualified(self) -> str:
        """The ``prefix:localName`` form, or ``localName`` without a prefix."""
        if self.prefix:
            return f"{self.prefix}{NAMESPACE_PREFIX_DELIMITER}{self.local_name}"
        return self.local_name

    @property
    def display(self) -> str:
        """Name as shown to callers (entries show their original key)."""
        if self.is_entry:
            return self.local_name
        return self.qualified

    def __str__(self) -> str:
        return self.display


class NamespaceRegistry:
    """Prefix to namespace URI mapping owned by a single container.

    Entries are only ever added; they are used to render qualified names
    and never take part in container equality.

    Example:
        registry = NamespaceRegistry()
        registry.register("dc", "http://purl.org/dc/elements/1.1/")
        registry.get_namespace_uri("dc")  # "http://purl.org/dc/elements/1.1/"
    """

    def __init__(self) -> None:
        """Initialize with the entry namespace registered."""
        self._namespaces: dict[str, str] = {ENTRY_PREFIX: ENTRY_NAMESPACE}

    def register(self, prefix: str, namespace_uri: str) -> None:
        """Register (or rebind) a prefix."""
        if self._namespaces.get(prefix) != namespace_uri:
            logger.debug(f"Namespace registered: {prefix} -> {namespace_uri}")
        self._namespaces[prefix] = namespace_uri

    def record(self, qname: QualifiedName) -> None:
        """Register the prefix of a name if it is prefixed and namespaced."""
        if qname.prefix and qname.namespace_uri:
            self.register(qname.prefix, qname.namespace_uri)

    def get_namespace_uri(self, prefix: str) -> str | None:
        """Get the namespace bound to a prefix."""
        return self._namespaces.get(prefix)

    def as_dict(self) -> dict[str, str]:
        """Copy of the prefix to URI mapping."""
        return dict(self._namespaces)

    def __contains__(self, prefix: object) -> bool:
        return prefix in self._namespaces

    def __len__(self) -> int:
        return len(self._namespaces)


class QualifiedNameResolver:
    """Map bare string keys and properties to storage names.

    Resolution is a pure function of the registry contents and the key.
    """

    def __init__(self, registry: "PropertyRegistry") -> None:
        self.registry = registry

    def resolve(self, key: "str | Property") -> QualifiedName:
        """Resolve a key to the QualifiedName it is stored under.

        Args:
            key: Bare string key or Property definition.

        Returns:
            The definition's own name for namespaced properties (and for
            strings naming one), otherwise a generic entry name.
        """
        if not isinstance(key, str):
            if key.qname.is_namespaced:
                return key.qname
            key = key.name

        known = self.registry.get(key)
        if known is not None and known.qname.is_namespaced:
            return known.qname
        return QualifiedName(local_name=key, namespace_uri=ENTRY_NAMESPACE, prefix=ENTRY_PREFIX)
