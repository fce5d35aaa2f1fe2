"""Ordered multimap backing a metadata container.

Keys are pre-resolved QualifiedNames; values are strings kept in
insertion order per key. Keys themselves keep first-insertion order.
"""

from __future__ import annotations

from typing import Iterator

from docmeta.metadata.codec import ValueCodec, XmlEscapeCodec
from docmeta.metadata.names import NamespaceRegistry, QualifiedName


class AttributeStore:
    """Insertion-ordered map from QualifiedName to a list of string values.

    Values pass through the codec on write and read. A key with no values
    is never kept.

    Example:
        store = AttributeStore()
        store.add(QualifiedName("author"), "Alice")
        store.add(QualifiedName("author"), "Bob")
        store.get_all(QualifiedName("author"))  # ["Alice", "Bob"]
    """

    def __init__(self, codec: ValueCodec | None = None) -> None:
        """Initialize an empty store.

        Args:
            codec: Value escaping codec (default: XML escaping).
        """
        self.codec = codec or XmlEscapeCodec()
        self.namespaces = NamespaceRegistry()
        self._values: dict[QualifiedName, list[str]] = {}

    def add(self, qname: QualifiedName, value: str | None) -> None:
        """Append a value; None is ignored."""
        if value is None:
            return
        self.namespaces.record(qname)
        self._values.setdefault(qname, []).append(self.codec.escape(value))

    def get(self, qname: QualifiedName) -> str | None:
        """Get the first-inserted value, or None."""
        values = self._values.get(qname)
        if not values:
            return None
        return self.codec.unescape(values[0])

    def get_all(self, qname: QualifiedName) -> list[str]:
        """Get all values in insertion order (empty if absent)."""
        return [self.codec.unescape(v) for v in self._values.get(qname, ())]

    def count(self, qname: QualifiedName) -> int:
        """Number of values held for a key."""
        return len(self._values.get(qname, ()))

    def set(self, qname: QualifiedName, value: str | None) -> None:
        """Replace all values with one value, or clear when None."""
        self.remove(qname)
        if value is not None:
            self.add(qname, value)

    def remove(self, qname: QualifiedName) -> None:
        """Clear all values for a key."""
        self._values.pop(qname, None)

    def qnames(self) -> list[QualifiedName]:
        """Keys currently holding values, in first-insertion order."""
        return list(self._values)

    def names(self) -> list[str]:
        """Unique display names currently holding values."""
        return list(dict.fromkeys(qname.display for qname in self._values))

    def items(self) -> Iterator[tuple[QualifiedName, list[str]]]:
        """Iterate (key, unescaped values) pairs in key order."""
        for qname in list(self._values):
            yield qname, self.get_all(qname)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AttributeStore):
            return NotImplemented
        if set(self._values) != set(other._values):
            return False
        return all(self.get_all(qname) == other.get_all(qname) for qname in self._values)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"AttributeStore({dict(self.items())!r})"
