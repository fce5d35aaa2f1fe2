"""Custom exceptions for docmeta."""

from __future__ import annotations

from pathlib import Path
from typing import Any


class DocMetaError(Exception):
    """Base exception for all docmeta errors."""

    pass


class PropertyTypeError(DocMetaError):
    """Operation does not match a property's declared type.

    Raised when a typed setter is used against a property of another
    value type, or when adding a second value to a single-valued property.
    """

    def __init__(self, expected: Any, actual: Any = None, property_name: str | None = None):
        """Initialize exception with the expected and actual types.

        Args:
            expected: The PropertyType or ValueType the operation requires.
            actual: The PropertyType or ValueType the property declares.
            property_name: Display name of the offending property.
        """
        self.expected = expected
        self.actual = actual
        self.property_name = property_name

        target = f" for property '{property_name}'" if property_name else ""
        if actual is None:
            message = f"Property type mismatch{target}: {_label(expected)} does not permit this operation"
        else:
            message = (
                f"Property type mismatch{target}: expected {_label(expected)}, "
                f"got {_label(actual)}"
            )
        super().__init__(message)


class PropertyRegistryError(DocMetaError):
    """Property registration conflicts with an existing definition."""

    pass


class CatalogError(DocMetaError):
    """Property catalog file could not be loaded."""

    def __init__(self, path: Path | str, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Invalid property catalog {self.path}: {reason}")


def _label(value: Any) -> str:
    return getattr(value, "name", str(value))
