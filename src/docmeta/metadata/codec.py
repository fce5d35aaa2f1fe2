"""Value escaping codecs for the attribute store.

The store escapes every value on write and unescapes it on read, so
callers only ever see the original text. Codecs must be bijective on the
characters they touch.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable
from xml.sax.saxutils import escape, unescape

from loguru import logger

_XML_ENTITIES = {'"': "&quot;", "'": "&apos;"}
_XML_REVERSE = {v: k for k, v in _XML_ENTITIES.items()}


@runtime_checkable
class ValueCodec(Protocol):
    """Protocol for reversible value escaping."""

    name: str

    def escape(self, value: str) -> str:
        """Escape a value for storage."""
        ...

    def unescape(self, value: str) -> str:
        """Reverse escape()."""
        ...


class XmlEscapeCodec:
    """Escape the five XML special characters."""

    name = "xml"

    def escape(self, value: str) -> str:
        return escape(value, _XML_ENTITIES)

    def unescape(self, value: str) -> str:
        return unescape(value, _XML_REVERSE)


class IdentityCodec:
    """Store values unchanged."""

    name = "none"

    def escape(self, value: str) -> str:
        return value

    def unescape(self, value: str) -> str:
        return value


_CODECS: dict[str, type] = {
    XmlEscapeCodec.name: XmlEscapeCodec,
    IdentityCodec.name: IdentityCodec,
}


def get_codec(name: str) -> ValueCodec:
    """Get a codec by name, falling back to XML escaping.

    Args:
        name: Codec name ("xml" or "none").

    Returns:
        Codec instance.
    """
    codec_cls = _CODECS.get(name.lower())
    if codec_cls is None:
        logger.warning(f"Unknown value codec {name!r}, using 'xml'")
        codec_cls = XmlEscapeCodec
    return codec_cls()
