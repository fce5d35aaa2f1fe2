"""XML rendering of an attribute store.

The rendered tree has a ``docmeta:metadata`` root with one child element
per stored value, in key first-insertion order. Namespaced names become
their own qualified elements; generic entries become ``docmeta:entry``
elements with the original key in a ``docmeta:name`` attribute:

    <docmeta:metadata xmlns:docmeta="urn:docmeta:metadata"
                      xmlns:dc="http://purl.org/dc/elements/1.1/">
      <dc:title>Report</dc:title>
      <docmeta:entry docmeta:name="author">Alice</docmeta:entry>
    </docmeta:metadata>
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lxml import etree

from docmeta.metadata.names import ENTRY_NAMESPACE

if TYPE_CHECKING:
    from docmeta.metadata.store import AttributeStore

ROOT_TAG = f"{{{ENTRY_NAMESPACE}}}metadata"
ENTRY_TAG = f"{{{ENTRY_NAMESPACE}}}entry"
NAME_ATTRIBUTE = f"{{{ENTRY_NAMESPACE}}}name"


def to_element(store: "AttributeStore") -> etree._Element:
    """Build an element tree from a store.

    Raises:
        ValueError: If a name or value cannot be represented in XML.
    """
    root = etree.Element(ROOT_TAG, nsmap=store.namespaces.as_dict())
    for qname, values in store.items():
        for value in values:
            if qname.is_entry:
                element = etree.SubElement(root, ENTRY_TAG)
                element.set(NAME_ATTRIBUTE, qname.local_name)
            elif qname.namespace_uri:
                element = etree.SubElement(root, f"{{{qname.namespace_uri}}}{qname.local_name}")
            else:
                element = etree.SubElement(root, qname.local_name)
            element.text = value
    return root


def to_xml_string(store: "AttributeStore") -> str:
    """Pretty-printed XML text of a store."""
    return etree.tostring(to_element(store), pretty_print=True, encoding="unicode")


def evaluate_xpath(store: "AttributeStore", expression: str) -> str:
    """Evaluate an XPath expression and return its string value.

    Node-set results give the string value of the first node (empty when
    nothing matches); numbers drop a zero fraction; booleans render as
    ``true`` / ``false``.

    Raises:
        lxml.etree.XPathError: If the expression is invalid.
    """
    root = to_element(store)
    result = root.xpath(expression, namespaces=store.namespaces.as_dict())
    return _string_value(result)


def _string_value(result: object) -> str:
    if isinstance(result, bool):
        return "true" if result else "false"
    if isinstance(result, float):
        return str(int(result)) if result.is_integer() else str(result)
    if isinstance(result, list):
        if not result:
            return ""
        return _string_value(result[0])
    if isinstance(result, etree._Element):
        return "".join(result.itertext())
    return str(result)
