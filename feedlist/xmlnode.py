"""
XML payload parsing and element-to-dict conversion.

Feed items are converted into plain nested dicts so the media and text
pipeline can treat XML and JSON feeds alike. Conversion rules:

- attributes go under ``_attributes`` (names lowercased);
- child elements are grouped by qualified name (``media:thumbnail``), each
  name holding a list; lists with a single entry are reduced to that entry;
- an element with no attributes and no element children reduces to its text;
  with attributes but no element children the text is kept under ``_text``.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from lxml import etree


logger = logging.getLogger(__name__)

_RE_XML_DECL = re.compile(rb"^\s*<\?xml[^>]*\?>", re.IGNORECASE)

_STRICT_PARSER = etree.XMLParser(resolve_entities=False, no_network=True)
_RECOVER_PARSER = etree.XMLParser(recover=True, resolve_entities=False, no_network=True)


def parse_xml(payload: str | bytes) -> etree._Element | None:
    """Parse an XML payload into its root element.

    Strict parsing is tried first. Fragments without a single top-level
    element (``<item>1</item><item>2</item>``) are retried wrapped in a
    ``<document>`` element, and finally the recovering parser gets a pass.
    Returns None when nothing element-like can be found.
    """
    data = payload.encode("utf-8") if isinstance(payload, str) else payload
    if not data or not data.strip():
        return None
    if isinstance(payload, str):
        # The str was already decoded, so its encoding declaration no longer applies.
        data = _RE_XML_DECL.sub(b"", data, count=1)

    try:
        return etree.fromstring(data, _STRICT_PARSER)
    except etree.XMLSyntaxError as exc:
        logger.debug("Strict XML parse failed: %s", exc)

    body = _RE_XML_DECL.sub(b"", data, count=1)
    try:
        wrapped = etree.fromstring(b"<document>" + body + b"</document>", _STRICT_PARSER)
        # Bare text is not a document, even if it parses once wrapped.
        if len(wrapped):
            return wrapped
    except etree.XMLSyntaxError:
        logger.debug("XML parse failed with <document> wrapper, trying recover mode")

    try:
        root = etree.fromstring(data, _RECOVER_PARSER)
    except etree.XMLSyntaxError:
        return None
    return root


def qualified_name(element: etree._Element) -> str:
    """Return ``prefix:local`` for namespaced elements, ``local`` otherwise."""
    local = etree.QName(element).localname
    return f"{element.prefix}:{local}" if element.prefix else local


def find_elements(root: etree._Element, name: str) -> list[etree._Element]:
    """All elements (root included) whose qualified name is ``name``, in document order."""
    return [
        element
        for element in root.iter()
        if isinstance(element.tag, str) and qualified_name(element) == name
    ]


def element_to_dict(element: etree._Element) -> Any:
    """Convert an element into nested dicts, lists and strings."""
    attributes = _attributes(element)
    children = [child for child in element if isinstance(child.tag, str)]

    if not children:
        text = node_text(element)
        if attributes is None:
            return text
        return {"_text": text, "_attributes": attributes}

    data: dict[str, Any] = {}
    if attributes is not None:
        data["_attributes"] = attributes
    for child in children:
        data.setdefault(qualified_name(child), []).append(element_to_dict(child))

    for key, value in data.items():
        if isinstance(value, list) and len(value) == 1:
            data[key] = value[0]
    return data


def node_text(element: etree._Element) -> str:
    """Text content of an element and its descendants, CDATA included."""
    return "".join(element.itertext()).strip()


def _attributes(element: etree._Element) -> dict[str, str] | None:
    if not element.attrib:
        return None
    prefixes = {uri: prefix for prefix, uri in element.nsmap.items() if prefix}
    attributes = {}
    for key, value in element.attrib.items():
        name = etree.QName(key)
        if name.namespace and name.namespace in prefixes:
            attr_name = f"{prefixes[name.namespace]}:{name.localname}"
        else:
            attr_name = name.localname
        attributes[attr_name.lower()] = value
    return attributes
