"""Request envelope construction.

Bodies are built as ElementTree elements and wrapped in a SOAP 1.2
envelope. Child order is emission order, so callers control field order
explicitly (``login`` needs ``username`` before ``password``).
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any
from xml.etree import ElementTree
from xml.etree.ElementTree import Element, SubElement

from zuora.wire.namespaces import API, ENV, OBJECT_PREFIX, XSI, qname

PASSWORD_MASK = "***FILTERED***"


def operation(name: str) -> Element:
    """Root element of an operation body (``<ins0:create>``)."""
    return Element(qname(API, name))


def add(parent: Element, namespace: str, local: str, text: Any = None) -> Element:
    """Append a child element, with optional text content."""
    child = SubElement(parent, qname(namespace, local))
    if text is not None:
        child.text = str(text)
    return child


def zobject(parent: Element | None, remote_name: str, *, tag: str = "zObjects") -> Element:
    """Append an ``xsi:type``-tagged object container (detached when *parent* is None)."""
    child = Element(qname(API, tag)) if parent is None else SubElement(parent, qname(API, tag))
    child.set(f"{{{XSI}}}type", f"{OBJECT_PREFIX}:{remote_name}")
    return child


def build_envelope(body: Element, *, session_key: str | None = None) -> Element:
    """Wrap an operation body in a SOAP envelope, with a session header if known."""
    envelope = Element(qname(ENV, "Envelope"))
    if session_key:
        header = SubElement(envelope, qname(ENV, "Header"))
        session_header = SubElement(header, qname(ENV, "SessionHeader"))
        SubElement(session_header, qname(API, "Session")).text = session_key
    SubElement(envelope, qname(ENV, "Body")).append(body)
    return envelope


def to_bytes(element: Element, *, pretty: bool = False) -> bytes:
    """Serialize an element tree to UTF-8 bytes with an XML declaration."""
    if pretty:
        element = _copy(element)
        ElementTree.indent(element)
    return ElementTree.tostring(element, encoding="utf-8", xml_declaration=True)


def masked(element: Element) -> Element:
    """Copy of *element* with every ``password`` element's text filtered."""
    clone = _copy(element)
    for node in clone.iter():
        if node.tag.rsplit("}", 1)[-1] == "password" and node.text:
            node.text = PASSWORD_MASK
    return clone


def _copy(element: Element) -> Element:
    return ElementTree.fromstring(ElementTree.tostring(element))


# ----------------------------------------------------------------------
# Operation bodies
# ----------------------------------------------------------------------


def login_body(username: str, password: str) -> Element:
    """``login`` body. The contract requires ``username`` first."""
    body = operation("login")
    add(body, API, "username", username)
    add(body, API, "password", password)
    return body


def delete_body(remote_name: str, ids: Iterable[str]) -> Element:
    body = operation("delete")
    add(body, API, "type", remote_name)
    for remote_id in ids:
        add(body, API, "ids", remote_id)
    return body


def query_body(query_string: str) -> Element:
    body = operation("query")
    add(body, API, "queryString", query_string)
    return body


def query_more_body(locator: str) -> Element:
    body = operation("queryMore")
    add(body, API, "queryLocator", locator)
    return body
