"""Response document parsing.

Responses are matched by local name so prefixes chosen by the server
(``ns1``, ``ns2``...) never matter.
"""

from __future__ import annotations

from typing import Any
from xml.etree import ElementTree
from xml.etree.ElementTree import Element

from zuora.wire.namespaces import XSI

_NIL = f"{{{XSI}}}nil"


def local_name(tag: str) -> str:
    """Strip the ``{uri}`` part of a Clark-notation tag."""
    return tag.rsplit("}", 1)[-1]


def parse_document(data: bytes | str) -> Element:
    """Parse a response document. Raises ``ElementTree.ParseError``."""
    return ElementTree.fromstring(data)


def children(element: Element, name: str) -> list[Element]:
    """Direct children of *element* with local name *name*."""
    return [child for child in element if local_name(child.tag) == name]


def child(element: Element, name: str) -> Element | None:
    for node in element:
        if local_name(node.tag) == name:
            return node
    return None


def child_text(element: Element, *names: str) -> str | None:
    """Text of the first direct child matching any of *names*."""
    for name in names:
        node = child(element, name)
        if node is not None:
            return node.text
    return None


def find_descendant(element: Element, name: str) -> Element | None:
    for node in element.iter():
        if local_name(node.tag) == name:
            return node
    return None


def body(root: Element) -> Element | None:
    return child(root, "Body")


def operation_response(root: Element, op: str) -> Element | None:
    """The ``<{op}Response>`` element inside the body."""
    envelope_body = body(root)
    if envelope_body is None:
        return None
    return child(envelope_body, f"{op}Response")


def element_to_dict(element: Element) -> dict[str, Any]:
    """Convert an element's children to a dict keyed by local name.

    Leaves become text (``None`` for ``xsi:nil``); repeated names
    become lists.
    """
    result: dict[str, Any] = {}
    for node in element:
        key = local_name(node.tag)
        value: Any = element_to_dict(node) if len(node) else _leaf(node)
        if key in result:
            existing = result[key]
            if not isinstance(existing, list):
                result[key] = [existing]
            result[key].append(value)
        else:
            result[key] = value
    return result


def record_values(record: Element) -> dict[str, str | None]:
    """Flat ``{WireName: text}`` mapping for one query record."""
    return {local_name(node.tag): _leaf(node) for node in record if not len(node)}


def _leaf(node: Element) -> str | None:
    if node.get(_NIL) == "true":
        return None
    return node.text if node.text is not None else ""
