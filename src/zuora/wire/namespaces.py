"""XML namespaces used by the Zuora SOAP contract."""

from __future__ import annotations

from xml.etree import ElementTree

ENV = "http://www.w3.org/2003/05/soap-envelope"
API = "http://api.zuora.com/"
OBJECT = "http://object.api.zuora.com/"
FAULT = "http://fault.api.zuora.com/"
XSI = "http://www.w3.org/2001/XMLSchema-instance"

# Prefixes as they appear on the wire.
PREFIXES: dict[str, str] = {
    "env": ENV,
    "ins0": API,
    "ins1": OBJECT,
    "ins2": FAULT,
    "xsi": XSI,
}

# Field declarations name their namespace by key, not URI.
NAMESPACE_KEYS: dict[str, str] = {
    "api": API,
    "object": OBJECT,
}

OBJECT_PREFIX = "ins1"


def register_prefixes() -> None:
    """Make ElementTree emit the contract's prefixes instead of ``ns0``..."""
    for prefix, uri in PREFIXES.items():
        ElementTree.register_namespace(prefix, uri)


def qname(namespace: str, local: str) -> str:
    """Clark-notation tag. *namespace* may be a key (``"object"``) or a URI."""
    uri = NAMESPACE_KEYS.get(namespace, namespace)
    return f"{{{uri}}}{local}"


register_prefixes()
