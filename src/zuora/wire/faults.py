"""SOAP fault recognition for SOAP 1.2 and SOAP 1.1 shapes."""

from __future__ import annotations

from dataclasses import dataclass
from xml.etree.ElementTree import Element

from zuora.wire.parser import body, child, child_text, find_descendant

INVALID_SESSION = "INVALID_SESSION"


@dataclass(frozen=True)
class Fault:
    """Decoded SOAP fault."""

    message: str
    code: str | None = None


def extract_fault(root: Element) -> Fault | None:
    """Return the fault carried by an envelope, or None."""
    envelope_body = body(root)
    if envelope_body is None:
        return None
    fault = child(envelope_body, "Fault")
    if fault is None:
        return None

    code: str | None = None
    message: str | None = None

    detail = child(fault, "Detail")
    if detail is None:
        detail = child(fault, "detail")
    if detail is not None:
        api_fault = find_descendant(detail, "FaultCode")
        if api_fault is not None:
            code = api_fault.text
        api_message = find_descendant(detail, "FaultMessage")
        if api_message is not None:
            message = api_message.text

    if message is None:
        reason = child(fault, "Reason")
        if reason is not None:
            message = child_text(reason, "Text")
    if message is None:
        message = child_text(fault, "faultstring")

    if code is None:
        soap_code = child(fault, "Code")
        if soap_code is not None:
            code = child_text(soap_code, "Value")
        else:
            code = child_text(fault, "faultcode")

    return Fault(message=(message or "SOAP fault").strip(), code=code.strip() if code else None)
