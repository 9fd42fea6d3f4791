"""HTTP transport for SOAP 1.2 over httpx.

The transport posts one document per call and returns the raw response
body. A SOAP fault in the response raises :class:`SoapFaultError`; any
other HTTP or network failure surfaces as the ``httpx`` exception. The
gateway wraps both into ``TransportFault``.
"""

from __future__ import annotations

import logging
from typing import Protocol
from xml.etree.ElementTree import ParseError

import httpx

from zuora.wire.faults import extract_fault
from zuora.wire.parser import parse_document

logger = logging.getLogger(__name__)

PRODUCTION_ENDPOINT = "https://www.zuora.com/apps/services/a/63.0"
SANDBOX_ENDPOINT = "https://apisandbox.zuora.com/apps/services/a/63.0"


class SoapFaultError(Exception):
    """The service answered with a SOAP fault."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class Transport(Protocol):
    """Anything that can deliver one SOAP document and return the reply."""

    endpoint: str

    def send(self, operation: str, document: bytes) -> bytes: ...

    def use_endpoint(self, endpoint: str) -> None: ...

    def close(self) -> None: ...


class HttpTransport:
    """Synchronous SOAP transport backed by an ``httpx.Client``.

    Args:
        endpoint: Service URL.
        timeout: Per-request timeout in seconds.
        verify_ssl: Verify TLS certificates.
        http_client: Pre-built client (tests inject one with a
            ``httpx.MockTransport``).
    """

    def __init__(
        self,
        endpoint: str = PRODUCTION_ENDPOINT,
        *,
        timeout: float = 60.0,
        verify_ssl: bool = True,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.endpoint = endpoint
        self._owns_client = http_client is None
        self._http = http_client or httpx.Client(
            timeout=httpx.Timeout(timeout),
            verify=verify_ssl,
            follow_redirects=True,
        )

    def use_endpoint(self, endpoint: str) -> None:
        logger.debug("Switching endpoint to %s", endpoint)
        self.endpoint = endpoint

    def send(self, operation: str, document: bytes) -> bytes:
        headers = {
            "Content-Type": f'application/soap+xml;charset=UTF-8;action="{operation}"',
            "Accept": "application/soap+xml, text/xml",
        }
        response = self._http.post(self.endpoint, content=document, headers=headers)
        content = response.content

        if content:
            try:
                root = parse_document(content)
            except ParseError:
                root = None
            if root is not None:
                fault = extract_fault(root)
                if fault is not None:
                    raise SoapFaultError(fault.message, fault.code)

        response.raise_for_status()
        return content

    def close(self) -> None:
        if self._owns_client:
            self._http.close()
