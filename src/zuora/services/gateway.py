"""Gateway: the single choke point for remote calls.

Every call is checked against the contract, authenticated, captured as
the last request, dispatched, and unwrapped to its ``...Response``
element. Transport failures of any kind surface as ``TransportFault``.
No retries.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import TYPE_CHECKING
from xml.etree.ElementTree import Element, ParseError

import httpx
import structlog

from zuora.domain.errors import TransportFault
from zuora.infrastructure.transport import SoapFaultError
from zuora.services.telemetry import instrument_service_call
from zuora.wire.envelope import build_envelope, masked, to_bytes
from zuora.wire.faults import INVALID_SESSION
from zuora.wire.parser import operation_response, parse_document

if TYPE_CHECKING:
    from zuora.config.settings import ZuoraSettings
    from zuora.infrastructure.contract import Contract
    from zuora.infrastructure.transport import Transport
    from zuora.services.session import SessionManager

log = structlog.get_logger(__name__)

SERVICE_NAME = "Zuora"


class Gateway:
    """Dispatch operation bodies through an authenticated session."""

    def __init__(
        self,
        transport: Transport,
        sessions: SessionManager,
        contract: Contract,
        settings: Callable[[], ZuoraSettings],
    ) -> None:
        self._transport = transport
        self._sessions = sessions
        self._contract = contract
        self._settings = settings
        self._lock = threading.Lock()
        self._last_document: bytes | None = None
        self.call_count = 0

    @property
    def last_request(self) -> str | None:
        """XML text of the most recently transmitted envelope."""
        with self._lock:
            document = self._last_document
        return document.decode("utf-8") if document is not None else None

    def call(self, operation: str, body: Element) -> Element:
        """Send *body* as *operation* and return the ``{operation}Response`` element.

        Raises:
            UnknownOperationError: *operation* is not in the contract.
            AuthenticationError: Login was required and failed.
            TransportFault: SOAP fault, I/O failure, or malformed response.
        """
        self._contract.validate(operation)
        session = self._sessions.ensure()

        envelope = build_envelope(body, session_key=session.key)
        document = to_bytes(envelope)
        with self._lock:
            self._last_document = document
            self.call_count += 1

        settings = self._settings()
        if settings.log:
            log.debug(
                "soap.request",
                operation=operation,
                payload=to_bytes(masked(envelope), pretty=settings.format_xml).decode("utf-8"),
            )

        try:
            with instrument_service_call(SERVICE_NAME, operation):
                raw = self._transport.send(operation, document)
        except SoapFaultError as exc:
            if exc.code and exc.code.rsplit(":", 1)[-1] == INVALID_SESSION:
                self._sessions.invalidate()
            raise TransportFault(exc.message, code=exc.code) from exc
        except (httpx.HTTPError, OSError) as exc:
            raise TransportFault(str(exc)) from exc

        if settings.log:
            log.debug("soap.response", operation=operation, payload=raw.decode("utf-8", "replace"))

        try:
            root = parse_document(raw)
        except ParseError as exc:
            raise TransportFault(f"Malformed {operation} response: {exc}") from exc
        response = operation_response(root, operation)
        if response is None:
            raise TransportFault(f"Malformed {operation} response: no {operation}Response element")
        return response
