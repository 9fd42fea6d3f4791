"""SessionManager: obtain, reuse, and invalidate the authenticated session.

INVARIANT: at most one active Session per client. The authenticate-then-
store sequence runs under a lock so concurrent callers sharing a client
log in once.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import TYPE_CHECKING
from xml.etree.ElementTree import ParseError

import httpx
import structlog

from zuora.domain.errors import AuthenticationError, TransportFault
from zuora.domain.session import Session
from zuora.infrastructure.transport import SoapFaultError
from zuora.services.translator import translate_login
from zuora.wire.envelope import build_envelope, login_body, masked, to_bytes
from zuora.wire.parser import operation_response, parse_document

if TYPE_CHECKING:
    from zuora.config.settings import ZuoraSettings
    from zuora.infrastructure.transport import Transport

log = structlog.get_logger(__name__)


class SessionManager:
    """Owns the client's Session and decides when to log in again.

    Args:
        transport: Delivers the ``login`` call.
        settings: Callable returning the current settings snapshot. Read
            on every check so ``reuse_authentication_token`` can change
            between calls.
    """

    def __init__(self, transport: Transport, settings: Callable[[], ZuoraSettings]) -> None:
        self._transport = transport
        self._settings = settings
        self._session: Session | None = None
        self._lock = threading.RLock()
        self.login_count = 0

    @property
    def session(self) -> Session | None:
        return self._session

    def is_authenticated(self) -> bool:
        """Reuse enabled, a Session exists, and it is still active."""
        if not self._settings().reuse_authentication_token:
            return False
        session = self._session
        return session is not None and session.active

    def ensure(self) -> Session:
        """Return a usable Session, logging in first if needed."""
        with self._lock:
            if self.is_authenticated() and self._session is not None:
                return self._session
            return self.authenticate()

    def authenticate(self) -> Session:
        """Log in with the configured credentials and store the new Session.

        Raises:
            AuthenticationError: SOAP fault, or no session token in the reply.
            TransportFault: The login call could not be delivered.
        """
        settings = self._settings()
        envelope = build_envelope(login_body(settings.username, settings.password.get_secret_value()))
        document = to_bytes(envelope)
        if settings.log:
            log.debug(
                "soap.request",
                operation="login",
                payload=to_bytes(masked(envelope), pretty=settings.format_xml).decode("utf-8"),
            )

        with self._lock:
            try:
                raw = self._transport.send("login", document)
            except SoapFaultError as exc:
                log.warning("session.login_failed", code=exc.code, message=exc.message)
                raise AuthenticationError(exc.message, code=exc.code) from exc
            except (httpx.HTTPError, OSError) as exc:
                raise TransportFault(str(exc)) from exc

            try:
                response = operation_response(parse_document(raw), "login")
            except ParseError as exc:
                raise AuthenticationError(f"Malformed login response: {exc}") from exc
            if response is None:
                raise AuthenticationError("Malformed login response: no loginResponse element")

            session = Session.generate(translate_login(response), username=settings.username)
            if session is None:
                raise AuthenticationError("Login response did not contain a session token")

            if self._session is not None:
                self._session.invalidate()
            self._session = session
            self.login_count += 1

        log.debug("session.authenticated", username=settings.username, key=session.masked_key)
        return session

    def invalidate(self) -> None:
        """Drop the current Session. Does not log in again."""
        with self._lock:
            if self._session is None:
                return
            self._session.invalidate()
            self._session = None
        log.debug("session.invalidated")
