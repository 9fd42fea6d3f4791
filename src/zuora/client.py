"""ZuoraClient: the explicit client handle.

One client owns one transport, one session, and the services built on
them. Pass it to objects (``Product(client=client)``) or to class-level
lookups (``Product.find(client, id)``)::

    with ZuoraClient(username="api@example.com", password="secret", sandbox=True) as client:
        product = Product.find(client, "4028e4883491c50901349d061be06550")
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, TypeVar
from xml.etree.ElementTree import Element

from pydantic import SecretStr

from zuora.config.settings import ZuoraSettings
from zuora.domain.session import Session
from zuora.infrastructure.contract import Contract
from zuora.infrastructure.transport import HttpTransport, Transport
from zuora.objects.base import ModelBase
from zuora.services.associations import AssociationResolver
from zuora.services.gateway import Gateway
from zuora.services.persistence import PersistenceService
from zuora.services.session import SessionManager

_M = TypeVar("_M", bound=ModelBase)


class ZuoraClient:
    """Session-reusing client for the Zuora SOAP API.

    Args:
        settings: Configuration snapshot. Built from ``zuora.toml``,
            ``ZUORA_*`` env vars, and *options* when omitted.
        transport: Alternate transport (tests inject a mocked one).
        contract: Alternate operation contract.
        **options: Settings overrides (``username``, ``password``,
            ``sandbox``, ``reuse_authentication_token``, ``log`` ...).
    """

    def __init__(
        self,
        settings: ZuoraSettings | None = None,
        *,
        transport: Transport | None = None,
        contract: Contract | None = None,
        **options: Any,
    ) -> None:
        if settings is None:
            settings = ZuoraSettings.from_options(**options)
        elif options:
            settings = _updated(settings, options)
        self._settings = settings

        if settings.log or settings.verbose:
            from zuora.config.logging import configure_logging

            configure_logging(verbose=True, log_json=settings.log_json)
        if settings.verbose:
            from zuora.services.telemetry import enable_telemetry

            enable_telemetry()

        self.transport: Transport = transport or HttpTransport(
            settings.active_endpoint,
            timeout=settings.api.timeout,
            verify_ssl=settings.api.verify_ssl,
        )
        self.transport.use_endpoint(settings.active_endpoint)

        if contract is None:
            wsdl = settings.api.wsdl_path
            contract = Contract.from_wsdl(Path(wsdl)) if wsdl else Contract(version=settings.api.api_version)
        self.contract = contract

        self.sessions = SessionManager(self.transport, self._current_settings)
        self.gateway = Gateway(self.transport, self.sessions, self.contract, self._current_settings)
        self.associations = AssociationResolver(self.gateway)
        self.persistence = PersistenceService(self.gateway, self.associations)

    def _current_settings(self) -> ZuoraSettings:
        return self._settings

    def __enter__(self) -> ZuoraClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def settings(self) -> ZuoraSettings:
        return self._settings

    @property
    def endpoint(self) -> str:
        return self.transport.endpoint

    def reconfigure(self, **changes: Any) -> ZuoraSettings:
        """Replace the settings snapshot.

        Switching endpoints drops the current session (tokens are
        per-environment); stored credentials are reused on the next call.
        """
        previous = self._settings
        self._settings = _updated(previous, changes)
        if self._settings.active_endpoint != previous.active_endpoint:
            self.transport.use_endpoint(self._settings.active_endpoint)
            self.sessions.invalidate()
        elif (
            self._settings.username != previous.username
            or self._settings.password != previous.password
        ):
            self.sessions.invalidate()
        return self._settings

    def sandbox(self, enabled: bool = True) -> None:
        """Point the client at the sandbox (or production) endpoint."""
        self.reconfigure(sandbox=enabled)

    # ------------------------------------------------------------------
    # Session & gateway
    # ------------------------------------------------------------------

    def authenticate(self) -> Session:
        return self.sessions.authenticate()

    def is_authenticated(self) -> bool:
        return self.sessions.is_authenticated()

    @property
    def session(self) -> Session | None:
        return self.sessions.session

    @property
    def last_request(self) -> str | None:
        """XML of the last envelope sent through the gateway."""
        return self.gateway.last_request

    def call(self, operation: str, body: Element) -> Element:
        return self.gateway.call(operation, body)

    def new(self, cls: type[_M], **attrs: Any) -> _M:
        """Instantiate a mapped object bound to this client."""
        return cls(client=self, **attrs)

    def close(self) -> None:
        self.transport.close()


def _updated(settings: ZuoraSettings, changes: dict[str, Any]) -> ZuoraSettings:
    if isinstance(changes.get("password"), str):
        changes = {**changes, "password": SecretStr(changes["password"])}
    return settings.model_copy(update=changes)
