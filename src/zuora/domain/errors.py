"""Exception taxonomy.

Local errors (validation, coercion, stale objects, unknown operations)
never contact the network. Remote faults wrap whatever the transport
raised so callers only ever see :class:`RemoteFault` subclasses.
Business-rule rejections are not exceptions; they come back as failed
``OperationResult`` values.
"""

from __future__ import annotations

from typing import Any


class ZuoraError(Exception):
    """Base class for every error raised by this package."""


class ConfigError(ZuoraError):
    """Configuration could not be loaded."""


class RemoteFault(ZuoraError):
    """A call to the remote service failed at the protocol level."""

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class TransportFault(RemoteFault):
    """SOAP fault or I/O failure raised while dispatching a request."""


class AuthenticationError(RemoteFault):
    """The login exchange failed or returned no usable session."""


class ValidationError(ZuoraError):
    """An object failed its declared structural rules."""

    def __init__(self, errors: dict[str, list[str]]) -> None:
        self.errors = errors
        summary = "; ".join(f"{name} {msg}" for name, msgs in errors.items() for msg in msgs)
        super().__init__(f"Validation failed: {summary}")


class CoercionError(ZuoraError):
    """A wire value could not be converted to its declared field type."""

    def __init__(self, field: str, value: Any, field_type: str) -> None:
        self.field = field
        self.value = value
        self.field_type = field_type
        super().__init__(f"Cannot coerce {value!r} to {field_type} for field {field}")


class StaleObjectError(ZuoraError):
    """Persistence requested on an object in a terminal state."""


class UnknownOperationError(ZuoraError):
    """Operation name is not part of the service contract."""


class UnboundObjectError(ZuoraError):
    """Persistence requested on an object with no client handle."""
