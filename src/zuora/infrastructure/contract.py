"""Service contract: the set of remote operations the client may call.

The default operation set mirrors the Zuora a.63.0 WSDL. A contract can
also be loaded from a WSDL document through zeep, taking the operations
its port types declare.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import zeep
from zeep.exceptions import Error as ZeepError

from zuora.domain.errors import ConfigError, UnknownOperationError

DEFAULT_OPERATIONS: frozenset[str] = frozenset(
    {
        "login",
        "subscribe",
        "create",
        "generate",
        "update",
        "query",
        "queryMore",
        "delete",
        "getUserInfo",
        "amend",
        "execute",
    }
)


class Contract:
    """Enumerates valid operation names."""

    def __init__(self, operations: Iterable[str] = DEFAULT_OPERATIONS, *, version: str = "63.0") -> None:
        self.operations = frozenset(operations)
        self.version = version

    def __contains__(self, operation: object) -> bool:
        return operation in self.operations

    def validate(self, operation: str) -> None:
        """Raise :class:`UnknownOperationError` unless *operation* is in the contract."""
        if operation not in self.operations:
            msg = f"Operation {operation!r} is not part of the service contract"
            raise UnknownOperationError(msg)

    @classmethod
    def from_wsdl(cls, path: Path) -> Contract:
        """Load *path* with zeep and collect its port type operations."""
        try:
            document = zeep.Client(str(path)).wsdl
        except (OSError, ZeepError) as exc:
            msg = f"Cannot read WSDL {path}: {exc}"
            raise ConfigError(msg) from exc
        names = {name for port_type in document.port_types.values() for name in port_type.operations}
        if not names:
            msg = f"No operations found in {path}"
            raise ConfigError(msg)
        return cls(names)
