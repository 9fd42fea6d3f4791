"""BaseService: foundation for client-backed services used by the CLI.

Every service receives a :class:`ZuoraClient` at construction time and
returns OperationResult values; library errors are folded into failed
results so adapters have one shape to render.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from zuora.domain.errors import RemoteFault, ZuoraError
from zuora.services.result import OperationError, OperationResult

if TYPE_CHECKING:
    from zuora.client import ZuoraClient

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class QueryService(BaseService):
            def query(self, zoql: str) -> OperationResult:
                response = self._client.call("query", ...)
    """

    def __init__(self, client: ZuoraClient) -> None:
        self._client = client

    @staticmethod
    def _failure(op: str, exc: ZuoraError) -> OperationResult:
        """Failed result describing *exc*."""
        code = type(exc).__name__
        message = str(exc)
        if isinstance(exc, RemoteFault):
            code = exc.code or code
            message = exc.message
        logger.debug("%s failed: %s", op, message)
        return OperationResult(ok=False, op=op, errors=[OperationError(code=code, message=message)])
