"""QueryService: session checks and read-side lookups for the CLI."""

from __future__ import annotations

from typing import Any

from zuora.domain.errors import ZuoraError
from zuora.objects.base import ZObject, lookup
from zuora.services.base import BaseService
from zuora.services.result import OperationError, OperationResult
from zuora.services.telemetry import trace_span, traced
from zuora.services.translator import translate_query
from zuora.wire.envelope import query_body, query_more_body
from zuora.wire.parser import record_values


class QueryService(BaseService):
    """Login check, raw ZOQL queries, and typed finds."""

    @traced
    def login(self) -> OperationResult:
        op = "login"
        try:
            session = self._client.authenticate()
        except ZuoraError as exc:
            return self._failure(op, exc)
        return OperationResult(
            ok=True,
            op=op,
            data={
                "endpoint": self._client.endpoint,
                "username": session.username,
                "session": session.masked_key,
                "server_url": session.server_url,
            },
        )

    @traced
    def query(self, zoql: str, *, follow: bool = False) -> OperationResult:
        """Run a raw ZOQL statement; with *follow*, page through ``queryMore``."""
        op = "query"
        records: list[dict[str, Any]] = []
        try:
            page = translate_query(self._client.call("query", query_body(zoql)))
            records.extend(record_values(r) for r in page.records)
            while follow and not page.done and page.locator:
                with trace_span("query_more") as span:
                    page = translate_query(
                        self._client.call("queryMore", query_more_body(page.locator))
                    )
                    if span:
                        span.annotate("records", len(page.records))
                records.extend(record_values(r) for r in page.records)
        except ZuoraError as exc:
            return self._failure(op, exc)

        return OperationResult(
            ok=True,
            op=op,
            data={
                "count": len(records),
                "done": page.done,
                "query_locator": page.locator,
                "items": records,
            },
        )

    @traced
    def find(self, type_name: str, remote_id: str) -> OperationResult:
        op = "find"
        try:
            cls = lookup(type_name)
        except LookupError as exc:
            return OperationResult(
                ok=False, op=op, errors=[OperationError(code="UNKNOWN_TYPE", message=str(exc))]
            )
        if not issubclass(cls, ZObject) or not hasattr(cls, "find"):
            return OperationResult(
                ok=False,
                op=op,
                errors=[OperationError(code="UNKNOWN_TYPE", message=f"{type_name} cannot be found by id")],
            )

        try:
            obj = cls.find(self._client, remote_id)
        except ZuoraError as exc:
            return self._failure(op, exc)

        if obj is None:
            return OperationResult(
                ok=False,
                op=op,
                errors=[OperationError(code="NOT_FOUND", message=f"No {cls.remote_name} with id {remote_id}")],
            )
        data = {name: _plain(value) for name, value in obj.attributes().items()}
        return OperationResult(ok=True, op=op, id=obj.id, data={"type": cls.remote_name, **data})


def _plain(value: Any) -> Any:
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)
