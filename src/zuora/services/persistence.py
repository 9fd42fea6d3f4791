"""PersistenceService: create/update/delete/query/submit for mapped objects.

Each operation issues exactly one remote call. Validation runs first and
short-circuits before the network; business-rule rejections come back
as ``False`` / failed results, while transport faults propagate.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, TypeVar

import structlog

from zuora.domain.errors import StaleObjectError
from zuora.domain.lifecycle import write_operation_for
from zuora.services.result import OperationError, OperationResult
from zuora.services.telemetry import traced
from zuora.services.translator import translate_query, translate_save
from zuora.wire import zoql
from zuora.wire.envelope import delete_body, operation, query_body

if TYPE_CHECKING:
    from zuora.client import ZuoraClient
    from zuora.objects.base import ZObject
    from zuora.services.associations import AssociationResolver
    from zuora.services.gateway import Gateway

log = structlog.get_logger(__name__)

_Z = TypeVar("_Z", bound="ZObject")

BASE_ERROR_KEY = "base"
MISSING_ID = "MISSING_ID"


def _errors_from(result: OperationResult) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    for err in result.errors:
        errors.setdefault(err.field or BASE_ERROR_KEY, []).append(err.message)
    return errors


class PersistenceService:
    """Object persistence façade engine behind ``Persistable`` and ``Submittable``."""

    def __init__(self, gateway: Gateway, associations: AssociationResolver) -> None:
        self._gateway = gateway
        self._associations = associations

    # ------------------------------------------------------------------
    # Persistable
    # ------------------------------------------------------------------

    def save(self, obj: ZObject) -> bool:
        """``create`` when new, ``update`` when persisted.

        Raises:
            StaleObjectError: *obj* has been destroyed.
        """
        obj.ensure_not_destroyed()
        if obj.validate():
            log.debug("object.invalid", type=obj.remote_name, errors=obj.errors)
            return False

        op = write_operation_for(obj.state)
        if op is None:
            raise StaleObjectError(f"{obj.remote_name} cannot be saved from state {obj.state}")

        body = operation(op)
        body.append(obj.to_element(mode=op))
        result = translate_save(op, self._gateway.call(op, body))
        if op == "create" and result.ok and not result.id:
            missing = OperationError(code=MISSING_ID, message="create succeeded without returning an Id")
            result = result.model_copy(update={"ok": False, "errors": [*result.errors, missing]})
        obj.last_result = result

        if not result.ok:
            obj.errors = _errors_from(result)
            log.info("object.rejected", type=obj.remote_name, op=op, message=result.message)
            return False

        if op == "create":
            obj.id = result.id
        self._associations.invalidate(obj)
        obj.errors = {}
        return True

    def destroy(self, obj: ZObject) -> bool:
        """``delete`` by id; the object becomes terminal on success.

        Raises:
            StaleObjectError: *obj* has already been destroyed.
        """
        obj.ensure_not_destroyed()
        if obj.new_record:
            obj.errors = {"id": ["is required to destroy"]}
            return False

        result = translate_save("delete", self._gateway.call("delete", delete_body(obj.remote_name, [obj.id])))
        obj.last_result = result
        if not result.ok:
            obj.errors = _errors_from(result)
            return False

        obj.mark_destroyed()
        self._associations.invalidate(obj)
        obj.errors = {}
        return True

    def reload(self, obj: ZObject) -> bool:
        obj.ensure_not_destroyed()
        if obj.new_record:
            return False
        found = self.find(type(obj), obj.id, client=obj.client)
        if found is None:
            return False
        obj._values = found._values
        self._associations.invalidate(obj)
        return True

    def find(self, cls: type[_Z], remote_id: str, *, client: ZuoraClient | None = None) -> _Z | None:
        records = self.query(cls, {"id": remote_id}, client=client)
        return records[0] if records else None

    def query(
        self,
        cls: type[_Z],
        criteria: Mapping[str, Any] | str | None = None,
        *,
        client: ZuoraClient | None = None,
    ) -> list[_Z]:
        """Select all readable fields of *cls* filtered by *criteria*."""
        if isinstance(criteria, Mapping):
            where: str | None = zoql.where_clause(
                {cls.wire_name_for(name): value for name, value in criteria.items()}
            )
        else:
            where = criteria or None
        statement = zoql.select(cls.remote_name, cls.selectable_fields(), where)
        page = translate_query(self._gateway.call("query", query_body(statement)))
        return [cls.from_record(record, client=client) for record in page.records]

    # ------------------------------------------------------------------
    # Submittable
    # ------------------------------------------------------------------

    @traced
    def submit(self, composite: Any) -> OperationResult:
        """Validate, send, and translate a write-only composite request."""
        op = composite.operation
        errors = composite.validate()
        if errors:
            return OperationResult(
                ok=False,
                op=op,
                errors=[
                    OperationError(code="VALIDATION_FAILED", message=f"{name} {msg}", field=name)
                    for name, messages in errors.items()
                    for msg in messages
                ],
            )
        result = composite.translate(self._gateway.call(op, composite.to_body()))
        if not result.ok:
            log.info("composite.rejected", op=op, message=result.message)
        return result
