"""Mapped object base classes and capabilities.

``ModelBase`` carries declared fields, associations, validation rules,
and the optional client handle. ``ZObject`` adds the remote ``Id`` and
the new/persisted/destroyed lifecycle.

Capabilities are separate mixins. ``Persistable`` objects support the
full create/update/destroy/find/query surface; ``Submittable`` objects
(composite requests such as ``AmendRequest``) can only be submitted.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, ClassVar, Self
from xml.etree.ElementTree import Element

from zuora.domain.errors import StaleObjectError, UnboundObjectError
from zuora.domain.fields import Field
from zuora.domain.lifecycle import compute_state
from zuora.domain.types import FieldType, ObjectState
from zuora.domain.validation import Rule, run_rules
from zuora.objects.associations import Association
from zuora.wire.envelope import add, zobject
from zuora.wire.parser import record_values

if TYPE_CHECKING:
    from zuora.client import ZuoraClient
    from zuora.services.result import OperationResult

_REGISTRY: dict[str, type[ModelBase]] = {}


def lookup(name: str) -> type[ModelBase]:
    """Find a mapped class by class name or remote name."""
    try:
        return _REGISTRY[name]
    except KeyError:
        msg = f"Unknown object type: {name}"
        raise LookupError(msg) from None


def registered() -> dict[str, type[ModelBase]]:
    return dict(_REGISTRY)


class ModelBase:
    """Declared fields + associations + rules, bound optionally to a client."""

    remote_name: ClassVar[str] = ""
    rules: ClassVar[tuple[Rule, ...]] = ()
    # Serialization order override (attribute names); declaration order otherwise.
    field_order: ClassVar[tuple[str, ...] | None] = None

    _fields: ClassVar[dict[str, Field]] = {}
    _associations: ClassVar[dict[str, Association]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        fields: dict[str, Field] = {}
        associations: dict[str, Association] = {}
        for klass in reversed(cls.__mro__):
            for name, attr in vars(klass).items():
                if isinstance(attr, Field):
                    fields[name] = attr
                elif isinstance(attr, Association):
                    associations[name] = attr
        cls._fields = fields
        cls._associations = associations
        if "remote_name" not in cls.__dict__:
            cls.remote_name = cls.__name__
        _REGISTRY[cls.__name__] = cls
        _REGISTRY.setdefault(cls.remote_name, cls)

    def __init__(self, *, client: ZuoraClient | None = None, **attrs: Any) -> None:
        self._values: dict[str, Any] = {}
        self._association_cache: dict[str, Any] = {}
        self._client = client
        self.errors: dict[str, list[str]] = {}
        for f in self._fields.values():
            if f.default is not None:
                self._values[f.name] = copy.copy(f.default)
        for name, value in attrs.items():
            if name not in self._fields and name not in self._associations:
                msg = f"{type(self).__name__} has no attribute {name!r}"
                raise TypeError(msg)
            setattr(self, name, value)

    def __repr__(self) -> str:
        pairs = ", ".join(f"{k}={v!r}" for k, v in self._values.items())
        return f"{type(self).__name__}({pairs})"

    # ------------------------------------------------------------------
    # Client binding
    # ------------------------------------------------------------------

    @property
    def client(self) -> ZuoraClient | None:
        return self._client

    def require_client(self) -> ZuoraClient:
        if self._client is None:
            msg = f"{type(self).__name__} is not bound to a client"
            raise UnboundObjectError(msg)
        return self._client

    @property
    def new_record(self) -> bool:
        return True

    # ------------------------------------------------------------------
    # Attributes
    # ------------------------------------------------------------------

    @classmethod
    def fields(cls) -> list[Field]:
        """Fields in serialization order."""
        if cls.field_order is None:
            return list(cls._fields.values())
        ordered = [cls._fields[name] for name in cls.field_order]
        rest = [f for name, f in cls._fields.items() if name not in cls.field_order]
        return ordered + rest

    @classmethod
    def wire_name_for(cls, attribute: str) -> str:
        try:
            return str(cls._fields[attribute].wire_name)
        except KeyError:
            msg = f"{cls.__name__} has no field {attribute!r}"
            raise AttributeError(msg) from None

    def attributes(self) -> dict[str, Any]:
        """Set field values keyed by attribute name."""
        return dict(self._values)

    def attached_children(self, association: str) -> list[Any] | None:
        return self._associations[association].attached(self)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate(self) -> dict[str, list[str]]:
        """Run declared rules; store and return field-to-messages errors."""
        self.errors = run_rules(self, self.rules)
        return self.errors

    def is_valid(self) -> bool:
        return not self.validate()

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def _writable(self, mode: str) -> list[Field]:
        return [
            f
            for f in self.fields()
            if f.name != "id"
            and not f.read_only
            and not (f.immutable and mode == "update")
        ]

    def write_fields(self, parent: Element, *, mode: str = "create") -> None:
        """Append wire elements for set fields, then associations.

        ``update`` and ``nested`` modes lead with ``Id`` when one is known.
        Unset fields are omitted.
        """
        remote_id = self._values.get("id")
        if remote_id and mode in ("update", "nested"):
            add(parent, "object", "Id", remote_id)
        for f in self._writable(mode):
            value = self._values.get(f.name)
            if value is None:
                continue
            add(parent, f.namespace, str(f.wire_name), f.to_wire(value))
        for association in self._associations.values():
            association.write(self, parent)

    def load_wire(self, values: Mapping[str, str | None]) -> Self:
        """Assign wire values to typed fields. Unknown names are ignored.

        Raises:
            CoercionError: A value does not fit its declared type.
        """
        by_wire = {f.wire_name: f for f in self._fields.values()}
        for wire_name, raw in values.items():
            f = by_wire.get(wire_name)
            if f is None:
                continue
            if raw is None:
                self._values.pop(f.name, None)
            else:
                self._values[f.name] = f.from_wire(raw)
        return self

    @classmethod
    def from_record(
        cls,
        record: Mapping[str, str | None] | Element,
        *,
        client: ZuoraClient | None = None,
    ) -> Self:
        """Build an instance from a wire record; defaults are not applied."""
        obj = cls(client=client)
        obj._values.clear()
        values = record_values(record) if isinstance(record, Element) else record
        return obj.load_wire(values)


class ZObject(ModelBase):
    """A remote billing entity with an ``Id`` and a persistence lifecycle.

    INVARIANT: an object with an id is never submitted as a create; one
    without is never submitted as an update.
    """

    id = Field(FieldType.STRING, wire_name="Id")

    def __init__(self, *, client: ZuoraClient | None = None, **attrs: Any) -> None:
        self._destroyed = False
        self.last_result: OperationResult | None = None
        super().__init__(client=client, **attrs)

    @property
    def new_record(self) -> bool:
        return self.state is ObjectState.NEW

    @property
    def persisted(self) -> bool:
        return self.state is ObjectState.PERSISTED

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    @property
    def state(self) -> ObjectState:
        return compute_state(self._values.get("id"), destroyed=self._destroyed)

    def mark_destroyed(self) -> None:
        self._destroyed = True

    def ensure_not_destroyed(self) -> None:
        if self._destroyed:
            msg = f"{type(self).__name__} {self.id} has been destroyed"
            raise StaleObjectError(msg)

    @classmethod
    def selectable_fields(cls) -> list[str]:
        """Wire names included in ``select`` lists."""
        return [str(f.wire_name) for f in cls.fields() if not f.write_only]

    def to_element(self, *, mode: str = "create") -> Element:
        """Serialize as a detached ``zObjects`` element for *mode*."""
        element = zobject(None, self.remote_name)
        self.write_fields(element, mode=mode)
        return element


class Persistable:
    """Full persistence surface: save, destroy, find, query."""

    def save(self: Any) -> bool:
        """Create or update depending on id presence.

        Returns False on validation or business-rule failure, with
        details in ``errors`` (and ``last_result`` for remote failures).
        """
        return self.require_client().persistence.save(self)

    def destroy(self: Any) -> bool:
        return self.require_client().persistence.destroy(self)

    def reload(self: Any) -> bool:
        """Refresh field values from the server and drop loaded associations."""
        return self.require_client().persistence.reload(self)

    @classmethod
    def find(cls, client: ZuoraClient, remote_id: str) -> Any:
        return client.persistence.find(cls, remote_id, client=client)

    @classmethod
    def query(cls, client: ZuoraClient, criteria: Mapping[str, Any] | str | None = None) -> list[Any]:
        """Records matching ANDed equality *criteria* or a raw ``where`` clause."""
        return client.persistence.query(cls, criteria, client=client)

    @classmethod
    def all(cls, client: ZuoraClient) -> list[Any]:
        return client.persistence.query(cls, None, client=client)


class Submittable:
    """Write-only composite: assembled, submitted once, answered with a result."""

    operation: ClassVar[str] = ""

    def create(self: Any) -> OperationResult:
        return self.require_client().persistence.submit(self)

    def to_body(self) -> Element:
        raise NotImplementedError

    def translate(self, response: Element) -> OperationResult:
        raise NotImplementedError
