"""Association descriptors.

Two shapes:

* :class:`SimpleAssociation` holds caller-supplied children verbatim and
  writes them as nested elements. Nothing is ever fetched.
* :class:`RemoteAssociation` lazily loads children by querying on the
  parent's id, caches them on the parent, and drops the cache after the
  parent is saved. With ``inline=True`` the materialized children are
  also written as complex data on the parent's next write.

INVARIANT: a remote association on a new record is empty and never
triggers a remote call.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any
from xml.etree.ElementTree import Element

from zuora.domain.errors import UnboundObjectError
from zuora.wire.envelope import add

if TYPE_CHECKING:
    from zuora.objects.base import ModelBase


class Association:
    """Common descriptor plumbing: name, target class, cache slot."""

    def __init__(
        self,
        target: str | type[ModelBase],
        *,
        wire_name: str | None = None,
        namespace: str = "api",
        container: str | None = None,
        container_namespace: str = "object",
    ) -> None:
        self._target = target
        self.wire_name = wire_name
        self.namespace = namespace
        self.container = container
        self.container_namespace = container_namespace
        self.name = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    @property
    def target(self) -> type[ModelBase]:
        """Resolve the child class (string targets are looked up by class name)."""
        if isinstance(self._target, str):
            from zuora.objects.base import lookup

            self._target = lookup(self._target)
        return self._target

    @property
    def item_wire_name(self) -> str:
        return self.wire_name or self.target.remote_name

    def _coerce(self, value: Any) -> Any:
        if isinstance(value, Mapping):
            return self.target(**value)
        return value

    def attached(self, instance: ModelBase) -> list[Any] | None:
        """Children the caller has materialized, or None if never touched."""
        raise NotImplementedError

    def write(self, instance: ModelBase, parent: Element) -> None:
        """Append this association's children to *parent*."""
        children = self.attached(instance) or []
        if not children:
            return
        holder = parent
        if self.container:
            holder = add(parent, self.container_namespace, self.container)
        for child in children:
            element = add(holder, self.namespace, self.item_wire_name)
            child.write_fields(element, mode="nested")


class SimpleAssociation(Association):
    """Caller-supplied child value(s) sent inline on writes.

    ``many=True`` gives a list the caller can append to. Mappings are
    converted to the target type, so option bags may be passed as dicts.
    """

    def __init__(self, target: str | type[ModelBase], *, many: bool = False, **kwargs: Any) -> None:
        super().__init__(target, **kwargs)
        self.many = many

    def __get__(self, instance: ModelBase | None, owner: type | None = None) -> Any:
        if instance is None:
            return self
        cache = instance._association_cache
        if self.many:
            return cache.setdefault(self.name, [])
        return cache.get(self.name)

    def __set__(self, instance: ModelBase, value: Any) -> None:
        if self.many:
            instance._association_cache[self.name] = [self._coerce(v) for v in (value or [])]
        elif value is None:
            instance._association_cache.pop(self.name, None)
        else:
            instance._association_cache[self.name] = self._coerce(value)

    def attached(self, instance: ModelBase) -> list[Any] | None:
        value = instance._association_cache.get(self.name)
        if value is None:
            return [] if self.many else None
        return value if self.many else [value]


class RemoteAssociation(Association):
    """Child collection loaded on demand by ``foreign_key = parent.id``."""

    def __init__(
        self,
        target: str | type[ModelBase],
        *,
        foreign_key: str,
        inline: bool = False,
        **kwargs: Any,
    ) -> None:
        super().__init__(target, **kwargs)
        self.foreign_key = foreign_key
        self.inline = inline

    def __get__(self, instance: ModelBase | None, owner: type | None = None) -> Any:
        if instance is None:
            return self
        client = instance.client
        if client is None:
            return _UNBOUND.children(instance, self)
        return client.associations.children(instance, self)

    def __set__(self, instance: ModelBase, value: Any) -> None:
        instance._association_cache[self.name] = [self._coerce(v) for v in (value or [])]

    def attached(self, instance: ModelBase) -> list[Any] | None:
        return instance._association_cache.get(self.name)

    def write(self, instance: ModelBase, parent: Element) -> None:
        if self.inline:
            super().write(instance, parent)


class _UnboundResolver:
    """Stand-in resolver for objects created without a client."""

    def children(self, parent: ModelBase, association: RemoteAssociation) -> list[Any]:
        cache = parent._association_cache
        if association.name in cache:
            return cache[association.name]
        if parent.new_record:
            return cache.setdefault(association.name, [])
        msg = f"{type(parent).__name__}.{association.name} needs a client to load"
        raise UnboundObjectError(msg)


_UNBOUND = _UnboundResolver()
