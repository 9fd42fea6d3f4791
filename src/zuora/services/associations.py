"""AssociationResolver: lazy, cached loading of remote child collections."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Any

import structlog

from zuora.objects.associations import RemoteAssociation
from zuora.services.translator import translate_query
from zuora.wire import zoql
from zuora.wire.envelope import query_body

if TYPE_CHECKING:
    from zuora.objects.base import ModelBase, ZObject
    from zuora.services.gateway import Gateway

log = structlog.get_logger(__name__)


class AssociationResolver:
    """Loads ``RemoteAssociation`` children through the gateway.

    At most one query per parent per association until the parent is
    saved again; the cache lives on the parent instance.
    """

    def __init__(self, gateway: Gateway) -> None:
        self._gateway = gateway
        self._lock = threading.RLock()

    def children(self, parent: ModelBase, association: RemoteAssociation) -> list[Any]:
        """Cached children, loading them on first access if the parent is persisted."""
        with self._lock:
            cache = parent._association_cache
            if association.name in cache:
                return cache[association.name]
            if parent.new_record:
                return cache.setdefault(association.name, [])
            loaded = self._fetch(parent, association)  # type: ignore[arg-type]
            cache[association.name] = loaded
            return loaded

    def invalidate(self, parent: ModelBase) -> None:
        """Forget every loaded remote collection on *parent*."""
        with self._lock:
            for name, association in parent._associations.items():
                if isinstance(association, RemoteAssociation):
                    parent._association_cache.pop(name, None)

    def _fetch(self, parent: ZObject, association: RemoteAssociation) -> list[Any]:
        target = association.target
        statement = zoql.select(
            target.remote_name,
            target.selectable_fields(),  # type: ignore[attr-defined]
            zoql.where_clause({association.foreign_key: parent.id}),
        )
        page = translate_query(self._gateway.call("query", query_body(statement)))
        log.debug(
            "association.loaded",
            parent=type(parent).__name__,
            association=association.name,
            count=len(page.records),
        )
        return [target.from_record(record, client=parent.client) for record in page.records]
