"""Object persistence lifecycle.

new -> persisted -> destroyed. ``destroyed`` is terminal; a persisted
object stays persisted across updates.
"""

from __future__ import annotations

from zuora.domain.types import ObjectState


def compute_state(remote_id: str | None, *, destroyed: bool = False) -> ObjectState:
    """Derive the state from identifier presence and the destroyed flag."""
    if destroyed:
        return ObjectState.DESTROYED
    if remote_id:
        return ObjectState.PERSISTED
    return ObjectState.NEW


def write_operation_for(state: str) -> str | None:
    """Return the write call a ``save`` issues from *state*, or None if terminal."""
    if state == ObjectState.NEW:
        return "create"
    if state == ObjectState.PERSISTED:
        return "update"
    return None
