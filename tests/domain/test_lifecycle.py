"""Tests for the object persistence state machine."""

from zuora.domain.lifecycle import compute_state, write_operation_for
from zuora.domain.types import ObjectState


class TestComputeState:
    def test_no_id_is_new(self) -> None:
        assert compute_state(None) is ObjectState.NEW
        assert compute_state("") is ObjectState.NEW

    def test_id_is_persisted(self) -> None:
        assert compute_state("4028e4883491c50901349d061be06550") is ObjectState.PERSISTED

    def test_destroyed_wins(self) -> None:
        assert compute_state("abc", destroyed=True) is ObjectState.DESTROYED


class TestWriteOperation:
    def test_create_iff_new(self) -> None:
        assert write_operation_for(ObjectState.NEW) == "create"
        assert write_operation_for(ObjectState.PERSISTED) == "update"
        assert write_operation_for(ObjectState.DESTROYED) is None
