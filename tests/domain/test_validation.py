"""Tests for declarative validation rules."""

from __future__ import annotations

from typing import Any

from zuora.domain.validation import Custom, Inclusion, MinChildren, Required, run_rules


class _Obj:
    def __init__(self, *, new_record: bool = True, children: list[Any] | None = None, **attrs: Any):
        self.new_record = new_record
        self._children = children
        for name, value in attrs.items():
            setattr(self, name, value)

    def attached_children(self, association: str) -> list[Any] | None:
        return self._children


class TestRequired:
    def test_blank_and_missing(self) -> None:
        obj = _Obj(name=None, currency="  ", batch="Batch1")
        problems = Required("name", "currency", "batch").check(obj)
        assert problems == [("name", "can't be blank"), ("currency", "can't be blank")]

    def test_falsy_non_strings_are_present(self) -> None:
        assert Required("bill_cycle_day").check(_Obj(bill_cycle_day=0)) == []


class TestInclusion:
    def test_outside_choices(self) -> None:
        problems = Inclusion("type", ["NewProduct", "Renewal"]).check(_Obj(type="Upgrade"))
        assert problems[0][0] == "type"
        assert "NewProduct" in problems[0][1]

    def test_unset_is_left_to_required(self) -> None:
        assert Inclusion("type", ["NewProduct"]).check(_Obj(type=None)) == []


class TestMinChildren:
    def test_new_record_without_children(self) -> None:
        problems = MinChildren("tiers").check(_Obj(children=[]))
        assert problems == [("tiers", "requires at least 1 child")]

    def test_new_record_never_touched(self) -> None:
        assert MinChildren("tiers").check(_Obj(children=None)) != []

    def test_persisted_unloaded_is_skipped(self) -> None:
        assert MinChildren("tiers").check(_Obj(new_record=False, children=None)) == []

    def test_persisted_loaded_empty_fails(self) -> None:
        assert MinChildren("tiers").check(_Obj(new_record=False, children=[])) != []

    def test_plural_message(self) -> None:
        problems = MinChildren("tiers", minimum=2).check(_Obj(children=[object()]))
        assert problems == [("tiers", "requires at least 2 children")]


def test_run_rules_collects_per_attribute() -> None:
    obj = _Obj(name=None, children=[])
    errors = run_rules(
        obj,
        [
            Required("name"),
            MinChildren("tiers"),
            Custom(lambda o: [("name", "must be unique")]),
        ],
    )
    assert errors == {
        "name": ["can't be blank", "must be unique"],
        "tiers": ["requires at least 1 child"],
    }
