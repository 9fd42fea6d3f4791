"""Tests for Field descriptors and wire coercion."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any

import pytest

from zuora.domain.errors import CoercionError
from zuora.domain.fields import Field, camelize, format_decimal
from zuora.domain.types import FieldType


class _Holder:
    price = Field(FieldType.DECIMAL)
    sku = Field(wire_name="SKU")
    bill_cycle_day = Field(FieldType.INTEGER)

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}


class TestNaming:
    def test_camelize(self) -> None:
        assert camelize("bill_cycle_day") == "BillCycleDay"
        assert camelize("name") == "Name"

    def test_default_wire_name(self) -> None:
        assert _Holder.bill_cycle_day.wire_name == "BillCycleDay"
        assert _Holder.bill_cycle_day.name == "bill_cycle_day"

    def test_explicit_wire_name(self) -> None:
        assert _Holder.sku.wire_name == "SKU"


class TestDescriptor:
    def test_unset_reads_none(self) -> None:
        assert _Holder().price is None

    def test_set_and_get(self) -> None:
        h = _Holder()
        h.price = Decimal("20")
        assert h.price == Decimal("20")
        assert h._values == {"price": Decimal("20")}

    def test_assigning_none_unsets(self) -> None:
        h = _Holder()
        h.price = 5
        h.price = None
        assert "price" not in h._values

    def test_text_is_coerced_to_declared_type(self) -> None:
        h = _Holder()
        h.price = "10"
        h.bill_cycle_day = " 7 "
        assert h.price == Decimal("10")
        assert isinstance(h.price, Decimal)
        assert h.bill_cycle_day == 7

    def test_numbers_are_coerced(self) -> None:
        h = _Holder()
        h.price = 12.5
        h.bill_cycle_day = Decimal("3")
        assert h.price == Decimal("12.5")
        assert h.bill_cycle_day == 3
        assert isinstance(h.bill_cycle_day, int)

    @pytest.mark.parametrize("value", [1.9, Decimal("2.5"), "1.9", True])
    def test_integer_rejects_non_integral(self, value: Any) -> None:
        h = _Holder()
        with pytest.raises(CoercionError) as excinfo:
            h.bill_cycle_day = value
        assert excinfo.value.field == "bill_cycle_day"
        assert "bill_cycle_day" not in h._values

    def test_boolean_and_dates(self) -> None:
        assert Field(FieldType.BOOLEAN).coerce("True") is True
        assert Field(FieldType.DATE).coerce("2024-01-31") == date(2024, 1, 31)
        assert Field(FieldType.DATETIME).coerce(date(2024, 1, 31)) == datetime(2024, 1, 31)
        with pytest.raises(CoercionError):
            Field(FieldType.BOOLEAN).coerce(1)
        with pytest.raises(CoercionError):
            Field(FieldType.DATE).coerce(20240131)


class TestToWire:
    def test_booleans_are_lowercase(self) -> None:
        f = Field(FieldType.BOOLEAN)
        assert f.to_wire(True) == "true"
        assert f.to_wire(False) == "false"
        assert f.to_wire("TRUE") == "true"

    def test_boolean_rejects_other_text(self) -> None:
        with pytest.raises(CoercionError):
            Field(FieldType.BOOLEAN).to_wire("maybe")

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (Decimal("50.00"), "50"),
            (50, "50"),
            ("10", "10"),
            (Decimal("0.50"), "0.5"),
            (Decimal("1E+2"), "100"),
            (Decimal("-0"), "0"),
        ],
    )
    def test_decimal_canonical_form(self, value: Any, expected: str) -> None:
        assert Field(FieldType.DECIMAL).to_wire(value) == expected

    def test_decimal_rejects_garbage(self) -> None:
        with pytest.raises(CoercionError) as excinfo:
            Field(FieldType.DECIMAL).to_wire("ten")
        assert excinfo.value.value == "ten"

    def test_decimal_rejects_bool(self) -> None:
        with pytest.raises(CoercionError):
            Field(FieldType.DECIMAL).to_wire(True)

    def test_integer(self) -> None:
        assert Field(FieldType.INTEGER).to_wire("12") == "12"
        with pytest.raises(CoercionError):
            Field(FieldType.INTEGER).to_wire("twelve")
        with pytest.raises(CoercionError):
            Field(FieldType.INTEGER).to_wire(1.9)

    def test_enum_outside_choices_is_not_sent(self) -> None:
        f = Field(FieldType.ENUM, choices=["OneTime", "Recurring"])
        f.name = "charge_type"
        assert f.to_wire("Recurring") == "Recurring"
        with pytest.raises(CoercionError) as excinfo:
            f.to_wire("Bogus")
        assert excinfo.value.field == "charge_type"

    def test_dates(self) -> None:
        assert Field(FieldType.DATE).to_wire(date(2024, 1, 31)) == "2024-01-31"
        assert Field(FieldType.DATE).to_wire(datetime(2024, 1, 31, 8, 30)) == "2024-01-31"
        assert Field(FieldType.DATETIME).to_wire(datetime(2024, 1, 31, 8, 30)) == "2024-01-31T08:30:00"


class TestFromWire:
    def test_boolean(self) -> None:
        assert Field(FieldType.BOOLEAN).from_wire("true") is True
        assert Field(FieldType.BOOLEAN).from_wire("False") is False

    def test_boolean_never_defaults(self) -> None:
        f = Field(FieldType.BOOLEAN)
        f.name = "auto_pay"
        with pytest.raises(CoercionError) as excinfo:
            f.from_wire("yes")
        assert excinfo.value.field == "auto_pay"
        assert excinfo.value.value == "yes"

    def test_numbers(self) -> None:
        assert Field(FieldType.INTEGER).from_wire(" 12 ") == 12
        assert Field(FieldType.DECIMAL).from_wire("10.50") == Decimal("10.50")
        with pytest.raises(CoercionError):
            Field(FieldType.INTEGER).from_wire("1.5")
        with pytest.raises(CoercionError):
            Field(FieldType.DECIMAL).from_wire("n/a")

    def test_date_accepts_timestamps(self) -> None:
        f = Field(FieldType.DATE)
        assert f.from_wire("2011-12-23") == date(2011, 12, 23)
        assert f.from_wire("2011-12-23T00:00:00.000-08:00") == date(2011, 12, 23)

    def test_datetime(self) -> None:
        value = Field(FieldType.DATETIME).from_wire("2011-12-23T14:37:06.000-08:00")
        assert value.year == 2011
        assert value.utcoffset() is not None

    def test_enum_checks_choices(self) -> None:
        f = Field(FieldType.ENUM, choices=["OneTime", "Recurring"])
        assert f.from_wire("Recurring") == "Recurring"
        with pytest.raises(CoercionError):
            f.from_wire("Sometimes")

    def test_enum_ignores_surrounding_whitespace(self) -> None:
        f = Field(FieldType.ENUM, choices=["OneTime", "Recurring"])
        assert f.from_wire(" Recurring\n") == "Recurring"

    def test_string_passthrough(self) -> None:
        assert Field().from_wire("Example") == "Example"


def test_format_decimal_without_exponent() -> None:
    assert format_decimal(Decimal("1.2300E+3")) == "1230"
