"""Typed field descriptors and wire coercion.

Each mapped object declares its fields as class attributes::

    class ProductRatePlanChargeTier(ZObject):
        price = Field(FieldType.DECIMAL)
        starting_unit = Field(FieldType.DECIMAL)

Declaration order is the serialization order. Wire names default to the
CamelCase form of the attribute name.

INVARIANT: deserialization never silently defaults. A raw value that
cannot be converted raises :class:`CoercionError`.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from zuora.domain.errors import CoercionError
from zuora.domain.types import FieldType

_TRUE = "true"
_FALSE = "false"


def camelize(name: str) -> str:
    """Convert ``snake_case`` to ``CamelCase`` (``bill_cycle_day`` -> ``BillCycleDay``)."""
    return "".join(part[:1].upper() + part[1:] for part in name.split("_") if part)


def format_decimal(value: Decimal) -> str:
    """Canonical decimal text: no exponent, no trailing fractional zeros."""
    normalized = value.normalize()
    text = format(normalized, "f")
    return "0" if text in ("-0", "") else text


class Field:
    """Data descriptor for one typed, wire-mapped attribute."""

    def __init__(
        self,
        field_type: FieldType = FieldType.STRING,
        *,
        wire_name: str | None = None,
        namespace: str = "object",
        read_only: bool = False,
        write_only: bool = False,
        immutable: bool = False,
        default: Any = None,
        choices: Iterable[str] | None = None,
    ) -> None:
        self.field_type = field_type
        self.wire_name = wire_name
        self.namespace = namespace
        self.read_only = read_only
        self.write_only = write_only
        self.immutable = immutable
        self.default = default
        self.choices = frozenset(choices) if choices is not None else None
        self.name = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name
        if self.wire_name is None:
            self.wire_name = camelize(name)

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return instance._values.get(self.name)

    def __set__(self, instance: Any, value: Any) -> None:
        if value is None:
            instance._values.pop(self.name, None)
        else:
            instance._values[self.name] = self.coerce(value)

    def __repr__(self) -> str:
        return f"Field({self.name!r}, {self.field_type.value}, wire_name={self.wire_name!r})"

    # ------------------------------------------------------------------
    # Coercion
    # ------------------------------------------------------------------

    def coerce(self, value: Any) -> Any:
        """Convert an assigned *value* to the declared Python type.

        Text goes through the same parser as wire values, so ``"10"``
        assigned to a decimal field holds ``Decimal("10")``. Numbers with a
        fractional part are rejected for integer fields.
        """
        ft = self.field_type
        if ft is FieldType.STRING or ft is FieldType.ENUM:
            return value
        if isinstance(value, str):
            return self.from_wire(value)
        try:
            if ft is FieldType.BOOLEAN and isinstance(value, bool):
                return value
            if ft is FieldType.INTEGER and not isinstance(value, bool):
                if isinstance(value, int):
                    return value
                if isinstance(value, (float, Decimal)) and value == int(value):
                    return int(value)
            if ft is FieldType.DECIMAL and not isinstance(value, bool):
                if isinstance(value, Decimal):
                    return value
                if isinstance(value, (int, float)):
                    return Decimal(str(value))
            if ft is FieldType.DATE and isinstance(value, date):
                return value.date() if isinstance(value, datetime) else value
            if ft is FieldType.DATETIME and isinstance(value, date):
                if isinstance(value, datetime):
                    return value
                return datetime(value.year, value.month, value.day)
        except (ValueError, OverflowError) as exc:
            raise CoercionError(self.name, value, ft) from exc
        raise CoercionError(self.name, value, ft)

    def to_wire(self, value: Any) -> str:
        """Render *value* in the canonical text form the service expects."""
        ft = self.field_type
        value = self.coerce(value)
        if ft is FieldType.BOOLEAN:
            return _TRUE if value else _FALSE
        if ft is FieldType.DECIMAL:
            return format_decimal(value)
        if ft is FieldType.DATE or ft is FieldType.DATETIME:
            return value.isoformat()
        if ft is FieldType.ENUM and self.choices is not None and value not in self.choices:
            raise CoercionError(self.name, value, ft)
        return str(value)

    def from_wire(self, raw: str) -> Any:
        """Convert raw wire text into the declared Python type."""
        ft = self.field_type
        text = raw.strip()
        try:
            if ft is FieldType.BOOLEAN:
                lowered = text.lower()
                if lowered not in (_TRUE, _FALSE):
                    raise ValueError(raw)
                return lowered == _TRUE
            if ft is FieldType.INTEGER:
                return int(text)
            if ft is FieldType.DECIMAL:
                return Decimal(text)
            if ft is FieldType.DATE:
                if "T" in text:
                    return datetime.fromisoformat(text).date()
                return date.fromisoformat(text)
            if ft is FieldType.DATETIME:
                return datetime.fromisoformat(text)
            if ft is FieldType.ENUM:
                if self.choices is not None and text not in self.choices:
                    raise ValueError(raw)
                return text
        except (ValueError, InvalidOperation) as exc:
            raise CoercionError(self.name, raw, ft) from exc
        return raw
