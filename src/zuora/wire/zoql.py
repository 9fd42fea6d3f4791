"""ZOQL query string construction."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from zuora.domain.fields import format_decimal


def quote(value: Any) -> str:
    """Render a literal for a ZOQL ``where`` clause."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Decimal):
        return format_decimal(value)
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (date, datetime)):
        value = value.isoformat()
    text = str(value).replace("\\", "\\\\").replace("'", "\\'")
    return f"'{text}'"


def where_clause(conditions: Mapping[str, Any]) -> str:
    """AND together equality conditions keyed by wire name."""
    return " and ".join(f"{name} = {quote(value)}" for name, value in conditions.items())


def select(remote_name: str, fields: Iterable[str], where: str | None = None) -> str:
    """``select A, B from Name [where ...]``."""
    statement = f"select {', '.join(fields)} from {remote_name}"
    if where:
        statement += f" where {where}"
    return statement
