"""Fault/result translation.

Protocol faults (SOAP faults, malformed documents, I/O) are raised by the
gateway. Everything that arrives as a well-formed ``...Response`` is
turned into an :class:`OperationResult` here, including business-rule
rejections (``Success=false``), which are never raised.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any
from xml.etree.ElementTree import Element

from zuora.services.result import ItemResult, OperationError, OperationResult
from zuora.wire.parser import child_text, children, element_to_dict

_FIELD_PATTERN = re.compile(r"[Ii]nvalid value for field (?P<field>\w+)")

# amend ``results`` leaves copied into ItemResult.data
_AMEND_DATA: dict[str, str] = {
    "AmendmentIds": "amendment_ids",
    "InvoiceId": "invoice_id",
    "TotalDeltaMrr": "total_delta_mrr",
    "TotalDeltaTcv": "total_delta_tcv",
    "PaymentTransactionNumber": "payment_transaction_number",
}


@dataclass
class QueryPage:
    """One page of query results."""

    records: list[Element] = field(default_factory=list)
    done: bool = True
    locator: str | None = None
    size: int = 0


def _is_success(element: Element) -> bool:
    flag = child_text(element, "Success", "success") or ""
    return flag.strip().lower() == "true"


def field_from_message(message: str) -> str | None:
    """Extract ``Field`` from ``Invalid value for field Field: value``."""
    match = _FIELD_PATTERN.search(message)
    return match.group("field") if match else None


def item_errors(element: Element) -> list[OperationError]:
    errors: list[OperationError] = []
    for err in children(element, "Errors") + children(element, "errors"):
        message = (child_text(err, "Message", "message") or "").strip()
        errors.append(
            OperationError(
                code=(child_text(err, "Code", "code") or "UNKNOWN").strip(),
                message=message,
                field=child_text(err, "Field", "field") or field_from_message(message),
            )
        )
    return errors


def _item(element: Element, *, data: dict[str, Any] | None = None) -> ItemResult:
    ok = _is_success(element)
    errors = item_errors(element)
    if not ok and not errors:
        errors = [OperationError(code="UNKNOWN", message="Remote service reported failure")]
    return ItemResult(
        ok=ok,
        id=child_text(element, "Id", "id"),
        errors=errors,
        data=data or {},
    )


def combine(op: str, items: list[ItemResult], *, data: dict[str, Any] | None = None) -> OperationResult:
    """Fold per-item outcomes into one result. Empty input is a failure."""
    if not items:
        return OperationResult(
            ok=False,
            op=op,
            errors=[OperationError(code="EMPTY_RESPONSE", message=f"No results in {op} response")],
        )
    return OperationResult(
        ok=all(item.ok for item in items),
        op=op,
        id=items[0].id if len(items) == 1 else None,
        items=items,
        errors=[err for item in items for err in item.errors],
        data=data or {},
    )


def translate_save(op: str, response: Element) -> OperationResult:
    """``create`` / ``update`` / ``delete`` responses (SaveResult/DeleteResult)."""
    return combine(op, [_item(r) for r in children(response, "result")])


def translate_amend(response: Element) -> OperationResult:
    """``amend`` responses: one ``results`` element per amend request."""
    items: list[ItemResult] = []
    for r in children(response, "results"):
        values = element_to_dict(r)
        data: dict[str, Any] = {}
        for wire_name, key in _AMEND_DATA.items():
            if wire_name in values:
                data[key] = values[wire_name]
        if isinstance(data.get("amendment_ids"), str):
            data["amendment_ids"] = [data["amendment_ids"]]
        items.append(_item(r, data=data))
    return combine("amend", items)


def translate_query(response: Element) -> QueryPage:
    result = children(response, "result")
    if not result:
        return QueryPage()
    page = result[0]
    size_text = child_text(page, "size") or "0"
    return QueryPage(
        records=children(page, "records"),
        done=(child_text(page, "done") or "true").strip().lower() == "true",
        locator=child_text(page, "queryLocator") or None,
        size=int(size_text) if size_text.strip().isdigit() else 0,
    )


def translate_login(response: Element) -> dict[str, Any]:
    result = children(response, "result")
    return element_to_dict(result[0]) if result else {}
