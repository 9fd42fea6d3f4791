"""Operation-specific Rich renderers for OperationResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from zuora.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from zuora.services.result import OperationResult

# Wide query results are truncated to this many columns in the table view.
MAX_COLUMNS = 8


def render_result(result: OperationResult, *, verbose: bool = False) -> str:
    """Render an OperationResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: OperationResult) -> None:
    console.print(Text.assemble(("OK", "zuora.ok"), (f"  {result.op}", "zuora.op")))


def _field(console: Console, key: str, value: Any) -> None:
    style = "zuora.id" if key in ("id", "Id") or key.endswith("_id") else ""
    console.print(Text.assemble((f"  {key}: ", "zuora.key"), (str(value), style)))


def _render_meta(console: Console, result: OperationResult) -> None:
    """Remote call count and the span tree recorded by ``@traced``."""
    if not result.meta:
        return
    console.print()
    if "remote_calls" in result.meta:
        _field(console, "remote_calls", result.meta["remote_calls"])
    telemetry = result.meta.get("telemetry")
    if telemetry:
        console.print(_span_tree(telemetry))


def _span_label(span: dict[str, Any]) -> Text:
    duration = span.get("duration_ms", 0.0)
    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"
    label = Text.assemble((f"{duration:.2f}ms", style), f"  {span.get('name', '?')}")
    annotations = span.get("annotations")
    if annotations:
        label.append("  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")")
    return label


def _span_tree(span: dict[str, Any], parent: Tree | None = None) -> Tree:
    node = Tree(_span_label(span)) if parent is None else parent.add(_span_label(span))
    for child in span.get("children", []):
        _span_tree(child, node)
    return node


def record_table(records: list[dict[str, Any]]) -> Table:
    """Build a Rich Table with one column per returned field."""
    columns: list[str] = []
    for record in records:
        for key in record:
            if key not in columns:
                columns.append(key)
    if "Id" in columns:
        columns.remove("Id")
        columns.insert(0, "Id")
    columns = columns[:MAX_COLUMNS]

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    for col in columns:
        table.add_column(col, style="zuora.id" if col == "Id" else None, no_wrap=col == "Id")
    for record in records:
        table.add_row(*("" if record.get(col) is None else str(record[col]) for col in columns))
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: OperationResult, console: Console, *, verbose: bool = False) -> None:
    msg = result.message or "Unknown error"
    console.print(Text.assemble(("ERROR", "zuora.error"), (f"  {result.op}", "zuora.op"), ": ", msg))

    if verbose:
        for err in result.errors:
            where = f" [{err.field}]" if err.field else ""
            console.print(Text.assemble("    ", (err.code, "zuora.key"), f"{where}: {err.message}"))


# ── Operation renderers ───────────────────────────────────────────────


def _render_login(result: OperationResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key in ("username", "endpoint", "server_url", "session"):
        if result.data.get(key):
            _field(console, key, result.data[key])
    if verbose:
        _render_meta(console, result)


def _render_query(result: OperationResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    if items:
        console.print(record_table(items))
    console.print(f"\n{result.data.get('count', len(items))} records")
    if not result.data.get("done", True):
        _field(console, "query_locator", result.data.get("query_locator"))
    if verbose:
        _render_meta(console, result)


def _render_record(result: OperationResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        if value is not None:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


def _render_generic(result: OperationResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    if result.id:
        _field(console, "id", result.id)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


_OP_RENDERERS: dict[str, Any] = {
    "login": _render_login,
    "query": _render_query,
    "find": _render_record,
}
