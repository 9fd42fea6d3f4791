"""Instrumentation for façade operations and SOAP dispatches.

``@traced`` opens a root span around an operation; ``trace_span`` and
``instrument_service_call`` nest child spans under it. The finished tree
lands in ``OperationResult.meta`` together with the number of remote
calls it covers. Disabled, each hook costs one ContextVar lookup.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Generator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from zuora.services.result import OperationResult

log = structlog.get_logger(__name__)

_enabled: ContextVar[bool] = ContextVar("zuora_telemetry", default=False)
_current_span: ContextVar[Span | None] = ContextVar("zuora_span", default=None)


@dataclass
class Span:
    """Timing span for an operation, a phase of one, or a remote call."""

    name: str
    parent: Span | None = None
    children: list[Span] = field(default_factory=list)
    annotations: dict[str, Any] = field(default_factory=dict)
    remote: bool = False
    start_time: float = field(default_factory=time.perf_counter)
    end_time: float | None = None

    @property
    def duration_ms(self) -> float:
        if self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time) * 1000

    @property
    def remote_calls(self) -> int:
        """SOAP dispatches in this subtree."""
        return int(self.remote) + sum(child.remote_calls for child in self.children)

    def end(self) -> None:
        self.end_time = time.perf_counter()

    def annotate(self, key: str, value: Any) -> None:
        self.annotations[key] = value

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 2)}
        if self.annotations:
            data["annotations"] = self.annotations
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        return data


@contextmanager
def _activate(span: Span) -> Generator[Span]:
    token = _current_span.set(span)
    try:
        yield span
    finally:
        span.end()
        _current_span.reset(token)


@contextmanager
def trace_span(name: str, *, remote: bool = False) -> Generator[Span | None]:
    """Child span under the open span.

    Yields None when telemetry is disabled or no span is open.
    """
    parent = _current_span.get() if _enabled.get() else None
    if parent is None:
        yield None
        return

    child = Span(name=name, parent=parent, remote=remote)
    parent.children.append(child)
    with _activate(child):
        yield child


@contextmanager
def instrument_service_call(service: str, operation: str) -> Generator[Span | None]:
    """Remote-call span plus a ``service.call`` debug event."""
    if not _enabled.get():
        yield None
        return

    started = time.perf_counter()
    ok = False
    try:
        with trace_span(f"{service}.{operation}", remote=True) as span:
            yield span
        ok = True
    finally:
        log.debug(
            "service.call",
            service=service,
            operation=operation,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
            ok=ok,
        )


def _with_telemetry(result: OperationResult, span: Span) -> OperationResult:
    meta = {**(result.meta or {}), "telemetry": span.to_dict(), "remote_calls": span.remote_calls}
    return result.model_copy(update={"meta": meta})


_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Time *func* under a root span; OperationResult returns carry the tree."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _enabled.get():
            return func(*args, **kwargs)

        span = Span(name=func.__qualname__)
        ok = False
        try:
            with _activate(span):
                result = func(*args, **kwargs)
            ok = True
        finally:
            log.debug(
                "span.complete",
                span_name=span.name,
                duration_ms=round(span.duration_ms, 2),
                remote_calls=span.remote_calls,
                ok=ok,
            )

        if isinstance(result, OperationResult):
            return _with_telemetry(result, span)  # type: ignore[return-value]
        return result

    return wrapper


def enable_telemetry() -> None:
    _enabled.set(True)


def disable_telemetry() -> None:
    _enabled.set(False)


def get_current_span() -> Span | None:
    """Innermost open span (for manual annotation), or None."""
    if not _enabled.get():
        return None
    return _current_span.get()
