"""Telemetry primitives — Span, @traced, trace_span.

Near-zero overhead when disabled (single ContextVar.get per call).
When enabled, builds hierarchical span trees with timing and vertex/edge
annotations and injects them into ServiceResult.meta.
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

from digraphkit.config.settings import DigraphSettings
from digraphkit.services.result import ServiceResult

log = structlog.get_logger("digraphkit.telemetry")

# ── Context variables ────────────────────────────────────────────────

_telemetry_enabled: ContextVar[bool] = ContextVar("_telemetry_enabled", default=False)
_current_span: ContextVar[Span | None] = ContextVar("_current_span", default=None)


# ── Span ─────────────────────────────────────────────────────────────


@dataclass
class Span:
    """Hierarchical timing span with free-form annotations."""

    name: str
    parent: Span | None = None
    children: list[Span] = field(default_factory=list)
    start_time: float = field(default_factory=time.perf_counter)
    end_time: float | None = None
    annotations: dict[str, Any] = field(default_factory=dict)

    @property
    def duration_ms(self) -> float:
        if self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time) * 1000

    def end(self) -> None:
        self.end_time = time.perf_counter()

    def annotate(self, key: str, value: Any) -> None:
        self.annotations[key] = value

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "name": self.name,
            "duration_ms": round(self.duration_ms, 2),
        }
        if self.annotations:
            result["annotations"] = self.annotations
        if self.children:
            result["children"] = [c.to_dict() for c in self.children]
        return result


# ── trace_span context manager ───────────────────────────────────────


@contextmanager
def trace_span(name: str) -> Generator[Span | None]:
    """Create a child span under the current span.

    Yields None when telemetry is disabled or no span is active.
    """
    if not _telemetry_enabled.get():
        yield None
        return

    parent = _current_span.get()
    if parent is None:
        yield None
        return

    child = Span(name=name, parent=parent)
    parent.children.append(child)

    token = _current_span.set(child)
    try:
        yield child
    finally:
        child.end()
        _current_span.reset(token)


# ── @traced decorator ────────────────────────────────────────────────


def _inject_meta(result: ServiceResult, span: Span) -> ServiceResult:
    """Return a copy of *result* with the span tree merged into meta."""
    merged_meta = {**(result.meta or {}), "telemetry": span.to_dict()}
    return result.model_copy(update={"meta": merged_meta})


def _log_span(span: Span, *, ok: bool) -> None:
    log.debug(
        "span.complete",
        span_name=span.name,
        duration_ms=round(span.duration_ms, 2),
        ok=ok,
        children=len(span.children),
    )


def _service_setting(args: tuple[Any, ...]) -> bool | None:
    """Return the ``[telemetry]`` setting of the service a method is bound to."""
    settings = getattr(args[0], "settings", None) if args else None
    if isinstance(settings, DigraphSettings):
        return settings.telemetry.enabled
    return None


def _run_traced(func: Callable[..., Any], args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
    if not _telemetry_enabled.get():
        return func(*args, **kwargs)

    parent = _current_span.get()
    span = Span(name=func.__qualname__, parent=parent)
    if parent is not None:
        parent.children.append(span)
    token = _current_span.set(span)
    try:
        result = func(*args, **kwargs)
    except Exception:
        span.end()
        _current_span.reset(token)
        _log_span(span, ok=False)
        raise

    span.end()
    _current_span.reset(token)

    ok = True
    if isinstance(result, ServiceResult):
        ok = result.ok
        if parent is None:
            result = _inject_meta(result, span)
    _log_span(span, ok=ok)

    return result


_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Decorator: time a service method and inject span data into ServiceResult.meta.

    On a service method the service's own ``[telemetry] enabled`` setting
    decides, for the duration of the call, whether spans are collected.
    Plain functions follow :func:`enable_telemetry`. Nested calls attach
    their span to the enclosing one.
    """

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        setting = _service_setting(args)
        if setting is None:
            return _run_traced(func, args, kwargs)  # type: ignore[no-any-return]
        token = _telemetry_enabled.set(setting)
        try:
            return _run_traced(func, args, kwargs)  # type: ignore[no-any-return]
        finally:
            _telemetry_enabled.reset(token)

    return wrapper


# ── Public helpers ───────────────────────────────────────────────────


def enable_telemetry() -> None:
    """Enable span collection for the current context."""
    _telemetry_enabled.set(True)


def disable_telemetry() -> None:
    """Disable span collection for the current context."""
    _telemetry_enabled.set(False)
