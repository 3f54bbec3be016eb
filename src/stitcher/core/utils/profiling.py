"""Lightweight hierarchical timing spans.

Spans are free when no profiler is active; the CLI enables one for
``--profile`` and prints the per-span totals to stderr.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, asdict
from time import perf_counter
from typing import Any, Dict, Iterator, List, Optional


_ACTIVE_PROFILER: ContextVar["Profiler | None"] = ContextVar("_ACTIVE_PROFILER", default=None)


@dataclass(frozen=True)
class SpanRecord:
    name: str
    duration_ms: float
    depth: int
    meta: Dict[str, Any]


class Profiler:
    """Collects nested spans."""

    def __init__(self) -> None:
        self._spans: List[SpanRecord] = []
        self._depth = 0

    @property
    def spans(self) -> List[SpanRecord]:
        return list(self._spans)

    @contextmanager
    def span(self, name: str, **meta: Any) -> Iterator[None]:
        start = perf_counter()
        depth = self._depth
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1
            self._spans.append(
                SpanRecord(
                    name=name,
                    duration_ms=(perf_counter() - start) * 1000.0,
                    depth=depth,
                    meta=dict(meta),
                )
            )

    def summary_ms(self) -> Dict[str, float]:
        totals: Dict[str, float] = {}
        for record in self._spans:
            totals[record.name] = totals.get(record.name, 0.0) + record.duration_ms
        return totals

    def format_summary(self) -> str:
        lines = [f"{ms:10.2f}ms  {name}" for name, ms in sorted(self.summary_ms().items(), key=lambda kv: -kv[1])]
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "spans": [asdict(s) for s in self._spans],
            "summary_ms": self.summary_ms(),
        }


class Timer:
    """Wall-clock stopwatch in milliseconds."""

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self._start = perf_counter()

    def elapsed_ms(self) -> float:
        return (perf_counter() - self._start) * 1000.0


@contextmanager
def enable_profiler(profiler: Profiler) -> Iterator[Profiler]:
    token = _ACTIVE_PROFILER.set(profiler)
    try:
        yield profiler
    finally:
        _ACTIVE_PROFILER.reset(token)


@contextmanager
def span(name: str, **meta: Any) -> Iterator[None]:
    profiler = _ACTIVE_PROFILER.get()
    if profiler is None:
        yield
        return
    with profiler.span(name, **meta):
        yield


def get_active_profiler() -> Optional[Profiler]:
    return _ACTIVE_PROFILER.get()


__all__ = ["Profiler", "SpanRecord", "Timer", "enable_profiler", "span", "get_active_profiler"]
