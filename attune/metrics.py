"""
In-process metrics for the emotional context engine.

The tracker counts processed, skipped and created sessions, keeps the number
of live sessions as a gauge and times each analysis. Everything sits behind a
single lock; there is no exporter.

Usage:
    from attune.metrics import metrics

    metrics.inc("emotion.messages_processed")
    with metrics.timed("emotion.analysis_seconds"):
        ...
    metrics.histogram("emotion.analysis_seconds")["count"]
"""

from __future__ import annotations

import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator


@dataclass
class _Timing:
    count: int = 0
    total: float = 0.0
    fastest: float = float("inf")
    slowest: float = 0.0

    def add(self, seconds: float) -> None:
        self.count += 1
        self.total += seconds
        self.fastest = min(self.fastest, seconds)
        self.slowest = max(self.slowest, seconds)

    def summary(self) -> dict[str, float]:
        if not self.count:
            return {"count": 0, "sum": 0.0, "avg": 0.0, "min": 0.0, "max": 0.0}
        return {
            "count": self.count,
            "sum": self.total,
            "avg": self.total / self.count,
            "min": self.fastest,
            "max": self.slowest,
        }


class MetricsRegistry:
    """Thread-safe counters, gauges and timing histograms."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counters: dict[str, int] = {}
        self._gauges: dict[str, float] = {}
        self._timings: dict[str, _Timing] = {}

    def inc(self, name: str, value: int = 1) -> None:
        with self._lock:
            self._counters[name] = self._counters.get(name, 0) + value

    def counter(self, name: str) -> int:
        with self._lock:
            return self._counters.get(name, 0)

    def set_gauge(self, name: str, value: float) -> None:
        with self._lock:
            self._gauges[name] = value

    def gauge(self, name: str) -> float:
        with self._lock:
            return self._gauges.get(name, 0.0)

    @contextmanager
    def timed(self, name: str) -> Iterator[None]:
        """Record how long the ``with`` block took under ``name``."""
        start = time.perf_counter()
        try:
            yield
        finally:
            elapsed = time.perf_counter() - start
            with self._lock:
                self._timings.setdefault(name, _Timing()).add(elapsed)

    def histogram(self, name: str) -> dict[str, float]:
        """count/sum/avg/min/max for ``name``; all zero if never timed."""
        with self._lock:
            return self._timings.get(name, _Timing()).summary()

    def reset(self) -> None:
        with self._lock:
            self._counters.clear()
            self._gauges.clear()
            self._timings.clear()


metrics = MetricsRegistry()
