"""Tests for attune.metrics — in-process counters, gauges and timings."""

from __future__ import annotations

import threading

import pytest

from attune.metrics import MetricsRegistry


class TestMetricsRegistry:
    def test_counters(self):
        reg = MetricsRegistry()
        reg.inc("a")
        reg.inc("a", 4)
        assert reg.counter("a") == 5
        assert reg.counter("missing") == 0

    def test_gauges(self):
        reg = MetricsRegistry()
        reg.set_gauge("g", 3.0)
        reg.set_gauge("g", 1.5)
        assert reg.gauge("g") == 1.5
        assert reg.gauge("missing") == 0.0

    def test_timed_blocks_are_summarised(self):
        reg = MetricsRegistry()
        for _ in range(3):
            with reg.timed("t"):
                pass
        summary = reg.histogram("t")
        assert summary["count"] == 3
        assert summary["min"] <= summary["avg"] <= summary["max"]
        assert summary["sum"] == pytest.approx(summary["avg"] * 3)

    def test_untimed_histogram_is_zero(self):
        assert MetricsRegistry().histogram("never") == {
            "count": 0, "sum": 0.0, "avg": 0.0, "min": 0.0, "max": 0.0,
        }

    def test_timed_records_even_on_error(self):
        reg = MetricsRegistry()
        with pytest.raises(RuntimeError):
            with reg.timed("t"):
                raise RuntimeError("boom")
        assert reg.histogram("t")["count"] == 1

    def test_reset(self):
        reg = MetricsRegistry()
        reg.inc("a")
        reg.set_gauge("g", 1.0)
        with reg.timed("t"):
            pass
        reg.reset()
        assert reg.counter("a") == 0
        assert reg.gauge("g") == 0.0
        assert reg.histogram("t")["count"] == 0

    def test_concurrent_increments(self):
        reg = MetricsRegistry()

        def _bump() -> None:
            for _ in range(1000):
                reg.inc("n")

        threads = [threading.Thread(target=_bump) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert reg.counter("n") == 8000
