"""
Shared fixtures for the attune test suite.

Every test starts from a clean slate: no ATTUNE_* environment overrides, a
fresh default tracker and an empty metrics registry.
"""

from __future__ import annotations

import itertools

import pytest

import attune
from attune.config import EmotionalContextConfig
from attune.context.tracker import ContextTracker
from attune.metrics import MetricsRegistry, metrics


_ENV_VARS = (
    "ATTUNE_EMOTION_ENABLED",
    "ATTUNE_HISTORY_WINDOW_SIZE",
    "ATTUNE_NEGATION_POLICY",
    "ATTUNE_NEGATION_DAMPENING",
    "ATTUNE_LEXICON_PATH",
)


@pytest.fixture(autouse=True)
def _isolate_state(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    attune.reset_default_tracker()
    metrics.reset()
    yield
    attune.reset_default_tracker()
    metrics.reset()


# ---------------------------------------------------------------------------
# Config / tracker fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def context_config() -> EmotionalContextConfig:
    """Default-valued config, built by field name."""
    return EmotionalContextConfig(enabled=True, history_window_size=20)


@pytest.fixture()
def registry() -> MetricsRegistry:
    """A private metrics registry so assertions ignore other trackers."""
    return MetricsRegistry()


@pytest.fixture()
def fake_clock():
    """Deterministic clock ticking one second per call, starting at 1000."""
    counter = itertools.count(1000)
    return lambda: float(next(counter))


@pytest.fixture()
def tracker(context_config, registry) -> ContextTracker:
    return ContextTracker(config=context_config, metrics=registry)
