"""
Context Tracker — rolling emotional awareness for conversation sessions.

Each processed message is analyzed, appended to its session's history, the
history is cut back to the configured window (oldest first) and the session
aggregates are recomputed. What comes back is always a copy; the tracker's
own state is reachable only through its methods.

The tracker owns its store, analyzer and metrics sink, and all of them can be
injected. Nothing here is a hidden module global; the convenience functions
in ``attune`` share one lazily-built default tracker.
"""

from __future__ import annotations

import time
from typing import Any, Callable, Mapping, Optional, Union

import structlog

from attune.analysis.analyzer import EmotionAnalyzer
from attune.analysis.lexicon import load_lexicon
from attune.config import EmotionalContextConfig
from attune.context import aggregates
from attune.context.store import SessionContextStore
from attune.metrics import MetricsRegistry, metrics as default_metrics
from attune.types import EmotionAnalysis, EmotionalContext

logger = structlog.get_logger(__name__)

ConfigLike = Union[EmotionalContextConfig, Mapping[str, Any], None]


class ContextTracker:
    """
    Tracks emotional context per session key.

    Usage pattern:
        1. process() for every incoming user message
        2. get() wherever the current mood of a session is needed
        3. clear() when a conversation resets, clear_all()/dispose() on shutdown

    Per-call configuration only toggles ``enabled`` and the window size;
    negation handling and the lexicon are fixed when the tracker is built.
    """

    def __init__(
        self,
        config: Optional[EmotionalContextConfig] = None,
        analyzer: Optional[EmotionAnalyzer] = None,
        store: Optional[SessionContextStore] = None,
        metrics: Optional[MetricsRegistry] = None,
        clock: Callable[[], float] = time.time,
    ):
        self._config = config if config is not None else EmotionalContextConfig()
        self._clock = clock
        if analyzer is None:
            analyzer = EmotionAnalyzer.from_config(
                self._config, lexicon=load_lexicon(self._config.lexicon_path), clock=clock
            )
        self._analyzer = analyzer
        self._store = store if store is not None else SessionContextStore()
        self._metrics = metrics if metrics is not None else default_metrics

        logger.info(
            "emotion_tracker.initialized",
            enabled=self._config.enabled,
            window=self._config.history_window_size,
            negation_policy=self._analyzer.negation_policy.value,
        )

    @property
    def config(self) -> EmotionalContextConfig:
        return self._config

    @property
    def analyzer(self) -> EmotionAnalyzer:
        return self._analyzer

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def process(
        self,
        session_key: str,
        text: str,
        config: ConfigLike = None,
    ) -> Optional[EmotionalContext]:
        """
        Analyze ``text`` and fold it into the session's context.

        ``config`` may be a full config or a partial mapping such as
        ``{"enabled": False}`` or ``{"history_window_size": 5}``. Returns the
        updated context, or None when tracking is disabled, in which case
        nothing is analyzed or stored.
        """
        cfg = self._resolve_config(config)
        if not cfg.enabled:
            self._metrics.inc("emotion.messages_skipped")
            logger.debug("emotion_tracker.disabled_skip", session_key=session_key)
            return None

        with self._metrics.timed("emotion.analysis_seconds"):
            analysis = self._analyzer.analyze(text)

        window = cfg.history_window_size

        def _append(context: EmotionalContext) -> None:
            context.history.append(analysis)
            overflow = len(context.history) - window
            if overflow > 0:
                del context.history[:overflow]
                logger.debug(
                    "emotion_tracker.history_trimmed",
                    session_key=session_key,
                    evicted=overflow,
                    window=window,
                )
            aggregates.recompute(context, self._clock())

        context, created = self._store.update(session_key, _append, self._new_context)

        self._metrics.inc("emotion.messages_processed")
        if created:
            self._metrics.inc("emotion.sessions_created")
            logger.info("emotion_tracker.session_created", session_key=session_key)
        self._metrics.set_gauge("emotion.sessions_active", len(self._store))
        return context

    def get(self, session_key: str) -> Optional[EmotionalContext]:
        """Current context for a session, without modifying or creating it."""
        return self._store.get(session_key)

    def clear(self, session_key: str) -> None:
        """Forget one session. Clearing an unknown session is a no-op."""
        if self._store.discard(session_key):
            logger.info("emotion_tracker.session_cleared", session_key=session_key)
        self._metrics.set_gauge("emotion.sessions_active", len(self._store))

    def clear_all(self) -> None:
        """Forget every session."""
        removed = self._store.clear()
        if removed:
            logger.info("emotion_tracker.all_cleared", sessions=removed)
        self._metrics.set_gauge("emotion.sessions_active", 0)

    def analyze_only(self, text: str) -> EmotionAnalysis:
        """Analyze text without touching any session."""
        return self._analyzer.analyze(text)

    def dispose(self) -> None:
        """Release all session state. The tracker stays usable afterwards."""
        self.clear_all()
        logger.debug("emotion_tracker.disposed")

    def session_keys(self) -> list[str]:
        return self._store.keys()

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, session_key: object) -> bool:
        return session_key in self._store

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _resolve_config(self, config: ConfigLike) -> EmotionalContextConfig:
        if config is None:
            return self._config
        if isinstance(config, EmotionalContextConfig):
            return config
        return self._config.with_overrides(config)

    def _new_context(self, session_key: str) -> EmotionalContext:
        return EmotionalContext(session_key=session_key, updated_at=self._clock())
