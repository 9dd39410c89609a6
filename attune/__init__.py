"""
Attune — emotional context for conversational agents.

A lexicon-driven emotion and sentiment analyzer plus a per-session rolling
window that turns successive analyses into a trend signal for response
generation.

Layers (bottom to top):
    1. Tokenizer and lexicon tables
    2. Analyzer (one message -> EmotionAnalysis)
    3. Context tracker (session history, trend, dominant emotion)
    4. Response hints (tone guidance for the reply)

The functions below share one default ContextTracker, built on first use
from the environment configuration. Hosts that want explicit ownership
create their own ContextTracker instead.
"""

from __future__ import annotations

import threading
from typing import Optional

from attune.analysis import EmotionAnalyzer, Lexicon, LexiconError, analyze_emotion, tokenize
from attune.config import EmotionalContextConfig, NegationPolicy
from attune.context import ContextTracker, SessionContextStore, compute_sentiment_trend
from attune.context.tracker import ConfigLike
from attune.hints import ResponseHints, ResponseTone, suggest_response_hints
from attune.types import (
    EmotionAnalysis,
    EmotionalContext,
    EmotionLabel,
    EmotionScore,
    Sentiment,
)

__version__ = "0.1.0"

_default_tracker: Optional[ContextTracker] = None
_default_tracker_lock = threading.Lock()


def get_default_tracker() -> ContextTracker:
    """Return the shared tracker, creating it on first use."""
    global _default_tracker  # noqa: PLW0603
    with _default_tracker_lock:
        if _default_tracker is None:
            _default_tracker = ContextTracker()
        return _default_tracker


def reset_default_tracker(tracker: Optional[ContextTracker] = None) -> None:
    """Dispose the shared tracker and optionally install a replacement."""
    global _default_tracker  # noqa: PLW0603
    with _default_tracker_lock:
        if _default_tracker is not None:
            _default_tracker.dispose()
        _default_tracker = tracker


def process_message(
    session_key: str,
    text: str,
    config: ConfigLike = None,
) -> Optional[EmotionalContext]:
    return get_default_tracker().process(session_key, text, config)


def get_emotional_context(session_key: str) -> Optional[EmotionalContext]:
    return get_default_tracker().get(session_key)


def clear_emotional_context(session_key: str) -> None:
    get_default_tracker().clear(session_key)


def clear_all_emotional_contexts() -> None:
    get_default_tracker().clear_all()


def analyze_text(text: str) -> EmotionAnalysis:
    """Analyze text with the shared tracker's analyzer, without touching sessions."""
    return get_default_tracker().analyze_only(text)


__all__ = [
    "ContextTracker",
    "EmotionAnalysis",
    "EmotionAnalyzer",
    "EmotionLabel",
    "EmotionScore",
    "EmotionalContext",
    "EmotionalContextConfig",
    "Lexicon",
    "LexiconError",
    "NegationPolicy",
    "ResponseHints",
    "ResponseTone",
    "Sentiment",
    "SessionContextStore",
    "analyze_emotion",
    "analyze_text",
    "clear_all_emotional_contexts",
    "clear_emotional_context",
    "compute_sentiment_trend",
    "get_default_tracker",
    "get_emotional_context",
    "process_message",
    "reset_default_tracker",
    "suggest_response_hints",
    "tokenize",
]
