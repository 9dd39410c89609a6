"""Session context — rolling per-session emotion history and its aggregates."""
from attune.context.aggregates import compute_sentiment_trend, dominant_by_vote
from attune.context.store import SessionContextStore
from attune.context.tracker import ContextTracker

__all__ = [
    "ContextTracker",
    "SessionContextStore",
    "compute_sentiment_trend",
    "dominant_by_vote",
]
