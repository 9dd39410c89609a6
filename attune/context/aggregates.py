"""
Window aggregates — the summary signals derived from a session's history.

Pure functions over lists of analyses or numbers; nothing here touches
session state.
"""

from __future__ import annotations

from typing import Sequence

from attune.analysis.analyzer import classify_sentiment
from attune.types import EmotionAnalysis, EmotionalContext, EmotionLabel, Sentiment

# Half-window shift needed before a series counts as rising or falling
TREND_SHIFT_THRESHOLD = 0.15


def average_sentiment(history: Sequence[EmotionAnalysis]) -> float:
    if not history:
        return 0.0
    return sum(a.sentiment_score for a in history) / len(history)


def dominant_by_vote(history: Sequence[EmotionAnalysis]) -> EmotionLabel:
    """
    Most frequent per-message dominant label across ``history``.

    Each analysis casts one vote. Votes are counted oldest first and the
    leader only changes when a label's count strictly exceeds the current
    maximum, so on a tie the label that reached that count first wins.
    """
    counts: dict[EmotionLabel, int] = {}
    best = EmotionLabel.NEUTRAL
    best_count = 0
    for analysis in history:
        count = counts.get(analysis.dominant, 0) + 1
        counts[analysis.dominant] = count
        if count > best_count:
            best = analysis.dominant
            best_count = count
    return best


def recompute(context: EmotionalContext, now: float) -> None:
    """Refresh every aggregate field of ``context`` from its current history."""
    context.average_sentiment = max(-1.0, min(1.0, average_sentiment(context.history)))
    context.trend = classify_sentiment(context.average_sentiment)
    context.dominant_emotion = dominant_by_vote(context.history)
    context.updated_at = now


def compute_sentiment_trend(series: Sequence[float]) -> Sentiment:
    """
    Direction of a sentiment series: compare the mean of its later half with
    the mean of its earlier half.

    Series shorter than two points have no direction and read as neutral.
    For odd lengths the middle value belongs to the later half.
    """
    if len(series) < 2:
        return Sentiment.NEUTRAL
    mid = len(series) // 2
    first, second = series[:mid], series[mid:]
    diff = sum(second) / len(second) - sum(first) / len(first)
    if diff > TREND_SHIFT_THRESHOLD:
        return Sentiment.POSITIVE
    if diff < -TREND_SHIFT_THRESHOLD:
        return Sentiment.NEGATIVE
    return Sentiment.NEUTRAL
