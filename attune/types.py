"""
Core data types for emotional context tracking.

These containers cross the analyzer / tracker / hints boundaries. They live
here rather than in a specific subsystem to avoid circular imports.

Every object handed out of the tracker is a copy. ``copy()`` on the mutable
containers is an explicit deep copy so callers can never reach back into the
session store.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class EmotionLabel(str, Enum):
    """
    Basic emotion categories (Plutchik's wheel) plus a neutral fallback.

    NEUTRAL is never produced by a lexicon hit; it only appears as the
    dominant label when nothing else was detected.
    """
    JOY = "joy"
    SADNESS = "sadness"
    ANGER = "anger"
    FEAR = "fear"
    SURPRISE = "surprise"
    DISGUST = "disgust"
    TRUST = "trust"
    ANTICIPATION = "anticipation"
    NEUTRAL = "neutral"


class Sentiment(str, Enum):
    """Sentiment polarity of a text or of a session trend."""
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class EmotionScore:
    """One detected emotion and its strength in [0, 1]."""

    label: EmotionLabel
    score: float

    def to_dict(self) -> dict[str, Any]:
        return {"label": self.label.value, "score": self.score}


@dataclass
class EmotionAnalysis:
    """
    Full analysis result for a single message.

    ``emotions`` is ordered by descending score and ``dominant`` always
    mirrors its first entry (or NEUTRAL when nothing matched).
    """

    text: str
    sentiment: Sentiment = Sentiment.NEUTRAL
    # -1.0 (negative) to 1.0 (positive)
    sentiment_score: float = 0.0
    emotions: list[EmotionScore] = field(default_factory=list)
    dominant: EmotionLabel = EmotionLabel.NEUTRAL
    timestamp: float = field(default_factory=time.time)

    def score_for(self, label: EmotionLabel | str) -> float:
        """Return the score recorded for ``label``, or 0.0 if it was not detected."""
        wanted = EmotionLabel(label)
        for entry in self.emotions:
            if entry.label is wanted:
                return entry.score
        return 0.0

    def copy(self) -> EmotionAnalysis:
        return EmotionAnalysis(
            text=self.text,
            sentiment=self.sentiment,
            sentiment_score=self.sentiment_score,
            emotions=list(self.emotions),
            dominant=self.dominant,
            timestamp=self.timestamp,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "text": self.text,
            "sentiment": self.sentiment.value,
            "sentiment_score": self.sentiment_score,
            "emotions": [e.to_dict() for e in self.emotions],
            "dominant": self.dominant.value,
            "timestamp": self.timestamp,
        }


@dataclass
class EmotionalContext:
    """
    Rolling emotional snapshot for one conversation session.

    ``history`` never exceeds the configured window; the aggregate fields are
    recomputed whenever it changes, so they always describe exactly the
    analyses currently held.
    """

    session_key: str
    history: list[EmotionAnalysis] = field(default_factory=list)
    trend: Sentiment = Sentiment.NEUTRAL
    average_sentiment: float = 0.0
    dominant_emotion: EmotionLabel = EmotionLabel.NEUTRAL
    updated_at: float = field(default_factory=time.time)

    def sentiment_series(self) -> list[float]:
        """Sentiment scores of the current window, oldest first."""
        return [a.sentiment_score for a in self.history]

    def copy(self) -> EmotionalContext:
        """Deep copy: new history list holding new analysis objects."""
        return EmotionalContext(
            session_key=self.session_key,
            history=[a.copy() for a in self.history],
            trend=self.trend,
            average_sentiment=self.average_sentiment,
            dominant_emotion=self.dominant_emotion,
            updated_at=self.updated_at,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "session_key": self.session_key,
            "history": [a.to_dict() for a in self.history],
            "trend": self.trend.value,
            "average_sentiment": self.average_sentiment,
            "dominant_emotion": self.dominant_emotion.value,
            "updated_at": self.updated_at,
        }
