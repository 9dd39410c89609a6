"""
Emotion Analyzer — keyword-based emotion and sentiment scoring.

Lightweight detection without any model inference. Each token is looked up
in the emotion and polarity tables of a Lexicon; the two tokens before it
decide whether it is negated and the one directly before it may scale it up
or down. One pass over the tokens, constant work per token.

Negation never simply deletes a signal under the default policy. "not happy"
still says something about joy, so it contributes a weak, sign-flipped share
of the keyword's weight; the final score is the magnitude of the accumulated
value. The alternative policies (zero, invert) are selectable through
EmotionalContextConfig.
"""

from __future__ import annotations

import time
from typing import Callable, Optional

import structlog

from attune.analysis.lexicon import DEFAULT_LEXICON, Lexicon
from attune.analysis.tokenizer import tokenize
from attune.config import EmotionalContextConfig, NegationPolicy
from attune.types import EmotionAnalysis, EmotionLabel, EmotionScore, Sentiment

logger = structlog.get_logger(__name__)

# Sentiment scores inside (-0.1, 0.1) read as neutral
SENTIMENT_THRESHOLD = 0.1

# How far back a negation word reaches ("not very happy", "not happy")
NEGATION_LOOKBACK = 2

# Plutchik's opposing pairs, used by NegationPolicy.INVERT
OPPOSITE_EMOTIONS: dict[EmotionLabel, EmotionLabel] = {
    EmotionLabel.JOY: EmotionLabel.SADNESS,
    EmotionLabel.SADNESS: EmotionLabel.JOY,
    EmotionLabel.ANGER: EmotionLabel.FEAR,
    EmotionLabel.FEAR: EmotionLabel.ANGER,
    EmotionLabel.SURPRISE: EmotionLabel.ANTICIPATION,
    EmotionLabel.ANTICIPATION: EmotionLabel.SURPRISE,
    EmotionLabel.DISGUST: EmotionLabel.TRUST,
    EmotionLabel.TRUST: EmotionLabel.DISGUST,
}


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def classify_sentiment(score: float, threshold: float = SENTIMENT_THRESHOLD) -> Sentiment:
    """Map a score in [-1, 1] to a polarity label."""
    if score > threshold:
        return Sentiment.POSITIVE
    if score < -threshold:
        return Sentiment.NEGATIVE
    return Sentiment.NEUTRAL


class EmotionAnalyzer:
    """
    Scores a single message against a Lexicon.

    Stateless apart from its configuration, so one instance can be shared by
    any number of threads.
    """

    def __init__(
        self,
        lexicon: Optional[Lexicon] = None,
        negation_policy: NegationPolicy = NegationPolicy.DAMPEN,
        negation_dampening: float = 0.5,
        clock: Callable[[], float] = time.time,
    ):
        self._lexicon = lexicon if lexicon is not None else DEFAULT_LEXICON
        self._policy = NegationPolicy(negation_policy)
        self._dampening = _clamp(float(negation_dampening), 0.0, 1.0)
        self._clock = clock

    @classmethod
    def from_config(
        cls,
        config: EmotionalContextConfig,
        lexicon: Optional[Lexicon] = None,
        clock: Callable[[], float] = time.time,
    ) -> EmotionAnalyzer:
        """Build an analyzer whose negation handling follows ``config``."""
        return cls(
            lexicon=lexicon,
            negation_policy=config.negation_policy,
            negation_dampening=config.negation_dampening,
            clock=clock,
        )

    @property
    def lexicon(self) -> Lexicon:
        return self._lexicon

    @property
    def negation_policy(self) -> NegationPolicy:
        return self._policy

    def analyze(self, text: str) -> EmotionAnalysis:
        """Analyze the emotional content and sentiment of ``text``."""
        tokens = tokenize(text)
        lexicon = self._lexicon
        # Insertion order doubles as the tie-break for equal scores
        accumulators: dict[EmotionLabel, float] = {}
        sentiment_total = 0.0
        sentiment_count = 0

        for i, token in enumerate(tokens):
            preceding = tokens[max(0, i - NEGATION_LOOKBACK):i]
            negated = any(word in lexicon.negations for word in preceding)
            intensifier = lexicon.intensifiers.get(tokens[i - 1], 1.0) if i > 0 else 1.0

            for label, weight in lexicon.emotions.get(token, ()):
                self._accumulate(accumulators, label, weight * intensifier, negated)

            polarity = lexicon.polarity.get(token)
            if polarity is not None:
                sentiment_total += polarity * intensifier * (-1.0 if negated else 1.0)
                sentiment_count += 1

        emotions = [
            EmotionScore(label=label, score=_clamp(abs(value), 0.0, 1.0))
            for label, value in accumulators.items()
            if value != 0.0
        ]
        emotions.sort(key=lambda e: e.score, reverse=True)
        dominant = emotions[0].label if emotions else EmotionLabel.NEUTRAL

        sentiment_score = 0.0
        if sentiment_count:
            sentiment_score = _clamp(sentiment_total / sentiment_count, -1.0, 1.0)

        analysis = EmotionAnalysis(
            text=text,
            sentiment=classify_sentiment(sentiment_score),
            sentiment_score=sentiment_score,
            emotions=emotions,
            dominant=dominant,
            timestamp=self._clock(),
        )
        logger.debug(
            "analyzer.analyzed",
            token_count=len(tokens),
            dominant=dominant.value,
            sentiment=analysis.sentiment.value,
            sentiment_score=round(sentiment_score, 3),
        )
        return analysis

    def _accumulate(
        self,
        accumulators: dict[EmotionLabel, float],
        label: EmotionLabel,
        weight: float,
        negated: bool,
    ) -> None:
        if not negated:
            accumulators[label] = accumulators.get(label, 0.0) + weight
            return
        if self._policy is NegationPolicy.ZERO:
            return
        if self._policy is NegationPolicy.INVERT:
            opposite = OPPOSITE_EMOTIONS.get(label, label)
            accumulators[opposite] = accumulators.get(opposite, 0.0) + weight * self._dampening
            return
        accumulators[label] = accumulators.get(label, 0.0) - weight * self._dampening


_default_analyzer = EmotionAnalyzer()


def analyze_emotion(text: str) -> EmotionAnalysis:
    """Analyze ``text`` with the built-in lexicon and the default negation policy."""
    return _default_analyzer.analyze(text)
