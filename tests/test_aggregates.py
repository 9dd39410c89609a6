"""Tests for attune.context.aggregates — window summaries and trend direction."""

from __future__ import annotations

import pytest

from attune.context.aggregates import (
    average_sentiment,
    compute_sentiment_trend,
    dominant_by_vote,
    recompute,
)
from attune.types import EmotionAnalysis, EmotionalContext, EmotionLabel, Sentiment


def _analysis(dominant: EmotionLabel, score: float = 0.0) -> EmotionAnalysis:
    return EmotionAnalysis(text=dominant.value, sentiment_score=score, dominant=dominant)


J, S, A, N = EmotionLabel.JOY, EmotionLabel.SADNESS, EmotionLabel.ANGER, EmotionLabel.NEUTRAL


class TestDominantByVote:
    def test_empty_history_is_neutral(self):
        assert dominant_by_vote([]) == N

    def test_plurality_wins(self):
        assert dominant_by_vote([_analysis(S), _analysis(J), _analysis(J)]) == J

    def test_tie_goes_to_first_label_reaching_max(self):
        # joy reaches 2 before sadness does
        history = [_analysis(S), _analysis(J), _analysis(J), _analysis(S)]
        assert dominant_by_vote(history) == J

    def test_single_vote_tie_goes_to_oldest(self):
        assert dominant_by_vote([_analysis(A), _analysis(J)]) == A

    def test_neutral_votes_count(self):
        assert dominant_by_vote([_analysis(N), _analysis(N), _analysis(J)]) == N

    def test_later_label_can_overtake_leader(self):
        forward = [_analysis(J), _analysis(S), _analysis(S), _analysis(J)]
        assert dominant_by_vote(forward) == S


class TestAverageSentiment:
    def test_empty(self):
        assert average_sentiment([]) == 0.0

    def test_mean(self):
        history = [_analysis(J, 0.8), _analysis(S, -0.4), _analysis(N, 0.2)]
        assert average_sentiment(history) == pytest.approx(0.2)


class TestRecompute:
    def test_refreshes_every_field(self):
        context = EmotionalContext(
            session_key="s",
            history=[_analysis(S, -0.7), _analysis(S, -0.5), _analysis(J, 0.6)],
        )
        recompute(context, now=42.0)
        assert context.average_sentiment == pytest.approx(-0.2)
        assert context.trend == Sentiment.NEGATIVE
        assert context.dominant_emotion == S
        assert context.updated_at == 42.0

    def test_empty_history_resets_to_neutral(self):
        context = EmotionalContext(
            session_key="s",
            trend=Sentiment.POSITIVE,
            average_sentiment=0.9,
            dominant_emotion=J,
        )
        recompute(context, now=7.0)
        assert context.trend == Sentiment.NEUTRAL
        assert context.average_sentiment == 0.0
        assert context.dominant_emotion == N
        assert context.updated_at == 7.0


class TestComputeSentimentTrend:
    @pytest.mark.parametrize("series", [[], [0.5], [-1.0]])
    def test_short_series_is_neutral(self, series):
        assert compute_sentiment_trend(series) == Sentiment.NEUTRAL

    def test_increasing(self):
        assert compute_sentiment_trend([-0.5, -0.3, 0.1, 0.5, 0.8]) == Sentiment.POSITIVE

    def test_decreasing(self):
        assert compute_sentiment_trend([0.8, 0.5, 0.1, -0.3, -0.5]) == Sentiment.NEGATIVE

    def test_flat(self):
        assert compute_sentiment_trend([0.5, 0.5, 0.5, 0.5]) == Sentiment.NEUTRAL

    def test_small_shift_is_neutral(self):
        assert compute_sentiment_trend([0.0, 0.1]) == Sentiment.NEUTRAL

    def test_two_points(self):
        assert compute_sentiment_trend([0.0, 0.2]) == Sentiment.POSITIVE
        assert compute_sentiment_trend([0.0, -0.2]) == Sentiment.NEGATIVE

    def test_odd_length_puts_middle_in_later_half(self):
        # first half [0.0], later half [0.0, 0.4] -> diff 0.2
        assert compute_sentiment_trend([0.0, 0.0, 0.4]) == Sentiment.POSITIVE

    def test_accepts_tuples(self):
        assert compute_sentiment_trend((1.0, -1.0)) == Sentiment.NEGATIVE
