"""CLI formatters — Rich tables and indicators for analyses and contexts."""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.table import Table
from rich.text import Text

from attune.hints import ResponseHints
from attune.types import EmotionAnalysis, EmotionalContext, Sentiment


def get_console(no_color: bool = False) -> Console:
    """Get a Rich Console, optionally with color disabled."""
    return Console(no_color=no_color)


def sentiment_indicator(sentiment: Sentiment) -> Text:
    """Map a sentiment to a colored label."""
    mapping = {
        Sentiment.POSITIVE: Text("+ positive", style="green"),
        Sentiment.NEGATIVE: Text("- negative", style="red"),
        Sentiment.NEUTRAL: Text("= neutral", style="dim"),
    }
    return mapping.get(sentiment, Text("? unknown", style="dim"))


def score_bar(score: float, width: int = 20) -> str:
    """Render a [0, 1] score as a fixed-width bar."""
    filled = round(max(0.0, min(1.0, score)) * width)
    return "#" * filled + "." * (width - filled)


def build_table(title: str, columns: list[str], rows: list[list[Any]]) -> Table:
    """Build a Rich table with standard styling."""
    table = Table(title=title, show_header=True, header_style="bold")
    for col in columns:
        table.add_column(col)
    for row in rows:
        table.add_row(*(v if isinstance(v, Text) else str(v) for v in row))
    return table


def analysis_table(analysis: EmotionAnalysis) -> Table:
    rows: list[list[Any]] = [
        [e.label.value, f"{e.score:.2f}", score_bar(e.score)] for e in analysis.emotions
    ]
    if not rows:
        rows.append(["neutral", "-", ""])
    title = f"dominant: {analysis.dominant.value}  sentiment: {analysis.sentiment_score:+.2f}"
    return build_table(title, ["emotion", "score", ""], rows)


def context_table(context: EmotionalContext, hints: ResponseHints | None = None) -> Table:
    rows: list[list[Any]] = [
        ["session", context.session_key],
        ["messages in window", len(context.history)],
        ["trend", sentiment_indicator(context.trend)],
        ["average sentiment", f"{context.average_sentiment:+.3f}"],
        ["dominant emotion", context.dominant_emotion.value],
    ]
    if hints is not None:
        rows.append(["suggested tone", hints.tone.value])
    return build_table("Emotional context", ["field", "value"], rows)
