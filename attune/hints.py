"""
Response Hints — turning emotional context into tone guidance.

The tracker only measures. This module is the thin bridge to response
generation: it picks a tone from the current message's dominant emotion,
leans empathetic when a session has been trending negative, and renders the
choice as a prompt fragment a system prompt can carry.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from attune.types import EmotionAnalysis, EmotionalContext, EmotionLabel, Sentiment


class ResponseTone(str, Enum):
    EMPATHETIC = "empathetic"
    ENCOURAGING = "encouraging"
    NEUTRAL = "neutral"
    ENTHUSIASTIC = "enthusiastic"
    CALMING = "calming"


_TONE_BY_EMOTION: dict[EmotionLabel, ResponseTone] = {
    EmotionLabel.SADNESS: ResponseTone.EMPATHETIC,
    EmotionLabel.FEAR: ResponseTone.EMPATHETIC,
    EmotionLabel.ANGER: ResponseTone.CALMING,
    EmotionLabel.DISGUST: ResponseTone.CALMING,
    EmotionLabel.JOY: ResponseTone.ENTHUSIASTIC,
    EmotionLabel.ANTICIPATION: ResponseTone.ENTHUSIASTIC,
    EmotionLabel.TRUST: ResponseTone.ENCOURAGING,
}

_TONE_INSTRUCTIONS: dict[ResponseTone, str] = {
    ResponseTone.EMPATHETIC: (
        "Respond with empathy and understanding. "
        "Acknowledge the user's emotions and concerns."
    ),
    ResponseTone.CALMING: "Use a calm, reassuring tone. Help the user feel heard and supported.",
    ResponseTone.ENCOURAGING: (
        "Be encouraging and motivational. Emphasize positive aspects and progress."
    ),
    ResponseTone.ENTHUSIASTIC: "Be enthusiastic and upbeat. Match the user's positive energy.",
}


@dataclass(frozen=True)
class ResponseHints:
    """Tone guidance for the next reply."""

    tone: ResponseTone = ResponseTone.NEUTRAL
    # Session trend the tone was chosen against, if a context was available
    trend: Optional[Sentiment] = None

    @property
    def should_be_empathetic(self) -> bool:
        return self.tone in (ResponseTone.EMPATHETIC, ResponseTone.CALMING)

    def to_prompt_fragment(self) -> str:
        """Instruction text for this tone; empty for a neutral tone."""
        return _TONE_INSTRUCTIONS.get(self.tone, "")

    def apply_to_prompt(self, base_prompt: str) -> str:
        """Append a hints section to ``base_prompt``, or return it unchanged."""
        fragment = self.to_prompt_fragment()
        if not fragment:
            return base_prompt
        return f"{base_prompt}\n\n[Response Hints]\n{fragment}\n"

    def to_dict(self) -> dict:
        return {
            "tone": self.tone.value,
            "trend": self.trend.value if self.trend is not None else None,
            "should_be_empathetic": self.should_be_empathetic,
        }


def suggest_response_hints(
    analysis: EmotionAnalysis,
    context: Optional[EmotionalContext] = None,
) -> ResponseHints:
    """Pick a reply tone for ``analysis``, taking the session trend into account."""
    tone = _TONE_BY_EMOTION.get(analysis.dominant, ResponseTone.NEUTRAL)
    trend = context.trend if context is not None else None
    # A flat message inside a souring conversation still deserves care
    if tone is ResponseTone.NEUTRAL and trend is Sentiment.NEGATIVE:
        tone = ResponseTone.EMPATHETIC
    return ResponseHints(tone=tone, trend=trend)
