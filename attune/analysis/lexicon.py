"""
Lexicon tables — the keyword data the analyzer scores against.

A Lexicon is immutable configuration: read-only mappings and frozensets. The
built-in tables live in DEFAULT_LEXICON; callers extend them by building a new
Lexicon (``extended()`` or ``from_file()``) and handing it to an analyzer,
never by editing tables in place.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional

import structlog

from attune.types import EmotionLabel

logger = structlog.get_logger(__name__)

EmotionEntries = tuple[tuple[EmotionLabel, float], ...]


class LexiconError(ValueError):
    """Raised when a lexicon extension document is malformed."""


_J, _S, _A, _F = EmotionLabel.JOY, EmotionLabel.SADNESS, EmotionLabel.ANGER, EmotionLabel.FEAR
_SU, _D, _T, _AN = (
    EmotionLabel.SURPRISE, EmotionLabel.DISGUST, EmotionLabel.TRUST, EmotionLabel.ANTICIPATION,
)

_EMOTION_KEYWORDS: dict[str, EmotionEntries] = {
    # Joy
    "happy": ((_J, 1.0),),
    "glad": ((_J, 0.8),),
    "excited": ((_J, 0.9),),
    "delighted": ((_J, 0.9),),
    "wonderful": ((_J, 0.8),),
    "great": ((_J, 0.6),),
    "amazing": ((_J, 0.9),),
    "love": ((_J, 0.8),),
    "enjoy": ((_J, 0.7),),
    "pleased": ((_J, 0.7),),
    "cheerful": ((_J, 0.8),),
    "fantastic": ((_J, 0.9),),
    # Sadness
    "sad": ((_S, 1.0),),
    "unhappy": ((_S, 0.9),),
    "depressed": ((_S, 1.0),),
    "disappointed": ((_S, 0.8),),
    "miserable": ((_S, 0.9),),
    "heartbroken": ((_S, 1.0),),
    "lonely": ((_S, 0.7),),
    "grief": ((_S, 1.0),),
    # Anger
    "angry": ((_A, 1.0),),
    "furious": ((_A, 1.0),),
    "annoyed": ((_A, 0.7),),
    "frustrated": ((_A, 0.8),),
    "irritated": ((_A, 0.7),),
    "outraged": ((_A, 1.0),),
    "mad": ((_A, 0.8),),
    "hostile": ((_A, 0.9),),
    # Fear
    "afraid": ((_F, 1.0),),
    "scared": ((_F, 1.0),),
    "anxious": ((_F, 0.8),),
    "worried": ((_F, 0.7),),
    "terrified": ((_F, 1.0),),
    "nervous": ((_F, 0.6),),
    "panicked": ((_F, 1.0),),
    "dread": ((_F, 0.9),),
    # Surprise
    "surprised": ((_SU, 1.0),),
    "shocked": ((_SU, 0.9),),
    "astonished": ((_SU, 0.9),),
    "unexpected": ((_SU, 0.7),),
    "amazed": ((_SU, 0.8),),
    "stunned": ((_SU, 0.9),),
    # Disgust
    "disgusted": ((_D, 1.0),),
    "revolted": ((_D, 0.9),),
    "repulsed": ((_D, 0.9),),
    "appalled": ((_D, 0.8),),
    "gross": ((_D, 0.6),),
    # Trust
    "trust": ((_T, 1.0),),
    "reliable": ((_T, 0.8),),
    "confident": ((_T, 0.7),),
    "faithful": ((_T, 0.8),),
    "dependable": ((_T, 0.8),),
    # Anticipation
    "eager": ((_AN, 0.8),),
    "hopeful": ((_AN, 0.7),),
    "looking": ((_AN, 0.3),),
    "expecting": ((_AN, 0.7),),
    "awaiting": ((_AN, 0.7),),
    "curious": ((_AN, 0.6),),
}

_POLARITY_KEYWORDS: dict[str, float] = {
    # Positive
    "good": 0.5,
    "great": 0.7,
    "excellent": 0.9,
    "amazing": 0.9,
    "wonderful": 0.8,
    "fantastic": 0.9,
    "love": 0.8,
    "like": 0.3,
    "happy": 0.8,
    "pleased": 0.6,
    "enjoy": 0.6,
    "beautiful": 0.7,
    "perfect": 0.9,
    "awesome": 0.8,
    "brilliant": 0.8,
    "best": 0.7,
    "thank": 0.5,
    "thanks": 0.5,
    "helpful": 0.6,
    "impressive": 0.7,
    # Negative
    "bad": -0.5,
    "terrible": -0.9,
    "horrible": -0.9,
    "awful": -0.8,
    "hate": -0.9,
    "dislike": -0.5,
    "sad": -0.7,
    "angry": -0.7,
    "annoyed": -0.5,
    "frustrated": -0.6,
    "disappointed": -0.6,
    "ugly": -0.6,
    "worst": -0.8,
    "poor": -0.5,
    "useless": -0.7,
    "broken": -0.5,
    "fail": -0.6,
    "failed": -0.6,
    "wrong": -0.5,
    "problem": -0.4,
}

_NEGATIONS = frozenset({
    "not", "no", "never", "neither", "nobody", "nothing", "nowhere", "nor",
    "cannot", "can't", "don't", "doesn't", "didn't", "won't", "wouldn't",
    "shouldn't", "couldn't", "isn't", "aren't", "wasn't", "weren't",
})

_INTENSIFIERS: dict[str, float] = {
    "very": 1.3,
    "extremely": 1.5,
    "incredibly": 1.5,
    "really": 1.2,
    "absolutely": 1.4,
    "totally": 1.3,
    "completely": 1.3,
    "utterly": 1.4,
    "quite": 1.1,
    # Downtoners shrink rather than amplify
    "somewhat": 0.8,
    "slightly": 0.6,
    "barely": 0.5,
    "hardly": 0.5,
}


def _freeze(mapping: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class Lexicon:
    """
    Keyword tables used by the analyzer.

    ``emotions`` maps a keyword to one or more (label, weight) pairs; a
    keyword listed under several labels feeds each of them independently.
    """

    emotions: Mapping[str, EmotionEntries] = field(default_factory=dict)
    polarity: Mapping[str, float] = field(default_factory=dict)
    negations: frozenset[str] = frozenset()
    intensifiers: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "emotions", _freeze(self.emotions))
        object.__setattr__(self, "polarity", _freeze(self.polarity))
        object.__setattr__(self, "negations", frozenset(self.negations))
        object.__setattr__(self, "intensifiers", _freeze(self.intensifiers))

    def extended(
        self,
        emotions: Optional[Mapping[str, Iterable[tuple[EmotionLabel | str, float]]]] = None,
        polarity: Optional[Mapping[str, float]] = None,
        negations: Optional[Iterable[str]] = None,
        intensifiers: Optional[Mapping[str, float]] = None,
    ) -> Lexicon:
        """
        Return a new Lexicon with extra entries layered on top of this one.

        Extra emotion pairs for an existing keyword are appended to its
        entries; polarity and intensifier values replace existing ones.
        """
        merged_emotions = dict(self.emotions)
        for word, pairs in (emotions or {}).items():
            key = word.lower()
            extra = tuple((EmotionLabel(label), float(weight)) for label, weight in pairs)
            merged_emotions[key] = merged_emotions.get(key, ()) + extra

        merged_polarity = dict(self.polarity)
        merged_polarity.update({w.lower(): float(v) for w, v in (polarity or {}).items()})

        merged_intensifiers = dict(self.intensifiers)
        merged_intensifiers.update(
            {w.lower(): float(v) for w, v in (intensifiers or {}).items()}
        )

        return Lexicon(
            emotions=merged_emotions,
            polarity=merged_polarity,
            negations=self.negations | {w.lower() for w in (negations or ())},
            intensifiers=merged_intensifiers,
        )

    @classmethod
    def from_file(cls, path: Path, base: Optional[Lexicon] = None) -> Lexicon:
        """
        Load a JSON extension document and layer it over ``base``.

        Document shape::

            {
              "emotions": {"thrilled": [["joy", 0.9]]},
              "polarity": {"meh": -0.2},
              "negations": ["ain't"],
              "intensifiers": {"super": 1.3}
            }

        All sections are optional. Raises LexiconError if the file cannot be
        read or does not match this shape.
        """
        base = base if base is not None else DEFAULT_LEXICON
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise LexiconError(f"Cannot read lexicon file {path}: {e}") from e
        if not isinstance(data, dict):
            raise LexiconError(f"Lexicon file {path} must contain a JSON object")

        try:
            lexicon = base.extended(
                emotions=data.get("emotions"),
                polarity=data.get("polarity"),
                negations=data.get("negations"),
                intensifiers=data.get("intensifiers"),
            )
        except (TypeError, ValueError, AttributeError) as e:
            raise LexiconError(f"Malformed lexicon file {path}: {e}") from e

        logger.info(
            "lexicon.loaded",
            path=str(path),
            emotion_keywords=len(lexicon.emotions),
            polarity_keywords=len(lexicon.polarity),
        )
        return lexicon


DEFAULT_LEXICON = Lexicon(
    emotions=_EMOTION_KEYWORDS,
    polarity=_POLARITY_KEYWORDS,
    negations=_NEGATIONS,
    intensifiers=_INTENSIFIERS,
)


def load_lexicon(path: Optional[Path]) -> Lexicon:
    """Return DEFAULT_LEXICON, extended from ``path`` when one is configured."""
    if path is None:
        return DEFAULT_LEXICON
    return Lexicon.from_file(path)
