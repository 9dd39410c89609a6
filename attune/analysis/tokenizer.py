"""Word tokenizer for lexicon matching."""

from __future__ import annotations

import re

# Anything that is not a word character, whitespace, apostrophe or hyphen
# becomes a separator.
_SEPARATORS = re.compile(r"[^\w\s'-]")
_WHITESPACE = re.compile(r"\s+")
_TYPOGRAPHIC_APOSTROPHES = str.maketrans({"’": "'", "‘": "'"})


def tokenize(text: str) -> list[str]:
    """
    Split ``text`` into lowercase word tokens.

    Apostrophes and hyphens survive only inside a token, so ``can't`` and
    ``well-known`` stay whole while quotes and dashes around words are
    dropped. Empty or non-string input yields an empty list.
    """
    if not isinstance(text, str) or not text:
        return []
    cleaned = _SEPARATORS.sub(" ", text.translate(_TYPOGRAPHIC_APOSTROPHES).lower())
    tokens = []
    for raw in _WHITESPACE.split(cleaned):
        token = raw.strip("'-")
        if token:
            tokens.append(token)
    return tokens
