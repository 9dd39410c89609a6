# attune/config.py
"""
Configuration for the emotional context engine.

Values are loaded from environment variables (via .env file) and validated
with Pydantic. Every field can also be passed by name, which is how tests and
callers build one-off configs.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Optional

import structlog
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings

logger = structlog.get_logger(__name__)

# Resolve .env relative to the project root (one level above attune/ package),
# so the config works regardless of the user's current working directory.
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class NegationPolicy(str, Enum):
    """How a negated emotion keyword contributes to its label."""
    DAMPEN = "dampen"   # weak, sign-flipped contribution to the same label
    ZERO = "zero"       # no contribution at all
    INVERT = "invert"   # weak contribution to the opposite label


class EmotionalContextConfig(BaseSettings):
    """Configuration for emotion analysis and per-session context tracking."""

    enabled: bool = Field(True, alias="ATTUNE_EMOTION_ENABLED")
    # Maximum number of analyses kept in a session's rolling window
    history_window_size: int = Field(20, alias="ATTUNE_HISTORY_WINDOW_SIZE")

    negation_policy: NegationPolicy = Field(
        NegationPolicy.DAMPEN, alias="ATTUNE_NEGATION_POLICY"
    )
    # Share of a keyword's weight that survives negation (dampen/invert)
    negation_dampening: float = Field(0.5, alias="ATTUNE_NEGATION_DAMPENING")

    # Optional JSON file extending the built-in lexicon
    lexicon_path: Optional[Path] = Field(None, alias="ATTUNE_LEXICON_PATH")

    model_config = {
        "env_file": _ENV_FILE,
        "extra": "ignore",
        "populate_by_name": True,
        "env_ignore_empty": True,
    }

    @field_validator("negation_policy", mode="before")
    @classmethod
    def normalize_negation_policy(cls, value: object) -> object:
        if isinstance(value, NegationPolicy):
            return value
        if isinstance(value, str):
            mode = value.strip().lower()
            if mode in {p.value for p in NegationPolicy}:
                return mode
        logger.warning("config.unknown_negation_policy", value=str(value))
        return NegationPolicy.DAMPEN

    @model_validator(mode="after")
    def normalize_limits(self) -> "EmotionalContextConfig":
        self.history_window_size = max(1, int(self.history_window_size))
        self.negation_dampening = max(0.0, min(1.0, float(self.negation_dampening)))
        return self

    def with_overrides(self, overrides: Mapping[str, Any]) -> "EmotionalContextConfig":
        """
        Return a validated copy with ``overrides`` applied on top of this config.

        Accepts field names or env aliases; ``None`` values are ignored so a
        partial mapping like ``{"enabled": False}`` behaves as expected.
        """
        merged = self.model_dump()
        for key, value in overrides.items():
            if value is None:
                continue
            merged[_FIELD_BY_ALIAS.get(key, key)] = value
        # model_validate runs the validators but not the env/.env sources
        return type(self).model_validate(merged)


_FIELD_BY_ALIAS = {
    info.alias: name
    for name, info in EmotionalContextConfig.model_fields.items()
    if info.alias
}
