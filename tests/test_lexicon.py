"""Tests for attune.analysis.lexicon — immutable keyword tables and extensions."""

from __future__ import annotations

import dataclasses
import json

import pytest

from attune.analysis.analyzer import EmotionAnalyzer
from attune.analysis.lexicon import DEFAULT_LEXICON, Lexicon, LexiconError, load_lexicon
from attune.types import EmotionLabel


class TestDefaultLexicon:
    def test_has_entries_for_every_emotion_label(self):
        labels = {label for entries in DEFAULT_LEXICON.emotions.values() for label, _ in entries}
        expected = set(EmotionLabel) - {EmotionLabel.NEUTRAL}
        assert labels == expected

    def test_weights_are_positive(self):
        for entries in DEFAULT_LEXICON.emotions.values():
            for _, weight in entries:
                assert 0.0 < weight <= 1.0

    def test_polarity_values_in_range(self):
        assert all(-1.0 <= v <= 1.0 for v in DEFAULT_LEXICON.polarity.values())

    def test_contractions_are_negations(self):
        assert "can't" in DEFAULT_LEXICON.negations
        assert "not" in DEFAULT_LEXICON.negations

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_LEXICON.polarity["meh"] = -0.1  # type: ignore[index]
        with pytest.raises(TypeError):
            DEFAULT_LEXICON.emotions["meh"] = ()  # type: ignore[index]
        with pytest.raises(AttributeError):
            DEFAULT_LEXICON.negations.add("nah")  # type: ignore[attr-defined]

    def test_fields_cannot_be_reassigned(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_LEXICON.intensifiers = {}  # type: ignore[misc]


class TestExtended:
    def test_returns_new_lexicon_without_touching_base(self):
        extended = DEFAULT_LEXICON.extended(polarity={"meh": -0.2}, negations=["ain't"])
        assert extended.polarity["meh"] == -0.2
        assert "ain't" in extended.negations
        assert "meh" not in DEFAULT_LEXICON.polarity
        assert "ain't" not in DEFAULT_LEXICON.negations

    def test_keywords_are_lowercased(self):
        extended = DEFAULT_LEXICON.extended(
            emotions={"Thrilled": [("joy", 0.9)]}, intensifiers={"SUPER": 1.3}
        )
        assert extended.emotions["thrilled"] == ((EmotionLabel.JOY, 0.9),)
        assert extended.intensifiers["super"] == 1.3

    def test_extra_emotion_entries_are_appended(self):
        extended = DEFAULT_LEXICON.extended(emotions={"happy": [("trust", 0.2)]})
        assert extended.emotions["happy"] == (
            (EmotionLabel.JOY, 1.0),
            (EmotionLabel.TRUST, 0.2),
        )

    def test_unknown_label_is_rejected(self):
        with pytest.raises(ValueError):
            DEFAULT_LEXICON.extended(emotions={"meh": [("boredom", 0.5)]})

    def test_empty_lexicon_detects_nothing(self):
        result = EmotionAnalyzer(lexicon=Lexicon()).analyze("I am so happy")
        assert result.emotions == []
        assert result.sentiment_score == 0.0


class TestFromFile:
    def test_loads_extension_over_defaults(self, tmp_path):
        path = tmp_path / "lexicon.json"
        path.write_text(json.dumps({
            "emotions": {"thrilled": [["joy", 0.9]]},
            "polarity": {"thrilled": 0.8},
            "intensifiers": {"super": 1.3},
        }), encoding="utf-8")

        lexicon = Lexicon.from_file(path)
        assert lexicon.emotions["thrilled"] == ((EmotionLabel.JOY, 0.9),)
        assert "happy" in lexicon.emotions

        result = EmotionAnalyzer(lexicon=lexicon).analyze("super thrilled")
        assert result.dominant == EmotionLabel.JOY
        assert result.sentiment_score == pytest.approx(1.0)

    def test_all_sections_optional(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text("{}", encoding="utf-8")
        lexicon = Lexicon.from_file(path)
        assert dict(lexicon.polarity) == dict(DEFAULT_LEXICON.polarity)

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(LexiconError):
            Lexicon.from_file(tmp_path / "nope.json")

    def test_invalid_json_raises(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(LexiconError):
            Lexicon.from_file(path)

    def test_non_object_document_raises(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        with pytest.raises(LexiconError):
            Lexicon.from_file(path)

    def test_malformed_entries_raise(self, tmp_path):
        path = tmp_path / "entries.json"
        path.write_text(json.dumps({"emotions": {"meh": [["boredom", 0.5]]}}), encoding="utf-8")
        with pytest.raises(LexiconError):
            Lexicon.from_file(path)

    def test_lexicon_error_is_value_error(self):
        assert issubclass(LexiconError, ValueError)


class TestLoadLexicon:
    def test_none_returns_default(self):
        assert load_lexicon(None) is DEFAULT_LEXICON

    def test_path_extends_default(self, tmp_path):
        path = tmp_path / "extra.json"
        path.write_text(json.dumps({"negations": ["ain't"]}), encoding="utf-8")
        assert "ain't" in load_lexicon(path).negations
