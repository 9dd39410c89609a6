"""Text analysis — tokenizer, lexicon tables and the emotion analyzer."""
from attune.analysis.analyzer import EmotionAnalyzer, analyze_emotion, classify_sentiment
from attune.analysis.lexicon import DEFAULT_LEXICON, Lexicon, LexiconError, load_lexicon
from attune.analysis.tokenizer import tokenize

__all__ = [
    "EmotionAnalyzer",
    "analyze_emotion",
    "classify_sentiment",
    "DEFAULT_LEXICON",
    "Lexicon",
    "LexiconError",
    "load_lexicon",
    "tokenize",
]
