"""
Dictionary-based sentiment analysis.

Scores documents against term dictionaries (binary polarity lists or
weighted term lists), handles negation, generates weighted dictionaries
from a response variable by cross-validated LASSO, and compares scores
with gold-standard responses.

Usage:
    from sentiment_analysis import SentimentAnalyzer

    table = SentimentAnalyzer().analyze(["Revenue growth was strong."])
"""

from sentiment_analysis.exceptions import (
    SentimentAnalysisError,
    InvalidInputError,
    UnknownDictionaryError,
    DimensionMismatchError,
    InsufficientDataError,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "SentimentAnalysisError",
    "InvalidInputError",
    "UnknownDictionaryError",
    "DimensionMismatchError",
    "InsufficientDataError",
    "SentimentAnalyzer",
    "DictionaryGenerator",
    "DictionaryStore",
    "compare_to_response",
]


def __getattr__(name):
    """Lazy import to avoid loading the numerics stack on package import."""
    if name == "SentimentAnalyzer":
        from sentiment_analysis.features.sentiment import SentimentAnalyzer
        return SentimentAnalyzer
    elif name == "DictionaryGenerator":
        from sentiment_analysis.features.generation import DictionaryGenerator
        return DictionaryGenerator
    elif name == "DictionaryStore":
        from sentiment_analysis.features.dictionaries import DictionaryStore
        return DictionaryStore
    elif name == "compare_to_response":
        from sentiment_analysis.features.comparison import compare_to_response
        return compare_to_response
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
