"""
Feature Engineering Module

This package contains the text-to-sentiment components.

Available features:
- Tokenization with optional stemming, stopword removal and n-grams
- Dictionary-based sentiment scoring with negation handling
- LASSO-based dictionary generation from a response variable
- Comparison of scores against a gold-standard response

Usage:
    from sentiment_analysis.features import SentimentAnalyzer, DictionaryGenerator

    # Scoring
    analyzer = SentimentAnalyzer(dictionaries=["GENERAL"])
    table = analyzer.analyze(["Sales were good.", "Results were not good."])

    # Generation
    generator = DictionaryGenerator()
    dictionary = generator.generate(texts, returns, name="RETURNS")
"""

# Lazy imports to avoid circular dependency
# Use explicit imports: from sentiment_analysis.features.sentiment import SentimentAnalyzer

__all__ = [
    # Tokenizer
    "Tokenizer",
    # Scoring
    "SentimentAnalyzer",
    "DocumentScore",
    # Generation
    "DictionaryGenerator",
    "TermDocumentMatrix",
    # Comparison
    "compare_to_response",
    "compare_table",
    "ComparisonResult",
]


def __getattr__(name):
    """Lazy import to avoid circular dependencies."""
    if name == "Tokenizer":
        from .tokenizer import Tokenizer
        return Tokenizer
    # Scoring
    elif name == "SentimentAnalyzer":
        from .sentiment import SentimentAnalyzer
        return SentimentAnalyzer
    elif name == "DocumentScore":
        from .sentiment import DocumentScore
        return DocumentScore
    # Generation
    elif name == "DictionaryGenerator":
        from .generation import DictionaryGenerator
        return DictionaryGenerator
    elif name == "TermDocumentMatrix":
        from .generation import TermDocumentMatrix
        return TermDocumentMatrix
    # Comparison
    elif name == "compare_to_response":
        from .comparison import compare_to_response
        return compare_to_response
    elif name == "compare_table":
        from .comparison import compare_table
        return compare_table
    elif name == "ComparisonResult":
        from .comparison import ComparisonResult
        return ComparisonResult
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
