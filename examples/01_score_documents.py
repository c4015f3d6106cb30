"""
Example: Dictionary-based Sentiment Scoring

This example demonstrates how to use the SentimentAnalyzer to score
documents against the built-in dictionaries and a custom word list.

Usage:
    python examples/01_score_documents.py
"""

import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sentiment_analysis.config import settings
from sentiment_analysis.features.dictionaries import DictionaryStore, from_word_lists
from sentiment_analysis.features.sentiment import SentimentAnalyzer

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


def example_single_document():
    """Score one document against the default dictionaries."""
    print("="*60)
    print("Example 1: Single Document")
    print("="*60)

    analyzer = SentimentAnalyzer()

    text = """
    Revenue growth was strong this quarter and margins improved.
    However, the outlook is not good: demand may decline further.
    """

    for name, score in analyzer.score_document(text).items():
        print(f"\n{name} ({score.word_count} words)")
        print(f"  Positive: {score.positive_count}")
        print(f"  Negative: {score.negative_count}")
        print(f"  Net sentiment: {score.net_sentiment:+.4f}")
        print(f"  Polarity:      {score.polarity:+.4f}")
    print()


def example_negation_window():
    """Show how the negation window changes the score."""
    print("="*60)
    print("Example 2: Negation Window")
    print("="*60)

    text = "The service was not very good."
    base = settings.sentiment
    for window in (0, 1, 2):
        config = base.model_copy(update={"negation": base.negation.model_copy(update={"window": window})})
        analyzer = SentimentAnalyzer(["GENERAL"], config=config)
        score = analyzer.score_document(text)["GENERAL"]
        print(f"  window={window}: positive={score.positive_count}, negative={score.negative_count}")
    print()


def example_corpus_table():
    """Score a corpus with a custom dictionary alongside a built-in one."""
    print("="*60)
    print("Example 3: Corpus Table")
    print("="*60)

    custom = from_word_lists(
        positive=["delicious", "friendly"],
        negative=["cold", "slow"],
        name="RESTAURANT",
    )
    analyzer = SentimentAnalyzer(["GENERAL", custom])

    corpus = [
        "Delicious food and friendly staff, a great evening.",
        "Cold soup, slow service, terrible experience.",
        "The dessert was not bad.",
    ]
    table = analyzer.analyze(corpus)
    print(table[["word_count", "GENERAL_net_sentiment", "RESTAURANT_net_sentiment"]])
    print()


def example_available_dictionaries():
    """List the built-in dictionaries."""
    print("="*60)
    print("Example 4: Built-in Dictionaries")
    print("="*60)

    store = DictionaryStore.get_instance()
    for name in store.available():
        print(store.get(name).summary())
        print()


if __name__ == "__main__":
    example_single_document()
    example_negation_window()
    example_corpus_table()
    example_available_dictionaries()
