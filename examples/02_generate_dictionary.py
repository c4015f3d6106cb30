"""
Example: Generating a Dictionary from a Response Variable

This example builds a synthetic corpus of product reviews with a known
rating, generates a weighted dictionary with cross-validated LASSO, and
compares the generated scores with the ratings.

Usage:
    python examples/02_generate_dictionary.py
"""

import logging
import random
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sentiment_analysis.config import settings
from sentiment_analysis.features.comparison import compare_to_response
from sentiment_analysis.features.dictionaries import (
    DictionaryStore,
    compare_dictionaries,
    write_dictionary_csv,
)
from sentiment_analysis.features.generation import DictionaryGenerator

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

POSITIVE = ["excellent", "reliable", "comfortable", "fast"]
NEGATIVE = ["broken", "noisy", "refund", "late"]
FILLER = ["product", "delivery", "box", "price", "week", "colour", "size", "store"]


def build_corpus(n_documents: int = 200, seed: int = 11):
    """Reviews whose rating depends only on the sentiment words they contain."""
    rng = random.Random(seed)
    texts, ratings = [], []
    for _ in range(n_documents):
        pos = rng.sample(POSITIVE, rng.randint(0, 2))
        neg = rng.sample(NEGATIVE, rng.randint(0, 2))
        words = pos + neg + rng.sample(FILLER, 5)
        rng.shuffle(words)
        texts.append(" ".join(words))
        ratings.append(len(pos) - len(neg) + rng.gauss(0, 0.2))
    return texts, ratings


def main():
    print("="*60)
    print("Dictionary Generation")
    print("="*60)

    texts, ratings = build_corpus()
    config = settings.generation.model_copy(update={"min_doc_freq": 5})
    generator = DictionaryGenerator(config=config)
    dictionary = generator.generate(texts, ratings, name="REVIEWS")

    print(f"\n{dictionary.summary()}\n")
    for term, weight in sorted(dictionary.words.items(), key=lambda kv: kv[1]):
        print(f"  {weight:+.4f}  {term}")

    print("\nIn-sample fit:")
    result = compare_to_response(generator.predict(dictionary, texts), ratings)
    print(f"  {result.method} r = {result.correlation:.4f}")
    print(f"  MAE = {result.mae:.4f}, sign accuracy = {result.agreement.accuracy:.2%}")

    # Generated terms are stemmed; stem GENERAL the same way before comparing
    general = DictionaryStore.get_instance().get("GENERAL").normalized(
        generator.tokenizer.normalize_term, stemmed=True
    )
    overlap = compare_dictionaries(dictionary, general)
    print(f"\nShared terms with GENERAL: {overlap.shared_terms} ({overlap.conflicting_sign} with opposite sign)")

    output = write_dictionary_csv(
        dictionary, settings.paths.generated_dictionaries_dir / "REVIEWS.csv"
    )
    print(f"\nSaved to {output}")


if __name__ == "__main__":
    main()
