"""
Shared pytest fixtures for the sentiment analysis test suite.

This module provides common fixtures used across test modules:
- Project paths
- Small labelled corpora
- Golden sentences with expected counts
- A clean DictionaryStore per test

Usage:
    Fixtures are automatically discovered by pytest.
    Import them directly in test files - no explicit import needed.
"""

import random
from pathlib import Path
from typing import Dict, List, Tuple

import pytest

from sentiment_analysis.config._loader import clear_config_cache
from sentiment_analysis.features.dictionaries import DictionaryStore


# ===========================
# Isolation
# ===========================

@pytest.fixture(autouse=True)
def fresh_store():
    """Every test starts with an unloaded DictionaryStore singleton."""
    DictionaryStore.reset_instance()
    yield
    DictionaryStore.reset_instance()
    clear_config_cache()


# ===========================
# Path Fixtures
# ===========================

@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


# ===========================
# Corpus Fixtures
# ===========================

@pytest.fixture
def review_corpus() -> List[str]:
    """Short documents with an obvious sentiment direction."""
    return [
        "The service was good and the food was great.",
        "A terrible meal, bad service and poor value.",
        "The food was not good.",
        "Average place, nothing special.",
    ]


@pytest.fixture
def good_bad_corpus() -> Tuple[List[str], List[float]]:
    """
    Synthetic corpus whose response is count(good) - count(bad).

    Filler words are drawn from a fixed vocabulary so every term appears in
    several documents; the generator should recover a positive weight for
    "good" and a negative weight for "bad".
    """
    rng = random.Random(7)
    filler = ["report", "quarter", "market", "team", "product", "price", "customer", "plan"]

    texts: List[str] = []
    response: List[float] = []
    for _ in range(60):
        n_good = rng.randint(0, 3)
        n_bad = rng.randint(0, 3)
        words = ["good"] * n_good + ["bad"] * n_bad + rng.sample(filler, 4)
        rng.shuffle(words)
        texts.append(" ".join(words))
        response.append(float(n_good - n_bad))
    return texts, response


# ===========================
# Golden Sentence Fixtures
# ===========================

@pytest.fixture
def golden_sentence() -> str:
    """Sentence with known GENERAL dictionary matches."""
    return "Sales were good, margins were great, but the outlook is not good and costs are terrible."


@pytest.fixture
def golden_sentence_expected() -> Dict[str, int]:
    """
    Expected GENERAL counts for golden_sentence with negation window 1.

    Positive: good, great
    Negative: terrible, "not good" (negated)
    """
    return {
        "word_count": 16,
        "positive_count": 2,
        "negative_count": 2,
        "neutral_count": 0,
    }
