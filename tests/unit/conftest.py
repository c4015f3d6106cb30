"""
Lightweight fixtures for unit tests - NO real data dependencies.
All fixtures use synthetic data that runs in <1 second.
"""

import pytest

from sentiment_analysis.config.features.generation import GenerationConfig
from sentiment_analysis.config.features.sentiment import (
    SentimentConfig,
    SentimentNegationConfig,
    SentimentProcessingConfig,
    SentimentTextProcessingConfig,
)
from sentiment_analysis.features.dictionaries import BinaryDictionary, Polarity, WeightedDictionary
from sentiment_analysis.features.tokenizer import Tokenizer


# =============================================================================
# Config Fixtures
# =============================================================================

@pytest.fixture
def plain_text_config() -> SentimentTextProcessingConfig:
    """No stemming, no stopwords, unigrams."""
    return SentimentTextProcessingConfig(
        stemming=False, remove_stopwords=False, ngram_size=1, min_word_length=1, language="english"
    )


@pytest.fixture
def plain_tokenizer(plain_text_config) -> Tokenizer:
    return Tokenizer(plain_text_config)


@pytest.fixture
def sentiment_config(plain_text_config) -> SentimentConfig:
    """Sentiment config with plain tokenization, window 1 and sequential scoring."""
    return SentimentConfig(
        text_processing=plain_text_config,
        negation=SentimentNegationConfig(window=1, extra_negators=[]),
        processing=SentimentProcessingConfig(batch_size=2, parallel_workers=1),
        default_dictionaries=["GENERAL"],
    )


@pytest.fixture
def small_generation_config() -> GenerationConfig:
    """Generation config sized for a 60-document synthetic corpus."""
    return GenerationConfig(
        min_doc_freq=1,
        cv_folds=5,
        regularization_rule="min",
        n_alphas=50,
        partition_size=16,
    )


# =============================================================================
# Dictionary Fixtures
# =============================================================================

@pytest.fixture
def tiny_binary() -> BinaryDictionary:
    return BinaryDictionary(
        name="TINY",
        words={
            "good": Polarity.POSITIVE,
            "great": Polarity.POSITIVE,
            "bad": Polarity.NEGATIVE,
            "okay": Polarity.NEUTRAL,
        },
    )


@pytest.fixture
def tiny_weighted() -> WeightedDictionary:
    return WeightedDictionary(
        name="WEIGHTS",
        words={"good": 0.5, "great": 2.0, "bad": -1.5},
    )
