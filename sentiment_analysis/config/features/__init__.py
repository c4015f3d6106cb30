"""Feature configuration modules."""

from sentiment_analysis.config.features.sentiment import SentimentConfig
from sentiment_analysis.config.features.generation import GenerationConfig
from sentiment_analysis.config.features.comparison import ComparisonConfig

__all__ = [
    "SentimentConfig",
    "GenerationConfig",
    "ComparisonConfig",
]
