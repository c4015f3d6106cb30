"""
Sentiment Analysis Configuration Package.

This module uses Pydantic Settings to:
1. Define the schema for all configuration
2. Load defaults from configs/config.yaml and configs/features/*.yaml
3. Automatically override with environment variables from .env or CI/CD secrets

Usage:
    from sentiment_analysis.config import settings

    # Tokenizer / negation behaviour
    window = settings.sentiment.negation.window

    # Dictionary generation
    folds = settings.generation.cv_folds
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Core configs
from sentiment_analysis.config.paths import PathsConfig
from sentiment_analysis.config.testing import ReproducibilityConfig

# Feature configs
from sentiment_analysis.config.features import (
    SentimentConfig,
    GenerationConfig,
    ComparisonConfig,
)


class Settings(BaseSettings):
    """
    Main settings class that combines all configuration sections.

    Usage:
        from sentiment_analysis.config import settings

        settings.paths.dictionary_dir
        settings.sentiment.text_processing.stemming
        settings.generation.regularization_rule
    """
    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore'
    )

    paths: PathsConfig = Field(default_factory=PathsConfig)
    reproducibility: ReproducibilityConfig = Field(default_factory=ReproducibilityConfig)
    sentiment: SentimentConfig = Field(default_factory=SentimentConfig)
    generation: GenerationConfig = Field(default_factory=GenerationConfig)
    comparison: ComparisonConfig = Field(default_factory=ComparisonConfig)


# ===========================
# Global Settings Instance
# ===========================

settings = Settings()


# ===========================
# Utility Functions
# ===========================

ensure_directories = settings.paths.ensure_directories


# ===========================
# Public API
# ===========================

__all__ = [
    # Main settings
    "settings",
    "Settings",
    # Utility
    "ensure_directories",
    # Core configs (for direct access if needed)
    "PathsConfig",
    "ReproducibilityConfig",
    # Feature configs
    "SentimentConfig",
    "GenerationConfig",
    "ComparisonConfig",
]
