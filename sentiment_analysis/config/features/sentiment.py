"""Sentiment scoring configuration."""

from typing import List, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sentiment_analysis.config._loader import load_yaml_section


def _get_config() -> dict:
    return load_yaml_section("features/sentiment.yaml", "sentiment")


class SentimentTextProcessingConfig(BaseSettings):
    """Tokenizer settings shared by scoring and dictionary generation."""
    model_config = SettingsConfigDict(
        env_prefix='SENTIMENT_TEXT_',
        case_sensitive=False
    )

    stemming: bool = Field(
        default_factory=lambda: _get_config().get('text_processing', {}).get('stemming', True)
    )
    remove_stopwords: bool = Field(
        default_factory=lambda: _get_config().get('text_processing', {}).get('remove_stopwords', False)
    )
    ngram_size: int = Field(
        default_factory=lambda: _get_config().get('text_processing', {}).get('ngram_size', 1),
        ge=1
    )
    min_word_length: int = Field(
        default_factory=lambda: _get_config().get('text_processing', {}).get('min_word_length', 1),
        ge=1
    )
    language: str = Field(
        default_factory=lambda: _get_config().get('text_processing', {}).get('language', 'english')
    )


class SentimentNegationConfig(BaseSettings):
    """Negation handling settings."""
    model_config = SettingsConfigDict(
        env_prefix='SENTIMENT_NEGATION_',
        case_sensitive=False
    )

    window: int = Field(
        default_factory=lambda: _get_config().get('negation', {}).get('window', 1),
        ge=0
    )
    extra_negators: List[str] = Field(
        default_factory=lambda: _get_config().get('negation', {}).get('extra_negators', [])
    )


class SentimentProcessingConfig(BaseSettings):
    """Processing performance settings."""
    model_config = SettingsConfigDict(
        env_prefix='SENTIMENT_PROC_',
        case_sensitive=False
    )

    batch_size: int = Field(
        default_factory=lambda: _get_config().get('processing', {}).get('batch_size', 1000),
        ge=1
    )
    parallel_workers: int = Field(
        default_factory=lambda: _get_config().get('processing', {}).get('parallel_workers', 1),
        ge=1
    )


class SentimentOutputConfig(BaseSettings):
    """Output format settings."""
    model_config = SettingsConfigDict(
        env_prefix='SENTIMENT_OUT_',
        case_sensitive=False
    )

    format: Literal["csv", "json"] = Field(
        default_factory=lambda: _get_config().get('output', {}).get('format', 'csv')
    )
    precision: Optional[int] = Field(
        default_factory=lambda: _get_config().get('output', {}).get('precision', 6)
    )


class SentimentConfig(BaseSettings):
    """
    Sentiment scoring configuration.
    Loads from configs/features/sentiment.yaml with environment variable overrides.
    """
    model_config = SettingsConfigDict(
        env_prefix='SENTIMENT_',
        env_nested_delimiter='__',
        case_sensitive=False
    )

    default_dictionaries: List[str] = Field(
        default_factory=lambda: _get_config().get('default_dictionaries', ["HE", "GENERAL"])
    )
    text_processing: SentimentTextProcessingConfig = Field(
        default_factory=SentimentTextProcessingConfig
    )
    negation: SentimentNegationConfig = Field(
        default_factory=SentimentNegationConfig
    )
    processing: SentimentProcessingConfig = Field(
        default_factory=SentimentProcessingConfig
    )
    output: SentimentOutputConfig = Field(
        default_factory=SentimentOutputConfig
    )

    @field_validator('default_dictionaries')
    @classmethod
    def validate_dictionaries(cls, v: List[str]) -> List[str]:
        """Reject an empty default dictionary list."""
        if not v:
            raise ValueError("default_dictionaries must name at least one dictionary")
        return [name.strip() for name in v]
