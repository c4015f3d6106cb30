"""Response comparison configuration."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from sentiment_analysis.config._loader import load_yaml_section


def _get_config() -> dict:
    return load_yaml_section("features/comparison.yaml", "comparison")


class ComparisonConfig(BaseSettings):
    """Settings for comparing generated scores against a gold-standard response."""
    model_config = SettingsConfigDict(
        env_prefix='COMPARISON_',
        case_sensitive=False
    )

    correlation_method: Literal["pearson", "spearman", "kendall"] = Field(
        default_factory=lambda: _get_config().get('correlation_method', 'pearson')
    )
    neutral_band: float = Field(
        default_factory=lambda: _get_config().get('neutral_band', 0.0),
        ge=0.0,
        description="Values with absolute value <= neutral_band count as neutral"
    )
