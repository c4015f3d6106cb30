"""Dictionary generation (LASSO) configuration."""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sentiment_analysis.config._loader import load_yaml_section


def _get_config() -> dict:
    return load_yaml_section("features/generation.yaml", "generation")


class GenerationConfig(BaseSettings):
    """
    Settings for the regularized-regression dictionary generator.
    Loads from configs/features/generation.yaml with environment variable overrides.
    """
    model_config = SettingsConfigDict(
        env_prefix='GENERATION_',
        case_sensitive=False
    )

    min_doc_freq: int = Field(
        default_factory=lambda: _get_config().get('min_doc_freq', 2),
        ge=1,
        description="Minimum number of documents a term must appear in"
    )
    cv_folds: int = Field(
        default_factory=lambda: _get_config().get('cv_folds', 10),
        ge=2,
        description="Number of cross-validation folds"
    )
    regularization_rule: Literal["min", "one_se"] = Field(
        default_factory=lambda: _get_config().get('regularization_rule', 'one_se')
    )
    l1_ratio: float = Field(
        default_factory=lambda: _get_config().get('l1_ratio', 1.0),
        gt=0.0,
        le=1.0,
        description="1.0 is the LASSO; smaller values mix in an L2 penalty"
    )
    n_alphas: int = Field(
        default_factory=lambda: _get_config().get('n_alphas', 100),
        ge=2
    )
    max_iter: int = Field(
        default_factory=lambda: _get_config().get('max_iter', 10000),
        ge=1
    )
    tol: float = Field(
        default_factory=lambda: _get_config().get('tol', 1e-4),
        gt=0.0
    )
    standardize: bool = Field(
        default_factory=lambda: _get_config().get('standardize', True)
    )
    weighting: Literal["frequency", "presence"] = Field(
        default_factory=lambda: _get_config().get('weighting', 'frequency')
    )
    zero_tolerance: float = Field(
        default_factory=lambda: _get_config().get('zero_tolerance', 1e-10),
        ge=0.0
    )
    parallel_workers: int = Field(
        default_factory=lambda: _get_config().get('parallel_workers', 1),
        ge=1,
        description="Workers used to count terms when building the term-document matrix"
    )
    partition_size: int = Field(
        default_factory=lambda: _get_config().get('partition_size', 1000),
        ge=1
    )

    @field_validator('regularization_rule', mode='before')
    @classmethod
    def normalize_rule(cls, v):
        """Accept 'oneSE' / '1se' spellings for the one-standard-error rule."""
        if isinstance(v, str) and v.strip().lower().replace("-", "_") in ("onese", "one_se", "1se", "1_se"):
            return "one_se"
        return v
