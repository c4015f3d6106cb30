"""Unit tests for the configuration package (YAML defaults + env overrides)."""

import pytest
from pydantic import ValidationError

from sentiment_analysis.config import Settings
from sentiment_analysis.config._loader import clear_config_cache, load_yaml_section
from sentiment_analysis.config.features.comparison import ComparisonConfig
from sentiment_analysis.config.features.generation import GenerationConfig
from sentiment_analysis.config.features.sentiment import (
    SentimentConfig,
    SentimentNegationConfig,
    SentimentTextProcessingConfig,
)
from sentiment_analysis.config.paths import PathsConfig
from sentiment_analysis.config.testing import ReproducibilityConfig


class TestYamlDefaults:
    def test_packaged_defaults(self):
        config = SentimentConfig()
        assert config.default_dictionaries == ["HE", "GENERAL"]
        assert config.negation.window == 1
        assert config.text_processing.stemming is True

    def test_generation_defaults(self):
        config = GenerationConfig()
        assert config.cv_folds == 10
        assert config.min_doc_freq == 2
        assert config.regularization_rule == "one_se"

    def test_configs_dir_override(self, tmp_path, monkeypatch):
        (tmp_path / "features").mkdir()
        (tmp_path / "features" / "generation.yaml").write_text(
            "generation:\n  cv_folds: 4\n  min_doc_freq: 3\n", encoding="utf-8"
        )
        monkeypatch.setenv("SENTIMENT_CONFIGS_DIR", str(tmp_path))
        clear_config_cache()
        config = GenerationConfig()
        assert config.cv_folds == 4
        assert config.min_doc_freq == 3
        assert config.l1_ratio == 1.0

    def test_missing_file_is_empty_section(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SENTIMENT_CONFIGS_DIR", str(tmp_path))
        clear_config_cache()
        assert load_yaml_section("features/sentiment.yaml", "sentiment") == {}
        assert SentimentNegationConfig().window == 1


class TestEnvOverrides:
    def test_negation_window(self, monkeypatch):
        monkeypatch.setenv("SENTIMENT_NEGATION_WINDOW", "3")
        assert SentimentNegationConfig().window == 3

    def test_text_processing(self, monkeypatch):
        monkeypatch.setenv("SENTIMENT_TEXT_STEMMING", "false")
        monkeypatch.setenv("SENTIMENT_TEXT_NGRAM_SIZE", "2")
        config = SentimentTextProcessingConfig()
        assert config.stemming is False
        assert config.ngram_size == 2

    def test_generation_rule_spelling(self, monkeypatch):
        monkeypatch.setenv("GENERATION_REGULARIZATION_RULE", "oneSE")
        assert GenerationConfig().regularization_rule == "one_se"

    def test_comparison_method(self, monkeypatch):
        monkeypatch.setenv("COMPARISON_CORRELATION_METHOD", "spearman")
        assert ComparisonConfig().correlation_method == "spearman"

    def test_random_seed(self, monkeypatch):
        monkeypatch.setenv("REPRODUCIBILITY_RANDOM_SEED", "7")
        assert ReproducibilityConfig().random_seed == 7

    def test_lm_csv_path(self, monkeypatch, tmp_path):
        monkeypatch.setenv("PATHS_LM_MASTER_CSV", str(tmp_path / "lm.csv"))
        assert PathsConfig().lm_dictionary_csv == tmp_path / "lm.csv"

    def test_settings_compose_sections(self):
        settings = Settings()
        assert settings.generation.cv_folds >= 2
        assert settings.comparison.correlation_method in ("pearson", "spearman", "kendall")


class TestValidation:
    def test_negative_window_rejected(self):
        with pytest.raises(ValidationError):
            SentimentNegationConfig(window=-1)

    def test_single_fold_rejected(self):
        with pytest.raises(ValidationError):
            GenerationConfig(cv_folds=1)

    def test_unknown_rule_rejected(self):
        with pytest.raises(ValidationError):
            GenerationConfig(regularization_rule="median")

    def test_l1_ratio_bounds(self):
        with pytest.raises(ValidationError):
            GenerationConfig(l1_ratio=0.0)

    def test_empty_default_dictionaries_rejected(self):
        with pytest.raises(ValidationError):
            SentimentConfig(default_dictionaries=[])

    def test_ngram_size_positive(self):
        with pytest.raises(ValidationError):
            SentimentTextProcessingConfig(ngram_size=0)


class TestPaths:
    def test_directories_under_project_root(self, tmp_path):
        paths = PathsConfig(project_root=tmp_path)
        assert paths.scores_dir == tmp_path / "data" / "processed" / "scores"
        assert paths.generated_dictionaries_dir == tmp_path / "data" / "processed" / "dictionaries"

    def test_ensure_directories(self, tmp_path):
        paths = PathsConfig(project_root=tmp_path)
        paths.ensure_directories()
        assert paths.scores_dir.is_dir()
        assert paths.logs_dir.is_dir()
