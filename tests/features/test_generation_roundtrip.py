"""
Dictionary generation round trips on synthetic corpora.

A response built as count("good") - count("bad") must yield a dictionary
with a positive weight for "good", a negative weight for "bad", and
(near-)zero weights for the filler vocabulary. Uses the real
cross-validated LASSO solver.
"""

import numpy as np
import pytest

from sentiment_analysis.config.features.generation import GenerationConfig
from sentiment_analysis.features.comparison import compare_to_response
from sentiment_analysis.features.generation import DictionaryGenerator
from sentiment_analysis.features.sentiment import SentimentAnalyzer


@pytest.fixture
def generation_config() -> GenerationConfig:
    return GenerationConfig(min_doc_freq=1, cv_folds=5, regularization_rule="min", n_alphas=50)


class TestGoodBadRoundTrip:
    def test_recovers_good_and_bad(self, good_bad_corpus, generation_config):
        texts, response = good_bad_corpus
        dictionary = DictionaryGenerator(config=generation_config, random_state=0).generate(texts, response)

        assert dictionary.lookup("good") > 0.5
        assert dictionary.lookup("bad") < -0.5
        for term, weight in dictionary.words.items():
            if term not in ("good", "bad"):
                assert abs(weight) < 0.2, f"Filler term {term!r} got weight {weight}"

    def test_one_se_rule_keeps_signal_terms(self, good_bad_corpus, generation_config):
        texts, response = good_bad_corpus
        config = generation_config.model_copy(update={"regularization_rule": "one_se"})
        dictionary = DictionaryGenerator(config=config, random_state=0).generate(texts, response)

        assert dictionary.lookup("good") > 0
        assert dictionary.lookup("bad") < 0
        assert dictionary.info.alpha == dictionary.info.alpha_1se
        assert dictionary.info.alpha_1se >= dictionary.info.alpha_min

    def test_predictions_track_response(self, good_bad_corpus, generation_config):
        texts, response = good_bad_corpus
        generator = DictionaryGenerator(config=generation_config, random_state=0)
        dictionary = generator.generate(texts, response)

        result = compare_to_response(generator.predict(dictionary, texts), response, neutral_band=0.5)
        assert result.correlation > 0.95
        assert result.agreement.accuracy > 0.8

    def test_generated_dictionary_scores_documents(self, good_bad_corpus, generation_config):
        texts, response = good_bad_corpus
        dictionary = DictionaryGenerator(config=generation_config, random_state=0).generate(
            texts, response, name="GOODBAD"
        )
        table = SentimentAnalyzer([dictionary]).analyze(texts)
        scores = table["GOODBAD_weighted_sum"].to_numpy()
        assert np.corrcoef(scores, response)[0, 1] > 0.9

    def test_same_seed_same_dictionary(self, good_bad_corpus, generation_config):
        texts, response = good_bad_corpus
        first = DictionaryGenerator(config=generation_config, random_state=1).generate(texts, response)
        second = DictionaryGenerator(config=generation_config, random_state=1).generate(texts, response)
        assert first.words == pytest.approx(second.words)
