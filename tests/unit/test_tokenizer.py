"""Unit tests for sentiment_analysis/features/tokenizer.py."""

import pickle
from unittest.mock import MagicMock, patch

import pytest
from nltk.stem import PorterStemmer, SnowballStemmer

from sentiment_analysis.config.features.sentiment import SentimentTextProcessingConfig
from sentiment_analysis.exceptions import InvalidInputError
from sentiment_analysis.features.tokenizer import Tokenizer


def _config(**overrides) -> SentimentTextProcessingConfig:
    values = dict(stemming=False, remove_stopwords=False, ngram_size=1, min_word_length=1, language="english")
    values.update(overrides)
    return SentimentTextProcessingConfig(**values)


# ---------------------------------------------------------------------------
# Word extraction
# ---------------------------------------------------------------------------

class TestWordExtraction:
    def test_lowercases_and_drops_punctuation(self, plain_tokenizer):
        assert plain_tokenizer.tokenize("Hello, World!") == ["hello", "world"]

    def test_drops_pure_numbers(self, plain_tokenizer):
        assert plain_tokenizer.tokenize("Revenue rose 42 percent in 2023") == [
            "revenue", "rose", "percent", "in"
        ]

    def test_drops_letters_glued_to_numbers(self, plain_tokenizer):
        assert plain_tokenizer.tokenize("3rd quarter 10k filing 2nd") == ["quarter", "filing"]

    def test_drops_hyphenated_form_codes(self, plain_tokenizer):
        assert plain_tokenizer.tokenize("the 10-K report") == ["the", "report"]

    def test_word_after_leading_hyphen_kept(self, plain_tokenizer):
        assert plain_tokenizer.tokenize("results: -good -bad") == ["results", "good", "bad"]

    def test_keeps_inner_apostrophes_and_hyphens(self, plain_tokenizer):
        assert plain_tokenizer.tokenize("It isn't well-known") == ["it", "isn't", "well-known"]

    def test_normalizes_curly_apostrophes(self, plain_tokenizer):
        assert plain_tokenizer.tokenize("don’t stop") == ["don't", "stop"]

    def test_order_preserved(self, plain_tokenizer):
        assert plain_tokenizer.tokenize("c b a") == ["c", "b", "a"]

    def test_pretokenized_input(self, plain_tokenizer):
        assert plain_tokenizer.tokenize(["Good", "BAD news"]) == ["good", "bad", "news"]

    def test_tuple_input_accepted(self, plain_tokenizer):
        assert plain_tokenizer.tokenize(("good", "day")) == ["good", "day"]


# ---------------------------------------------------------------------------
# Empty and malformed input
# ---------------------------------------------------------------------------

class TestEmptyInput:
    @pytest.mark.parametrize("document", ["", "   \n\t", None, 42, ["good", 3], [], ["!!", "12"]])
    def test_recovered_to_empty_sequence(self, plain_tokenizer, document):
        assert plain_tokenizer.tokenize(document) == []

    @pytest.mark.parametrize("document", ["", None, 42, ["good", 3], []])
    def test_strict_raises(self, plain_tokenizer, document):
        with pytest.raises(InvalidInputError):
            plain_tokenizer.tokenize(document, strict=True)

    def test_punctuation_only_string_is_empty(self, plain_tokenizer):
        assert plain_tokenizer.tokenize("... !!! 123") == []

    def test_invalid_input_error_is_value_error(self, plain_tokenizer):
        with pytest.raises(ValueError):
            plain_tokenizer.tokenize(None, strict=True)


# ---------------------------------------------------------------------------
# Filtering
# ---------------------------------------------------------------------------

class TestFiltering:
    def test_min_word_length(self):
        tokenizer = Tokenizer(_config(min_word_length=3), keep_terms=[])
        assert tokenizer.tokenize("a an the good") == ["the", "good"]

    def test_min_word_length_keeps_negators(self):
        tokenizer = Tokenizer(_config(min_word_length=3), keep_terms=["no"])
        assert tokenizer.tokenize("no an good") == ["no", "good"]

    def test_stopwords_removed_but_negators_kept(self):
        fake = MagicMock()
        fake.words.return_value = ["the", "was", "not"]
        with patch("nltk.corpus.stopwords", fake):
            tokenizer = Tokenizer(_config(remove_stopwords=True), keep_terms=["not"])
        assert tokenizer.tokenize("The food was not good") == ["food", "not", "good"]

    def test_missing_nltk_corpus_falls_back_to_sklearn_list(self, caplog):
        fake = MagicMock()
        fake.words.side_effect = LookupError("stopwords not found")
        with patch("nltk.corpus.stopwords", fake):
            tokenizer = Tokenizer(_config(remove_stopwords=True), keep_terms=[])
        assert "the" in tokenizer.stopwords
        assert "NLTK stopwords not downloaded" in caplog.text

    def test_stopwords_off_by_default(self, plain_tokenizer):
        assert plain_tokenizer.stopwords == set()


# ---------------------------------------------------------------------------
# Stemming
# ---------------------------------------------------------------------------

class TestStemming:
    def test_porter_for_english(self):
        tokenizer = Tokenizer(_config(stemming=True), keep_terms=[])
        assert isinstance(tokenizer._stemmer, PorterStemmer)
        assert tokenizer.stems is True

    def test_snowball_for_other_languages(self):
        tokenizer = Tokenizer(_config(stemming=True, language="german"), keep_terms=[])
        assert isinstance(tokenizer._stemmer, SnowballStemmer)

    def test_stems_document_words(self):
        tokenizer = Tokenizer(_config(stemming=True), keep_terms=[])
        assert tokenizer.tokenize("running terrible") == ["run", "terribl"]

    def test_no_stemmer_when_disabled(self, plain_tokenizer):
        assert plain_tokenizer.stems is False
        assert plain_tokenizer.tokenize("running") == ["running"]

    def test_normalize_term_matches_tokenize(self):
        tokenizer = Tokenizer(_config(stemming=True), keep_terms=[])
        assert tokenizer.normalize_term("Terrible") == tokenizer.tokenize("terrible")[0]

    def test_normalize_multiword_term(self):
        tokenizer = Tokenizer(_config(stemming=True), keep_terms=[])
        assert tokenizer.normalize_term("Not  Running") == "not run"


# ---------------------------------------------------------------------------
# N-grams
# ---------------------------------------------------------------------------

class TestNgrams:
    def test_bigrams_grouped_by_start_position(self):
        tokenizer = Tokenizer(_config(ngram_size=2), keep_terms=[])
        assert tokenizer.tokenize("a b c") == ["a", "a b", "b", "b c", "c"]

    def test_trigrams(self):
        tokenizer = Tokenizer(_config(ngram_size=3), keep_terms=[])
        assert tokenizer.tokenize("a b c") == ["a", "a b", "a b c", "b", "b c", "c"]

    def test_unigram_count_unchanged(self):
        tokenizer = Tokenizer(_config(ngram_size=2), keep_terms=[])
        tokens = tokenizer.tokenize("one two three four")
        assert [t for t in tokens if " " not in t] == ["one", "two", "three", "four"]

    def test_single_word_has_no_ngrams(self):
        tokenizer = Tokenizer(_config(ngram_size=3), keep_terms=[])
        assert tokenizer.tokenize("alone") == ["alone"]


# ---------------------------------------------------------------------------
# Determinism
# ---------------------------------------------------------------------------

class TestDeterminism:
    def test_same_input_same_output(self):
        tokenizer = Tokenizer(_config(stemming=True, ngram_size=2), keep_terms=[])
        text = "The outlook was not good; margins declined sharply."
        assert tokenizer.tokenize(text) == tokenizer.tokenize(text)

    def test_two_instances_agree(self):
        text = "Strong growth, weak margins."
        assert Tokenizer(_config(stemming=True)).tokenize(text) == Tokenizer(_config(stemming=True)).tokenize(text)

    def test_picklable(self):
        tokenizer = Tokenizer(_config(stemming=True, ngram_size=2))
        clone = pickle.loads(pickle.dumps(tokenizer))
        assert clone.tokenize("good results") == tokenizer.tokenize("good results")

    def test_tokenize_corpus_preserves_order(self, plain_tokenizer):
        assert plain_tokenizer.tokenize_corpus(["b", "", "a"]) == [["b"], [], ["a"]]

    def test_default_keep_terms_are_negators(self):
        tokenizer = Tokenizer(_config())
        assert "not" in tokenizer.keep_terms
        assert "never" in tokenizer.keep_terms
