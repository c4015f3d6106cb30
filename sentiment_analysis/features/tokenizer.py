"""
Tokenizer / Normalizer

Turns raw document text into the normalized token sequence that both the
scoring engine and the dictionary generator consume.

The tokenizer:
1. Normalizes unicode apostrophes and lowercases the text
2. Extracts word tokens (numbers and punctuation are dropped)
3. Optionally removes stopwords (negators are always kept)
4. Optionally stems each word (nltk Porter / Snowball stemmers)
5. Optionally expands the sequence with n-grams

Usage:
    from sentiment_analysis.features.tokenizer import Tokenizer

    tokenizer = Tokenizer()
    tokens = tokenizer.tokenize("The results were not good.")
"""

import logging
import re
from typing import Iterable, List, Optional, Sequence, Set

from nltk.stem import PorterStemmer, SnowballStemmer
from sklearn.feature_extraction.text import ENGLISH_STOP_WORDS

from sentiment_analysis.config import settings
from sentiment_analysis.config.features.sentiment import SentimentTextProcessingConfig
from sentiment_analysis.exceptions import InvalidInputError

logger = logging.getLogger(__name__)

# A word starts with a letter at a word boundary; inner apostrophes and hyphens are kept
# ("don't", "well-known"). Letters glued to a number ("3rd", "10-K") are not words.
WORD_PATTERN = re.compile(r"(?<!\w)(?<!\w['\-])[^\W\d_]\w*(?:['\-]\w+)*", re.UNICODE)

_APOSTROPHES = str.maketrans({"’": "'", "‘": "'", "ʼ": "'", "`": "'"})

NGRAM_SEPARATOR = " "


class Tokenizer:
    """
    Deterministic text normalizer.

    Identical input and configuration always yield the same token sequence.
    Instances hold no per-call state and can be shared between threads or
    pickled into worker processes.

    Usage:
        tokenizer = Tokenizer()
        tokens = tokenizer.tokenize(text)
        term = tokenizer.normalize_term("Terrible")  # -> "terribl"
    """

    def __init__(
        self,
        config: Optional[SentimentTextProcessingConfig] = None,
        keep_terms: Optional[Iterable[str]] = None,
    ):
        """
        Initialize tokenizer.

        Args:
            config: Optional SentimentTextProcessingConfig. If None, loads from settings.
            keep_terms: Terms that stopword removal must never drop. Defaults to
                the built-in negator list.
        """
        self.config = config or settings.sentiment.text_processing

        if keep_terms is None:
            # Import here to avoid circular dependency
            from sentiment_analysis.features.dictionaries.resources import load_default_negators
            keep_terms = load_default_negators()
        self.keep_terms: Set[str] = {self._prepare(t) for t in keep_terms}

        self._stemmer = self._load_stemmer() if self.config.stemming else None
        self.stopwords: Set[str] = (
            self._load_stopwords() - self.keep_terms if self.config.remove_stopwords else set()
        )

        logger.debug(
            f"Initialized Tokenizer (stemming={self.config.stemming}, "
            f"remove_stopwords={self.config.remove_stopwords}, "
            f"ngram_size={self.config.ngram_size})"
        )

    @property
    def stems(self) -> bool:
        """Whether this tokenizer emits stemmed terms."""
        return self._stemmer is not None

    def tokenize(self, text, strict: bool = False) -> List[str]:
        """
        Tokenize a document.

        Args:
            text: Raw text, or a pre-tokenized sequence of strings
            strict: If True, raise InvalidInputError on empty or malformed
                input instead of returning an empty sequence

        Returns:
            Ordered list of normalized tokens

        Raises:
            InvalidInputError: Only when strict=True
        """
        try:
            words = self._extract_words(text)
        except InvalidInputError as e:
            if strict:
                raise
            logger.debug(f"Treating input as empty document: {e}")
            return []

        words = self._filter_words(words)
        if self._stemmer is not None:
            words = [self._stem(w) for w in words]

        return self._build_ngrams(words)

    def tokenize_corpus(self, documents: Sequence, strict: bool = False) -> List[List[str]]:
        """Tokenize a list of documents, preserving order."""
        return [self.tokenize(doc, strict=strict) for doc in documents]

    def normalize_term(self, term: str) -> str:
        """
        Normalize a single dictionary term the same way document words are.

        Multi-word terms are normalized word by word and re-joined, so they
        line up with the n-grams produced by tokenize().
        """
        words = WORD_PATTERN.findall(self._prepare(term))
        if self._stemmer is not None:
            words = [self._stem(w) for w in words]
        return NGRAM_SEPARATOR.join(words)

    def _extract_words(self, text) -> List[str]:
        """Split input into lowercase words, validating its shape."""
        if text is None:
            raise InvalidInputError("Document is None")

        if isinstance(text, str):
            if not text.strip():
                raise InvalidInputError("Document is empty")
            return WORD_PATTERN.findall(self._prepare(text))

        if isinstance(text, (list, tuple)):
            if not all(isinstance(t, str) for t in text):
                raise InvalidInputError("Pre-tokenized document must contain only strings")
            words = []
            for element in text:
                words.extend(WORD_PATTERN.findall(self._prepare(element)))
            if not words:
                raise InvalidInputError("Pre-tokenized document has no words")
            return words

        raise InvalidInputError(
            f"Document must be a string or a sequence of strings, got {type(text).__name__}"
        )

    def _filter_words(self, words: List[str]) -> List[str]:
        min_len = self.config.min_word_length
        return [
            w for w in words
            if w in self.keep_terms or (len(w) >= min_len and w not in self.stopwords)
        ]

    def _build_ngrams(self, words: List[str]) -> List[str]:
        n = self.config.ngram_size
        if n == 1:
            return words

        # Grouped by start position: unigram first, then the longer n-grams starting there
        tokens = []
        for i in range(len(words)):
            tokens.append(words[i])
            for size in range(2, n + 1):
                if i + size > len(words):
                    break
                tokens.append(NGRAM_SEPARATOR.join(words[i:i + size]))
        return tokens

    def _stem(self, word: str) -> str:
        return self._stemmer.stem(word)

    @staticmethod
    def _prepare(text: str) -> str:
        return text.translate(_APOSTROPHES).lower().strip()

    def _load_stemmer(self):
        """Porter for English (matches the classic dictionary tooling), Snowball otherwise."""
        language = self.config.language.lower()
        if language == "english":
            return PorterStemmer()
        return SnowballStemmer(language)

    def _load_stopwords(self) -> Set[str]:
        """
        Load stopword list (scikit-learn English list + NLTK list for the language).

        Returns:
            Set of stopwords
        """
        stopwords_set: Set[str] = set()
        if self.config.language.lower() == "english":
            stopwords_set.update(ENGLISH_STOP_WORDS)

        try:
            from nltk.corpus import stopwords
            stopwords_set.update(stopwords.words(self.config.language.lower()))
        except (LookupError, OSError):
            logger.warning(
                "NLTK stopwords not downloaded. "
                "Run: python -m nltk.downloader stopwords"
            )

        logger.debug(f"Loaded {len(stopwords_set)} stopwords")
        return stopwords_set

    def __repr__(self) -> str:
        return (
            f"<Tokenizer stemming={self.config.stemming} "
            f"remove_stopwords={self.config.remove_stopwords} "
            f"ngram_size={self.config.ngram_size}>"
        )
