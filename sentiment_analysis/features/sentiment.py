"""
Sentiment Scoring Engine

This module scores documents against one or more sentiment dictionaries.

The analyzer:
1. Tokenizes text into normalized words
2. Matches words against each dictionary, inverting the polarity of words
   that fall inside a negation window
3. Computes counts, ratios and a net sentiment score per dictionary
4. Returns one DocumentScore per dictionary, or a table for a whole corpus

Usage:
    from sentiment_analysis.features import SentimentAnalyzer

    analyzer = SentimentAnalyzer(dictionaries=["GENERAL"])
    table = analyzer.analyze(["good great", "bad terrible", "not good"])

    print(table["GENERAL_net_sentiment"])
"""

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Union

import numpy as np
import pandas as pd

from sentiment_analysis.config import settings
from sentiment_analysis.config.features.sentiment import SentimentConfig
from sentiment_analysis.exceptions import InvalidInputError
from sentiment_analysis.features.dictionaries import (
    DictionaryStore,
    NegatorList,
    SentimentDictionary,
    load_dictionary,
)
from sentiment_analysis.features.dictionaries.store import DictionarySpec
from sentiment_analysis.features.tokenizer import NGRAM_SEPARATOR, Tokenizer
from sentiment_analysis.utils.parallel import ParallelProcessor, chunk

logger = logging.getLogger(__name__)

WORD_COUNT_COLUMN = "word_count"

SCORE_METRICS = (
    "positive_count",
    "negative_count",
    "neutral_count",
    "weighted_sum",
    "net_sentiment",
    "positivity",
    "negativity",
    "polarity",
    "weighted_score",
)
"""Per-dictionary columns of the score table, in output order."""


def _ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator else 0.0


@dataclass(frozen=True)
class DocumentScore:
    """
    Sentiment of one document under one dictionary.

    Ratios are defined as 0.0 whenever their denominator is zero, so an empty
    document scores 0 everywhere rather than NaN.
    """
    dictionary: str
    word_count: int

    # Raw counts
    positive_count: int = 0
    negative_count: int = 0
    neutral_count: int = 0
    weighted_sum: float = 0.0

    @property
    def net_sentiment(self) -> float:
        """(positive - negative) / total words."""
        return _ratio(self.positive_count - self.negative_count, self.word_count)

    @property
    def positivity(self) -> float:
        return _ratio(self.positive_count, self.word_count)

    @property
    def negativity(self) -> float:
        return _ratio(self.negative_count, self.word_count)

    @property
    def polarity(self) -> float:
        """(positive - negative) / (positive + negative)."""
        return _ratio(
            self.positive_count - self.negative_count,
            self.positive_count + self.negative_count,
        )

    @property
    def weighted_score(self) -> float:
        """Sum of matched weights / total words."""
        return _ratio(self.weighted_sum, self.word_count)

    def metrics(self, precision: Optional[int] = None) -> Dict[str, float]:
        """All counts and ratios, ratios optionally rounded."""
        values = {metric: getattr(self, metric) for metric in SCORE_METRICS}
        if precision is not None:
            values = {
                k: round(v, precision) if isinstance(v, float) else v
                for k, v in values.items()
            }
        return values

    def to_dict(self) -> Dict:
        """Convert to dictionary (raw fields plus derived ratios)."""
        data = asdict(self)
        data.update(self.metrics())
        return data

    def save_to_json(self, output_path: Path) -> None:
        """
        Save score to JSON file.

        Args:
            output_path: Path to output JSON file
        """
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved document score to {output_path}")

    @classmethod
    def load_from_json(cls, input_path: Path) -> 'DocumentScore':
        """
        Load score from JSON file (derived ratios are recomputed).

        Args:
            input_path: Path to input JSON file
        """
        with open(input_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return cls(
            dictionary=data["dictionary"],
            word_count=data["word_count"],
            positive_count=data["positive_count"],
            negative_count=data["negative_count"],
            neutral_count=data["neutral_count"],
            weighted_sum=data["weighted_sum"],
        )


def score_tokens(
    tokens: Sequence[str],
    dictionary: SentimentDictionary,
    negators: Union[NegatorList, Iterable[str]] = (),
    negation_window: int = 1,
) -> DocumentScore:
    """
    Score one token sequence against one dictionary.

    A negator opens a window over the next ``negation_window`` words: matched
    terms inside it count with inverted sign (neutral stays neutral). The
    negator itself is never scored, and a negator inside an open window
    restarts it rather than cancelling it. N-gram tokens share the position
    of the unigram that precedes them.

    Args:
        tokens: Normalized tokens (as produced by Tokenizer)
        dictionary: Dictionary whose terms match the tokenizer output
        negators: Normalized negator terms
        negation_window: Words affected after each negator (0 disables)

    Returns:
        DocumentScore with word_count == len(tokens)
    """
    if negation_window < 0:
        raise InvalidInputError(f"negation_window must be >= 0, got {negation_window}")

    positive = negative = neutral = 0
    weighted_sum = 0.0
    remaining = 0
    negated = False

    for token in tokens:
        if NGRAM_SEPARATOR not in token:
            if token in negators:
                remaining = negation_window
                negated = False
                continue
            negated = remaining > 0
            if remaining:
                remaining -= 1

        value = dictionary.lookup(token)
        if value is None:
            continue
        if negated:
            value = -value

        if value > 0:
            positive += 1
        elif value < 0:
            negative += 1
        else:
            neutral += 1
        weighted_sum += value

    return DocumentScore(
        dictionary=dictionary.name,
        word_count=len(tokens),
        positive_count=positive,
        negative_count=negative,
        neutral_count=neutral,
        weighted_sum=weighted_sum,
    )


def _score_batch(args) -> List[Dict[str, DocumentScore]]:
    """Worker entry point: score a batch of documents with a pickled analyzer."""
    analyzer, documents = args
    return [analyzer.score_document(doc) for doc in documents]


class SentimentAnalyzer:
    """
    Lookup-based sentiment scorer.

    This class:
    1. Loads configuration from settings
    2. Resolves dictionaries (built-in names, dictionary objects or mappings)
       and aligns their terms with the tokenizer (stemming)
    3. Tokenizes text
    4. Scores each document against every dictionary independently

    The analyzer holds only read-only state, so one instance can score any
    number of corpora, from any number of threads.

    Usage:
        analyzer = SentimentAnalyzer(dictionaries=["HE", {"superb": 1.5}])
        scores = analyzer.score_document(text)
        table = analyzer.analyze(texts)
    """

    def __init__(
        self,
        dictionaries: Optional[Union[DictionarySpec, Sequence[DictionarySpec]]] = None,
        config: Optional[SentimentConfig] = None,
        tokenizer: Optional[Tokenizer] = None,
        negators: Optional[Union[NegatorList, Iterable[str]]] = None,
    ):
        """
        Initialize sentiment analyzer.

        Args:
            dictionaries: One or more dictionary specs. If None, uses
                config.default_dictionaries.
            config: Optional SentimentConfig object. If None, loads from settings.
            tokenizer: Optional Tokenizer. If None, built from config.text_processing.
            negators: Negator terms. If None, uses the store's built-in list.
        """
        self.config = config or settings.sentiment

        if negators is None:
            negators = DictionaryStore.get_instance().negators()
        elif not isinstance(negators, NegatorList):
            negators = NegatorList(terms=negators)
        negators = negators.extended(self.config.negation.extra_negators)

        self.tokenizer = tokenizer or Tokenizer(
            self.config.text_processing, keep_terms=negators.terms
        )
        self.negators = negators.normalized(self.tokenizer.normalize_term)
        self.negation_window = self.config.negation.window

        if dictionaries is None:
            dictionaries = self.config.default_dictionaries
        if isinstance(dictionaries, (str, SentimentDictionary, Mapping)):
            dictionaries = [dictionaries]

        self.dictionaries: List[SentimentDictionary] = [
            self._prepare_dictionary(load_dictionary(spec, name=f"CUSTOM{i + 1}" if i else "CUSTOM"))
            for i, spec in enumerate(dictionaries)
        ]
        if not self.dictionaries:
            raise InvalidInputError("At least one dictionary is required")

        names = [d.name for d in self.dictionaries]
        duplicates = {n for n in names if names.count(n) > 1}
        if duplicates:
            raise InvalidInputError(f"Dictionary names must be unique, got duplicates: {duplicates}")

        logger.info(
            f"Initialized SentimentAnalyzer with dictionaries: {names} "
            f"(negation window {self.negation_window})"
        )

    def _prepare_dictionary(self, dictionary: SentimentDictionary) -> SentimentDictionary:
        """Map dictionary terms onto the tokenizer's normalized form."""
        if dictionary.stemmed:
            if not self.tokenizer.stems:
                logger.warning(
                    f"Dictionary {dictionary.name!r} holds stemmed terms but stemming is off; "
                    f"matches will be incomplete"
                )
            return dictionary
        return dictionary.normalized(self.tokenizer.normalize_term, stemmed=self.tokenizer.stems)

    @property
    def dictionary_names(self) -> List[str]:
        return [d.name for d in self.dictionaries]

    def tokenize(self, text) -> List[str]:
        """Tokenize text with the analyzer's tokenizer (empty input -> [])."""
        return self.tokenizer.tokenize(text)

    def score_tokens(self, tokens: Sequence[str]) -> Dict[str, DocumentScore]:
        """Score an already-normalized token sequence against every dictionary."""
        return {
            d.name: score_tokens(tokens, d, self.negators, self.negation_window)
            for d in self.dictionaries
        }

    def score_document(self, document) -> Dict[str, DocumentScore]:
        """
        Score one document.

        Args:
            document: Raw text or a pre-tokenized sequence of strings

        Returns:
            Mapping of dictionary name to DocumentScore
        """
        return self.score_tokens(self.tokenize(document))

    def score_corpus(self, corpus: Sequence) -> List[Dict[str, DocumentScore]]:
        """
        Score every document, preserving input order.

        Uses settings.sentiment.processing.parallel_workers worker processes
        when greater than 1.
        """
        corpus = list(corpus)
        workers = self.config.processing.parallel_workers
        if workers <= 1 or len(corpus) <= 1:
            return [self.score_document(doc) for doc in corpus]

        batches = chunk(corpus, self.config.processing.batch_size)
        processor = ParallelProcessor(max_workers=workers)
        results = processor.map_ordered(_score_batch, [(self, batch) for batch in batches])
        return [scores for batch in results for scores in batch]

    def analyze(self, corpus: Sequence) -> pd.DataFrame:
        """
        Score a corpus into a table.

        Args:
            corpus: List of documents (texts or token lists)

        Returns:
            DataFrame with one row per document (input order) and columns
            ``word_count`` plus ``{NAME}_{metric}`` for every dictionary and
            metric, and ``{NAME}_net_sentiment_std`` (corpus z-score of the
            net sentiment, 0 when it does not vary).
        """
        scored = self.score_corpus(corpus)
        precision = self.config.output.precision

        rows = []
        for scores in scored:
            first = next(iter(scores.values()))
            row = {WORD_COUNT_COLUMN: first.word_count}
            for name, score in scores.items():
                for metric, value in score.metrics(precision).items():
                    row[f"{name}_{metric}"] = value
            rows.append(row)

        columns = [WORD_COUNT_COLUMN] + [
            f"{name}_{metric}" for name in self.dictionary_names for metric in SCORE_METRICS
        ]
        table = pd.DataFrame(rows, columns=columns)

        for name in self.dictionary_names:
            table[f"{name}_net_sentiment_std"] = _standardize(
                table[f"{name}_net_sentiment"].to_numpy(dtype=float), precision
            )

        logger.info(f"Scored {len(table)} documents against {len(self.dictionaries)} dictionaries")
        return table

    def __repr__(self) -> str:
        return f"<SentimentAnalyzer dictionaries={self.dictionary_names} window={self.negation_window}>"


def _standardize(values: np.ndarray, precision: Optional[int] = None) -> np.ndarray:
    """Z-score with sample standard deviation; all zeros when undefined."""
    if len(values) < 2:
        return np.zeros(len(values))
    std = values.std(ddof=1)
    if std == 0 or not np.isfinite(std):
        return np.zeros(len(values))
    z = (values - values.mean()) / std
    return np.round(z, precision) if precision is not None else z
