"""
Dictionary Generator

Derives a weighted sentiment dictionary from a corpus and a known response
variable (e.g. stock returns, review ratings).

The generator:
1. Tokenizes every document with the shared Tokenizer
2. Builds a term-document matrix, dropping terms below min_doc_freq
3. Fits an L1-regularized linear model of the response on the matrix
   columns, choosing the strength by cross-validation
4. Keeps the terms with non-zero coefficients as the dictionary weights
   (the intercept is stored for reference, never as a term)

Usage:
    from sentiment_analysis.features.generation import DictionaryGenerator

    generator = DictionaryGenerator()
    dictionary = generator.generate(texts, returns, name="RETURNS")
    print(dictionary.summary())
"""

import logging
import math
from collections import Counter
from typing import Optional, Sequence

import numpy as np

from sentiment_analysis.config import settings
from sentiment_analysis.config.features.generation import GenerationConfig
from sentiment_analysis.exceptions import (
    DimensionMismatchError,
    InsufficientDataError,
    InvalidInputError,
)
from sentiment_analysis.features.dictionaries import GenerationInfo, WeightedDictionary
from sentiment_analysis.features.tokenizer import Tokenizer
from sentiment_analysis.utils.parallel import ParallelProcessor

from .matrix import TermDocumentMatrix
from .solver import CrossValidatedLasso, RegressionSolver

logger = logging.getLogger(__name__)


class DictionaryGenerator:
    """
    LASSO-based dictionary generator.

    Holds only configuration and collaborators; every generate() call builds
    and discards its own term-document matrix.

    Usage:
        generator = DictionaryGenerator(solver=MySolver())
        dictionary = generator.generate(corpus, response)
    """

    def __init__(
        self,
        config: Optional[GenerationConfig] = None,
        tokenizer: Optional[Tokenizer] = None,
        solver: Optional[RegressionSolver] = None,
        random_state: Optional[int] = None,
    ):
        """
        Initialize dictionary generator.

        Args:
            config: Optional GenerationConfig. If None, loads from settings.
            tokenizer: Optional Tokenizer. If None, built from settings.
            solver: Optional RegressionSolver. If None, CrossValidatedLasso
                configured from config.
            random_state: Seed for fold shuffling. If None, uses
                settings.reproducibility.random_seed.
        """
        self.config = config or settings.generation
        self.tokenizer = tokenizer or Tokenizer()
        if random_state is None:
            random_state = settings.reproducibility.random_seed
        self.solver = solver or CrossValidatedLasso.from_config(self.config, random_state=random_state)

        logger.info(
            f"Initialized DictionaryGenerator (min_doc_freq={self.config.min_doc_freq}, "
            f"cv_folds={self.config.cv_folds}, rule={self.config.regularization_rule}, "
            f"l1_ratio={self.config.l1_ratio})"
        )

    def build_matrix(self, corpus: Sequence) -> TermDocumentMatrix:
        """Tokenize the corpus and build its term-document matrix."""
        token_lists = self.tokenizer.tokenize_corpus(corpus)
        processor = ParallelProcessor(max_workers=self.config.parallel_workers)
        return TermDocumentMatrix.from_token_lists(
            token_lists,
            min_doc_freq=self.config.min_doc_freq,
            weighting=self.config.weighting,
            partition_size=self.config.partition_size,
            processor=processor,
        )

    def generate(
        self,
        corpus: Sequence,
        response: Sequence[float],
        name: str = "GENERATED",
    ) -> WeightedDictionary:
        """
        Generate a weighted dictionary.

        Args:
            corpus: Training documents (texts or token lists)
            response: Numeric response aligned with corpus by index
            name: Name of the generated dictionary

        Returns:
            WeightedDictionary of the terms with non-zero coefficients

        Raises:
            DimensionMismatchError: If corpus is empty or lengths differ
            InvalidInputError: If response is not a finite numeric vector
            InsufficientDataError: If there are fewer documents than folds, or
                no term survives the document-frequency cutoff
        """
        corpus = list(corpus)
        y = self._validate_response(response)

        if not corpus:
            raise DimensionMismatchError(
                expected=len(y), actual=0, message="Cannot generate a dictionary from an empty corpus"
            )
        if len(corpus) != len(y):
            raise DimensionMismatchError(expected=len(corpus), actual=len(y), what="corpus and response")

        folds = self.config.cv_folds
        if len(corpus) < folds:
            raise InsufficientDataError(
                required=folds,
                available=len(corpus),
                reason=f"{folds}-fold cross-validation needs at least {folds} documents",
            )

        tdm = self.build_matrix(corpus)
        if tdm.n_terms == 0:
            raise InsufficientDataError(
                required=self.config.min_doc_freq,
                available=0,
                reason=f"no term appears in at least min_doc_freq={self.config.min_doc_freq} documents",
            )

        logger.info(f"Fitting {tdm.n_documents} documents x {tdm.n_terms} terms")
        result = self.solver.fit(tdm.matrix, y, folds, self.config.regularization_rule)

        tolerance = self.config.zero_tolerance
        words = {
            term: float(coef)
            for term, coef in zip(tdm.vocabulary, result.coefficients)
            if abs(coef) > tolerance
        }
        if not words:
            logger.warning(
                f"No term kept a non-zero coefficient at alpha={result.alpha:.6g}; "
                f"generated dictionary {name!r} is empty"
            )

        info = GenerationInfo(
            alpha=result.alpha,
            alpha_min=result.alpha_min,
            alpha_1se=result.alpha_1se,
            regularization_rule=self.config.regularization_rule,
            cv_folds=folds,
            cv_error=result.cv_error if math.isfinite(result.cv_error) else 0.0,
            l1_ratio=self.config.l1_ratio,
            n_documents=tdm.n_documents,
            vocabulary_size=tdm.n_terms,
            n_terms=len(words),
        )
        dictionary = WeightedDictionary(
            name=name,
            source="generated",
            description=f"LASSO dictionary ({self.config.regularization_rule}, {folds} folds)",
            stemmed=self.tokenizer.stems,
            words=words,
            intercept=result.intercept,
            info=info,
        )
        logger.info(
            f"Generated dictionary {name!r}: {len(words)} of {tdm.n_terms} terms retained"
        )
        return dictionary

    def predict(
        self,
        dictionary: WeightedDictionary,
        corpus: Sequence,
        include_intercept: bool = True,
    ) -> np.ndarray:
        """
        Fitted response for each document: intercept + sum(weight * x_term).

        x_term follows the configured weighting (frequency or presence), the
        same representation the dictionary was fitted on.
        """
        if not dictionary.stemmed and self.tokenizer.stems:
            dictionary = dictionary.normalized(self.tokenizer.normalize_term, stemmed=True)

        intercept = dictionary.intercept if include_intercept else 0.0
        predictions = []
        for tokens in self.tokenizer.tokenize_corpus(list(corpus)):
            counts = Counter(tokens)
            total = intercept
            for term, count in counts.items():
                weight = dictionary.lookup(term)
                if weight is not None:
                    total += weight * (1 if self.config.weighting == "presence" else count)
            predictions.append(total)
        return np.asarray(predictions, dtype=float)

    @staticmethod
    def _validate_response(response: Sequence[float]) -> np.ndarray:
        try:
            y = np.asarray(response, dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise InvalidInputError(f"Response must be numeric: {e}") from e
        if y.ndim != 1:
            raise InvalidInputError(f"Response must be one-dimensional, got shape {y.shape}")
        if not np.all(np.isfinite(y)):
            raise InvalidInputError("Response contains NaN or infinite values")
        return y
