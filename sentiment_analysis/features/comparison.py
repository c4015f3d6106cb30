"""
Response Comparator

Statistical helpers that compare sentiment scores against a gold-standard
response: correlation, error measures, and an agreement summary once both
vectors are discretized into sign classes {positive, negative, neutral}.

Usage:
    from sentiment_analysis.features.comparison import compare_to_response

    result = compare_to_response(table["GENERAL_net_sentiment"], ratings)
    print(result.correlation, result.agreement.accuracy)
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
from pydantic import BaseModel, Field
from sklearn.metrics import accuracy_score, confusion_matrix, precision_recall_fscore_support

from sentiment_analysis.config import settings
from sentiment_analysis.config.features.comparison import ComparisonConfig
from sentiment_analysis.exceptions import DimensionMismatchError, InsufficientDataError, InvalidInputError
from sentiment_analysis.features.dictionaries import Polarity

logger = logging.getLogger(__name__)

DIRECTION_LABELS: Tuple[str, ...] = tuple(p.value for p in Polarity)
"""Class order used in contingency tables: positive, negative, neutral."""

CORRELATION_METHODS = ("pearson", "spearman", "kendall")


class AgreementSummary(BaseModel):
    """
    Contingency-style agreement between generated and gold sign classes.

    contingency[generated][gold] counts documents; per-class precision and
    recall treat the gold classes as truth.
    """
    n: int = Field(..., ge=0)
    contingency: Dict[str, Dict[str, int]]
    accuracy: float = Field(..., ge=0.0, le=1.0)
    precision: Dict[str, float]
    recall: Dict[str, float]
    f1: Dict[str, float]

    def to_dataframe(self) -> pd.DataFrame:
        """Contingency table with generated classes as rows and gold classes as columns."""
        frame = pd.DataFrame(self.contingency).T.loc[list(DIRECTION_LABELS), list(DIRECTION_LABELS)]
        frame.index.name = "generated"
        frame.columns.name = "gold"
        return frame


class ComparisonResult(BaseModel):
    """Comparison of one score vector with the response."""
    name: str = "score"
    n: int = Field(..., ge=0)
    method: str
    correlation: float
    mse: float = Field(..., ge=0.0)
    mae: float = Field(..., ge=0.0)
    agreement: AgreementSummary

    def to_row(self) -> Dict[str, float]:
        return {
            "n": self.n,
            "correlation": self.correlation,
            "mse": self.mse,
            "mae": self.mae,
            "accuracy": self.agreement.accuracy,
        }


def _as_vector(values, what: str) -> np.ndarray:
    try:
        vector = np.asarray(values, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"{what} must be numeric: {e}") from e
    if vector.ndim != 1:
        raise InvalidInputError(f"{what} must be one-dimensional, got shape {vector.shape}")
    return vector


def align(x: Sequence[float], y: Sequence[float], min_pairs: int = 1) -> Tuple[np.ndarray, np.ndarray]:
    """
    Validate two equal-length vectors and drop pairs with a missing value.

    Raises:
        DimensionMismatchError: If the lengths differ
        InsufficientDataError: If fewer than min_pairs complete pairs remain
    """
    x = _as_vector(x, "Scores")
    y = _as_vector(y, "Response")
    if len(x) != len(y):
        raise DimensionMismatchError(expected=len(y), actual=len(x), what="scores and response")

    mask = np.isfinite(x) & np.isfinite(y)
    dropped = int(len(x) - mask.sum())
    if dropped:
        logger.debug(f"Dropped {dropped} pairs with missing values")
    x, y = x[mask], y[mask]

    if len(x) < min_pairs:
        raise InsufficientDataError(required=min_pairs, available=len(x), reason="complete score/response pairs")
    return x, y


def to_direction(values: Sequence[float], neutral_band: float = 0.0) -> List[Polarity]:
    """Discretize values into positive / negative / neutral (|v| <= neutral_band)."""
    return [Polarity.from_value(v, neutral_band) for v in _as_vector(values, "Values")]


def to_binary(values: Sequence[float], threshold: float = 0.0) -> np.ndarray:
    """1 where value > threshold, else 0."""
    return (_as_vector(values, "Values") > threshold).astype(int)


def correlation(x: Sequence[float], y: Sequence[float], method: str = "pearson") -> float:
    """
    Correlation coefficient between two vectors.

    Returns NaN (with a warning) when either vector is constant.

    Raises:
        DimensionMismatchError: If the lengths differ
        InsufficientDataError: If fewer than 2 complete pairs
    """
    if method not in CORRELATION_METHODS:
        raise InvalidInputError(f"Unknown correlation method {method!r}; expected one of {CORRELATION_METHODS}")
    x, y = align(x, y, min_pairs=2)

    if np.all(x == x[0]) or np.all(y == y[0]):
        logger.warning("Correlation undefined for a constant vector; returning NaN")
        return float("nan")

    return float(pd.Series(x).corr(pd.Series(y), method=method))


def agreement(
    generated: Sequence[float],
    gold: Sequence[float],
    neutral_band: float = 0.0,
) -> AgreementSummary:
    """
    Agreement of the sign classes of generated scores and gold responses.

    Raises:
        DimensionMismatchError: If the lengths differ
    """
    x, y = align(generated, gold, min_pairs=1)
    predicted = [p.value for p in to_direction(x, neutral_band)]
    truth = [p.value for p in to_direction(y, neutral_band)]
    labels = list(DIRECTION_LABELS)

    # sklearn puts truth on rows; transpose so generated classes are rows
    matrix = confusion_matrix(truth, predicted, labels=labels).T
    precision, recall, f1, _ = precision_recall_fscore_support(
        truth, predicted, labels=labels, zero_division=0
    )

    return AgreementSummary(
        n=len(x),
        contingency={
            gen: {g: int(matrix[i, j]) for j, g in enumerate(labels)}
            for i, gen in enumerate(labels)
        },
        accuracy=float(accuracy_score(truth, predicted)),
        precision=dict(zip(labels, map(float, precision))),
        recall=dict(zip(labels, map(float, recall))),
        f1=dict(zip(labels, map(float, f1))),
    )


def compare_to_response(
    scores: Sequence[float],
    response: Sequence[float],
    method: Optional[str] = None,
    neutral_band: Optional[float] = None,
    name: str = "score",
    config: Optional[ComparisonConfig] = None,
) -> ComparisonResult:
    """
    Compare one score vector with the gold-standard response.

    Args:
        scores: Generated sentiment scores
        response: Gold-standard response, aligned by index
        method: Correlation method (default from config)
        neutral_band: Neutral band for sign classes (default from config)
        name: Label of the score vector in the result

    Raises:
        DimensionMismatchError: If the lengths differ
        InsufficientDataError: If fewer than 2 complete pairs
    """
    config = config or settings.comparison
    method = method or config.correlation_method
    band = config.neutral_band if neutral_band is None else neutral_band

    x, y = align(scores, response, min_pairs=2)
    residual = x - y

    result = ComparisonResult(
        name=name,
        n=len(x),
        method=method,
        correlation=correlation(x, y, method),
        mse=float(np.mean(residual ** 2)),
        mae=float(np.mean(np.abs(residual))),
        agreement=agreement(x, y, band),
    )
    logger.info(
        f"Compared {name!r} with response over {result.n} documents: "
        f"{method} r={result.correlation:.4f}, accuracy={result.agreement.accuracy:.4f}"
    )
    return result


def compare_table(
    table: pd.DataFrame,
    response: Sequence[float],
    columns: Optional[Sequence[str]] = None,
    method: Optional[str] = None,
    neutral_band: Optional[float] = None,
    config: Optional[ComparisonConfig] = None,
) -> pd.DataFrame:
    """
    Compare several score columns with the same response.

    Args:
        table: Score table (e.g. SentimentAnalyzer.analyze output)
        response: Gold-standard response, one value per table row
        columns: Columns to compare (default: every numeric column except
            word_count)

    Returns:
        DataFrame indexed by column name with n, correlation, mse, mae, accuracy
    """
    if len(table) != len(response):
        raise DimensionMismatchError(expected=len(response), actual=len(table), what="score table and response")

    if columns is None:
        columns = [
            c for c in table.select_dtypes(include="number").columns
            if c != "word_count"
        ]

    rows = {
        column: compare_to_response(
            table[column].to_numpy(dtype=float),
            response,
            method=method,
            neutral_band=neutral_band,
            name=column,
            config=config,
        ).to_row()
        for column in columns
    }
    return pd.DataFrame.from_dict(rows, orient="index")
