"""
Data structures for sentiment dictionaries.

A dictionary is a tagged variant with two cases sharing one lookup
capability:

- BinaryDictionary (kind="binary"): term -> Polarity
- WeightedDictionary (kind="weighted"): term -> real-valued weight

Both expose lookup(term), which returns a signed value (+1/-1/0 for binary
entries, the weight for weighted entries) or None when the term is absent.
The scoring engine only ever calls lookup(), so it never needs to know which
case it holds.
"""

import math
from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import Annotated, Callable, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Polarity(str, Enum):
    """Polarity class of a binary dictionary entry."""
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"

    @property
    def sign(self) -> int:
        return _POLARITY_SIGN[self]

    @classmethod
    def from_value(cls, value: float, neutral_band: float = 0.0) -> "Polarity":
        """Classify a signed value; |value| <= neutral_band is neutral."""
        if value > neutral_band:
            return cls.POSITIVE
        if value < -neutral_band:
            return cls.NEGATIVE
        return cls.NEUTRAL


_POLARITY_SIGN = {
    Polarity.POSITIVE: 1,
    Polarity.NEGATIVE: -1,
    Polarity.NEUTRAL: 0,
}


def _normalize_terms(words: Dict[str, object]) -> Dict[str, object]:
    """Strip and lowercase terms, rejecting empties and duplicates."""
    normalized = {}
    for term, value in words.items():
        key = str(term).strip().lower()
        if not key:
            raise ValueError("Dictionary terms cannot be empty")
        if key in normalized:
            raise ValueError(f"Duplicate dictionary term after normalization: {key!r}")
        normalized[key] = value
    return normalized


class GenerationInfo(BaseModel):
    """
    Provenance of a generated dictionary.

    Records the regularization strength that was selected and the shape of
    the training data, for auditability.
    """
    model_config = ConfigDict(frozen=True)

    alpha: float = Field(..., ge=0, description="Selected regularization strength")
    alpha_min: float = Field(..., ge=0, description="Strength with lowest CV error")
    alpha_1se: float = Field(..., ge=0, description="Largest strength within one SE of the minimum")
    regularization_rule: Literal["min", "one_se"]
    cv_folds: int = Field(..., ge=2)
    cv_error: float = Field(..., description="Mean CV error at the selected strength")
    l1_ratio: float = Field(default=1.0, gt=0, le=1)
    n_documents: int = Field(..., ge=0)
    vocabulary_size: int = Field(..., ge=0)
    n_terms: int = Field(..., ge=0, description="Terms with non-zero coefficient")
    generated_at: datetime = Field(default_factory=datetime.now)


class SentimentDictionary(BaseModel, ABC):
    """
    Common base of both dictionary cases.

    Abstract: only BinaryDictionary and WeightedDictionary are instantiated.
    Instances are frozen; use normalized() to derive a dictionary whose terms
    line up with a particular tokenizer.
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    source: str = Field(default="user", description="Where the dictionary came from")
    description: str = Field(default="")
    stemmed: bool = Field(default=False, description="Terms are already in stemmed form")

    @abstractmethod
    def lookup(self, term: str) -> Optional[float]:
        """Signed value for term, or None if term is not in the dictionary."""

    def polarity(self, term: str) -> Optional[Polarity]:
        """Polarity class for term, or None if absent."""
        value = self.lookup(term)
        return None if value is None else Polarity.from_value(value)

    @property
    def terms(self) -> List[str]:
        return sorted(self.words)

    @property
    def positive_terms(self) -> List[str]:
        return [t for t in self.terms if self.lookup(t) > 0]

    @property
    def negative_terms(self) -> List[str]:
        return [t for t in self.terms if self.lookup(t) < 0]

    def normalized(self, fn: Callable[[str], str], stemmed: bool = False) -> "SentimentDictionary":
        """
        Return a copy with every term mapped through fn.

        When two terms collapse onto the same normalized form (e.g. after
        stemming) the first in sorted order wins. Terms that normalize to an
        empty string are dropped.
        """
        mapped = {}
        for term in self.terms:
            key = fn(term)
            if key and key not in mapped:
                mapped[key] = self.words[term]
        return self.model_copy(update={"words": mapped, "stemmed": self.stemmed or stemmed})

    def summary(self) -> str:
        """Return human-readable summary of the dictionary."""
        return (
            f"{type(self).__name__} {self.name!r} ({self.source})\n"
            f"Total terms: {len(self):,}\n"
            f"Positive: {len(self.positive_terms):,}, "
            f"Negative: {len(self.negative_terms):,}"
        )

    def __contains__(self, term: str) -> bool:
        return self.lookup(term) is not None

    def __len__(self) -> int:
        return len(self.words)


class BinaryDictionary(SentimentDictionary):
    """Dictionary mapping each term to a polarity class."""
    kind: Literal["binary"] = "binary"
    words: Dict[str, Polarity] = Field(
        ...,
        description="Mapping of terms to their polarity class"
    )

    @field_validator('words', mode='before')
    @classmethod
    def normalize_words(cls, v: Dict[str, object]) -> Dict[str, object]:
        return _normalize_terms(v)

    def lookup(self, term: str) -> Optional[float]:
        polarity = self.words.get(term)
        return None if polarity is None else float(polarity.sign)

    def polarity(self, term: str) -> Optional[Polarity]:
        return self.words.get(term)

    def summary(self) -> str:
        neutral = sum(1 for p in self.words.values() if p is Polarity.NEUTRAL)
        return f"{super().summary()}, Neutral: {neutral:,}"


class WeightedDictionary(SentimentDictionary):
    """
    Dictionary mapping each term to a real-valued weight.

    Generated dictionaries keep the fitted intercept for reference only; it
    is never a term and never enters a lookup.
    """
    kind: Literal["weighted"] = "weighted"
    words: Dict[str, float] = Field(
        ...,
        description="Mapping of terms to their weights"
    )
    intercept: float = Field(default=0.0)
    info: Optional[GenerationInfo] = Field(default=None)

    @field_validator('words', mode='before')
    @classmethod
    def normalize_words(cls, v: Dict[str, object]) -> Dict[str, object]:
        return _normalize_terms(v)

    @field_validator('words')
    @classmethod
    def weights_must_be_finite(cls, v: Dict[str, float]) -> Dict[str, float]:
        bad = [t for t, w in v.items() if not math.isfinite(w)]
        if bad:
            raise ValueError(f"Non-finite weights for terms: {bad[:5]}")
        return v

    def lookup(self, term: str) -> Optional[float]:
        return self.words.get(term)

    def summary(self) -> str:
        text = super().summary()
        if self.words:
            weights = list(self.words.values())
            text += (
                f"\nWeights: min {min(weights):.4f}, max {max(weights):.4f}, "
                f"mean {sum(weights) / len(weights):.4f}"
            )
        if self.info is not None:
            text += (
                f"\nGenerated with alpha={self.info.alpha:.6g} "
                f"({self.info.regularization_rule}, {self.info.cv_folds} folds) "
                f"from {self.info.n_documents} documents"
            )
        return text


AnyDictionary = Annotated[
    Union[BinaryDictionary, WeightedDictionary],
    Field(discriminator="kind"),
]
"""Discriminated union used when (de)serializing either dictionary case."""


class NegatorList(BaseModel):
    """Read-only set of terms that invert the polarity of the words after them."""
    model_config = ConfigDict(frozen=True)

    terms: frozenset[str] = Field(default_factory=frozenset)

    @field_validator('terms', mode='before')
    @classmethod
    def normalize_terms(cls, v) -> frozenset:
        return frozenset(str(t).strip().lower() for t in v if str(t).strip())

    def normalized(self, fn: Callable[[str], str]) -> "NegatorList":
        return NegatorList(terms=frozenset(fn(t) for t in self.terms))

    def extended(self, extra) -> "NegatorList":
        return NegatorList(terms=self.terms | frozenset(extra))

    def __contains__(self, term: str) -> bool:
        return term in self.terms

    def __len__(self) -> int:
        return len(self.terms)


class DictionaryComparison(BaseModel):
    """Overlap statistics between two dictionaries."""
    first: str
    second: str
    first_size: int = Field(..., ge=0)
    second_size: int = Field(..., ge=0)
    shared_terms: int = Field(..., ge=0)
    only_in_first: int = Field(..., ge=0)
    only_in_second: int = Field(..., ge=0)
    matching_sign: int = Field(..., ge=0, description="Shared terms with the same sign")
    conflicting_sign: int = Field(..., ge=0, description="Shared terms with opposite signs")
    conflicts: List[str] = Field(default_factory=list)

    @property
    def overlap_ratio(self) -> float:
        """Shared terms relative to the smaller dictionary."""
        smaller = min(self.first_size, self.second_size)
        return self.shared_terms / smaller if smaller > 0 else 0.0
