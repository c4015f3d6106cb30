"""
Dictionary Store

This module manages loading and accessing sentiment dictionaries.
Uses singleton pattern so the built-in dictionaries are loaded only once per
process and then shared read-only between all analyzers (and threads).

The store handles:
1. Loading the packaged built-in dictionaries on first access
2. Resolving dictionaries by name (UnknownDictionaryError otherwise)
3. Holding the shared negator list

Module-level loaders build dictionaries from user mappings, word lists,
two-column CSV files and the Loughran-McDonald master dictionary. They never
touch the registry.
"""

import csv
import logging
import math
import numbers
import time
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Union

import pandas as pd

from sentiment_analysis.exceptions import InvalidInputError, UnknownDictionaryError

from .constants import (
    BUILTIN_DESCRIPTIONS,
    BUILTIN_DICTIONARIES,
    LM_DICTIONARY_NAME,
    LM_REQUIRED_COLUMNS,
    LM_SOURCE_URL,
    POLARITY_COLUMN,
    STEMMED_COLUMN,
    TERM_COLUMN,
    WEIGHT_COLUMN,
)
from .resources import load_default_negators, read_resource_csv
from .schemas import (
    BinaryDictionary,
    DictionaryComparison,
    NegatorList,
    Polarity,
    SentimentDictionary,
    WeightedDictionary,
)

logger = logging.getLogger(__name__)

DictionarySpec = Union[str, SentimentDictionary, Mapping[str, object]]


class DictionaryStore:
    """
    Singleton registry of built-in dictionaries.

    The registry is populated once, on first access, and is read-only
    afterwards: get() hands out the frozen dictionary objects themselves.

    Usage:
        store = DictionaryStore.get_instance()
        he = store.get("HE")
        he.lookup("growth")  # -> 1.0
    """

    _instance: Optional['DictionaryStore'] = None

    def __init__(self):
        self._dictionaries: Optional[Dict[str, SentimentDictionary]] = None
        self._negators: Optional[NegatorList] = None

    @classmethod
    def get_instance(cls) -> 'DictionaryStore':
        """
        Get singleton instance of the store.

        Returns:
            Singleton instance of DictionaryStore
        """
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls):
        """Reset singleton instance (useful for testing)."""
        cls._instance = None

    def _load_builtins(self) -> Dict[str, SentimentDictionary]:
        """Load every packaged dictionary (called once)."""
        start_time = time.time()
        loaded = {}
        for name, filename in BUILTIN_DICTIONARIES.items():
            frame = read_resource_csv(filename)
            loaded[name] = _binary_from_frame(
                frame,
                name=name,
                source=f"builtin:{filename}",
                description=BUILTIN_DESCRIPTIONS.get(name, ""),
            )

        logger.info(
            f"Loaded {len(loaded)} built-in dictionaries in {time.time() - start_time:.3f}s: "
            + ", ".join(f"{n} ({len(d)} terms)" for n, d in loaded.items())
        )
        return loaded

    @property
    def dictionaries(self) -> Dict[str, SentimentDictionary]:
        if self._dictionaries is None:
            self._dictionaries = self._load_builtins()
        return self._dictionaries

    def available(self) -> List[str]:
        """Names of all registered dictionaries."""
        return sorted(self.dictionaries)

    def get(self, name: str) -> SentimentDictionary:
        """
        Resolve a built-in dictionary by name (case-insensitive).

        Raises:
            UnknownDictionaryError: If no dictionary is registered under name
        """
        key = name.strip().upper()
        try:
            return self.dictionaries[key]
        except KeyError:
            raise UnknownDictionaryError(name, self.available()) from None

    def negators(self) -> NegatorList:
        """Shared negator list."""
        if self._negators is None:
            self._negators = NegatorList(terms=load_default_negators())
        return self._negators

    def __contains__(self, name: str) -> bool:
        return name.strip().upper() in self.dictionaries

    def __repr__(self) -> str:
        if self._dictionaries is None:
            return "<DictionaryStore (not loaded)>"
        return f"<DictionaryStore ({', '.join(self.available())})>"


# ===========================
# Loaders
# ===========================

def load_dictionary(spec: DictionarySpec, name: Optional[str] = None) -> SentimentDictionary:
    """
    Resolve anything that describes a dictionary.

    Args:
        spec: A dictionary object (returned as is), a registered name, or a
            term mapping (see from_mapping)
        name: Name for a mapping-based dictionary

    Raises:
        UnknownDictionaryError: If spec is an unregistered name
        InvalidInputError: If spec is a malformed mapping
    """
    if isinstance(spec, SentimentDictionary):
        return spec
    if isinstance(spec, str):
        return DictionaryStore.get_instance().get(spec)
    if isinstance(spec, Mapping):
        return from_mapping(spec, name=name or "CUSTOM")
    raise InvalidInputError(f"Cannot build a dictionary from {type(spec).__name__}")


def from_mapping(mapping: Mapping[str, object], name: str = "CUSTOM", source: str = "user") -> SentimentDictionary:
    """
    Build a dictionary from a user-supplied term mapping.

    Polarity (or polarity-string) values give a BinaryDictionary, numeric
    values give a WeightedDictionary.

    Raises:
        InvalidInputError: On an empty mapping, mixed value kinds or
            unrecognised values
    """
    if not mapping:
        raise InvalidInputError(f"Dictionary {name!r} has no terms")

    values = list(mapping.values())
    numeric = [isinstance(v, numbers.Real) and not isinstance(v, bool) for v in values]

    try:
        if all(numeric):
            return WeightedDictionary(
                name=name, source=source, words={t: float(w) for t, w in mapping.items()}
            )
        if not any(numeric):
            return BinaryDictionary(
                name=name, source=source, words={t: _to_polarity(p) for t, p in mapping.items()}
            )
    except ValueError as e:
        # pydantic.ValidationError is a ValueError
        raise InvalidInputError(f"Invalid dictionary {name!r}: {e}") from e

    raise InvalidInputError(
        f"Dictionary {name!r} mixes numeric weights and polarity classes"
    )


def from_word_lists(
    positive: Iterable[str],
    negative: Iterable[str],
    neutral: Iterable[str] = (),
    name: str = "CUSTOM",
) -> BinaryDictionary:
    """Build a binary dictionary from plain positive/negative/neutral word lists."""
    words: Dict[str, Polarity] = {}
    for terms, polarity in (
        (positive, Polarity.POSITIVE),
        (negative, Polarity.NEGATIVE),
        (neutral, Polarity.NEUTRAL),
    ):
        for term in terms:
            key = term.strip().lower()
            if key in words and words[key] is not polarity:
                raise InvalidInputError(f"Term {key!r} listed as both {words[key].value} and {polarity.value}")
            words[key] = polarity
    return from_mapping(words, name=name)


def read_dictionary_csv(
    path: Union[str, Path],
    name: Optional[str] = None,
    stemmed: Optional[bool] = None,
) -> SentimentDictionary:
    """
    Read a two-column dictionary CSV.

    The header decides the case: ``term,weight`` gives a WeightedDictionary,
    ``term,polarity`` a BinaryDictionary. A ``stemmed`` column, as written by
    write_dictionary_csv for stemmed dictionaries, marks the terms as
    already stemmed so they are not stemmed a second time when scoring.

    Args:
        path: CSV file
        name: Dictionary name (default: upper-cased file stem)
        stemmed: Override the stemmed flag read from the file

    Raises:
        FileNotFoundError: If path doesn't exist
        InvalidInputError: If the columns are not recognised or a weight is
            not a number
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Dictionary file not found: {path}")

    frame = pd.read_csv(path, keep_default_na=False)
    name = name or path.stem.upper()

    if TERM_COLUMN in frame.columns and WEIGHT_COLUMN in frame.columns:
        try:
            weights = frame[WEIGHT_COLUMN].astype(float)
        except (TypeError, ValueError) as e:
            raise InvalidInputError(f"{path}: non-numeric value in '{WEIGHT_COLUMN}' column: {e}") from e
        words = dict(zip(frame[TERM_COLUMN].astype(str), weights))
        dictionary = from_mapping(words, name=name, source=str(path))
    elif TERM_COLUMN in frame.columns and POLARITY_COLUMN in frame.columns:
        dictionary = _binary_from_frame(frame, name=name, source=str(path))
    else:
        raise InvalidInputError(
            f"{path} must have columns '{TERM_COLUMN},{WEIGHT_COLUMN}' "
            f"or '{TERM_COLUMN},{POLARITY_COLUMN}', got {list(frame.columns)}"
        )

    if stemmed is None:
        stemmed = STEMMED_COLUMN in frame.columns and bool(
            frame[STEMMED_COLUMN].astype(str).str.strip().str.lower().isin(["true", "1", "yes"]).all()
        )
    if stemmed:
        dictionary = dictionary.model_copy(update={"stemmed": True})

    logger.info(
        f"Loaded dictionary {dictionary.name!r} from {path}: {len(dictionary)} terms"
        + (" (stemmed)" if dictionary.stemmed else "")
    )
    return dictionary


def write_dictionary_csv(dictionary: SentimentDictionary, path: Union[str, Path]) -> Path:
    """
    Write a dictionary as a two-column CSV (sorted by term).

    Weighted dictionaries are written as ``term,weight``; binary ones as
    ``term,polarity``. Stemmed dictionaries get a third ``stemmed`` column
    so read_dictionary_csv restores the flag.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if isinstance(dictionary, WeightedDictionary):
        header = [TERM_COLUMN, WEIGHT_COLUMN]
        rows = [[t, repr(dictionary.words[t])] for t in dictionary.terms]
    else:
        header = [TERM_COLUMN, POLARITY_COLUMN]
        rows = [[t, dictionary.words[t].value] for t in dictionary.terms]

    if dictionary.stemmed:
        header.append(STEMMED_COLUMN)
        rows = [row + ["true"] for row in rows]

    with open(path, 'w', encoding='utf-8', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(header)
        writer.writerows(rows)

    logger.info(f"Saved dictionary {dictionary.name!r} ({len(dictionary)} terms) to {path}")
    return path


def load_lm_master_dictionary(csv_path: Optional[Union[str, Path]] = None) -> BinaryDictionary:
    """
    Load the Loughran-McDonald Master Dictionary CSV as a binary dictionary.

    Only the Positive and Negative categories are used; words flagged in both
    are dropped, words flagged in neither are skipped.

    Args:
        csv_path: Path to the CSV. If None, uses settings.paths.lm_dictionary_csv

    Raises:
        FileNotFoundError: If CSV doesn't exist
        InvalidInputError: If required columns missing
    """
    if csv_path is None:
        # Import here to avoid circular dependency
        from sentiment_analysis.config import settings
        csv_path = settings.paths.lm_dictionary_csv
    csv_path = Path(csv_path)

    if not csv_path.exists():
        raise FileNotFoundError(
            f"LM dictionary CSV not found at {csv_path}. "
            f"Please download it from {LM_SOURCE_URL}"
        )

    logger.info(f"Loading LM dictionary from {csv_path}")
    df = pd.read_csv(csv_path, encoding='latin1', keep_default_na=False)  # LM dict uses latin1 encoding

    missing = LM_REQUIRED_COLUMNS - set(df.columns)
    if missing:
        raise InvalidInputError(f"Missing required columns: {missing}")

    words: Dict[str, Polarity] = {}
    for word, neg, pos in zip(df["Word"], df["Negative"], df["Positive"]):
        term = str(word).strip().lower()
        is_neg, is_pos = _flag(neg), _flag(pos)
        if not term or is_neg == is_pos:
            continue
        words[term] = Polarity.NEGATIVE if is_neg else Polarity.POSITIVE

    dictionary = BinaryDictionary(
        name=LM_DICTIONARY_NAME,
        source=str(csv_path),
        description="Loughran-McDonald Master Dictionary (positive/negative)",
        words=words,
    )
    logger.info(f"Mapped {len(dictionary)} LM words to polarity classes")
    return dictionary


def compare_dictionaries(first: SentimentDictionary, second: SentimentDictionary) -> DictionaryComparison:
    """Overlap between two dictionaries, including sign agreement on shared terms."""
    first_terms, second_terms = set(first.words), set(second.words)
    shared = sorted(first_terms & second_terms)

    conflicts = [
        t for t in shared
        if Polarity.from_value(first.lookup(t)).sign * Polarity.from_value(second.lookup(t)).sign < 0
    ]
    matching = [
        t for t in shared
        if Polarity.from_value(first.lookup(t)) is Polarity.from_value(second.lookup(t))
    ]

    return DictionaryComparison(
        first=first.name,
        second=second.name,
        first_size=len(first_terms),
        second_size=len(second_terms),
        shared_terms=len(shared),
        only_in_first=len(first_terms - second_terms),
        only_in_second=len(second_terms - first_terms),
        matching_sign=len(matching),
        conflicting_sign=len(conflicts),
        conflicts=conflicts,
    )


# ===========================
# Helpers
# ===========================

def _to_polarity(value) -> Polarity:
    if isinstance(value, Polarity):
        return value
    try:
        return Polarity(str(value).strip().lower())
    except ValueError:
        raise InvalidInputError(
            f"Unknown polarity {value!r}; expected one of {[p.value for p in Polarity]}"
        ) from None


def _binary_from_frame(frame: pd.DataFrame, name: str, source: str, description: str = "") -> BinaryDictionary:
    words = {
        str(term): _to_polarity(polarity)
        for term, polarity in zip(frame[TERM_COLUMN], frame[POLARITY_COLUMN])
    }
    return BinaryDictionary(name=name, source=source, description=description, words=words)


def _flag(value) -> bool:
    """LM category columns hold 0, the year a word was added, or minus the year it was removed."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return False
    return not math.isnan(number) and number > 0
