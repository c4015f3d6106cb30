"""
Sentiment Dictionary Management

This package handles loading, holding and accessing the term dictionaries
used for lookup-based sentiment scoring.

Key components:
- constants: Immutable metadata (built-in names, resource files, CSV columns)
- schemas: Pydantic models for the two dictionary cases and the negator list
- store: Singleton registry of built-in dictionaries plus loaders for user
  mappings, CSV files and the Loughran-McDonald master dictionary

Usage:
    from sentiment_analysis.features.dictionaries import DictionaryStore

    store = DictionaryStore.get_instance()
    he = store.get("HE")

    if he.lookup("growth") > 0:
        print("'growth' is a positive word")

    negators = store.negators()
"""

from .constants import (
    BUILTIN_DICTIONARIES,
    HE_DICTIONARY_CITATION,
    LM_DICTIONARY_NAME,
    LM_SOURCE_URL,
)

from .schemas import (
    Polarity,
    GenerationInfo,
    SentimentDictionary,
    BinaryDictionary,
    WeightedDictionary,
    AnyDictionary,
    NegatorList,
    DictionaryComparison,
)

from .store import (
    DictionaryStore,
    load_dictionary,
    from_mapping,
    from_word_lists,
    read_dictionary_csv,
    write_dictionary_csv,
    load_lm_master_dictionary,
    compare_dictionaries,
)

__all__ = [
    # Constants
    "BUILTIN_DICTIONARIES",
    "HE_DICTIONARY_CITATION",
    "LM_DICTIONARY_NAME",
    "LM_SOURCE_URL",
    # Schemas
    "Polarity",
    "GenerationInfo",
    "SentimentDictionary",
    "BinaryDictionary",
    "WeightedDictionary",
    "AnyDictionary",
    "NegatorList",
    "DictionaryComparison",
    # Store
    "DictionaryStore",
    "load_dictionary",
    "from_mapping",
    "from_word_lists",
    "read_dictionary_csv",
    "write_dictionary_csv",
    "load_lm_master_dictionary",
    "compare_dictionaries",
]
