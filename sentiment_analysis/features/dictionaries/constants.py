"""
Immutable constants for the sentiment dictionaries.

This module contains version-controlled metadata that defines the packaged
dictionaries. These values should NEVER change at runtime - they define WHAT
the dictionaries ARE.

For runtime configuration (HOW to use the dictionaries), see
configs/features/sentiment.yaml
"""

from typing import Final

# ===========================
# Built-in Dictionaries
# ===========================

BUILTIN_DICTIONARIES: Final[dict[str, str]] = {
    "HE": "HE.csv",
    "GENERAL": "GENERAL.csv",
}
"""Registry name -> packaged resource file (binary `term,polarity` CSV)."""

HE_DICTIONARY_CITATION: Final[str] = (
    "Henry, E. (2008). Are Investors Influenced By How Earnings Press Releases "
    "Are Written? Journal of Business Communication, 45(4), 363-407."
)

BUILTIN_DESCRIPTIONS: Final[dict[str, str]] = {
    "HE": f"Finance-specific tone word list from {HE_DICTIONARY_CITATION}",
    "GENERAL": (
        "Small demo lexicon of common English opinion words, curated for this "
        "package (not a published word list)"
    ),
}
"""Registry name -> description (shown by the list-dictionaries command)."""

NEGATORS_FILENAME: Final[str] = "negators.txt"
"""Packaged negator list, one term per line."""

DATA_PACKAGE: Final[str] = "sentiment_analysis.features.dictionaries.data"
"""Package holding the resource files."""

# ===========================
# CSV Schema Definition
# ===========================

TERM_COLUMN: Final[str] = "term"
WEIGHT_COLUMN: Final[str] = "weight"
POLARITY_COLUMN: Final[str] = "polarity"
STEMMED_COLUMN: Final[str] = "stemmed"
"""Optional third column, present only when the terms are already stemmed."""

# ===========================
# Loughran-McDonald Master Dictionary
# ===========================

LM_DICTIONARY_NAME: Final[str] = "LM"

LM_REQUIRED_COLUMNS: Final[frozenset[str]] = frozenset([
    "Word",
    "Negative",
    "Positive",
])
"""Minimum required columns for a valid LM dictionary CSV."""

LM_SOURCE_URL: Final[str] = "https://sraf.nd.edu/loughranmcdonald-master-dictionary/"
"""Official source URL for the LM dictionary."""
