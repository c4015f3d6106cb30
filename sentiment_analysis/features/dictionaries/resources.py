"""
Access to the resource files packaged with the dictionaries.

The built-in dictionaries and the negator list ship inside the
``sentiment_analysis.features.dictionaries.data`` package and are read with
importlib.resources, so they resolve the same way from a source checkout and
from an installed wheel.
"""

import logging
from functools import lru_cache
from importlib import resources
from typing import FrozenSet

import pandas as pd

from .constants import DATA_PACKAGE, NEGATORS_FILENAME

logger = logging.getLogger(__name__)


def read_resource_csv(filename: str) -> pd.DataFrame:
    """Read a packaged CSV resource into a DataFrame."""
    with resources.files(DATA_PACKAGE).joinpath(filename).open("r", encoding="utf-8") as f:
        return pd.read_csv(f, keep_default_na=False)


@lru_cache(maxsize=1)
def load_default_negators() -> FrozenSet[str]:
    """
    Load the packaged negator list.

    Blank lines and lines starting with '#' are ignored.
    """
    text = resources.files(DATA_PACKAGE).joinpath(NEGATORS_FILENAME).read_text(encoding="utf-8")
    terms = frozenset(
        line.strip().lower()
        for line in text.splitlines()
        if line.strip() and not line.lstrip().startswith("#")
    )
    logger.debug(f"Loaded {len(terms)} default negators")
    return terms
