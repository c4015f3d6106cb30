"""
Dictionary Generation Module

Builds weighted sentiment dictionaries by regressing a known response on
document term frequencies with L1 (LASSO) regularization.

Key Components:
- DictionaryGenerator: End-to-end generation (tokenize, matrix, fit, select)
- TermDocumentMatrix: Sparse document x term matrix with mergeable partial counts
- RegressionSolver: Protocol for the numerical fitting routine
- CrossValidatedLasso: Default solver (K-fold CV, "min" or "one_se" rule)

Usage:
    from sentiment_analysis.features.generation import DictionaryGenerator

    generator = DictionaryGenerator()
    dictionary = generator.generate(texts, response)
"""

from .matrix import (
    PartialCounts,
    TermDocumentMatrix,
    count_partition,
    merge_partials,
)
from .solver import (
    CrossValidatedLasso,
    RegressionSolver,
    SolverResult,
    select_alpha,
)
from .generator import DictionaryGenerator

__all__ = [
    # Main classes
    "DictionaryGenerator",
    "TermDocumentMatrix",
    "PartialCounts",
    "count_partition",
    "merge_partials",
    # Solvers
    "RegressionSolver",
    "CrossValidatedLasso",
    "SolverResult",
    "select_alpha",
]
