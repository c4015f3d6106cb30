"""
Term-Document Matrix construction.

Rows are documents (input order), columns are the vocabulary in sorted
order, cells hold term frequency or presence. The matrix is built from
per-partition term counts that are merged before the vocabulary is fixed,
so the result is identical whatever partitioning or merge order is used.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
from scipy import sparse

from sentiment_analysis.utils.parallel import ParallelProcessor, chunk

logger = logging.getLogger(__name__)

Weighting = Literal["frequency", "presence"]


@dataclass(frozen=True)
class PartialCounts:
    """Term counts for a subset of documents, keyed by document index."""
    counts: Dict[int, Counter] = field(default_factory=dict)

    @property
    def n_documents(self) -> int:
        return len(self.counts)

    def merge(self, other: 'PartialCounts') -> 'PartialCounts':
        """Union of two disjoint partitions (commutative and associative)."""
        overlap = self.counts.keys() & other.counts.keys()
        if overlap:
            raise ValueError(f"Partitions overlap on documents: {sorted(overlap)[:5]}")
        return PartialCounts(counts={**self.counts, **other.counts})

    def to_matrix(self, min_doc_freq: int = 1, weighting: Weighting = "frequency") -> 'TermDocumentMatrix':
        """
        Fix the vocabulary and build the sparse matrix.

        Args:
            min_doc_freq: Minimum number of documents a term must appear in
            weighting: "frequency" (raw counts) or "presence" (0/1)

        Raises:
            ValueError: If document indices are not exactly 0..n-1
        """
        n_docs = self.n_documents
        if sorted(self.counts) != list(range(n_docs)):
            raise ValueError("Partial counts must cover document indices 0..n-1 exactly")

        doc_freq: Counter = Counter()
        for counter in self.counts.values():
            doc_freq.update(counter.keys())

        vocabulary = tuple(sorted(t for t, df in doc_freq.items() if df >= min_doc_freq))
        column = {term: j for j, term in enumerate(vocabulary)}

        rows: List[int] = []
        cols: List[int] = []
        data: List[float] = []
        for i in range(n_docs):
            for term, count in self.counts[i].items():
                j = column.get(term)
                if j is None:
                    continue
                rows.append(i)
                cols.append(j)
                data.append(1.0 if weighting == "presence" else float(count))

        matrix = sparse.csr_matrix(
            (np.asarray(data, dtype=np.float64), (np.asarray(rows, dtype=np.int64), np.asarray(cols, dtype=np.int64))),
            shape=(n_docs, len(vocabulary)),
        )
        matrix.sort_indices()

        logger.debug(
            f"Built term-document matrix: {n_docs} documents x {len(vocabulary)} terms "
            f"({len(doc_freq) - len(vocabulary)} terms below min_doc_freq={min_doc_freq})"
        )
        return TermDocumentMatrix(
            matrix=matrix,
            vocabulary=vocabulary,
            document_frequency=np.asarray([doc_freq[t] for t in vocabulary], dtype=np.int64),
            weighting=weighting,
        )


def count_partition(token_lists: Sequence[Sequence[str]], offset: int = 0) -> PartialCounts:
    """Count terms for consecutive documents starting at document index offset."""
    return PartialCounts(
        counts={offset + i: Counter(tokens) for i, tokens in enumerate(token_lists)}
    )


def merge_partials(parts: Sequence[PartialCounts]) -> PartialCounts:
    """Merge any number of disjoint partitions."""
    merged = PartialCounts()
    for part in parts:
        merged = merged.merge(part)
    return merged


def _count_args(args: Tuple[Sequence[Sequence[str]], int]) -> PartialCounts:
    token_lists, offset = args
    return count_partition(token_lists, offset)


@dataclass(frozen=True)
class TermDocumentMatrix:
    """Sparse document x term matrix with its (sorted) vocabulary."""
    matrix: sparse.csr_matrix
    vocabulary: Tuple[str, ...]
    document_frequency: np.ndarray
    weighting: Weighting = "frequency"

    @classmethod
    def from_token_lists(
        cls,
        token_lists: Sequence[Sequence[str]],
        min_doc_freq: int = 1,
        weighting: Weighting = "frequency",
        partition_size: int = 1000,
        processor: Optional[ParallelProcessor] = None,
    ) -> 'TermDocumentMatrix':
        """
        Build the matrix from tokenized documents.

        Term counting runs per partition (optionally on worker processes);
        the partial counts are then merged and the vocabulary fixed.
        """
        token_lists = list(token_lists)
        partitions = chunk(token_lists, partition_size)
        offsets = [i * partition_size for i in range(len(partitions))]

        processor = processor or ParallelProcessor(max_workers=1)
        parts = processor.map_ordered(_count_args, list(zip(partitions, offsets)))
        return merge_partials(parts).to_matrix(min_doc_freq=min_doc_freq, weighting=weighting)

    @property
    def n_documents(self) -> int:
        return self.matrix.shape[0]

    @property
    def n_terms(self) -> int:
        return self.matrix.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return self.matrix.shape

    def column(self, term: str) -> np.ndarray:
        """Dense column for one term."""
        j = self.vocabulary.index(term)
        return self.matrix[:, j].toarray().ravel()

    def to_dataframe(self) -> pd.DataFrame:
        """Dense DataFrame view (documents x terms)."""
        return pd.DataFrame(self.matrix.toarray(), columns=list(self.vocabulary))

    def equals(self, other: 'TermDocumentMatrix') -> bool:
        """Same vocabulary, same shape and same cell values."""
        return (
            self.vocabulary == other.vocabulary
            and self.matrix.shape == other.matrix.shape
            and (self.matrix != other.matrix).nnz == 0
        )
