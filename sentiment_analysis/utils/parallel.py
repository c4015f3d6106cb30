"""Parallel processing utilities for per-document work."""

import logging
import os
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor
from typing import Callable, List, Optional, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')
R = TypeVar('R')


def chunk(items: Sequence[T], size: int) -> List[Sequence[T]]:
    """Split items into consecutive slices of at most size elements."""
    if size < 1:
        raise ValueError(f"Chunk size must be >= 1, got {size}")
    return [items[i:i + size] for i in range(0, len(items), size)]


class ParallelProcessor:
    """
    Order-preserving map over independent work items.

    Scoring and term counting have no data dependency between documents, so
    items can be handed to a pool of workers. Results always come back in
    input order, whatever order the workers finish in.

    Usage:
        processor = ParallelProcessor(max_workers=4)
        results = processor.map_ordered(score_batch, batches)
    """

    def __init__(
        self,
        max_workers: Optional[int] = None,
        use_processes: bool = True,
    ):
        """
        Initialize parallel processor.

        Args:
            max_workers: Number of parallel workers (default: auto-determine,
                1 means sequential)
            use_processes: ProcessPoolExecutor if True (func and items must be
                picklable), ThreadPoolExecutor otherwise
        """
        self.max_workers = max_workers
        self.use_processes = use_processes

    def should_use_parallel(self, num_items: int, max_workers: Optional[int] = None) -> bool:
        """
        Determine if parallel processing is beneficial.

        Args:
            num_items: Number of items to process
            max_workers: Max workers requested (None or 1 means sequential)

        Returns:
            True if should use parallel processing
        """
        return max_workers is not None and max_workers > 1 and num_items > 1

    def map_ordered(self, func: Callable[[T], R], items: Sequence[T]) -> List[R]:
        """
        Apply func to each item.

        Args:
            func: Function applied to each item
            items: Items to process

        Returns:
            List of results, in the same order as items
        """
        if self.max_workers is None:
            max_workers = min(os.cpu_count() or 4, len(items))
        else:
            max_workers = min(self.max_workers, len(items))

        if not self.should_use_parallel(len(items), max_workers):
            return [func(item) for item in items]

        executor_cls = ProcessPoolExecutor if self.use_processes else ThreadPoolExecutor
        logger.debug(
            f"Processing {len(items)} items with {max_workers} "
            f"{'processes' if self.use_processes else 'threads'}"
        )
        with executor_cls(max_workers=max_workers) as executor:
            # executor.map yields in submission order
            return list(executor.map(func, items))
