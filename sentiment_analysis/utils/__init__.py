"""Shared utilities for batch processing."""

from sentiment_analysis.utils.parallel import ParallelProcessor, chunk

__all__ = [
    'ParallelProcessor',
    'chunk',
]
