"""Unit tests for sentiment_analysis/utils/parallel.py."""

import pytest

from sentiment_analysis.utils.parallel import ParallelProcessor, chunk


def _square(x: int) -> int:
    return x * x


class TestChunk:
    def test_even_split(self):
        assert chunk([1, 2, 3, 4], 2) == [[1, 2], [3, 4]]

    def test_remainder(self):
        assert chunk([1, 2, 3], 2) == [[1, 2], [3]]

    def test_empty(self):
        assert chunk([], 3) == []

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            chunk([1], 0)


class TestParallelProcessor:
    def test_should_use_parallel(self):
        processor = ParallelProcessor()
        assert processor.should_use_parallel(10, max_workers=4) is True
        assert processor.should_use_parallel(10, max_workers=1) is False
        assert processor.should_use_parallel(1, max_workers=4) is False
        assert processor.should_use_parallel(10, max_workers=None) is False

    def test_sequential_map(self):
        assert ParallelProcessor(max_workers=1).map_ordered(_square, [3, 1, 2]) == [9, 1, 4]

    def test_threads_preserve_order(self):
        processor = ParallelProcessor(max_workers=4, use_processes=False)
        assert processor.map_ordered(_square, list(range(20))) == [x * x for x in range(20)]

    def test_processes_preserve_order(self):
        processor = ParallelProcessor(max_workers=2)
        assert processor.map_ordered(_square, list(range(10))) == [x * x for x in range(10)]

    def test_empty_items(self):
        assert ParallelProcessor(max_workers=4).map_ordered(_square, []) == []
