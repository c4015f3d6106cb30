"""
Error taxonomy for the sentiment analysis package.

All errors derive from SentimentAnalysisError so callers can catch the whole
family in one place. Each concrete error also derives from the built-in
exception it refines (ValueError / LookupError), so code written against the
built-ins keeps working.

None of these errors are retryable: every operation in this package is a
deterministic computation over its inputs.
"""

from typing import Optional, Sequence


class SentimentAnalysisError(Exception):
    """Base class for all package errors."""


class InvalidInputError(SentimentAnalysisError, ValueError):
    """Malformed or empty document input."""


class UnknownDictionaryError(SentimentAnalysisError, LookupError):
    """A named dictionary is not registered."""

    def __init__(self, name: str, available: Optional[Sequence[str]] = None):
        self.name = name
        self.available = list(available or [])
        message = f"Unknown dictionary: {name!r}"
        if self.available:
            message += f". Available: {', '.join(self.available)}"
        super().__init__(message)


class DimensionMismatchError(SentimentAnalysisError, ValueError):
    """Two inputs that must be aligned have different lengths."""

    def __init__(self, expected: int, actual: int, what: str = "inputs", message: Optional[str] = None):
        self.expected = expected
        self.actual = actual
        super().__init__(
            message or f"Dimension mismatch between {what}: expected length {expected}, got {actual}"
        )


class InsufficientDataError(SentimentAnalysisError, ValueError):
    """Too little data to run the requested computation."""

    def __init__(self, required: int, available: int, reason: str = ""):
        self.required = required
        self.available = available
        message = f"Insufficient data: at least {required} required, {available} available"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


__all__ = [
    "SentimentAnalysisError",
    "InvalidInputError",
    "UnknownDictionaryError",
    "DimensionMismatchError",
    "InsufficientDataError",
]
