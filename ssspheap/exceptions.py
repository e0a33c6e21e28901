"""Custom exception types used across :mod:`ssspheap`."""

from __future__ import annotations

from typing import Optional


class SSSPHeapError(Exception):
    """Base class for all package-specific errors."""


class InputError(SSSPHeapError, ValueError):
    """Raised for invalid user input such as unknown vertex ids."""


class GraphFormatError(InputError):
    """Raised when parsing a graph file fails.

    Attributes:
        line: 1-based line number of the offending input, if known.
        token: The token that could not be parsed, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        line: Optional[int] = None,
        token: Optional[str] = None,
    ) -> None:
        self.line = line
        self.token = token
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class InvalidWeightError(GraphFormatError):
    """Raised for a negative or non-finite edge weight."""


class UnknownSourceError(InputError):
    """Raised when the requested source vertex is not in the graph."""


class EmptyGraphError(InputError):
    """Raised when a search is requested on a graph without vertices."""


class AlgorithmError(SSSPHeapError, RuntimeError):
    """Raised when algorithm invariants are violated at runtime."""


class HeapInvariantError(AlgorithmError):
    """Raised when an indexed-heap precondition or invariant does not hold."""


__all__ = [
    "SSSPHeapError",
    "InputError",
    "GraphFormatError",
    "InvalidWeightError",
    "UnknownSourceError",
    "EmptyGraphError",
    "AlgorithmError",
    "HeapInvariantError",
]
