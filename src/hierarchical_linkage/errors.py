# errors.py
"""
Exceptions raised by the clustering engine.

Each error also derives from the builtin a caller would catch anyway, so
``except ValueError`` keeps working around bad input.
"""

__all__ = [
    "ClusteringError",
    "InvalidInputError",
    "InvalidStateError",
    "OutOfRangeError",
    "UnsupportedOperationError",
]


class ClusteringError(Exception):
    """Base class for all clustering errors."""


class InvalidInputError(ClusteringError, ValueError):
    """Malformed or insufficient data, or an out-of-range parameter."""


class InvalidStateError(ClusteringError, RuntimeError):
    """Internal bookkeeping was asked to do something inconsistent."""


class OutOfRangeError(ClusteringError, IndexError):
    """A cluster id that is not live was used to address the distance matrix."""


class UnsupportedOperationError(ClusteringError, NotImplementedError):
    """The linkage variant cannot classify new items once built."""
