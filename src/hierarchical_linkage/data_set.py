# data_set.py
"""
Minimal tabular container and the default distance used to seed clustering.

A data set is an ordered collection of N items, each item an ordered sequence of
attribute values. Optionally the attributes carry labels; when none are given the
last attribute is assumed to be the class value.
"""

from numbers import Number
from typing import Any, List, Optional, Sequence

import numpy as np
from scipy.spatial.distance import pdist, squareform

from hierarchical_linkage.errors import InvalidInputError

__all__ = [
    "DataSet",
    "squared_euclidean_distance",
    "pairwise_squared_distances",
]


def _is_numeric(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


def squared_euclidean_distance(a: Sequence[Any], b: Sequence[Any]) -> float:
    """
    Squared Euclidean distance restricted to numeric attributes.

    Positions where either value is not a number are ignored.

    @param a: first data item
    @param b: second data item
    @return: sum of squared differences over numeric attributes
    """
    total = 0.0
    for x, y in zip(a, b):
        if _is_numeric(x) and _is_numeric(y):
            total += (x - y) ** 2
    return float(total)


def pairwise_squared_distances(X: np.ndarray) -> np.ndarray:
    """
    Compute the full matrix of squared Euclidean distances for rows of X.

    @param X: 2D array, shape (n_samples, n_features). Rows are observations.
    @return: 2D array D shape (n_samples, n_samples), D[i, j] = ||X[i] - X[j]||^2,
             with a zero diagonal.
    """
    X = np.asarray(X, dtype=float)
    if X.ndim != 2:
        raise InvalidInputError("X must be a 2D array (n_samples, n_features).")
    # pdist differences coordinates directly; no cancellation on large offsets
    return squareform(pdist(X, "sqeuclidean"))


class DataSet:
    """
    Read-only collection of data items.

    @param data_items: sequence of items; every item must have the same length
    @param data_labels: optional attribute labels, one per attribute
    """

    def __init__(self, data_items: Sequence[Sequence[Any]],
                 data_labels: Optional[Sequence[str]] = None) -> None:
        items = self._check_data_items(data_items)
        self._data_items = items
        if data_labels is None:
            self._data_labels = self._default_data_labels(items)
        else:
            self._data_labels = self._check_data_labels(items, data_labels)

    @property
    def data_items(self) -> List[tuple]:
        return list(self._data_items)

    @property
    def data_labels(self) -> List[str]:
        return list(self._data_labels)

    @property
    def num_attributes(self) -> int:
        return len(self._data_items[0])

    def count(self) -> int:
        return len(self._data_items)

    def __len__(self) -> int:
        return len(self._data_items)

    def __getitem__(self, index: int) -> tuple:
        return self._data_items[index]

    def __iter__(self):
        return iter(self._data_items)

    def __repr__(self) -> str:
        return f"DataSet(items={len(self)}, attributes={self.num_attributes})"

    @staticmethod
    def _check_data_items(data_items: Sequence[Sequence[Any]]) -> List[tuple]:
        if data_items is None or len(data_items) == 0:
            raise InvalidInputError("Examples data set must not be empty.")
        items = []
        for index, item in enumerate(data_items):
            if isinstance(item, (str, bytes)) or not hasattr(item, "__len__"):
                raise InvalidInputError(f"Unknown format for data item at row {index}: {item!r}")
            items.append(tuple(item))
        attributes_num = len(items[0])
        for index, item in enumerate(items):
            if len(item) != attributes_num:
                raise InvalidInputError(
                    "Quantity of attributes is inconsistent. "
                    f"The first item has {attributes_num} attributes "
                    f"and row {index} has {len(item)} attributes."
                )
        return items

    @staticmethod
    def _check_data_labels(items: List[tuple], labels: Sequence[str]) -> List[str]:
        if len(labels) != len(items[0]):
            raise InvalidInputError(
                "Number of labels and attributes do not match. "
                f"{len(labels)} labels and {len(items[0])} attributes found."
            )
        return list(labels)

    @staticmethod
    def _default_data_labels(items: List[tuple]) -> List[str]:
        n_attr = len(items[0])
        if n_attr == 0:
            return []
        labels = [f"attribute_{i + 1}" for i in range(n_attr - 1)]
        labels.append("class_value")
        return labels
