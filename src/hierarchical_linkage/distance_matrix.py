# distance_matrix.py
"""
Lower-triangular distance store between live clusters.

Rows live in an arena indexed by cluster id: the N singleton clusters take ids
0..N-1 and every merge appends the next id (N, N+1, ...), up to 2N-2. A merge
retires the two consumed ids by clearing their bit in the live mask; nothing is
physically deleted, so ids stay stable for the whole run.

Only d(a, b) with a > b is stored, at arena cell [a, b].

Doxygen-style docstrings are used (with @param / @return tags).
"""

import math
from typing import Any, Callable, Iterable, List, Mapping, Sequence, Tuple

import numpy as np

from hierarchical_linkage.errors import InvalidInputError, InvalidStateError, OutOfRangeError

__all__ = ["DistanceMatrix"]


def _checked_distance(value: Any, a: int, b: int) -> float:
    value = float(value)
    if math.isnan(value) or value < 0:
        raise InvalidInputError(
            f"Distance between items {a} and {b} must be a non-negative number, got {value}."
        )
    return value


class DistanceMatrix:
    """
    Pairwise distances between live clusters, arena-backed.

    Build instances with initialize(), from_dense() or from_rows().
    """

    def __init__(self, n: int) -> None:
        if n < 2:
            raise InvalidInputError(f"At least 2 items are required to cluster, got {n}.")
        self.n = n
        capacity = 2 * n - 1
        self._D = np.full((capacity, capacity), np.inf, dtype=float)
        self._live = np.zeros(capacity, dtype=bool)
        self._live[:n] = True
        self._next_id = n

    @classmethod
    def initialize(cls, n: int, distance_function: Callable[[Any, Any], float],
                   items: Sequence[Any]) -> "DistanceMatrix":
        """
        Evaluate distance_function on every unordered pair of the first n items.

        @param n: number of items (>= 2)
        @param distance_function: callable(item_a, item_b) -> non-negative float
        @param items: indexable sequence holding at least n items
        @return: a new DistanceMatrix with n live singleton clusters
        @raises InvalidInputError: if n < 2, items are too few, or a distance is
                                   negative or NaN
        """
        matrix = cls(n)
        if len(items) < n:
            raise InvalidInputError(f"Expected {n} items, got {len(items)}.")
        for a in range(1, n):
            item_a = items[a]
            for b in range(a):
                matrix._D[a, b] = _checked_distance(distance_function(item_a, items[b]), a, b)
        return matrix

    @classmethod
    def from_dense(cls, D: np.ndarray) -> "DistanceMatrix":
        """
        Seed from a precomputed square matrix; only the lower triangle is read.

        @param D: array shape (n, n)
        @return: a new DistanceMatrix
        """
        D = np.asarray(D, dtype=float)
        if D.ndim != 2 or D.shape[0] != D.shape[1]:
            raise InvalidInputError(f"Expected a square distance matrix, got shape {D.shape}.")
        n = D.shape[0]
        matrix = cls(n)
        rows, cols = np.tril_indices(n, -1)
        values = D[rows, cols]
        bad = np.isnan(values) | (values < 0)
        if np.any(bad):
            k = int(np.argmax(bad))
            _checked_distance(values[k], int(rows[k]), int(cols[k]))
        matrix._D[rows, cols] = values
        return matrix

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[float]]) -> "DistanceMatrix":
        """
        Seed from triangular rows where rows[r] holds d(r + 1, 0..r).

        @param rows: n - 1 rows, row r with exactly r + 1 entries
        @return: a new DistanceMatrix
        """
        matrix = cls(len(rows) + 1)
        for r, row in enumerate(rows):
            if len(row) != r + 1:
                raise InvalidInputError(f"Row {r} must hold {r + 1} entries, got {len(row)}.")
            for b, value in enumerate(row):
                matrix._D[r + 1, b] = _checked_distance(value, r + 1, b)
        return matrix

    @property
    def count(self) -> int:
        """Number of live clusters."""
        return int(self._live.sum())

    @property
    def entry_count(self) -> int:
        """Number of addressable entries, count choose 2."""
        k = self.count
        return k * (k - 1) // 2

    @property
    def next_id(self) -> int:
        return self._next_id

    def is_live(self, cluster_id: int) -> bool:
        return 0 <= cluster_id < self._next_id and bool(self._live[cluster_id])

    def live_ids(self) -> List[int]:
        """Live cluster ids in ascending order."""
        return [int(i) for i in np.flatnonzero(self._live)]

    def get(self, a: int, b: int) -> float:
        """
        Distance between live clusters a and b.

        @return: d(a, b); 0.0 when a == b
        @raises OutOfRangeError: if a or b is not live
        """
        for cluster_id in (a, b):
            if not self.is_live(cluster_id):
                raise OutOfRangeError(f"Cluster {cluster_id} is not live.")
        if a == b:
            return 0.0
        if a < b:
            a, b = b, a
        return float(self._D[a, b])

    def distances_to(self, c: int, others: Iterable[int]) -> np.ndarray:
        """
        Vector of d(c, x) for x in others.

        @raises OutOfRangeError: if any id is not live
        """
        others = np.asarray(list(others), dtype=int)
        if not self.is_live(c) or not all(self.is_live(int(x)) for x in others):
            raise OutOfRangeError(f"Distances requested for a retired cluster: {c}, {others.tolist()}.")
        hi = np.maximum(others, c)
        lo = np.minimum(others, c)
        out = self._D[hi, lo].copy()
        out[others == c] = 0.0
        return out

    def closest_pair(self) -> Tuple[int, int, float]:
        """
        Find the globally closest pair of live clusters.

        Ties go to the first entry in ascending (row, column) order, rows and
        columns being live ids sorted ascending.

        @return: tuple (a, b, distance) with a > b
        @raises InvalidStateError: if fewer than two clusters are live
        """
        live = np.flatnonzero(self._live)
        if live.size < 2:
            raise InvalidStateError("At least two live clusters are needed to find a closest pair.")
        # tril_indices enumerates row-major, argmin keeps the first minimum
        rows, cols = np.tril_indices(live.size, -1)
        values = self._D[live[rows], live[cols]]
        k = int(np.argmin(values))
        return int(live[rows[k]]), int(live[cols[k]]), float(values[k])

    def replace_row(self, new_id: int, values: Mapping[int, float],
                    retire: Tuple[int, int]) -> None:
        """
        Install the row of a freshly merged cluster and retire the merged pair.

        @param new_id: id of the new cluster, must be the next unused id
        @param values: distance from new_id to every other live cluster, keyed by id
        @param retire: the two ids consumed by the merge
        @raises InvalidStateError: on a wrong new_id, a non-live retired id, or a
                                   missing value for a surviving cluster
        """
        if new_id != self._next_id or new_id >= self._D.shape[0]:
            raise InvalidStateError(f"Expected new cluster id {self._next_id}, got {new_id}.")
        id_a, id_b = retire
        if id_a == id_b or not (self.is_live(id_a) and self.is_live(id_b)):
            raise InvalidStateError(f"Cannot retire clusters {id_a} and {id_b}.")
        for x in self.live_ids():
            if x in (id_a, id_b):
                continue
            if x not in values:
                raise InvalidStateError(f"Missing distance from new cluster {new_id} to {x}.")
            self._D[new_id, x] = float(values[x])
        self._live[id_a] = False
        self._live[id_b] = False
        self._live[new_id] = True
        self._next_id += 1

    def rows(self) -> List[List[float]]:
        """Live entries as triangular rows, in ascending live-id order."""
        live = self.live_ids()
        return [[float(self._D[a, b]) for b in live[:r + 1]] for r, a in enumerate(live[1:])]

    def __repr__(self) -> str:
        return f"DistanceMatrix(live={self.count}, next_id={self._next_id})"
