# linkage.py
"""
Linkage variants and their Lance–Williams recurrences.

Every variant derives d(cx, ci U cj) from distances already in the matrix,
never from raw item attributes:

    single            min(d(cx,ci), d(cx,cj))
    complete          max(d(cx,ci), d(cx,cj))
    average           (d(cx,ci) + d(cx,cj)) / 2           (unweighted)
    weighted_average  (|ci| d(cx,ci) + |cj| d(cx,cj)) / (|ci| + |cj|)
    median            d(cx,ci)/2 + d(cx,cj)/2 - d(ci,cj)/4
    centroid          (|ci| d(cx,ci) + |cj| d(cx,cj)) / (|ci|+|cj|)
                          - |ci| |cj| d(ci,cj) / (|ci|+|cj|)^2
    ward              ((|cx|+|ci|) d(cx,ci) + (|cx|+|cj|) d(cx,cj) - |cx| d(ci,cj))
                          / (|cx|+|ci|+|cj|)

The update works on scalars or NumPy arrays (one entry per external cluster cx).
"""

from enum import Enum
from typing import Callable, Dict, Optional, Union

import numpy as np

from hierarchical_linkage.errors import InvalidInputError

__all__ = [
    "Linkage",
    "lance_williams_update",
    "linkage_distance",
]

ArrayLike = Union[float, np.ndarray]


class Linkage(str, Enum):
    SINGLE = "single"
    COMPLETE = "complete"
    AVERAGE = "average"
    WEIGHTED_AVERAGE = "weighted_average"
    MEDIAN = "median"
    CENTROID = "centroid"
    WARD = "ward"

    @classmethod
    def parse(cls, value: Union[str, "Linkage"]) -> "Linkage":
        """
        @param value: a Linkage or its name, e.g. 'ward'
        @raises InvalidInputError: for an unknown name
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            names = ", ".join(v.value for v in cls)
            raise InvalidInputError(f"Unsupported linkage: {value!r} (expected one of {names})") from None

    @property
    def supports_eval(self) -> bool:
        """Whether new items can be assigned to a built clustering."""
        return self in _ITEM_AGGREGATES

    @property
    def item_aggregate(self) -> Optional[Callable]:
        """Reduction over item-to-member distances used to classify new items."""
        return _ITEM_AGGREGATES.get(self)


_ITEM_AGGREGATES: Dict[Linkage, Callable] = {
    Linkage.SINGLE: min,
    Linkage.COMPLETE: max,
}


def lance_williams_update(linkage: Union[str, Linkage],
                          d_xi: ArrayLike, d_xj: ArrayLike, d_ij: float,
                          size_x: ArrayLike, size_i: int, size_j: int) -> ArrayLike:
    """
    Distance from cluster(s) x to the union of clusters i and j.

    @param linkage: linkage variant or its name
    @param d_xi: distance(s) between x and i
    @param d_xj: distance(s) between x and j
    @param d_ij: distance between i and j
    @param size_x: size(s) of x
    @param size_i: size of i
    @param size_j: size of j
    @return: updated distance(s) d(x, i U j), same shape as d_xi
    """
    linkage = Linkage.parse(linkage)
    if linkage is Linkage.SINGLE:
        return np.minimum(d_xi, d_xj)
    elif linkage is Linkage.COMPLETE:
        return np.maximum(d_xi, d_xj)
    elif linkage is Linkage.AVERAGE:
        return (d_xi + d_xj) / 2
    elif linkage is Linkage.WEIGHTED_AVERAGE:
        return (size_i * d_xi + size_j * d_xj) / (size_i + size_j)
    elif linkage is Linkage.MEDIAN:
        return d_xi / 2 + d_xj / 2 - d_ij / 4
    elif linkage is Linkage.CENTROID:
        size_ij = size_i + size_j
        return (size_i * d_xi + size_j * d_xj) / size_ij - (size_i * size_j * d_ij) / size_ij ** 2
    elif linkage is Linkage.WARD:
        return ((size_x + size_i) * d_xi + (size_x + size_j) * d_xj - size_x * d_ij) \
            / (size_x + size_i + size_j)
    raise InvalidInputError(f"Unsupported linkage: {linkage!r}")


def linkage_distance(linkage: Union[str, Linkage], matrix, index_clusters,
                     cx: int, ci: int, cj: int) -> float:
    """
    Distance from live cluster cx to the hypothetical union of ci and cj.

    Scalar form of lance_williams_update; the clusterer applies the vectorized
    update to all other live clusters at once. Reads only matrix.get() and
    cluster sizes from index_clusters.

    @param matrix: DistanceMatrix holding cx, ci and cj
    @param index_clusters: IndexClusterMap holding cx, ci and cj
    @return: d(cx, ci U cj)
    """
    value = lance_williams_update(
        linkage,
        matrix.get(cx, ci), matrix.get(cx, cj), matrix.get(ci, cj),
        index_clusters.size(cx), index_clusters.size(ci), index_clusters.size(cj),
    )
    return float(value)
