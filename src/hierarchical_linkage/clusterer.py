# clusterer.py
"""
Hierarchical agglomerative clusterer.

Starts with one cluster per item and repeatedly merges the two closest live
clusters until the requested number of clusters is left. Distances to a merged
cluster come from the linkage recurrence over the current distance matrix, so the
distance function is only called while seeding the matrix.

Each build owns its matrix, cluster map and tree recorder; nothing is shared
between runs.

Example:
    >>> clusterer = HierarchicalClusterer(linkage="ward", record_tree=True)
    >>> clusterer.build([[1, 1], [1, 2], [8, 8], [9, 8]], number_of_clusters=2).clusters()
    [[1, 0], [3, 2]]
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence, Tuple, Union

import numpy as np

from hierarchical_linkage.cluster_tree import ClusterTreeRecorder, Partition
from hierarchical_linkage.data_set import DataSet, squared_euclidean_distance
from hierarchical_linkage.distance_matrix import DistanceMatrix
from hierarchical_linkage.errors import InvalidInputError, InvalidStateError, UnsupportedOperationError
from hierarchical_linkage.index_clusters import IndexClusterMap
from hierarchical_linkage.linkage import Linkage, lance_williams_update

__all__ = ["ClustererConfig", "HierarchicalClusterer", "Merge"]

logger = logging.getLogger(__name__)

# (id_a, id_b, distance, size of the merged cluster); merge k creates id n + k
Merge = Tuple[int, int, float, int]


@dataclass
class ClustererConfig:
    """
    Settings of a clustering run.

    @param linkage: linkage variant or its name
    @param distance_function: callable(item_a, item_b) -> non-negative float used to
                              seed the matrix; squared Euclidean over numeric
                              attributes when None
    @param record_tree: keep intermediate partitions (see cluster_tree)
    @param depth: how many final merges to record; None records all. Setting a
                  depth turns recording on.
    @param max_distance: stop merging once the closest pair is farther than this
    """
    linkage: Union[str, Linkage] = Linkage.SINGLE
    distance_function: Optional[Callable[[Any, Any], float]] = None
    record_tree: bool = False
    depth: Optional[int] = None
    max_distance: Optional[float] = None

    def __post_init__(self) -> None:
        self.linkage = Linkage.parse(self.linkage)
        if self.distance_function is None:
            self.distance_function = squared_euclidean_distance
        elif not callable(self.distance_function):
            raise InvalidInputError("distance_function must be callable.")
        if self.depth is not None:
            if isinstance(self.depth, bool) or not isinstance(self.depth, int) or self.depth < 0:
                raise InvalidInputError(f"depth must be None or a non-negative integer, got {self.depth!r}.")
            self.record_tree = True
        if self.max_distance is not None:
            self.max_distance = float(self.max_distance)
            if math.isnan(self.max_distance):
                raise InvalidInputError("max_distance must be a number.")


class HierarchicalClusterer:
    """
    Agglomerative clusterer with a pluggable linkage.

    Keyword arguments are the fields of ClustererConfig.
    """

    def __init__(self, **options: Any) -> None:
        self.config = ClustererConfig(**options)
        self._reset()

    @classmethod
    def from_config(cls, config: ClustererConfig) -> "HierarchicalClusterer":
        clusterer = cls.__new__(cls)
        clusterer.config = config
        clusterer._reset()
        return clusterer

    def _reset(self) -> None:
        self._data_set: Optional[DataSet] = None
        self._n = 0
        self._clusters: Optional[Partition] = None
        self._tree: Tuple[Partition, ...] = ()
        self._merges: List[Merge] = []
        self.number_of_clusters = 0

    @property
    def linkage(self) -> Linkage:
        return self.config.linkage

    def build(self, data_set: Union[DataSet, Sequence[Sequence[Any]]],
              number_of_clusters: int = 1) -> "HierarchicalClusterer":
        """
        Cluster the items of data_set into number_of_clusters clusters.

        @param data_set: DataSet or sequence of items
        @param number_of_clusters: target count, 1 <= number_of_clusters <= n
        @return: self
        @raises InvalidInputError: fewer than 2 items or number_of_clusters out of range
        """
        if not isinstance(data_set, DataSet):
            data_set = DataSet(data_set)
        n = data_set.count()
        _check_number_of_clusters(n, number_of_clusters)
        matrix = DistanceMatrix.initialize(n, self.config.distance_function, data_set)
        return self._build(matrix, number_of_clusters, data_set)

    def build_from_matrix(self, matrix: DistanceMatrix,
                          number_of_clusters: int = 1) -> "HierarchicalClusterer":
        """
        Cluster from an already seeded DistanceMatrix. The matrix is consumed.

        Items are unknown here, so eval() is not available afterwards.
        """
        if matrix.next_id != matrix.n:
            raise InvalidInputError("The distance matrix has already been merged.")
        _check_number_of_clusters(matrix.n, number_of_clusters)
        return self._build(matrix, number_of_clusters, None)

    def _build(self, matrix: DistanceMatrix, number_of_clusters: int,
               data_set: Optional[DataSet]) -> "HierarchicalClusterer":
        n = matrix.n
        linkage = self.config.linkage
        max_distance = self.config.max_distance
        index_clusters = IndexClusterMap.create_initial(n)
        recorder = ClusterTreeRecorder(self.config.depth) if self.config.record_tree else None
        if recorder is not None:
            recorder.start(n, number_of_clusters)

        merges: List[Merge] = []
        step = 0
        while len(index_clusters) > number_of_clusters:
            ci, cj, distance = matrix.closest_pair()
            if max_distance is not None and distance > max_distance:
                logger.debug("Closest pair (%d, %d) at %g exceeds max_distance %g, stopping",
                             ci, cj, distance, max_distance)
                break
            step += 1
            if recorder is not None:
                recorder.record(step, index_clusters)

            new_id = matrix.next_id
            others = [c for c in index_clusters.live_ids() if c != ci and c != cj]
            new_row = lance_williams_update(
                linkage,
                matrix.distances_to(ci, others), matrix.distances_to(cj, others), distance,
                index_clusters.sizes(others), index_clusters.size(ci), index_clusters.size(cj),
            )
            matrix.replace_row(new_id, dict(zip(others, np.asarray(new_row, dtype=float).tolist())), (ci, cj))
            members = index_clusters.merge(ci, cj, new_id)
            merges.append((min(ci, cj), max(ci, cj), distance, len(members)))
            logger.debug("Merge %d: clusters %d and %d at %g -> %d (%d items)",
                         step, ci, cj, distance, new_id, len(members))

        clusters = index_clusters.partition()
        tree = recorder.finish(clusters) if recorder is not None else ()

        self._data_set = data_set
        self._n = n
        self._clusters = clusters
        self._tree = tree
        self._merges = merges
        self.number_of_clusters = len(clusters)
        logger.info("Built %d clusters from %d items with %s linkage (%d merges)",
                    len(clusters), n, linkage.value, len(merges))
        return self

    def _check_built(self) -> None:
        if self._clusters is None:
            raise InvalidStateError("The clusterer has not been built yet.")

    def clusters(self) -> Partition:
        """Final partition: one list of item indices per cluster."""
        self._check_built()
        return [list(c) for c in self._clusters]

    def cluster_tree(self) -> List[Partition]:
        """
        Recorded partitions, coarsest first. Empty unless tree recording is on.
        """
        self._check_built()
        return [[list(c) for c in partition] for partition in self._tree]

    def merges(self) -> List[Merge]:
        self._check_built()
        return list(self._merges)

    def labels(self) -> np.ndarray:
        """
        @return: integer array shape (n,), labels[i] is the position in clusters()
                 of the cluster holding item i
        """
        self._check_built()
        labels = np.empty(self._n, dtype=int)
        for label, cluster in enumerate(self._clusters):
            labels[cluster] = label
        return labels

    def linkage_matrix(self) -> np.ndarray:
        """
        SciPy-style linkage matrix, rows [idx1, idx2, dist, new_cluster_size].
        """
        self._check_built()
        return np.array(self._merges, dtype=float).reshape(len(self._merges), 4)

    def supports_eval(self) -> bool:
        return self.config.linkage.supports_eval

    def eval(self, data_item: Sequence[Any]) -> int:
        """
        Assign data_item to the closest built cluster.

        Single linkage uses the nearest member, complete linkage the farthest.

        @return: index of the cluster in clusters()
        @raises UnsupportedOperationError: if the linkage cannot classify new items
        @raises InvalidStateError: if the clusterer was not built from items
        """
        if not self.supports_eval():
            raise UnsupportedOperationError(
                f"Eval of new data is not supported by {self.config.linkage.value} linkage. "
                "Rebuild the clusters including the new item."
            )
        self._check_built()
        if self._data_set is None:
            raise InvalidStateError("Cannot classify items: the clusterer was built from a distance matrix.")
        aggregate = self.config.linkage.item_aggregate
        distance = self.config.distance_function
        items = self._data_set
        scores = [aggregate(distance(data_item, items[m]) for m in cluster) for cluster in self._clusters]
        return int(np.argmin(scores))

    def __repr__(self) -> str:
        return (f"HierarchicalClusterer(linkage={self.config.linkage.value!r}, "
                f"number_of_clusters={self.number_of_clusters})")


def _check_number_of_clusters(n: int, number_of_clusters: int) -> None:
    if n < 2:
        raise InvalidInputError(f"At least 2 items are required to cluster, got {n}.")
    if isinstance(number_of_clusters, bool) or not isinstance(number_of_clusters, (int, np.integer)):
        raise InvalidInputError(f"number_of_clusters must be an integer, got {number_of_clusters!r}.")
    if not (1 <= number_of_clusters <= n):
        raise InvalidInputError(f"number_of_clusters must be between 1 and {n}, got {number_of_clusters}.")
