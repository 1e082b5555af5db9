# index_clusters.py
"""
Mapping from live cluster id to the original item indices it contains.
"""

from typing import Dict, Iterable, List

import numpy as np

from hierarchical_linkage.errors import InvalidInputError, InvalidStateError

__all__ = ["IndexClusterMap"]


class IndexClusterMap:
    """
    Live clusters and their members, kept in ascending id order.

    Every original index belongs to exactly one live cluster at all times.
    """

    def __init__(self) -> None:
        self._members: Dict[int, List[int]] = {}

    @classmethod
    def create_initial(cls, n: int) -> "IndexClusterMap":
        """
        Singleton partition {0: [0], 1: [1], ..., n-1: [n-1]}.

        @param n: number of items
        """
        if n < 1:
            raise InvalidInputError(f"Cannot create clusters for {n} items.")
        index_clusters = cls()
        index_clusters._members = {i: [i] for i in range(n)}
        return index_clusters

    def merge(self, id_a: int, id_b: int, new_id: int) -> List[int]:
        """
        Replace clusters id_a and id_b by new_id holding the union of both.

        Members of the larger id come first, then those of the smaller.

        @return: members of the new cluster
        @raises InvalidStateError: if an id is not live, id_a == id_b, or new_id is in use
        """
        if id_a == id_b:
            raise InvalidStateError(f"Cannot merge cluster {id_a} with itself.")
        for cluster_id in (id_a, id_b):
            if cluster_id not in self._members:
                raise InvalidStateError(f"Cluster {cluster_id} is not live.")
        if new_id in self._members:
            raise InvalidStateError(f"Cluster id {new_id} is already in use.")
        if id_a < id_b:
            id_a, id_b = id_b, id_a
        merged = self._members.pop(id_a) + self._members.pop(id_b)
        self._members[new_id] = merged
        return list(merged)

    def members(self, cluster_id: int) -> List[int]:
        try:
            return list(self._members[cluster_id])
        except KeyError:
            raise InvalidStateError(f"Cluster {cluster_id} is not live.") from None

    def size(self, cluster_id: int) -> int:
        return len(self.members(cluster_id))

    def sizes(self, cluster_ids: Iterable[int]) -> np.ndarray:
        return np.array([self.size(c) for c in cluster_ids], dtype=int)

    def live_ids(self) -> List[int]:
        return sorted(self._members)

    def partition(self) -> List[List[int]]:
        """Copy of the current partition, clusters in ascending id order."""
        return [list(self._members[c]) for c in self.live_ids()]

    def __len__(self) -> int:
        return len(self._members)

    def __contains__(self, cluster_id: int) -> bool:
        return cluster_id in self._members

    def __repr__(self) -> str:
        return f"IndexClusterMap({dict((c, self._members[c]) for c in self.live_ids())})"
