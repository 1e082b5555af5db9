# cluster_tree.py
"""
Records intermediate partitions while clusters are merged.

Snapshots are taken before a merge is applied and accumulated forward; finish()
appends the final partition and reverses the sequence once. In the finished tree
index 0 is the coarsest partition (the one the build stopped at) and each next
index is one merge finer.

depth=None keeps every partition. depth=d keeps only the snapshots taken before
the last d merges actually performed, so depth=0 keeps the final partition alone.
A build that stops early still gets its last d partitions.
"""

import logging
from collections import deque
from typing import Deque, List, Optional, Tuple

from hierarchical_linkage.errors import InvalidInputError, InvalidStateError
from hierarchical_linkage.index_clusters import IndexClusterMap

__all__ = ["ClusterTreeRecorder", "Partition"]

logger = logging.getLogger(__name__)

Partition = List[List[int]]


class ClusterTreeRecorder:
    """
    Depth-limited accumulator of partitions.

    Holds at most depth snapshots at a time, dropping the oldest.

    @param depth: None to record every merge, or a non-negative number of final
                  merges to record
    """

    def __init__(self, depth: Optional[int] = None) -> None:
        if depth is not None and (isinstance(depth, bool) or not isinstance(depth, int) or depth < 0):
            raise InvalidInputError(f"depth must be None or a non-negative integer, got {depth!r}.")
        self.depth = depth
        self.planned_merges = 0
        self._snapshots: Deque[Partition] = deque(maxlen=depth)
        self._steps = 0
        self._tree: Tuple[Partition, ...] = ()
        self._started = False

    def start(self, n: int, number_of_clusters: int) -> None:
        """Reset for a run that will perform at most n - number_of_clusters merges."""
        self.planned_merges = n - number_of_clusters
        self._snapshots = deque(maxlen=self.depth)
        self._steps = 0
        self._tree = ()
        self._started = True

    def record(self, step: int, index_clusters: IndexClusterMap) -> None:
        """
        Snapshot the partition as it stands before merge number step (1-indexed).

        @raises InvalidStateError: if called before start() or out of step order
        """
        if not self._started:
            raise InvalidStateError("record() called before start().")
        if step != self._steps + 1:
            raise InvalidStateError(f"Expected merge step {self._steps + 1}, got {step}.")
        self._steps = step
        if self.depth != 0:
            self._snapshots.append(index_clusters.partition())

    def finish(self, final_partition: Partition) -> Tuple[Partition, ...]:
        """
        Close the run: append final_partition and reverse so index 0 is the coarsest.

        @return: the recorded tree
        """
        if not self._started:
            raise InvalidStateError("finish() called before start().")
        forward = list(self._snapshots) + [[list(c) for c in final_partition]]
        self._tree = tuple(reversed(forward))
        self._snapshots = deque(maxlen=self.depth)
        self._started = False
        logger.debug("Cluster tree holds %d partitions after %d of %d planned merges (depth=%s)",
                     len(self._tree), self._steps, self.planned_merges, self.depth)
        return self._tree

    @property
    def tree(self) -> Tuple[Partition, ...]:
        return self._tree
