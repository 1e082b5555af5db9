import pytest

from hierarchical_linkage.cluster_tree import ClusterTreeRecorder
from hierarchical_linkage.errors import InvalidInputError, InvalidStateError
from hierarchical_linkage.index_clusters import IndexClusterMap


def _record_run(recorder, n, merges):
    """
    Record a run that merges the two lowest live ids, merges times.
    """
    recorder.start(n, 1)
    index_clusters = IndexClusterMap.create_initial(n)
    for step in range(1, merges + 1):
        recorder.record(step, index_clusters)
        a, b = index_clusters.live_ids()[:2]
        index_clusters.merge(a, b, n + step - 1)
    return recorder.finish(index_clusters.partition())


@pytest.mark.parametrize(
    "depth, sizes",
    [
        (None, list(range(1, 13))),
        (0, [1]),
        (3, [1, 2, 3, 4]),
        (11, list(range(1, 13))),
        (50, list(range(1, 13))),
    ],
)
def test_depth_keeps_final_merges(depth, sizes):
    tree = _record_run(ClusterTreeRecorder(depth), 12, 11)
    assert [len(partition) for partition in tree] == sizes


@pytest.mark.parametrize(
    "depth, sizes",
    [
        (None, [4, 5, 6, 7, 8, 9, 10, 11, 12]),
        (2, [4, 5, 6]),
        (0, [4]),
    ],
)
def test_depth_counts_merges_performed_when_run_stops_early(depth, sizes):
    """
    A run planned for 11 merges that stops after 8 keeps the partitions
    before its own last merges.
    """
    tree = _record_run(ClusterTreeRecorder(depth), 12, 8)
    assert [len(partition) for partition in tree] == sizes


@pytest.mark.parametrize("depth", [-1, 1.5, True, "2"])
def test_invalid_depth(depth):
    with pytest.raises(InvalidInputError):
        ClusterTreeRecorder(depth)


def test_finish_reverses_to_coarsest_first():
    """
    Snapshots go in finest first; the finished tree starts at the final partition.
    """
    recorder = ClusterTreeRecorder()
    recorder.start(3, 1)
    index_clusters = IndexClusterMap.create_initial(3)

    recorder.record(1, index_clusters)
    index_clusters.merge(0, 1, 3)
    recorder.record(2, index_clusters)
    index_clusters.merge(2, 3, 4)
    tree = recorder.finish(index_clusters.partition())

    assert tree == ([[1, 0, 2]], [[2], [1, 0]], [[0], [1], [2]])
    assert recorder.tree == tree


def test_snapshots_are_independent_of_later_merges():
    recorder = ClusterTreeRecorder()
    recorder.start(2, 1)
    index_clusters = IndexClusterMap.create_initial(2)
    recorder.record(1, index_clusters)
    index_clusters.merge(0, 1, 2)

    assert recorder.finish(index_clusters.partition())[-1] == [[0], [1]]


def test_record_requires_start_and_step_order():
    recorder = ClusterTreeRecorder()
    with pytest.raises(InvalidStateError):
        recorder.record(1, IndexClusterMap.create_initial(2))
    with pytest.raises(InvalidStateError):
        recorder.finish([[0, 1]])
    assert recorder.tree == ()

    recorder.start(3, 1)
    with pytest.raises(InvalidStateError):
        recorder.record(2, IndexClusterMap.create_initial(3))
