import numpy as np
import pytest

from hierarchical_linkage.distance_matrix import DistanceMatrix
from hierarchical_linkage.errors import InvalidInputError
from hierarchical_linkage.index_clusters import IndexClusterMap
from hierarchical_linkage.linkage import Linkage, lance_williams_update, linkage_distance


def test_median_linkage_distance(median_rows):
    """
    Median linkage from matrix entries only:
    d(0, 1 U 2) = 98/2 + 89/2 - 5/4 and d(4, 2 U 5) = 1/2 + 74/2 - 89/4.
    """
    matrix = DistanceMatrix.from_rows(median_rows)
    index_clusters = IndexClusterMap.create_initial(12)

    assert linkage_distance("median", matrix, index_clusters, 0, 1, 2) == 92.25
    assert linkage_distance(Linkage.MEDIAN, matrix, index_clusters, 4, 2, 5) == 15.25


@pytest.mark.parametrize(
    "linkage, expected",
    [
        ("single", 2.0),
        ("complete", 5.0),
        ("average", (2.0 + 5.0) / 2),
        ("weighted_average", (1 * 2.0 + 3 * 5.0) / (1 + 3)),
        ("median", 2.0 / 2 + 5.0 / 2 - 3.0 / 4),
        ("centroid", (1 * 2.0 + 3 * 5.0) / 4 - (1 * 3 * 3.0) / 16),
        ("ward", ((2 + 1) * 2.0 + (2 + 3) * 5.0 - 2 * 3.0) / (2 + 1 + 3)),
    ],
)
def test_lance_williams_update_scalar(linkage, expected):
    """
    Each variant against its recurrence with d(x,i)=2, d(x,j)=5, d(i,j)=3,
    |x|=2, |i|=1, |j|=3.
    """
    out = lance_williams_update(linkage, 2.0, 5.0, 3.0, 2, 1, 3)
    assert pytest.approx(out, abs=1e-12) == expected


def test_average_linkage_ignores_cluster_sizes():
    small = lance_williams_update("average", 2.0, 6.0, 1.0, 1, 1, 1)
    large = lance_williams_update("average", 2.0, 6.0, 1.0, 7, 10, 2)
    assert small == large == 4.0


@pytest.mark.parametrize("linkage", list(Linkage))
def test_lance_williams_update_vectorized(linkage):
    """
    Array input gives the same values as element-wise scalar calls.
    """
    d_xi = np.array([2.0, 7.0, 1.0])
    d_xj = np.array([5.0, 3.0, 1.0])
    size_x = np.array([1, 4, 2])
    out = lance_williams_update(linkage, d_xi, d_xj, 2.0, size_x, 2, 3)

    assert out.shape == (3,)
    for k in range(3):
        expected = lance_williams_update(linkage, float(d_xi[k]), float(d_xj[k]), 2.0, int(size_x[k]), 2, 3)
        assert out[k] == pytest.approx(expected)


def test_ward_uses_current_cluster_sizes():
    """
    Ward weights by the sizes held in the cluster map, not by the matrix.
    """
    matrix = DistanceMatrix.from_rows([[1.0], [4.0, 3.0], [6.0, 5.0, 2.0]])
    index_clusters = IndexClusterMap.create_initial(4)
    matrix.replace_row(4, {2: 3.5, 3: 5.5}, (1, 0))
    index_clusters.merge(1, 0, 4)

    # |4| = 2, |2| = |3| = 1
    assert linkage_distance("ward", matrix, index_clusters, 4, 2, 3) == pytest.approx(((1 + 2) * 3.5 + (1 + 2) * 5.5 - 2 * 2.0) / 4)
    assert linkage_distance("ward", matrix, index_clusters, 2, 3, 4) == pytest.approx(((1 + 1) * 2.0 + (1 + 2) * 3.5 - 1 * 5.5) / 4)


def test_linkage_parse():
    assert Linkage.parse("Ward") is Linkage.WARD
    assert Linkage.parse(Linkage.SINGLE) is Linkage.SINGLE
    with pytest.raises(InvalidInputError):
        Linkage.parse("weird")
    with pytest.raises(ValueError):
        lance_williams_update("weird", 1.0, 2.0, 0.0, 1, 1, 1)


@pytest.mark.parametrize(
    "linkage, supported",
    [
        ("single", True),
        ("complete", True),
        ("average", False),
        ("weighted_average", False),
        ("median", False),
        ("centroid", False),
        ("ward", False),
    ],
)
def test_supports_eval_flags(linkage, supported):
    assert Linkage.parse(linkage).supports_eval is supported
