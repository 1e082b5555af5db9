# agglomerative.py
"""
Array-in, labels-out entry point to the hierarchical clusterer.

Seeds the engine with squared Euclidean distances for every row pair and can
hand back the merge history for scipy.cluster.hierarchy.dendrogram.
"""

from typing import Optional, Tuple, Union

import numpy as np

from hierarchical_linkage.clusterer import HierarchicalClusterer
from hierarchical_linkage.data_set import pairwise_squared_distances
from hierarchical_linkage.distance_matrix import DistanceMatrix
from hierarchical_linkage.errors import InvalidInputError
from hierarchical_linkage.linkage import Linkage

__all__ = ["agglomerative"]


def agglomerative(X: np.ndarray,
                  n_clusters: int = 1,
                  linkage: Union[str, Linkage] = "average",
                  return_linkage: bool = False) -> Tuple[np.ndarray, Optional[np.ndarray]]:
    """
    Cluster the rows of X into n_clusters clusters.

    @param X: numeric array shape (n_samples, n_features)
    @param n_clusters: 1 <= n_clusters <= n_samples
    @param linkage: any Linkage name
    @param return_linkage: also return HierarchicalClusterer.linkage_matrix()
    @return: (labels, Z) with Z None unless return_linkage
    """
    X = np.asarray(X, dtype=float)
    if X.ndim != 2:
        raise InvalidInputError("X must be a 2D array (n_samples, n_features).")
    n = X.shape[0]
    if not (1 <= n_clusters <= n):
        raise InvalidInputError("n_clusters must be between 1 and n_samples.")

    clusterer = HierarchicalClusterer(linkage=linkage)
    clusterer.build_from_matrix(DistanceMatrix.from_dense(pairwise_squared_distances(X)), n_clusters)

    labels = clusterer.labels()
    if return_linkage:
        return labels, clusterer.linkage_matrix()
    return labels, None
