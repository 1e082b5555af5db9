from typing import Optional

import matplotlib.pyplot as plt
from matplotlib.axes import Axes
import numpy as np


def plot_clusters(axis: Axes, X: np.ndarray, labels: np.ndarray, show: bool = False) -> Axes:
    """
    Plots the clustered data points in 2D, one scatter series per label.

    Args:
        axis (Axes): Axes to draw on.
        X (np.ndarray): Data points of shape (n_samples, 2).
        labels (np.ndarray): Cluster labels of shape (n_samples,).
        show (bool): Call plt.show() when done.
    """
    X = np.asarray(X, dtype=float)
    labels = np.asarray(labels)
    for label in np.unique(labels):
        cluster_points = X[labels == label]
        axis.scatter(cluster_points[:, 0], cluster_points[:, 1], label=f'Cluster {label}')

    axis.set_title('Hierarchical Clustering Results')
    axis.set_xlabel('Feature 1')
    axis.set_ylabel('Feature 2')
    axis.legend()
    axis.grid(True)
    if show:
        plt.show()
    return axis


def plot_dendrogram(Z: np.ndarray, axis: Optional[Axes] = None, show: bool = False) -> dict:
    """
    Plots the dendrogram of a merge history.

    Args:
        Z (np.ndarray): Linkage matrix of shape (n_samples - 1, 4), as returned by
            HierarchicalClusterer.linkage_matrix() for a full build.
        axis (Axes): Axes to draw on; a new figure is created when omitted.
        show (bool): Call plt.show() when done.

    Returns:
        dict: The structure returned by scipy's dendrogram().
    """
    from scipy.cluster.hierarchy import dendrogram

    if axis is None:
        _, axis = plt.subplots(figsize=(10, 7))
    tree = dendrogram(np.asarray(Z, dtype=float), ax=axis)
    axis.set_title('Dendrogram for Hierarchical Clustering')
    axis.set_xlabel('Sample Index')
    axis.set_ylabel('Distance')
    if show:
        plt.show()
    return tree


if __name__ == "__main__":
    from hierarchical_linkage.agglomerative import agglomerative
    rng = np.random.RandomState(0)
    A = rng.normal(loc=0.0, scale=0.3, size=(10, 2))
    B = rng.normal(loc=2.0, scale=0.3, size=(8, 2))
    X = np.vstack([A, B])

    labels, _ = agglomerative(X, n_clusters=2, linkage='ward')
    _, Z = agglomerative(X, n_clusters=1, linkage='ward', return_linkage=True)

    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(14, 6))
    plot_clusters(ax1, X, labels)
    plot_dendrogram(Z, axis=ax2, show=True)
