import matplotlib.pyplot as plt
import numpy as np

from hierarchical_linkage.agglomerative import agglomerative
from hierarchical_linkage.plotting import plot_clusters, plot_dendrogram

X = np.array([[0.0, 0.0], [0.0, 1.0], [5.0, 5.0], [5.0, 6.0], [9.0, 0.0]])


def test_plot_clusters_draws_one_series_per_label():
    labels, _ = agglomerative(X, n_clusters=3, linkage="single")
    fig, ax = plt.subplots()
    try:
        out = plot_clusters(ax, X, labels)
        assert out is ax
        assert len(ax.collections) == 3
        assert ax.get_title() == 'Hierarchical Clustering Results'
    finally:
        plt.close(fig)


def test_plot_dendrogram_lists_every_leaf():
    _, Z = agglomerative(X, n_clusters=1, linkage="ward", return_linkage=True)
    fig, ax = plt.subplots()
    try:
        tree = plot_dendrogram(Z, axis=ax)
        assert sorted(tree["leaves"]) == list(range(len(X)))
    finally:
        plt.close(fig)
