from hierarchical_linkage.clusterer import HierarchicalClusterer

if __name__ == "__main__":
    # Example dataset
    X = [
        [1.0, 0.0],
        [9.0, 1.0],
        [1.0, 1.0],
        [6.0, 2.0],
        [5.0, 6.0],
    ]

    # Perform hierarchical clustering, keeping the last two merges
    clusterer = HierarchicalClusterer(linkage="average", depth=2).build(X, number_of_clusters=2)

    for data, cluster in zip(X, clusterer.labels()):
        print(f"Data point: {data}, Cluster: {cluster}")

    for partition in clusterer.cluster_tree():
        print(f"{len(partition)} clusters: {partition}")
