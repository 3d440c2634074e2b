from pointcluster import ClusterCollection, Point, agglomerative, print_clusters

if __name__ == "__main__":
    # Example dataset
    X = [
        [1.0, 0.0],
        [9.0, 1.0],
        [1.0, 1.0],
        [6.0, 2.0],
        [5.0, 6.0],
    ]
    points = [Point(i, x, y) for i, (x, y) in enumerate(X)]

    # Perform agglomerative clustering
    clusters, _ = agglomerative(ClusterCollection.from_points(points), n_clusters=3)

    print_clusters(clusters)
