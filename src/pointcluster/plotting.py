import matplotlib.pyplot as plt
from matplotlib.axes import Axes
import numpy as np
from typing import Optional, Sequence

from .types import ClusterCollection


def plot_clusters(axis: Axes, collection: ClusterCollection) -> None:
    """
    Plots the points of every cluster in 2D, one colour per cluster.

    Args:
        axis (Axes): Axis to draw on.
        collection (ClusterCollection): Clusters to draw.
    """
    for index, cluster in enumerate(collection):
        coords = cluster.coordinates()
        axis.scatter(coords[:, 0], coords[:, 1], label=f'Cluster {index}')

    axis.set_title('Agglomerative Clustering Results')
    axis.set_xlabel('x')
    axis.set_ylabel('y')
    axis.legend()
    axis.grid(True)


def plot_dendrogram(Z: np.ndarray, labels: Optional[Sequence[str]] = None) -> dict:
    """
    Plots the dendrogram of a complete merge history.

    Args:
        Z (np.ndarray): Linkage matrix of shape (n_points - 1, 4), i.e. a run down to one cluster.
        labels (Sequence[str], optional): Leaf labels in original point order.

    Returns:
        dict: The structure returned by scipy's dendrogram().
    """
    from scipy.cluster.hierarchy import dendrogram

    plt.figure(figsize=(10, 7))
    tree = dendrogram(Z, labels=labels)
    plt.title('Dendrogram for Agglomerative Clustering')
    plt.xlabel('Point id')
    plt.ylabel('Average distance')
    return tree


if __name__ == "__main__":
    # Example usage
    from pointcluster.agglomerative import agglomerative
    from pointcluster.types import Point

    rng = np.random.RandomState(0)
    A = rng.normal(loc=0.0, scale=0.3, size=(10, 2))
    B = rng.normal(loc=2.0, scale=0.3, size=(8, 2))
    X = np.vstack([A, B])
    points = [Point(i, float(x), float(y)) for i, (x, y) in enumerate(X)]

    clusters, Z = agglomerative(ClusterCollection.from_points(points), n_clusters=2, return_linkage=True)

    fig, ax = plt.subplots()
    plot_clusters(ax, clusters)
    plt.show()
