import matplotlib
matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest
from pointcluster.agglomerative import agglomerative
from pointcluster.plotting import plot_clusters, plot_dendrogram
from pointcluster.types import Point, ClusterCollection


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


def make_points():
    coords = [(0.0, 0.0), (0.5, 0.0), (5.0, 5.0), (5.5, 5.0), (5.0, 5.5)]
    return [Point(i + 10, x, y) for i, (x, y) in enumerate(coords)]


def test_plot_clusters_draws_one_series_per_cluster():
    collection, _ = agglomerative(ClusterCollection.from_points(make_points()), n_clusters=2)

    fig, ax = plt.subplots()
    plot_clusters(ax, collection)

    assert len(ax.collections) == 2
    labels = [text.get_text() for text in ax.get_legend().get_texts()]
    assert labels == ["Cluster 0", "Cluster 1"]


def test_plot_dendrogram_uses_point_labels():
    points = make_points()
    labels = [str(p.id) for p in points]
    _, Z = agglomerative(ClusterCollection.from_points(points), n_clusters=1, return_linkage=True)

    tree = plot_dendrogram(Z, labels=labels)

    assert sorted(tree["ivl"]) == sorted(labels)
