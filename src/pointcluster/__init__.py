"""
Agglomerative clustering of 2-D labeled points.

Points start as singleton clusters; the pair of clusters with the smallest
average pairwise distance is merged until a target cluster count is left.
"""

from .types import Point, Cluster, ClusterCollection
from .errors import PointClusterError, AllocationError, PreconditionViolation, LoadError
from .agglomerative import (
    point_distance,
    cluster_distance,
    find_neighbours,
    merge_clusters,
    remove_cluster,
    agglomerative,
)
from .io import parse_points, load_clusters, format_cluster, print_cluster, print_clusters

__all__ = [
    "Point",
    "Cluster",
    "ClusterCollection",
    "PointClusterError",
    "AllocationError",
    "PreconditionViolation",
    "LoadError",
    "point_distance",
    "cluster_distance",
    "find_neighbours",
    "merge_clusters",
    "remove_cluster",
    "agglomerative",
    "parse_points",
    "load_clusters",
    "format_cluster",
    "print_cluster",
    "print_clusters",
]
