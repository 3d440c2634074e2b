#!/usr/bin/env python3
# agglomerative.py
"""
Agglomerative clustering of 2-D points with average linkage.

Every point starts in its own cluster. The two clusters with the smallest
mean pairwise Euclidean distance are merged, the absorbed cluster is removed
from the collection, and the scan repeats until the requested number of
clusters is left. Cluster-to-cluster distances are recomputed from the
member points on every scan (O(k^2 * n1 * n2) per scan, no caching or
spatial index), vectorized with NumPy per cluster pair.

The merge history can be returned as a SciPy-style linkage matrix.

Doxygen-style docstrings are used (with @param / @return tags).
"""

from typing import Tuple, List, Optional
import logging
import math

import numpy as np

from .errors import PreconditionViolation
from .types import Point, Cluster, ClusterCollection

__all__ = [
    "point_distance",
    "cluster_distance",
    "find_neighbours",
    "merge_clusters",
    "remove_cluster",
    "agglomerative",
]

logger = logging.getLogger(__name__)


def point_distance(p1: Point, p2: Point) -> float:
    """
    Euclidean distance between two points.

    @param p1: first point
    @param p2: second point
    @return: sqrt((x1 - x2)^2 + (y1 - y2)^2), 0.0 for coinciding points
    """
    dx = p1.x - p2.x
    dy = p1.y - p2.y
    return math.sqrt(dx * dx + dy * dy)


def cluster_distance(c1: Cluster, c2: Cluster) -> float:
    """
    Average linkage: mean of the Euclidean distances over every pair
    (a, b) with a in c1 and b in c2.

    @param c1: non-empty cluster
    @param c2: non-empty cluster
    @return: mean pairwise distance
    @raises PreconditionViolation: if either cluster is empty
    """
    if len(c1) == 0 or len(c2) == 0:
        raise PreconditionViolation("cluster distance is undefined for an empty cluster")

    A = c1.coordinates()  # (n1, 2)
    B = c2.coordinates()  # (n2, 2)
    diff = A[:, np.newaxis, :] - B[np.newaxis, :, :]
    D = np.sqrt(np.sum(diff * diff, axis=2))
    # correctly rounded sum, so the result does not depend on argument order
    return math.fsum(D.ravel()) / D.size


def _closest_pair(collection: ClusterCollection) -> Tuple[int, int, float]:
    n = len(collection)
    if n < 2:
        raise PreconditionViolation(f"need at least 2 clusters to find neighbours, got {n}")

    best_i, best_j = 0, 1
    best_dist = math.inf
    for i in range(n):
        for j in range(i + 1, n):
            dist = cluster_distance(collection[i], collection[j])
            if dist < best_dist:
                best_i, best_j, best_dist = i, j, dist
    return best_i, best_j, best_dist


def find_neighbours(collection: ClusterCollection) -> Tuple[int, int]:
    """
    Find the two clusters with the smallest average-linkage distance.

    Pairs are scanned with the outer index ascending and the inner index
    ascending above it; only a strictly smaller distance replaces the current
    best, so on ties the first pair in that order is returned.

    @param collection: at least two non-empty clusters
    @return: tuple (a, b) of indices with a < b
    @raises PreconditionViolation: fewer than two clusters
    """
    i, j, _ = _closest_pair(collection)
    return i, j


def merge_clusters(c1: Cluster, c2: Cluster) -> None:
    """
    Merge cluster c2 into cluster c1.

    Points of c2 are appended after those of c1 in their current order
    (c1 grows by its chunk as needed), then c1 is sorted by id. c2 is not
    modified; removing it is the caller's job.

    @param c1: surviving cluster; modified in-place
    @param c2: absorbed cluster
    @return: None
    """
    if c1 is c2:
        raise PreconditionViolation("Cannot merge a cluster with itself.")
    c1.extend(c2)
    c1.sort_by_id()


def remove_cluster(collection: ClusterCollection, index: int) -> int:
    """
    Clear the cluster at `index` and remove it, keeping the order of the rest.

    @param collection: collection to shrink; modified in-place
    @param index: 0 <= index < len(collection)
    @return: number of clusters left
    @raises PreconditionViolation: index out of range or empty collection
    """
    return collection.remove(index)


def agglomerative(collection: ClusterCollection,
                  n_clusters: int = 1,
                  return_linkage: bool = False) -> Tuple[ClusterCollection, Optional[np.ndarray]]:
    """
    Merge neighbouring clusters until at most `n_clusters` remain.

    The collection is reduced in place: in each step the pair (a, b) from
    find_neighbours() is merged into a, which keeps its index, and b is
    removed. A target at or above the current count performs no merges.

    @param collection: clusters to reduce; all must be non-empty
    @param n_clusters: target number of clusters (>= 1)
    @param return_linkage: if True, also return SciPy-style linkage matrix Z shape (merges, 4)
                           with rows [node_a, node_b, dist, new_cluster_size]

    @return: tuple (collection, linkage_matrix_or_None)
    @raises PreconditionViolation: n_clusters < 1
    """
    if n_clusters < 1:
        raise PreconditionViolation(f"n_clusters must be at least 1, got {n_clusters}")

    n = len(collection)
    logger.info("Clustering %d clusters (%d points) down to %d",
                n, collection.total_points(), n_clusters)

    # bookkeeping for linkage matrix (if requested)
    if return_linkage:
        node_id = list(range(n))  # current mapping: cluster index -> node id
        Z_rows: List[List[float]] = []
        next_node = n
    else:
        node_id = None
        Z_rows = None
        next_node = n  # unused

    merges = 0
    while len(collection) > n_clusters:
        a, b, dist = _closest_pair(collection)
        if return_linkage:
            new_size = len(collection[a]) + len(collection[b])
            Z_rows.append([float(node_id[a]), float(node_id[b]), dist, float(new_size)])
            # the surviving cluster a gets assigned the new node id
            node_id[a] = next_node
            next_node += 1
            del node_id[b]

        merge_clusters(collection[a], collection[b])
        remove_cluster(collection, b)
        merges += 1
        logger.debug("Merged cluster %d into %d at distance %g, new size %d, %d clusters left",
                     b, a, dist, len(collection[a]), len(collection))

    logger.info("Finished after %d merges with %d clusters", merges, len(collection))

    if return_linkage:
        Z = np.array(Z_rows, dtype=float).reshape(-1, 4)
        return collection, Z
    else:
        return collection, None
