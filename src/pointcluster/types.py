"""
Data model for point clustering: points, clusters and the cluster collection.

A Cluster keeps its points in a NumPy structured array whose size (the
capacity) is tracked separately from the number of stored points (the
length). Storage grows by a fixed chunk when an append finds it full and is
only released by clear().

Doxygen-style docstrings are used (with @param / @return tags).
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple

import numpy as np

from .config import CLUSTER_CHUNK
from .errors import AllocationError, PreconditionViolation

__all__ = [
    "POINT_DTYPE",
    "Point",
    "Cluster",
    "ClusterCollection",
]

POINT_DTYPE = np.dtype([("id", np.int64), ("x", np.float64), ("y", np.float64)])


@dataclass(frozen=True)
class Point:
    """An identified point in the plane."""
    id: int
    x: float
    y: float

    def as_tuple(self) -> Tuple[float, float]:
        """Return coordinates as a tuple."""
        return (self.x, self.y)


def _allocate(capacity: int) -> np.ndarray:
    try:
        return np.empty(capacity, dtype=POINT_DTYPE)
    except (MemoryError, ValueError) as exc:
        raise AllocationError(f"cannot allocate storage for {capacity} points") from exc


class Cluster:
    """
    Growable ordered sequence of points with explicit capacity.

    Indexing follows the list protocol: cluster[i] accepts negative indices
    and raises IndexError when out of range.

    @param capacity: number of points to allocate storage for (0 allocates nothing)
    @param chunk: growth increment used by append() when storage is full
    @raises PreconditionViolation: negative capacity or chunk < 1
    @raises AllocationError: storage could not be obtained
    """

    def __init__(self, capacity: int = 0, chunk: int = CLUSTER_CHUNK):
        if chunk < 1:
            raise PreconditionViolation(f"chunk must be positive, got {chunk}")
        self._chunk = int(chunk)
        self._storage: Optional[np.ndarray] = None
        self._length = 0
        self._capacity = 0
        self.init(capacity)

    @property
    def length(self) -> int:
        return self._length

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def chunk(self) -> int:
        return self._chunk

    @property
    def points(self) -> List[Point]:
        """Copy of the stored points in order."""
        return list(self)

    def init(self, capacity: int) -> None:
        """
        (Re)initialize the cluster as empty with storage for `capacity` points.
        Any previously held storage is released.

        @param capacity: non-negative number of points
        """
        if capacity < 0:
            raise PreconditionViolation(f"capacity must be non-negative, got {capacity}")
        storage = _allocate(capacity) if capacity > 0 else None
        self._storage = storage
        self._capacity = int(capacity)
        self._length = 0

    def clear(self) -> None:
        """Release storage and reset to length 0, capacity 0. Safe to repeat."""
        self._storage = None
        self._capacity = 0
        self._length = 0

    def resize(self, new_capacity: int) -> "Cluster":
        """
        Grow storage to hold at least `new_capacity` points.

        Capacity never shrinks here: a request not above the current capacity
        leaves the cluster as it is. Stored points keep their order.

        @param new_capacity: requested capacity, >= 0
        @return: this cluster
        @raises AllocationError: the cluster is left unchanged
        """
        if new_capacity < 0:
            raise PreconditionViolation(f"capacity must be non-negative, got {new_capacity}")
        if new_capacity <= self._capacity:
            return self

        storage = _allocate(new_capacity)
        if self._length:
            storage[:self._length] = self._storage[:self._length]
        self._storage = storage
        self._capacity = int(new_capacity)
        return self

    def append(self, point: Point) -> None:
        """
        Add `point` after the last stored point, growing by one chunk first
        if the storage is full.
        """
        if self._length == self._capacity:
            self.resize(self._capacity + self._chunk)
        self._storage[self._length] = (point.id, point.x, point.y)
        self._length += 1

    def extend(self, points: Iterable[Point]) -> None:
        """Append each of `points` in order."""
        for point in points:
            self.append(point)

    def sort_by_id(self) -> None:
        """Reorder points in ascending order of id."""
        if self._length > 1:
            used = self._storage[:self._length]
            self._storage[:self._length] = used[np.argsort(used["id"], kind="stable")]

    def ids(self) -> np.ndarray:
        """Ids of the stored points, shape (length,)."""
        if self._length == 0:
            return np.empty(0, dtype=np.int64)
        return self._storage["id"][:self._length].copy()

    def coordinates(self) -> np.ndarray:
        """Coordinates of the stored points as a float array of shape (length, 2)."""
        if self._length == 0:
            return np.empty((0, 2), dtype=float)
        used = self._storage[:self._length]
        return np.column_stack((used["x"], used["y"]))

    def __len__(self) -> int:
        return self._length

    def __getitem__(self, index: int) -> Point:
        if index < 0:
            index += self._length
        if not 0 <= index < self._length:
            raise IndexError("cluster index out of range")
        record = self._storage[index]
        return Point(int(record["id"]), float(record["x"]), float(record["y"]))

    def __iter__(self) -> Iterator[Point]:
        for index in range(self._length):
            yield self[index]

    def __repr__(self) -> str:
        return f"Cluster(length={self._length}, capacity={self._capacity}, ids={self.ids().tolist()})"


class ClusterCollection:
    """
    Ordered, indexable sequence of clusters. Owns every cluster it holds.
    Indexing follows the list protocol (IndexError); remove() checks its
    index and raises PreconditionViolation.
    """

    def __init__(self, clusters: Optional[Iterable[Cluster]] = None):
        self._clusters: List[Cluster] = list(clusters) if clusters is not None else []

    @classmethod
    def from_points(cls, points: Iterable[Point], chunk: int = CLUSTER_CHUNK) -> "ClusterCollection":
        """
        Build a collection with one singleton cluster per point, in order.

        @param points: points to wrap
        @param chunk: growth increment given to every cluster
        @return: new collection
        """
        collection = cls()
        for point in points:
            cluster = Cluster(1, chunk=chunk)
            cluster.append(point)
            collection.append(cluster)
        return collection

    def append(self, cluster: Cluster) -> None:
        self._clusters.append(cluster)

    def remove(self, index: int) -> int:
        """
        Clear the cluster at `index` and drop it, shifting later clusters
        one position left.

        @param index: 0 <= index < len(self)
        @return: number of clusters left
        @raises PreconditionViolation: index outside the collection (also when empty)
        """
        count = len(self._clusters)
        if count == 0:
            raise PreconditionViolation("cannot remove a cluster from an empty collection")
        if not 0 <= index < count:
            raise PreconditionViolation(f"cluster index {index} out of range for {count} clusters")
        self._clusters[index].clear()
        del self._clusters[index]
        return count - 1

    def total_points(self) -> int:
        return sum(len(cluster) for cluster in self._clusters)

    def __len__(self) -> int:
        return len(self._clusters)

    def __getitem__(self, index: int) -> Cluster:
        return self._clusters[index]

    def __iter__(self) -> Iterator[Cluster]:
        return iter(self._clusters)

    def __repr__(self) -> str:
        return f"ClusterCollection({len(self._clusters)} clusters, {self.total_points()} points)"
