import dataclasses

import numpy as np
import pytest
from pointcluster.config import CLUSTER_CHUNK
from pointcluster.errors import AllocationError, PreconditionViolation
from pointcluster.types import Point, Cluster, ClusterCollection


def test_point_is_immutable():
    p = Point(1, 2.0, 3.0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        p.x = 5.0
    assert p.as_tuple() == (2.0, 3.0)


def test_init_zero_capacity_allocates_nothing():
    c = Cluster(0)
    assert len(c) == 0
    assert c.capacity == 0
    assert c.chunk == CLUSTER_CHUNK
    assert c.points == []
    assert c.coordinates().shape == (0, 2)


def test_init_with_capacity():
    c = Cluster(5)
    assert c.length == 0
    assert c.capacity == 5


@pytest.mark.parametrize("capacity, chunk", [(-1, 10), (0, 0), (3, -2)])
def test_init_rejects_bad_arguments(capacity, chunk):
    with pytest.raises(PreconditionViolation):
        Cluster(capacity, chunk=chunk)


def test_append_grows_by_chunk_and_keeps_order():
    """
    Appending past capacity grows storage by exactly one chunk, length grows
    by one per append and earlier points stay where they were.
    """
    c = Cluster(0, chunk=3)
    expected = []
    capacities = []
    for i in range(7):
        before = c.points
        p = Point(i, float(i), -float(i))
        c.append(p)
        expected.append(p)
        capacities.append(c.capacity)

        assert len(c) == i + 1
        assert c.points[:-1] == before
        assert c.capacity >= len(c)

    assert c.points == expected
    assert capacities == [3, 3, 3, 6, 6, 6, 9]


def test_resize_grows_and_preserves_points():
    c = Cluster(2)
    c.append(Point(1, 1.0, 1.0))
    c.append(Point(2, 2.0, 2.0))

    assert c.resize(8) is c
    assert c.capacity == 8
    assert c.ids().tolist() == [1, 2]


@pytest.mark.parametrize("new_capacity", [0, 1, 4])
def test_resize_never_shrinks(new_capacity):
    c = Cluster(4)
    c.append(Point(1, 1.0, 1.0))
    c.resize(new_capacity)
    assert c.capacity == 4
    assert len(c) == 1


def test_resize_rejects_negative():
    with pytest.raises(PreconditionViolation):
        Cluster(1).resize(-1)


def test_resize_failure_leaves_cluster_unchanged(monkeypatch):
    c = Cluster(1)
    c.append(Point(7, 1.0, 2.0))

    def fail(*args, **kwargs):
        raise MemoryError

    monkeypatch.setattr("pointcluster.types.np.empty", fail)

    with pytest.raises(AllocationError):
        c.resize(100)
    with pytest.raises(AllocationError):
        c.append(Point(8, 0.0, 0.0))

    assert c.capacity == 1
    assert c.points == [Point(7, 1.0, 2.0)]


def test_resize_too_large_raises_allocation_error():
    c = Cluster(0)
    with pytest.raises(AllocationError):
        c.resize(2 ** 62)
    assert c.capacity == 0


def test_clear_is_idempotent_and_cluster_reusable():
    c = Cluster(0, chunk=2)
    for i in range(3):
        c.append(Point(i, 0.0, 0.0))

    c.clear()
    assert (len(c), c.capacity) == (0, 0)
    c.clear()
    assert (len(c), c.capacity) == (0, 0)

    c.append(Point(9, 1.0, 1.0))
    assert len(c) == 1
    assert c.capacity == 2
    assert c[0] == Point(9, 1.0, 1.0)


def test_init_resets_existing_cluster():
    c = Cluster(0)
    c.append(Point(1, 0.0, 0.0))
    c.init(3)
    assert len(c) == 0
    assert c.capacity == 3


def test_sort_by_id():
    c = Cluster()
    for pid in [5, 3, 9, 1]:
        c.append(Point(pid, float(pid), 0.0))

    c.sort_by_id()

    assert c.ids().tolist() == [1, 3, 5, 9]
    assert [p.x for p in c] == [1.0, 3.0, 5.0, 9.0]


def test_getitem_checks_bounds():
    c = Cluster(10)
    c.append(Point(1, 0.5, 1.5))
    assert c[-1] == Point(1, 0.5, 1.5)
    with pytest.raises(IndexError):
        c[1]


def test_extend_appends_in_order_and_grows():
    c = Cluster(1, chunk=2)
    c.append(Point(9, 0.0, 0.0))
    c.extend([Point(3, 1.0, 0.0), Point(5, 2.0, 0.0), Point(1, 3.0, 0.0)])

    assert c.ids().tolist() == [9, 3, 5, 1]
    assert c.capacity == 5


def test_collection_indexing_follows_list_protocol():
    collection = ClusterCollection.from_points([Point(1, 0.0, 0.0), Point(2, 1.0, 0.0)])
    assert collection[-1][0].id == 2
    with pytest.raises(IndexError):
        collection[2]


def test_coordinates_shape_and_values():
    c = Cluster()
    c.append(Point(1, 0.0, 1.0))
    c.append(Point(2, 2.0, 3.0))
    assert np.array_equal(c.coordinates(), np.array([[0.0, 1.0], [2.0, 3.0]]))


def test_collection_from_points_builds_singletons():
    points = [Point(3, 0.0, 0.0), Point(1, 1.0, 1.0)]
    collection = ClusterCollection.from_points(points, chunk=4)

    assert len(collection) == 2
    assert collection.total_points() == 2
    assert [c.points for c in collection] == [[points[0]], [points[1]]]
    assert all(c.chunk == 4 for c in collection)
