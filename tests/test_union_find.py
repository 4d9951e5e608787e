import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from algorithms import DisjointSet


def test_singletons():
    ds = DisjointSet(4)
    assert ds.components() == 4
    assert [ds.find(i) for i in range(4)] == [0, 1, 2, 3]


def test_union_hangs_first_root_under_second():
    ds = DisjointSet(3)
    assert ds.union(0, 1)
    assert ds.parent[0] == 1
    assert ds.find(0) == 1
    assert ds.components() == 2


def test_union_same_set_is_refused():
    ds = DisjointSet(3)
    ds.union(0, 1)
    ds.union(1, 2)
    assert not ds.union(0, 2)
    assert ds.find(0) == ds.find(2)
    assert ds.components() == 1


def test_find_compresses_path():
    ds = DisjointSet(4)
    ds.parent = [0, 0, 1, 2]   # 3 → 2 → 1 → 0
    assert ds.find(3) == 0
    assert ds.parent == [0, 0, 0, 0]


def test_groups():
    ds = DisjointSet(5)
    ds.union(0, 1)
    ds.union(3, 4)
    groups = sorted(sorted(g) for g in ds.groups().values())
    assert groups == [[0, 1], [2], [3, 4]]
