import random

import numpy as np
import pytest

from msdijkstra import IndexedMinPQ, QueueError, QueueUnderflow, VertexOutOfRange


def test_extract_in_key_order():
    pq = IndexedMinPQ(5)
    for v, key in [(0, 3.0), (1, 1.0), (2, 4.0), (3, 0.5), (4, 2.0)]:
        pq.insert(v, key)
    assert len(pq) == 5
    assert [pq.extract_min() for _ in range(5)] == [3, 1, 4, 0, 2]
    assert not pq


def test_ties_broken_by_smallest_vertex():
    pq = IndexedMinPQ(6)
    for v in (5, 2, 4, 0):
        pq.insert(v, 1.0)
    assert [pq.extract_min() for _ in range(4)] == [0, 2, 4, 5]


def test_decrease_key_repositions():
    pq = IndexedMinPQ(4)
    pq.insert(0, 1.0)
    pq.insert(1, 5.0)
    pq.insert(2, 3.0)
    pq.decrease_key(1, 0.5)
    assert pq.key_of(1) == 0.5
    assert pq.peek_min() == (1, 0.5)
    assert pq.extract_min() == 1


def test_decrease_key_to_tie_uses_vertex_order():
    pq = IndexedMinPQ(4)
    pq.insert(0, 2.0)
    pq.insert(3, 5.0)
    pq.decrease_key(3, 2.0)
    assert pq.extract_min() == 0
    assert pq.extract_min() == 3


def test_contains_tracks_membership():
    pq = IndexedMinPQ(3)
    assert not pq.contains(1)
    pq.insert(1, 0.0)
    assert pq.contains(1)
    assert 1 in pq
    pq.extract_min()
    assert not pq.contains(1)
    assert 1 not in pq


def test_reinsert_after_extract():
    pq = IndexedMinPQ(2)
    pq.insert(1, 4.0)
    assert pq.extract_min() == 1
    pq.insert(1, 2.0)
    assert pq.key_of(1) == 2.0


def test_insert_twice_fails():
    pq = IndexedMinPQ(2)
    pq.insert(0, 1.0)
    with pytest.raises(QueueError):
        pq.insert(0, 0.5)


def test_extract_from_empty_fails():
    pq = IndexedMinPQ(2)
    with pytest.raises(QueueUnderflow):
        pq.extract_min()
    with pytest.raises(QueueUnderflow):
        pq.peek_min()


def test_decrease_key_absent_fails():
    pq = IndexedMinPQ(2)
    with pytest.raises(QueueUnderflow):
        pq.decrease_key(1, 0.0)


@pytest.mark.parametrize("new_key", [1.0, 2.0])
def test_decrease_key_must_be_strictly_smaller(new_key):
    pq = IndexedMinPQ(2)
    pq.insert(0, 1.0)
    with pytest.raises(QueueError):
        pq.decrease_key(0, new_key)
    assert pq.key_of(0) == 1.0


def test_vertex_outside_capacity():
    pq = IndexedMinPQ(2)
    with pytest.raises(VertexOutOfRange):
        pq.insert(2, 1.0)
    with pytest.raises(VertexOutOfRange):
        pq.contains(-1)


def test_matches_sorted_order_under_random_updates():
    rnd = random.Random(7)
    n = 200
    pq = IndexedMinPQ(n)
    keys = {}
    for v in rnd.sample(range(n), 150):
        keys[v] = float(rnd.randint(0, 50))
        pq.insert(v, keys[v])
    for v in rnd.sample(sorted(keys), 60):
        if keys[v] > 0:
            keys[v] = float(rnd.randint(0, int(keys[v]) - 1))
            pq.decrease_key(v, keys[v])
    out = [pq.extract_min() for _ in range(len(pq))]
    assert out == sorted(keys, key=lambda v: (keys[v], v))


def test_membership_accepts_numpy_integers():
    pq = IndexedMinPQ(3)
    pq.insert(1, 0.0)
    assert np.int64(1) in pq
    assert np.int64(2) not in pq
    assert 1.0 not in pq
    assert True not in pq
