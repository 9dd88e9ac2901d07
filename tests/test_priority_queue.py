import random
from dataclasses import dataclass

import pytest

from voronoi_terrain.priority_queue import PriorityQueue


@dataclass(eq=False)
class Item:
    value: float
    index: int = -1

    def __lt__(self, other):
        return self.value < other.value


def _fill(values):
    queue = PriorityQueue()
    items = [Item(v) for v in values]
    for item in items:
        queue.push(item)
    return queue, items


def _drain(queue):
    out = []
    while queue:
        out.append(queue.pop().value)
    return out


def test_empty_queue():
    queue = PriorityQueue()
    assert len(queue) == 0
    assert not queue


def test_pop_empty_raises():
    with pytest.raises(IndexError):
        PriorityQueue().pop()


def test_pops_in_descending_order():
    values = [3.0, 1.0, 4.0, 1.5, 5.0, 9.0, 2.0, 6.0]
    queue, _ = _fill(values)
    assert len(queue) == len(values)
    assert _drain(queue) == sorted(values, reverse=True)


def test_indices_are_distinct_positions():
    queue, items = _fill([5.0, 2.0, 8.0, 1.0, 7.0])
    assert sorted(item.index for item in items) == list(range(len(items)))


def test_remove_by_tracked_index():
    values = [5.0, 2.0, 8.0, 1.0, 7.0, 3.0]
    queue, items = _fill(values)
    removed = items[4]
    queue.remove(removed.index)
    assert len(queue) == len(values) - 1
    assert _drain(queue) == sorted([v for v in values if v != 7.0], reverse=True)


def test_remove_out_of_range():
    queue, _ = _fill([1.0])
    with pytest.raises(IndexError):
        queue.remove(1)


def test_update_after_change():
    values = [5.0, 2.0, 8.0, 1.0]
    queue, items = _fill(values)
    target = items[3]
    target.value = 10.0
    queue.update(target.index)
    assert queue.pop() is target
    assert _drain(queue) == [8.0, 5.0, 2.0]


def test_random_removals_keep_order():
    rng = random.Random(1234)
    values = [rng.uniform(-100, 100) for _ in range(200)]
    queue, items = _fill(values)
    to_remove = rng.sample(items, 60)
    for item in to_remove:
        queue.remove(item.index)
    kept = sorted(set(map(id, items)) - set(map(id, to_remove)))
    expected = sorted((i.value for i in items if id(i) in set(kept)), reverse=True)
    assert _drain(queue) == expected