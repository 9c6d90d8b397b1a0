"""Tests for the frontier priority queue."""

from pathviz.domain.priority_queue import FrontierQueue


def drain(queue):
    order = []
    while True:
        entry = queue.pop()
        if entry is None:
            return order
        order.append(entry.index)


def test_pop_empty_returns_none():
    queue = FrontierQueue()
    assert queue.pop() is None
    assert queue.peek() is None
    assert queue.is_empty()


def test_orders_by_f_cost():
    queue = FrontierQueue()
    queue.put(1, 5.0, 0.0)
    queue.put(2, 3.0, 0.0)
    queue.put(3, 4.0, 0.0)
    assert drain(queue) == [2, 3, 1]


def test_ties_broken_by_lower_g_cost():
    queue = FrontierQueue()
    queue.put(1, 6.0, 4.0)
    queue.put(2, 6.0, 2.0)
    queue.put(3, 6.0, 3.0)
    assert drain(queue) == [2, 3, 1]


def test_full_ties_broken_by_insertion_order():
    queue = FrontierQueue()
    for index in (7, 3, 9, 1):
        queue.put(index, 2.0, 1.0)
    assert drain(queue) == [7, 3, 9, 1]


def test_better_priority_replaces_entry():
    queue = FrontierQueue()
    queue.put(1, 5.0, 5.0)
    queue.put(2, 4.0, 4.0)
    queue.put(1, 3.0, 3.0)

    assert len(queue) == 2
    assert queue.get_cost(1) == 3.0
    assert drain(queue) == [1, 2]


def test_worse_priority_is_ignored():
    queue = FrontierQueue()
    queue.put(1, 3.0, 1.0)
    queue.put(1, 5.0, 1.0)

    assert len(queue) == 1
    assert queue.get_cost(1) == 3.0


def test_contains_and_peek():
    queue = FrontierQueue()
    queue.put(4, 1.0, 0.0)
    queue.put(5, 2.0, 0.0)
    queue.put(4, 0.5, 0.0)

    assert 4 in queue and 5 in queue and 6 not in queue
    assert queue.peek().index == 4
    queue.pop()
    assert 4 not in queue
    assert queue.peek().index == 5


def test_items_skip_stale_entries():
    queue = FrontierQueue()
    queue.put(1, 5.0, 5.0)
    queue.put(1, 2.0, 2.0)
    queue.put(2, 3.0, 3.0)
    assert sorted(queue.items()) == [(1, 2.0), (2, 3.0)]


def test_clear():
    queue = FrontierQueue()
    queue.put(1, 1.0, 1.0)
    queue.clear()
    assert len(queue) == 0
    assert queue.pop() is None
