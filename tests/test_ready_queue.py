import pytest

from schedsim.ready_queue import ReadyQueue


def test_fifo_order():
    q = ReadyQueue()
    for i in (3, 1, 2):
        q.push(i)
    assert len(q) == 3
    assert [q.pop(), q.pop(), q.pop()] == [3, 1, 2]
    assert q.is_empty()
    assert len(q) == 0


def test_pop_empty_raises():
    q = ReadyQueue()
    with pytest.raises(IndexError, match="empty ready queue"):
        q.pop()


def test_interleaved_growth_keeps_order():
    q = ReadyQueue()
    expected = []
    popped = []
    for i in range(1000):
        q.push(i)
        expected.append(i)
        if i % 3 == 0:
            popped.append(q.pop())
    while not q.is_empty():
        popped.append(q.pop())
    assert popped == expected
