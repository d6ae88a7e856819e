import dataclasses

import pytest

from movcpu.history import HistoryBuffer, HistoryEntry


def entry(n):
    return HistoryEntry(pc_before=n, instr=1211, src=12, dst=11, value_src=n, value_dst=0)


def test_push_pop_is_lifo():
    buf = HistoryBuffer()
    for n in range(3):
        buf.push(entry(n))
    assert [buf.pop().pc_before for _ in range(3)] == [2, 1, 0]
    assert buf.pop() is None


def test_capacity_evicts_oldest():
    buf = HistoryBuffer(capacity=100)
    for n in range(130):
        buf.push(entry(n))
    assert len(buf) == 100
    popped = [buf.pop().pc_before for _ in range(100)]
    assert popped[0] == 129
    assert popped[-1] == 30
    assert buf.empty


def test_peek_and_clear():
    buf = HistoryBuffer()
    assert buf.peek() is None
    buf.push(entry(5))
    assert buf.peek().pc_before == 5
    assert len(buf) == 1
    buf.clear()
    assert not buf
    assert buf.empty


def test_entries_are_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        entry(1).value_dst = 3
