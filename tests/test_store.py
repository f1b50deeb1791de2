from __future__ import annotations

import threading

import pytest

from sysdash.models import Snapshot
from sysdash.store import Store


def test_current_before_publish_is_zero_value() -> None:
    store = Store()
    assert store.current() == Snapshot.empty()
    assert store.history_snapshot() == []
    assert store.latest_pair() is None


def test_publish_replaces_current_and_appends() -> None:
    store = Store()
    a, b = Snapshot(uptime_sec=1), Snapshot(uptime_sec=2)
    store.publish(a)
    store.publish(b)
    assert store.current() is b
    assert store.history_snapshot() == [a, b]
    assert store.latest_pair() == (a, b)


def test_history_is_bounded_fifo() -> None:
    store = Store()
    snaps = [Snapshot(uptime_sec=i) for i in range(121)]
    for s in snaps:
        store.publish(s)

    history = store.history_snapshot()
    assert len(history) == 120
    assert snaps[0] not in history
    assert history[0] is snaps[1]
    assert history[-1] is snaps[-1]


def test_history_copy_is_not_affected_by_later_publishes() -> None:
    store = Store(capacity=3)
    for i in range(3):
        store.publish(Snapshot(uptime_sec=i))
    copy = store.history_snapshot()
    store.publish(Snapshot(uptime_sec=99))
    assert [s.uptime_sec for s in copy] == [0, 1, 2]
    assert [s.uptime_sec for s in store.history_snapshot()] == [1, 2, 99]


def test_invalid_capacity() -> None:
    with pytest.raises(ValueError):
        Store(capacity=0)


def test_concurrent_reads_see_consistent_history() -> None:
    store = Store(capacity=50)
    done = threading.Event()
    errors: list[str] = []

    def writer() -> None:
        for i in range(2000):
            store.publish(Snapshot(uptime_sec=i))
        done.set()

    def reader() -> None:
        while not done.is_set():
            history = store.history_snapshot()
            if len(history) > 50:
                errors.append(f"history too long: {len(history)}")
            seq = [s.uptime_sec for s in history]
            if seq != sorted(seq) or (seq and seq[-1] - seq[0] != len(seq) - 1):
                errors.append(f"non-contiguous history: {seq[:3]}...")

    readers = [threading.Thread(target=reader) for _ in range(4)]
    for t in readers:
        t.start()
    writer()
    for t in readers:
        t.join()

    assert errors == []
    assert store.current().uptime_sec == 1999
