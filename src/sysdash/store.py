"""Thread-safe holder for the current snapshot and recent history."""

from __future__ import annotations

import threading
from collections import deque

from .models import Snapshot

DEFAULT_HISTORY_SIZE = 120


class Store:
    """Latest snapshot plus a bounded FIFO history, oldest first.

    The collector is the only writer. Readers get copies taken under the
    same lock, so a publish that happens afterwards is never visible in
    (and cannot tear) what they hold.
    """

    def __init__(self, capacity: int = DEFAULT_HISTORY_SIZE) -> None:
        if capacity < 1:
            raise ValueError("history capacity must be at least 1")
        self._lock = threading.Lock()
        self._current = Snapshot.empty()
        self._history: deque[Snapshot] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._history.maxlen or 0

    def publish(self, snapshot: Snapshot) -> None:
        """Replace the current snapshot and append it to history."""
        with self._lock:
            self._current = snapshot
            self._history.append(snapshot)

    def current(self) -> Snapshot:
        """Most recently published snapshot, or the zero-value snapshot."""
        with self._lock:
            return self._current

    def history_snapshot(self) -> list[Snapshot]:
        """Point-in-time copy of the history."""
        with self._lock:
            return list(self._history)

    def latest_pair(self) -> tuple[Snapshot, Snapshot] | None:
        """The two newest history entries, older first."""
        with self._lock:
            if len(self._history) < 2:
                return None
            return self._history[-2], self._history[-1]
