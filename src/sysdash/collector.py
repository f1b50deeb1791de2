"""Periodic collection loop."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from datetime import UTC, datetime
from typing import TypeVar

from .delta import cpu_percent
from .errors import ProbeError
from .models import CPUTimes, LoadAvg, MemInfo, ProbeFailure, Snapshot
from .persist import Persister
from .probes import (
    BaseProbe,
    CPUProbe,
    LoadProbe,
    MemoryProbe,
    NetworkProbe,
    ThermalProbe,
    UptimeProbe,
    cpu_cores,
    host_identity,
)
from .store import Store

log = logging.getLogger(__name__)

T = TypeVar("T")


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Collector:
    """Run every probe once per tick and publish the resulting snapshot.

    A probe failure zeroes that probe's fields and is recorded in the
    snapshot; it never stops the tick or the loop.
    """

    def __init__(
        self,
        store: Store,
        persister: Persister | None = None,
        *,
        interval: float = 2.0,
        proc_root: str = "/proc",
        sys_root: str = "/sys",
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        now: Callable[[], datetime] = _utcnow,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.store = store
        self.persister = persister
        self.interval = interval
        self.cpu = CPUProbe(proc_root)
        self.memory = MemoryProbe(proc_root)
        self.load = LoadProbe(proc_root)
        self.uptime = UptimeProbe(proc_root)
        self.network = NetworkProbe(sys_root)
        self.thermal = ThermalProbe(sys_root)
        self._clock = clock
        self._sleep = sleep
        self._now = now
        self._prev_cpu: CPUTimes | None = None
        self._thread: threading.Thread | None = None
        self.hostname, self.os_name, self.kernel = host_identity()
        self.cores = cpu_cores()

    def _read(self, probe: BaseProbe, default: T, failures: list[ProbeFailure]) -> T:
        try:
            return probe.collect()
        except ProbeError as e:
            failures.append(ProbeFailure(e.source, e.cause))
            log.debug("probe failed: %s", e.cause, extra={"source": e.source})
            return default

    def sample(self) -> Snapshot:
        """Read all probes and build a snapshot without publishing it."""
        failures: list[ProbeFailure] = []

        cur_cpu: CPUTimes | None = self._read(self.cpu, None, failures)
        mem = self._read(self.memory, MemInfo(), failures)
        load = self._read(self.load, LoadAvg(), failures)
        uptime = self._read(self.uptime, 0, failures)
        net = self._read(self.network, (), failures)
        temps = self._read(self.thermal, (), failures)

        pct = cpu_percent(self._prev_cpu, cur_cpu)
        self._prev_cpu = cur_cpu

        return Snapshot(
            timestamp=self._now(),
            hostname=self.hostname,
            os=self.os_name,
            kernel=self.kernel,
            uptime_sec=uptime,
            load1=load.load1,
            load5=load.load5,
            load15=load.load15,
            cpu_percent=pct,
            cpu_cores=self.cores,
            mem_total_bytes=mem.total_bytes,
            mem_available_bytes=mem.available_bytes,
            swap_total_bytes=mem.swap_total_bytes,
            swap_free_bytes=mem.swap_free_bytes,
            net=net,
            temps=temps,
            failures=tuple(failures),
        )

    def tick(self) -> Snapshot:
        """One full tick: sample, publish, persist."""
        snapshot = self.sample()
        self.store.publish(snapshot)
        if self.persister is not None:
            self.persister.save(snapshot)
        return snapshot

    def run_forever(self, *, max_ticks: int | None = None) -> None:
        """Tick at a fixed cadence measured from each tick's start.

        An overrunning tick is followed immediately by the next one; the
        delay never accumulates. ``max_ticks`` exists for tests.
        """
        ticks = 0
        while max_ticks is None or ticks < max_ticks:
            start = self._clock()
            try:
                self.tick()
            except Exception:
                log.exception("tick failed")
            ticks += 1
            if max_ticks is not None and ticks >= max_ticks:
                break
            remaining = start + self.interval - self._clock()
            if remaining > 0:
                self._sleep(remaining)

    def start(self) -> threading.Thread:
        """Run the loop on a daemon thread for the rest of the process lifetime."""
        if self._thread is not None:
            raise RuntimeError("collector already started")
        self._thread = threading.Thread(target=self.run_forever, name="sysdash-collector", daemon=True)
        self._thread.start()
        log.info("collector started", extra={"interval": self.interval})
        return self._thread
