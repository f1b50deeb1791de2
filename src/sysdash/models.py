"""Snapshot data model."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

ZERO_TIME = datetime(1, 1, 1, tzinfo=UTC)


@dataclass(frozen=True, slots=True)
class CPUTimes:
    """Aggregate CPU counters from the ``cpu`` line of /proc/stat, in clock ticks."""

    user: int = 0
    nice: int = 0
    system: int = 0
    idle: int = 0
    iowait: int = 0
    irq: int = 0
    softirq: int = 0
    steal: int = 0
    guest: int = 0
    guest_nice: int = 0

    @property
    def idle_total(self) -> int:
        return self.idle + self.iowait

    @property
    def busy_total(self) -> int:
        # guest time is already accounted in user/nice
        return self.user + self.nice + self.system + self.irq + self.softirq + self.steal


@dataclass(frozen=True, slots=True)
class MemInfo:
    total_bytes: int = 0
    available_bytes: int = 0
    swap_total_bytes: int = 0
    swap_free_bytes: int = 0


@dataclass(frozen=True, slots=True)
class LoadAvg:
    load1: float = 0.0
    load5: float = 0.0
    load15: float = 0.0


@dataclass(frozen=True, slots=True)
class NetStat:
    name: str
    rx_bytes: int = 0
    tx_bytes: int = 0
    rx_packets: int = 0
    tx_packets: int = 0
    oper_up: bool = False
    addr_ipv4: str = ""

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "rx_bytes": self.rx_bytes,
            "tx_bytes": self.tx_bytes,
            "rx_packets": self.rx_packets,
            "tx_packets": self.tx_packets,
            "oper_up": self.oper_up,
        }
        if self.addr_ipv4:
            data["addr_ipv4"] = self.addr_ipv4
        return data


@dataclass(frozen=True, slots=True)
class Temp:
    sensor: str
    celsius: float

    def to_dict(self) -> dict[str, Any]:
        return {"sensor": self.sensor, "celsius": self.celsius}


@dataclass(frozen=True, slots=True)
class ProbeFailure:
    """One probe that failed during a tick."""

    source: str
    cause: str

    def __str__(self) -> str:
        return f"{self.source}: {self.cause}"


def render_failures(failures: tuple[ProbeFailure, ...]) -> str:
    return "; ".join(str(f) for f in failures)


@dataclass(frozen=True, slots=True)
class Snapshot:
    """All metrics captured during a single tick.

    Collections are tuples so a published snapshot can be shared between
    the collector thread and any number of readers without copying.
    """

    timestamp: datetime = ZERO_TIME
    hostname: str = ""
    os: str = ""
    kernel: str = ""
    uptime_sec: int = 0
    load1: float = 0.0
    load5: float = 0.0
    load15: float = 0.0
    cpu_percent: float = 0.0
    cpu_cores: int = 0
    mem_total_bytes: int = 0
    mem_available_bytes: int = 0
    swap_total_bytes: int = 0
    swap_free_bytes: int = 0
    net: tuple[NetStat, ...] = ()
    temps: tuple[Temp, ...] = ()
    failures: tuple[ProbeFailure, ...] = field(default=(), repr=False)

    @classmethod
    def empty(cls) -> Snapshot:
        return cls()

    @property
    def last_error(self) -> str:
        return render_failures(self.failures)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "timestamp": self.timestamp.isoformat(),
            "hostname": self.hostname,
            "os": self.os,
            "kernel": self.kernel,
            "uptime_sec": self.uptime_sec,
            "load1": self.load1,
            "load5": self.load5,
            "load15": self.load15,
            "cpu_percent": self.cpu_percent,
            "cpu_cores": self.cpu_cores,
            "mem_total_bytes": self.mem_total_bytes,
            "mem_available_bytes": self.mem_available_bytes,
            "swap_total_bytes": self.swap_total_bytes,
            "swap_free_bytes": self.swap_free_bytes,
            "net": [n.to_dict() for n in self.net],
            "temps": [t.to_dict() for t in self.temps],
        }
        if self.failures:
            data["last_error"] = self.last_error
        return data
