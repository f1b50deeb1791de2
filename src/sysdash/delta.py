"""Rates derived from two successive counter readings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .models import CPUTimes, Snapshot


def counter_delta(prev: int, cur: int) -> int:
    """Difference between two readings of a monotonic counter.

    A counter that went backwards (wrap, interface reset or replacement)
    yields 0, never a negative value.
    """
    return max(0, cur - prev)


def cpu_percent(prev: CPUTimes | None, cur: CPUTimes | None) -> float:
    """Busy share of the CPU time elapsed between ``prev`` and ``cur``, 0-100.

    Returns 0.0 without a previous reading or when no time has elapsed.
    """
    if prev is None or cur is None:
        return 0.0
    idle = counter_delta(prev.idle_total, cur.idle_total)
    busy = counter_delta(prev.busy_total, cur.busy_total)
    total = idle + busy
    if total <= 0:
        return 0.0
    return max(0.0, min(100.0, busy * 100.0 / total))


@dataclass(frozen=True, slots=True)
class InterfaceRate:
    name: str
    rx_bytes_per_sec: float
    tx_bytes_per_sec: float
    rx_packets_per_sec: float
    tx_packets_per_sec: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "rx_bytes_per_sec": self.rx_bytes_per_sec,
            "tx_bytes_per_sec": self.tx_bytes_per_sec,
            "rx_packets_per_sec": self.rx_packets_per_sec,
            "tx_packets_per_sec": self.tx_packets_per_sec,
        }


def interface_rates(prev: Snapshot, cur: Snapshot) -> list[InterfaceRate]:
    """Per-interface throughput between two snapshots, in ``cur``'s order.

    Interfaces absent from ``prev`` have no baseline and report 0.
    """
    elapsed = (cur.timestamp - prev.timestamp).total_seconds()
    before = {n.name: n for n in prev.net}

    def rate(a: int, b: int) -> float:
        if elapsed <= 0:
            return 0.0
        return counter_delta(a, b) / elapsed

    out: list[InterfaceRate] = []
    for n in cur.net:
        p = before.get(n.name)
        if p is None:
            out.append(InterfaceRate(n.name, 0.0, 0.0, 0.0, 0.0))
            continue
        out.append(
            InterfaceRate(
                name=n.name,
                rx_bytes_per_sec=rate(p.rx_bytes, n.rx_bytes),
                tx_bytes_per_sec=rate(p.tx_bytes, n.tx_bytes),
                rx_packets_per_sec=rate(p.rx_packets, n.rx_packets),
                tx_packets_per_sec=rate(p.tx_packets, n.tx_packets),
            )
        )
    return out
