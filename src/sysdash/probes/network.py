"""Per-interface network probe."""

from __future__ import annotations

import socket
from pathlib import Path

import psutil

from ..models import NetStat
from .base import BaseProbe


def _read_uint(path: Path) -> int:
    """Read a sysfs counter; unreadable or malformed counters read as 0."""
    try:
        return max(0, int(path.read_text().strip()))
    except (OSError, ValueError):
        return 0


class NetworkProbe(BaseProbe):
    """Collect state, first IPv4 address and cumulative counters per interface.

    Interfaces come from psutil; operational state and counters come from
    ``<sys_root>/class/net/<iface>``.
    """

    def __init__(self, sys_root: str | Path = "/sys") -> None:
        self.base = Path(sys_root) / "class" / "net"

    @property
    def name(self) -> str:
        return "net"

    def _oper_up(self, iface: str, admin_up: bool) -> bool:
        try:
            state = (self.base / iface / "operstate").read_text().strip()
        except (OSError, UnicodeDecodeError):
            state = "unknown"
        # some drivers never report a real state; the admin flag is the best hint
        if state == "unknown":
            return admin_up
        return state == "up"

    def collect(self) -> tuple[NetStat, ...]:
        try:
            stats = psutil.net_if_stats()
            addrs = psutil.net_if_addrs()
        except (OSError, psutil.Error) as e:
            raise self.fail(str(e)) from e

        names = list(stats)
        names.extend(n for n in addrs if n not in stats)

        out: list[NetStat] = []
        for iface in names:
            s = stats.get(iface)
            admin_up = bool(s.isup) if s is not None else False

            ipv4 = ""
            for addr in addrs.get(iface, []):
                if addr.family == socket.AF_INET:
                    ipv4 = addr.address
                    break

            counters = self.base / iface / "statistics"
            out.append(
                NetStat(
                    name=iface,
                    rx_bytes=_read_uint(counters / "rx_bytes"),
                    tx_bytes=_read_uint(counters / "tx_bytes"),
                    rx_packets=_read_uint(counters / "rx_packets"),
                    tx_packets=_read_uint(counters / "tx_packets"),
                    oper_up=self._oper_up(iface, admin_up),
                    addr_ipv4=ipv4,
                )
            )
        return tuple(out)
