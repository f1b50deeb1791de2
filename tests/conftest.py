from __future__ import annotations

import socket
from pathlib import Path
from types import SimpleNamespace

import psutil
import pytest

STAT = (
    "cpu  100 0 50 800 50 0 0 0 0 0\n"
    "cpu0 50 0 25 400 25 0 0 0 0 0\n"
    "intr 12345\n"
)

MEMINFO = (
    "MemTotal:       16384000 kB\n"
    "MemFree:         1024000 kB\n"
    "MemAvailable:    8192000 kB\n"
    "Buffers:          512000 kB\n"
    "SwapTotal:       2048000 kB\n"
    "SwapFree:        2000000 kB\n"
)


def write_cpu(proc: Path, user: int, system: int, idle: int, iowait: int) -> None:
    (proc / "stat").write_text(f"cpu  {user} 0 {system} {idle} {iowait} 0 0 0 0 0\nintr 1\n")


@pytest.fixture
def proc_root(tmp_path: Path) -> Path:
    proc = tmp_path / "proc"
    proc.mkdir()
    (proc / "stat").write_text(STAT)
    (proc / "meminfo").write_text(MEMINFO)
    (proc / "loadavg").write_text("0.52 0.40 0.31 2/345 6789\n")
    (proc / "uptime").write_text("12345.67 45678.90\n")
    return proc


@pytest.fixture
def sys_root(tmp_path: Path) -> Path:
    root = tmp_path / "sys"
    net = root / "class" / "net"
    for name, state, counters in (
        ("lo", "unknown", {"rx_bytes": 1000, "tx_bytes": 1000, "rx_packets": 10, "tx_packets": 10}),
        ("eth0", "up", {"rx_bytes": 5000, "tx_bytes": 2500, "rx_packets": 50, "tx_packets": 25}),
        ("wlan0", "down", None),
    ):
        iface = net / name
        iface.mkdir(parents=True)
        (iface / "operstate").write_text(state + "\n")
        if counters:
            stats = iface / "statistics"
            stats.mkdir()
            for key, value in counters.items():
                (stats / key).write_text(f"{value}\n")

    thermal = root / "class" / "thermal"
    zone = thermal / "thermal_zone0"
    zone.mkdir(parents=True)
    (zone / "type").write_text("x86_pkg_temp\n")
    (zone / "temp").write_text("45000\n")
    return root


@pytest.fixture
def fake_interfaces(monkeypatch: pytest.MonkeyPatch) -> None:
    stats = {
        "lo": SimpleNamespace(isup=True),
        "eth0": SimpleNamespace(isup=True),
        "wlan0": SimpleNamespace(isup=False),
    }
    addrs = {
        "lo": [SimpleNamespace(family=socket.AF_INET, address="127.0.0.1")],
        "eth0": [
            SimpleNamespace(family=socket.AF_INET6, address="fe80::1"),
            SimpleNamespace(family=socket.AF_INET, address="10.0.0.5"),
            SimpleNamespace(family=socket.AF_INET, address="10.0.0.6"),
        ],
        "wlan0": [],
    }
    monkeypatch.setattr(psutil, "net_if_stats", lambda: stats)
    monkeypatch.setattr(psutil, "net_if_addrs", lambda: addrs)
