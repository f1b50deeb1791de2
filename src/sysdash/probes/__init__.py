"""Per-source OS probes."""

from __future__ import annotations

from .base import BaseProbe
from .cpu import CPUProbe
from .memory import MemoryProbe
from .network import NetworkProbe
from .system import LoadProbe, UptimeProbe, cpu_cores, host_identity
from .thermal import ThermalProbe

__all__ = [
    "BaseProbe",
    "CPUProbe",
    "LoadProbe",
    "MemoryProbe",
    "NetworkProbe",
    "ThermalProbe",
    "UptimeProbe",
    "cpu_cores",
    "host_identity",
]
