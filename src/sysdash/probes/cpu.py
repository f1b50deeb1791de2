"""CPU counter probe."""

from __future__ import annotations

from pathlib import Path

from ..models import CPUTimes
from .base import BaseProbe

_FIELDS = (
    "user",
    "nice",
    "system",
    "idle",
    "iowait",
    "irq",
    "softirq",
    "steal",
    "guest",
    "guest_nice",
)


def parse_cpu_line(fields: list[str]) -> CPUTimes:
    """Build CPUTimes from the split ``cpu`` line; missing or bad fields read as 0."""
    values: dict[str, int] = {}
    for i, key in enumerate(_FIELDS, start=1):
        try:
            values[key] = int(fields[i])
        except (IndexError, ValueError):
            values[key] = 0
    return CPUTimes(**values)


class CPUProbe(BaseProbe):
    """Read the aggregate CPU line of /proc/stat."""

    def __init__(self, proc_root: str | Path = "/proc") -> None:
        self.path = Path(proc_root) / "stat"

    @property
    def name(self) -> str:
        return "cpustat"

    def collect(self) -> CPUTimes:
        for line in self.read_text(self.path).splitlines():
            fields = line.split()
            if fields and fields[0] == "cpu":
                return parse_cpu_line(fields)
        raise self.fail("cpu line not found")
