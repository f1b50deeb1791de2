"""Memory probe backed by /proc/meminfo."""

from __future__ import annotations

from pathlib import Path

from ..models import MemInfo
from .base import BaseProbe

_KEYS = {
    "MemTotal": "total_bytes",
    "MemAvailable": "available_bytes",
    "SwapTotal": "swap_total_bytes",
    "SwapFree": "swap_free_bytes",
}


class MemoryProbe(BaseProbe):
    """Collect memory and swap totals."""

    def __init__(self, proc_root: str | Path = "/proc") -> None:
        self.path = Path(proc_root) / "meminfo"

    @property
    def name(self) -> str:
        return "meminfo"

    def collect(self) -> MemInfo:
        values: dict[str, int] = {}
        for line in self.read_text(self.path).splitlines():
            parts = line.split(":")
            if len(parts) != 2:
                continue
            attr = _KEYS.get(parts[0].strip())
            if attr is None:
                continue
            val_parts = parts[1].split()
            try:
                value_kb = int(val_parts[0])
            except (ValueError, IndexError):
                continue
            # /proc/meminfo reports in kB
            values[attr] = value_kb * 1024
        return MemInfo(**values)
