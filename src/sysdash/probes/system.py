"""Load average, uptime and host identity."""

from __future__ import annotations

import logging
import math
import os
import platform
import socket
from pathlib import Path

import psutil

from ..models import LoadAvg
from .base import BaseProbe

log = logging.getLogger(__name__)


class LoadProbe(BaseProbe):
    """Read the 1/5/15 minute load averages."""

    def __init__(self, proc_root: str | Path = "/proc") -> None:
        self.path = Path(proc_root) / "loadavg"

    @property
    def name(self) -> str:
        return "loadavg"

    def collect(self) -> LoadAvg:
        parts = self.read_text(self.path).split()
        if len(parts) < 3:
            raise self.fail("bad loadavg")
        try:
            values = [float(p) for p in parts[:3]]
        except ValueError as e:
            raise self.fail(f"bad loadavg: {e}") from e
        if not all(math.isfinite(v) for v in values):
            raise self.fail("bad loadavg: non-finite value")
        return LoadAvg(*values)


class UptimeProbe(BaseProbe):
    """Whole seconds since boot."""

    def __init__(self, proc_root: str | Path = "/proc") -> None:
        self.path = Path(proc_root) / "uptime"

    @property
    def name(self) -> str:
        return "uptime"

    def collect(self) -> int:
        parts = self.read_text(self.path).split()
        if not parts:
            raise self.fail("bad uptime")
        try:
            seconds = float(parts[0])
        except ValueError as e:
            raise self.fail(f"bad uptime: {e}") from e
        if not math.isfinite(seconds):
            raise self.fail("bad uptime: non-finite value")
        return max(0, int(seconds))


def read_kernel() -> str:
    """Return ``"<sysname> <release>"``, or an empty string when uname fails."""
    try:
        uts = os.uname()
    except (AttributeError, OSError):
        return ""
    return f"{uts.sysname} {uts.release}"


def host_identity() -> tuple[str, str, str]:
    """Hostname, ``<family>/<arch>`` and kernel string.

    These do not change while the process runs, so the collector reads
    them once at construction.
    """
    try:
        hostname = socket.gethostname()
    except OSError:
        log.debug("gethostname failed", exc_info=True)
        hostname = ""
    os_name = f"{platform.system().lower()}/{platform.machine().lower()}"
    return hostname, os_name, read_kernel()


def cpu_cores() -> int:
    return int(psutil.cpu_count(logical=True) or os.cpu_count() or 0)
