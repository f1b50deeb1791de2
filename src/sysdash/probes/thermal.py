"""Thermal zone probe."""

from __future__ import annotations

import math
import re
from pathlib import Path

from ..models import Temp
from .base import BaseProbe

# Readings above this are taken to be millidegrees Celsius.
MILLIDEGREE_THRESHOLD = 200.0

_ZONE_INDEX = re.compile(r"(\d+)$")


def to_celsius(raw: float) -> float:
    """Most drivers report millidegrees; small values are already Celsius.

    NOTE: genuine readings above 200 C would be misread as millidegrees.
    """
    if raw > MILLIDEGREE_THRESHOLD:
        return raw / 1000.0
    return raw


def _zone_key(path: Path) -> tuple[int, str]:
    m = _ZONE_INDEX.search(path.name)
    return (int(m.group(1)) if m else -1, path.name)


class ThermalProbe(BaseProbe):
    """Read every ``thermal_zone*`` under ``<sys_root>/class/thermal``.

    Zones without a readable ``type`` and ``temp`` are skipped; the probe
    itself never fails.
    """

    def __init__(self, sys_root: str | Path = "/sys") -> None:
        self.base = Path(sys_root) / "class" / "thermal"

    @property
    def name(self) -> str:
        return "thermal"

    def collect(self) -> tuple[Temp, ...]:
        try:
            zones = sorted(self.base.glob("thermal_zone*"), key=_zone_key)
        except OSError:
            return ()

        out: list[Temp] = []
        for zone in zones:
            try:
                label = (zone / "type").read_text().strip()
                raw = float((zone / "temp").read_text().strip())
            except (OSError, ValueError):
                continue
            if not math.isfinite(raw):
                continue
            out.append(Temp(sensor=label, celsius=to_celsius(raw)))
        return tuple(out)
