from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_INTERVAL_SECONDS = 2.0

_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)(ms|h|m|s)")
_UNIT_SECONDS = {"ms": 0.001, "s": 1.0, "m": 60.0, "h": 3600.0}


def parse_duration(raw: str) -> float:
    """Parse ``500ms``, ``2s``, ``1m30s`` or a bare number of seconds.

    Raises ValueError for anything else, including non-positive durations.
    """
    text = raw.strip()
    if not text:
        raise ValueError("empty duration")

    try:
        seconds = float(text)
    except ValueError:
        pos = 0
        seconds = 0.0
        for match in _DURATION_PART.finditer(text):
            if match.start() != pos:
                break
            seconds += float(match.group(1)) * _UNIT_SECONDS[match.group(2)]
            pos = match.end()
        if pos != len(text):
            raise ValueError(f"invalid duration: {raw!r}") from None

    if seconds <= 0:
        raise ValueError(f"duration must be positive: {raw!r}")
    return seconds


def _get_str(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    return raw


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_duration(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return parse_duration(raw)
    except ValueError:
        return default


@dataclass(frozen=True, slots=True)
class Settings:
    out_dir: str = field(default_factory=lambda: _get_str("SYSDASH_OUTDIR", "/var/lib/sysdash"))
    out_file: str = field(default_factory=lambda: _get_str("SYSDASH_OUTFILE", "metrics.json"))
    interval_seconds: float = field(
        default_factory=lambda: _get_duration("SYSDASH_INTERVAL", DEFAULT_INTERVAL_SECONDS)
    )
    host: str = field(default_factory=lambda: _get_str("SYSDASH_HOST", ""))
    port: int = field(default_factory=lambda: _get_int("SYSDASH_PORT", 8081))
    history_size: int = field(default_factory=lambda: _get_int("SYSDASH_HISTORY", 120))

    @property
    def out_path(self) -> Path:
        return Path(self.out_dir) / self.out_file
