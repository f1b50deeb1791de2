"""JSON-lines logging for the sampler and the read API."""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import UTC, datetime
from typing import Any

# Fields callers pass through ``extra=`` that end up in the JSON line.
EXTRA_FIELDS = ("source", "path", "method", "code", "status", "interval")

_configured = False


class JsonLineFormatter(logging.Formatter):
    """One compact JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (name, getattr(record, name)) for name in EXTRA_FIELDS if hasattr(record, name)
        )
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, separators=(",", ":"), default=str)


def configure_logging(*, level: str | None = None) -> None:
    """Send JSON lines to stdout at ``level``, else LOG_LEVEL, else INFO.

    Only the first call has an effect.
    """
    global _configured
    if _configured:
        return

    log_level = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(JsonLineFormatter())

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(log_level)

    _configured = True
