from __future__ import annotations

import json
import logging
import sys

from sysdash.logging import JsonLineFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("sysdash.test", logging.WARNING, __file__, 1, "persist failed: %s", ("disk",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_line_includes_known_extras() -> None:
    line = JsonLineFormatter().format(_record(path="/var/lib/sysdash/metrics.json", unrelated=1))
    entry = json.loads(line)
    assert entry["level"] == "WARNING"
    assert entry["logger"] == "sysdash.test"
    assert entry["message"] == "persist failed: disk"
    assert entry["path"] == "/var/lib/sysdash/metrics.json"
    assert "unrelated" not in entry
    assert "\n" not in line


def test_json_line_includes_traceback() -> None:
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = _record()
        record.exc_info = sys.exc_info()
    entry = json.loads(JsonLineFormatter().format(record))
    assert "RuntimeError: boom" in entry["exc_info"]
