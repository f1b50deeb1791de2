"""Atomic, best-effort on-disk copy of the latest snapshot."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from .models import Snapshot

log = logging.getLogger(__name__)


def dumps(snapshot: Snapshot) -> str:
    return json.dumps(snapshot.to_dict(), ensure_ascii=False, indent=2)


class Persister:
    """Write each snapshot to ``<out_dir>/<out_file>`` via temp file + rename.

    The temp file lives in the same directory so the rename never crosses a
    filesystem. Failures are logged and swallowed; the file on disk simply
    lags the in-memory state until a later save succeeds.
    """

    def __init__(self, out_dir: str | Path, out_file: str) -> None:
        self.out_dir = Path(out_dir)
        self.path = self.out_dir / out_file
        self._failing = False

    def save(self, snapshot: Snapshot) -> bool:
        """Replace the target file. Returns False if the write was dropped."""
        tmp_name: str | None = None
        try:
            self.out_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.out_dir, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(dumps(snapshot))
                fh.flush()
                os.fsync(fh.fileno())
            os.chmod(tmp_name, 0o644)
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as e:
            self._report_failure(e)
            return False
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass

        if self._failing:
            log.info("persist recovered", extra={"path": str(self.path)})
            self._failing = False
        return True

    def _report_failure(self, err: OSError) -> None:
        extra = {"path": str(self.path)}
        if not self._failing:
            log.warning("persist failed: %s", err, extra=extra)
            self._failing = True
        else:
            log.debug("persist still failing: %s", err, extra=extra)

    def read_raw(self) -> bytes:
        """Bytes of the last successfully persisted file."""
        return self.path.read_bytes()
