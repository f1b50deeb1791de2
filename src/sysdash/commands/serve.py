"""Serve command: collection loop plus HTTP read API."""

from __future__ import annotations

import argparse
import logging
import sys

from ..collector import Collector
from ..config import Settings
from ..handler import ReadApi
from ..persist import Persister
from ..server import make_server
from ..store import Store

log = logging.getLogger(__name__)


def cmd_serve(args: argparse.Namespace, settings: Settings) -> int:
    """Run the collector in the background and serve the read API until killed."""
    store = Store(capacity=settings.history_size)
    persister = Persister(settings.out_dir, settings.out_file)
    collector = Collector(store, persister, interval=settings.interval_seconds)
    api = ReadApi(store, persister)

    try:
        server = make_server(api, settings.host, settings.port)
    except OSError as e:
        log.critical("cannot bind %s:%s: %s", settings.host or "*", settings.port, e)
        sys.stderr.write(f"Error: cannot listen on port {settings.port}: {e}\n")
        return 1

    collector.start()
    log.info(
        "sysdash listening on %s:%s, writing %s (interval %ss)",
        settings.host or "*",
        settings.port,
        persister.path,
        settings.interval_seconds,
        extra={"path": str(persister.path), "interval": settings.interval_seconds},
    )
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        sys.stderr.write("\n[sysdash] Interrupted, exiting...\n")
    finally:
        server.server_close()
    return 0
