"""One-shot snapshot command."""

from __future__ import annotations

import argparse
import sys
import time

from ..collector import Collector
from ..config import Settings
from ..persist import dumps
from ..store import Store


def cmd_snapshot(args: argparse.Namespace, settings: Settings) -> int:
    """Take two samples ``--sample`` seconds apart and print the second.

    CPU percent needs a previous reading, so a single sample would always
    report 0. Nothing is persisted.
    """
    if args.sample <= 0:
        sys.stderr.write("Error: --sample must be > 0\n")
        return 2

    collector = Collector(Store(capacity=2), None, interval=args.sample)
    collector.sample()
    time.sleep(args.sample)
    snapshot = collector.tick()

    sys.stdout.write(dumps(snapshot) + "\n")
    sys.stdout.flush()
    return 1 if snapshot.failures and args.strict else 0
