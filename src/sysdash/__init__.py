"""
sysdash

Samples Linux system metrics on a fixed interval and serves the latest
snapshot plus a short rolling history as JSON.
"""

from __future__ import annotations

from .collector import Collector
from .models import Snapshot
from .persist import Persister
from .store import Store

__all__ = ["Collector", "Persister", "Snapshot", "Store", "__version__"]

__version__ = "0.1.0"
