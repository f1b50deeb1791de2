from __future__ import annotations

import json
import os
import threading
from pathlib import Path

import pytest

from sysdash.models import NetStat, Snapshot
from sysdash.persist import Persister


def _leftovers(directory: Path) -> list[str]:
    return [p.name for p in directory.iterdir() if p.name.endswith(".tmp")]


def test_save_writes_json(tmp_path: Path) -> None:
    out = tmp_path / "state"
    persister = Persister(out, "metrics.json")
    snap = Snapshot(hostname="box", uptime_sec=5, net=(NetStat("eth0", rx_bytes=1),))

    assert persister.save(snap) is True

    data = json.loads((out / "metrics.json").read_text())
    assert data["hostname"] == "box"
    assert data["net"][0]["name"] == "eth0"
    assert "addr_ipv4" not in data["net"][0]
    assert _leftovers(out) == []


def test_failed_rename_keeps_previous_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    persister = Persister(tmp_path, "metrics.json")
    persister.save(Snapshot(uptime_sec=1))
    before = persister.read_raw()

    def fail_replace(src: str, dst: object) -> None:
        raise OSError("disk went away")

    monkeypatch.setattr(os, "replace", fail_replace)
    assert persister.save(Snapshot(uptime_sec=2)) is False

    assert persister.read_raw() == before
    assert json.loads(before)["uptime_sec"] == 1
    assert _leftovers(tmp_path) == []


def test_writer_dying_mid_write_leaves_old_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    persister = Persister(tmp_path, "metrics.json")
    persister.save(Snapshot(uptime_sec=1))

    def crash(fd: int) -> None:
        raise OSError("killed")

    monkeypatch.setattr(os, "fsync", crash)
    assert persister.save(Snapshot(uptime_sec=2)) is False
    assert json.loads(persister.read_raw())["uptime_sec"] == 1


def test_unwritable_directory_is_not_fatal(tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("not a directory")
    persister = Persister(blocker / "sub", "metrics.json")
    assert persister.save(Snapshot()) is False
    # a later success clears the failing state
    persister.out_dir = tmp_path / "ok"
    persister.path = persister.out_dir / "metrics.json"
    assert persister.save(Snapshot()) is True


def test_concurrent_reader_never_sees_partial_file(tmp_path: Path) -> None:
    persister = Persister(tmp_path, "metrics.json")
    big_net = tuple(NetStat(f"veth{i}", rx_bytes=i) for i in range(200))
    persister.save(Snapshot(uptime_sec=0, net=big_net))
    done = threading.Event()
    bad: list[str] = []

    def reader() -> None:
        while not done.is_set():
            raw = persister.read_raw()
            try:
                json.loads(raw)
            except ValueError:
                bad.append(raw[-40:].decode(errors="replace"))

    t = threading.Thread(target=reader)
    t.start()
    for i in range(1, 200):
        persister.save(Snapshot(uptime_sec=i, net=big_net))
    done.set()
    t.join()

    assert bad == []
    assert json.loads(persister.read_raw())["uptime_sec"] == 199
