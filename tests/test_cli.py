from __future__ import annotations

import json

import pytest

from sysdash import __version__
from sysdash.cli import main
from sysdash.collector import Collector
from sysdash.models import Snapshot


def test_version(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["version"])
    assert exc.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_snapshot_prints_second_sample(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    calls: list[str] = []
    monkeypatch.setattr(Collector, "sample", lambda self: calls.append("sample") or Snapshot())
    monkeypatch.setattr(
        Collector, "tick", lambda self: calls.append("tick") or Snapshot(hostname="box")
    )
    monkeypatch.setattr("sysdash.commands.snapshot.time.sleep", lambda s: None)

    with pytest.raises(SystemExit) as exc:
        main(["snapshot", "--sample", "10ms"])

    assert exc.value.code == 0
    assert calls == ["sample", "tick"]
    assert json.loads(capsys.readouterr().out)["hostname"] == "box"


def test_serve_bind_failure(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    def refuse(*args, **kwargs):
        raise OSError("address in use")

    monkeypatch.setattr("sysdash.commands.serve.make_server", refuse)
    with pytest.raises(SystemExit) as exc:
        main(["serve", "--out-dir", str(tmp_path), "--port", "1"])
    assert exc.value.code == 1
