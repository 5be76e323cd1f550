from __future__ import annotations

import logging
from pathlib import Path

import pytest

from event_registry import EventRegistry, __version__
from event_registry.__main__ import _setup_logging, main, run_demo


def test_run_demo_prints_both_listeners_then_count(capsys: pytest.CaptureFixture[str]):
    registry = EventRegistry()

    count = run_demo(registry)

    out = capsys.readouterr().out.splitlines()
    assert out == ["event triggered", "Another event listener added", "2"]
    assert count == 2


def test_main_uses_requested_channel(capsys: pytest.CaptureFixture[str]):
    assert main(["--channel", "other"]) == 0
    assert capsys.readouterr().out.splitlines()[-1] == "2"


def test_main_reports_bad_config(tmp_path: Path):
    assert main(["--config", str(tmp_path / "missing.yaml")]) == 2


def test_version_flag(capsys: pytest.CaptureFixture[str]):
    with pytest.raises(SystemExit) as excinfo:
        main(["--version"])
    assert excinfo.value.code == 0
    assert capsys.readouterr().out.strip() == f"event-registry {__version__}"
    assert __version__ == "0.1.0"


@pytest.mark.parametrize(
    "verbosity, level",
    [(0, logging.WARNING), (1, logging.INFO), (2, logging.DEBUG), (3, logging.DEBUG)],
)
def test_setup_logging_maps_verbosity(monkeypatch: pytest.MonkeyPatch, verbosity: int, level: int):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    _setup_logging(verbosity)

    assert len(calls) == 1
    assert calls[0]["level"] == level


def test_verbose_flags_reach_logging_setup(monkeypatch: pytest.MonkeyPatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    assert main(["-vv"]) == 0

    assert calls[0]["level"] == logging.DEBUG
