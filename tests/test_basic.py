"""Package-level smoke tests for metadata and the public surface."""

from __future__ import annotations

import runpy
import sys

import pytest

import lib_log_kafka
from lib_log_kafka import __init__conf__


def test_print_info_emits_banner(capsys: pytest.CaptureFixture[str]) -> None:
    __init__conf__.print_info()
    captured = capsys.readouterr()

    assert captured.out.startswith("Info for lib_log_kafka:")
    assert __init__conf__.version in captured.out
    assert captured.err == ""


def test_info_lines_are_aligned() -> None:
    lines = __init__conf__.info_lines()[2:]

    assert len({line.index("=") for line in lines}) == 1


@pytest.mark.parametrize("name", lib_log_kafka.__all__)
def test_public_names_resolve(name: str) -> None:
    assert getattr(lib_log_kafka, name) is not None


def test_module_entry_point_runs_cli(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr(sys, "argv", ["lib_log_kafka", "strategies"])
    monkeypatch.delitem(sys.modules, "lib_log_kafka.__main__", raising=False)

    with pytest.raises(SystemExit) as excinfo:
        runpy.run_module("lib_log_kafka", run_name="__main__")

    assert excinfo.value.code == 0
    assert "logger_name" in capsys.readouterr().out
