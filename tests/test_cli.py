"""CLI behaviour coverage for the Kafka probe commands."""

from __future__ import annotations

import os
import sys
from typing import Any, Callable

import lib_cli_exit_tools
import pytest
from click.testing import CliRunner

from lib_log_kafka import __init__conf__
from lib_log_kafka import cli as cli_mod
from lib_log_kafka.adapters import kafka as kafka_adapter
from lib_log_kafka.domain import PartitioningStrategy

BANNER = "\n".join(__init__conf__.info_lines()) + "\n"


class FakeClient:
    instances: list["FakeClient"] = []

    def __init__(self, config: dict[str, Any]) -> None:
        self.config = config
        self.produced: list[tuple[str, bytes | None, bytes]] = []
        self.flushed = False
        FakeClient.instances.append(self)

    def produce(self, topic: str, value: bytes | None = None, key: bytes | None = None, on_delivery: Any = None) -> None:
        self.produced.append((topic, key, value))

    def poll(self, timeout: float) -> int:
        return 0

    def flush(self, timeout: float) -> int:
        self.flushed = True
        return 0


@pytest.fixture
def fake_kafka(monkeypatch: pytest.MonkeyPatch) -> type[FakeClient]:
    FakeClient.instances = []
    monkeypatch.setattr(kafka_adapter, "Producer", FakeClient)
    for key in list(os.environ):
        if key.startswith("LOG_KAFKA_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("HOSTNAME", "probe-host")
    return FakeClient


def run_cli(args: list[str] | None = None) -> tuple[int, str, BaseException | None]:
    runner = CliRunner()
    result = runner.invoke(cli_mod.cli, args or [], prog_name=__init__conf__.shell_command)
    return result.exit_code, result.output, result.exception


def test_cli_without_subcommand_prints_banner() -> None:
    exit_code, stdout, _ = run_cli()

    assert exit_code == 0
    assert stdout == BANNER


def test_cli_info_command_matches_banner() -> None:
    exit_code, stdout, _ = run_cli(["info"])

    assert exit_code == 0
    assert stdout.startswith("Info for lib_log_kafka:")
    assert stdout == BANNER


def test_cli_version_option() -> None:
    exit_code, stdout, _ = run_cli(["--version"])

    assert exit_code == 0
    assert stdout.strip() == f"{__init__conf__.shell_command} version {__init__conf__.version}"


def test_cli_strategies_lists_every_strategy() -> None:
    exit_code, stdout, _ = run_cli(["strategies"])

    assert exit_code == 0
    assert stdout.split() == [strategy.value for strategy in PartitioningStrategy]


def test_cli_no_traceback_option(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback", True, raising=False)
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback_force_color", True, raising=False)

    exit_code, _stdout, _exception = run_cli(["--no-traceback", "info"])

    assert exit_code == 0
    assert lib_cli_exit_tools.config.traceback is False
    assert lib_cli_exit_tools.config.traceback_force_color is False


def test_send_publishes_through_the_producer(fake_kafka, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_KAFKA_TOPIC", "ops-logs")

    exit_code, stdout, exception = run_cli(
        ["send", "disk almost full", "--bootstrap-servers", "broker:9092", "--preset", "message", "--level", "warning"]
    )

    assert exception is None
    assert exit_code == 0
    assert "published to ops-logs" in stdout
    client = fake_kafka.instances[0]
    assert client.config["bootstrap.servers"] == "broker:9092"
    assert client.produced == [("ops-logs", None, b"disk almost full")]
    assert client.flushed


def test_send_reads_producer_properties_from_environment(fake_kafka, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_KAFKA_PRODUCER_BOOTSTRAP_SERVERS", "env-broker:9092")
    monkeypatch.setenv("LOG_KAFKA_PRODUCER_ACKS", "all")

    exit_code, stdout, _ = run_cli(["send", "hello", "--topic", "cli-topic", "--partitioning", "hostname", "--preset", "json"])

    assert exit_code == 0
    client = fake_kafka.instances[0]
    assert client.config["bootstrap.servers"] == "env-broker:9092"
    assert client.config["acks"] == "all"
    topic, key, value = client.produced[0]
    assert topic == "cli-topic"
    assert key is not None and len(key) == 4
    assert b'"message": "hello"' in value
    assert "published to cli-topic" in stdout


def test_send_without_topic_fails_with_status_table(fake_kafka) -> None:
    exit_code, stdout, _ = run_cli(["send", "hello", "--bootstrap-servers", "broker:9092"])

    assert exit_code == 1
    assert "missing_topic" in stdout
    assert "appender did not start" in stdout
    assert fake_kafka.instances == []


def test_send_rejects_unknown_strategy(fake_kafka) -> None:
    exit_code, _stdout, _ = run_cli(["send", "hello", "--topic", "t", "--partitioning", "sticky"])

    assert exit_code == 2


def test_main_restores_traceback_preferences(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback", True, raising=False)
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback_force_color", True, raising=False)

    recorded: dict[str, bool] = {}

    def fake_run_cli(command: Callable[..., int], argv: list[str] | None = None, *, prog_name: str | None = None, **_: object) -> int:
        runner = CliRunner()
        result = runner.invoke(command, ["info"] if argv is None else argv)
        if result.exception is not None:
            raise result.exception
        recorded["traceback"] = lib_cli_exit_tools.config.traceback
        recorded["traceback_force_color"] = lib_cli_exit_tools.config.traceback_force_color
        return result.exit_code

    monkeypatch.setattr(lib_cli_exit_tools, "run_cli", fake_run_cli)

    exit_code = cli_mod.main(["--traceback", "info"])

    assert exit_code == 0
    assert recorded == {"traceback": True, "traceback_force_color": True}
    assert lib_cli_exit_tools.config.traceback is True


def test_main_consumes_sys_argv(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback", False, raising=False)
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback_force_color", False, raising=False)
    monkeypatch.setattr(sys, "argv", [__init__conf__.shell_command, "strategies"], raising=False)

    exit_code = cli_mod.main()
    captured = capsys.readouterr()

    assert exit_code == 0
    assert "round_robin" in captured.out
