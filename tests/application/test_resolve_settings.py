from __future__ import annotations

from typing import Any

import pytest

from lib_log_kafka.adapters.layout import PatternLayout
from lib_log_kafka.application.use_cases.resolve_settings import (
    DEFAULT_ENCODING,
    DEFAULT_PARTITIONING,
    resolve_settings,
)
from lib_log_kafka.domain import LoggerContext, PartitioningStrategy, StatusLevel

EXAMPLE_HOST_KEY = b"\xf7\xea\x58\x2b"
#: JVM String.hashCode of "example-host" (-135636949) as 4 big-endian bytes.


class _Reports:
    def __init__(self) -> None:
        self.calls: list[tuple[StatusLevel, str, str, dict[str, Any]]] = []

    def __call__(self, level: StatusLevel, name: str, message: str, payload: dict[str, Any]) -> None:
        self.calls.append((level, name, message, payload))

    def names(self, level: StatusLevel | None = None) -> list[str]:
        return [name for lvl, name, _, _ in self.calls if level is None or lvl is level]


def _resolve(context: LoggerContext, reports: _Reports, **overrides: Any):
    options: dict[str, Any] = {
        "name": "kafka",
        "context": context,
        "topic": None,
        "encoding": None,
        "partitioning_strategy": None,
        "layout": PatternLayout(),
    }
    options.update(overrides)
    return resolve_settings(report=reports, **options)


def test_defaults_are_applied_and_reported_as_info(context: LoggerContext) -> None:
    reports = _Reports()
    settings = _resolve(context, reports)

    assert settings is not None
    assert settings.encoding == DEFAULT_ENCODING == "utf-8"
    assert settings.partitioning_strategy is DEFAULT_PARTITIONING is PartitioningStrategy.ROUND_ROBIN
    assert reports.names(StatusLevel.INFO) == ["default_encoding", "default_partitioning"]
    assert reports.names(StatusLevel.WARN) == []


def test_explicit_values_win_over_context(context: LoggerContext) -> None:
    reports = _Reports()
    settings = _resolve(
        context,
        reports,
        topic="explicit",
        encoding="latin-1",
        partitioning_strategy=PartitioningStrategy.LOGGER_NAME,
    )

    assert settings is not None
    assert settings.topic == "explicit"
    assert settings.encoding == "latin-1"
    assert settings.partitioning_strategy is PartitioningStrategy.LOGGER_NAME
    assert reports.calls == []


def test_topic_falls_back_to_context_property(context: LoggerContext) -> None:
    settings = _resolve(context, _Reports())

    assert settings is not None
    assert settings.topic == "app-logs"


def test_host_identity_is_hash_of_hostname(context: LoggerContext) -> None:
    settings = _resolve(context, _Reports())

    assert settings is not None
    assert settings.hostname_hash == EXAMPLE_HOST_KEY


def test_missing_hostname_warns_and_leaves_identity_unset() -> None:
    reports = _Reports()
    context = LoggerContext(properties={"topic": "logs", "bootstrap.servers": "k:9092"})

    settings = _resolve(context, reports)

    assert settings is not None
    assert settings.hostname_hash is None
    assert reports.names(StatusLevel.WARN) == ["hostname_missing"]


def test_producer_properties_are_forwarded_without_reserved_keys(context: LoggerContext) -> None:
    settings = _resolve(context, _Reports())

    assert settings is not None
    assert dict(settings.producer_properties) == {"bootstrap.servers": "localhost:9092", "acks": "1"}


@pytest.mark.parametrize(
    "properties, overrides, expected_errors",
    [
        ({"bootstrap.servers": "k:9092"}, {}, ["missing_topic"]),
        ({"topic": "logs"}, {}, ["missing_bootstrap_servers"]),
        ({"topic": "logs", "bootstrap.servers": "k:9092"}, {"layout": None}, ["missing_layout"]),
        ({"topic": "logs", "bootstrap.servers": "k:9092"}, {"encoding": "no-such-codec"}, ["unknown_encoding"]),
        ({}, {"layout": None}, ["missing_layout", "missing_topic", "missing_bootstrap_servers"]),
    ],
)
def test_unmet_prerequisites_abort_resolution(
    properties: dict[str, str],
    overrides: dict[str, Any],
    expected_errors: list[str],
) -> None:
    reports = _Reports()

    settings = _resolve(LoggerContext(properties=properties), reports, **overrides)

    assert settings is None
    assert reports.names(StatusLevel.ERROR) == expected_errors
    assert reports.names(StatusLevel.INFO) == []


def test_empty_hostname_still_hashes() -> None:
    reports = _Reports()
    context = LoggerContext(properties={"topic": "logs", "bootstrap.servers": "k:9092", "HOSTNAME": ""})

    settings = _resolve(context, reports)

    assert settings is not None
    assert settings.hostname_hash == b"\x00\x00\x00\x00"
    assert reports.names(StatusLevel.WARN) == []
