from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import Any, Callable, Mapping

import pytest

from lib_log_kafka.adapters.layout import PatternLayout
from lib_log_kafka.application.appender import KafkaAppender
from lib_log_kafka.domain import LogEvent, LoggerContext, LogLevel


class RecordingProducer:
    """Producer handle fake remembering every record and lifecycle call."""

    def __init__(self, properties: Mapping[str, Any], *, close_error: Exception | None = None) -> None:
        self.properties = dict(properties)
        self.records: list[tuple[str, bytes | None, bytes]] = []
        self.closed = 0
        self.close_error = close_error
        self._lock = threading.Lock()

    def send(self, topic: str, key: bytes | None, value: bytes) -> None:
        with self._lock:
            self.records.append((topic, key, value))

    def close(self) -> None:
        self.closed += 1
        if self.close_error is not None:
            raise self.close_error


class ProducerFactory:
    """Callable factory keeping track of the producers it built."""

    def __init__(self, *, close_error: Exception | None = None, build_error: Exception | None = None) -> None:
        self.close_error = close_error
        self.build_error = build_error
        self.created: list[RecordingProducer] = []

    def __call__(self, properties: Mapping[str, Any]) -> RecordingProducer:
        if self.build_error is not None:
            raise self.build_error
        producer = RecordingProducer(properties, close_error=self.close_error)
        self.created.append(producer)
        return producer

    @property
    def last(self) -> RecordingProducer:
        return self.created[-1]


@pytest.fixture
def event_factory() -> Callable[[dict[str, Any] | None], LogEvent]:
    def _make(overrides: dict[str, Any] | None = None) -> LogEvent:
        values: dict[str, Any] = {
            "event_id": "evt-1",
            "timestamp": datetime(2025, 9, 23, 12, 0, tzinfo=timezone.utc),
            "logger_name": "tests.app",
            "level": LogLevel.INFO,
            "message": "hello kafka",
            "thread_name": "MainThread",
        }
        values.update(overrides or {})
        return LogEvent(**values)

    return _make


@pytest.fixture
def sample_event(event_factory) -> LogEvent:
    return event_factory(None)


@pytest.fixture
def context() -> LoggerContext:
    return LoggerContext(
        name="tests",
        properties={
            "topic": "app-logs",
            "HOSTNAME": "example-host",
            "bootstrap.servers": "localhost:9092",
            "acks": "1",
        },
    )


@pytest.fixture
def producer_factory() -> ProducerFactory:
    return ProducerFactory()


@pytest.fixture
def appender_factory(context: LoggerContext, producer_factory: ProducerFactory) -> Callable[..., KafkaAppender]:
    def _make(**overrides: Any) -> KafkaAppender:
        options: dict[str, Any] = {
            "name": "kafka-test",
            "context": context,
            "layout": PatternLayout(preset="message"),
            "producer_factory": producer_factory,
        }
        options.update(overrides)
        return KafkaAppender(**options)

    return _make
