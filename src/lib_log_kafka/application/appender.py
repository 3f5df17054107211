"""Kafka appender: lifecycle, filtering, and the guarded publish path.

Purpose
-------
Compose the recursion guard, the start/stop lifecycle of the producer handle,
and the per-event publish use case into the unit a logging framework drives.

Contents
--------
* :data:`ALLOWED_REPEATS` - cap on "not started" warnings.
* :class:`KafkaAppender` - the forwarder.

System Role
-----------
The only stateful component of the package. Adapters (stdlib handler, CLI)
call :meth:`KafkaAppender.do_append`; tests and hosts may call
:meth:`KafkaAppender.append` directly once filters are known to pass.

Concurrency
-----------
A :class:`threading.Condition` guards the handle reference, the started flag,
and an in-flight counter. ``append`` registers under the lock and produces
outside it, so concurrent appends run in parallel. ``stop`` detaches the
handle, refuses new appends, waits for the counter to drain, and only then
closes it. A ``start`` issued meanwhile waits until that close has finished.
"""

from __future__ import annotations

import threading
from typing import Any, Callable, Mapping

from lib_log_kafka.application.ports import LayoutPort, PartitioningStrategyPort, ProducerFactory, ProducerPort
from lib_log_kafka.application.use_cases import (
    DiagnosticHook,
    PublishCallable,
    ResolvedSettings,
    create_publish,
    resolve_settings,
)
from lib_log_kafka.domain import (
    EventFilter,
    FilterReply,
    KAFKA_LOGGER_PREFIX,
    LogEvent,
    LoggerContext,
    Status,
    StatusBoard,
    StatusLevel,
    recursion_guard,
)

ALLOWED_REPEATS = 3


class KafkaAppender:
    """Publish accepted log events onto a Kafka topic.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from lib_log_kafka.adapters.layout import PatternLayout
    >>> from lib_log_kafka.domain import LogLevel
    >>> sent = []
    >>> class DummyProducer:
    ...     def send(self, topic, key, value):
    ...         sent.append((topic, key, value))
    ...     def close(self):
    ...         sent.append('closed')
    >>> ctx = LoggerContext(properties={'topic': 'logs', 'bootstrap.servers': 'k:9092', 'HOSTNAME': 'h'})
    >>> appender = KafkaAppender(context=ctx, layout=PatternLayout(preset='message'),
    ...     producer_factory=lambda props: DummyProducer())
    >>> appender.start()
    >>> appender.is_started()
    True
    >>> event = LogEvent('id', datetime(2025, 9, 30, tzinfo=timezone.utc), 'app', LogLevel.INFO, 'hi')
    >>> appender.do_append(event)
    >>> appender.stop()
    >>> sent
    [('logs', None, b'hi'), 'closed']
    """

    def __init__(
        self,
        *,
        name: str = "kafka",
        context: LoggerContext | None = None,
        topic: str | None = None,
        encoding: str | None = None,
        partitioning_strategy: PartitioningStrategyPort | None = None,
        layout: LayoutPort | None = None,
        producer_factory: ProducerFactory | None = None,
        diagnostic: DiagnosticHook = None,
        client_logger_prefix: str = KAFKA_LOGGER_PREFIX,
        stop_timeout: float | None = 5.0,
        status_board: StatusBoard | None = None,
    ) -> None:
        """Configure the appender; nothing is resolved until :meth:`start`.

        Parameters
        ----------
        name:
            Identifier quoted in status messages.
        context:
            Ambient property snapshot (topic, HOSTNAME, producer properties).
        topic, encoding, partitioning_strategy, layout:
            Explicit settings overriding the ambient context.
        producer_factory:
            Builds the producer handle from the producer properties; defaults
            to :class:`lib_log_kafka.adapters.kafka.ConfluentProducerAdapter`.
        diagnostic:
            Optional ``(name, payload)`` hook notified for every status.
        client_logger_prefix:
            Logger namespace rejected by the recursion guard.
        stop_timeout:
            Seconds :meth:`stop` waits for in-flight appends; ``None`` waits
            indefinitely.
        """
        self.name = name
        self.context = context if context is not None else LoggerContext()
        self.topic = topic
        self.encoding = encoding
        self.partitioning_strategy = partitioning_strategy
        self.layout = layout
        self._producer_factory: ProducerFactory = producer_factory or self._create_confluent_producer
        self._diagnostic = diagnostic
        self._stop_timeout = stop_timeout
        self._statuses = status_board if status_board is not None else StatusBoard()

        self._recursion_guard: EventFilter = recursion_guard(client_logger_prefix)
        self._filters: list[EventFilter] = []

        self._lock = threading.Condition()
        self._started = False
        self._stopping = False
        self._producer: ProducerPort | None = None
        self._publish: PublishCallable | None = None
        self._settings: ResolvedSettings | None = None
        self._in_flight = 0

        self._guard = threading.local()
        self._not_started_warnings = 0

    @property
    def statuses(self) -> StatusBoard:
        """Return the board collecting this appender's diagnostics."""

        return self._statuses

    @property
    def settings(self) -> ResolvedSettings | None:
        """Return the settings resolved by the last successful start."""

        with self._lock:
            return self._settings

    @property
    def filters(self) -> tuple[EventFilter, ...]:
        """Return the user filters; the recursion guard is not listed."""

        return tuple(self._filters)

    def add_filter(self, event_filter: EventFilter) -> None:
        self._filters.append(event_filter)

    def clear_filters(self) -> None:
        """Remove user filters. The recursion guard stays installed."""

        self._filters.clear()

    def is_started(self) -> bool:
        with self._lock:
            return self._started

    def start(self) -> None:
        """Resolve settings, create the producer handle, and mark started.

        Missing prerequisites are reported as error statuses and leave the
        appender stopped. Exceptions raised while constructing the producer
        propagate and also leave it stopped.
        """
        with self._lock:
            self._lock.wait_for(lambda: not self._stopping)
            if self._started:
                return
            settings = resolve_settings(
                name=self.name,
                context=self.context,
                topic=self.topic,
                encoding=self.encoding,
                partitioning_strategy=self.partitioning_strategy,
                layout=self.layout,
                report=self._report,
            )
            if settings is None:
                return
            producer = self._producer_factory(settings.producer_properties)
            self._settings = settings
            self._producer = producer
            self._publish = create_publish(settings=settings, producer=producer)
            self._not_started_warnings = 0
            self._started = True

    def stop(self) -> None:
        """Refuse new appends, drain in-flight ones, and close the handle.

        The handle is detached before draining, and :meth:`start` blocks
        until the close has finished, so a restart never shares or loses a
        handle with a stop in progress.
        """
        with self._lock:
            self._lock.wait_for(lambda: not self._stopping)
            producer, self._producer = self._producer, None
            self._started = False
            self._publish = None
            self._settings = None
            if producer is None:
                return
            self._stopping = True
            drained = self._lock.wait_for(lambda: self._in_flight == 0, timeout=self._stop_timeout)
            if not drained:
                self._report(
                    StatusLevel.WARN,
                    "stop_timeout",
                    f"{self._in_flight} append(s) still running after {self._stop_timeout}s; closing producer anyway.",
                    {"in_flight": self._in_flight, "timeout": self._stop_timeout},
                )

        try:
            producer.close()
        except Exception as exc:  # noqa: BLE001
            self._report(
                StatusLevel.WARN,
                "producer_close_failed",
                f"Failed to shut down kafka producer: {exc}",
                {"exception": repr(exc)},
                exception=exc,
            )
        finally:
            with self._lock:
                self._stopping = False
                self._lock.notify_all()

    def do_append(self, event: LogEvent) -> None:
        """Framework entry point: guard, filter, then :meth:`append`."""
        if getattr(self._guard, "active", False):
            return
        self._guard.active = True
        try:
            if not self.is_started():
                self._warn_not_started()
                return
            if self._decide(event) is FilterReply.DENY:
                return
            self.append(event)
        finally:
            self._guard.active = False

    def append(self, event: LogEvent) -> None:
        """Publish ``event``; a no-op unless the appender is started."""
        with self._lock:
            publish = self._publish
            if not self._started or publish is None:
                return
            self._in_flight += 1
        try:
            publish(event)
        finally:
            with self._lock:
                self._in_flight -= 1
                if self._in_flight == 0:
                    self._lock.notify_all()

    def _create_confluent_producer(self, properties: Mapping[str, Any]) -> ProducerPort:
        from lib_log_kafka.adapters.kafka import ConfluentProducerAdapter

        return ConfluentProducerAdapter(properties, diagnostic=self._on_producer_diagnostic)

    def _on_producer_diagnostic(self, name: str, payload: dict[str, Any]) -> None:
        self._report(StatusLevel.WARN, name, f"Kafka delivery failed: {payload.get('error')}", payload)

    def _decide(self, event: LogEvent) -> FilterReply:
        if self._recursion_guard(event) is FilterReply.DENY:
            return FilterReply.DENY
        for event_filter in tuple(self._filters):
            reply = event_filter(event)
            if reply is not FilterReply.NEUTRAL:
                return reply
        return FilterReply.NEUTRAL

    def _warn_not_started(self) -> None:
        if self._not_started_warnings >= ALLOWED_REPEATS:
            return
        self._not_started_warnings += 1
        self._report(
            StatusLevel.WARN,
            "append_before_start",
            f'Attempted to append to non started appender "{self.name}".',
            {},
        )

    def _report(
        self,
        level: StatusLevel,
        name: str,
        message: str,
        payload: dict[str, Any],
        *,
        exception: BaseException | None = None,
    ) -> None:
        status = Status(
            level=level,
            name=name,
            message=message,
            origin=self.name,
            payload=dict(payload),
            exception=repr(exception) if exception is not None else None,
        )
        self._statuses.add(status)
        self._emit_diagnostic(name, {"appender": self.name, "level": level.name, "message": message, **payload})

    def _emit_diagnostic(self, name: str, payload: dict[str, Any]) -> None:
        """Invoke the diagnostic hook, recording hook failures as statuses."""

        hook: Callable[[str, dict[str, Any]], None] | None = self._diagnostic
        if hook is None:
            return
        try:
            hook(name, payload)
        except Exception as exc:  # noqa: BLE001
            self._statuses.add(
                Status(
                    level=StatusLevel.ERROR,
                    name="diagnostic_hook_error",
                    message=f"Diagnostic hook raised while reporting {name}",
                    origin=self.name,
                    exception=repr(exc),
                )
            )


__all__ = ["ALLOWED_REPEATS", "KafkaAppender"]
