"""Bridge from the stdlib :mod:`logging` module to :class:`KafkaAppender`.

Purpose
-------
Let hosts attach the appender like any other handler. Each
:class:`logging.LogRecord` is converted into a :class:`LogEvent` and handed to
:meth:`KafkaAppender.do_append`, which runs the recursion guard and filters.

Contents
--------
* :func:`event_from_record` - ``LogRecord`` to ``LogEvent`` conversion.
* :class:`KafkaLoggingHandler` - the :class:`logging.Handler` subclass.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable
from uuid import uuid4

from lib_log_kafka.application.appender import KafkaAppender
from lib_log_kafka.domain.events import LogEvent
from lib_log_kafka.domain.levels import LogLevel

_RECORD_ATTRIBUTES = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}
#: Attributes every ``LogRecord`` carries; anything else came from ``extra=``.


def _record_extra(record: logging.LogRecord) -> dict[str, Any]:
    return {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRIBUTES and not key.startswith("_")}


def event_from_record(
    record: logging.LogRecord,
    *,
    id_provider: Callable[[], str] | None = None,
    format_exception: Callable[[Any], str] | None = None,
) -> LogEvent:
    """Convert ``record`` into an immutable :class:`LogEvent`.

    Examples
    --------
    >>> record = logging.LogRecord('app', logging.INFO, __file__, 1, 'hi %s', ('there',), None)
    >>> event = event_from_record(record, id_provider=lambda: 'evt')
    >>> event.message, event.level, event.logger_name
    ('hi there', <LogLevel.INFO: 20>, 'app')
    """

    exc_text: str | None = None
    if record.exc_info:
        formatter = format_exception or logging.Formatter().formatException
        exc_text = formatter(record.exc_info)
    elif record.exc_text:
        exc_text = record.exc_text

    return LogEvent(
        event_id=(id_provider or (lambda: uuid4().hex))(),
        timestamp=datetime.fromtimestamp(record.created, tz=timezone.utc),
        logger_name=record.name,
        level=LogLevel.from_python_level(record.levelno),
        message=record.getMessage(),
        thread_name=record.threadName,
        extra=_record_extra(record),
        exc_info=exc_text,
    )


class KafkaLoggingHandler(logging.Handler):
    """Forward stdlib log records to a :class:`KafkaAppender`."""

    def __init__(self, appender: KafkaAppender, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self._appender = appender

    @property
    def appender(self) -> KafkaAppender:
        return self._appender

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self._appender.do_append(event_from_record(record, format_exception=self._format_exception))
        except Exception:  # noqa: BLE001
            self.handleError(record)

    def _format_exception(self, exc_info: Any) -> str:
        formatter = self.formatter or logging.Formatter()
        return formatter.formatException(exc_info)

    def close(self) -> None:
        """Stop the appender, then release the handler."""
        try:
            self._appender.stop()
        finally:
            super().close()


__all__ = ["KafkaLoggingHandler", "event_from_record"]
