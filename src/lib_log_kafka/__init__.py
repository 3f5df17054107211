"""Forward structured log events to Apache Kafka.

Typical use attaches a :class:`KafkaLoggingHandler` wrapping a started
:class:`KafkaAppender` to a stdlib logger::

    appender = KafkaAppender(context=context_from_environ(), layout=PatternLayout())
    appender.start()
    logging.getLogger().addHandler(KafkaLoggingHandler(appender))
"""

from __future__ import annotations

from .adapters import ConfluentProducerAdapter, JsonLayout, KafkaLoggingHandler, PatternLayout
from .application.appender import KafkaAppender
from .config import context_from_environ
from .domain import (
    FilterReply,
    LogEvent,
    LogLevel,
    LoggerContext,
    PartitioningStrategy,
    Status,
    StatusLevel,
    recursion_guard,
)

__all__ = [
    "ConfluentProducerAdapter",
    "FilterReply",
    "JsonLayout",
    "KafkaAppender",
    "KafkaLoggingHandler",
    "LogEvent",
    "LogLevel",
    "LoggerContext",
    "PartitioningStrategy",
    "PatternLayout",
    "Status",
    "StatusLevel",
    "context_from_environ",
    "recursion_guard",
]
