"""Domain entities and value objects used by the Kafka appender."""

from __future__ import annotations

from .context import LoggerContext
from .events import LogEvent
from .filters import EventFilter, FilterReply, KAFKA_LOGGER_PREFIX, recursion_guard
from .hashing import hash_bytes, string_hash
from .levels import LogLevel
from .partitioning import PartitioningStrategy
from .status import Status, StatusBoard, StatusLevel

__all__ = [
    "EventFilter",
    "FilterReply",
    "KAFKA_LOGGER_PREFIX",
    "LogEvent",
    "LogLevel",
    "LoggerContext",
    "PartitioningStrategy",
    "Status",
    "StatusBoard",
    "StatusLevel",
    "hash_bytes",
    "recursion_guard",
    "string_hash",
]
