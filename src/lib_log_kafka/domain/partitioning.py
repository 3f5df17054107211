"""Built-in partition-key derivation strategies.

Each strategy turns an event (plus the optional host identity) into the key
bytes handed to the broker. Equal keys land on the same partition, which keeps
ordering per host, logger, or thread; ``None`` lets the broker spread messages.
"""

from __future__ import annotations

from enum import Enum

from .events import LogEvent
from .hashing import hash_bytes


class PartitioningStrategy(Enum):
    """Enumerated key strategies satisfying ``PartitioningStrategyPort``.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from lib_log_kafka.domain.levels import LogLevel
    >>> event = LogEvent('id', datetime(2025, 9, 30, tzinfo=timezone.utc), 'app', LogLevel.INFO, 'msg')
    >>> PartitioningStrategy.ROUND_ROBIN.create_key(event, b'host') is None
    True
    >>> PartitioningStrategy.HOSTNAME.create_key(event, b'host')
    b'host'
    >>> PartitioningStrategy.from_name('logger_name') is PartitioningStrategy.LOGGER_NAME
    True
    """

    ROUND_ROBIN = "round_robin"
    HOSTNAME = "hostname"
    LOGGER_NAME = "logger_name"
    THREAD_NAME = "thread_name"

    def create_key(self, event: LogEvent, hostname_hash: bytes | None) -> bytes | None:
        """Return the partition key for ``event`` or ``None`` for no key."""

        if self is PartitioningStrategy.HOSTNAME:
            return hostname_hash
        if self is PartitioningStrategy.LOGGER_NAME:
            return hash_bytes(event.logger_name)
        if self is PartitioningStrategy.THREAD_NAME:
            if event.thread_name is None:
                return None
            return hash_bytes(event.thread_name)
        return None

    @classmethod
    def from_name(cls, name: str) -> "PartitioningStrategy":
        normalized = name.strip().lower().replace("-", "_")
        try:
            return cls(normalized)
        except ValueError as exc:
            raise ValueError(f"Unknown partitioning strategy: {name!r}") from exc


__all__ = ["PartitioningStrategy"]
