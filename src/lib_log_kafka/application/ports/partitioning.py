"""Port describing partition-key derivation."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_log_kafka.domain.events import LogEvent


@runtime_checkable
class PartitioningStrategyPort(Protocol):
    """Derive the partition key of an event.

    ``hostname_hash`` is the 4-byte host identity resolved at start, or
    ``None`` when the hostname was unknown.
    """

    def create_key(self, event: LogEvent, hostname_hash: bytes | None) -> bytes | None:
        """Return key bytes, or ``None`` to let the broker pick a partition."""


__all__ = ["PartitioningStrategyPort"]
