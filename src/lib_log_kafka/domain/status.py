"""Status board collecting appender diagnostics.

Purpose
-------
Keep the appender's informational, warning, and error reports out of the
logging pipeline it feeds. Reports land in a bounded in-memory board that
operators and tests inspect directly.

Contents
--------
* :class:`StatusLevel` - severity of a status entry.
* :class:`Status` - immutable diagnostic entry.
* :class:`StatusBoard` - thread-safe bounded store of :class:`Status` entries.
"""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Deque, Iterator


class StatusLevel(Enum):
    INFO = 0
    WARN = 1
    ERROR = 2


@dataclass(slots=True, frozen=True)
class Status:
    """One diagnostic report emitted by an appender.

    Attributes
    ----------
    level:
        :class:`StatusLevel` of the report.
    name:
        Stable machine-readable identifier (``"default_encoding"`` etc.).
    message:
        Human-readable description.
    origin:
        Name of the appender that reported it.
    payload:
        Structured details forwarded to diagnostic hooks.
    exception:
        ``repr`` of the exception behind the report, if any.
    """

    level: StatusLevel
    name: str
    message: str
    origin: str
    payload: dict[str, Any] = field(default_factory=dict)
    exception: str | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class StatusBoard:
    """Fixed-size store retaining the most recent :class:`Status` entries."""

    def __init__(self, *, max_entries: int = 256) -> None:
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self._entries: Deque[Status] = deque(maxlen=max_entries)
        self._lock = threading.Lock()

    def add(self, status: Status) -> None:
        with self._lock:
            self._entries.append(status)

    def snapshot(self) -> list[Status]:
        """Return a copy of the stored entries, oldest first."""

        with self._lock:
            return list(self._entries)

    def by_level(self, level: StatusLevel) -> list[Status]:
        return [status for status in self.snapshot() if status.level is level]

    def names(self) -> list[str]:
        return [status.name for status in self.snapshot()]

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __iter__(self) -> Iterator[Status]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


__all__ = ["Status", "StatusBoard", "StatusLevel"]
