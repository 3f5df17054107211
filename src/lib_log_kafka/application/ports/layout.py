"""Port describing the event layout engine."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_log_kafka.domain.events import LogEvent


@runtime_checkable
class LayoutPort(Protocol):
    """Render a log event into the text that becomes the message payload."""

    def do_layout(self, event: LogEvent) -> str:
        """Return the textual representation of ``event``."""


__all__ = ["LayoutPort"]
