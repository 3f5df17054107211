"""Shared callable signatures for the application use cases."""

from __future__ import annotations

from typing import Callable

from lib_log_kafka.domain.events import LogEvent

PublishCallable = Callable[[LogEvent], None]
DiagnosticHook = Callable[[str, dict[str, object]], None] | None

__all__ = ["DiagnosticHook", "PublishCallable"]
