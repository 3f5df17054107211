"""Utilities that normalise log events into template-friendly dictionaries.

Contents
--------
* :func:`build_format_payload` - generate placeholder values for a log event.

System Role
-----------
Feeds :class:`lib_log_kafka.adapters.layout.PatternLayout` so presets and
custom ``str.format`` templates share one data contract.
"""

from __future__ import annotations

from typing import Any

from lib_log_kafka.domain.events import LogEvent


def build_format_payload(event: LogEvent) -> dict[str, Any]:
    """Return the mapping of placeholders exposed to format templates."""

    extra_dict = dict(event.extra)
    extra_fields = ""
    pairs = {key: value for key, value in extra_dict.items() if value not in (None, {})}
    if pairs:
        extra_fields = " " + " ".join(f"{key}={value}" for key, value in sorted(pairs.items()))

    level_text = event.level.severity.upper()
    ts = event.timestamp

    return {
        "timestamp": ts.isoformat(),
        "YYYY": f"{ts.year:04d}",
        "MM": f"{ts.month:02d}",
        "DD": f"{ts.day:02d}",
        "hh": f"{ts.hour:02d}",
        "mm": f"{ts.minute:02d}",
        "ss": f"{ts.second:02d}",
        "level": event.level.severity,
        "LEVEL": level_text,
        "level_name": event.level.name,
        "logger_name": event.logger_name,
        "thread_name": event.thread_name or "",
        "event_id": event.event_id,
        "message": event.message,
        "extra": extra_dict,
        "extra_fields": extra_fields,
        "exc_info": event.exc_info or "",
    }


__all__ = ["build_format_payload"]
