"""Layouts rendering log events into message payload text.

Contents
--------
* :class:`PatternLayout` - ``str.format`` templates with named presets.
* :class:`JsonLayout` - one JSON document per event.
"""

from __future__ import annotations

from lib_log_kafka.application.ports.layout import LayoutPort
from lib_log_kafka.domain.events import LogEvent

from ._formatting import build_format_payload

_PRESETS: dict[str, str] = {
    "full": "{timestamp} {LEVEL:<8} [{thread_name}] {logger_name} {event_id} {message}{extra_fields}",
    "short": "{hh}:{mm}:{ss}|{LEVEL}|{logger_name}: {message}",
    "message": "{message}",
}


def _resolve_preset(preset: str) -> str:
    key = preset.strip().lower()
    try:
        return _PRESETS[key]
    except KeyError as exc:
        raise ValueError(f"Unknown layout preset: {preset!r}") from exc


class PatternLayout(LayoutPort):
    """Render events through a ``str.format`` template.

    An explicit ``template`` wins over ``preset``. A captured exception is
    appended on its own line.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from lib_log_kafka.domain.levels import LogLevel
    >>> event = LogEvent('id', datetime(2025, 9, 30, 12, 5, 7, tzinfo=timezone.utc), 'app.db', LogLevel.WARNING, 'slow')
    >>> PatternLayout(preset='short').do_layout(event)
    '12:05:07|WARNING|app.db: slow'
    >>> PatternLayout(template='{level}:{message}').do_layout(event)
    'warning:slow'
    """

    def __init__(self, *, template: str | None = None, preset: str = "full") -> None:
        self._template = template if template is not None else _resolve_preset(preset)

    @property
    def template(self) -> str:
        return self._template

    def do_layout(self, event: LogEvent) -> str:
        rendered = self._template.format(**build_format_payload(event))
        if event.exc_info:
            rendered = f"{rendered}\n{event.exc_info}"
        return rendered


class JsonLayout(LayoutPort):
    """Render events as JSON with sorted keys."""

    def do_layout(self, event: LogEvent) -> str:
        return event.to_json()


__all__ = ["JsonLayout", "PatternLayout"]
