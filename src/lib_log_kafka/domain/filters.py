"""Filter decisions and the recursion guard.

Contents
--------
* :class:`FilterReply` - tri-state verdict returned by every filter.
* :data:`EventFilter` - callable signature of a filter.
* :data:`KAFKA_LOGGER_PREFIX` - logger namespace used by the Kafka client.
* :func:`recursion_guard` - builds the predicate rejecting client logs.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable

from .events import LogEvent

KAFKA_LOGGER_PREFIX = "confluent_kafka"
#: Namespace of the loggers receiving the Kafka client's own logs. Events from
#: it must never be published, or each publish would log and publish again.


class FilterReply(Enum):
    """Verdict of a filter: drop, defer to the next filter, or accept."""

    DENY = -1
    NEUTRAL = 0
    ACCEPT = 1


EventFilter = Callable[[LogEvent], FilterReply]


def recursion_guard(prefix: str = KAFKA_LOGGER_PREFIX) -> EventFilter:
    """Return a filter denying events whose logger name starts with ``prefix``.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from lib_log_kafka.domain.levels import LogLevel
    >>> guard = recursion_guard()
    >>> event = LogEvent('id', datetime(2025, 9, 30, tzinfo=timezone.utc), 'confluent_kafka.producer', LogLevel.DEBUG, 'msg')
    >>> guard(event)
    <FilterReply.DENY: -1>
    >>> guard(event.replace(logger_name='app.http'))
    <FilterReply.NEUTRAL: 0>
    """

    def decide(event: LogEvent) -> FilterReply:
        if event.logger_name.startswith(prefix):
            return FilterReply.DENY
        return FilterReply.NEUTRAL

    return decide


__all__ = ["EventFilter", "FilterReply", "KAFKA_LOGGER_PREFIX", "recursion_guard"]
