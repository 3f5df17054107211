"""Use case turning one log event into one broker record.

The factory freezes the resolved settings and the running producer handle
into a callable executed for every accepted event. Nothing is caught here:
delivery, batching, and retries belong to the producer handle.
"""

from __future__ import annotations

from lib_log_kafka.application.ports import ProducerPort
from lib_log_kafka.domain.events import LogEvent

from ._types import PublishCallable
from .resolve_settings import ResolvedSettings


def create_publish(*, settings: ResolvedSettings, producer: ProducerPort) -> PublishCallable:
    """Build the per-event publish callable.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from lib_log_kafka.adapters.layout import PatternLayout
    >>> from lib_log_kafka.domain import LogLevel, PartitioningStrategy
    >>> class DummyProducer:
    ...     def __init__(self):
    ...         self.records = []
    ...     def send(self, topic, key, value):
    ...         self.records.append((topic, key, value))
    ...     def close(self):
    ...         pass
    >>> settings = ResolvedSettings(topic='logs', encoding='utf-8',
    ...     partitioning_strategy=PartitioningStrategy.HOSTNAME,
    ...     layout=PatternLayout(preset='message'), hostname_hash=b'\\x00\\x00\\x00\\x01')
    >>> producer = DummyProducer()
    >>> publish = create_publish(settings=settings, producer=producer)
    >>> publish(LogEvent('id', datetime(2025, 9, 30, tzinfo=timezone.utc), 'app', LogLevel.INFO, 'hi'))
    >>> producer.records
    [('logs', b'\\x00\\x00\\x00\\x01', b'hi')]
    """

    topic = settings.topic
    encoding = settings.encoding
    layout = settings.layout
    strategy = settings.partitioning_strategy
    hostname_hash = settings.hostname_hash

    def publish(event: LogEvent) -> None:
        message = layout.do_layout(event)
        payload = message.encode(encoding)
        key = strategy.create_key(event, hostname_hash)
        producer.send(topic, key, payload)

    return publish


__all__ = ["create_publish"]
