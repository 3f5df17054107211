"""Start-time resolution of the appender settings.

Purpose
-------
Turn explicit appender overrides plus the ambient :class:`LoggerContext`
snapshot into one immutable :class:`ResolvedSettings`, reporting defaults and
missing prerequisites through a status callback.

Contents
--------
* :class:`ResolvedSettings` - values used for the whole running lifetime.
* :func:`resolve_settings` - the resolution step executed by ``start``.

System Role
-----------
Keeps the lifecycle manager free of lookup logic; the appender calls this
once per ``start`` and stores the result until ``stop``.
"""

from __future__ import annotations

import codecs
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Mapping

from lib_log_kafka.application.ports import LayoutPort, PartitioningStrategyPort
from lib_log_kafka.domain import LoggerContext, PartitioningStrategy, StatusLevel, hash_bytes
from lib_log_kafka.domain.context import HOSTNAME_PROPERTY, TOPIC_PROPERTY

DEFAULT_ENCODING = "utf-8"
DEFAULT_PARTITIONING = PartitioningStrategy.ROUND_ROBIN
BOOTSTRAP_SERVERS = "bootstrap.servers"

StatusReporter = Callable[[StatusLevel, str, str, dict[str, Any]], None]


@dataclass(slots=True, frozen=True)
class ResolvedSettings:
    """Settings fixed between a successful ``start`` and the next ``stop``."""

    topic: str
    encoding: str
    partitioning_strategy: PartitioningStrategyPort
    layout: LayoutPort
    hostname_hash: bytes | None
    producer_properties: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "producer_properties", MappingProxyType(dict(self.producer_properties)))


def _is_known_encoding(encoding: str) -> bool:
    try:
        codecs.lookup(encoding)
    except LookupError:
        return False
    return True


def resolve_settings(
    *,
    name: str,
    context: LoggerContext,
    topic: str | None,
    encoding: str | None,
    partitioning_strategy: PartitioningStrategyPort | None,
    layout: LayoutPort | None,
    report: StatusReporter,
) -> ResolvedSettings | None:
    """Resolve the running configuration or return ``None`` when unusable.

    Parameters
    ----------
    name:
        Appender name quoted in status messages.
    context:
        Ambient property snapshot; ``topic`` and ``HOSTNAME`` are consulted,
        everything else is forwarded to the producer verbatim.
    topic, encoding, partitioning_strategy, layout:
        Explicit overrides; ``None`` means "not configured".
    report:
        Callback receiving ``(level, status_name, message, payload)``.

    Returns
    -------
    ResolvedSettings | None
        ``None`` when a prerequisite is missing; every missing prerequisite is
        reported at :attr:`StatusLevel.ERROR` before returning.

    Examples
    --------
    >>> from lib_log_kafka.adapters.layout import PatternLayout
    >>> seen = []
    >>> ctx = LoggerContext(properties={"topic": "logs", "bootstrap.servers": "k:9092"})
    >>> settings = resolve_settings(name="kafka", context=ctx, topic=None, encoding=None,
    ...     partitioning_strategy=None, layout=PatternLayout(),
    ...     report=lambda level, status, message, payload: seen.append(status))
    >>> settings.topic, settings.encoding, settings.partitioning_strategy
    ('logs', 'utf-8', <PartitioningStrategy.ROUND_ROBIN: 'round_robin'>)
    >>> seen
    ['hostname_missing', 'default_encoding', 'default_partitioning']
    """

    resolved_topic = topic if topic is not None else context.property(TOPIC_PROPERTY)
    producer_properties = context.producer_properties()

    errors_free = True
    if layout is None:
        report(StatusLevel.ERROR, "missing_layout", f'No layout set for the appender named "{name}".', {})
        errors_free = False
    if not resolved_topic:
        report(StatusLevel.ERROR, "missing_topic", f'No topic set for the appender named "{name}".', {})
        errors_free = False
    if encoding is not None and not _is_known_encoding(encoding):
        report(
            StatusLevel.ERROR,
            "unknown_encoding",
            f'Unknown encoding "{encoding}" for the appender named "{name}".',
            {"encoding": encoding},
        )
        errors_free = False
    if not producer_properties.get(BOOTSTRAP_SERVERS):
        report(
            StatusLevel.ERROR,
            "missing_bootstrap_servers",
            f'No "{BOOTSTRAP_SERVERS}" set for the appender named "{name}".',
            {},
        )
        errors_free = False
    if not errors_free or layout is None:
        return None

    hostname = context.property(HOSTNAME_PROPERTY)
    hostname_hash: bytes | None = None
    if hostname is not None:
        hostname_hash = hash_bytes(str(hostname))
    else:
        report(
            StatusLevel.WARN,
            "hostname_missing",
            "Could not determine hostname. Partitioning strategy HOSTNAME will not work.",
            {},
        )

    resolved_encoding = encoding
    if resolved_encoding is None:
        report(
            StatusLevel.INFO,
            "default_encoding",
            "No encoding specified. Using default UTF-8 encoding.",
            {"encoding": DEFAULT_ENCODING},
        )
        resolved_encoding = DEFAULT_ENCODING

    resolved_strategy = partitioning_strategy
    if resolved_strategy is None:
        report(
            StatusLevel.INFO,
            "default_partitioning",
            "No partitioning strategy defined. Using default ROUND_ROBIN strategy.",
            {"strategy": DEFAULT_PARTITIONING.name},
        )
        resolved_strategy = DEFAULT_PARTITIONING

    return ResolvedSettings(
        topic=str(resolved_topic),
        encoding=resolved_encoding,
        partitioning_strategy=resolved_strategy,
        layout=layout,
        hostname_hash=hostname_hash,
        producer_properties=producer_properties,
    )


__all__ = [
    "BOOTSTRAP_SERVERS",
    "DEFAULT_ENCODING",
    "DEFAULT_PARTITIONING",
    "ResolvedSettings",
    "StatusReporter",
    "resolve_settings",
]
