"""Immutable snapshot of the ambient logger-context properties.

Purpose
-------
Give the appender a read-only view of the host's shared configuration (topic,
hostname, producer properties) so settings are resolved from an explicit value
instead of process-global state.

Contents
--------
* :data:`TOPIC_PROPERTY`, :data:`HOSTNAME_PROPERTY` - reserved property keys.
* :class:`LoggerContext` - named, frozen property mapping.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

TOPIC_PROPERTY = "topic"
HOSTNAME_PROPERTY = "HOSTNAME"

RESERVED_PROPERTIES = frozenset({TOPIC_PROPERTY, HOSTNAME_PROPERTY})
#: Keys consumed by the appender itself and never forwarded to the producer.


@dataclass(slots=True, frozen=True)
class LoggerContext:
    """Named property snapshot shared by the appenders of one host.

    Examples
    --------
    >>> ctx = LoggerContext(properties={"topic": "logs", "bootstrap.servers": "k:9092"})
    >>> ctx.property("topic")
    'logs'
    >>> ctx.property("missing") is None
    True
    >>> ctx.producer_properties()
    {'bootstrap.servers': 'k:9092'}
    """

    name: str = "default"
    properties: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))

    def property(self, key: str) -> Any | None:
        """Return the property stored under ``key`` or ``None``."""

        return self.properties.get(key)

    def copy_of_properties(self) -> dict[str, Any]:
        """Return a mutable copy of all properties."""

        return dict(self.properties)

    def producer_properties(self) -> dict[str, Any]:
        """Return the properties forwarded verbatim to the producer handle."""

        return {key: value for key, value in self.properties.items() if key not in RESERVED_PROPERTIES}

    def with_properties(self, **changes: Any) -> "LoggerContext":
        """Return a copy with ``changes`` merged into the properties."""

        merged = self.copy_of_properties()
        merged.update(changes)
        return LoggerContext(name=self.name, properties=merged)


__all__ = ["HOSTNAME_PROPERTY", "LoggerContext", "RESERVED_PROPERTIES", "TOPIC_PROPERTY"]
