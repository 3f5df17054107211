"""Application-layer ports for the Kafka appender."""

from __future__ import annotations

from .layout import LayoutPort
from .partitioning import PartitioningStrategyPort
from .producer import ProducerFactory, ProducerPort

__all__ = [
    "LayoutPort",
    "PartitioningStrategyPort",
    "ProducerFactory",
    "ProducerPort",
]
