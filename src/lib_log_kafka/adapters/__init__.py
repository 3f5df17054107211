"""Adapter implementations for the Kafka appender ports."""

from __future__ import annotations

from .handler import KafkaLoggingHandler, event_from_record
from .kafka import CLIENT_LOGGER_NAME, ConfluentProducerAdapter, ProducerCloseError
from .layout import JsonLayout, PatternLayout

__all__ = [
    "CLIENT_LOGGER_NAME",
    "ConfluentProducerAdapter",
    "JsonLayout",
    "KafkaLoggingHandler",
    "PatternLayout",
    "ProducerCloseError",
    "event_from_record",
]
