"""Application use cases executed by the Kafka appender."""

from __future__ import annotations

from ._types import DiagnosticHook, PublishCallable
from .publish import create_publish
from .resolve_settings import ResolvedSettings, resolve_settings

__all__ = [
    "DiagnosticHook",
    "PublishCallable",
    "ResolvedSettings",
    "create_publish",
    "resolve_settings",
]
