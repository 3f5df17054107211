"""Log level abstraction shared by layouts, filters, and the logging bridge.

Purpose
-------
Offer a domain-specific representation of log severities that maps cleanly
onto the stdlib levels, including custom numeric levels registered by hosts.

Contents
--------
* :class:`LogLevel` enum with conversion helpers.
"""

from __future__ import annotations

import logging
from enum import Enum


class LogLevel(Enum):
    """Enumerated logging levels used throughout the system."""

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50

    @property
    def severity(self) -> str:
        """Return the lowercase severity name for structured payloads."""

        return self.name.lower()

    def to_python_level(self) -> int:
        """Return the :mod:`logging` constant matching this level."""

        return getattr(logging, self.name)

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        normalized = name.strip().upper()
        if normalized == "WARN":
            normalized = "WARNING"
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown log level: {name!r}") from exc

    @classmethod
    def from_python_level(cls, level: int) -> "LogLevel":
        """Translate a stdlib level integer, rounding custom levels down.

        Examples
        --------
        >>> LogLevel.from_python_level(logging.ERROR)
        <LogLevel.ERROR: 40>
        >>> LogLevel.from_python_level(25)
        <LogLevel.INFO: 20>
        >>> LogLevel.from_python_level(5)
        <LogLevel.DEBUG: 10>
        """
        resolved = cls.DEBUG
        for member in cls:
            if member.value <= level:
                resolved = member
        return resolved


__all__ = ["LogLevel"]
