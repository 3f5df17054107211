"""Environment-driven configuration for the Kafka appender.

Purpose
-------
Build the ambient :class:`LoggerContext` snapshot from the process environment
and optionally seed that environment from the nearest ``.env`` file.

Contents
--------
* :func:`should_use_dotenv` / :func:`enable_dotenv` - opt-in ``.env`` loading.
* :func:`context_from_environ` - environment variables to ``LoggerContext``.

Environment
-----------
``LOG_KAFKA_TOPIC``
    Topic stored under the ``topic`` context property.
``HOSTNAME``
    Host identity; falls back to :func:`socket.gethostname`.
``LOG_KAFKA_PRODUCER_<NAME>``
    Producer property ``<name>`` lowercased with ``_`` turned into ``.``
    (``LOG_KAFKA_PRODUCER_BOOTSTRAP_SERVERS`` -> ``bootstrap.servers``).
``LOG_KAFKA_USE_DOTENV``
    Truthy value enables ``.env`` loading when the CLI flag is absent.
"""

from __future__ import annotations

import os
import socket
from pathlib import Path
from typing import Mapping

from dotenv import find_dotenv, load_dotenv

from lib_log_kafka.domain.context import HOSTNAME_PROPERTY, TOPIC_PROPERTY, LoggerContext

DOTENV_ENV_VAR = "LOG_KAFKA_USE_DOTENV"
TOPIC_ENV_VAR = "LOG_KAFKA_TOPIC"
HOSTNAME_ENV_VAR = "HOSTNAME"
PRODUCER_ENV_PREFIX = "LOG_KAFKA_PRODUCER_"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}

_DOTENV_LOADED: Path | None = None


def should_use_dotenv(*, explicit: bool | None = None, env_value: str | None = None) -> bool:
    """Decide whether ``.env`` loading is enabled.

    An explicit CLI choice wins; otherwise the ``LOG_KAFKA_USE_DOTENV`` value
    decides; unset means disabled.

    Examples
    --------
    >>> should_use_dotenv(explicit=False, env_value="1")
    False
    >>> should_use_dotenv(env_value="yes")
    True
    >>> should_use_dotenv()
    False
    """

    if explicit is not None:
        return explicit
    if env_value is None:
        return False
    normalized = env_value.strip().lower()
    if normalized in _TRUTHY:
        return True
    if normalized in _FALSY:
        return False
    raise ValueError(f"{DOTENV_ENV_VAR} must be a boolean flag, got {env_value!r}")


def enable_dotenv(*, search_from: Path | None = None) -> Path | None:
    """Load the nearest ``.env`` without overriding existing variables.

    Returns the resolved path of the loaded file, or ``None`` when no file was
    found. Repeated calls reuse the first result.
    """

    global _DOTENV_LOADED
    if _DOTENV_LOADED is not None:
        return _DOTENV_LOADED

    if search_from is not None:
        candidate = _find_upwards(search_from)
    else:
        found = find_dotenv(usecwd=True)
        candidate = Path(found) if found else None
    if candidate is None:
        return None

    load_dotenv(candidate, override=False)
    _DOTENV_LOADED = candidate.resolve()
    return _DOTENV_LOADED


def _find_upwards(start: Path) -> Path | None:
    current = start.resolve()
    for directory in (current, *current.parents):
        candidate = directory / ".env"
        if candidate.is_file():
            return candidate
    return None


def _reset_dotenv_state_for_testing() -> None:
    global _DOTENV_LOADED
    _DOTENV_LOADED = None


def producer_property_name(env_name: str) -> str:
    """Map a ``LOG_KAFKA_PRODUCER_*`` variable to its librdkafka property.

    Examples
    --------
    >>> producer_property_name("LOG_KAFKA_PRODUCER_BOOTSTRAP_SERVERS")
    'bootstrap.servers'
    """

    return env_name[len(PRODUCER_ENV_PREFIX) :].lower().replace("_", ".")


def context_from_environ(environ: Mapping[str, str] | None = None, *, name: str = "default") -> LoggerContext:
    """Snapshot the ambient logger context from ``environ`` (default ``os.environ``).

    Examples
    --------
    >>> ctx = context_from_environ({"LOG_KAFKA_TOPIC": "logs", "HOSTNAME": "web-1",
    ...                             "LOG_KAFKA_PRODUCER_ACKS": "all"})
    >>> ctx.property("topic"), ctx.property("HOSTNAME"), ctx.producer_properties()
    ('logs', 'web-1', {'acks': 'all'})
    """

    source = os.environ if environ is None else environ
    properties: dict[str, str] = {}
    for key, value in source.items():
        if key.startswith(PRODUCER_ENV_PREFIX) and len(key) > len(PRODUCER_ENV_PREFIX):
            properties[producer_property_name(key)] = value

    topic = source.get(TOPIC_ENV_VAR)
    if topic:
        properties[TOPIC_PROPERTY] = topic

    hostname = source.get(HOSTNAME_ENV_VAR) or _system_hostname()
    if hostname:
        properties[HOSTNAME_PROPERTY] = hostname

    return LoggerContext(name=name, properties=properties)


def _system_hostname() -> str | None:
    try:
        return socket.gethostname() or None
    except OSError:
        return None


__all__ = [
    "DOTENV_ENV_VAR",
    "HOSTNAME_ENV_VAR",
    "PRODUCER_ENV_PREFIX",
    "TOPIC_ENV_VAR",
    "context_from_environ",
    "enable_dotenv",
    "producer_property_name",
    "should_use_dotenv",
]
