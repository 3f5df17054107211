"""Static package metadata surfaced by the CLI ``info`` command."""

from __future__ import annotations

from importlib import metadata as _metadata

name = "lib_log_kafka"
title = "Forward structured log events to Apache Kafka topics"
shell_command = "lib_log_kafka"


def _installed_version() -> str:
    try:
        return _metadata.version(name)
    except _metadata.PackageNotFoundError:
        return "0.1.0"


version = _installed_version()


def info_lines() -> list[str]:
    """Return the metadata banner as aligned ``key = value`` lines."""

    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    return [f"Info for {name}:", ""] + [f"    {label.ljust(pad)} = {value}" for label, value in fields]


def print_info() -> None:
    """Print the metadata banner."""

    print("\n".join(info_lines()))


__all__ = ["info_lines", "name", "print_info", "shell_command", "title", "version"]
