"""Port describing the broker producer handle."""

from __future__ import annotations

from typing import Any, Callable, Mapping, Protocol, runtime_checkable


@runtime_checkable
class ProducerPort(Protocol):
    """Long-lived session submitting byte records to a broker topic."""

    def send(self, topic: str, key: bytes | None, value: bytes) -> None:
        """Submit one record without waiting for acknowledgement."""

    def close(self) -> None:
        """Release the session, delivering what is still buffered."""


ProducerFactory = Callable[[Mapping[str, Any]], ProducerPort]
#: Builds a producer handle from the verbatim connection properties.


__all__ = ["ProducerFactory", "ProducerPort"]
