"""Producer adapter backed by ``confluent_kafka.Producer``.

Purpose
-------
Implement :class:`ProducerPort` on top of librdkafka: records are handed to
the client's internal queue and delivered asynchronously; delivery reports
update counters and feed the diagnostic hook.

Contents
--------
* :data:`CLIENT_LOGGER_NAME` - logger receiving librdkafka's own logs.
* :class:`ProducerCloseError` - raised when ``close`` cannot flush everything.
* :class:`ConfluentProducerAdapter` - concrete :class:`ProducerPort`.

System Role
-----------
Default producer handle created by :class:`KafkaAppender` at start time.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Mapping

from confluent_kafka import Producer

from lib_log_kafka.application.ports.producer import ProducerPort
from lib_log_kafka.domain.filters import KAFKA_LOGGER_PREFIX

CLIENT_LOGGER_NAME = f"{KAFKA_LOGGER_PREFIX}.producer"
#: Lives under the recursion-guard prefix so client logs are never published.


class ProducerCloseError(RuntimeError):
    """Raised when buffered records are still pending after the close flush."""

    def __init__(self, pending: int, timeout: float) -> None:
        super().__init__(f"{pending} message(s) still pending after flushing for {timeout}s")
        self.pending = pending
        self.timeout = timeout


class ConfluentProducerAdapter(ProducerPort):
    """Submit byte records through a ``confluent_kafka.Producer``.

    Keys and values are passed through untouched, so no serializer is
    configured on the client.
    """

    def __init__(
        self,
        properties: Mapping[str, Any],
        *,
        close_timeout: float = 10.0,
        diagnostic: Callable[[str, dict[str, Any]], None] | None = None,
        producer_cls: Callable[[dict[str, Any]], Any] | None = None,
    ) -> None:
        """Create the underlying client from ``properties``.

        Parameters
        ----------
        properties:
            librdkafka configuration (``bootstrap.servers`` etc.) forwarded
            verbatim. A ``logger`` entry is added unless one is present.
        close_timeout:
            Seconds :meth:`close` waits for outstanding deliveries.
        diagnostic:
            Optional hook receiving ``("delivery_failed", payload)``.
        producer_cls:
            Client class; defaults to ``confluent_kafka.Producer``.
        """
        config = dict(properties)
        config.setdefault("logger", logging.getLogger(CLIENT_LOGGER_NAME))
        self._producer = (producer_cls or Producer)(config)
        self._close_timeout = close_timeout
        self._diagnostic = diagnostic
        self._counter_lock = threading.Lock()
        self._delivered = 0
        self._failed = 0

    def send(self, topic: str, key: bytes | None, value: bytes) -> None:
        """Queue one record and serve pending delivery callbacks without blocking."""
        self._producer.produce(topic, value=value, key=key, on_delivery=self._on_delivery)
        self._producer.poll(0)

    def close(self) -> None:
        """Flush outstanding records, raising when some could not be delivered."""
        pending = self._producer.flush(self._close_timeout)
        if pending:
            raise ProducerCloseError(pending, self._close_timeout)

    def stats(self) -> dict[str, int]:
        """Return delivery counters observed so far."""
        with self._counter_lock:
            return {"delivered": self._delivered, "failed": self._failed}

    def _on_delivery(self, err: Any, msg: Any) -> None:
        """Delivery report callback invoked from ``poll``/``flush``."""
        if err is None:
            with self._counter_lock:
                self._delivered += 1
            return
        with self._counter_lock:
            self._failed += 1
        if self._diagnostic is None:
            return
        self._diagnostic(
            "delivery_failed",
            {
                "error": str(err),
                "topic": msg.topic() if msg is not None else None,
            },
        )


__all__ = ["CLIENT_LOGGER_NAME", "ConfluentProducerAdapter", "ProducerCloseError"]
