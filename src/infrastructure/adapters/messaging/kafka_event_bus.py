"""Kafka event bus.

publish() hands the serialized event to the producer's local queue and
returns; the broker acknowledgment arrives later through the delivery
callback, which logs failures instead of raising them. A failure to
enqueue (local queue full, producer error) is raised, since the event
was never handed off.

Usage:
    bus = KafkaEventBus(bootstrap_servers="kafka:9092")
    await bus.publish("save-pt-assessment", payload)
    ...
    await bus.drain()
"""

from __future__ import annotations

import asyncio
import json
from typing import Any, Mapping

from confluent_kafka import KafkaException, Producer

from src.application.ports.event_bus import EventBusProtocol
from src.domain.errors.integration import UpstreamServiceError
from src.infrastructure.observability.correlation import get_correlation_id
from src.infrastructure.observability.logging import get_logger_for_adapter


class KafkaEventBus(EventBusProtocol):
    """Publishes assessment events as JSON to Kafka topics."""

    def __init__(
        self,
        bootstrap_servers: str,
        timeout_seconds: float = 10.0,
        producer: Any = None,
    ) -> None:
        """Initialize the event bus.

        Args:
            bootstrap_servers: Kafka bootstrap servers.
            timeout_seconds: Broker message timeout and drain budget.
            producer: Pre-built producer (tests); created from the
                settings below when omitted.
        """
        self._timeout = timeout_seconds
        self._producer = producer or Producer(
            {
                "bootstrap.servers": bootstrap_servers,
                "acks": "all",
                "enable.idempotence": True,
                "message.timeout.ms": int(timeout_seconds * 1000),
                "compression.type": "snappy",
            }
        )
        self._log = get_logger_for_adapter(self.__class__.__name__)
        self.failed_deliveries = 0

    async def publish(self, topic: str, payload: Mapping[str, Any]) -> None:
        headers = []
        correlation_id = get_correlation_id()
        if correlation_id:
            headers.append(("correlation_id", correlation_id.encode("utf-8")))

        try:
            self._producer.produce(
                topic=topic,
                value=json.dumps(dict(payload)).encode("utf-8"),
                headers=headers,
                on_delivery=self._on_delivery,
            )
        except (BufferError, KafkaException) as exc:
            self._log.error("event_enqueue_failed", topic=topic, error=str(exc))
            raise UpstreamServiceError(
                "event_bus", "publish", f"UPSTREAM_ERROR: could not enqueue event on {topic}: {exc}"
            ) from exc

        # Serve delivery callbacks of earlier messages without blocking
        self._producer.poll(0)

    def _on_delivery(self, err: Any, msg: Any) -> None:
        if err is not None:
            self.failed_deliveries += 1
            self._log.error("event_delivery_failed", topic=msg.topic(), error=str(err))
        else:
            self._log.debug(
                "event_delivered",
                topic=msg.topic(),
                partition=msg.partition(),
                offset=msg.offset(),
            )

    async def drain(self) -> None:
        """Wait (up to the timeout) for queued events to be acknowledged."""
        remaining = await asyncio.to_thread(self._producer.flush, self._timeout)
        if remaining > 0:
            self._log.warning("event_drain_incomplete", pending=remaining)
