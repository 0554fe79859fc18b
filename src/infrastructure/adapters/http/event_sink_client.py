"""HTTP event sink.

publish() only enqueues: delivery runs in a background task so the
caller's operation completes once the event is handed off. Delivery
failures are logged, never raised to the publisher. drain() waits for
in-flight deliveries (shutdown and tests).
"""

from __future__ import annotations

import asyncio
from typing import Any, Mapping

import httpx

from src.application.ports.event_bus import EventBusProtocol
from src.domain.errors.integration import UpstreamServiceError
from src.infrastructure.adapters.http.base import HttpAdapter


def _sink_error(detail: str, status_code: int | None) -> UpstreamServiceError:
    return UpstreamServiceError(
        "event_sink", "publish", f"UPSTREAM_ERROR: {detail}", status_code=status_code
    )


class HttpEventBus(HttpAdapter, EventBusProtocol):
    """Posts each event to <base_url>/<topic> in the background."""

    def __init__(
        self,
        base_url: str,
        client: httpx.AsyncClient | None = None,
        timeout_seconds: float = 30.0,
    ) -> None:
        super().__init__(base_url, client, timeout_seconds)
        self._pending: set[asyncio.Task[None]] = set()
        self.failed_deliveries = 0

    async def publish(self, topic: str, payload: Mapping[str, Any]) -> None:
        task = asyncio.create_task(self._deliver(topic, dict(payload)))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _deliver(self, topic: str, payload: dict[str, Any]) -> None:
        try:
            await self._post(f"/{topic}", payload, _sink_error)
        except UpstreamServiceError as exc:
            self.failed_deliveries += 1
            self._log.error(
                "event_delivery_failed",
                topic=topic,
                status_code=exc.status_code,
                error=str(exc),
            )
        else:
            self._log.debug("event_delivered", topic=topic)

    async def drain(self) -> None:
        """Wait for every in-flight delivery to finish."""
        pending = list(self._pending)
        if pending:
            await asyncio.gather(*pending)
