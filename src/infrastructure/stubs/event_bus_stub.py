"""Event Bus Stub.

Captures published events in memory, in publish order.
"""

from __future__ import annotations

import copy
from typing import Any, Mapping

from src.application.ports.event_bus import EventBusProtocol


class EventBusStub(EventBusProtocol):
    """In-memory event bus."""

    def __init__(self) -> None:
        self.published: list[tuple[str, dict[str, Any]]] = []

    async def publish(self, topic: str, payload: Mapping[str, Any]) -> None:
        self.published.append((topic, copy.deepcopy(dict(payload))))

    def events_for(self, topic: str) -> list[dict[str, Any]]:
        return [payload for published_topic, payload in self.published if published_topic == topic]

    def clear(self) -> None:
        self.published.clear()
