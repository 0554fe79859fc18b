"""Event bus port.

Publishing is a non-blocking hand-off: implementations enqueue the
payload and return; delivery (at-least-once) happens in the background.
No acknowledgment is awaited by callers.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol


class EventBusProtocol(Protocol):
    """Protocol for publishing events to downstream consumers."""

    async def publish(self, topic: str, payload: Mapping[str, Any]) -> None:
        """Hand the payload off for delivery on the topic."""
        ...
