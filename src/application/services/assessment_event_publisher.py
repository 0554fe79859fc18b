"""Assessment event publisher.

Fire-and-forget hand-off of create/update events to downstream consumers
(persistence, indexing, notifications). The payload is the full
assessment request in its wire shape. Publishing only enqueues; no
delivery acknowledgment is awaited, and ordering is guaranteed only in
program order on the calling path.
"""

from __future__ import annotations

from src.application.dtos.contracts import AssessmentRequestContract
from src.application.ports.event_bus import EventBusProtocol
from src.application.services.base import LoggingMixin
from src.domain.models.assessment import AssessmentRequest


class AssessmentEventPublisher(LoggingMixin):
    """Publishes assessment lifecycle events on the configured topics."""

    def __init__(
        self,
        event_bus: EventBusProtocol,
        create_topic: str,
        update_topic: str,
    ) -> None:
        self._bus = event_bus
        self._create_topic = create_topic
        self._update_topic = update_topic
        self._init_logger()

    async def publish_create(self, request: AssessmentRequest) -> None:
        await self.publish(self._create_topic, request)

    async def publish_update(self, request: AssessmentRequest) -> None:
        await self.publish(self._update_topic, request)

    async def publish(self, topic: str, request: AssessmentRequest) -> None:
        """Serialize the request and hand it to the event bus."""
        payload = AssessmentRequestContract.from_domain(request).to_wire()
        await self._bus.publish(topic, payload)
        self._log_operation(
            "publish",
            topic=topic,
            assessment_number=request.assessment.assessment_number,
        ).info("assessment_event_published")
