"""Assessment enrichment port.

Enrichment mutates the request in place with derived identifiers, audit
fields and workflow payloads. No return value is consumed.
"""

from __future__ import annotations

from typing import Protocol

from src.domain.models.assessment import AssessmentRequest
from src.domain.models.property import Property


class AssessmentEnrichmentProtocol(Protocol):
    """Protocol for in-place request enrichment."""

    async def enrich_create(self, request: AssessmentRequest) -> None:
        """Assign id, assessment number, status and audit fields."""
        ...

    def enrich_workflow_for_initiation(self, request: AssessmentRequest) -> None:
        """Build the process instance that starts the workflow."""
        ...

    def enrich_update(self, request: AssessmentRequest, property_: Property) -> None:
        """Refresh audit fields and property-derived identifiers."""
        ...

    def enrich_process_instance(
        self, request: AssessmentRequest, property_: Property
    ) -> None:
        """Fill identity fields of the process instance for an update."""
        ...
