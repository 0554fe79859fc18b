"""Billing service port.

Demands are owned by the billing service. The assessment lifecycle only
fetches them and writes back status changes. Failures surface as
BillingServiceError.
"""

from __future__ import annotations

from typing import Protocol

from src.domain.models.assessment import AssessmentRequest
from src.domain.models.demand import Demand
from src.domain.models.request_info import RequestInfo


class BillingServiceProtocol(Protocol):
    """Protocol for the external billing service."""

    async def fetch_demands(self, request: AssessmentRequest) -> list[Demand]:
        """Fetch all demands raised against the assessment's property."""
        ...

    async def update_demands(
        self, request_info: RequestInfo, demands: list[Demand]
    ) -> list[Demand]:
        """Submit a batch of demands in a single call (all-or-nothing)."""
        ...
