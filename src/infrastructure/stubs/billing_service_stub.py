"""Billing Service Stub.

In-memory demands keyed by consumer code (property id). Fetches return
copies; update_demands records each submitted batch and replaces the
stored demands by id.
"""

from __future__ import annotations

import copy

from src.application.ports.billing_service import BillingServiceProtocol
from src.domain.models.assessment import AssessmentRequest
from src.domain.models.demand import Demand
from src.domain.models.request_info import RequestInfo


class BillingServiceStub(BillingServiceProtocol):
    """In-memory billing service."""

    def __init__(self) -> None:
        self._demands: dict[str, list[Demand]] = {}
        self._fetch_failure: Exception | None = None
        self._update_failure: Exception | None = None
        self.update_calls: list[list[Demand]] = []

    def add_demand(self, demand: Demand) -> None:
        self._demands.setdefault(demand.consumer_code, []).append(copy.deepcopy(demand))

    def demands_for(self, consumer_code: str) -> list[Demand]:
        return copy.deepcopy(self._demands.get(consumer_code, []))

    def fail_fetch_with(self, error: Exception | None) -> None:
        self._fetch_failure = error

    def fail_update_with(self, error: Exception | None) -> None:
        self._update_failure = error

    async def fetch_demands(self, request: AssessmentRequest) -> list[Demand]:
        if self._fetch_failure is not None:
            raise self._fetch_failure
        return self.demands_for(str(request.assessment.property_id))

    async def update_demands(
        self, request_info: RequestInfo, demands: list[Demand]
    ) -> list[Demand]:
        if self._update_failure is not None:
            raise self._update_failure
        batch = copy.deepcopy(demands)
        self.update_calls.append(batch)
        for demand in batch:
            stored = self._demands.setdefault(demand.consumer_code, [])
            stored[:] = [d for d in stored if d.id != demand.id] + [demand]
        return copy.deepcopy(batch)
