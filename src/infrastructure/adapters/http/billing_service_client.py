"""Billing service HTTP adapter (demand search and update)."""

from __future__ import annotations

import httpx

from src.application.dtos.contracts import (
    DemandContract,
    DemandRequestContract,
    DemandResponseContract,
    RequestInfoContract,
)
from src.application.ports.billing_service import BillingServiceProtocol
from src.domain.errors.billing import BillingServiceError
from src.domain.models.assessment import AssessmentRequest
from src.domain.models.demand import Demand
from src.domain.models.request_info import RequestInfo
from src.infrastructure.adapters.http.base import ErrorFactory, HttpAdapter

DEMAND_SEARCH_PATH = "/demand/_search"
DEMAND_UPDATE_PATH = "/demand/_update"


def _billing_error(operation: str) -> ErrorFactory:
    def factory(detail: str, status_code: int | None) -> BillingServiceError:
        return BillingServiceError(
            operation, f"BILLING_ERROR: {detail}", status_code=status_code
        )

    return factory


class HttpBillingService(HttpAdapter, BillingServiceProtocol):
    """Fetches and updates the demands raised against a property."""

    def __init__(
        self,
        base_url: str,
        client: httpx.AsyncClient | None = None,
        timeout_seconds: float = 30.0,
        business_service: str = "PT",
    ) -> None:
        super().__init__(base_url, client, timeout_seconds)
        self._business_service = business_service

    async def fetch_demands(self, request: AssessmentRequest) -> list[Demand]:
        error = _billing_error("fetch")
        assessment = request.assessment
        payload = await self._post(
            DEMAND_SEARCH_PATH,
            {"RequestInfo": RequestInfoContract.from_domain(request.request_info).to_wire()},
            error,
            params={
                "tenantId": str(assessment.tenant_id),
                "consumerCode": str(assessment.property_id),
                "businessService": self._business_service,
            },
        )
        response = self._parse(DemandResponseContract, payload, error)
        return [demand.to_domain() for demand in response.demands]

    async def update_demands(
        self, request_info: RequestInfo, demands: list[Demand]
    ) -> list[Demand]:
        error = _billing_error("update")
        body = DemandRequestContract(
            request_info=RequestInfoContract.from_domain(request_info),
            demands=[DemandContract.from_domain(demand) for demand in demands],
        )
        payload = await self._post(DEMAND_UPDATE_PATH, body.to_wire(), error)
        response = self._parse(DemandResponseContract, payload, error)
        return [demand.to_domain() for demand in response.demands]
