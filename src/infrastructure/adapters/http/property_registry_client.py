"""Property registry HTTP adapter."""

from __future__ import annotations

from src.application.dtos.contracts import (
    PropertySearchResponseContract,
    RequestInfoContract,
)
from src.application.ports.property_resolver import PropertyResolverProtocol
from src.domain.errors.assessment import PropertyNotFoundError
from src.domain.errors.integration import UpstreamServiceError
from src.domain.models.assessment import AssessmentRequest
from src.domain.models.property import Property
from src.infrastructure.adapters.http.base import HttpAdapter

PROPERTY_SEARCH_PATH = "/property/_search"


def _property_error(detail: str, status_code: int | None) -> UpstreamServiceError:
    return UpstreamServiceError(
        "property", "search", f"UPSTREAM_ERROR: {detail}", status_code=status_code
    )


class HttpPropertyResolver(HttpAdapter, PropertyResolverProtocol):
    """Resolves an assessment's property by id within its tenant."""

    async def resolve(self, request: AssessmentRequest) -> Property:
        assessment = request.assessment
        payload = await self._post(
            PROPERTY_SEARCH_PATH,
            {"RequestInfo": RequestInfoContract.from_domain(request.request_info).to_wire()},
            _property_error,
            params={
                "tenantId": str(assessment.tenant_id),
                "propertyIds": str(assessment.property_id),
            },
        )
        response = self._parse(PropertySearchResponseContract, payload, _property_error)
        if not response.properties:
            raise PropertyNotFoundError(assessment.property_id, assessment.tenant_id)
        return response.properties[0].to_domain()
