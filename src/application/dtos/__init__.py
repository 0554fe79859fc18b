"""Application DTOs - Pydantic wire contracts.

Domain dataclasses stay free of serialization; these contracts carry the
camelCase JSON shape used on event topics and collaborator calls.
"""

from src.application.dtos.contracts import (
    AssessmentContract,
    AssessmentRequestContract,
    BusinessServiceResponseContract,
    CalculationRequestContract,
    DemandContract,
    DemandRequestContract,
    DemandResponseContract,
    ProcessInstanceContract,
    ProcessInstanceRequestContract,
    ProcessInstanceResponseContract,
    PropertySearchResponseContract,
    RequestInfoContract,
    UserSearchRequestContract,
    UserSearchResponseContract,
)

__all__: list[str] = [
    "AssessmentContract",
    "AssessmentRequestContract",
    "BusinessServiceResponseContract",
    "CalculationRequestContract",
    "DemandContract",
    "DemandRequestContract",
    "DemandResponseContract",
    "ProcessInstanceContract",
    "ProcessInstanceRequestContract",
    "ProcessInstanceResponseContract",
    "PropertySearchResponseContract",
    "RequestInfoContract",
    "UserSearchRequestContract",
    "UserSearchResponseContract",
]
