"""Property Resolver Stub.

In-memory implementation of PropertyResolverProtocol keyed by
(tenant_id, property_id).
"""

from __future__ import annotations

from src.application.ports.property_resolver import PropertyResolverProtocol
from src.domain.errors.assessment import PropertyNotFoundError
from src.domain.models.assessment import AssessmentRequest
from src.domain.models.property import Property


class PropertyResolverStub(PropertyResolverProtocol):
    """Resolves properties from an in-memory registry."""

    def __init__(self, properties: list[Property] | None = None) -> None:
        self._properties: dict[tuple[str, str], Property] = {}
        for property_ in properties or []:
            self.add(property_)

    def add(self, property_: Property) -> None:
        self._properties[(property_.tenant_id, property_.property_id)] = property_

    async def resolve(self, request: AssessmentRequest) -> Property:
        assessment = request.assessment
        property_ = self._properties.get(
            (str(assessment.tenant_id), str(assessment.property_id))
        )
        if property_ is None:
            raise PropertyNotFoundError(assessment.property_id, assessment.tenant_id)
        return property_
