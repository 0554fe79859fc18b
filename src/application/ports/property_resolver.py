"""Property resolver port."""

from __future__ import annotations

from typing import Protocol

from src.domain.models.assessment import AssessmentRequest
from src.domain.models.property import Property


class PropertyResolverProtocol(Protocol):
    """Protocol for resolving the property an assessment refers to."""

    async def resolve(self, request: AssessmentRequest) -> Property:
        """Resolve the property referenced by the request's assessment.

        Raises:
            PropertyNotFoundError: If no property matches.
        """
        ...
