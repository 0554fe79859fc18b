"""Assessment validator port."""

from __future__ import annotations

from typing import Protocol

from src.domain.models.assessment import Assessment, AssessmentRequest
from src.domain.models.property import Property


class AssessmentValidatorProtocol(Protocol):
    """Protocol for assessment content validation.

    Both methods raise ValidationError on any violation and return None
    otherwise.
    """

    def validate_create(self, request: AssessmentRequest, property_: Property) -> None:
        """Validate a create request against the resolved property."""
        ...

    def validate_update(
        self,
        request: AssessmentRequest,
        stored: Assessment,
        property_: Property,
        workflow_triggered: bool,
    ) -> None:
        """Validate an update request against the stored baseline."""
        ...
