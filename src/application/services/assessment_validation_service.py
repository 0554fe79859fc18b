"""Assessment validation service.

Default implementation of the validator port. Collects every violation
and raises them together as a single ValidationError keyed by error code.
"""

from __future__ import annotations

import re

from src.config.assessment_config import AssessmentConfig
from src.domain.errors.assessment import ValidationError
from src.domain.models.assessment import Assessment, AssessmentRequest, AssessmentStatus
from src.domain.models.property import Property

_FINANCIAL_YEAR = re.compile(r"^(\d{4})-(\d{2})$")


def is_valid_financial_year(value: str | None) -> bool:
    """Check a "YYYY-YY" financial year spanning two consecutive years."""
    if value is None:
        return False
    match = _FINANCIAL_YEAR.match(value)
    if match is None:
        return False
    start, end = int(match.group(1)), int(match.group(2))
    return (start + 1) % 100 == end


class AssessmentValidator:
    """Rule checks for assessment create and update requests."""

    def __init__(self, config: AssessmentConfig) -> None:
        self._config = config

    def validate_create(self, request: AssessmentRequest, property_: Property) -> None:
        assessment = request.assessment
        errors: dict[str, str] = {}

        if assessment.tenant_id != property_.tenant_id:
            errors["INVALID_TENANT"] = (
                f"Assessment tenant {assessment.tenant_id} does not match "
                f"property tenant {property_.tenant_id}"
            )
        if not is_valid_financial_year(assessment.financial_year):
            errors["INVALID_FINANCIAL_YEAR"] = (
                f"Financial year {assessment.financial_year!r} is not of the form YYYY-YY"
            )
        if not property_.is_active:
            errors["PROPERTY_NOT_ACTIVE"] = (
                f"Property {property_.property_id} is {property_.status}, not ACTIVE"
            )
        if assessment.id is not None or assessment.assessment_number is not None:
            errors["INVALID_CREATE"] = "Id and assessment number are assigned by the system"

        if errors:
            raise ValidationError(errors)

    def validate_update(
        self,
        request: AssessmentRequest,
        stored: Assessment,
        property_: Property,
        workflow_triggered: bool,
    ) -> None:
        assessment = request.assessment
        errors: dict[str, str] = {}

        if assessment.id is None or assessment.assessment_number is None:
            errors["INVALID_UPDATE"] = "Id and assessment number are required for update"
        if assessment.property_id != stored.property_id:
            errors["INVALID_UPDATE_PROPERTY"] = "Property id of an assessment cannot change"
        if assessment.financial_year != stored.financial_year:
            errors["INVALID_UPDATE_FINANCIAL_YEAR"] = (
                "Financial year of an assessment cannot change"
            )
        if assessment.tenant_id != property_.tenant_id:
            errors["INVALID_TENANT"] = (
                f"Assessment tenant {assessment.tenant_id} does not match "
                f"property tenant {property_.tenant_id}"
            )
        if stored.status == AssessmentStatus.CANCELLED:
            errors["INVALID_UPDATE_STATUS"] = "A cancelled assessment cannot be updated"

        enters_workflow = workflow_triggered or assessment.status == AssessmentStatus.INWORKFLOW
        if self._config.workflow_enabled and enters_workflow:
            if assessment.workflow is None or not assessment.workflow.action:
                errors["INVALID_WORKFLOW"] = (
                    "A workflow action is required when the update enters workflow"
                )

        if errors:
            raise ValidationError(errors)
