"""Assessment lifecycle errors.

These errors represent rejections raised while creating or updating an
assessment: a missing property, a rule violation, a duplicate ACTIVE
assessment for the same property/financial year, or a missing baseline
record on update.
"""

from __future__ import annotations

from typing import Mapping, Optional

from src.domain.exceptions import AssessmentServiceError


class DuplicateAssessmentError(AssessmentServiceError):
    """Raised when an ACTIVE assessment already exists for the property/year.

    Creation is rejected outright; nothing has been written when this is
    raised.

    Attributes:
        property_id: The property that already has an ACTIVE assessment.
        financial_year: The financial year of the existing assessment.
    """

    def __init__(
        self,
        property_id: str,
        financial_year: str,
        message: Optional[str] = None,
    ) -> None:
        msg = message or (
            "ASSESSMENT_EXCEPTION: Property assessment is already completed for "
            f"property {property_id} for the financial year {financial_year}"
        )
        super().__init__(msg)
        self.property_id = property_id
        self.financial_year = financial_year


class PropertyNotFoundError(AssessmentServiceError):
    """Raised when the property referenced by an assessment cannot be resolved.

    Attributes:
        property_id: The property id that could not be resolved.
        tenant_id: The tenant the lookup was scoped to.
    """

    def __init__(
        self,
        property_id: str | None,
        tenant_id: str | None = None,
        message: Optional[str] = None,
    ) -> None:
        msg = message or (
            f"PROPERTY_NOT_FOUND: No property found for id {property_id} "
            f"in tenant {tenant_id}"
        )
        super().__init__(msg)
        self.property_id = property_id
        self.tenant_id = tenant_id


class ValidationError(AssessmentServiceError):
    """Raised when an assessment request violates one or more rules.

    Attributes:
        errors: Map of error code to human-readable reason.
    """

    def __init__(self, errors: Mapping[str, str], message: Optional[str] = None) -> None:
        self.errors = dict(errors)
        msg = message or "; ".join(f"{code}: {reason}" for code, reason in self.errors.items())
        super().__init__(msg)

    @property
    def reason(self) -> str:
        """Return the combined reason text."""
        return str(self)


class AssessmentNotFoundError(AssessmentServiceError):
    """Raised when the stored assessment used as the update baseline is missing.

    Attributes:
        assessment_id: Id of the assessment that was looked up.
        assessment_number: Number of the assessment that was looked up.
    """

    def __init__(
        self,
        assessment_id: str | None,
        assessment_number: str | None = None,
        message: Optional[str] = None,
    ) -> None:
        msg = message or (
            f"ASSESSMENT_NOT_FOUND: No stored assessment for id {assessment_id} "
            f"(number {assessment_number})"
        )
        super().__init__(msg)
        self.assessment_id = assessment_id
        self.assessment_number = assessment_number
