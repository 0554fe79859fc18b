"""Billing and tax calculation errors."""

from __future__ import annotations

from typing import Optional

from src.domain.exceptions import AssessmentServiceError


class BillingServiceError(AssessmentServiceError):
    """Raised when fetching or updating demands fails.

    Attributes:
        operation: The billing operation that failed ("fetch" or "update").
        status_code: HTTP status returned by the billing service, if any.
    """

    def __init__(
        self,
        operation: str,
        message: Optional[str] = None,
        status_code: int | None = None,
    ) -> None:
        msg = message or f"BILLING_ERROR: demand {operation} failed"
        super().__init__(msg)
        self.operation = operation
        self.status_code = status_code


class CalculationError(AssessmentServiceError):
    """Raised when the tax calculator rejects or fails a calculation.

    Attributes:
        assessment_number: The assessment being calculated.
        status_code: HTTP status returned by the calculator, if any.
    """

    def __init__(
        self,
        assessment_number: str | None,
        message: Optional[str] = None,
        status_code: int | None = None,
    ) -> None:
        msg = message or f"CALCULATION_ERROR: tax calculation failed for assessment {assessment_number}"
        super().__init__(msg)
        self.assessment_number = assessment_number
        self.status_code = status_code
