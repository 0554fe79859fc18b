"""Domain errors for the assessment service.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from AssessmentServiceError.
"""

from src.domain.errors.assessment import (
    AssessmentNotFoundError,
    DuplicateAssessmentError,
    PropertyNotFoundError,
    ValidationError,
)
from src.domain.errors.billing import BillingServiceError, CalculationError
from src.domain.errors.configuration import ConfigurationError
from src.domain.errors.integration import UpstreamServiceError
from src.domain.errors.workflow import UnmappedStatusError, WorkflowEngineError

__all__: list[str] = [
    "AssessmentNotFoundError",
    "BillingServiceError",
    "CalculationError",
    "ConfigurationError",
    "DuplicateAssessmentError",
    "PropertyNotFoundError",
    "UnmappedStatusError",
    "UpstreamServiceError",
    "ValidationError",
    "WorkflowEngineError",
]
