"""
Domain layer - Assessment models, errors and pure domain services.

CRITICAL: This layer must NOT import from application or infrastructure.
"""

from src.domain.exceptions import AssessmentServiceError
from src.domain.models import Assessment, AssessmentRequest, AssessmentStatus

__all__: list[str] = [
    "Assessment",
    "AssessmentRequest",
    "AssessmentServiceError",
    "AssessmentStatus",
]
