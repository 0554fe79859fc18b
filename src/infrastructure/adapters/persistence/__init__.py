"""PostgreSQL persistence adapters."""

from src.infrastructure.adapters.persistence.assessment_number_sequence import (
    PostgresAssessmentNumberGenerator,
)
from src.infrastructure.adapters.persistence.assessment_query_builder import (
    AssessmentQueryBuilder,
    BuiltQuery,
)
from src.infrastructure.adapters.persistence.assessment_store import (
    AssessmentStoreError,
    PostgresAssessmentStore,
    row_to_assessment,
)

__all__: list[str] = [
    "AssessmentQueryBuilder",
    "AssessmentStoreError",
    "BuiltQuery",
    "PostgresAssessmentNumberGenerator",
    "PostgresAssessmentStore",
    "row_to_assessment",
]
