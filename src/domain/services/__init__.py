"""Domain services for assessments.

Available services:
- DiffTriggerEvaluator: Decides whether an edit must go through workflow
- diff_assessments: Field-level diff between two assessments
"""

from src.domain.services.diff_trigger_evaluator import (
    IGNORED_FIELDS,
    DiffTriggerEvaluator,
    diff_assessments,
)

__all__: list[str] = [
    "IGNORED_FIELDS",
    "DiffTriggerEvaluator",
    "diff_assessments",
]
