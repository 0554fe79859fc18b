"""Workflow engine errors.

Raised by the workflow engine adapters and the workflow state sync
service. Both are fatal to the enclosing create/update operation.
"""

from __future__ import annotations

from typing import Optional

from src.domain.exceptions import AssessmentServiceError


class WorkflowEngineError(AssessmentServiceError):
    """Raised when a call to the workflow engine fails.

    Attributes:
        operation: The workflow operation that failed (e.g. "transition").
        status_code: HTTP status returned by the engine, if any.
    """

    def __init__(
        self,
        operation: str,
        message: Optional[str] = None,
        status_code: int | None = None,
    ) -> None:
        msg = message or f"WORKFLOW_ERROR: workflow engine call '{operation}' failed"
        super().__init__(msg)
        self.operation = operation
        self.status_code = status_code


class UnmappedStatusError(AssessmentServiceError):
    """Raised when a workflow application status has no assessment status.

    Status mapping fails closed: an unknown status is never defaulted.

    Attributes:
        raw_status: The application status string returned by the engine.
    """

    def __init__(self, raw_status: str | None, message: Optional[str] = None) -> None:
        msg = message or (
            f"INVALID_STATUS: workflow application status {raw_status!r} "
            "does not map to an assessment status"
        )
        super().__init__(msg)
        self.raw_status = raw_status
