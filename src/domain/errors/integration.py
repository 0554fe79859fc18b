"""Errors raised by lookup collaborators (property registry, user directory)."""

from __future__ import annotations

from typing import Optional

from src.domain.exceptions import AssessmentServiceError


class UpstreamServiceError(AssessmentServiceError):
    """Raised when a lookup collaborator cannot be reached or answers non-2xx.

    Attributes:
        service: Collaborator name (e.g. "property", "user").
        operation: The call that failed.
        status_code: HTTP status returned, if any.
    """

    def __init__(
        self,
        service: str,
        operation: str,
        message: Optional[str] = None,
        status_code: int | None = None,
    ) -> None:
        msg = message or f"UPSTREAM_ERROR: {service} {operation} failed"
        super().__init__(msg)
        self.service = service
        self.operation = operation
        self.status_code = status_code
