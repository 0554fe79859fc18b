"""Assessment Number Generator Stub.

Sequential numbers per process, formatted AS-<tenant suffix>-<sequence>.
For development and tests only: the counter restarts with the process
and is not shared between replicas. Deployments with DATABASE_URL use
the sequence-backed generator instead.
"""

from __future__ import annotations

import itertools

from src.application.ports.assessment_number_generator import (
    AssessmentNumberGeneratorProtocol,
)
from src.domain.models.assessment import format_assessment_number


class AssessmentNumberGeneratorStub(AssessmentNumberGeneratorProtocol):
    """Generates AS-<tenant>-<n> numbers from an in-process counter."""

    def __init__(self, start: int = 1) -> None:
        self._counter = itertools.count(start)

    async def next_number(self, tenant_id: str | None) -> str:
        return format_assessment_number(tenant_id, next(self._counter))
