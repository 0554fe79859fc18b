"""Assessment store port.

Read side of assessment persistence. Writes are carried out by consumers
of the create/update events, so the lifecycle only reads from the store:
to enforce the one-ACTIVE-assessment-per-year check, to load the update
baseline, and to serve searches.

The uniqueness check built on search() is check-then-act and is NOT
atomic. Implementations backed by a database should also enforce a
unique constraint on (property_id, financial_year) for ACTIVE rows.
"""

from __future__ import annotations

from typing import Protocol

from src.domain.models.assessment import Assessment
from src.domain.models.search_criteria import AssessmentSearchCriteria


class AssessmentStoreProtocol(Protocol):
    """Protocol for reading stored assessments."""

    async def get_by_key(
        self,
        tenant_id: str | None,
        assessment_id: str | None,
        assessment_number: str | None,
    ) -> Assessment | None:
        """Load a single stored assessment by id (and number when given).

        Args:
            tenant_id: Tenant scope of the lookup.
            assessment_id: Assessment id.
            assessment_number: Assessment number, used when id is absent.

        Returns:
            The stored assessment, or None if none matches.
        """
        ...

    async def search(self, criteria: AssessmentSearchCriteria) -> list[Assessment]:
        """Return assessments matching the criteria, honoring limit/offset."""
        ...

    async def fetch_assessment_numbers(
        self, criteria: AssessmentSearchCriteria
    ) -> list[str]:
        """Return only the assessment numbers matching the criteria.

        Lightweight lookup used by plain search before loading full records.
        """
        ...
