"""Assessment Store Stub.

In-memory implementation of AssessmentStoreProtocol for development and
testing. Records are deep-copied on the way in and out so callers that
mutate a returned assessment never change the stored one.
"""

from __future__ import annotations

import copy

from src.application.ports.assessment_store import AssessmentStoreProtocol
from src.domain.models.assessment import Assessment
from src.domain.models.search_criteria import AssessmentSearchCriteria


def _matches(assessment: Assessment, criteria: AssessmentSearchCriteria) -> bool:
    if criteria.tenant_id is not None and assessment.tenant_id != criteria.tenant_id:
        return False
    if criteria.ids is not None and assessment.id not in criteria.ids:
        return False
    if criteria.property_ids is not None and assessment.property_id not in criteria.property_ids:
        return False
    if (
        criteria.assessment_numbers is not None
        and assessment.assessment_number not in criteria.assessment_numbers
    ):
        return False
    if criteria.financial_year is not None and assessment.financial_year != criteria.financial_year:
        return False
    if criteria.status is not None and assessment.status != criteria.status:
        return False
    date = assessment.assessment_date or 0
    if criteria.from_date is not None and date < criteria.from_date:
        return False
    if criteria.to_date is not None and date > criteria.to_date:
        return False
    return True


class AssessmentStoreStub(AssessmentStoreProtocol):
    """In-memory assessment store keyed by assessment id."""

    def __init__(self) -> None:
        self._assessments: dict[str, Assessment] = {}
        self.search_calls: list[AssessmentSearchCriteria] = []

    def add(self, assessment: Assessment) -> None:
        """Store (or replace) an assessment. Test setup helper."""
        if assessment.id is None:
            raise ValueError("stored assessments need an id")
        self._assessments[assessment.id] = copy.deepcopy(assessment)

    def clear(self) -> None:
        """Clear all stored data for test cleanup."""
        self._assessments.clear()
        self.search_calls.clear()

    async def get_by_key(
        self,
        tenant_id: str | None,
        assessment_id: str | None,
        assessment_number: str | None,
    ) -> Assessment | None:
        for assessment in self._assessments.values():
            if tenant_id is not None and assessment.tenant_id != tenant_id:
                continue
            if assessment_id is not None and assessment.id == assessment_id:
                return copy.deepcopy(assessment)
            if (
                assessment_id is None
                and assessment_number is not None
                and assessment.assessment_number == assessment_number
            ):
                return copy.deepcopy(assessment)
        return None

    def _select(self, criteria: AssessmentSearchCriteria) -> list[Assessment]:
        selected = [a for a in self._assessments.values() if _matches(a, criteria)]
        selected.sort(key=lambda a: a.assessment_date or 0, reverse=True)
        offset = criteria.offset or 0
        if criteria.limit is not None:
            return selected[offset : offset + criteria.limit]
        return selected[offset:]

    async def search(self, criteria: AssessmentSearchCriteria) -> list[Assessment]:
        self.search_calls.append(copy.deepcopy(criteria))
        return [copy.deepcopy(a) for a in self._select(criteria)]

    async def fetch_assessment_numbers(
        self, criteria: AssessmentSearchCriteria
    ) -> list[str]:
        return [a.assessment_number for a in self._select(criteria) if a.assessment_number]
