"""Assessment search criteria."""

from __future__ import annotations

from dataclasses import dataclass

from src.domain.models.assessment import AssessmentStatus


@dataclass
class AssessmentSearchCriteria:
    """Filters for assessment searches.

    limit/offset are left as None by callers that want the configured
    defaults; plain search normalizes them in place.
    """

    tenant_id: str | None = None
    ids: set[str] | None = None
    property_ids: set[str] | None = None
    assessment_numbers: set[str] | None = None
    financial_year: str | None = None
    status: AssessmentStatus | None = None
    from_date: int | None = None
    to_date: int | None = None
    limit: int | None = None
    offset: int | None = None

    def has_direct_filters(self) -> bool:
        """Whether ids, property ids or assessment numbers were supplied."""
        return (
            self.ids is not None
            or self.property_ids is not None
            or self.assessment_numbers is not None
        )
