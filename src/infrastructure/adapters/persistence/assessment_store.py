"""PostgreSQL assessment store (SQLAlchemy async sessions).

Read side only: assessments are written by the consumers of the
create/update events. The natural key uniqueness for ACTIVE rows is
backed by a partial unique index on (propertyid, financialyear).
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.application.ports.assessment_store import AssessmentStoreProtocol
from src.domain.exceptions import AssessmentServiceError
from src.domain.models.assessment import (
    Assessment,
    AssessmentSource,
    AssessmentStatus,
    AuditDetails,
    Document,
    OwnerInfo,
    UnitUsage,
)
from src.domain.models.search_criteria import AssessmentSearchCriteria
from src.infrastructure.adapters.persistence.assessment_query_builder import (
    AssessmentQueryBuilder,
    BuiltQuery,
)
from src.infrastructure.observability.logging import get_logger_for_adapter


class AssessmentStoreError(AssessmentServiceError):
    """Raised when the assessment tables cannot be read."""

    def __init__(self, operation: str, message: str | None = None) -> None:
        super().__init__(message or f"STORE_ERROR: assessment {operation} failed")
        self.operation = operation


def _json_field(value: Any) -> dict[str, Any] | None:
    if value is None:
        return None
    if isinstance(value, str):
        return json.loads(value)
    return dict(value)


def row_to_assessment(row: Mapping[str, Any]) -> Assessment:
    """Map an eg_pt_asmt_assessment row onto an Assessment (no children)."""
    return Assessment(
        id=row["id"],
        tenant_id=row["tenantid"],
        assessment_number=row["assessmentnumber"],
        financial_year=row["financialyear"],
        property_id=row["propertyid"],
        assessment_date=row["assessmentdate"],
        status=AssessmentStatus(row["status"]) if row["status"] else None,
        source=AssessmentSource(row["source"]) if row["source"] else None,
        channel=row["channel"],
        additional_details=_json_field(row["additionaldetails"]),
        audit_details=AuditDetails(
            created_by=row["createdby"],
            last_modified_by=row["lastmodifiedby"],
            created_time=row["createdtime"],
            last_modified_time=row["lastmodifiedtime"],
        ),
    )


class PostgresAssessmentStore(AssessmentStoreProtocol):
    """Assessment store backed by PostgreSQL."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        query_builder: AssessmentQueryBuilder | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._queries = query_builder or AssessmentQueryBuilder()
        self._log = get_logger_for_adapter(self.__class__.__name__, component="persistence")

    async def get_by_key(
        self,
        tenant_id: str | None,
        assessment_id: str | None,
        assessment_number: str | None,
    ) -> Assessment | None:
        if assessment_id is None and assessment_number is None:
            return None
        query = self._queries.by_key(tenant_id, assessment_id, assessment_number)
        assessments = await self._load("get_by_key", query)
        return assessments[0] if assessments else None

    async def search(self, criteria: AssessmentSearchCriteria) -> list[Assessment]:
        return await self._load("search", self._queries.search(criteria))

    async def fetch_assessment_numbers(
        self, criteria: AssessmentSearchCriteria
    ) -> list[str]:
        query = self._queries.assessment_numbers(criteria)
        try:
            async with self._session_factory() as session:
                result = await session.execute(query.to_text(), query.params)
                return list(result.scalars().all())
        except SQLAlchemyError as exc:
            self._log.error("assessment_number_lookup_failed", error=str(exc))
            raise AssessmentStoreError("fetch_assessment_numbers") from exc

    async def _load(self, operation: str, query: BuiltQuery) -> list[Assessment]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(query.to_text(), query.params)
                assessments = [row_to_assessment(row) for row in result.mappings().all()]
                if assessments:
                    await self._attach_children(session, assessments)
        except SQLAlchemyError as exc:
            self._log.error("assessment_query_failed", operation=operation, error=str(exc))
            raise AssessmentStoreError(operation) from exc

        self._log.debug("assessments_loaded", operation=operation, count=len(assessments))
        return assessments

    async def _attach_children(
        self, session: AsyncSession, assessments: Sequence[Assessment]
    ) -> None:
        by_id = {a.id: a for a in assessments if a.id is not None}
        ids = list(by_id)

        units = self._queries.unit_usages(ids)
        for row in (await session.execute(units.to_text(), units.params)).mappings():
            by_id[row["assessmentid"]].unit_usage_list.append(
                UnitUsage(
                    id=row["id"],
                    unit_id=row["unitid"],
                    usage_category=row["usagecategory"],
                    occupancy_type=row["occupancytype"],
                    occupancy_date=row["occupancydate"],
                    active=bool(row["active"]),
                )
            )

        documents = self._queries.documents(ids)
        for row in (await session.execute(documents.to_text(), documents.params)).mappings():
            by_id[row["entityid"]].documents.append(
                Document(
                    id=row["id"],
                    document_type=row["documenttype"],
                    file_store_id=row["filestoreid"],
                    document_uid=row["documentuid"],
                    status=row["status"],
                )
            )

        owners = self._queries.owners(ids)
        for row in (await session.execute(owners.to_text(), owners.params)).mappings():
            by_id[row["assessmentid"]].owners.append(
                OwnerInfo(uuid=row["userid"], status=row["status"])
            )
