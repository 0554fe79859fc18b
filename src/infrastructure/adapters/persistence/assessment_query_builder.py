"""SQL for the assessment tables.

Pure string/param construction, no session access, so queries are
testable without a database. Set-valued filters use expanding bind
parameters (`IN :name`); BuiltQuery.to_text() declares them.

Tables:
    eg_pt_asmt_assessment  one row per assessment
    eg_pt_asmt_unitusage   unit usages, keyed by assessmentid
    eg_pt_asmt_document    documents, keyed by entityid
    eg_pt_asmt_owner       owner references (user uuid), keyed by assessmentid
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import bindparam, text
from sqlalchemy.sql.elements import TextClause

from src.domain.models.search_criteria import AssessmentSearchCriteria

ASSESSMENT_COLUMNS = (
    "asmt.id, asmt.tenantid, asmt.assessmentnumber, asmt.financialyear, "
    "asmt.propertyid, asmt.assessmentdate, asmt.status, asmt.source, "
    "asmt.channel, asmt.additionaldetails, asmt.createdby, asmt.createdtime, "
    "asmt.lastmodifiedby, asmt.lastmodifiedtime"
)

UNIT_USAGE_COLUMNS = (
    "unit.id, unit.assessmentid, unit.unitid, unit.usagecategory, "
    "unit.occupancytype, unit.occupancydate, unit.active"
)

DOCUMENT_COLUMNS = (
    "doc.id, doc.entityid, doc.documenttype, doc.filestoreid, "
    "doc.documentuid, doc.status"
)

OWNER_COLUMNS = "own.id, own.assessmentid, own.userid, own.status"


@dataclass(frozen=True)
class BuiltQuery:
    """A parameterized statement ready for session.execute()."""

    sql: str
    params: dict[str, Any] = field(default_factory=dict)
    expanding: tuple[str, ...] = ()

    def to_text(self) -> TextClause:
        return text(self.sql).bindparams(
            *(bindparam(name, expanding=True) for name in self.expanding)
        )


class AssessmentQueryBuilder:
    """Builds SELECTs for search, number lookup and get-by-key."""

    def search(self, criteria: AssessmentSearchCriteria) -> BuiltQuery:
        return self._select(f"SELECT {ASSESSMENT_COLUMNS}", criteria)

    def assessment_numbers(self, criteria: AssessmentSearchCriteria) -> BuiltQuery:
        return self._select("SELECT asmt.assessmentnumber", criteria)

    def by_key(
        self,
        tenant_id: str | None,
        assessment_id: str | None,
        assessment_number: str | None,
    ) -> BuiltQuery:
        """Lookup by id, falling back to assessment number when id is absent."""
        if assessment_id is None and assessment_number is None:
            raise ValueError("by_key needs an assessment id or number")

        clauses: list[str] = []
        params: dict[str, Any] = {}
        if tenant_id is not None:
            clauses.append("asmt.tenantid = :tenant_id")
            params["tenant_id"] = tenant_id
        if assessment_id is not None:
            clauses.append("asmt.id = :assessment_id")
            params["assessment_id"] = assessment_id
        else:
            clauses.append("asmt.assessmentnumber = :assessment_number")
            params["assessment_number"] = assessment_number

        sql = (
            f"SELECT {ASSESSMENT_COLUMNS} FROM eg_pt_asmt_assessment asmt "
            f"WHERE {' AND '.join(clauses)} LIMIT 1"
        )
        return BuiltQuery(sql, params)

    def unit_usages(self, assessment_ids: list[str]) -> BuiltQuery:
        return BuiltQuery(
            f"SELECT {UNIT_USAGE_COLUMNS} FROM eg_pt_asmt_unitusage unit "
            "WHERE unit.assessmentid IN :assessment_ids ORDER BY unit.id",
            {"assessment_ids": list(assessment_ids)},
            ("assessment_ids",),
        )

    def documents(self, assessment_ids: list[str]) -> BuiltQuery:
        return BuiltQuery(
            f"SELECT {DOCUMENT_COLUMNS} FROM eg_pt_asmt_document doc "
            "WHERE doc.entityid IN :assessment_ids ORDER BY doc.id",
            {"assessment_ids": list(assessment_ids)},
            ("assessment_ids",),
        )

    def owners(self, assessment_ids: list[str]) -> BuiltQuery:
        return BuiltQuery(
            f"SELECT {OWNER_COLUMNS} FROM eg_pt_asmt_owner own "
            "WHERE own.assessmentid IN :assessment_ids ORDER BY own.id",
            {"assessment_ids": list(assessment_ids)},
            ("assessment_ids",),
        )

    def _select(self, projection: str, criteria: AssessmentSearchCriteria) -> BuiltQuery:
        clauses: list[str] = []
        params: dict[str, Any] = {}
        expanding: list[str] = []

        if criteria.tenant_id is not None:
            clauses.append("asmt.tenantid = :tenant_id")
            params["tenant_id"] = criteria.tenant_id

        for column, name, values in (
            ("asmt.id", "ids", criteria.ids),
            ("asmt.propertyid", "property_ids", criteria.property_ids),
            ("asmt.assessmentnumber", "assessment_numbers", criteria.assessment_numbers),
        ):
            if values is not None:
                clauses.append(f"{column} IN :{name}")
                params[name] = sorted(values)
                expanding.append(name)

        if criteria.financial_year is not None:
            clauses.append("asmt.financialyear = :financial_year")
            params["financial_year"] = criteria.financial_year
        if criteria.status is not None:
            clauses.append("asmt.status = :status")
            params["status"] = criteria.status.value
        if criteria.from_date is not None:
            clauses.append("asmt.assessmentdate >= :from_date")
            params["from_date"] = criteria.from_date
        if criteria.to_date is not None:
            clauses.append("asmt.assessmentdate <= :to_date")
            params["to_date"] = criteria.to_date

        sql = f"{projection} FROM eg_pt_asmt_assessment asmt"
        if clauses:
            sql += " WHERE " + " AND ".join(clauses)
        sql += " ORDER BY asmt.assessmentdate DESC, asmt.id"

        if criteria.limit is not None:
            sql += " LIMIT :limit"
            params["limit"] = criteria.limit
        if criteria.offset:
            sql += " OFFSET :offset"
            params["offset"] = criteria.offset

        return BuiltQuery(sql, params, tuple(expanding))
