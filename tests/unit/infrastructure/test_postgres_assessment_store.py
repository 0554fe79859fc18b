"""Unit tests for PostgresAssessmentStore row mapping and error handling.

Sessions are mocked; SQL shape is covered by the query builder tests.
"""

import copy
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from src.domain.models.assessment import AssessmentSource, AssessmentStatus, OwnerInfo
from src.domain.models.search_criteria import AssessmentSearchCriteria
from src.domain.services.diff_trigger_evaluator import diff_assessments
from src.infrastructure.adapters.persistence import (
    AssessmentStoreError,
    PostgresAssessmentStore,
    row_to_assessment,
)

ASSESSMENT_ROW: dict[str, Any] = {
    "id": "asmt-0001",
    "tenantid": "pb.amritsar",
    "assessmentnumber": "AS-AMRITSAR-000001",
    "financialyear": "2024-25",
    "propertyid": "PT-107-000123",
    "assessmentdate": 1_710_000_000_000,
    "status": "ACTIVE",
    "source": "MUNICIPAL_RECORDS",
    "channel": "CFC_COUNTER",
    "additionaldetails": '{"remarks": "field visit"}',
    "createdby": "user-0001",
    "createdtime": 1_710_000_000_000,
    "lastmodifiedby": "user-0001",
    "lastmodifiedtime": 1_710_000_000_000,
}

UNIT_ROW = {
    "id": "unit-0001",
    "assessmentid": "asmt-0001",
    "unitid": "U-1",
    "usagecategory": "RESIDENTIAL",
    "occupancytype": "SELFOCCUPIED",
    "occupancydate": 1_700_000_000_000,
    "active": True,
}

DOCUMENT_ROW = {
    "id": "doc-0001",
    "entityid": "asmt-0001",
    "documenttype": "OWNER.PHOTO",
    "filestoreid": "fs-0001",
    "documentuid": None,
    "status": "ACTIVE",
}

OWNER_ROW = {
    "id": "owner-row-0001",
    "assessmentid": "asmt-0001",
    "userid": "owner-1",
    "status": "ACTIVE",
}


def _main_result(rows: list[dict[str, Any]]) -> MagicMock:
    result = MagicMock()
    result.mappings.return_value.all.return_value = rows
    return result


def _child_result(rows: list[dict[str, Any]]) -> MagicMock:
    result = MagicMock()
    result.mappings.return_value = rows
    return result


def _store_with(session: AsyncMock) -> PostgresAssessmentStore:
    factory = MagicMock()
    factory.return_value.__aenter__.return_value = session
    return PostgresAssessmentStore(session_factory=factory)


class TestRowMapping:
    def test_row_to_assessment(self) -> None:
        assessment = row_to_assessment(ASSESSMENT_ROW)
        assert assessment.status == AssessmentStatus.ACTIVE
        assert assessment.source == AssessmentSource.MUNICIPAL_RECORDS
        assert assessment.additional_details == {"remarks": "field visit"}
        assert assessment.audit_details is not None
        assert assessment.audit_details.created_by == "user-0001"
        assert assessment.unit_usage_list == []

    def test_null_enums_and_details(self) -> None:
        row = {**ASSESSMENT_ROW, "status": None, "source": None, "additionaldetails": None}
        assessment = row_to_assessment(row)
        assert assessment.status is None
        assert assessment.source is None
        assert assessment.additional_details is None


class TestPostgresAssessmentStore:
    @pytest.mark.asyncio
    async def test_search_attaches_children(self) -> None:
        session = AsyncMock()
        session.execute.side_effect = [
            _main_result([ASSESSMENT_ROW]),
            _child_result([UNIT_ROW]),
            _child_result([DOCUMENT_ROW]),
            _child_result([OWNER_ROW]),
        ]

        results = await _store_with(session).search(
            AssessmentSearchCriteria(tenant_id="pb.amritsar")
        )

        assert len(results) == 1
        assert [u.usage_category for u in results[0].unit_usage_list] == ["RESIDENTIAL"]
        assert [d.file_store_id for d in results[0].documents] == ["fs-0001"]
        assert results[0].owners == [OwnerInfo(uuid="owner-1")]
        assert session.execute.await_count == 4

    @pytest.mark.asyncio
    async def test_loaded_owners_match_an_unchanged_update(self) -> None:
        session = AsyncMock()
        session.execute.side_effect = [
            _main_result([ASSESSMENT_ROW]),
            _child_result([]),
            _child_result([]),
            _child_result([OWNER_ROW]),
        ]

        stored = await _store_with(session).get_by_key("pb.amritsar", "asmt-0001", None)
        assert stored is not None
        update = copy.deepcopy(stored)
        update.owners = [OwnerInfo(uuid="owner-1", name="Asha", mobile_number="9999999999")]

        changed, added = diff_assessments(update, stored)

        assert changed == set()
        assert added == set()

    @pytest.mark.asyncio
    async def test_empty_search_skips_child_queries(self) -> None:
        session = AsyncMock()
        session.execute.return_value = _main_result([])

        assert await _store_with(session).search(AssessmentSearchCriteria()) == []
        assert session.execute.await_count == 1

    @pytest.mark.asyncio
    async def test_get_by_key_without_key_returns_none(self) -> None:
        session = AsyncMock()
        assert await _store_with(session).get_by_key("pb.amritsar", None, None) is None
        session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_fetch_assessment_numbers(self) -> None:
        session = AsyncMock()
        result = MagicMock()
        result.scalars.return_value.all.return_value = ["AS-1", "AS-2"]
        session.execute.return_value = result

        numbers = await _store_with(session).fetch_assessment_numbers(
            AssessmentSearchCriteria()
        )

        assert numbers == ["AS-1", "AS-2"]

    @pytest.mark.asyncio
    async def test_database_errors_are_wrapped(self) -> None:
        session = AsyncMock()
        session.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))

        with pytest.raises(AssessmentStoreError) as exc_info:
            await _store_with(session).search(AssessmentSearchCriteria())

        assert exc_info.value.operation == "search"
        assert isinstance(exc_info.value.__cause__, OperationalError)
