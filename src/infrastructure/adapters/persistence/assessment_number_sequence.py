"""Assessment numbers drawn from a PostgreSQL sequence.

nextval() is not rolled back with the session, so a number is never
reissued across restarts or replicas; gaps are possible.
"""

from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.application.ports.assessment_number_generator import (
    AssessmentNumberGeneratorProtocol,
)
from src.domain.models.assessment import format_assessment_number
from src.infrastructure.adapters.persistence.assessment_store import AssessmentStoreError
from src.infrastructure.observability.logging import get_logger_for_adapter

DEFAULT_SEQUENCE = "seq_eg_pt_asmt_assessmentnumber"


class PostgresAssessmentNumberGenerator(AssessmentNumberGeneratorProtocol):
    """Generates AS-<tenant>-<n> numbers from a database sequence."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        sequence: str = DEFAULT_SEQUENCE,
    ) -> None:
        self._session_factory = session_factory
        self._statement = text("SELECT nextval(CAST(:sequence AS TEXT))")
        self._sequence = sequence
        self._log = get_logger_for_adapter(self.__class__.__name__, component="persistence")

    async def next_number(self, tenant_id: str | None) -> str:
        try:
            async with self._session_factory() as session:
                result = await session.execute(self._statement, {"sequence": self._sequence})
                value = result.scalar_one()
        except SQLAlchemyError as exc:
            self._log.error("assessment_number_sequence_failed", error=str(exc))
            raise AssessmentStoreError("next_number") from exc
        return format_assessment_number(tenant_id, int(value))
