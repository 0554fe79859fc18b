"""Unit tests for the sequence-backed assessment number generator."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from src.infrastructure.adapters.persistence import (
    AssessmentStoreError,
    PostgresAssessmentNumberGenerator,
)


def _generator_with(session: AsyncMock) -> PostgresAssessmentNumberGenerator:
    factory = MagicMock()
    factory.return_value.__aenter__.return_value = session
    return PostgresAssessmentNumberGenerator(session_factory=factory)


class TestPostgresAssessmentNumberGenerator:
    @pytest.mark.asyncio
    async def test_number_formatted_from_sequence_value(self) -> None:
        session = AsyncMock()
        result = MagicMock()
        result.scalar_one.return_value = 42
        session.execute.return_value = result

        number = await _generator_with(session).next_number("pb.amritsar")

        assert number == "AS-AMRITSAR-000042"
        _, params = session.execute.await_args.args
        assert params == {"sequence": "seq_eg_pt_asmt_assessmentnumber"}

    @pytest.mark.asyncio
    async def test_each_call_draws_from_the_sequence(self) -> None:
        session = AsyncMock()
        first, second = MagicMock(), MagicMock()
        first.scalar_one.return_value = 7
        second.scalar_one.return_value = 8
        session.execute.side_effect = [first, second]
        generator = _generator_with(session)

        assert await generator.next_number(None) == "AS-DEFAULT-000007"
        assert await generator.next_number(None) == "AS-DEFAULT-000008"

    @pytest.mark.asyncio
    async def test_database_errors_are_wrapped(self) -> None:
        session = AsyncMock()
        session.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))

        with pytest.raises(AssessmentStoreError) as exc_info:
            await _generator_with(session).next_number("pb.amritsar")

        assert exc_info.value.operation == "next_number"
