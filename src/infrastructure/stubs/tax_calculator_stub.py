"""Tax Calculator Stub.

Records every calculation request; a failure can be injected.
"""

from __future__ import annotations

from src.application.ports.tax_calculator import TaxCalculatorProtocol
from src.domain.models.assessment import AssessmentRequest
from src.domain.models.property import Property


class TaxCalculatorStub(TaxCalculatorProtocol):
    """In-memory tax calculator."""

    def __init__(self) -> None:
        self._failure: Exception | None = None
        self.calculations: list[tuple[str | None, str]] = []

    def fail_with(self, error: Exception | None) -> None:
        self._failure = error

    @property
    def call_count(self) -> int:
        return len(self.calculations)

    async def calculate(self, request: AssessmentRequest, property_: Property) -> None:
        if self._failure is not None:
            raise self._failure
        self.calculations.append((request.assessment.assessment_number, property_.property_id))
