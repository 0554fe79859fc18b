"""Tax calculator port."""

from __future__ import annotations

from typing import Protocol

from src.domain.models.assessment import AssessmentRequest
from src.domain.models.property import Property


class TaxCalculatorProtocol(Protocol):
    """Protocol for the external tax calculation engine.

    Calculation is idempotent from the caller's point of view: calling it
    again for the same assessment recomputes the same demand.
    """

    async def calculate(self, request: AssessmentRequest, property_: Property) -> None:
        """Compute tax for the assessment and raise its demand.

        Raises:
            CalculationError: If the calculator rejects or fails the call.
        """
        ...
