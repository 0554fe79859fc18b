"""Calculation trigger service.

Invokes tax (re)computation for an (assessment, property) pair. The call
is synchronous from the lifecycle's point of view; CalculationError
propagates unchanged. Calling it again for the same pair is safe.
"""

from __future__ import annotations

from src.application.ports.tax_calculator import TaxCalculatorProtocol
from src.application.services.base import LoggingMixin
from src.domain.models.assessment import AssessmentRequest
from src.domain.models.property import Property


class CalculationTriggerService(LoggingMixin):
    """Triggers tax calculation through the calculator collaborator."""

    def __init__(self, tax_calculator: TaxCalculatorProtocol) -> None:
        self._calculator = tax_calculator
        self._init_logger()

    async def calculate(self, request: AssessmentRequest, property_: Property) -> None:
        log = self._log_operation(
            "calculate_tax",
            assessment_number=request.assessment.assessment_number,
            property_id=property_.property_id,
            financial_year=request.assessment.financial_year,
        )
        log.info("tax_calculation_started")
        await self._calculator.calculate(request, property_)
        log.info("tax_calculation_completed")
