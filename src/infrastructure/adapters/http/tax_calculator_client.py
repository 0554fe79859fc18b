"""Tax calculator HTTP adapter.

The calculator persists its own results; only success matters here.
"""

from __future__ import annotations

from src.application.dtos.contracts import (
    AssessmentContract,
    CalculationCriteriaContract,
    CalculationRequestContract,
    RequestInfoContract,
)
from src.application.ports.tax_calculator import TaxCalculatorProtocol
from src.domain.errors.billing import CalculationError
from src.domain.models.assessment import AssessmentRequest
from src.domain.models.property import Property
from src.infrastructure.adapters.http.base import HttpAdapter

CALCULATE_PATH = "/propertytax/v2/_calculate"


class HttpTaxCalculator(HttpAdapter, TaxCalculatorProtocol):
    async def calculate(self, request: AssessmentRequest, property_: Property) -> None:
        assessment = request.assessment

        def error(detail: str, status_code: int | None) -> CalculationError:
            return CalculationError(
                assessment.assessment_number,
                f"CALCULATION_ERROR: {detail}",
                status_code=status_code,
            )

        body = CalculationRequestContract(
            request_info=RequestInfoContract.from_domain(request.request_info),
            calculation_criteria=[
                CalculationCriteriaContract(
                    tenant_id=assessment.tenant_id,
                    assessment_number=assessment.assessment_number,
                    financial_year=assessment.financial_year,
                    property_id=property_.property_id,
                    assessment=AssessmentContract.from_domain(assessment),
                )
            ],
        )
        await self._post(CALCULATE_PATH, body.to_wire(), error)
