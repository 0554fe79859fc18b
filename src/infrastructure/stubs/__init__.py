"""In-memory stub implementations of the application ports.

Used for development without collaborators and for tests. Each stub
records the calls it receives so tests can assert on them.
"""

from src.infrastructure.stubs.assessment_number_generator_stub import (
    AssessmentNumberGeneratorStub,
)
from src.infrastructure.stubs.assessment_store_stub import AssessmentStoreStub
from src.infrastructure.stubs.billing_service_stub import BillingServiceStub
from src.infrastructure.stubs.event_bus_stub import EventBusStub
from src.infrastructure.stubs.property_resolver_stub import PropertyResolverStub
from src.infrastructure.stubs.tax_calculator_stub import TaxCalculatorStub
from src.infrastructure.stubs.user_directory_stub import UserDirectoryStub
from src.infrastructure.stubs.workflow_engine_stub import WorkflowEngineStub

__all__ = [
    "AssessmentNumberGeneratorStub",
    "AssessmentStoreStub",
    "BillingServiceStub",
    "EventBusStub",
    "PropertyResolverStub",
    "TaxCalculatorStub",
    "UserDirectoryStub",
    "WorkflowEngineStub",
]
