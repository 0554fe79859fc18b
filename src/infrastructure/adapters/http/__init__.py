"""httpx adapters for the assessment service's collaborators."""

from src.infrastructure.adapters.http.billing_service_client import HttpBillingService
from src.infrastructure.adapters.http.event_sink_client import HttpEventBus
from src.infrastructure.adapters.http.property_registry_client import (
    HttpPropertyResolver,
)
from src.infrastructure.adapters.http.tax_calculator_client import HttpTaxCalculator
from src.infrastructure.adapters.http.user_directory_client import HttpUserDirectory
from src.infrastructure.adapters.http.workflow_engine_client import HttpWorkflowEngine

__all__: list[str] = [
    "HttpBillingService",
    "HttpEventBus",
    "HttpPropertyResolver",
    "HttpTaxCalculator",
    "HttpUserDirectory",
    "HttpWorkflowEngine",
]
