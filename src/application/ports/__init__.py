"""Application ports - Interfaces for the assessment service's collaborators.

Available ports:
- AssessmentStoreProtocol: Read access to stored assessments
- PropertyResolverProtocol: Property lookup
- AssessmentValidatorProtocol: Create/update content rules
- AssessmentEnrichmentProtocol: In-place request enrichment
- WorkflowEngineProtocol: External approval state machine
- BillingServiceProtocol: Demand fetch/update
- TaxCalculatorProtocol: Tax calculation trigger
- EventBusProtocol: Event hand-off
- UserDirectoryProtocol: Owner detail lookup
- AssessmentNumberGeneratorProtocol: Assessment number allocation
- TimeAuthorityProtocol: Injectable clock
"""

from src.application.ports.assessment_enrichment import AssessmentEnrichmentProtocol
from src.application.ports.assessment_number_generator import (
    AssessmentNumberGeneratorProtocol,
)
from src.application.ports.assessment_store import AssessmentStoreProtocol
from src.application.ports.assessment_validator import AssessmentValidatorProtocol
from src.application.ports.billing_service import BillingServiceProtocol
from src.application.ports.event_bus import EventBusProtocol
from src.application.ports.property_resolver import PropertyResolverProtocol
from src.application.ports.tax_calculator import TaxCalculatorProtocol
from src.application.ports.time_authority import TimeAuthorityProtocol, to_epoch_millis
from src.application.ports.user_directory import UserDirectoryProtocol
from src.application.ports.workflow_engine import WorkflowEngineProtocol

__all__: list[str] = [
    "AssessmentEnrichmentProtocol",
    "AssessmentNumberGeneratorProtocol",
    "AssessmentStoreProtocol",
    "AssessmentValidatorProtocol",
    "BillingServiceProtocol",
    "EventBusProtocol",
    "PropertyResolverProtocol",
    "TaxCalculatorProtocol",
    "TimeAuthorityProtocol",
    "UserDirectoryProtocol",
    "WorkflowEngineProtocol",
    "to_epoch_millis",
]
