"""Application services - Assessment use case orchestration.

Available services:
- AssessmentLifecycleOrchestrator: Create/update entry point
- WorkflowStateSyncService: Workflow engine calling discipline
- DemandLifecycleService: Stale demand retirement
- CalculationTriggerService: Tax calculation trigger
- AssessmentEventPublisher: Create/update event hand-off
- AssessmentSearchService: Search with owner enrichment and pagination
- AssessmentEnrichmentService: Default request enrichment
- AssessmentValidator: Default create/update rules
- SystemTimeAuthority: Host clock
"""

from src.application.services.assessment_enrichment_service import (
    AssessmentEnrichmentService,
)
from src.application.services.assessment_event_publisher import AssessmentEventPublisher
from src.application.services.assessment_lifecycle_orchestrator import (
    AssessmentLifecycleOrchestrator,
)
from src.application.services.assessment_search_service import (
    AssessmentSearchService,
    normalize_pagination,
)
from src.application.services.assessment_validation_service import AssessmentValidator
from src.application.services.calculation_trigger_service import (
    CalculationTriggerService,
)
from src.application.services.demand_lifecycle_service import DemandLifecycleService
from src.application.services.time_authority_service import SystemTimeAuthority
from src.application.services.workflow_state_sync_service import (
    WorkflowStateSyncService,
    is_state_updatable,
    map_status,
)

__all__: list[str] = [
    "AssessmentEnrichmentService",
    "AssessmentEventPublisher",
    "AssessmentLifecycleOrchestrator",
    "AssessmentSearchService",
    "AssessmentValidator",
    "CalculationTriggerService",
    "DemandLifecycleService",
    "SystemTimeAuthority",
    "WorkflowStateSyncService",
    "is_state_updatable",
    "map_status",
    "normalize_pagination",
]
