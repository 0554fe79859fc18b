"""Workflow state sync service.

Wraps calls to the external workflow engine for the assessment lifecycle:

- initiate / advance: transition a process instance and return the
  resulting state. Failures are fatal to the enclosing operation and
  propagate unchanged as WorkflowEngineError.
- is_state_updatable: pure lookup against a business service definition.
- map_status: total mapping from the engine's raw application status to
  AssessmentStatus. Unknown input fails closed with UnmappedStatusError.
"""

from __future__ import annotations

from src.application.ports.workflow_engine import WorkflowEngineProtocol
from src.application.services.base import LoggingMixin
from src.domain.errors.workflow import UnmappedStatusError, WorkflowEngineError
from src.domain.models.assessment import AssessmentRequest, AssessmentStatus
from src.domain.models.request_info import RequestInfo
from src.domain.models.workflow import (
    BusinessService,
    ProcessInstanceRequest,
    State,
)

_STATUS_BY_VALUE: dict[str, AssessmentStatus] = {s.value: s for s in AssessmentStatus}


def map_status(raw_status: str | None) -> AssessmentStatus:
    """Map a workflow application status onto an assessment status.

    Matching is exact against the enum values.

    Raises:
        UnmappedStatusError: If the raw status is None or unknown.
    """
    if raw_status is None or raw_status not in _STATUS_BY_VALUE:
        raise UnmappedStatusError(raw_status)
    return _STATUS_BY_VALUE[raw_status]


def is_state_updatable(state_name: str | None, business_service: BusinessService) -> bool:
    """Check whether the business object may be edited in the given state.

    A state missing from the definition is treated as not updatable.
    """
    state = business_service.get_state(state_name)
    return state is not None and state.is_state_updatable


class WorkflowStateSyncService(LoggingMixin):
    """Calling discipline for the workflow engine.

    No retries and no local recovery: engine errors surface to the caller
    exactly as raised by the adapter.
    """

    def __init__(self, workflow_engine: WorkflowEngineProtocol) -> None:
        self._engine = workflow_engine
        self._init_logger()

    async def initiate(self, request: AssessmentRequest) -> State:
        """Start the workflow for a newly created assessment."""
        return await self._transition(request, "initiate")

    async def advance(self, request: AssessmentRequest) -> State:
        """Move an existing assessment's process instance forward."""
        return await self._transition(request, "advance")

    async def get_business_service(
        self,
        tenant_id: str,
        business_service_code: str,
        request_info: RequestInfo,
    ) -> BusinessService:
        """Resolve the business service definition for the tenant."""
        return await self._engine.get_business_service(
            tenant_id, business_service_code, request_info
        )

    def is_state_updatable(self, state_name: str | None, business_service: BusinessService) -> bool:
        """Whether the assessment may be edited in its current workflow state."""
        return is_state_updatable(state_name, business_service)

    def map_status(self, raw_status: str | None) -> AssessmentStatus:
        """Map the workflow application status onto an assessment status."""
        return map_status(raw_status)

    async def _transition(self, request: AssessmentRequest, operation: str) -> State:
        assessment = request.assessment
        log = self._log_operation(
            operation,
            assessment_number=assessment.assessment_number,
            tenant_id=assessment.tenant_id,
        )
        if assessment.workflow is None:
            raise WorkflowEngineError(
                operation,
                f"WORKFLOW_ERROR: assessment {assessment.assessment_number} has no process instance",
            )

        log.info("workflow_transition_started", action=assessment.workflow.action)
        instances = await self._engine.transition(
            ProcessInstanceRequest(
                request_info=request.request_info,
                process_instances=[assessment.workflow],
            )
        )
        if not instances or instances[0].state is None:
            log.error("workflow_transition_returned_no_state")
            raise WorkflowEngineError(
                operation,
                "WORKFLOW_ERROR: workflow engine returned no process instance state",
            )

        state = instances[0].state
        log.info(
            "workflow_transition_completed",
            state=state.state,
            application_status=state.application_status,
        )
        return state
