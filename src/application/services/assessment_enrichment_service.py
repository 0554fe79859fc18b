"""Assessment enrichment service.

Default implementation of the enrichment port. Mutates the request in
place:

- create: id, assessment number, assessment date, initial status, ids for
  child records, audit fields.
- workflow initiation: the process instance that starts the workflow.
- update: ids for newly attached child records, tenant from the property,
  last-modified audit fields.
- process instance: identity fields the workflow engine needs.
"""

from __future__ import annotations

from uuid import uuid4

from src.application.ports.assessment_number_generator import (
    AssessmentNumberGeneratorProtocol,
)
from src.application.ports.time_authority import TimeAuthorityProtocol, to_epoch_millis
from src.application.services.base import LoggingMixin
from src.config.assessment_config import AssessmentConfig
from src.domain.models.assessment import (
    Assessment,
    AssessmentRequest,
    AssessmentStatus,
    AuditDetails,
)
from src.domain.models.property import Property
from src.domain.models.workflow import ProcessInstance

# Action used when a new assessment enters the workflow without one
DEFAULT_INITIATE_ACTION: str = "CREATE"


def _caller_uuid(request: AssessmentRequest) -> str | None:
    user = request.request_info.user_info
    return user.uuid if user is not None else None


def _assign_child_ids(assessment: Assessment) -> None:
    for unit in assessment.unit_usage_list:
        if unit.id is None:
            unit.id = str(uuid4())
    for document in assessment.documents:
        if document.id is None:
            document.id = str(uuid4())


class AssessmentEnrichmentService(LoggingMixin):
    """Fills derived identifiers and audit fields on assessment requests."""

    def __init__(
        self,
        number_generator: AssessmentNumberGeneratorProtocol,
        time_authority: TimeAuthorityProtocol,
        config: AssessmentConfig,
    ) -> None:
        self._numbers = number_generator
        self._time = time_authority
        self._config = config
        self._init_logger()

    async def enrich_create(self, request: AssessmentRequest) -> None:
        assessment = request.assessment
        now_ms = to_epoch_millis(self._time.utcnow())
        user = _caller_uuid(request)

        assessment.id = str(uuid4())
        assessment.assessment_number = await self._numbers.next_number(assessment.tenant_id)
        if assessment.assessment_date is None:
            assessment.assessment_date = now_ms
        assessment.status = (
            AssessmentStatus.INWORKFLOW
            if self._config.workflow_enabled
            else AssessmentStatus.ACTIVE
        )
        _assign_child_ids(assessment)
        assessment.audit_details = AuditDetails(
            created_by=user,
            last_modified_by=user,
            created_time=now_ms,
            last_modified_time=now_ms,
        )

        self._log_operation(
            "enrich_create", assessment_number=assessment.assessment_number
        ).debug("assessment_create_enriched", status=assessment.status.value)

    def enrich_workflow_for_initiation(self, request: AssessmentRequest) -> None:
        assessment = request.assessment
        supplied = assessment.workflow
        assessment.workflow = ProcessInstance(
            business_service=self._config.business_service,
            business_id=assessment.assessment_number,
            action=(supplied.action if supplied and supplied.action else DEFAULT_INITIATE_ACTION),
            tenant_id=assessment.tenant_id,
            module_name=self._config.module_name,
            comment=supplied.comment if supplied else None,
            documents=list(supplied.documents) if supplied else [],
            assignes=list(supplied.assignes) if supplied else [],
        )

    def enrich_update(self, request: AssessmentRequest, property_: Property) -> None:
        assessment = request.assessment
        now_ms = to_epoch_millis(self._time.utcnow())
        user = _caller_uuid(request)

        if assessment.tenant_id is None:
            assessment.tenant_id = property_.tenant_id
        _assign_child_ids(assessment)

        audit = assessment.audit_details or AuditDetails()
        audit.last_modified_by = user
        audit.last_modified_time = now_ms
        assessment.audit_details = audit

    def enrich_process_instance(self, request: AssessmentRequest, property_: Property) -> None:
        assessment = request.assessment
        instance = assessment.workflow or ProcessInstance()
        instance.business_service = self._config.business_service
        instance.business_id = assessment.assessment_number
        instance.tenant_id = assessment.tenant_id or property_.tenant_id
        instance.module_name = self._config.module_name
        assessment.workflow = instance
