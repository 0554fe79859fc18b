"""Assessment lifecycle orchestrator.

Sole entry point for creating and updating assessments. Composes the
diff trigger evaluator, workflow state sync, tax calculation, demand
retirement and event publishing into two use cases.

Every collaborator call is awaited in order. Nothing here retries,
compensates or catches: any collaborator error aborts the remaining
steps and surfaces unchanged. The event is always the last step, so a
failure before it means no event is published; a failure after tax
calculation or demand retirement leaves stored and published state
diverged until an operator reconciles them.

The create path's uniqueness check is a read followed later by a write
(by event consumers). Two concurrent creates for the same property and
financial year can both pass it; the store's unique constraint is what
closes that race.
"""

from __future__ import annotations

from src.application.ports.assessment_enrichment import AssessmentEnrichmentProtocol
from src.application.ports.assessment_store import AssessmentStoreProtocol
from src.application.ports.assessment_validator import AssessmentValidatorProtocol
from src.application.ports.property_resolver import PropertyResolverProtocol
from src.application.services.assessment_event_publisher import AssessmentEventPublisher
from src.application.services.assessment_search_service import AssessmentSearchService
from src.application.services.base import LoggingMixin
from src.application.services.calculation_trigger_service import CalculationTriggerService
from src.application.services.demand_lifecycle_service import DemandLifecycleService
from src.application.services.workflow_state_sync_service import WorkflowStateSyncService
from src.config.assessment_config import AssessmentConfig
from src.domain.errors.assessment import AssessmentNotFoundError, DuplicateAssessmentError
from src.domain.models.assessment import Assessment, AssessmentRequest, AssessmentStatus
from src.domain.models.search_criteria import AssessmentSearchCriteria
from src.domain.models.workflow import ProcessInstance, State
from src.domain.services.diff_trigger_evaluator import DiffTriggerEvaluator
from src.infrastructure.observability.correlation import correlation_scope


def _record_state(assessment: Assessment, state: State) -> None:
    if assessment.workflow is None:
        assessment.workflow = ProcessInstance(tenant_id=assessment.tenant_id)
    assessment.workflow.state = state


class AssessmentLifecycleOrchestrator(LoggingMixin):
    """Create/update decision flow for assessments."""

    def __init__(
        self,
        config: AssessmentConfig,
        property_resolver: PropertyResolverProtocol,
        validator: AssessmentValidatorProtocol,
        enrichment: AssessmentEnrichmentProtocol,
        store: AssessmentStoreProtocol,
        search_service: AssessmentSearchService,
        workflow_sync: WorkflowStateSyncService,
        calculation: CalculationTriggerService,
        demand_lifecycle: DemandLifecycleService,
        event_publisher: AssessmentEventPublisher,
        diff_evaluator: DiffTriggerEvaluator | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            config: Workflow switch, demand trigger state and trigger lists.
            property_resolver: Resolves the property an assessment refers to.
            validator: Content rules for create/update.
            enrichment: In-place request enrichment.
            store: Read access to stored assessments (update baseline).
            search_service: Search used for the uniqueness check.
            workflow_sync: Calling discipline for the workflow engine.
            calculation: Tax calculation trigger.
            demand_lifecycle: Stale demand retirement.
            event_publisher: Create/update event hand-off.
            diff_evaluator: Evaluator built from config trigger lists when
                not supplied.
        """
        self._config = config
        self._properties = property_resolver
        self._validator = validator
        self._enrichment = enrichment
        self._store = store
        self._search = search_service
        self._workflow = workflow_sync
        self._calculation = calculation
        self._demands = demand_lifecycle
        self._events = event_publisher
        self._diff = diff_evaluator or DiffTriggerEvaluator(
            trigger_fields=config.workflow_trigger_fields,
            trigger_objects=config.workflow_trigger_objects,
        )
        self._init_logger()

    async def create_assessment(self, request: AssessmentRequest) -> Assessment:
        """Create an assessment.

        Steps: resolve property, validate, enrich, reject duplicates, then
        either initiate workflow or calculate tax, retire stale demands,
        and publish the create event last.

        Raises:
            PropertyNotFoundError: If the property cannot be resolved.
            ValidationError: If the request breaks a rule.
            DuplicateAssessmentError: If an ACTIVE assessment exists for the
                property and financial year.
            WorkflowEngineError / CalculationError / BillingServiceError:
                Propagated unchanged from collaborators.
        """
        with correlation_scope(request.request_info.correlation_id):
            return await self._create(request)

    async def _create(self, request: AssessmentRequest) -> Assessment:
        assessment = request.assessment
        log = self._log_operation(
            "create_assessment",
            property_id=assessment.property_id,
            financial_year=assessment.financial_year,
            tenant_id=assessment.tenant_id,
        )
        log.info("assessment_create_started")

        property_ = await self._properties.resolve(request)
        self._validator.validate_create(request, property_)
        await self._enrichment.enrich_create(request)

        existing = await self._search.search_assessments(
            AssessmentSearchCriteria(
                tenant_id=assessment.tenant_id,
                property_ids={property_.property_id},
                financial_year=assessment.financial_year,
                status=AssessmentStatus.ACTIVE,
            ),
            request.request_info,
        )
        if existing:
            log.warning(
                "assessment_create_rejected_duplicate",
                existing_assessment_number=existing[0].assessment_number,
            )
            raise DuplicateAssessmentError(
                property_.property_id, str(assessment.financial_year)
            )

        if self._config.workflow_enabled:
            self._enrichment.enrich_workflow_for_initiation(request)
            state = await self._workflow.initiate(request)
            _record_state(assessment, state)
        else:
            await self._calculation.calculate(request, property_)

        await self._demands.retire_stale_demands(request)
        await self._events.publish_create(request)

        log.info(
            "assessment_created",
            assessment_number=assessment.assessment_number,
            status=assessment.status.value if assessment.status else None,
            workflow_state=assessment.current_state_name,
        )
        return assessment

    async def update_assessment(self, request: AssessmentRequest) -> Assessment:
        """Update an assessment.

        The stored assessment is always re-fetched as the diff baseline.
        When the edit is workflow-triggered (or the status is INWORKFLOW)
        and workflow is enabled, the process instance is advanced, the
        status is mapped from the engine's application status, tax is
        calculated on reaching the demand trigger state, and the update
        event is published. With workflow disabled, tax is always
        calculated and the event published. With workflow enabled but no
        trigger, nothing changes and no event is published.

        Raises:
            PropertyNotFoundError: If the property cannot be resolved.
            AssessmentNotFoundError: If no stored assessment matches.
            ValidationError: If the request breaks a rule.
            UnmappedStatusError: If the engine returns an unknown status.
            WorkflowEngineError / CalculationError: Propagated unchanged.
        """
        with correlation_scope(request.request_info.correlation_id):
            return await self._update(request)

    async def _update(self, request: AssessmentRequest) -> Assessment:
        assessment = request.assessment
        log = self._log_operation(
            "update_assessment",
            assessment_number=assessment.assessment_number,
            property_id=assessment.property_id,
            tenant_id=assessment.tenant_id,
        )
        log.info("assessment_update_started")

        property_ = await self._properties.resolve(request)
        self._enrichment.enrich_update(request, property_)

        stored = await self._store.get_by_key(
            assessment.tenant_id, assessment.id, assessment.assessment_number
        )
        if stored is None:
            raise AssessmentNotFoundError(assessment.id, assessment.assessment_number)

        triggered = self._diff.evaluate(assessment, stored)
        self._validator.validate_update(request, stored, property_, triggered)

        enters_workflow = triggered or assessment.status == AssessmentStatus.INWORKFLOW

        if enters_workflow and self._config.workflow_enabled:
            business_service = await self._workflow.get_business_service(
                str(assessment.tenant_id),
                self._config.business_service,
                request.request_info,
            )
            self._enrichment.enrich_process_instance(request, property_)

            current_state = stored.current_state_name or assessment.current_state_name
            if self._workflow.is_state_updatable(current_state, business_service):
                # Correction window before the payload goes to the engine
                self._enrichment.enrich_update(request, property_)

            state = await self._workflow.advance(request)
            status = self._workflow.map_status(state.application_status)
            _record_state(assessment, state)
            assessment.status = status

            if self._config.is_demand_trigger_state(state.state):
                await self._calculation.calculate(request, property_)

            await self._events.publish_update(request)
            log.info(
                "assessment_updated_via_workflow",
                triggered=triggered,
                workflow_state=state.state,
                status=status.value,
            )
        elif not self._config.workflow_enabled:
            await self._calculation.calculate(request, property_)
            await self._events.publish_update(request)
            log.info("assessment_updated", triggered=triggered)
        else:
            log.info("assessment_update_not_triggered")

        return assessment
