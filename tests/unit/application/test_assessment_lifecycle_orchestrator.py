"""Unit tests for AssessmentLifecycleOrchestrator.

Collaborators are mocks; the decision flow and call ordering are what is
under test here. End-to-end behaviour over the stubs lives in
tests/integration/test_assessment_scenarios.py.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.application.services.assessment_lifecycle_orchestrator import (
    AssessmentLifecycleOrchestrator,
)
from src.application.services.workflow_state_sync_service import map_status
from src.config.assessment_config import AssessmentConfig
from src.domain.errors.assessment import (
    AssessmentNotFoundError,
    DuplicateAssessmentError,
    PropertyNotFoundError,
    ValidationError,
)
from src.domain.errors.billing import BillingServiceError, CalculationError
from src.domain.errors.workflow import UnmappedStatusError, WorkflowEngineError
from src.domain.models.assessment import AssessmentStatus
from src.domain.models.workflow import ProcessInstance, State
from tests.helpers.builders import (
    make_business_service,
    make_new_assessment,
    make_property,
    make_request,
    make_stored_assessment,
)

PENDING = State(state="PENDINGVERIFICATION", application_status="INWORKFLOW")
APPROVED = State(state="APPROVED", application_status="ACTIVE")


class Collaborators:
    """Bundle of mocks with a shared call log for ordering assertions."""

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.property_resolver = AsyncMock()
        self.property_resolver.resolve.return_value = make_property()
        self.validator = MagicMock()
        self.enrichment = MagicMock()
        self.enrichment.enrich_create = AsyncMock()
        self.store = AsyncMock()
        self.store.get_by_key.return_value = make_stored_assessment()
        self.search_service = AsyncMock()
        self.search_service.search_assessments.return_value = []
        self.workflow_sync = MagicMock()
        self.workflow_sync.initiate = AsyncMock(return_value=PENDING)
        self.workflow_sync.advance = AsyncMock(return_value=PENDING)
        self.workflow_sync.get_business_service = AsyncMock(
            return_value=make_business_service()
        )
        self.workflow_sync.is_state_updatable.return_value = False
        self.workflow_sync.map_status.side_effect = map_status
        self.calculation = AsyncMock()
        self.demand_lifecycle = AsyncMock()
        self.event_publisher = AsyncMock()
        self.diff_evaluator = MagicMock()
        self.diff_evaluator.evaluate.return_value = False

        for name, mock in (
            ("initiate", self.workflow_sync.initiate),
            ("advance", self.workflow_sync.advance),
            ("calculate", self.calculation.calculate),
            ("retire", self.demand_lifecycle.retire_stale_demands),
            ("publish_create", self.event_publisher.publish_create),
            ("publish_update", self.event_publisher.publish_update),
        ):
            mock.side_effect = self._recorder(name, mock.return_value)

    def _recorder(self, name: str, return_value: object):
        def record(*args: object, **kwargs: object) -> object:
            self.calls.append(name)
            return return_value

        return record

    def orchestrator(self, config: AssessmentConfig) -> AssessmentLifecycleOrchestrator:
        return AssessmentLifecycleOrchestrator(
            config=config,
            property_resolver=self.property_resolver,
            validator=self.validator,
            enrichment=self.enrichment,
            store=self.store,
            search_service=self.search_service,
            workflow_sync=self.workflow_sync,
            calculation=self.calculation,
            demand_lifecycle=self.demand_lifecycle,
            event_publisher=self.event_publisher,
            diff_evaluator=self.diff_evaluator,
        )


@pytest.fixture
def deps() -> Collaborators:
    return Collaborators()


WORKFLOW_ON = AssessmentConfig(workflow_enabled=True)
WORKFLOW_OFF = AssessmentConfig(workflow_enabled=False)


class TestCreateAssessment:
    @pytest.mark.asyncio
    async def test_without_workflow_calculates_then_retires_then_publishes(
        self, deps: Collaborators
    ) -> None:
        request = make_request(make_new_assessment())

        result = await deps.orchestrator(WORKFLOW_OFF).create_assessment(request)

        assert result is request.assessment
        assert deps.calls == ["calculate", "retire", "publish_create"]
        deps.enrichment.enrich_workflow_for_initiation.assert_not_called()

    @pytest.mark.asyncio
    async def test_with_workflow_initiates_instead_of_calculating(
        self, deps: Collaborators
    ) -> None:
        request = make_request(make_new_assessment())

        result = await deps.orchestrator(WORKFLOW_ON).create_assessment(request)

        assert deps.calls == ["initiate", "retire", "publish_create"]
        deps.enrichment.enrich_workflow_for_initiation.assert_called_once_with(request)
        assert result.current_state_name == "PENDINGVERIFICATION"

    @pytest.mark.asyncio
    async def test_uniqueness_check_uses_active_status_and_key(
        self, deps: Collaborators
    ) -> None:
        request = make_request(make_new_assessment())

        await deps.orchestrator(WORKFLOW_OFF).create_assessment(request)

        criteria, info = deps.search_service.search_assessments.await_args.args
        assert criteria.property_ids == {"PT-107-000123"}
        assert criteria.financial_year == "2024-25"
        assert criteria.status == AssessmentStatus.ACTIVE
        assert info is request.request_info

    @pytest.mark.asyncio
    async def test_duplicate_rejected_before_side_effects(self, deps: Collaborators) -> None:
        deps.search_service.search_assessments.return_value = [make_stored_assessment()]

        with pytest.raises(DuplicateAssessmentError) as exc_info:
            await deps.orchestrator(WORKFLOW_ON).create_assessment(
                make_request(make_new_assessment())
            )

        assert exc_info.value.property_id == "PT-107-000123"
        assert exc_info.value.financial_year == "2024-25"
        assert deps.calls == []

    @pytest.mark.asyncio
    async def test_unknown_property_stops_everything(self, deps: Collaborators) -> None:
        deps.property_resolver.resolve.side_effect = PropertyNotFoundError("PT-X")

        with pytest.raises(PropertyNotFoundError):
            await deps.orchestrator(WORKFLOW_OFF).create_assessment(
                make_request(make_new_assessment())
            )

        deps.validator.validate_create.assert_not_called()
        assert deps.calls == []

    @pytest.mark.asyncio
    async def test_validation_failure_stops_before_enrichment(
        self, deps: Collaborators
    ) -> None:
        deps.validator.validate_create.side_effect = ValidationError({"INVALID_TENANT": "x"})

        with pytest.raises(ValidationError):
            await deps.orchestrator(WORKFLOW_OFF).create_assessment(
                make_request(make_new_assessment())
            )

        deps.enrichment.enrich_create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_workflow_failure_publishes_nothing(self, deps: Collaborators) -> None:
        deps.workflow_sync.initiate.side_effect = WorkflowEngineError("initiate")

        with pytest.raises(WorkflowEngineError):
            await deps.orchestrator(WORKFLOW_ON).create_assessment(
                make_request(make_new_assessment())
            )

        deps.demand_lifecycle.retire_stale_demands.assert_not_awaited()
        deps.event_publisher.publish_create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_billing_failure_after_calculation_publishes_nothing(
        self, deps: Collaborators
    ) -> None:
        deps.demand_lifecycle.retire_stale_demands.side_effect = BillingServiceError("update")

        with pytest.raises(BillingServiceError):
            await deps.orchestrator(WORKFLOW_OFF).create_assessment(
                make_request(make_new_assessment())
            )

        deps.calculation.calculate.assert_awaited_once()
        deps.event_publisher.publish_create.assert_not_awaited()


class TestUpdateAssessment:
    @pytest.mark.asyncio
    async def test_missing_baseline_raises_not_found(self, deps: Collaborators) -> None:
        deps.store.get_by_key.return_value = None

        with pytest.raises(AssessmentNotFoundError):
            await deps.orchestrator(WORKFLOW_ON).update_assessment(
                make_request(make_stored_assessment())
            )

        deps.validator.validate_update.assert_not_called()

    @pytest.mark.asyncio
    async def test_baseline_fetched_by_tenant_id_and_number(self, deps: Collaborators) -> None:
        await deps.orchestrator(WORKFLOW_OFF).update_assessment(
            make_request(make_stored_assessment())
        )

        deps.store.get_by_key.assert_awaited_once_with(
            "pb.amritsar", "asmt-0001", "AS-AMRITSAR-000001"
        )

    @pytest.mark.asyncio
    async def test_untriggered_update_with_workflow_is_a_silent_no_op(
        self, deps: Collaborators
    ) -> None:
        request = make_request(make_stored_assessment())

        result = await deps.orchestrator(WORKFLOW_ON).update_assessment(request)

        assert result.status == AssessmentStatus.ACTIVE
        assert deps.calls == []
        deps.workflow_sync.get_business_service.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_workflow_disabled_always_calculates_and_publishes(
        self, deps: Collaborators
    ) -> None:
        deps.diff_evaluator.evaluate.return_value = True

        await deps.orchestrator(WORKFLOW_OFF).update_assessment(
            make_request(make_stored_assessment())
        )

        assert deps.calls == ["calculate", "publish_update"]
        deps.workflow_sync.get_business_service.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_triggered_update_advances_and_maps_status(
        self, deps: Collaborators
    ) -> None:
        deps.diff_evaluator.evaluate.return_value = True
        request = make_request(make_stored_assessment(workflow=ProcessInstance(action="VERIFY")))

        result = await deps.orchestrator(WORKFLOW_ON).update_assessment(request)

        assert deps.calls == ["advance", "publish_update"]
        assert result.status == AssessmentStatus.INWORKFLOW
        assert result.current_state_name == "PENDINGVERIFICATION"
        deps.enrichment.enrich_process_instance.assert_called_once()
        deps.validator.validate_update.assert_called_once()
        assert deps.validator.validate_update.call_args.args[3] is True

    @pytest.mark.asyncio
    async def test_inworkflow_status_enters_workflow_without_trigger(
        self, deps: Collaborators
    ) -> None:
        request = make_request(
            make_stored_assessment(
                status=AssessmentStatus.INWORKFLOW, workflow=ProcessInstance(action="VERIFY")
            )
        )

        await deps.orchestrator(WORKFLOW_ON).update_assessment(request)

        assert deps.calls == ["advance", "publish_update"]

    @pytest.mark.asyncio
    async def test_reaching_demand_trigger_state_calculates(
        self, deps: Collaborators
    ) -> None:
        deps.diff_evaluator.evaluate.return_value = True
        deps.workflow_sync.advance.side_effect = None
        deps.workflow_sync.advance.return_value = APPROVED
        request = make_request(make_stored_assessment(workflow=ProcessInstance(action="APPROVE")))

        result = await deps.orchestrator(WORKFLOW_ON).update_assessment(request)

        deps.calculation.calculate.assert_awaited_once()
        deps.event_publisher.publish_update.assert_awaited_once()
        assert result.status == AssessmentStatus.ACTIVE

    @pytest.mark.asyncio
    async def test_updatable_state_re_enriches_before_advance(
        self, deps: Collaborators
    ) -> None:
        deps.diff_evaluator.evaluate.return_value = True
        deps.workflow_sync.is_state_updatable.return_value = True
        request = make_request(
            make_stored_assessment(workflow=ProcessInstance(action="VERIFY", state=PENDING))
        )

        await deps.orchestrator(WORKFLOW_ON).update_assessment(request)

        assert deps.enrichment.enrich_update.call_count == 2
        state_name, business_service = deps.workflow_sync.is_state_updatable.call_args.args
        assert state_name == "PENDINGVERIFICATION"
        assert business_service.business_service == "ASMT"

    @pytest.mark.asyncio
    async def test_locked_state_enriches_once(self, deps: Collaborators) -> None:
        deps.diff_evaluator.evaluate.return_value = True
        request = make_request(make_stored_assessment(workflow=ProcessInstance(action="VERIFY")))

        await deps.orchestrator(WORKFLOW_ON).update_assessment(request)

        assert deps.enrichment.enrich_update.call_count == 1

    @pytest.mark.asyncio
    async def test_unmapped_status_publishes_nothing(self, deps: Collaborators) -> None:
        deps.diff_evaluator.evaluate.return_value = True
        deps.workflow_sync.advance.side_effect = None
        deps.workflow_sync.advance.return_value = State(
            state="PENDINGFIELDVISIT", application_status="PENDING"
        )
        request = make_request(make_stored_assessment(workflow=ProcessInstance(action="VISIT")))

        with pytest.raises(UnmappedStatusError):
            await deps.orchestrator(WORKFLOW_ON).update_assessment(request)

        deps.event_publisher.publish_update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_calculation_failure_publishes_nothing(self, deps: Collaborators) -> None:
        deps.calculation.calculate.side_effect = CalculationError("AS-1")

        with pytest.raises(CalculationError):
            await deps.orchestrator(WORKFLOW_OFF).update_assessment(
                make_request(make_stored_assessment())
            )

        deps.event_publisher.publish_update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_diff_compares_request_against_stored(self, deps: Collaborators) -> None:
        stored = make_stored_assessment(channel="SYSTEM")
        deps.store.get_by_key.return_value = stored
        request = make_request(make_stored_assessment())

        await deps.orchestrator(WORKFLOW_ON).update_assessment(request)

        deps.diff_evaluator.evaluate.assert_called_once_with(request.assessment, stored)
