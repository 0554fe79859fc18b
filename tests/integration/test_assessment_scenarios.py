"""Scenario tests for the assessment lifecycle.

Real services wired over the in-memory stubs, with time frozen at
2025-06-01. Each test drives the orchestrator end to end and asserts on
what the collaborators observed.
"""

from dataclasses import dataclass
from datetime import datetime, timezone

import pytest

from src.application.services.assessment_enrichment_service import (
    AssessmentEnrichmentService,
)
from src.application.services.assessment_event_publisher import AssessmentEventPublisher
from src.application.services.assessment_lifecycle_orchestrator import (
    AssessmentLifecycleOrchestrator,
)
from src.application.services.assessment_search_service import AssessmentSearchService
from src.application.services.assessment_validation_service import AssessmentValidator
from src.application.services.calculation_trigger_service import (
    CalculationTriggerService,
)
from src.application.services.demand_lifecycle_service import DemandLifecycleService
from src.application.services.workflow_state_sync_service import (
    WorkflowStateSyncService,
)
from src.config.assessment_config import AssessmentConfig
from src.domain.errors.assessment import DuplicateAssessmentError, ValidationError
from src.domain.errors.billing import CalculationError
from src.domain.models.assessment import AssessmentStatus, OwnerInfo
from src.domain.models.demand import DemandStatus
from src.domain.models.search_criteria import AssessmentSearchCriteria
from src.infrastructure.stubs import (
    AssessmentNumberGeneratorStub,
    AssessmentStoreStub,
    BillingServiceStub,
    EventBusStub,
    PropertyResolverStub,
    TaxCalculatorStub,
    UserDirectoryStub,
    WorkflowEngineStub,
)
from tests.helpers import FakeTimeAuthority
from tests.helpers.builders import (
    PROPERTY_ID,
    make_business_service,
    make_demand,
    make_new_assessment,
    make_property,
    make_request,
    make_stored_assessment,
    make_unit,
    make_workflow,
)

CREATE_TOPIC = "save-pt-assessment"
UPDATE_TOPIC = "update-pt-assessment"

WORKFLOW_CONFIG = AssessmentConfig(
    workflow_enabled=True,
    demand_trigger_state="APPROVED",
    workflow_trigger_fields=frozenset({"usage_category", "occupancy_type"}),
    workflow_trigger_objects=frozenset({"UnitUsage"}),
)
NO_WORKFLOW_CONFIG = AssessmentConfig(workflow_enabled=False)


@dataclass
class Harness:
    orchestrator: AssessmentLifecycleOrchestrator
    search: AssessmentSearchService
    store: AssessmentStoreStub
    workflow: WorkflowEngineStub
    billing: BillingServiceStub
    calculator: TaxCalculatorStub
    events: EventBusStub
    users: UserDirectoryStub
    time: FakeTimeAuthority


def build_harness(config: AssessmentConfig) -> Harness:
    time = FakeTimeAuthority(frozen_at=datetime(2025, 6, 1, tzinfo=timezone.utc))
    store = AssessmentStoreStub()
    workflow = WorkflowEngineStub()
    workflow.register_business_service(make_business_service())
    billing = BillingServiceStub()
    calculator = TaxCalculatorStub()
    events = EventBusStub()
    users = UserDirectoryStub()
    search = AssessmentSearchService(store, users, config)

    orchestrator = AssessmentLifecycleOrchestrator(
        config=config,
        property_resolver=PropertyResolverStub([make_property()]),
        validator=AssessmentValidator(config),
        enrichment=AssessmentEnrichmentService(AssessmentNumberGeneratorStub(), time, config),
        store=store,
        search_service=search,
        workflow_sync=WorkflowStateSyncService(workflow),
        calculation=CalculationTriggerService(calculator),
        demand_lifecycle=DemandLifecycleService(billing, time),
        event_publisher=AssessmentEventPublisher(events, CREATE_TOPIC, UPDATE_TOPIC),
    )
    return Harness(orchestrator, search, store, workflow, billing, calculator, events, users, time)


@pytest.fixture
def workflow_harness() -> Harness:
    return build_harness(WORKFLOW_CONFIG)


@pytest.fixture
def plain_harness() -> Harness:
    return build_harness(NO_WORKFLOW_CONFIG)


class TestCreateScenarios:
    @pytest.mark.asyncio
    async def test_create_without_workflow_calculates_once_and_publishes_once(
        self, plain_harness: Harness
    ) -> None:
        h = plain_harness
        request = make_request(make_new_assessment(financial_year="2023-24"))

        assessment = await h.orchestrator.create_assessment(request)

        assert assessment.status == AssessmentStatus.ACTIVE
        assert assessment.assessment_number == "AS-AMRITSAR-000001"
        assert h.calculator.calculations == [("AS-AMRITSAR-000001", PROPERTY_ID)]
        assert h.workflow.transition_count == 0
        assert len(h.events.events_for(CREATE_TOPIC)) == 1
        assert h.events.events_for(UPDATE_TOPIC) == []

    @pytest.mark.asyncio
    async def test_duplicate_active_assessment_rejected_without_events(
        self, plain_harness: Harness
    ) -> None:
        h = plain_harness
        h.store.add(make_stored_assessment(financial_year="2023-24"))

        with pytest.raises(DuplicateAssessmentError):
            await h.orchestrator.create_assessment(
                make_request(make_new_assessment(financial_year="2023-24"))
            )

        assert h.events.published == []
        assert h.calculator.call_count == 0

    @pytest.mark.asyncio
    async def test_inactive_assessment_for_same_year_does_not_block_create(
        self, plain_harness: Harness
    ) -> None:
        h = plain_harness
        h.store.add(
            make_stored_assessment(
                financial_year="2023-24", status=AssessmentStatus.INACTIVE
            )
        )

        await h.orchestrator.create_assessment(
            make_request(make_new_assessment(financial_year="2023-24"))
        )

        assert len(h.events.events_for(CREATE_TOPIC)) == 1

    @pytest.mark.asyncio
    async def test_create_retires_elapsed_demands_and_resubmits_batch(
        self, plain_harness: Harness
    ) -> None:
        h = plain_harness
        now = h.time.now_millis()
        h.billing.add_demand(make_demand("d-old", now - 1))
        h.billing.add_demand(make_demand("d-current", now + 86_400_000))

        await h.orchestrator.create_assessment(make_request(make_new_assessment()))

        assert len(h.billing.update_calls) == 1
        statuses = {d.id: d.status for d in h.billing.update_calls[0]}
        assert statuses == {
            "d-old": DemandStatus.CANCELLED,
            "d-current": DemandStatus.ACTIVE,
        }

    @pytest.mark.asyncio
    async def test_create_with_workflow_enters_first_state(
        self, workflow_harness: Harness
    ) -> None:
        h = workflow_harness

        assessment = await h.orchestrator.create_assessment(make_request(make_new_assessment()))

        assert assessment.status == AssessmentStatus.INWORKFLOW
        assert assessment.current_state_name == "PENDINGVERIFICATION"
        assert h.workflow.transitions[0].action == "CREATE"
        assert h.workflow.transitions[0].business_id == assessment.assessment_number
        assert h.calculator.call_count == 0

        (payload,) = h.events.events_for(CREATE_TOPIC)
        assert payload["Assessment"]["status"] == "INWORKFLOW"
        assert payload["Assessment"]["workflow"]["state"]["state"] == "PENDINGVERIFICATION"

    @pytest.mark.asyncio
    async def test_failed_calculation_publishes_nothing(self, plain_harness: Harness) -> None:
        h = plain_harness
        h.calculator.fail_with(CalculationError(None))

        with pytest.raises(CalculationError):
            await h.orchestrator.create_assessment(make_request(make_new_assessment()))

        assert h.events.published == []

    @pytest.mark.asyncio
    async def test_invalid_financial_year_rejected(self, plain_harness: Harness) -> None:
        h = plain_harness

        with pytest.raises(ValidationError) as exc_info:
            await h.orchestrator.create_assessment(
                make_request(make_new_assessment(financial_year="2023-25"))
            )

        assert "INVALID_FINANCIAL_YEAR" in exc_info.value.errors
        assert h.events.published == []


class TestUpdateScenarios:
    @pytest.mark.asyncio
    async def test_non_trigger_change_with_workflow_is_silent(
        self, workflow_harness: Harness
    ) -> None:
        h = workflow_harness
        h.store.add(make_stored_assessment())

        assessment = await h.orchestrator.update_assessment(
            make_request(make_stored_assessment(channel="SYSTEM"))
        )

        assert assessment.status == AssessmentStatus.ACTIVE
        assert h.workflow.transition_count == 0
        assert h.workflow.business_service_lookups == []
        assert h.events.published == []

    @pytest.mark.asyncio
    async def test_trigger_change_reaching_demand_state_recalculates(
        self, workflow_harness: Harness
    ) -> None:
        h = workflow_harness
        h.store.add(
            make_stored_assessment(
                status=AssessmentStatus.INWORKFLOW,
                workflow=make_workflow("VERIFY", "PENDINGAPPROVAL"),
            )
        )
        request = make_request(
            make_stored_assessment(
                status=AssessmentStatus.INWORKFLOW,
                unit_usage_list=[make_unit(usage_category="COMMERCIAL")],
                workflow=make_workflow("APPROVE", "PENDINGAPPROVAL"),
            )
        )

        assessment = await h.orchestrator.update_assessment(request)

        assert assessment.current_state_name == "APPROVED"
        assert assessment.status == AssessmentStatus.ACTIVE
        assert h.calculator.call_count == 1
        assert len(h.events.events_for(UPDATE_TOPIC)) == 1
        assert h.events.events_for(CREATE_TOPIC) == []

    @pytest.mark.asyncio
    async def test_trigger_change_short_of_demand_state_does_not_calculate(
        self, workflow_harness: Harness
    ) -> None:
        h = workflow_harness
        h.store.add(make_stored_assessment())
        request = make_request(
            make_stored_assessment(
                unit_usage_list=[make_unit(occupancy_type="RENTED")],
                workflow=make_workflow("VERIFY", "PENDINGVERIFICATION"),
            )
        )

        assessment = await h.orchestrator.update_assessment(request)

        assert assessment.status == AssessmentStatus.INWORKFLOW
        assert assessment.current_state_name == "PENDINGAPPROVAL"
        assert h.calculator.call_count == 0
        (payload,) = h.events.events_for(UPDATE_TOPIC)
        assert payload["Assessment"]["status"] == "INWORKFLOW"

    @pytest.mark.asyncio
    async def test_triggered_update_without_action_rejected(
        self, workflow_harness: Harness
    ) -> None:
        h = workflow_harness
        h.store.add(make_stored_assessment())
        request = make_request(
            make_stored_assessment(unit_usage_list=[make_unit(usage_category="COMMERCIAL")])
        )

        with pytest.raises(ValidationError) as exc_info:
            await h.orchestrator.update_assessment(request)

        assert "INVALID_WORKFLOW" in exc_info.value.errors
        assert h.workflow.transition_count == 0

    @pytest.mark.asyncio
    async def test_update_without_workflow_always_calculates(
        self, plain_harness: Harness
    ) -> None:
        h = plain_harness
        h.store.add(make_stored_assessment())

        await h.orchestrator.update_assessment(
            make_request(make_stored_assessment(channel="SYSTEM"))
        )

        assert h.calculator.call_count == 1
        assert len(h.events.events_for(UPDATE_TOPIC)) == 1
        assert h.workflow.transition_count == 0


class TestSearchScenarios:
    @pytest.mark.asyncio
    async def test_search_fills_owner_details(self, plain_harness: Harness) -> None:
        h = plain_harness
        h.users.add(OwnerInfo(uuid="owner-1", name="Harpreet", mobile_number="9999999999"))
        h.store.add(make_stored_assessment(owners=[OwnerInfo(uuid="owner-1")]))

        results = await h.search.search_assessments(
            AssessmentSearchCriteria(tenant_id="pb.amritsar"),
            make_request().request_info,
        )

        assert results[0].owners[0].name == "Harpreet"

    @pytest.mark.asyncio
    async def test_plain_search_pages_through_numbers(self, plain_harness: Harness) -> None:
        h = plain_harness
        for index in range(3):
            h.store.add(
                make_stored_assessment(
                    id=f"asmt-{index}",
                    assessment_number=f"AS-AMRITSAR-00000{index}",
                    assessment_date=1_700_000_000_000 + index,
                )
            )

        page = await h.search.plain_search(
            AssessmentSearchCriteria(tenant_id="pb.amritsar", limit=2, offset=1)
        )

        assert [a.id for a in page] == ["asmt-1", "asmt-0"]
