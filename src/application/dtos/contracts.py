"""Wire contracts for assessment events and collaborator calls.

These Pydantic models are the JSON shape exchanged with the workflow
engine, the billing service, the tax calculator and event consumers
(camelCase keys). Domain dataclasses stay free of serialization concerns;
each contract converts to and from its domain model.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.domain.models.assessment import (
    Assessment,
    AssessmentRequest,
    AssessmentSource,
    AssessmentStatus,
    AuditDetails,
    Document,
    OwnerInfo,
    UnitUsage,
)
from src.domain.models.demand import Demand, DemandDetail, DemandStatus
from src.domain.models.property import Property
from src.domain.models.request_info import RequestInfo, Role, UserInfo
from src.domain.models.workflow import (
    Action,
    BusinessService,
    ProcessInstance,
    State,
)


class _Contract(BaseModel):
    """Base contract: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_wire(self) -> dict[str, Any]:
        """Serialize with wire aliases into JSON-compatible types."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# =============================================================================
# Request metadata
# =============================================================================


class RoleContract(_Contract):
    code: str
    tenant_id: str | None = None
    name: str | None = None


class UserInfoContract(_Contract):
    uuid: str
    type: str = "EMPLOYEE"
    tenant_id: str | None = None
    name: str | None = None
    roles: list[RoleContract] = Field(default_factory=list)


class RequestInfoContract(_Contract):
    api_id: str = "Rainmaker"
    action: str | None = None
    msg_id: str | None = None
    user_info: UserInfoContract | None = None

    @classmethod
    def from_domain(cls, info: RequestInfo) -> "RequestInfoContract":
        user = None
        if info.user_info is not None:
            user = UserInfoContract(
                uuid=info.user_info.uuid,
                type=info.user_info.type,
                tenant_id=info.user_info.tenant_id,
                name=info.user_info.name,
                roles=[
                    RoleContract(code=r.code, tenant_id=r.tenant_id, name=r.name)
                    for r in info.user_info.roles
                ],
            )
        return cls(
            api_id=info.api_id,
            action=info.action,
            msg_id=info.correlation_id,
            user_info=user,
        )

    def to_domain(self) -> RequestInfo:
        user = None
        if self.user_info is not None:
            user = UserInfo(
                uuid=self.user_info.uuid,
                type=self.user_info.type,
                tenant_id=self.user_info.tenant_id,
                name=self.user_info.name,
                roles=tuple(
                    Role(code=r.code, tenant_id=r.tenant_id, name=r.name)
                    for r in self.user_info.roles
                ),
            )
        return RequestInfo(
            user_info=user,
            correlation_id=self.msg_id,
            api_id=self.api_id,
            action=self.action,
        )


# =============================================================================
# Workflow
# =============================================================================


class ActionContract(_Contract):
    action: str
    next_state: str | None = None
    roles: list[str] = Field(default_factory=list)


class StateContract(_Contract):
    uuid: str | None = None
    state: str | None = None
    application_status: str | None = None
    is_state_updatable: bool = False
    is_terminate_state: bool = False
    actions: list[ActionContract] | None = None

    @classmethod
    def from_domain(cls, state: State) -> "StateContract":
        return cls(
            uuid=state.uuid,
            state=state.state,
            application_status=state.application_status,
            is_state_updatable=state.is_state_updatable,
            is_terminate_state=state.is_terminate_state,
            actions=[
                ActionContract(action=a.action, next_state=a.next_state, roles=list(a.roles))
                for a in state.actions
            ],
        )

    def to_domain(self) -> State:
        return State(
            state=self.state,
            application_status=self.application_status,
            uuid=self.uuid,
            is_state_updatable=self.is_state_updatable,
            is_terminate_state=self.is_terminate_state,
            actions=tuple(
                Action(action=a.action, next_state=a.next_state, roles=tuple(a.roles))
                for a in (self.actions or [])
            ),
        )


class BusinessServiceContract(_Contract):
    tenant_id: str
    business_service: str
    business: str | None = None
    states: list[StateContract] = Field(default_factory=list)

    def to_domain(self) -> BusinessService:
        return BusinessService(
            tenant_id=self.tenant_id,
            business_service=self.business_service,
            business=self.business,
            states=tuple(s.to_domain() for s in self.states),
        )


class ProcessInstanceContract(_Contract):
    id: str | None = None
    tenant_id: str | None = None
    business_service: str | None = None
    business_id: str | None = None
    action: str | None = None
    module_name: str | None = None
    state: StateContract | None = None
    comment: str | None = None
    documents: list[dict[str, Any]] = Field(default_factory=list)
    assignes: list[dict[str, Any]] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, instance: ProcessInstance) -> "ProcessInstanceContract":
        return cls(
            id=instance.id,
            tenant_id=instance.tenant_id,
            business_service=instance.business_service,
            business_id=instance.business_id,
            action=instance.action,
            module_name=instance.module_name,
            state=StateContract.from_domain(instance.state) if instance.state else None,
            comment=instance.comment,
            documents=list(instance.documents),
            assignes=[{"uuid": uuid} for uuid in instance.assignes],
        )

    def to_domain(self) -> ProcessInstance:
        return ProcessInstance(
            id=self.id,
            tenant_id=self.tenant_id,
            business_service=self.business_service,
            business_id=self.business_id,
            action=self.action,
            module_name=self.module_name,
            state=self.state.to_domain() if self.state else None,
            comment=self.comment,
            documents=list(self.documents),
            assignes=[a["uuid"] for a in self.assignes if "uuid" in a],
        )


class ProcessInstanceRequestContract(_Contract):
    request_info: RequestInfoContract = Field(alias="RequestInfo")
    process_instances: list[ProcessInstanceContract] = Field(alias="ProcessInstances")


class ProcessInstanceResponseContract(_Contract):
    process_instances: list[ProcessInstanceContract] = Field(
        default_factory=list, alias="ProcessInstances"
    )


class BusinessServiceResponseContract(_Contract):
    business_services: list[BusinessServiceContract] = Field(
        default_factory=list, alias="BusinessServices"
    )


# =============================================================================
# Assessment
# =============================================================================


class AuditDetailsContract(_Contract):
    created_by: str | None = None
    last_modified_by: str | None = None
    created_time: int | None = None
    last_modified_time: int | None = None


class UnitUsageContract(_Contract):
    id: str | None = None
    unit_id: str | None = None
    usage_category: str | None = None
    occupancy_type: str | None = None
    occupancy_date: int | None = None
    active: bool = True


class DocumentContract(_Contract):
    id: str | None = None
    document_type: str | None = None
    file_store_id: str | None = None
    document_uid: str | None = None
    status: str = "ACTIVE"


class OwnerInfoContract(_Contract):
    uuid: str | None = None
    name: str | None = None
    mobile_number: str | None = None
    email_id: str | None = None
    status: str = "ACTIVE"


class AssessmentContract(_Contract):
    id: str | None = None
    tenant_id: str | None = None
    assessment_number: str | None = None
    financial_year: str | None = None
    property_id: str | None = None
    assessment_date: int | None = None
    status: AssessmentStatus | None = None
    source: AssessmentSource | None = None
    channel: str | None = None
    unit_usage_list: list[UnitUsageContract] = Field(default_factory=list)
    documents: list[DocumentContract] = Field(default_factory=list)
    owners: list[OwnerInfoContract] = Field(default_factory=list)
    additional_details: dict[str, Any] | None = None
    workflow: ProcessInstanceContract | None = None
    audit_details: AuditDetailsContract | None = None

    @classmethod
    def from_domain(cls, assessment: Assessment) -> "AssessmentContract":
        audit = assessment.audit_details
        return cls(
            id=assessment.id,
            tenant_id=assessment.tenant_id,
            assessment_number=assessment.assessment_number,
            financial_year=assessment.financial_year,
            property_id=assessment.property_id,
            assessment_date=assessment.assessment_date,
            status=assessment.status,
            source=assessment.source,
            channel=assessment.channel,
            unit_usage_list=[
                UnitUsageContract(**vars(u)) for u in assessment.unit_usage_list
            ],
            documents=[DocumentContract(**vars(d)) for d in assessment.documents],
            owners=[OwnerInfoContract(**vars(o)) for o in assessment.owners],
            additional_details=assessment.additional_details,
            workflow=(
                ProcessInstanceContract.from_domain(assessment.workflow)
                if assessment.workflow
                else None
            ),
            audit_details=AuditDetailsContract(**vars(audit)) if audit else None,
        )

    def to_domain(self) -> Assessment:
        audit = self.audit_details
        return Assessment(
            id=self.id,
            tenant_id=self.tenant_id,
            assessment_number=self.assessment_number,
            financial_year=self.financial_year,
            property_id=self.property_id,
            assessment_date=self.assessment_date,
            status=self.status,
            source=self.source,
            channel=self.channel,
            unit_usage_list=[UnitUsage(**u.model_dump()) for u in self.unit_usage_list],
            documents=[Document(**d.model_dump()) for d in self.documents],
            owners=[OwnerInfo(**o.model_dump()) for o in self.owners],
            additional_details=self.additional_details,
            workflow=self.workflow.to_domain() if self.workflow else None,
            audit_details=AuditDetails(**audit.model_dump()) if audit else None,
        )


class AssessmentRequestContract(_Contract):
    """Event payload for assessment create/update topics."""

    request_info: RequestInfoContract = Field(alias="RequestInfo")
    assessment: AssessmentContract = Field(alias="Assessment")

    @classmethod
    def from_domain(cls, request: AssessmentRequest) -> "AssessmentRequestContract":
        return cls(
            request_info=RequestInfoContract.from_domain(request.request_info),
            assessment=AssessmentContract.from_domain(request.assessment),
        )


# =============================================================================
# Billing
# =============================================================================


class DemandDetailContract(_Contract):
    id: str | None = None
    tax_head_master_code: str
    tax_amount: Decimal = Decimal("0")
    collection_amount: Decimal = Decimal("0")


class DemandContract(_Contract):
    id: str | None = None
    tenant_id: str
    consumer_code: str
    consumer_type: str | None = None
    business_service: str = "PT"
    tax_period_from: int
    tax_period_to: int
    status: DemandStatus = DemandStatus.ACTIVE
    demand_details: list[DemandDetailContract] = Field(default_factory=list)
    additional_details: dict[str, Any] | None = None

    @classmethod
    def from_domain(cls, demand: Demand) -> "DemandContract":
        return cls(
            id=demand.id,
            tenant_id=demand.tenant_id,
            consumer_code=demand.consumer_code,
            consumer_type=demand.consumer_type,
            business_service=demand.business_service,
            tax_period_from=demand.tax_period_from,
            tax_period_to=demand.tax_period_to,
            status=demand.status,
            demand_details=[
                DemandDetailContract(
                    id=d.id,
                    tax_head_master_code=d.tax_head_master_code,
                    tax_amount=d.tax_amount,
                    collection_amount=d.collection_amount,
                )
                for d in demand.demand_details
            ],
            additional_details=demand.additional_details,
        )

    def to_domain(self) -> Demand:
        return Demand(
            id=self.id,
            tenant_id=self.tenant_id,
            consumer_code=self.consumer_code,
            consumer_type=self.consumer_type,
            business_service=self.business_service,
            tax_period_from=self.tax_period_from,
            tax_period_to=self.tax_period_to,
            status=self.status,
            demand_details=[
                DemandDetail(
                    id=d.id,
                    tax_head_master_code=d.tax_head_master_code,
                    tax_amount=d.tax_amount,
                    collection_amount=d.collection_amount,
                )
                for d in self.demand_details
            ],
            additional_details=self.additional_details,
        )


class DemandRequestContract(_Contract):
    request_info: RequestInfoContract = Field(alias="RequestInfo")
    demands: list[DemandContract] = Field(alias="Demands")


class DemandResponseContract(_Contract):
    demands: list[DemandContract] = Field(default_factory=list, alias="Demands")


# =============================================================================
# Tax calculation
# =============================================================================


class CalculationCriteriaContract(_Contract):
    tenant_id: str | None = None
    assessment_number: str | None = None
    financial_year: str | None = None
    property_id: str | None = None
    assessment: AssessmentContract | None = None


class CalculationRequestContract(_Contract):
    request_info: RequestInfoContract = Field(alias="RequestInfo")
    calculation_criteria: list[CalculationCriteriaContract] = Field(
        alias="CalculationCriteria"
    )


# =============================================================================
# Property registry / user directory
# =============================================================================


class PropertyContract(_Contract):
    property_id: str
    tenant_id: str
    status: str = "ACTIVE"
    id: str | None = None
    account_id: str | None = None
    old_property_id: str | None = None
    owners: list[OwnerInfoContract] = Field(default_factory=list)
    additional_details: dict[str, Any] | None = None

    def to_domain(self) -> Property:
        return Property(
            property_id=self.property_id,
            tenant_id=self.tenant_id,
            status=self.status,
            id=self.id,
            account_id=self.account_id,
            old_property_id=self.old_property_id,
            owners=tuple(OwnerInfo(**o.model_dump()) for o in self.owners),
            additional_details=self.additional_details or {},
        )


class PropertySearchResponseContract(_Contract):
    properties: list[PropertyContract] = Field(default_factory=list, alias="Properties")


class UserSearchRequestContract(_Contract):
    request_info: RequestInfoContract = Field(alias="RequestInfo")
    tenant_id: str | None = None
    uuid: list[str] = Field(default_factory=list)


class UserContract(_Contract):
    uuid: str
    name: str | None = None
    mobile_number: str | None = None
    email_id: str | None = None
    active: bool = True

    def to_domain(self) -> OwnerInfo:
        return OwnerInfo(
            uuid=self.uuid,
            name=self.name,
            mobile_number=self.mobile_number,
            email_id=self.email_id,
            status="ACTIVE" if self.active else "INACTIVE",
        )


class UserSearchResponseContract(_Contract):
    users: list[UserContract] = Field(default_factory=list, alias="user")
