"""Domain models for the assessment service."""

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
from src.domain.models.search_criteria import AssessmentSearchCriteria
from src.domain.models.workflow import (
    Action,
    BusinessService,
    ProcessInstance,
    ProcessInstanceRequest,
    State,
)

__all__: list[str] = [
    "Action",
    "Assessment",
    "AssessmentRequest",
    "AssessmentSearchCriteria",
    "AssessmentSource",
    "AssessmentStatus",
    "AuditDetails",
    "BusinessService",
    "Demand",
    "DemandDetail",
    "DemandStatus",
    "Document",
    "OwnerInfo",
    "ProcessInstance",
    "ProcessInstanceRequest",
    "Property",
    "RequestInfo",
    "Role",
    "State",
    "UnitUsage",
    "UserInfo",
]
