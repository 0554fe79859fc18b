"""Assessment domain model.

An assessment is a property's tax obligation record for one financial
year. It is created once per (property_id, financial_year), may move
through workflow states, and is never deleted here: status transitions
only.

Invariant: at most one ACTIVE assessment exists per
(property_id, financial_year). The create path enforces this with a
check-then-act read; the store is expected to back it with a unique
constraint because two concurrent creates can both pass the check.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from src.domain.models.request_info import RequestInfo
from src.domain.models.workflow import ProcessInstance


class AssessmentStatus(str, Enum):
    """Status of an assessment.

    INWORKFLOW is the pending status: an assessment in this status is
    routed through the workflow engine on update.
    """

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    INWORKFLOW = "INWORKFLOW"
    CANCELLED = "CANCELLED"
    REJECTED = "REJECTED"


class AssessmentSource(str, Enum):
    """Where the assessment data originated."""

    MUNICIPAL_RECORDS = "MUNICIPAL_RECORDS"
    WEBAPP = "WEBAPP"
    FIELD_SURVEY = "FIELD_SURVEY"
    LEGACY_RECORD = "LEGACY_RECORD"


@dataclass
class AuditDetails:
    """Who created/modified the record and when (epoch ms)."""

    created_by: str | None = None
    last_modified_by: str | None = None
    created_time: int | None = None
    last_modified_time: int | None = None


@dataclass
class UnitUsage:
    """Usage of a property unit during the assessed year."""

    id: str | None = None
    unit_id: str | None = None
    usage_category: str | None = None
    occupancy_type: str | None = None
    occupancy_date: int | None = None
    active: bool = True


@dataclass
class Document:
    """A document attached to the assessment."""

    id: str | None = None
    document_type: str | None = None
    file_store_id: str | None = None
    document_uid: str | None = None
    status: str = "ACTIVE"


@dataclass
class OwnerInfo:
    """Owner reference; detail fields are filled by owner enrichment.

    Details come from the user directory, not the assessment, so they are
    left out of equality and of the update diff.
    """

    uuid: str | None = None
    name: str | None = field(default=None, compare=False)
    mobile_number: str | None = field(default=None, compare=False)
    email_id: str | None = field(default=None, compare=False)
    status: str = "ACTIVE"


@dataclass
class Assessment:
    """A property tax assessment for one financial year.

    Mutable by design of the request flow: enrichment services write
    derived identifiers and audit fields in place, and the orchestrator
    sets status/workflow state on the same object it returns.
    """

    tenant_id: str | None = None
    financial_year: str | None = None
    property_id: str | None = None
    id: str | None = None
    assessment_number: str | None = None
    assessment_date: int | None = None
    status: AssessmentStatus | None = None
    source: AssessmentSource | None = None
    channel: str | None = None
    unit_usage_list: list[UnitUsage] = field(default_factory=list)
    documents: list[Document] = field(default_factory=list)
    owners: list[OwnerInfo] = field(default_factory=list)
    additional_details: dict[str, Any] | None = None
    workflow: ProcessInstance | None = None
    audit_details: AuditDetails | None = None

    @property
    def key(self) -> tuple[str | None, str | None]:
        """Natural key: (property_id, financial_year)."""
        return (self.property_id, self.financial_year)

    @property
    def current_state_name(self) -> str | None:
        """Name of the workflow state the assessment currently sits in."""
        if self.workflow is None or self.workflow.state is None:
            return None
        return self.workflow.state.state


@dataclass
class AssessmentRequest:
    """An assessment plus the request metadata it arrived with."""

    request_info: RequestInfo
    assessment: Assessment


def format_assessment_number(tenant_id: str | None, sequence: int) -> str:
    """Format AS-<tenant suffix>-<sequence>, e.g. AS-AMRITSAR-000001."""
    suffix = (tenant_id or "default").split(".")[-1].upper()
    return f"AS-{suffix}-{sequence:06d}"
