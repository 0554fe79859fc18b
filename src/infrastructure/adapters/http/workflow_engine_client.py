"""Workflow engine HTTP adapter."""

from __future__ import annotations

from src.application.dtos.contracts import (
    BusinessServiceResponseContract,
    ProcessInstanceContract,
    ProcessInstanceRequestContract,
    ProcessInstanceResponseContract,
    RequestInfoContract,
)
from src.application.ports.workflow_engine import WorkflowEngineProtocol
from src.domain.errors.workflow import WorkflowEngineError
from src.domain.models.request_info import RequestInfo
from src.domain.models.workflow import (
    BusinessService,
    ProcessInstance,
    ProcessInstanceRequest,
)
from src.infrastructure.adapters.http.base import ErrorFactory, HttpAdapter

TRANSITION_PATH = "/egov-wf/process/_transition"
BUSINESS_SERVICE_SEARCH_PATH = "/egov-wf/businessservice/_search"


def _workflow_error(operation: str) -> ErrorFactory:
    def factory(detail: str, status_code: int | None) -> WorkflowEngineError:
        return WorkflowEngineError(
            operation, f"WORKFLOW_ERROR: {detail}", status_code=status_code
        )

    return factory


class HttpWorkflowEngine(HttpAdapter, WorkflowEngineProtocol):
    """Talks to the workflow engine's process and business-service APIs."""

    async def get_business_service(
        self,
        tenant_id: str,
        business_service_code: str,
        request_info: RequestInfo,
    ) -> BusinessService:
        error = _workflow_error("business_service_search")
        payload = await self._post(
            BUSINESS_SERVICE_SEARCH_PATH,
            {"RequestInfo": RequestInfoContract.from_domain(request_info).to_wire()},
            error,
            params={"tenantId": tenant_id, "businessServices": business_service_code},
        )
        response = self._parse(BusinessServiceResponseContract, payload, error)
        if not response.business_services:
            raise error(
                f"no business service {business_service_code} for tenant {tenant_id}",
                None,
            )
        return response.business_services[0].to_domain()

    async def transition(self, request: ProcessInstanceRequest) -> list[ProcessInstance]:
        error = _workflow_error("transition")
        body = ProcessInstanceRequestContract(
            request_info=RequestInfoContract.from_domain(request.request_info),
            process_instances=[
                ProcessInstanceContract.from_domain(instance)
                for instance in request.process_instances
            ],
        )
        payload = await self._post(TRANSITION_PATH, body.to_wire(), error)
        response = self._parse(ProcessInstanceResponseContract, payload, error)
        self._log.info(
            "workflow_transition_posted",
            instances=len(request.process_instances),
            returned=len(response.process_instances),
        )
        return [instance.to_domain() for instance in response.process_instances]
