"""Workflow engine port.

The workflow engine owns approval state machines. The assessment service
reads business service definitions from it and transitions process
instances through it. All failures surface as WorkflowEngineError.
"""

from __future__ import annotations

from typing import Protocol

from src.domain.models.request_info import RequestInfo
from src.domain.models.workflow import (
    BusinessService,
    ProcessInstance,
    ProcessInstanceRequest,
)


class WorkflowEngineProtocol(Protocol):
    """Protocol for the external workflow engine."""

    async def get_business_service(
        self,
        tenant_id: str,
        business_service_code: str,
        request_info: RequestInfo,
    ) -> BusinessService:
        """Fetch the business service definition for a tenant.

        Raises:
            WorkflowEngineError: If the call fails or nothing is defined.
        """
        ...

    async def transition(self, request: ProcessInstanceRequest) -> list[ProcessInstance]:
        """Create or advance process instances.

        Returns:
            The process instances as persisted by the engine, carrying
            their resulting state.

        Raises:
            WorkflowEngineError: If the call fails.
        """
        ...
