"""Workflow Engine Stub.

Simulates the workflow engine. Resulting states come from, in order:

1. States queued with queue_state() (scripted tests).
2. The registered business service graph: the instance's action is looked
   up on the current state (or the first state for new instances) and its
   next_state is returned.

Every transition request is recorded for assertions. A failure can be
injected with fail_with().
"""

from __future__ import annotations

import copy
from collections import deque

from src.application.ports.workflow_engine import WorkflowEngineProtocol
from src.domain.errors.workflow import WorkflowEngineError
from src.domain.models.request_info import RequestInfo
from src.domain.models.workflow import (
    BusinessService,
    ProcessInstance,
    ProcessInstanceRequest,
    State,
)


class WorkflowEngineStub(WorkflowEngineProtocol):
    """In-memory workflow engine."""

    def __init__(self) -> None:
        self._business_services: dict[tuple[str, str], BusinessService] = {}
        self._queued_states: deque[State] = deque()
        self._failure: Exception | None = None
        self.transitions: list[ProcessInstance] = []
        self.business_service_lookups: list[tuple[str, str]] = []

    def register_business_service(self, business_service: BusinessService) -> None:
        key = (business_service.tenant_id, business_service.business_service)
        self._business_services[key] = business_service

    def queue_state(self, state: State) -> None:
        self._queued_states.append(state)

    def fail_with(self, error: Exception | None) -> None:
        """Make subsequent calls raise the given error (None to reset)."""
        self._failure = error

    @property
    def transition_count(self) -> int:
        return len(self.transitions)

    async def get_business_service(
        self,
        tenant_id: str,
        business_service_code: str,
        request_info: RequestInfo,
    ) -> BusinessService:
        if self._failure is not None:
            raise self._failure
        self.business_service_lookups.append((tenant_id, business_service_code))
        business_service = self._business_services.get((tenant_id, business_service_code))
        if business_service is None:
            raise WorkflowEngineError(
                "business_service_search",
                f"WORKFLOW_ERROR: no business service {business_service_code} for tenant {tenant_id}",
            )
        return business_service

    async def transition(self, request: ProcessInstanceRequest) -> list[ProcessInstance]:
        if self._failure is not None:
            raise self._failure

        results: list[ProcessInstance] = []
        for instance in request.process_instances:
            self.transitions.append(copy.deepcopy(instance))
            result = copy.deepcopy(instance)
            result.state = self._next_state(instance)
            results.append(result)
        return results

    def _next_state(self, instance: ProcessInstance) -> State:
        if self._queued_states:
            return self._queued_states.popleft()

        business_service = self._business_services.get(
            (str(instance.tenant_id), str(instance.business_service))
        )
        if business_service is None or not business_service.states:
            raise WorkflowEngineError(
                "transition",
                f"WORKFLOW_ERROR: no business service {instance.business_service}",
            )

        current = (
            business_service.get_state(instance.state.state)
            if instance.state is not None
            else business_service.states[0]
        )
        if current is not None:
            for action in current.actions:
                if action.action == instance.action:
                    target = business_service.get_state(action.next_state)
                    if target is not None:
                        return target
        raise WorkflowEngineError(
            "transition",
            f"WORKFLOW_ERROR: action {instance.action} is not valid from "
            f"{current.state if current else None}",
        )
