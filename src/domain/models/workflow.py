"""Workflow engine models.

An assessment may be routed through an externally managed approval state
machine. The engine owns the state graph (BusinessService); this service
only reads it and moves process instances through it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from src.domain.models.request_info import RequestInfo


@dataclass(frozen=True, eq=True)
class Action:
    """A transition out of a workflow state."""

    action: str
    next_state: str | None = None
    roles: tuple[str, ...] = ()


@dataclass(frozen=True, eq=True)
class State:
    """A workflow state as returned by the engine.

    Attributes:
        state: The state name (e.g. "PENDINGVERIFICATION").
        application_status: Raw status string mapped onto AssessmentStatus.
        is_state_updatable: Whether the business object may be edited
            while in this state.
        is_terminate_state: Whether the process ends in this state.
    """

    state: str | None
    application_status: str | None = None
    uuid: str | None = None
    is_state_updatable: bool = False
    is_terminate_state: bool = False
    actions: tuple[Action, ...] = ()


@dataclass(frozen=True, eq=True)
class BusinessService:
    """Definition of the valid states and transitions for a workflow type."""

    tenant_id: str
    business_service: str
    business: str | None = None
    states: tuple[State, ...] = ()

    def get_state(self, state_name: str | None) -> State | None:
        """Find a state by name (case-insensitive)."""
        if state_name is None:
            return None
        for state in self.states:
            if state.state is not None and state.state.lower() == state_name.lower():
                return state
        return None


@dataclass
class ProcessInstance:
    """A process instance payload sent to / returned from the engine.

    Mutable: the enrichment service fills identity fields in place and the
    orchestrator stores the returned state on it.
    """

    business_service: str | None = None
    business_id: str | None = None
    action: str | None = None
    tenant_id: str | None = None
    module_name: str | None = None
    id: str | None = None
    state: State | None = None
    comment: str | None = None
    documents: list[dict[str, Any]] = field(default_factory=list)
    assignes: list[str] = field(default_factory=list)


@dataclass
class ProcessInstanceRequest:
    """Batch of process instances submitted to the engine in one call."""

    request_info: RequestInfo
    process_instances: list[ProcessInstance] = field(default_factory=list)
