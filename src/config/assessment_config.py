"""Assessment service configuration.

This module defines the configuration recognized by the assessment
lifecycle: workflow switch, workflow trigger lists, demand trigger state,
search pagination bounds, event topics and collaborator hosts, with
environment variable overrides.

Environment Variables (Workflow):
- ASSESSMENT_WORKFLOW_ENABLED: Route mutations through workflow (default: false)
- ASSESSMENT_DEMAND_TRIGGER_STATE: State name that triggers tax calculation
  (default: APPROVED)
- ASSESSMENT_WORKFLOW_TRIGGER_FIELDS: Comma-separated field identifiers
- ASSESSMENT_WORKFLOW_TRIGGER_OBJECTS: Comma-separated object kinds
- ASSESSMENT_BUSINESS_SERVICE: Workflow business service code (default: ASMT)

Environment Variables (Search):
- ASSESSMENT_MAX_SEARCH_LIMIT: Hard cap on page size (default: 100)
- ASSESSMENT_DEFAULT_LIMIT: Page size when none given (default: 10)
- ASSESSMENT_DEFAULT_OFFSET: Offset when none given (default: 0)

Environment Variables (Topics / Hosts):
- ASSESSMENT_CREATE_TOPIC / ASSESSMENT_UPDATE_TOPIC
- WORKFLOW_HOST, BILLING_HOST, CALCULATOR_HOST, PROPERTY_HOST, USER_HOST,
  EVENT_SINK_HOST
- KAFKA_BOOTSTRAP_SERVERS: Publish events to Kafka (takes precedence over
  EVENT_SINK_HOST)
- ASSESSMENT_HTTP_TIMEOUT: Transport timeout in seconds (default: 30.0)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from src.domain.errors.configuration import ConfigurationError

DEFAULT_CREATE_TOPIC: str = "save-pt-assessment"
DEFAULT_UPDATE_TOPIC: str = "update-pt-assessment"
DEFAULT_BUSINESS_SERVICE: str = "ASMT"
DEFAULT_DEMAND_TRIGGER_STATE: str = "APPROVED"


def parse_identifier_list(key: str, raw: str | None) -> frozenset[str]:
    """Parse a comma-separated identifier list into a set.

    Entries are stripped of surrounding whitespace and matched
    case-sensitively. An unset or blank value yields an empty set.

    Args:
        key: Configuration key, used in error messages.
        raw: The raw comma-separated value.

    Returns:
        Frozenset of identifiers.

    Raises:
        ConfigurationError: If any entry is empty (e.g. "a,,b" or "a,").
    """
    if raw is None or not raw.strip():
        return frozenset()
    entries = [entry.strip() for entry in raw.split(",")]
    if any(not entry for entry in entries):
        raise ConfigurationError(
            key,
            raw,
            f"CONFIGURATION_ERROR: {key} contains an empty entry: {raw!r}",
        )
    return frozenset(entries)


def _get_int_env(key: str, default: int) -> int:
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ConfigurationError(key, value) from exc


def _get_float_env(key: str, default: float) -> float:
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ConfigurationError(key, value) from exc


def _get_bool_env(key: str, default: bool) -> bool:
    value = os.environ.get(key)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in ("1", "true", "yes", "on"):
        return True
    if normalized in ("0", "false", "no", "off"):
        return False
    raise ConfigurationError(key, value)


@dataclass(frozen=True)
class AssessmentConfig:
    """Configuration for the assessment lifecycle.

    Attributes:
        workflow_enabled: Whether create/update go through the workflow engine.
        demand_trigger_state: Workflow state name (case-insensitive) on
            reaching which tax is calculated during update.
        workflow_trigger_fields: Field identifiers whose change triggers workflow.
        workflow_trigger_objects: Object kinds whose addition triggers workflow.
        max_search_limit: Upper bound on a search page size.
        default_limit: Page size used when the caller gives none.
        default_offset: Offset used when the caller gives none.
        business_service: Workflow business service code for assessments.
        module_name: Workflow module name.
        create_topic: Topic for assessment create events.
        update_topic: Topic for assessment update events.
        workflow_host / billing_host / calculator_host / property_host /
            user_host / event_sink_host:
            Base URLs of the collaborators; None selects in-memory stubs.
        kafka_bootstrap_servers: Kafka brokers for assessment events.
        http_timeout_seconds: Transport timeout applied to every HTTP call.
    """

    workflow_enabled: bool = False
    demand_trigger_state: str = DEFAULT_DEMAND_TRIGGER_STATE
    workflow_trigger_fields: frozenset[str] = field(default_factory=frozenset)
    workflow_trigger_objects: frozenset[str] = field(default_factory=frozenset)
    max_search_limit: int = 100
    default_limit: int = 10
    default_offset: int = 0
    business_service: str = DEFAULT_BUSINESS_SERVICE
    module_name: str = "PT"
    create_topic: str = DEFAULT_CREATE_TOPIC
    update_topic: str = DEFAULT_UPDATE_TOPIC
    workflow_host: str | None = None
    billing_host: str | None = None
    calculator_host: str | None = None
    property_host: str | None = None
    user_host: str | None = None
    event_sink_host: str | None = None
    kafka_bootstrap_servers: str | None = None
    http_timeout_seconds: float = 30.0

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.max_search_limit < 1:
            raise ConfigurationError(
                "max_search_limit",
                self.max_search_limit,
                f"CONFIGURATION_ERROR: max_search_limit must be positive, got {self.max_search_limit}",
            )
        if not 1 <= self.default_limit <= self.max_search_limit:
            raise ConfigurationError(
                "default_limit",
                self.default_limit,
                f"CONFIGURATION_ERROR: default_limit must be between 1 and "
                f"{self.max_search_limit}, got {self.default_limit}",
            )
        if self.default_offset < 0:
            raise ConfigurationError(
                "default_offset",
                self.default_offset,
                f"CONFIGURATION_ERROR: default_offset must be non-negative, got {self.default_offset}",
            )
        if not self.demand_trigger_state.strip():
            raise ConfigurationError("demand_trigger_state", self.demand_trigger_state)
        if self.http_timeout_seconds <= 0:
            raise ConfigurationError("http_timeout_seconds", self.http_timeout_seconds)

    def is_demand_trigger_state(self, state_name: str | None) -> bool:
        """Case-insensitive comparison against the demand trigger state."""
        return state_name is not None and state_name.lower() == self.demand_trigger_state.lower()

    @classmethod
    def from_environment(cls) -> "AssessmentConfig":
        """Create config from environment variables with defaults.

        Trigger lists are parsed into sets here, once.

        Returns:
            AssessmentConfig with values from environment or defaults.

        Raises:
            ConfigurationError: If any value is malformed.
        """
        return cls(
            workflow_enabled=_get_bool_env("ASSESSMENT_WORKFLOW_ENABLED", False),
            demand_trigger_state=os.environ.get(
                "ASSESSMENT_DEMAND_TRIGGER_STATE", DEFAULT_DEMAND_TRIGGER_STATE
            ),
            workflow_trigger_fields=parse_identifier_list(
                "ASSESSMENT_WORKFLOW_TRIGGER_FIELDS",
                os.environ.get("ASSESSMENT_WORKFLOW_TRIGGER_FIELDS"),
            ),
            workflow_trigger_objects=parse_identifier_list(
                "ASSESSMENT_WORKFLOW_TRIGGER_OBJECTS",
                os.environ.get("ASSESSMENT_WORKFLOW_TRIGGER_OBJECTS"),
            ),
            max_search_limit=_get_int_env("ASSESSMENT_MAX_SEARCH_LIMIT", 100),
            default_limit=_get_int_env("ASSESSMENT_DEFAULT_LIMIT", 10),
            default_offset=_get_int_env("ASSESSMENT_DEFAULT_OFFSET", 0),
            business_service=os.environ.get("ASSESSMENT_BUSINESS_SERVICE", DEFAULT_BUSINESS_SERVICE),
            create_topic=os.environ.get("ASSESSMENT_CREATE_TOPIC", DEFAULT_CREATE_TOPIC),
            update_topic=os.environ.get("ASSESSMENT_UPDATE_TOPIC", DEFAULT_UPDATE_TOPIC),
            workflow_host=os.environ.get("WORKFLOW_HOST") or None,
            billing_host=os.environ.get("BILLING_HOST") or None,
            calculator_host=os.environ.get("CALCULATOR_HOST") or None,
            property_host=os.environ.get("PROPERTY_HOST") or None,
            user_host=os.environ.get("USER_HOST") or None,
            event_sink_host=os.environ.get("EVENT_SINK_HOST") or None,
            kafka_bootstrap_servers=os.environ.get("KAFKA_BOOTSTRAP_SERVERS") or None,
            http_timeout_seconds=_get_float_env("ASSESSMENT_HTTP_TIMEOUT", 30.0),
        )


# Pre-defined configurations for common use cases

# Default production config (workflow disabled, no triggers)
DEFAULT_ASSESSMENT_CONFIG = AssessmentConfig()

# Testing config with workflow enabled and small pages
TEST_ASSESSMENT_CONFIG = AssessmentConfig(
    workflow_enabled=True,
    demand_trigger_state="APPROVED",
    workflow_trigger_fields=frozenset({"usage_category", "occupancy_type"}),
    workflow_trigger_objects=frozenset({"UnitUsage", "Document"}),
    max_search_limit=50,
    default_limit=10,
    default_offset=0,
)
