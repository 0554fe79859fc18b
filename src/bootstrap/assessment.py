"""Bootstrap wiring for the assessment lifecycle.

Each collaborator is a module-level singleton. A configured host
(DATABASE_URL for the store, KAFKA_BOOTSTRAP_SERVERS for the event bus)
selects the real adapter; otherwise the in-memory stub is used so the
service runs without its collaborators.

Usage:
    from src.bootstrap.assessment import get_assessment_orchestrator

    orchestrator = get_assessment_orchestrator()
    assessment = await orchestrator.create_assessment(request)
"""

from __future__ import annotations

import os
from typing import Any

import httpx
from sqlalchemy.exc import SQLAlchemyError
from structlog import get_logger

from src.application.ports.assessment_number_generator import (
    AssessmentNumberGeneratorProtocol,
)
from src.application.ports.assessment_store import AssessmentStoreProtocol
from src.application.ports.billing_service import BillingServiceProtocol
from src.application.ports.event_bus import EventBusProtocol
from src.application.ports.property_resolver import PropertyResolverProtocol
from src.application.ports.tax_calculator import TaxCalculatorProtocol
from src.application.ports.time_authority import TimeAuthorityProtocol
from src.application.ports.user_directory import UserDirectoryProtocol
from src.application.ports.workflow_engine import WorkflowEngineProtocol
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
from src.application.services.time_authority_service import SystemTimeAuthority
from src.application.services.workflow_state_sync_service import (
    WorkflowStateSyncService,
)
from src.bootstrap.database import close_database_engine
from src.config.assessment_config import AssessmentConfig
from src.infrastructure.adapters.http import (
    HttpBillingService,
    HttpEventBus,
    HttpPropertyResolver,
    HttpTaxCalculator,
    HttpUserDirectory,
    HttpWorkflowEngine,
)
from src.infrastructure.adapters.messaging import KafkaEventBus
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

logger = get_logger()

_config: AssessmentConfig | None = None
_http_client: httpx.AsyncClient | None = None
_time_authority: TimeAuthorityProtocol | None = None
_assessment_store: AssessmentStoreProtocol | None = None
_property_resolver: PropertyResolverProtocol | None = None
_workflow_engine: WorkflowEngineProtocol | None = None
_billing_service: BillingServiceProtocol | None = None
_tax_calculator: TaxCalculatorProtocol | None = None
_event_bus: EventBusProtocol | None = None
_user_directory: UserDirectoryProtocol | None = None
_number_generator: AssessmentNumberGeneratorProtocol | None = None
_orchestrator: AssessmentLifecycleOrchestrator | None = None


def get_assessment_config() -> AssessmentConfig:
    """Get assessment configuration (read from the environment once)."""
    global _config
    if _config is None:
        _config = AssessmentConfig.from_environment()
        logger.info(
            "assessment_config_loaded",
            workflow_enabled=_config.workflow_enabled,
            demand_trigger_state=_config.demand_trigger_state,
            trigger_fields=sorted(_config.workflow_trigger_fields),
            trigger_objects=sorted(_config.workflow_trigger_objects),
        )
    return _config


def get_http_client() -> httpx.AsyncClient:
    """Shared AsyncClient for every HTTP collaborator."""
    global _http_client
    if _http_client is None:
        _http_client = httpx.AsyncClient(
            timeout=get_assessment_config().http_timeout_seconds
        )
    return _http_client


def get_time_authority() -> TimeAuthorityProtocol:
    global _time_authority
    if _time_authority is None:
        _time_authority = SystemTimeAuthority()
    return _time_authority


def get_assessment_store() -> AssessmentStoreProtocol:
    """Get the assessment store.

    Returns the PostgreSQL store if DATABASE_URL is configured, otherwise
    falls back to the in-memory stub.
    """
    global _assessment_store
    if _assessment_store is None:
        if os.environ.get("DATABASE_URL"):
            try:
                from src.bootstrap.database import get_session_factory
                from src.infrastructure.adapters.persistence import (
                    PostgresAssessmentStore,
                )

                _assessment_store = PostgresAssessmentStore(
                    session_factory=get_session_factory()
                )
                logger.info("assessment_store_initialized", store_type="PostgreSQL")
            except (ValueError, SQLAlchemyError) as e:
                logger.error(
                    "postgres_store_init_failed",
                    error=str(e),
                    message="Falling back to in-memory stub",
                )
                _assessment_store = AssessmentStoreStub()
        else:
            logger.warning(
                "assessment_store_initialized",
                store_type="in-memory",
                message="DATABASE_URL not set, using in-memory stub",
            )
            _assessment_store = AssessmentStoreStub()
    return _assessment_store


def _adapter_or_stub(name: str, host: str | None, adapter: type, stub: type) -> Any:
    if host:
        logger.info("collaborator_initialized", collaborator=name, host=host)
        return adapter(host, client=get_http_client())
    logger.warning(
        "collaborator_initialized",
        collaborator=name,
        message="host not configured, using in-memory stub",
    )
    return stub()


def get_property_resolver() -> PropertyResolverProtocol:
    global _property_resolver
    if _property_resolver is None:
        _property_resolver = _adapter_or_stub(
            "property_registry",
            get_assessment_config().property_host,
            HttpPropertyResolver,
            PropertyResolverStub,
        )
    return _property_resolver


def get_workflow_engine() -> WorkflowEngineProtocol:
    global _workflow_engine
    if _workflow_engine is None:
        _workflow_engine = _adapter_or_stub(
            "workflow_engine",
            get_assessment_config().workflow_host,
            HttpWorkflowEngine,
            WorkflowEngineStub,
        )
    return _workflow_engine


def get_billing_service() -> BillingServiceProtocol:
    global _billing_service
    if _billing_service is None:
        _billing_service = _adapter_or_stub(
            "billing_service",
            get_assessment_config().billing_host,
            HttpBillingService,
            BillingServiceStub,
        )
    return _billing_service


def get_tax_calculator() -> TaxCalculatorProtocol:
    global _tax_calculator
    if _tax_calculator is None:
        _tax_calculator = _adapter_or_stub(
            "tax_calculator",
            get_assessment_config().calculator_host,
            HttpTaxCalculator,
            TaxCalculatorStub,
        )
    return _tax_calculator


def get_event_bus() -> EventBusProtocol:
    """Kafka when KAFKA_BOOTSTRAP_SERVERS is set, else the HTTP sink or the stub."""
    global _event_bus
    if _event_bus is None:
        config = get_assessment_config()
        if config.kafka_bootstrap_servers:
            _event_bus = KafkaEventBus(config.kafka_bootstrap_servers)
            logger.info(
                "collaborator_initialized",
                collaborator="event_bus",
                brokers=config.kafka_bootstrap_servers,
            )
        else:
            _event_bus = _adapter_or_stub(
                "event_sink",
                config.event_sink_host,
                HttpEventBus,
                EventBusStub,
            )
    return _event_bus


def get_user_directory() -> UserDirectoryProtocol:
    global _user_directory
    if _user_directory is None:
        _user_directory = _adapter_or_stub(
            "user_directory",
            get_assessment_config().user_host,
            HttpUserDirectory,
            UserDirectoryStub,
        )
    return _user_directory


def get_number_generator() -> AssessmentNumberGeneratorProtocol:
    """Get the assessment number generator.

    Uses the database sequence when DATABASE_URL is configured; the
    in-process counter is for development only.
    """
    global _number_generator
    if _number_generator is None:
        if os.environ.get("DATABASE_URL"):
            try:
                from src.bootstrap.database import get_session_factory
                from src.infrastructure.adapters.persistence import (
                    PostgresAssessmentNumberGenerator,
                )

                _number_generator = PostgresAssessmentNumberGenerator(
                    session_factory=get_session_factory()
                )
                logger.info("number_generator_initialized", generator_type="sequence")
            except (ValueError, SQLAlchemyError) as e:
                logger.error(
                    "number_generator_init_failed",
                    error=str(e),
                    message="Falling back to in-process counter",
                )
                _number_generator = AssessmentNumberGeneratorStub()
        else:
            logger.warning(
                "number_generator_initialized",
                generator_type="in-process",
                message="DATABASE_URL not set, numbers restart with the process",
            )
            _number_generator = AssessmentNumberGeneratorStub()
    return _number_generator


def get_assessment_orchestrator() -> AssessmentLifecycleOrchestrator:
    """Get the fully wired assessment lifecycle orchestrator."""
    global _orchestrator
    if _orchestrator is None:
        config = get_assessment_config()
        time_authority = get_time_authority()
        store = get_assessment_store()
        _orchestrator = AssessmentLifecycleOrchestrator(
            config=config,
            property_resolver=get_property_resolver(),
            validator=AssessmentValidator(config),
            enrichment=AssessmentEnrichmentService(
                get_number_generator(), time_authority, config
            ),
            store=store,
            search_service=AssessmentSearchService(store, get_user_directory(), config),
            workflow_sync=WorkflowStateSyncService(get_workflow_engine()),
            calculation=CalculationTriggerService(get_tax_calculator()),
            demand_lifecycle=DemandLifecycleService(get_billing_service(), time_authority),
            event_publisher=AssessmentEventPublisher(
                get_event_bus(), config.create_topic, config.update_topic
            ),
        )
    return _orchestrator


async def shutdown_assessment_dependencies() -> None:
    """Flush background event deliveries, then close HTTP and DB resources."""
    global _http_client
    if isinstance(_event_bus, (HttpEventBus, KafkaEventBus)):
        await _event_bus.drain()
    if _http_client is not None:
        await _http_client.aclose()
        _http_client = None
    await close_database_engine()


def reset_assessment_dependencies() -> None:
    """Reset all singletons (for testing)."""
    global _config, _http_client, _time_authority, _assessment_store
    global _property_resolver, _workflow_engine, _billing_service
    global _tax_calculator, _event_bus, _user_directory
    global _number_generator, _orchestrator
    _config = None
    _http_client = None
    _time_authority = None
    _assessment_store = None
    _property_resolver = None
    _workflow_engine = None
    _billing_service = None
    _tax_calculator = None
    _event_bus = None
    _user_directory = None
    _number_generator = None
    _orchestrator = None
