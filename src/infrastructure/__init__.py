"""
Infrastructure layer - Adapters, stubs and observability.

This layer contains:
- HTTP adapters (httpx) for workflow, billing, calculator, property,
  user directory and the event sink
- PostgreSQL assessment store (SQLAlchemy)
- In-memory stubs for every port
- structlog configuration and correlation id propagation

IMPORT RULES:
- CAN import from: domain, application
- Implements ports defined in application layer
"""
