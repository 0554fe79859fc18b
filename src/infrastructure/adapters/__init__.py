"""Infrastructure adapters.

Adapters implement the ports defined in the application layer against
real collaborators: httpx clients for the HTTP services, a confluent-kafka
producer for assessment events, and SQLAlchemy for the assessment tables.
"""

__all__: list[str] = []
