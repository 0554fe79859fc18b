"""Message broker adapters."""

from src.infrastructure.adapters.messaging.kafka_event_bus import KafkaEventBus

__all__: list[str] = ["KafkaEventBus"]
