"""Assessment number generator port."""

from __future__ import annotations

from typing import Protocol


class AssessmentNumberGeneratorProtocol(Protocol):
    """Protocol for generating human-facing assessment numbers."""

    async def next_number(self, tenant_id: str | None) -> str:
        """Return a new, unique assessment number for the tenant."""
        ...
