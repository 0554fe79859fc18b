"""Property reference resolved for an assessment."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from src.domain.models.assessment import OwnerInfo


@dataclass(frozen=True)
class Property:
    """The property an assessment is raised against.

    Only the attributes the assessment flow reads are modeled; the rest
    travels opaquely in additional_details.
    """

    property_id: str
    tenant_id: str
    status: str = "ACTIVE"
    id: str | None = None
    account_id: str | None = None
    old_property_id: str | None = None
    owners: tuple[OwnerInfo, ...] = ()
    additional_details: dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def is_active(self) -> bool:
        """Whether the property is ACTIVE."""
        return self.status == "ACTIVE"
