"""Demand model.

A demand is a billable claim tied to a tax period. Demands are created by
the billing service; the assessment service only reads them and flips
their status. A demand whose tax_period_to has elapsed is stale and must
be CANCELLED before a new assessment cycle becomes authoritative.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any


class DemandStatus(str, Enum):
    """Status of a demand."""

    ACTIVE = "ACTIVE"
    CANCELLED = "CANCELLED"
    ADJUSTED = "ADJUSTED"


@dataclass
class DemandDetail:
    """One tax head line on a demand (amounts are opaque here)."""

    tax_head_master_code: str
    tax_amount: Decimal = Decimal("0")
    collection_amount: Decimal = Decimal("0")
    id: str | None = None


@dataclass
class Demand:
    """A demand for one tax period.

    Attributes:
        tax_period_from: Period start, epoch milliseconds.
        tax_period_to: Period end, epoch milliseconds.
        consumer_code: The property id the demand is raised against.
    """

    id: str | None
    tenant_id: str
    consumer_code: str
    tax_period_from: int
    tax_period_to: int
    status: DemandStatus = DemandStatus.ACTIVE
    business_service: str = "PT"
    consumer_type: str | None = None
    demand_details: list[DemandDetail] = field(default_factory=list)
    additional_details: dict[str, Any] | None = None

    def is_stale(self, now_ms: int) -> bool:
        """A demand is stale once its tax period has strictly elapsed."""
        return self.tax_period_to < now_ms
