"""Demand lifecycle service.

Retires demands whose tax period has elapsed when an assessment is
created or updated:

1. Fetch every demand raised against the assessment's property.
2. Cancel each demand whose tax_period_to is strictly before now.
3. Resubmit the entire fetched batch, untouched demands included, in one
   call.

Nothing is submitted when the fetch returns no demands. The resubmission
is all-or-nothing from the caller's side: a BillingServiceError fails the
enclosing create/update and there is no compensating retry.
"""

from __future__ import annotations

from src.application.ports.billing_service import BillingServiceProtocol
from src.application.ports.time_authority import TimeAuthorityProtocol, to_epoch_millis
from src.application.services.base import LoggingMixin
from src.domain.models.assessment import AssessmentRequest
from src.domain.models.demand import Demand, DemandStatus


class DemandLifecycleService(LoggingMixin):
    """Retires stale demands for an assessment's billing account."""

    def __init__(
        self,
        billing_service: BillingServiceProtocol,
        time_authority: TimeAuthorityProtocol,
    ) -> None:
        """Initialize the service.

        Args:
            billing_service: Billing collaborator owning the demands.
            time_authority: Source of "now" for staleness checks.
        """
        self._billing = billing_service
        self._time = time_authority
        self._init_logger()

    async def retire_stale_demands(self, request: AssessmentRequest) -> list[Demand]:
        """Cancel elapsed demands and resubmit the fetched batch.

        Args:
            request: The create/update request identifying the property.

        Returns:
            The batch as resubmitted (empty if nothing was fetched).

        Raises:
            BillingServiceError: If the fetch or the update fails.
        """
        log = self._log_operation(
            "retire_stale_demands",
            property_id=request.assessment.property_id,
            tenant_id=request.assessment.tenant_id,
        )

        demands = await self._billing.fetch_demands(request)
        if not demands:
            log.debug("no_demands_found")
            return []

        now_ms = to_epoch_millis(self._time.utcnow())
        cancelled = 0
        for demand in demands:
            if demand.is_stale(now_ms):
                demand.status = DemandStatus.CANCELLED
                cancelled += 1

        await self._billing.update_demands(request.request_info, demands)

        log.info(
            "stale_demands_retired",
            fetched=len(demands),
            cancelled=cancelled,
        )
        return demands
