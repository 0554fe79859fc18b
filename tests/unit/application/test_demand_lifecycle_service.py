"""Unit tests for DemandLifecycleService."""

from unittest.mock import AsyncMock

import pytest

from src.application.services.demand_lifecycle_service import DemandLifecycleService
from src.domain.errors.billing import BillingServiceError
from src.domain.models.demand import DemandStatus
from tests.helpers import FakeTimeAuthority
from tests.helpers.builders import make_demand, make_request


@pytest.fixture
def mock_billing() -> AsyncMock:
    billing = AsyncMock()
    billing.update_demands.side_effect = lambda info, demands: demands
    return billing


@pytest.fixture
def service(
    mock_billing: AsyncMock, fake_time_authority: FakeTimeAuthority
) -> DemandLifecycleService:
    return DemandLifecycleService(
        billing_service=mock_billing, time_authority=fake_time_authority
    )


class TestRetireStaleDemands:
    @pytest.mark.asyncio
    async def test_no_demands_means_no_update(
        self, service: DemandLifecycleService, mock_billing: AsyncMock
    ) -> None:
        mock_billing.fetch_demands.return_value = []

        result = await service.retire_stale_demands(make_request())

        assert result == []
        mock_billing.update_demands.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_stale_demands_cancelled_and_full_batch_resubmitted(
        self,
        service: DemandLifecycleService,
        mock_billing: AsyncMock,
        fake_time_authority: FakeTimeAuthority,
    ) -> None:
        now = fake_time_authority.now_millis()
        stale = make_demand("d-stale", tax_period_to=now - 1)
        current = make_demand("d-current", tax_period_to=now + 86_400_000)
        mock_billing.fetch_demands.return_value = [stale, current]
        request = make_request()

        result = await service.retire_stale_demands(request)

        mock_billing.update_demands.assert_awaited_once()
        info, submitted = mock_billing.update_demands.await_args.args
        assert info is request.request_info
        assert [d.id for d in submitted] == ["d-stale", "d-current"]
        assert submitted[0].status == DemandStatus.CANCELLED
        assert submitted[1].status == DemandStatus.ACTIVE
        assert result == submitted

    @pytest.mark.asyncio
    async def test_period_ending_exactly_now_is_kept(
        self,
        service: DemandLifecycleService,
        mock_billing: AsyncMock,
        fake_time_authority: FakeTimeAuthority,
    ) -> None:
        demand = make_demand("d-edge", tax_period_to=fake_time_authority.now_millis())
        mock_billing.fetch_demands.return_value = [demand]

        await service.retire_stale_demands(make_request())

        submitted = mock_billing.update_demands.await_args.args[1]
        assert submitted[0].status == DemandStatus.ACTIVE

    @pytest.mark.asyncio
    async def test_batch_resubmitted_even_when_nothing_is_stale(
        self,
        service: DemandLifecycleService,
        mock_billing: AsyncMock,
        fake_time_authority: FakeTimeAuthority,
    ) -> None:
        demand = make_demand("d-future", tax_period_to=fake_time_authority.now_millis() + 1)
        mock_billing.fetch_demands.return_value = [demand]

        await service.retire_stale_demands(make_request())

        mock_billing.update_demands.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_advancing_time_makes_demand_stale(
        self,
        service: DemandLifecycleService,
        mock_billing: AsyncMock,
        fake_time_authority: FakeTimeAuthority,
    ) -> None:
        demand = make_demand("d-1", tax_period_to=fake_time_authority.now_millis() + 1000)
        fake_time_authority.advance(seconds=2)
        mock_billing.fetch_demands.return_value = [demand]

        await service.retire_stale_demands(make_request())

        assert mock_billing.update_demands.await_args.args[1][0].status == DemandStatus.CANCELLED

    @pytest.mark.asyncio
    async def test_update_failure_propagates(
        self,
        service: DemandLifecycleService,
        mock_billing: AsyncMock,
        fake_time_authority: FakeTimeAuthority,
    ) -> None:
        mock_billing.fetch_demands.return_value = [make_demand("d-1", tax_period_to=1)]
        mock_billing.update_demands.side_effect = BillingServiceError("update", status_code=500)

        with pytest.raises(BillingServiceError):
            await service.retire_stale_demands(make_request())
