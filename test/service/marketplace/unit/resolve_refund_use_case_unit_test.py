from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from src.platform.exception.exceptions import InvalidStateTransitionError
from src.service.marketplace.app.command.resolve_refund_use_case import ResolveRefundUseCase
from src.service.marketplace.domain.entity.organizer_entity import OrganizerRequest
from src.service.marketplace.domain.enum.order_status import OrderStatus
from src.service.marketplace.domain.value_object.money import Money
from test.service.marketplace.fixtures import (
    ORGANIZER_ID,
    make_confirmed_order,
    make_festival_with_pista,
)


@pytest.fixture
def festival(upcoming_date):
    return make_festival_with_pista(event_date=upcoming_date)


@pytest.fixture
def refund_requested_order(festival):
    now = datetime.now(timezone.utc)
    order = make_confirmed_order(
        festival, quantity=3, ticket_type_id=festival.ticket_types[0].id, now=now
    )
    return order.request_refund(event_date=festival.event_date, now=now, window_days=7)


@pytest.fixture
def organizer():
    _, organizer = OrganizerRequest.submit(
        user_id=ORGANIZER_ID, organization_name='Sunset', contact_email='hi@sunset.example'
    ).approve()
    return organizer.record_sale(Money.of('450.00'))


@pytest.fixture
def payout_gateway() -> AsyncMock:
    gateway = AsyncMock()
    gateway.schedule_payout = AsyncMock(return_value='payout-1')
    return gateway


@pytest.fixture
def use_case(
    uow, inventory_lock, festival, refund_requested_order, organizer, payout_gateway
) -> ResolveRefundUseCase:
    uow.order_repo.get_by_id = AsyncMock(return_value=refund_requested_order)
    uow.event_repo.get_by_id = AsyncMock(return_value=festival)
    uow.organizer_repo.get_organizer_by_user_id = AsyncMock(return_value=organizer)
    return ResolveRefundUseCase(
        uow=uow, inventory_lock=inventory_lock, refund_payout_gateway=payout_gateway
    )


@pytest.mark.unit
class TestResolveRefund:
    @pytest.mark.asyncio
    async def test_approval_releases_inventory_and_pays_out(
        self, use_case, uow, festival, refund_requested_order, payout_gateway
    ):
        assert festival.available_tickets == 197

        resolved = await use_case.resolve(order_id=refund_requested_order.id, approve=True)

        assert resolved.status == OrderStatus.REFUND_APPROVED
        assert resolved.refund_amount == Money.of('445.50')
        assert festival.available_tickets == 200
        payout_gateway.schedule_payout.assert_awaited_once_with(
            order_id=resolved.id,
            purchase_id=resolved.purchase_id,
            amount=Money.of('445.50'),
        )
        saved_organizer = uow.organizer_repo.save_organizer.await_args.kwargs['organizer']
        assert saved_organizer.total_revenue == Money.zero()
        assert uow.commits == 1

    @pytest.mark.asyncio
    async def test_rejection_keeps_inventory(
        self, use_case, uow, festival, refund_requested_order, payout_gateway
    ):
        resolved = await use_case.resolve(
            order_id=refund_requested_order.id, approve=False, reason='Past policy'
        )

        assert resolved.status == OrderStatus.REFUND_REJECTED
        assert festival.available_tickets == 197
        payout_gateway.schedule_payout.assert_not_awaited()
        uow.event_repo.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_resolving_twice_fails(self, use_case, uow, refund_requested_order):
        resolved = await use_case.resolve(order_id=refund_requested_order.id, approve=True)
        uow.order_repo.get_by_id = AsyncMock(return_value=resolved)

        with pytest.raises(InvalidStateTransitionError):
            await use_case.resolve(order_id=refund_requested_order.id, approve=True)

        assert resolved.refund_amount.amount == Decimal('445.50')
