from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import anyio
import pytest

from src.service.marketplace.app.command.expire_reservations_use_case import (
    ExpireReservationsUseCase,
)
from src.service.marketplace.domain.enum.order_status import OrderStatus
from test.service.marketplace.fixtures import make_festival_with_pista, make_reserved_order


@pytest.fixture
def festival(upcoming_date):
    return make_festival_with_pista(event_date=upcoming_date)


@pytest.fixture
def reserved_at() -> datetime:
    return datetime.now(timezone.utc) - timedelta(minutes=20)


@pytest.fixture
def overdue_order(festival, reserved_at):
    return make_reserved_order(
        festival, quantity=2, ticket_type_id=festival.ticket_types[0].id, now=reserved_at
    )


@pytest.fixture
def use_case(uow, inventory_lock, festival, overdue_order) -> ExpireReservationsUseCase:
    uow.order_repo.list_expired_reservations = AsyncMock(return_value=[overdue_order])
    uow.order_repo.get_by_id = AsyncMock(return_value=overdue_order)
    uow.event_repo.get_by_id = AsyncMock(return_value=festival)
    return ExpireReservationsUseCase(uow=uow, inventory_lock=inventory_lock)


@pytest.mark.unit
class TestExpireReservations:
    @pytest.mark.asyncio
    async def test_overdue_reservation_returns_tickets(self, use_case, uow, festival):
        assert festival.ticket_types[0].available_tickets == 198

        expired = await use_case.expire_overdue()

        assert [order.status for order in expired] == [OrderStatus.EXPIRED]
        assert festival.ticket_types[0].available_tickets == 200
        uow.order_repo.save.assert_awaited_once_with(order=expired[0])
        assert uow.commits == 1

    @pytest.mark.asyncio
    async def test_order_confirmed_meanwhile_is_left_alone(
        self, use_case, uow, festival, overdue_order
    ):
        uow.order_repo.get_by_id = AsyncMock(
            return_value=overdue_order.confirm_payment(now=overdue_order.created_at)
        )

        expired = await use_case.expire_overdue()

        assert expired == []
        assert festival.ticket_types[0].available_tickets == 198
        assert uow.commits == 0

    @pytest.mark.asyncio
    async def test_busy_counter_is_skipped_until_next_sweep(
        self, use_case, uow, inventory_lock, festival, overdue_order
    ):
        held = anyio.Event()
        done = anyio.Event()

        async def hold_counter() -> None:
            async with inventory_lock.hold(key=overdue_order.allocation.lock_key):
                held.set()
                await done.wait()

        async with anyio.create_task_group() as tg:
            tg.start_soon(hold_counter)
            await held.wait()
            expired = await use_case.expire_overdue()
            done.set()

        assert expired == []
        assert festival.ticket_types[0].available_tickets == 198
        assert uow.commits == 0
