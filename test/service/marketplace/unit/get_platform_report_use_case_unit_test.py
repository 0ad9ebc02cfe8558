from unittest.mock import AsyncMock

import pytest

from src.platform.exception.exceptions import ForbiddenError
from src.service.marketplace.app.query.get_platform_report_use_case import (
    GetPlatformReportUseCase,
)
from src.service.marketplace.domain.entity.caller_entity import Caller
from src.service.marketplace.domain.enum.order_status import OrderStatus
from src.service.marketplace.domain.enum.user_role import UserRole
from test.service.marketplace.fixtures import (
    ORGANIZER_ID,
    make_confirmed_order,
    make_festival_with_pista,
)


@pytest.fixture
def festival():
    return make_festival_with_pista()


@pytest.fixture
def use_case(uow, festival) -> GetPlatformReportUseCase:
    uow.event_repo.list_events = AsyncMock(return_value=[festival])
    uow.order_repo.list_by_statuses = AsyncMock(
        return_value=[
            make_confirmed_order(
                festival, quantity=3, ticket_type_id=festival.ticket_types[0].id
            )
        ]
    )
    return GetPlatformReportUseCase(uow=uow)


@pytest.mark.unit
class TestGetPlatformReport:
    @pytest.mark.asyncio
    async def test_admin_sees_platform_totals(self, use_case, uow):
        report = await use_case.get_report(caller=Caller(user_id='admin-1', role=UserRole.ADMIN))

        assert report.tickets_sold == 3
        assert str(report.gross_revenue) == '450.00'
        assert str(report.platform_commission) == '22.50'
        statuses = uow.order_repo.list_by_statuses.await_args.kwargs['statuses']
        assert OrderStatus.REFUND_APPROVED in statuses
        assert OrderStatus.RESERVED not in statuses

    @pytest.mark.asyncio
    async def test_organizer_is_forbidden(self, use_case, uow):
        with pytest.raises(ForbiddenError):
            await use_case.get_report(caller=Caller(user_id=ORGANIZER_ID, role=UserRole.ORGANIZER))

        uow.order_repo.list_by_statuses.assert_not_awaited()
