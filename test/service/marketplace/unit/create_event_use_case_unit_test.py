from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from src.platform.exception.exceptions import ForbiddenError, ValidationError
from src.service.marketplace.app.command.create_event_use_case import CreateEventUseCase
from src.service.marketplace.domain.entity.caller_entity import Caller
from src.service.marketplace.domain.entity.commission_settings_entity import CommissionSettings
from src.service.marketplace.domain.entity.organizer_entity import OrganizerRequest
from src.service.marketplace.domain.enum.approval_status import ApprovalStatus
from src.service.marketplace.domain.enum.user_role import UserRole
from test.service.marketplace.fixtures import ORGANIZER_ID


@pytest.fixture
def organizer():
    _, organizer = OrganizerRequest.submit(
        user_id=ORGANIZER_ID, organization_name='Sunset', contact_email='hi@sunset.example'
    ).approve()
    return organizer


@pytest.fixture
def use_case(uow, organizer) -> CreateEventUseCase:
    uow.organizer_repo.get_organizer_by_user_id = AsyncMock(return_value=organizer)
    uow.commission_settings_repo.get = AsyncMock(
        return_value=CommissionSettings.create(
            default_rate=Decimal('5'), category_rates={'Sports': Decimal('8')}
        )
    )
    return CreateEventUseCase(uow=uow)


def _create(use_case: CreateEventUseCase, caller: Caller, upcoming_date, **overrides):
    params = dict(
        caller=caller,
        title='Summer Fest',
        event_date=upcoming_date,
        location='Riverside Park',
        price=Decimal('150'),
        total_tickets=250,
        category='music',
    )
    params.update(overrides)
    return use_case.create_event(**params)


@pytest.mark.unit
class TestCreateEvent:
    @pytest.mark.asyncio
    async def test_organizer_creates_pending_event(self, use_case, uow, upcoming_date):
        caller = Caller(user_id=ORGANIZER_ID, role=UserRole.ORGANIZER)

        event = await _create(use_case, caller, upcoming_date)

        assert event.status == ApprovalStatus.PENDING
        assert event.organizer_id == ORGANIZER_ID
        assert event.available_tickets == 250
        assert event.commission_rate == Decimal('5')
        uow.event_repo.save.assert_awaited_once_with(event=event)
        saved = uow.organizer_repo.save_organizer.await_args.kwargs['organizer']
        assert saved.total_events == 1
        assert uow.commits == 1

    @pytest.mark.asyncio
    async def test_category_rate_captured_at_creation(self, use_case, upcoming_date):
        caller = Caller(user_id='admin-1', role=UserRole.ADMIN)

        event = await _create(use_case, caller, upcoming_date, category=' sports ')

        assert event.commission_rate == Decimal('8')
        assert event.organizer_id is None

    @pytest.mark.asyncio
    async def test_user_without_organizer_record_is_forbidden(self, use_case, uow, upcoming_date):
        uow.organizer_repo.get_organizer_by_user_id = AsyncMock(return_value=None)
        caller = Caller(user_id='someone', role=UserRole.ORGANIZER)

        with pytest.raises(ForbiddenError):
            await _create(use_case, caller, upcoming_date)

        uow.event_repo.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_suspended_organizer_is_forbidden(self, use_case, uow, organizer, upcoming_date):
        uow.organizer_repo.get_organizer_by_user_id = AsyncMock(
            return_value=organizer.suspend(reason='chargebacks')
        )
        caller = Caller(user_id=ORGANIZER_ID, role=UserRole.ORGANIZER)

        with pytest.raises(ForbiddenError):
            await _create(use_case, caller, upcoming_date)

    @pytest.mark.asyncio
    async def test_plain_user_is_forbidden(self, use_case, upcoming_date):
        with pytest.raises(ForbiddenError):
            await _create(use_case, Caller(user_id='buyer-1'), upcoming_date)

    @pytest.mark.asyncio
    async def test_invalid_totals_rejected(self, use_case, uow, upcoming_date):
        caller = Caller(user_id=ORGANIZER_ID, role=UserRole.ORGANIZER)

        with pytest.raises(ValidationError):
            await _create(use_case, caller, upcoming_date, total_tickets=0)

        assert uow.commits == 0
