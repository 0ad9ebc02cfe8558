from datetime import date, timedelta
from decimal import Decimal

import pytest

from src.platform.exception.exceptions import InvalidStateTransitionError, ValidationError
from src.service.marketplace.domain.aggregate.event_aggregate import Event
from src.service.marketplace.domain.entity.caller_entity import Caller
from src.service.marketplace.domain.enum.approval_status import ApprovalStatus
from src.service.marketplace.domain.enum.user_role import UserRole
from src.service.marketplace.domain.inventory_ledger_domain import InventoryLedger
from src.service.marketplace.domain.value_object.money import Money
from test.service.marketplace.fixtures import (
    NOW,
    ORGANIZER_ID,
    make_event,
    make_festival_with_pista,
)


@pytest.mark.unit
class TestCreateEvent:
    def test_new_event_is_pending_and_visible(self):
        event = Event.create(
            title='Jazz Night',
            event_date=date(2026, 6, 1),
            location='Blue Room',
            price=Money.of('80'),
            total_tickets=120,
        )

        assert event.status == ApprovalStatus.PENDING
        assert event.is_visible
        assert event.available_tickets == 120
        assert not event.is_publicly_listed

    @pytest.mark.parametrize(
        'overrides',
        [
            {'title': ''},
            {'location': '   '},
            {'event_date': None},
            {'total_tickets': 0},
            {'total_tickets': 10, 'available_tickets': 11},
        ],
    )
    def test_invalid_event_is_rejected(self, overrides: dict):
        data = {
            'title': 'Jazz Night',
            'event_date': date(2026, 6, 1),
            'location': 'Blue Room',
            'price': Money.of('80'),
            'total_tickets': 120,
        }
        data.update(overrides)

        with pytest.raises(ValidationError):
            Event.create(**data)


@pytest.mark.unit
class TestTicketTypes:
    def test_event_aggregates_follow_ticket_types(self):
        event = make_event(total_tickets=1)
        event.add_ticket_type(
            name='Pista', price=Money.of('150'), total_tickets=250, available_tickets=200
        )
        event.add_ticket_type(name='Camarote', price=Money.of('300'), total_tickets=50)

        assert event.total_tickets == 300
        assert event.available_tickets == 250
        assert event.price == Money.of('150')

    def test_available_above_total_is_rejected(self):
        event = make_event()

        with pytest.raises(ValidationError, match='cannot exceed'):
            event.add_ticket_type(
                name='Pista', price=Money.of('150'), total_tickets=10, available_tickets=11
            )

    def test_duplicate_name_is_rejected(self):
        event = make_festival_with_pista()

        with pytest.raises(ValidationError):
            event.add_ticket_type(name='pista', price=Money.of('100'), total_tickets=10)

    def test_derived_figures(self):
        event = make_festival_with_pista()
        pista = event.ticket_types[0]

        assert pista.sold == 50
        assert str(pista.catalog_revenue) == '7500.00'
        assert pista.occupancy == Decimal('20.0')


@pytest.mark.unit
class TestBatches:
    def test_batches_become_canonical(self):
        event = make_event(total_tickets=1)
        pista = event.add_ticket_type(name='Pista', price=Money.of('150'), total_tickets=0)

        event.add_batch(
            ticket_type_id=pista.id,
            name='Lote 1',
            price=Money.of('120'),
            quantity=100,
            available_quantity=40,
            start_at=NOW,
            end_at=NOW + timedelta(days=7),
        )
        second = event.add_batch(
            ticket_type_id=pista.id,
            name='Lote 2',
            price=Money.of('140'),
            quantity=50,
            start_at=NOW + timedelta(days=7),
            end_at=NOW + timedelta(days=14),
        )

        assert second.sequence == 1
        assert pista.total_tickets == 150
        assert pista.available_tickets == 90
        assert event.total_tickets == 150
        assert event.available_tickets == 90

    def test_end_must_follow_start(self):
        event = make_event(total_tickets=1)
        pista = event.add_ticket_type(name='Pista', price=Money.of('150'), total_tickets=0)

        with pytest.raises(ValidationError):
            event.add_batch(
                ticket_type_id=pista.id,
                name='Lote 1',
                price=Money.of('120'),
                quantity=10,
                start_at=NOW,
                end_at=NOW,
            )

    def test_first_batch_after_type_sales_is_rejected(self):
        event = make_festival_with_pista()
        pista = event.ticket_types[0]
        InventoryLedger.reserve(event=event, quantity=1, now=NOW, ticket_type_id=pista.id)

        with pytest.raises(ValidationError):
            event.add_batch(
                ticket_type_id=pista.id,
                name='Lote 1',
                price=Money.of('120'),
                quantity=10,
                start_at=NOW,
                end_at=NOW + timedelta(days=1),
            )


@pytest.mark.unit
class TestModerationAndVisibility:
    def test_approve_lists_event(self):
        event = make_event(status=ApprovalStatus.PENDING)

        event.approve()

        assert event.is_publicly_listed

    def test_reject_requires_reason(self):
        event = make_event(status=ApprovalStatus.PENDING)

        with pytest.raises(ValidationError):
            event.reject(reason='  ')

        event.reject(reason='Missing venue permit')
        assert event.status == ApprovalStatus.REJECTED
        assert event.rejection_reason == 'Missing venue permit'

    def test_review_only_from_pending(self):
        event = make_event(status=ApprovalStatus.APPROVED)

        with pytest.raises(InvalidStateTransitionError):
            event.reject(reason='Too late')

    def test_legacy_event_without_status_is_listed(self):
        assert make_event(status=None).is_publicly_listed

    @pytest.mark.parametrize(
        'caller, visible',
        [
            (Caller(user_id=None), False),
            (Caller(user_id='someone-else', role=UserRole.ORGANIZER), False),
            (Caller(user_id=ORGANIZER_ID, role=UserRole.ORGANIZER), True),
            (Caller(user_id='admin-1', role=UserRole.ADMIN), True),
        ],
    )
    def test_pending_event_visibility(self, caller: Caller, visible: bool):
        event = make_event(status=ApprovalStatus.PENDING)

        assert event.is_visible_to(caller) is visible

    def test_hidden_event_is_not_listed(self):
        event = make_event()

        event.set_visibility(is_visible=False)

        assert not event.is_publicly_listed
        assert not event.is_visible_to(Caller(user_id='buyer-1'))
