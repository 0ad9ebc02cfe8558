from datetime import timedelta

import pytest

from src.platform.exception.exceptions import InsufficientInventoryError, ValidationError
from src.service.marketplace.domain.inventory_ledger_domain import InventoryLedger
from src.service.marketplace.domain.value_object.allocation import Allocation
from src.service.marketplace.domain.value_object.money import Money
from test.service.marketplace.fixtures import NOW, make_event, make_festival_with_pista


def _add_two_batches(event, *, first_available: int = 100):
    pista = event.ticket_types[0]
    batch_a = event.add_batch(
        ticket_type_id=pista.id,
        name='Lote A',
        price=Money.of('100'),
        quantity=100,
        available_quantity=first_available,
        start_at=NOW - timedelta(days=10),
        end_at=NOW + timedelta(days=10),
    )
    batch_b = event.add_batch(
        ticket_type_id=pista.id,
        name='Lote B',
        price=Money.of('130'),
        quantity=100,
        start_at=NOW - timedelta(days=10),
        end_at=NOW + timedelta(days=20),
    )
    return pista, batch_a, batch_b


@pytest.fixture
def batched_event():
    event = make_event(total_tickets=1)
    event.add_ticket_type(name='Pista', price=Money.of('150'), total_tickets=0)
    return event


@pytest.mark.unit
class TestActiveBatch:
    def test_exhausted_batch_is_skipped(self, batched_event):
        pista, _, batch_b = _add_two_batches(batched_event, first_available=0)

        assert InventoryLedger.active_batch(pista, NOW) == batch_b

    def test_first_batch_in_sequence_wins(self, batched_event):
        pista, batch_a, _ = _add_two_batches(batched_event)

        assert InventoryLedger.active_batch(pista, NOW) == batch_a

    def test_window_end_is_exclusive(self, batched_event):
        pista = batched_event.ticket_types[0]
        batched_event.add_batch(
            ticket_type_id=pista.id,
            name='Early bird',
            price=Money.of('90'),
            quantity=10,
            start_at=NOW - timedelta(days=1),
            end_at=NOW,
        )

        assert InventoryLedger.active_batch(pista, NOW) is None
        assert InventoryLedger.active_batch(pista, NOW - timedelta(seconds=1)) is not None

    def test_progression_is_monotonic_while_selling(self, batched_event):
        pista, batch_a, batch_b = _add_two_batches(batched_event, first_available=2)

        InventoryLedger.reserve(event=batched_event, quantity=2, now=NOW, ticket_type_id=pista.id)
        assert InventoryLedger.active_batch(pista, NOW) == batch_b

        InventoryLedger.reserve(event=batched_event, quantity=5, now=NOW, ticket_type_id=pista.id)
        assert InventoryLedger.active_batch(pista, NOW) == batch_b
        assert batch_a.available_quantity == 0


@pytest.mark.unit
class TestReserve:
    def test_festival_pista_scenario(self):
        event = make_festival_with_pista()
        pista = event.ticket_types[0]

        allocation = InventoryLedger.reserve(
            event=event, quantity=3, now=NOW, ticket_type_id=pista.id
        )

        assert pista.available_tickets == 197
        assert event.available_tickets == 197
        assert allocation == Allocation(event_id=event.id, quantity=3, ticket_type_id=pista.id)
        assert allocation.lock_key == f'event:{event.id}'

    def test_flat_event_uses_event_counters(self):
        event = make_event(total_tickets=10)

        allocation = InventoryLedger.reserve(event=event, quantity=4, now=NOW)

        assert event.available_tickets == 6
        assert allocation.ticket_type_id is None
        assert allocation.lock_key == f'event:{event.id}'

    def test_batch_decrement_cascades_to_type_and_event(self, batched_event):
        pista, batch_a, _ = _add_two_batches(batched_event)

        allocation = InventoryLedger.reserve(
            event=batched_event, quantity=5, now=NOW, ticket_type_id=pista.id
        )

        assert allocation.batch_id == batch_a.id
        assert batch_a.available_quantity == 95
        assert pista.available_tickets == 195
        assert batched_event.available_tickets == 195
        assert batched_event.total_tickets == 200

    def test_insufficient_inventory_leaves_counters_untouched(self):
        event = make_festival_with_pista()
        pista = event.ticket_types[0]

        with pytest.raises(InsufficientInventoryError):
            InventoryLedger.reserve(event=event, quantity=201, now=NOW, ticket_type_id=pista.id)

        assert pista.available_tickets == 200
        assert event.available_tickets == 200

    def test_no_active_batch_is_insufficient_inventory(self, batched_event):
        pista, _, _ = _add_two_batches(batched_event)

        with pytest.raises(InsufficientInventoryError):
            InventoryLedger.reserve(
                event=batched_event,
                quantity=1,
                now=NOW + timedelta(days=30),
                ticket_type_id=pista.id,
            )

    def test_quantity_must_be_positive(self):
        event = make_event()

        with pytest.raises(ValidationError):
            InventoryLedger.reserve(event=event, quantity=0, now=NOW)

    def test_typed_event_requires_ticket_type(self):
        event = make_festival_with_pista()

        with pytest.raises(ValidationError):
            InventoryLedger.reserve(event=event, quantity=1, now=NOW)


@pytest.mark.unit
class TestRelease:
    def test_round_trip_restores_all_counters(self, batched_event):
        pista, batch_a, _ = _add_two_batches(batched_event)

        def counters():
            return (
                batch_a.available_quantity,
                pista.available_tickets,
                batched_event.available_tickets,
            )

        before = counters()

        allocation = InventoryLedger.reserve(
            event=batched_event, quantity=7, now=NOW, ticket_type_id=pista.id
        )
        restored = InventoryLedger.release(event=batched_event, allocation=allocation)

        assert restored == 7
        assert counters() == before

    def test_flat_round_trip(self):
        event = make_event(total_tickets=10)

        allocation = InventoryLedger.reserve(event=event, quantity=3, now=NOW)
        InventoryLedger.release(event=event, allocation=allocation)

        assert event.available_tickets == 10

    def test_overflow_is_clamped_not_raised(self):
        event = make_festival_with_pista()
        pista = event.ticket_types[0]

        restored = InventoryLedger.release(
            event=event,
            allocation=Allocation(event_id=event.id, quantity=80, ticket_type_id=pista.id),
        )

        assert restored == 50
        assert pista.available_tickets == pista.total_tickets == 250
        assert event.available_tickets == 250
