"""
Inventory Ledger Domain
Pure stock accounting for events, ticket types and batches; no locks, no storage.

Callers hold the inventory lock for the allocation's key around reserve/release
and persist the event afterwards.
"""

from datetime import datetime
from typing import Optional

from src.platform.exception.exceptions import InsufficientInventoryError, ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.domain.aggregate.event_aggregate import Event
from src.service.marketplace.domain.entity.ticket_batch_entity import TicketBatch
from src.service.marketplace.domain.entity.ticket_type_entity import TicketType
from src.service.marketplace.domain.value_object.allocation import Allocation


class InventoryLedger:
    @staticmethod
    def active_batch(ticket_type: TicketType, now: datetime) -> Optional[TicketBatch]:
        """Earliest batch (by sequence) that is inside its window and still has stock"""
        for batch in sorted(ticket_type.batches, key=lambda b: b.sequence):
            if batch.is_sellable(now):
                return batch
        return None

    @classmethod
    @Logger.io
    def reserve(
        cls,
        *,
        event: Event,
        quantity: int,
        now: datetime,
        ticket_type_id: Optional[str] = None,
    ) -> Allocation:
        """
        Take `quantity` tickets from the finest counter that owns them

        Every check runs before the single decrement, so a failure leaves all
        counters untouched.

        Raises:
            ValidationError: quantity < 1 or missing ticket type on a typed event
            InsufficientInventoryError: not enough stock in the selected counter
            NotFoundError: unknown ticket type
        """
        if quantity < 1:
            raise ValidationError('Quantity must be at least 1')

        if ticket_type_id is None:
            if event.ticket_types:
                raise ValidationError(f'Event {event.title} sells by ticket type; ticket_type_id is required')
            if quantity > event.available_tickets:
                raise InsufficientInventoryError(
                    f'Only {event.available_tickets} tickets left for {event.title}'
                )
            event.available_tickets -= quantity
            return Allocation(event_id=event.id, quantity=quantity)

        ticket_type = event.get_ticket_type(ticket_type_id)

        if ticket_type.has_batches:
            batch = cls.active_batch(ticket_type, now)
            if batch is None:
                raise InsufficientInventoryError(f'No batch of {ticket_type.name} is on sale right now')
            if quantity > batch.available_quantity:
                raise InsufficientInventoryError(
                    f'Only {batch.available_quantity} tickets left in batch {batch.name} of {ticket_type.name}'
                )
            batch.available_quantity -= quantity
            event.recompute_aggregates()
            return Allocation(
                event_id=event.id,
                quantity=quantity,
                ticket_type_id=ticket_type.id,
                batch_id=batch.id,
            )

        if quantity > ticket_type.available_tickets:
            raise InsufficientInventoryError(
                f'Only {ticket_type.available_tickets} tickets left for {ticket_type.name}'
            )
        ticket_type.available_tickets -= quantity
        event.recompute_aggregates()
        return Allocation(event_id=event.id, quantity=quantity, ticket_type_id=ticket_type.id)

    @classmethod
    @Logger.io
    def release(cls, *, event: Event, allocation: Allocation) -> int:
        """
        Return an allocation to the counter it was taken from

        The restored amount is clamped at the counter's total; the excess is
        logged and dropped. Returns how many tickets were actually restored.
        """
        if allocation.ticket_type_id is None:
            restored = cls._clamp(
                requested=allocation.quantity,
                room=event.total_tickets - event.available_tickets,
                label=f'event {event.id}',
            )
            event.available_tickets += restored
            return restored

        ticket_type = event.get_ticket_type(allocation.ticket_type_id)
        if allocation.batch_id is not None:
            batch = ticket_type.get_batch(allocation.batch_id)
            restored = cls._clamp(
                requested=allocation.quantity,
                room=batch.quantity - batch.available_quantity,
                label=f'batch {batch.id}',
            )
            batch.available_quantity += restored
        else:
            restored = cls._clamp(
                requested=allocation.quantity,
                room=ticket_type.total_tickets - ticket_type.available_tickets,
                label=f'ticket type {ticket_type.id}',
            )
            ticket_type.available_tickets += restored

        event.recompute_aggregates()
        return restored

    @staticmethod
    def _clamp(*, requested: int, room: int, label: str) -> int:
        if requested > room:
            Logger.base.warning(
                f'[INVENTORY] Release of {requested} on {label} exceeds sold count {room}; clamping'
            )
            return max(room, 0)
        return requested
