"""
Event Aggregate - Aggregate Root for the catalog

[DDD Design Principles]
- Event is the Aggregate Root
- TicketType and TicketBatch are entities within the aggregate
- All counter changes go through the aggregate so derived totals stay consistent

[Business Invariants]
- 0 <= available_tickets <= total_tickets at every level
- With ticket types, event counters are the sums over its types
- With batches, type counters are the sums over its batches
- Event price is the lowest ticket type price when types exist
"""

from datetime import date, datetime, time, timezone
from decimal import Decimal
from typing import List, Optional

import attrs

from src.platform.exception.exceptions import (
    InvalidStateTransitionError,
    NotFoundError,
    ValidationError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.types.clock import new_id
from src.service.marketplace.domain.entity.caller_entity import Caller
from src.service.marketplace.domain.entity.ticket_batch_entity import TicketBatch
from src.service.marketplace.domain.entity.ticket_type_entity import TicketType
from src.service.marketplace.domain.enum.approval_status import ApprovalStatus
from src.service.marketplace.domain.value_object.money import Money


def _validate_non_empty_string(instance: object, attribute: attrs.Attribute, value: str) -> None:
    if not value or not value.strip():
        raise ValidationError(f'Event {attribute.name} cannot be empty')


def _validate_date_present(instance: object, attribute: attrs.Attribute, value: date) -> None:
    if value is None:
        raise ValidationError('Event date is required')


@attrs.define(kw_only=True)
class Event:
    id: str
    title: str = attrs.field(validator=_validate_non_empty_string)
    description: str = ''
    event_date: date = attrs.field(validator=_validate_date_present)
    event_time: Optional[time] = None
    location: str = attrs.field(validator=_validate_non_empty_string)
    category: str = ''
    image: str = ''
    price: Money
    total_tickets: int
    available_tickets: int
    organizer_id: Optional[str] = None
    # None marks legacy events created before moderation; treated as approved
    status: Optional[ApprovalStatus] = ApprovalStatus.PENDING
    rejection_reason: Optional[str] = None
    is_visible: bool = True
    commission_rate: Decimal = Decimal('5')
    ticket_types: List[TicketType] = attrs.field(factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        title: str,
        event_date: date,
        location: str,
        price: Money,
        total_tickets: int,
        available_tickets: Optional[int] = None,
        description: str = '',
        event_time: Optional[time] = None,
        category: str = '',
        image: str = '',
        organizer_id: Optional[str] = None,
        commission_rate: Decimal = Decimal('5'),
    ) -> 'Event':
        if total_tickets < 1:
            raise ValidationError('Event total_tickets must be at least 1')
        if available_tickets is None:
            available_tickets = total_tickets
        if available_tickets < 0:
            raise ValidationError('Event available_tickets cannot be negative')
        if available_tickets > total_tickets:
            raise ValidationError(
                f'available_tickets ({available_tickets}) cannot exceed total_tickets ({total_tickets})'
            )

        now = datetime.now(timezone.utc)
        return cls(
            id=new_id(),
            title=title,
            description=description,
            event_date=event_date,
            event_time=event_time,
            location=location,
            category=category,
            image=image,
            price=price,
            total_tickets=total_tickets,
            available_tickets=available_tickets,
            organizer_id=organizer_id,
            status=ApprovalStatus.PENDING,
            commission_rate=commission_rate,
            created_at=now,
            updated_at=now,
        )

    @Logger.io
    def add_ticket_type(
        self,
        *,
        name: str,
        price: Money,
        total_tickets: int,
        available_tickets: Optional[int] = None,
        description: str = '',
        allow_half_price: bool = False,
    ) -> TicketType:
        if any(t.name.casefold() == name.strip().casefold() for t in self.ticket_types if name):
            raise ValidationError(f'Ticket type {name} already exists for event {self.title}')

        ticket_type = TicketType.create(
            name=name,
            price=price,
            total_tickets=total_tickets,
            available_tickets=available_tickets,
            description=description,
            allow_half_price=allow_half_price,
        )
        self.ticket_types.append(ticket_type)
        self.recompute_aggregates()
        return ticket_type

    @Logger.io
    def add_batch(
        self,
        *,
        ticket_type_id: str,
        name: str,
        price: Money,
        quantity: int,
        start_at: datetime,
        end_at: datetime,
        available_quantity: Optional[int] = None,
    ) -> TicketBatch:
        ticket_type = self.get_ticket_type(ticket_type_id)
        batch = ticket_type.add_batch(
            name=name,
            price=price,
            quantity=quantity,
            start_at=start_at,
            end_at=end_at,
            available_quantity=available_quantity,
        )
        self.recompute_aggregates()
        return batch

    def recompute_aggregates(self) -> None:
        """Pull event and type counters up from the finest level that holds them"""
        if not self.ticket_types:
            return
        for ticket_type in self.ticket_types:
            ticket_type.sync_from_batches()
        self.total_tickets = sum(t.total_tickets for t in self.ticket_types)
        self.available_tickets = sum(t.available_tickets for t in self.ticket_types)
        self.price = min(t.price for t in self.ticket_types)
        self.updated_at = datetime.now(timezone.utc)

    def get_ticket_type(self, ticket_type_id: str) -> TicketType:
        for ticket_type in self.ticket_types:
            if ticket_type.id == ticket_type_id:
                return ticket_type
        raise NotFoundError(f'Ticket type {ticket_type_id} not found in event {self.title}')

    # Moderation

    @Logger.io
    def approve(self) -> None:
        if self.status != ApprovalStatus.PENDING:
            raise InvalidStateTransitionError(f'Cannot approve event in status {self.status}')
        self.status = ApprovalStatus.APPROVED
        self.rejection_reason = None
        self.updated_at = datetime.now(timezone.utc)

    @Logger.io
    def reject(self, *, reason: str) -> None:
        if self.status != ApprovalStatus.PENDING:
            raise InvalidStateTransitionError(f'Cannot reject event in status {self.status}')
        if not reason or not reason.strip():
            raise ValidationError('Rejection reason is required')
        self.status = ApprovalStatus.REJECTED
        self.rejection_reason = reason.strip()
        self.updated_at = datetime.now(timezone.utc)

    def set_visibility(self, *, is_visible: bool) -> None:
        self.is_visible = is_visible
        self.updated_at = datetime.now(timezone.utc)

    def is_managed_by(self, caller: Caller) -> bool:
        return caller.is_admin or caller.owns(self.organizer_id)

    def is_visible_to(self, caller: Caller) -> bool:
        return self.is_publicly_listed or self.is_managed_by(caller)

    @property
    def is_approved(self) -> bool:
        return self.status in (ApprovalStatus.APPROVED, None)

    @property
    def is_publicly_listed(self) -> bool:
        return self.is_approved and self.is_visible

    @property
    def sold_tickets(self) -> int:
        return self.total_tickets - self.available_tickets

    @property
    def starts_at(self) -> datetime:
        """Start of the event day in UTC; refund and check-in windows are measured from here"""
        return datetime.combine(self.event_date, time.min, tzinfo=timezone.utc)

    def has_ended(self, now: datetime) -> bool:
        return now.astimezone(timezone.utc).date() > self.event_date
