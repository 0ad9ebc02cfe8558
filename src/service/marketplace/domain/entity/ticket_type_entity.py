from datetime import datetime
from decimal import Decimal
from typing import List, Optional

import attrs

from src.platform.exception.exceptions import NotFoundError, ValidationError
from src.platform.logging.loguru_io import Logger
from src.platform.types.clock import new_id
from src.service.marketplace.domain.entity.ticket_batch_entity import TicketBatch
from src.service.marketplace.domain.value_object.money import Money


def _validate_non_empty_string(instance: object, attribute: attrs.Attribute, value: str) -> None:
    if not value or not value.strip():
        raise ValidationError(f'Ticket type {attribute.name} cannot be empty')


@attrs.define(kw_only=True)
class TicketType:
    """
    Named sellable category of an event (Pista, VIP, Meia-entrada, ...)

    [Counters]
    - Without batches the type owns total_tickets / available_tickets
    - With batches both counters are sums over the batches and are kept in
      sync by sync_from_batches()
    """

    id: str
    name: str = attrs.field(validator=_validate_non_empty_string)
    price: Money
    total_tickets: int
    available_tickets: int
    description: str = ''
    allow_half_price: bool = False
    batches: List[TicketBatch] = attrs.field(factory=list)

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        name: str,
        price: Money,
        total_tickets: int,
        available_tickets: Optional[int] = None,
        description: str = '',
        allow_half_price: bool = False,
    ) -> 'TicketType':
        if total_tickets < 0:
            raise ValidationError('Ticket type total_tickets cannot be negative')
        if available_tickets is None:
            available_tickets = total_tickets
        if available_tickets < 0:
            raise ValidationError('Ticket type available_tickets cannot be negative')
        if available_tickets > total_tickets:
            raise ValidationError(
                f'available_tickets ({available_tickets}) cannot exceed total_tickets ({total_tickets})'
            )

        return cls(
            id=new_id(),
            name=name.strip() if name else name,
            price=price,
            total_tickets=total_tickets,
            available_tickets=available_tickets,
            description=description,
            allow_half_price=allow_half_price,
        )

    @Logger.io
    def add_batch(
        self,
        *,
        name: str,
        price: Money,
        quantity: int,
        start_at: datetime,
        end_at: datetime,
        available_quantity: Optional[int] = None,
    ) -> TicketBatch:
        # Switching an already-selling type to batch mode would drop its sold count
        if not self.batches and self.sold > 0:
            raise ValidationError(
                f'Ticket type {self.name} already sold {self.sold} tickets; batches must be added before sales start'
            )

        batch = TicketBatch.create(
            name=name,
            price=price,
            quantity=quantity,
            start_at=start_at,
            end_at=end_at,
            sequence=len(self.batches),
            available_quantity=available_quantity,
        )
        self.batches.append(batch)
        self.sync_from_batches()
        return batch

    def sync_from_batches(self) -> None:
        if not self.batches:
            return
        self.total_tickets = sum(batch.quantity for batch in self.batches)
        self.available_tickets = sum(batch.available_quantity for batch in self.batches)

    def get_batch(self, batch_id: str) -> TicketBatch:
        for batch in self.batches:
            if batch.id == batch_id:
                return batch
        raise NotFoundError(f'Batch {batch_id} not found in ticket type {self.name}')

    @property
    def has_batches(self) -> bool:
        return bool(self.batches)

    @property
    def sold(self) -> int:
        return self.total_tickets - self.available_tickets

    @property
    def catalog_revenue(self) -> Money:
        """Sold count valued at list prices, rounded for display"""
        if self.batches:
            return sum(
                (batch.price * batch.sold for batch in self.batches), Money.zero()
            ).rounded()
        return (self.price * self.sold).rounded()

    @property
    def occupancy(self) -> Decimal:
        if not self.total_tickets:
            return Decimal(0)
        return (Decimal(self.sold) * 100 / Decimal(self.total_tickets)).quantize(Decimal('0.1'))
