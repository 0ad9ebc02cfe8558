from datetime import datetime

import attrs

from src.platform.exception.exceptions import ValidationError
from src.platform.types.clock import as_utc, new_id
from src.service.marketplace.domain.value_object.money import Money


@attrs.define(kw_only=True)
class TicketBatch:
    """Time-boxed price tier of a ticket type (early bird, first lot, ...)"""

    id: str
    name: str
    price: Money
    quantity: int
    available_quantity: int
    start_at: datetime = attrs.field(converter=as_utc)
    end_at: datetime = attrs.field(converter=as_utc)
    sequence: int = 0

    @classmethod
    def create(
        cls,
        *,
        name: str,
        price: Money,
        quantity: int,
        start_at: datetime,
        end_at: datetime,
        sequence: int,
        available_quantity: int | None = None,
    ) -> 'TicketBatch':
        if not name or not name.strip():
            raise ValidationError('Batch name cannot be empty')
        if quantity < 1:
            raise ValidationError('Batch quantity must be at least 1')
        if as_utc(end_at) <= as_utc(start_at):
            raise ValidationError('Batch end_at must be after start_at')
        if available_quantity is None:
            available_quantity = quantity
        if not 0 <= available_quantity <= quantity:
            raise ValidationError(
                f'Batch available_quantity ({available_quantity}) must be between 0 and quantity ({quantity})'
            )

        return cls(
            id=new_id(),
            name=name.strip(),
            price=price,
            quantity=quantity,
            available_quantity=available_quantity,
            start_at=start_at,
            end_at=end_at,
            sequence=sequence,
        )

    def is_within_window(self, now: datetime) -> bool:
        return self.start_at <= as_utc(now) < self.end_at

    def is_sellable(self, now: datetime) -> bool:
        return self.available_quantity > 0 and self.is_within_window(now)

    @property
    def sold(self) -> int:
        return self.quantity - self.available_quantity
