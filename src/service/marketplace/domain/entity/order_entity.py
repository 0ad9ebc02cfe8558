import math
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from typing import Optional

import attrs

from src.platform.exception.exceptions import (
    AlreadyUsedError,
    InvalidStateTransitionError,
    NotYetValidError,
    RefundWindowClosedError,
    ValidationError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.types.clock import as_utc, new_id
from src.service.marketplace.domain.entity.buyer_entity import Buyer
from src.service.marketplace.domain.enum.order_status import (
    HOLDING_STATUSES,
    PAID_STATUSES,
    OrderStatus,
    RefundStatus,
)
from src.service.marketplace.domain.value_object.allocation import Allocation
from src.service.marketplace.domain.value_object.money import Money
from src.service.marketplace.domain.value_object.price_quote import OrderQuote


def days_until_event(event_date: date, now: datetime) -> int:
    """Whole days, rounded up, from now to 00:00 UTC on the event date"""
    event_start = datetime.combine(event_date, time.min, tzinfo=timezone.utc)
    seconds = (event_start - as_utc(now)).total_seconds()
    return math.ceil(seconds / timedelta(days=1).total_seconds())


@attrs.define(kw_only=True)
class Order:
    """
    A purchase of one or more tickets for a single event / ticket type

    [State machine]
    reserved -> confirmed -> used
                          -> refund_requested -> refund_approved | refund_rejected
    reserved -> expired | cancelled
    """

    id: str
    purchase_id: str
    event_id: str
    user_id: Optional[str]
    quantity: int
    unit_price: Money
    service_fee_rate: Decimal
    subtotal: Money
    service_fee: Money
    total_paid: Money
    ticket_type_id: Optional[str] = None
    ticket_type_name: Optional[str] = None
    batch_id: Optional[str] = None
    half_price: bool = False
    buyer: Optional[Buyer] = None
    status: OrderStatus = OrderStatus.RESERVED
    refund_status: RefundStatus = RefundStatus.NONE
    refund_request_date: Optional[datetime] = None
    refund_reason: Optional[str] = None
    refund_amount: Optional[Money] = None
    refund_rejection_reason: Optional[str] = None
    expires_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    confirmed_at: Optional[datetime] = None
    used_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def reserve(
        cls,
        *,
        allocation: Allocation,
        quote: OrderQuote,
        user_id: Optional[str],
        now: datetime,
        ttl: timedelta,
        ticket_type_name: Optional[str] = None,
        half_price: bool = False,
        buyer: Optional[Buyer] = None,
    ) -> 'Order':
        if allocation.quantity != quote.quantity:
            raise ValidationError('Quote quantity does not match the allocated quantity')

        now = as_utc(now)
        return cls(
            id=new_id(),
            purchase_id=new_id(),
            event_id=allocation.event_id,
            user_id=user_id,
            quantity=allocation.quantity,
            unit_price=quote.unit_price,
            service_fee_rate=quote.service_fee_rate,
            subtotal=quote.subtotal,
            service_fee=quote.service_fee,
            total_paid=quote.total,
            ticket_type_id=allocation.ticket_type_id,
            ticket_type_name=ticket_type_name,
            batch_id=allocation.batch_id,
            half_price=half_price,
            buyer=buyer,
            status=OrderStatus.RESERVED,
            expires_at=now + ttl,
            created_at=now,
            updated_at=now,
        )

    @property
    def allocation(self) -> Allocation:
        return Allocation(
            event_id=self.event_id,
            quantity=self.quantity,
            ticket_type_id=self.ticket_type_id,
            batch_id=self.batch_id,
        )

    @property
    def is_paid(self) -> bool:
        return self.status in PAID_STATUSES

    @property
    def holds_inventory(self) -> bool:
        return self.status in HOLDING_STATUSES

    def is_reservation_expired(self, now: datetime) -> bool:
        return (
            self.status == OrderStatus.RESERVED
            and self.expires_at is not None
            and as_utc(now) >= self.expires_at
        )

    @Logger.io
    def confirm_payment(self, *, now: datetime) -> 'Order':
        if self.status != OrderStatus.RESERVED:
            raise InvalidStateTransitionError(f'Cannot confirm payment for order in status {self.status}')
        if self.is_reservation_expired(now):
            raise InvalidStateTransitionError('Reservation has expired')

        now = as_utc(now)
        return attrs.evolve(self, status=OrderStatus.CONFIRMED, confirmed_at=now, updated_at=now)

    @Logger.io
    def cancel(self, *, now: datetime) -> 'Order':
        if self.status != OrderStatus.RESERVED:
            raise InvalidStateTransitionError(f'Cannot cancel order in status {self.status}')
        return attrs.evolve(self, status=OrderStatus.CANCELLED, updated_at=as_utc(now))

    @Logger.io
    def expire(self, *, now: datetime) -> 'Order':
        if not self.is_reservation_expired(now):
            raise InvalidStateTransitionError('Only overdue reservations can expire')
        return attrs.evolve(self, status=OrderStatus.EXPIRED, updated_at=as_utc(now))

    @Logger.io
    def check_in(self, *, event_date: date, now: datetime) -> 'Order':
        if self.status == OrderStatus.USED:
            raise AlreadyUsedError(f'Ticket {self.purchase_id} was already used at {self.used_at}')
        if self.status != OrderStatus.CONFIRMED:
            raise InvalidStateTransitionError(f'Cannot check in order in status {self.status}')
        if days_until_event(event_date, now) > 0:
            raise NotYetValidError(f'Ticket {self.purchase_id} is only valid from {event_date}')

        now = as_utc(now)
        return attrs.evolve(self, status=OrderStatus.USED, used_at=now, updated_at=now)

    @Logger.io
    def request_refund(
        self,
        *,
        event_date: date,
        now: datetime,
        window_days: int,
        reason: Optional[str] = None,
    ) -> 'Order':
        """One refund per order: a refund already on record closes the window too"""
        if self.status != OrderStatus.CONFIRMED:
            raise InvalidStateTransitionError(f'Cannot request refund for order in status {self.status}')

        days_left = days_until_event(event_date, now)
        if self.refund_status != RefundStatus.NONE:
            raise RefundWindowClosedError(
                f'Refund already {self.refund_status} for this order; {days_left} day(s) left'
            )
        if days_left < window_days:
            raise RefundWindowClosedError(
                f'Refunds close {window_days} days before the event; {days_left} day(s) left'
            )

        now = as_utc(now)
        return attrs.evolve(
            self,
            status=OrderStatus.REFUND_REQUESTED,
            refund_status=RefundStatus.REQUESTED,
            refund_request_date=now,
            refund_reason=reason,
            updated_at=now,
        )

    @Logger.io
    def resolve_refund(
        self,
        *,
        approve: bool,
        now: datetime,
        processing_fee_rate: Decimal,
        rejection_reason: Optional[str] = None,
    ) -> 'Order':
        if self.status != OrderStatus.REFUND_REQUESTED:
            raise InvalidStateTransitionError(f'No pending refund for order in status {self.status}')

        now = as_utc(now)
        if approve:
            return attrs.evolve(
                self,
                status=OrderStatus.REFUND_APPROVED,
                refund_status=RefundStatus.APPROVED,
                refund_amount=self.refundable_amount(processing_fee_rate),
                updated_at=now,
            )
        return attrs.evolve(
            self,
            status=OrderStatus.REFUND_REJECTED,
            refund_status=RefundStatus.REJECTED,
            refund_rejection_reason=rejection_reason,
            updated_at=now,
        )

    def refundable_amount(self, processing_fee_rate: Decimal) -> Money:
        return (self.total_paid * (Decimal(1) - processing_fee_rate)).rounded()
