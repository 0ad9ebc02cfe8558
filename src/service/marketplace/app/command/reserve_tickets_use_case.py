"""
Reserve Tickets Use Case

Checkout entry point for buyers:
1. Serialize on the event inventory lock (all its counters cascade into the event)
2. Resolve the active batch and the unit price, half-price eligibility first
3. Decrement availability through the ledger
4. Persist the event counters and a `reserved` order holding the price snapshot

The order must be confirmed before `RESERVATION_TTL_SECONDS` elapse, otherwise
the sweeper expires it and the tickets go back on sale.
"""

import time
from datetime import timedelta
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import CustomBaseError, NotEligibleError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.marketplace_metrics import metrics
from src.platform.types.clock import utc_now
from src.service.marketplace.app.interface.i_inventory_lock import IInventoryLock
from src.service.marketplace.domain.entity.buyer_entity import Buyer
from src.service.marketplace.domain.entity.caller_entity import Caller
from src.service.marketplace.domain.entity.order_entity import Order
from src.service.marketplace.domain.inventory_ledger_domain import InventoryLedger
from src.service.marketplace.domain.pricing_domain import PricingEngine
from src.service.marketplace.domain.value_object.allocation import inventory_lock_key


class ReserveTicketsUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork, inventory_lock: IInventoryLock) -> None:
        self.uow = uow
        self.inventory_lock = inventory_lock
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        inventory_lock: IInventoryLock = Depends(Provide[Container.inventory_lock]),
    ) -> Self:
        return cls(uow=uow, inventory_lock=inventory_lock)

    @Logger.io
    async def reserve(
        self,
        *,
        caller: Caller,
        event_id: str,
        quantity: int,
        ticket_type_id: Optional[str] = None,
        half_price: bool = False,
        buyer: Optional[Buyer] = None,
    ) -> Order:
        """
        Raises:
            NotFoundError: unknown event or ticket type
            NotEligibleError: event not on sale, or half price not allowed
            InsufficientInventoryError: not enough tickets in the active counter
            BusyError: the inventory lock could not be taken in time
        """
        started = time.perf_counter()
        with self.tracer.start_as_current_span(
            'use_case.reserve_tickets',
            attributes={
                'event.id': event_id,
                'ticket_type.id': ticket_type_id or '',
                'order.quantity': quantity,
                'order.half_price': half_price,
            },
        ):
            try:
                order = await self._reserve(
                    caller=caller,
                    event_id=event_id,
                    quantity=quantity,
                    ticket_type_id=ticket_type_id,
                    half_price=half_price,
                    buyer=buyer,
                )
            except CustomBaseError as e:
                metrics.record_reservation(
                    event_id=event_id,
                    result=type(e).__name__,
                    duration=time.perf_counter() - started,
                )
                raise

        metrics.record_reservation(
            event_id=event_id, result='success', duration=time.perf_counter() - started
        )
        metrics.record_transition(status=order.status.value)
        Logger.base.info(
            f'🎟️ [RESERVE] {order.quantity} ticket(s) for event {event_id} '
            f'held until {order.expires_at} (order={order.id}, total={order.total_paid})'
        )
        return order

    async def _reserve(
        self,
        *,
        caller: Caller,
        event_id: str,
        quantity: int,
        ticket_type_id: Optional[str],
        half_price: bool,
        buyer: Optional[Buyer],
    ) -> Order:
        async with self.inventory_lock.hold(
            key=inventory_lock_key(event_id=event_id)
        ):
            async with self.uow:
                event = await self.uow.event_repo.get_by_id(event_id=event_id, for_update=True)
                if event is None or not event.is_visible_to(caller):
                    raise NotFoundError(f'Event {event_id} not found')
                if not event.is_publicly_listed:
                    raise NotEligibleError('Event is not on sale')

                now = utc_now()
                if event.has_ended(now):
                    raise NotEligibleError('Event has already taken place')

                ticket_type = event.get_ticket_type(ticket_type_id) if ticket_type_id else None
                batch = InventoryLedger.active_batch(ticket_type, now) if ticket_type else None
                unit_price = PricingEngine.unit_price(
                    event=event,
                    ticket_type=ticket_type,
                    batch=batch,
                    half_price_requested=half_price,
                    half_price_factor=settings.HALF_PRICE_FACTOR,
                )

                allocation = InventoryLedger.reserve(
                    event=event, quantity=quantity, now=now, ticket_type_id=ticket_type_id
                )
                quote = PricingEngine.order_total(
                    unit_price=unit_price,
                    quantity=quantity,
                    service_fee_rate=settings.SERVICE_FEE_RATE,
                )
                order = Order.reserve(
                    allocation=allocation,
                    quote=quote,
                    user_id=caller.user_id,
                    now=now,
                    ttl=timedelta(seconds=settings.RESERVATION_TTL_SECONDS),
                    ticket_type_name=ticket_type.name if ticket_type else None,
                    half_price=half_price,
                    buyer=buyer,
                )

                await self.uow.event_repo.save(event=event)
                await self.uow.order_repo.save(order=order)
                await self.uow.commit()

        metrics.update_availability(event_id=event.id, available=event.available_tickets)
        return order
