from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.domain.aggregate.event_aggregate import Event
from src.service.marketplace.domain.entity.caller_entity import Caller
from src.service.marketplace.domain.entity.order_entity import Order
from src.service.marketplace.domain.enum.user_role import UserRole
from src.service.marketplace.domain.sales_report_domain import (
    BuyerRecord,
    CheckInStats,
    EventReport,
    SalesReport,
)


class GetEventReportUseCase:
    """Organizer-facing projections over one event's orders"""

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])) -> Self:
        return cls(uow=uow)

    async def _load(self, *, caller: Caller, event_id: str) -> tuple[Event, List[Order]]:
        async with self.uow:
            event = await self.uow.event_repo.get_by_id(event_id=event_id)
            if event is None or not event.is_visible_to(caller):
                raise NotFoundError(f'Event {event_id} not found')
            if not event.is_managed_by(caller):
                raise ForbiddenError('Only the event organizer or an admin can see its sales')
            orders = await self.uow.order_repo.list_by_event(event_id=event_id)
        return event, orders

    @Logger.io
    async def list_buyers(self, *, caller: Caller, event_id: str) -> List[BuyerRecord]:
        _, orders = await self._load(caller=caller, event_id=event_id)
        return SalesReport.buyers(orders)

    @Logger.io
    async def get_report(self, *, caller: Caller, event_id: str) -> EventReport:
        event, orders = await self._load(caller=caller, event_id=event_id)
        return SalesReport.build(event=event, orders=orders)

    @Logger.io
    async def get_check_in_stats(self, *, caller: Caller, event_id: str) -> CheckInStats:
        # Door staff follow attendance without access to sales figures
        if caller.role == UserRole.STAFF:
            async with self.uow:
                if await self.uow.event_repo.get_by_id(event_id=event_id) is None:
                    raise NotFoundError(f'Event {event_id} not found')
                orders = await self.uow.order_repo.list_by_event(event_id=event_id)
        else:
            _, orders = await self._load(caller=caller, event_id=event_id)
        return SalesReport.check_in_stats(orders)
