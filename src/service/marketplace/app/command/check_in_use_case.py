from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.marketplace_metrics import metrics
from src.platform.types.clock import utc_now
from src.service.marketplace.domain.entity.order_entity import Order


class CheckInUseCase:
    """Staff validates a ticket at the venue door"""

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def check_in(self, *, order_id: str) -> Order:
        async with self.uow:
            order = await self.uow.order_repo.get_by_id(order_id=order_id)
            if order is None:
                raise NotFoundError(f'Order {order_id} not found')
            event = await self.uow.event_repo.get_by_id(event_id=order.event_id)
            if event is None:
                raise NotFoundError(f'Event {order.event_id} not found')

            used = order.check_in(event_date=event.event_date, now=utc_now())
            await self.uow.order_repo.save(order=used)
            await self.uow.commit()

        metrics.record_transition(status=used.status.value)
        Logger.base.info(f'✅ [CHECK-IN] Ticket {used.purchase_id} admitted to {event.title}')
        return used
